"""
默认配置常量。

解压类型取值与浏览器 DecompressionStream API 支持的格式一致。
"""

from __future__ import annotations

DEFAULT_ZOPFLI_ITERATIONS = 50

DEFAULT_DECOMPRESSION_TYPE = "deflate-raw"

# DecompressionStream 支持的格式
SUPPORTED_DECOMPRESSION_TYPES: tuple[str, ...] = ("deflate-raw", "deflate", "gzip")

DEFAULT_RAW_SUFFIX = ".raw"

# 自动搜索的配置文件（按顺序，取第一个存在的）
CONFIG_SEARCH_PATHS: tuple[str, ...] = (
    "payload_crunch.yaml",
    "payload_crunch.yml",
    ".payload_crunch.yaml",
)
