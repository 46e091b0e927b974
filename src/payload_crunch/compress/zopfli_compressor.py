"""
zopfli 压缩器适配层。

zopfli 产出与 zlib 兼容但更小的 deflate 流，代价是更长的压缩时间。
输出格式跟随引导脚本中的解压类型，保证浏览器端的 DecompressionStream
能直接解开：

    deflate-raw → zlib 流去掉 2 字节头和 4 字节 Adler-32 尾（裸 deflate，最小）
    deflate     → zlib 流（gzip_mode=0）
    gzip        → gzip 流（gzip_mode=1）

pyzopfli 只提供 zlib 和 gzip 两种容器，裸 deflate 从 zlib 流中切出。
"""

from __future__ import annotations

import logging
import time

import zopfli.zopfli

from payload_crunch.config.defaults import (
    DEFAULT_DECOMPRESSION_TYPE,
    SUPPORTED_DECOMPRESSION_TYPES,
)
from payload_crunch.errors import CompressionError, ConfigurationError
from payload_crunch.models.compression import CompressionParameters

logger = logging.getLogger(__name__)

# 解压类型 → pyzopfli 的 gzip_mode
_GZIP_MODES: dict[str, int] = {
    "deflate-raw": 0,
    "deflate": 0,
    "gzip": 1,
}

ZLIB_HEADER_SIZE = 2
ZLIB_TRAILER_SIZE = 4


def strip_zlib_container(data: bytes) -> bytes:
    """
    从 zlib 流中切出裸 deflate 数据。

    异常:
        CompressionError: 数据短于 zlib 头尾，或带有预设字典标志
    """
    if len(data) <= ZLIB_HEADER_SIZE + ZLIB_TRAILER_SIZE:
        raise CompressionError(
            what="zopfli 输出的 zlib 流不完整。",
            why=f"只有 {len(data)} 字节，不足以容纳 zlib 头尾。",
            how="请检查 zopfli 安装，或用 --no-compression 跳过压缩。",
        )
    if data[1] & 0x20:
        raise CompressionError(
            what="zopfli 输出的 zlib 流带有预设字典，无法转为裸 deflate。",
            why=f"zlib 头为 {data[:2]!r}。",
            how="请改用 --decompression-type=deflate。",
        )
    return data[ZLIB_HEADER_SIZE:-ZLIB_TRAILER_SIZE]


class ZopfliCompressor:
    """
    基于 zopfli 的压缩器。

    基本用法::

        compressor = ZopfliCompressor("deflate-raw")
        data = compressor.compress(source, CompressionParameters(iterations=50))
    """

    def __init__(self, output_format: str = DEFAULT_DECOMPRESSION_TYPE) -> None:
        if output_format not in _GZIP_MODES:
            raise ConfigurationError(
                what=f"不支持的压缩输出格式 '{output_format}'。",
                why=f"zopfli 只能输出：{', '.join(SUPPORTED_DECOMPRESSION_TYPES)}。",
                how="请把 --decompression-type 设为 deflate-raw、deflate 或 gzip。",
                field_path="decompression_type",
            )
        self._output_format = output_format

    @property
    def name(self) -> str:
        return f"zopfli:{self._output_format}"

    @property
    def output_format(self) -> str:
        return self._output_format

    def compress(self, data: bytes, parameters: CompressionParameters) -> bytes:
        start = time.perf_counter()
        try:
            output = zopfli.zopfli.compress(
                bytes(data),
                numiterations=parameters.iterations,
                blocksplitting=parameters.block_splitting,
                gzip_mode=_GZIP_MODES[self._output_format],
            )
        except Exception as e:
            raise CompressionError(
                what="zopfli 压缩失败。",
                why=str(e),
                how="尝试减少 --zopfli-iterations，或用 --no-compression 跳过压缩。",
                details={"compressor": self.name, "input_size": len(data)},
            ) from e

        if not output:
            raise CompressionError(
                what="zopfli 没有产出任何数据。",
                why=f"输入 {len(data)} 字节，输出为空。",
                how="请检查输入文件，或用 --no-compression 跳过压缩。",
                details={"compressor": self.name, "input_size": len(data)},
            )

        if self._output_format == "deflate-raw":
            output = strip_zlib_container(output)

        logger.debug(
            "%s 压缩完成：%d → %d 字节（iterations=%d, blocksplitting=%s, %.1fms）",
            self.name,
            len(data),
            len(output),
            parameters.iterations,
            parameters.block_splitting,
            (time.perf_counter() - start) * 1000,
        )
        return output


def create_compressor(decompression_type: str = DEFAULT_DECOMPRESSION_TYPE) -> ZopfliCompressor:
    """根据解压类型创建匹配输出格式的压缩器。"""
    return ZopfliCompressor(output_format=decompression_type)
