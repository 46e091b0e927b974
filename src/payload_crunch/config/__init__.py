"""
Payload Crunch 配置模块。

提供默认值、Pydantic Schema 和 YAML 配置加载。
"""

from payload_crunch.config.defaults import (
    DEFAULT_DECOMPRESSION_TYPE,
    DEFAULT_RAW_SUFFIX,
    DEFAULT_ZOPFLI_ITERATIONS,
    SUPPORTED_DECOMPRESSION_TYPES,
)
from payload_crunch.config.loader import load_config, validate_config_file
from payload_crunch.config.schema import CompressionConfig, CrunchConfig, OutputConfig

__all__ = [
    "DEFAULT_DECOMPRESSION_TYPE",
    "DEFAULT_RAW_SUFFIX",
    "DEFAULT_ZOPFLI_ITERATIONS",
    "SUPPORTED_DECOMPRESSION_TYPES",
    "CompressionConfig",
    "CrunchConfig",
    "OutputConfig",
    "load_config",
    "validate_config_file",
]
