"""
运行配置的 Schema 定义与校验。

配置来源有三层：内置默认值 → YAML 配置文件 → 命令行参数。
合并后的结果用 Pydantic 校验，构造后不可变，整个运行过程只读。
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

from payload_crunch.config.defaults import (
    DEFAULT_DECOMPRESSION_TYPE,
    DEFAULT_RAW_SUFFIX,
    DEFAULT_ZOPFLI_ITERATIONS,
    SUPPORTED_DECOMPRESSION_TYPES,
)

if TYPE_CHECKING:
    from payload_crunch.models.compression import CompressionParameters


class CompressionConfig(BaseModel):
    """zopfli 压缩配置。"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    iterations: int = Field(
        default=DEFAULT_ZOPFLI_ITERATIONS,
        description="zopfli 迭代次数，越多越慢但可能略小",
        gt=0,
    )
    block_splitting: bool = Field(default=True, description="是否启用块分割")

    def to_parameters(self) -> CompressionParameters:
        """转换为压缩器使用的 CompressionParameters。"""
        from payload_crunch.models.compression import CompressionParameters

        return CompressionParameters(
            iterations=self.iterations,
            block_splitting=self.block_splitting,
        )


class OutputConfig(BaseModel):
    """输出配置。"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    write_html: bool = Field(default=True, description="是否写出 HTML 产物")
    dump_raw: bool = Field(default=False, description="是否额外写出裸负载文件")
    raw_suffix: str = Field(
        default=DEFAULT_RAW_SUFFIX,
        description="裸负载文件后缀（追加在输出路径之后）",
        min_length=1,
    )
    show_statistics: bool = Field(default=True, description="是否打印体积统计")


class CrunchConfig(BaseModel):
    """
    完整运行配置。

    基本用法::

        config = CrunchConfig(
            compression=CompressionConfig(iterations=100),
            decompression_type="gzip",
        )

    属性:
        compression: zopfli 压缩配置
        output: 输出配置
        decompression_type: 嵌入解压模板的算法标识
        skip_compression: 跳过压缩，负载原样使用
        skip_decompression_script: 强制使用直通模板
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    compression: CompressionConfig = Field(default_factory=CompressionConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    decompression_type: str = Field(
        default=DEFAULT_DECOMPRESSION_TYPE,
        description="DecompressionStream 格式：deflate-raw / deflate / gzip",
    )
    skip_compression: bool = Field(default=False, description="跳过压缩")
    skip_decompression_script: bool = Field(default=False, description="使用直通模板")

    @field_validator("decompression_type")
    @classmethod
    def _validate_decompression_type(cls, value: str) -> str:
        if value not in SUPPORTED_DECOMPRESSION_TYPES:
            raise ValueError(
                f"不支持的解压类型 '{value}'，"
                f"可选值：{', '.join(SUPPORTED_DECOMPRESSION_TYPES)}"
            )
        return value

    def to_compression_parameters(self) -> CompressionParameters:
        """压缩参数快捷方式。"""
        return self.compression.to_parameters()
