"""
压缩参数模型。

只影响外部压缩器（zopfli）的耗时与压缩率，不影响产物的正确性。
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from payload_crunch.config.defaults import DEFAULT_ZOPFLI_ITERATIONS


class CompressionParameters(BaseModel):
    """
    zopfli 调优参数，构造后不可变。

    基本用法::

        params = CompressionParameters(iterations=100, block_splitting=False)

    属性:
        iterations: zopfli 迭代次数，越大越慢、压缩率略好
        block_splitting: 是否启用块分割启发式
    """

    model_config = ConfigDict(frozen=True)

    iterations: int = Field(
        default=DEFAULT_ZOPFLI_ITERATIONS,
        description="zopfli 迭代次数",
        gt=0,
    )
    block_splitting: bool = Field(default=True, description="是否启用块分割")
