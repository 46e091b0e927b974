"""
Payload Crunch 数据模型。

所有模型构造后不可变，每次运行只生成一个 Artifact。
"""

from payload_crunch.models.artifact import Artifact
from payload_crunch.models.bootstrap import (
    BootstrapKind,
    BootstrapTemplate,
    RenderedBootstrap,
)
from payload_crunch.models.compression import CompressionParameters

__all__ = [
    "Artifact",
    "BootstrapKind",
    "BootstrapTemplate",
    "CompressionParameters",
    "RenderedBootstrap",
]
