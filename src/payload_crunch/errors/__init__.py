"""
Payload Crunch 结构化异常体系。

所有异常遵循"三段式"规范：What / Why / How to fix。
"""

from payload_crunch.errors.exceptions import (
    ArtifactFormatError,
    CompressionError,
    ConfigLoadError,
    ConfigurationError,
    InternalConsistencyError,
    PayloadCrunchError,
    PayloadIOError,
    PipelineStageError,
)

__all__ = [
    "ArtifactFormatError",
    "CompressionError",
    "ConfigLoadError",
    "ConfigurationError",
    "InternalConsistencyError",
    "PayloadCrunchError",
    "PayloadIOError",
    "PipelineStageError",
]
