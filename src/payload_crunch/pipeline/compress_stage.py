"""
压缩决策阶段。

要么调用压缩器，要么原样返回负载。两种结果对下游完全等价。
压缩器失败时直接抛出，不重试。
"""

from __future__ import annotations

import logging

from payload_crunch.compress.base import CompressionResult, PayloadCompressor
from payload_crunch.errors import CompressionError
from payload_crunch.models.compression import CompressionParameters

logger = logging.getLogger(__name__)

IDENTITY_METHOD = "identity"


def prepare_payload(
    payload: bytes,
    *,
    skip_compression: bool,
    compressor: PayloadCompressor | None,
    parameters: CompressionParameters | None = None,
) -> CompressionResult:
    """
    按配置压缩或直通负载。

    参数:
        payload: 原始负载
        skip_compression: 是否跳过压缩
        compressor: 压缩器（skip_compression 为 True 时可为 None）
        parameters: 压缩参数（默认 CompressionParameters()）

    返回:
        CompressionResult

    异常:
        CompressionError: 压缩器没有产出
    """
    if skip_compression:
        logger.debug("跳过压缩，负载原样使用（%d 字节）", len(payload))
        return CompressionResult(
            data=payload,
            original_size=len(payload),
            method=IDENTITY_METHOD,
            skipped=True,
        )

    if compressor is None:
        raise ValueError("未跳过压缩时必须提供 compressor")

    output = compressor.compress(payload, parameters or CompressionParameters())
    if not output:
        raise CompressionError(
            what=f"压缩器 '{compressor.name}' 没有产出任何数据。",
            why=f"输入 {len(payload)} 字节，输出为空。",
            how="请检查输入文件，或用 --no-compression 跳过压缩。",
            details={"compressor": compressor.name, "input_size": len(payload)},
        )

    return CompressionResult(
        data=bytes(output),
        original_size=len(payload),
        method=compressor.name,
    )
