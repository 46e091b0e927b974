"""
产物组装阶段：引导脚本与负载的字节级拼接。

拼接本身不会失败。组装后从产物开头重新解析嵌入的偏移量，它必须等于
引导脚本的偏移量，且切片点前的字节正是引导脚本本身。
"""

from __future__ import annotations

import logging

from payload_crunch.bootstrap.templates import read_embedded_offset
from payload_crunch.errors import ArtifactFormatError, InternalConsistencyError
from payload_crunch.models.artifact import Artifact
from payload_crunch.models.bootstrap import RenderedBootstrap

logger = logging.getLogger(__name__)


def assemble_artifact(bootstrap: RenderedBootstrap, payload: bytes) -> Artifact:
    """
    拼接引导脚本与负载。

    参数:
        bootstrap: 渲染后的引导脚本
        payload: 负载字节

    返回:
        Artifact

    异常:
        InternalConsistencyError: 嵌入的偏移量与引导脚本长度不一致
    """
    artifact = Artifact(bootstrap=bootstrap, payload=bytes(payload))
    head, tail = artifact.split()

    try:
        embedded = read_embedded_offset(artifact.data)
    except ArtifactFormatError as e:
        raise InternalConsistencyError(
            what="产物开头不是已注册的引导脚本。",
            why=e.why,
            how="这是程序缺陷，请提交 issue 并附上所用模板与解压类型。",
            expected=bootstrap.offset,
            actual=len(bootstrap.data),
        ) from e

    if embedded != bootstrap.offset or head != bootstrap.data:
        raise InternalConsistencyError(
            what="产物切片点与嵌入的偏移量不一致。",
            why=(
                f"嵌入偏移量 {embedded}，期望 {bootstrap.offset}，"
                f"引导脚本长度 {len(bootstrap.data)}。"
            ),
            how="这是程序缺陷，请提交 issue 并附上所用模板与解压类型。",
            expected=bootstrap.offset,
            actual=embedded,
        )

    logger.debug(
        "产物组装完成：引导脚本 %d 字节 + 负载 %d 字节 = %d 字节",
        len(head),
        len(tail),
        artifact.size,
    )
    return artifact
