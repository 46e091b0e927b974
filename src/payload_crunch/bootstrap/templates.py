"""
引导脚本模板注册表。

两个进程级常量模板：
- DECOMPRESSING：fetch 自身 → 切掉引导脚本 → DecompressionStream 解压 → eval
- PASS_THROUGH：同上但不解压，用于单独验证切片偏移量

svg 的 onload 不会把后面的二进制数据显示出来，而且是最短的可用元素。
``fetch`#``` 取回的是整个文档（引导脚本 + 负载），slice 之后再解压。
"""

from __future__ import annotations

import logging
import re
from types import MappingProxyType

from payload_crunch.errors import ArtifactFormatError
from payload_crunch.models.bootstrap import BootstrapKind, BootstrapTemplate

logger = logging.getLogger(__name__)

DECOMPRESSING = BootstrapTemplate(
    kind=BootstrapKind.DECOMPRESSING,
    text=(
        '<svg onload="fetch`#`.then(r=>r.blob()).then(b=>new '
        "Response(b.slice({offset}).stream().pipeThrough(new "
        "DecompressionStream('{decompression_type}'))).text()).then(eval)\">"
    ),
)

PASS_THROUGH = BootstrapTemplate(
    kind=BootstrapKind.PASS_THROUGH,
    text=(
        '<svg onload="fetch`#`.then(r=>r.blob()).then(b=>new '
        'Response(b.slice({offset}).stream()).text()).then(eval)">'
    ),
)

_REGISTRY: MappingProxyType[BootstrapKind, BootstrapTemplate] = MappingProxyType({
    BootstrapKind.DECOMPRESSING: DECOMPRESSING,
    BootstrapKind.PASS_THROUGH: PASS_THROUGH,
})


def select_template(skip_decompression: bool) -> BootstrapTemplate:
    """
    根据"跳过解压脚本"标志选择模板。

    参数:
        skip_decompression: True 选择 PASS_THROUGH，否则选择 DECOMPRESSING

    返回:
        不可变的 BootstrapTemplate
    """
    return PASS_THROUGH if skip_decompression else DECOMPRESSING


def get_template(kind: BootstrapKind | str) -> BootstrapTemplate:
    """按类型取模板。未知类型抛出 ValueError。"""
    return _REGISTRY[BootstrapKind(kind)]


def list_templates() -> list[BootstrapTemplate]:
    """返回全部已注册模板。"""
    return list(_REGISTRY.values())


def read_embedded_offset(data: bytes) -> int:
    """
    从产物开头解析嵌入的偏移量。

    依次尝试每个已注册模板的 offset_prefix，匹配其后的十进制数字。

    参数:
        data: 产物字节（至少包含完整的引导脚本）

    返回:
        偏移量

    异常:
        ArtifactFormatError: 开头不是任何已注册的引导脚本
    """
    # 两个模板的前缀相同，去重后逐个匹配
    prefixes = dict.fromkeys(t.offset_prefix.encode("utf-8") for t in _REGISTRY.values())
    for prefix in prefixes:
        match = re.match(re.escape(prefix) + rb"(\d+)", data)
        if match:
            offset = int(match.group(1))
            logger.debug("解析到引导脚本偏移量 %d", offset)
            return offset

    raise ArtifactFormatError(
        what="给定数据不是以引导脚本开头的产物。",
        why=f"开头 {min(len(data), 32)} 字节与任何已注册模板都不匹配：{data[:32]!r}",
        how="请确认传入的是由 js-payload-compress 生成的 HTML 文件。",
    )


def extract_payload(data: bytes) -> bytes:
    """按嵌入的偏移量切出负载字节。"""
    return data[read_embedded_offset(data) :]
