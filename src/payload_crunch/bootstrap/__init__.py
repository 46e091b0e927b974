"""
引导脚本模块：模板注册表与自引用长度求解器。
"""

from payload_crunch.bootstrap.resolver import (
    MAX_RESOLVE_ITERATIONS,
    OffsetResolution,
    decimal_digit_count,
    render_bootstrap,
    resolve_offset,
)
from payload_crunch.bootstrap.templates import (
    DECOMPRESSING,
    PASS_THROUGH,
    extract_payload,
    get_template,
    list_templates,
    read_embedded_offset,
    select_template,
)

__all__ = [
    "DECOMPRESSING",
    "MAX_RESOLVE_ITERATIONS",
    "OffsetResolution",
    "PASS_THROUGH",
    "decimal_digit_count",
    "extract_payload",
    "get_template",
    "list_templates",
    "read_embedded_offset",
    "render_bootstrap",
    "resolve_offset",
    "select_template",
]
