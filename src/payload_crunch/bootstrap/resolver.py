"""
自引用长度求解器。

引导脚本中嵌入的十进制数字必须等于引导脚本自身的字节长度。
替换数字会改变文本长度，长度又可能改变数字的位数，因此这是一个不动点问题：

    k = base + digits(k)

其中 base 是模板去掉偏移量数字后的字节长度。从 k = base 开始迭代，
直到 base + digits(k) == k。digits 只随 k 对数增长，
所以对于本项目量级的模板（< 10,000 字节）最多 3 次求值即可收敛。

渲染后还会校验 ``len(rendered) == offset``，不一致直接报错，
不会输出错误的偏移量。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from payload_crunch.errors import ConfigurationError, InternalConsistencyError
from payload_crunch.models.bootstrap import BootstrapTemplate, RenderedBootstrap

logger = logging.getLogger(__name__)

MAX_RESOLVE_ITERATIONS = 16


@dataclass(frozen=True)
class OffsetResolution:
    """
    不动点求解结果。

    属性:
        offset: 满足 offset == base + digits(offset) 的值
        iterations: 计算 base + digits(k) 的次数
    """

    offset: int
    iterations: int


def decimal_digit_count(value: int) -> int:
    """十进制位数，0 为 1 位。"""
    if value < 0:
        raise ValueError(f"偏移量不能为负数：{value}")
    return len(str(value))


def resolve_offset(base: int, seed: int | None = None) -> OffsetResolution:
    """
    求解 k = base + digits(k)。

    参数:
        base: 模板去掉偏移量数字后的字节长度
        seed: 初始猜测值，默认为 base

    返回:
        OffsetResolution

    异常:
        InternalConsistencyError: 超过 MAX_RESOLVE_ITERATIONS 仍未收敛
    """
    if base < 0:
        raise ValueError(f"模板长度不能为负数：{base}")

    k = base if seed is None else seed
    for iteration in range(1, MAX_RESOLVE_ITERATIONS + 1):
        n = base + decimal_digit_count(k)
        if n == k:
            return OffsetResolution(offset=k, iterations=iteration)
        k = n

    raise InternalConsistencyError(
        what="引导脚本偏移量求解未收敛。",
        why=f"base={base}，迭代 {MAX_RESOLVE_ITERATIONS} 次后 k={k}。",
        how="这是程序缺陷，请提交 issue 并附上所用模板与解压类型。",
        expected=base,
        actual=k,
    )


def render_bootstrap(
    template: BootstrapTemplate,
    decompression_type: str | None = None,
) -> RenderedBootstrap:
    """
    渲染引导脚本，嵌入的偏移量等于渲染结果自身的字节长度。

    参数:
        template: 引导脚本模板
        decompression_type: 解压算法标识（解压模板必填，直通模板忽略）

    返回:
        RenderedBootstrap

    异常:
        ConfigurationError: 解压模板缺少解压算法标识
        InternalConsistencyError: 渲染结果长度与偏移量不一致
    """
    if template.needs_decompression_type:
        if not decompression_type:
            raise ConfigurationError(
                what="解压模板需要解压算法标识。",
                why="decompression_type 为空。",
                how="请通过 --decompression-type 指定，例如 deflate-raw 或 gzip。",
                field_path="decompression_type",
            )
        embedded_type: str | None = decompression_type
    else:
        embedded_type = None

    base = template.fixed_length(embedded_type)
    resolution = resolve_offset(base)
    text = template.substitute(resolution.offset, embedded_type)
    actual = len(text.encode("utf-8"))

    if actual != resolution.offset:
        raise InternalConsistencyError(
            what="渲染后的引导脚本长度与嵌入的偏移量不一致。",
            why=f"嵌入偏移量 {resolution.offset}，实际长度 {actual}。",
            how="这是程序缺陷，请检查模板文本中的占位符。",
            expected=resolution.offset,
            actual=actual,
        )

    logger.debug(
        "引导脚本渲染完成：kind=%s, base=%d, offset=%d, iterations=%d",
        template.kind.value,
        base,
        resolution.offset,
        resolution.iterations,
    )

    return RenderedBootstrap(
        kind=template.kind,
        text=text,
        offset=resolution.offset,
        decompression_type=embedded_type,
        iterations=resolution.iterations,
    )
