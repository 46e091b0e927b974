"""
引导脚本模板与渲染结果。

引导脚本是放在产物最前面的一小段 HTML：浏览器渲染时它会 fetch 自身、
切掉前 offset 个字节、（可选）解压剩余部分并 eval。

模板使用 str.format 风格的占位符：
- ``{offset}``：偏移量，恰好出现一次
- ``{decompression_type}``：解压算法标识，仅解压模板中出现一次
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

OFFSET_PLACEHOLDER = "{offset}"
DECOMPRESSION_TYPE_PLACEHOLDER = "{decompression_type}"


class BootstrapKind(str, Enum):
    """引导脚本类型。"""

    DECOMPRESSING = "decompressing"
    """fetch → slice → DecompressionStream → text → eval"""

    PASS_THROUGH = "pass_through"
    """fetch → slice → text → eval（测试用，不解压）"""


@dataclass(frozen=True)
class BootstrapTemplate:
    """
    参数化的引导脚本模板，进程级常量，构造后不可变。

    构造时校验占位符数量，错误的模板文本无法进入注册表。

    属性:
        kind: 模板类型
        text: 模板文本
    """

    kind: BootstrapKind
    text: str

    def __post_init__(self) -> None:
        offset_count = self.text.count(OFFSET_PLACEHOLDER)
        if offset_count != 1:
            raise ValueError(
                f"模板 '{self.kind.value}' 必须恰好包含一个 {OFFSET_PLACEHOLDER} 占位符，"
                f"实际为 {offset_count} 个。"
            )
        type_count = self.text.count(DECOMPRESSION_TYPE_PLACEHOLDER)
        expected = 1 if self.kind is BootstrapKind.DECOMPRESSING else 0
        if type_count != expected:
            raise ValueError(
                f"模板 '{self.kind.value}' 应包含 {expected} 个 "
                f"{DECOMPRESSION_TYPE_PLACEHOLDER} 占位符，实际为 {type_count} 个。"
            )

    @property
    def needs_decompression_type(self) -> bool:
        """是否需要解压算法标识。"""
        return self.kind is BootstrapKind.DECOMPRESSING

    @property
    def offset_prefix(self) -> str:
        """偏移量数字之前的字面文本，用于从产物中解析偏移量。"""
        return self.text.split(OFFSET_PLACEHOLDER, 1)[0]

    def substitute(self, offset: int | str, decompression_type: str | None = None) -> str:
        """
        替换占位符。

        参数:
            offset: 偏移量（传空字符串可得到去掉数字后的文本）
            decompression_type: 解压算法标识（直通模板忽略此参数）

        返回:
            替换后的文本
        """
        text = self.text.replace(OFFSET_PLACEHOLDER, str(offset))
        if self.needs_decompression_type:
            text = text.replace(DECOMPRESSION_TYPE_PLACEHOLDER, decompression_type or "")
        return text

    def fixed_length(self, decompression_type: str | None = None) -> int:
        """
        模板中与偏移量无关部分的字节长度。

        偏移量占位符替换为空串，解压算法标识按实际值替换后按 UTF-8 计算。
        """
        return len(self.substitute("", decompression_type).encode("utf-8"))


@dataclass(frozen=True)
class RenderedBootstrap:
    """
    占位符全部替换后的引导脚本。

    不变式：``len(self.data) == self.offset``。

    属性:
        kind: 来源模板类型
        text: 渲染后的文本
        offset: 嵌入的偏移量（即自身字节长度）
        decompression_type: 嵌入的解压算法标识（直通模板为 None）
        iterations: 不动点求解的迭代次数
    """

    kind: BootstrapKind
    text: str
    offset: int
    decompression_type: str | None = None
    iterations: int = 0

    @property
    def data(self) -> bytes:
        """UTF-8 编码后的字节。"""
        return self.text.encode("utf-8")

    def __len__(self) -> int:
        return len(self.data)
