"""
最终产物：渲染后的引导脚本 + 负载字节。

字节布局::

    [引导脚本字节][负载字节]

除了引导脚本中嵌入的偏移量数字之外，没有任何长度字段、文件头或校验和。
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

from payload_crunch.models.bootstrap import RenderedBootstrap


@dataclass(frozen=True)
class Artifact:
    """
    自描述的单文件产物。

    不变式：``data[:offset] == bootstrap.data`` 且 ``data[offset:] == payload``。

    基本用法::

        artifact = Artifact(bootstrap=rendered, payload=compressed)
        Path("intro.html").write_bytes(artifact.data)

    属性:
        bootstrap: 渲染后的引导脚本
        payload: 负载字节（压缩后或原始）
    """

    bootstrap: RenderedBootstrap
    payload: bytes

    @cached_property
    def data(self) -> bytes:
        """完整产物字节。"""
        return self.bootstrap.data + self.payload

    @property
    def offset(self) -> int:
        """负载起始位置。"""
        return self.bootstrap.offset

    @property
    def size(self) -> int:
        """产物总字节数。"""
        return self.bootstrap.offset + len(self.payload)

    def split(self) -> tuple[bytes, bytes]:
        """按嵌入的偏移量切分为 (引导脚本, 负载)。"""
        data = self.data
        return data[: self.offset], data[self.offset :]
