"""
压缩器基础协议与数据结构。

压缩器被当作黑盒使用：输入原始字节和调优参数，输出压缩后的字节。
任何实现了 ``name`` 和 ``compress()`` 的对象都可以替换默认的 zopfli 压缩器，
测试中常用这一点注入假的压缩器。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from payload_crunch.models.compression import CompressionParameters


@dataclass(frozen=True)
class CompressionResult:
    """
    压缩决策的结果。

    无论是否真正压缩，下游（渲染、组装、写文件）都只看 ``data``。

    属性:
        data: 负载字节（压缩后或原始）
        original_size: 原始负载字节数
        method: 压缩方法标识（"zopfli:deflate-raw" / "identity" 等）
        skipped: 是否跳过了压缩
    """

    data: bytes
    original_size: int
    method: str
    skipped: bool = False

    @property
    def compressed_size(self) -> int:
        """负载字节数。"""
        return len(self.data)

    @property
    def compression_ratio(self) -> float:
        """
        压缩比例（压缩后/压缩前）。

        返回:
            值越小压缩效果越好；原始负载为空时返回 1.0
        """
        if self.original_size == 0:
            return 1.0
        return self.compressed_size / self.original_size

    @property
    def bytes_saved(self) -> int:
        """节省的字节数。"""
        return max(0, self.original_size - self.compressed_size)


@runtime_checkable
class PayloadCompressor(Protocol):
    """压缩器协议。"""

    @property
    def name(self) -> str:
        """压缩器名称（用于日志和统计）。"""
        ...

    def compress(self, data: bytes, parameters: CompressionParameters) -> bytes:
        """
        压缩字节。

        参数:
            data: 原始字节
            parameters: 调优参数

        返回:
            压缩后的字节

        抛出:
            CompressionError: 压缩失败或没有产出
        """
        ...
