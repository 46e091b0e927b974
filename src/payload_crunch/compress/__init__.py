"""
压缩模块：外部压缩器（zopfli）的适配层。

压缩算法本身不在本项目实现范围内，这里只负责：
- 把调优参数传给 zopfli
- 让输出格式与引导脚本中的解压类型一致
- 把失败统一成 CompressionError
"""

from payload_crunch.compress.base import CompressionResult, PayloadCompressor
from payload_crunch.compress.zopfli_compressor import ZopfliCompressor, create_compressor

__all__ = [
    "CompressionResult",
    "PayloadCompressor",
    "ZopfliCompressor",
    "create_compressor",
]
