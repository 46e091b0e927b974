"""
测试套件共享 Fixtures 和辅助函数。
"""

from __future__ import annotations

import gzip
import zlib
from pathlib import Path

import pytest

from payload_crunch.config.schema import CompressionConfig, CrunchConfig
from payload_crunch.models.compression import CompressionParameters


# === 辅助函数 ===


def inflate(data: bytes, decompression_type: str) -> bytes:
    """用标准库按 DecompressionStream 的格式名解压，作为参照解码器。"""
    if decompression_type == "deflate-raw":
        return zlib.decompress(data, -zlib.MAX_WBITS)
    if decompression_type == "deflate":
        return zlib.decompress(data)
    if decompression_type == "gzip":
        return gzip.decompress(data)
    raise ValueError(f"未知解压类型：{decompression_type}")


class FakeCompressor:
    """可预测的假压缩器：记录调用参数，输出固定前缀 + 原文。"""

    def __init__(self, output: bytes | None = None, prefix: bytes = b"Z:") -> None:
        self._output = output
        self._prefix = prefix
        self.calls: list[tuple[bytes, CompressionParameters]] = []

    @property
    def name(self) -> str:
        return "fake"

    def compress(self, data: bytes, parameters: CompressionParameters) -> bytes:
        self.calls.append((data, parameters))
        if self._output is not None:
            return self._output
        return self._prefix + data


# === 数据 Fixtures ===


@pytest.fixture
def js_payload() -> bytes:
    """最小 JavaScript 负载（14 字节）。"""
    return b"console.log(1)"


@pytest.fixture
def repetitive_payload() -> bytes:
    """10,000 字节的重复 ASCII 文本。"""
    unit = b"function f(){return Math.sin(t*.01)*128}"
    data = (unit * (10_000 // len(unit) + 1))[:10_000]
    assert len(data) == 10_000
    return data


@pytest.fixture
def binary_payload() -> bytes:
    """包含所有字节值的二进制负载。"""
    return bytes(range(256)) * 4


@pytest.fixture
def fast_config() -> CrunchConfig:
    """迭代次数较少的配置，加快测试。"""
    return CrunchConfig(compression=CompressionConfig(iterations=5))


@pytest.fixture
def fake_compressor() -> FakeCompressor:
    return FakeCompressor()


@pytest.fixture
def payload_file(tmp_path: Path, js_payload: bytes) -> Path:
    """写好负载的输入文件。"""
    path = tmp_path / "intro.js"
    path.write_bytes(js_payload)
    return path


@pytest.fixture
def inflater():
    """参照解码器 inflate(data, decompression_type)。"""
    return inflate


@pytest.fixture
def fake_compressor_factory():
    """构造自定义输出的 FakeCompressor。"""
    return FakeCompressor
