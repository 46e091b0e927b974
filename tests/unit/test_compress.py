"""
压缩模块单元测试。

测试覆盖：
1. CompressionResult 统计属性
2. prepare_payload（压缩 / 直通决策）
3. ZopfliCompressor（三种输出格式、参数传递、失败包装）
"""

from __future__ import annotations

import pytest

from payload_crunch.compress import zopfli_compressor
from payload_crunch.compress.base import CompressionResult, PayloadCompressor
from payload_crunch.compress.zopfli_compressor import (
    ZopfliCompressor,
    create_compressor,
    strip_zlib_container,
)
from payload_crunch.errors import CompressionError, ConfigurationError
from payload_crunch.models.compression import CompressionParameters
from payload_crunch.pipeline.compress_stage import prepare_payload


FAST = CompressionParameters(iterations=3)


# === CompressionResult 测试 ===


class TestCompressionResult:
    """CompressionResult 测试。"""

    def test_ratio_and_savings(self) -> None:
        result = CompressionResult(data=b"x" * 25, original_size=100, method="fake")
        assert result.compressed_size == 25
        assert result.compression_ratio == pytest.approx(0.25)
        assert result.bytes_saved == 75

    def test_empty_original(self) -> None:
        result = CompressionResult(data=b"", original_size=0, method="identity", skipped=True)
        assert result.compression_ratio == 1.0
        assert result.bytes_saved == 0

    def test_expansion_has_no_savings(self) -> None:
        result = CompressionResult(data=b"x" * 12, original_size=10, method="fake")
        assert result.bytes_saved == 0


# === prepare_payload 测试 ===


class TestPreparePayload:
    """压缩决策测试。"""

    def test_skip_returns_original(self, js_payload, fake_compressor) -> None:
        result = prepare_payload(js_payload, skip_compression=True, compressor=fake_compressor)

        assert result.data == js_payload
        assert result.skipped is True
        assert result.method == "identity"
        assert fake_compressor.calls == []

    def test_skip_without_compressor(self, js_payload) -> None:
        result = prepare_payload(js_payload, skip_compression=True, compressor=None)
        assert result.data == js_payload

    def test_compress_invokes_compressor(self, js_payload, fake_compressor) -> None:
        params = CompressionParameters(iterations=7, block_splitting=False)
        result = prepare_payload(
            js_payload,
            skip_compression=False,
            compressor=fake_compressor,
            parameters=params,
        )

        assert result.data == b"Z:" + js_payload
        assert result.method == "fake"
        assert result.original_size == len(js_payload)
        assert result.skipped is False
        assert fake_compressor.calls == [(js_payload, params)]

    def test_default_parameters(self, js_payload, fake_compressor) -> None:
        prepare_payload(js_payload, skip_compression=False, compressor=fake_compressor)
        _, params = fake_compressor.calls[0]
        assert params.iterations == 50
        assert params.block_splitting is True

    def test_empty_output_fails(self, js_payload, fake_compressor_factory) -> None:
        with pytest.raises(CompressionError):
            prepare_payload(
                js_payload,
                skip_compression=False,
                compressor=fake_compressor_factory(output=b""),
            )

    def test_missing_compressor(self, js_payload) -> None:
        with pytest.raises(ValueError):
            prepare_payload(js_payload, skip_compression=False, compressor=None)


# === ZopfliCompressor 测试 ===


class TestZopfliCompressor:
    """zopfli 适配层测试。"""

    @pytest.mark.parametrize("output_format", ["deflate-raw", "deflate", "gzip"])
    def test_round_trip(self, output_format, repetitive_payload, inflater) -> None:
        compressor = ZopfliCompressor(output_format)
        data = compressor.compress(repetitive_payload, FAST)

        assert 0 < len(data) < len(repetitive_payload)
        assert inflater(data, output_format) == repetitive_payload

    def test_binary_round_trip(self, binary_payload, inflater) -> None:
        data = ZopfliCompressor().compress(binary_payload, FAST)
        assert inflater(data, "deflate-raw") == binary_payload

    def test_without_block_splitting(self, repetitive_payload, inflater) -> None:
        params = CompressionParameters(iterations=3, block_splitting=False)
        data = ZopfliCompressor().compress(repetitive_payload, params)
        assert inflater(data, "deflate-raw") == repetitive_payload

    def test_name_and_protocol(self) -> None:
        compressor = create_compressor("gzip")
        assert compressor.name == "zopfli:gzip"
        assert compressor.output_format == "gzip"
        assert isinstance(compressor, PayloadCompressor)

    def test_deterministic(self, repetitive_payload) -> None:
        compressor = ZopfliCompressor()
        assert compressor.compress(repetitive_payload, FAST) == compressor.compress(
            repetitive_payload, FAST
        )

    def test_unsupported_format(self) -> None:
        with pytest.raises(ConfigurationError):
            ZopfliCompressor("brotli")

    @pytest.mark.parametrize(
        ("output_format", "gzip_mode"),
        [("deflate-raw", 0), ("deflate", 0), ("gzip", 1)],
    )
    def test_parameters_forwarded(self, monkeypatch, js_payload, output_format, gzip_mode) -> None:
        captured: dict[str, object] = {}

        def recording_compress(data, **kwargs):
            captured["data"] = data
            captured.update(kwargs)
            return b"\x78\xda" + b"\x03\x00" + b"\x00\x00\x00\x01"

        monkeypatch.setattr(zopfli_compressor.zopfli.zopfli, "compress", recording_compress)
        ZopfliCompressor(output_format).compress(
            js_payload, CompressionParameters(iterations=11, block_splitting=False)
        )

        assert captured["data"] == js_payload
        assert captured["numiterations"] == 11
        assert captured["blocksplitting"] is False
        assert captured["gzip_mode"] == gzip_mode

    def test_container_headers(self, js_payload) -> None:
        """deflate 为 zlib 流，gzip 为 gzip 流，deflate-raw 没有任何容器头。"""
        zlib_stream = ZopfliCompressor("deflate").compress(js_payload, FAST)
        gzip_stream = ZopfliCompressor("gzip").compress(js_payload, FAST)
        raw_stream = ZopfliCompressor("deflate-raw").compress(js_payload, FAST)

        assert zlib_stream[0] == 0x78
        assert gzip_stream[:2] == b"\x1f\x8b"
        assert raw_stream == zlib_stream[2:-4]

    def test_library_error_wrapped(self, monkeypatch, js_payload) -> None:
        def broken_compress(data, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(zopfli_compressor.zopfli.zopfli, "compress", broken_compress)
        with pytest.raises(CompressionError) as exc_info:
            ZopfliCompressor().compress(js_payload, FAST)
        assert "boom" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_empty_output_fails(self, monkeypatch, js_payload) -> None:
        monkeypatch.setattr(
            zopfli_compressor.zopfli.zopfli, "compress", lambda data, **kwargs: b""
        )
        with pytest.raises(CompressionError):
            ZopfliCompressor().compress(js_payload, FAST)


# === strip_zlib_container 测试 ===


class TestStripZlibContainer:
    """zlib 容器剥离测试。"""

    def test_strips_header_and_trailer(self, js_payload, inflater) -> None:
        import zlib

        stream = zlib.compress(js_payload, 9)
        assert inflater(strip_zlib_container(stream), "deflate-raw") == js_payload

    def test_truncated_stream(self) -> None:
        with pytest.raises(CompressionError):
            strip_zlib_container(b"\x78\xda\x03\x00")

    def test_preset_dictionary_rejected(self) -> None:
        with pytest.raises(CompressionError):
            strip_zlib_container(b"\x78\xbb" + b"\x00" * 10)
