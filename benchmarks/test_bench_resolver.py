"""
偏移量求解与 zopfli 压缩基准测试。

验证：
- 引导脚本渲染（不动点求解 + 自检）远低于 1ms
- zopfli 耗时随迭代次数大致线性增长

运行方式::

    python -m pytest benchmarks/test_bench_resolver.py -v -m slow
    python benchmarks/test_bench_resolver.py    # 独立运行，打印详细统计
"""

from __future__ import annotations

import statistics
import time

import pytest

from payload_crunch.bootstrap.resolver import render_bootstrap, resolve_offset
from payload_crunch.bootstrap.templates import DECOMPRESSING
from payload_crunch.compress.zopfli_compressor import ZopfliCompressor
from payload_crunch.models.compression import CompressionParameters


def _payload(size: int = 64 * 1024) -> bytes:
    """构造一段典型的 intro 脚本（重复度高）。"""
    unit = b"for(i=0;i<1e3;i++)c.fillRect(Math.sin(i*t)*W,Math.cos(i*t)*H,2,2);"
    return (unit * (size // len(unit) + 1))[:size]


@pytest.mark.slow
class TestResolverLatency:
    """引导脚本渲染延迟基准测试。"""

    ROUNDS = 1000
    P99_THRESHOLD_MS = 1.0

    def test_render_p99(self) -> None:
        latencies: list[float] = []
        for _ in range(self.ROUNDS):
            start = time.perf_counter()
            render_bootstrap(DECOMPRESSING, "deflate-raw")
            latencies.append((time.perf_counter() - start) * 1000)

        latencies.sort()
        p99 = latencies[min(int(len(latencies) * 0.99), len(latencies) - 1)]

        print(
            f"\n{'='*60}\n"
            f"引导脚本渲染（{self.ROUNDS} 轮）\n"
            f"{'='*60}\n"
            f"  平均:  {statistics.mean(latencies):.4f} ms\n"
            f"  P99:   {p99:.4f} ms\n"
            f"{'='*60}"
        )

        assert p99 < self.P99_THRESHOLD_MS

    def test_resolve_sweep(self) -> None:
        """0 ~ 100,000 字节的所有模板长度都能收敛。"""
        start = time.perf_counter()
        worst = max(resolve_offset(base).iterations for base in range(100_001))
        elapsed = time.perf_counter() - start

        print(f"\n求解 100,001 个长度：{elapsed:.2f}s，最多 {worst} 次求值")
        assert worst <= 3


@pytest.mark.slow
class TestZopfliScaling:
    """zopfli 迭代次数与耗时的关系。"""

    def _measure(self, iterations: int, payload: bytes) -> tuple[float, int]:
        compressor = ZopfliCompressor()
        params = CompressionParameters(iterations=iterations)
        start = time.perf_counter()
        data = compressor.compress(payload, params)
        return (time.perf_counter() - start) * 1000, len(data)

    def test_more_iterations_not_larger(self) -> None:
        payload = _payload()
        self._measure(1, payload)

        fast_ms, fast_size = self._measure(5, payload)
        slow_ms, slow_size = self._measure(50, payload)

        print(
            f"\n{'='*60}\n"
            f"zopfli 迭代次数对比（{len(payload):,} 字节）\n"
            f"{'='*60}\n"
            f"  5 次:   {fast_ms:.1f} ms, {fast_size:,} 字节\n"
            f"  50 次:  {slow_ms:.1f} ms, {slow_size:,} 字节\n"
            f"{'='*60}"
        )

        assert slow_size <= fast_size


if __name__ == "__main__":
    TestResolverLatency().test_render_p99()
    TestResolverLatency().test_resolve_sweep()
    TestZopfliScaling().test_more_iterations_not_larger()
