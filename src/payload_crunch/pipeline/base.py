"""
流水线编排：压缩 → 渲染 → 组装。

整个流程单线程、严格顺序执行，每个阶段接收不可变输入并返回新值。
每个阶段记录耗时；阶段内的结构化异常直接传播，其他异常包装为
PipelineStageError 并带上阶段名。
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

from payload_crunch.bootstrap.resolver import render_bootstrap
from payload_crunch.bootstrap.templates import select_template
from payload_crunch.compress.base import CompressionResult, PayloadCompressor
from payload_crunch.compress.zopfli_compressor import create_compressor
from payload_crunch.config.schema import CrunchConfig
from payload_crunch.errors import PayloadCrunchError, PipelineStageError
from payload_crunch.models.artifact import Artifact
from payload_crunch.pipeline.assemble import assemble_artifact
from payload_crunch.pipeline.compress_stage import prepare_payload

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CrunchResult:
    """
    一次运行的结果。

    属性:
        artifact: 最终产物
        compression: 压缩决策结果
        timings_ms: 各阶段耗时（毫秒）
    """

    artifact: Artifact
    compression: CompressionResult
    timings_ms: dict[str, float] = field(default_factory=dict)

    @property
    def payload(self) -> bytes:
        """写入裸负载文件的字节。"""
        return self.compression.data


class CrunchPipeline:
    """
    打包流水线。

    基本用法::

        pipeline = CrunchPipeline(CrunchConfig())
        result = pipeline.run(Path("intro.js").read_bytes())
        Path("intro.html").write_bytes(result.artifact.data)

    注入自定义压缩器::

        pipeline = CrunchPipeline(config, compressor=MyCompressor())
    """

    STAGES = ("compress", "render", "assemble")

    def __init__(
        self,
        config: CrunchConfig | None = None,
        compressor: PayloadCompressor | None = None,
    ) -> None:
        self._config = config or CrunchConfig()
        self._compressor = compressor

    @property
    def config(self) -> CrunchConfig:
        return self._config

    @property
    def compressor(self) -> PayloadCompressor | None:
        """压缩器，跳过压缩时不会创建 zopfli 压缩器。"""
        if self._compressor is None and not self._config.skip_compression:
            self._compressor = create_compressor(self._config.decompression_type)
        return self._compressor

    def run(self, payload: bytes) -> CrunchResult:
        """
        执行完整流水线。

        参数:
            payload: 原始负载

        返回:
            CrunchResult

        异常:
            CompressionError: 压缩器没有产出
            InternalConsistencyError: 偏移量自检失败
            PipelineStageError: 阶段内出现非预期异常
        """
        config = self._config
        timings: dict[str, float] = {}

        compression = self._run_stage(
            "compress",
            timings,
            lambda: prepare_payload(
                payload,
                skip_compression=config.skip_compression,
                compressor=self.compressor,
                parameters=config.to_compression_parameters(),
            ),
        )

        template = select_template(config.skip_decompression_script)
        bootstrap = self._run_stage(
            "render",
            timings,
            lambda: render_bootstrap(template, config.decompression_type),
        )

        artifact = self._run_stage(
            "assemble",
            timings,
            lambda: assemble_artifact(bootstrap, compression.data),
        )

        return CrunchResult(artifact=artifact, compression=compression, timings_ms=timings)

    def _run_stage(self, name: str, timings: dict[str, float], func: Callable[[], T]) -> T:
        start_time = time.perf_counter()
        logger.debug("执行阶段: %s", name)

        try:
            result = func()
        except PayloadCrunchError:
            raise
        except Exception as e:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            logger.error("阶段 %s 执行失败（%.1fms）：%s", name, elapsed_ms, e)
            raise PipelineStageError(
                what=f"流水线阶段 '{name}' 执行失败。",
                why=str(e),
                how=f"检查 '{name}' 阶段的配置和输入数据。",
                stage_name=name,
            ) from e

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        timings[name] = elapsed_ms
        logger.debug("阶段 %s 完成（%.1fms）", name, elapsed_ms)
        return result
