"""
PayloadCruncher：Payload Crunch 的顶层入口。

把配置加载、流水线执行、文件写入和统计报告串在一起。
CLI 只是这个类的一层薄封装，库用户也可以直接使用。

基本用法::

    from payload_crunch import PayloadCruncher

    cruncher = PayloadCruncher(decompression_type="deflate-raw")
    outcome = cruncher.crunch_file("intro.js", "intro.html")
    print(outcome.result.artifact.size)

纯内存用法::

    result = cruncher.crunch(b"console.log(1)")
    html = result.artifact.data
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from payload_crunch.compress.base import PayloadCompressor
from payload_crunch.config.loader import load_config
from payload_crunch.config.schema import CrunchConfig
from payload_crunch.observability.stats import SizeReport, build_reports
from payload_crunch.pipeline.base import CrunchPipeline, CrunchResult
from payload_crunch.storage.files import raw_dump_path, read_payload, write_atomic

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CrunchOutcome:
    """
    crunch_file() 的结果。

    属性:
        result: 流水线结果
        html_path: 写出的 HTML 路径（未写出时为 None）
        raw_path: 写出的裸负载路径（未写出时为 None）
        reports: 每个写出文件的体积报告
    """

    result: CrunchResult
    html_path: Path | None = None
    raw_path: Path | None = None
    reports: list[SizeReport] = field(default_factory=list)


class PayloadCruncher:
    """
    打包器。

    配置优先级：显式 config > config_path 指向的 YAML + overrides。

    参数:
        config: 完整配置（提供时忽略 config_path 和 overrides）
        config_path: YAML 配置文件路径
        compressor: 自定义压缩器（默认按解压类型创建 zopfli 压缩器）
        debug: 是否启用 DEBUG 日志
        **overrides: 覆盖项，例如 decompression_type="gzip"、
            compression={"iterations": 100}
    """

    def __init__(
        self,
        config: CrunchConfig | None = None,
        *,
        config_path: str | Path | None = None,
        compressor: PayloadCompressor | None = None,
        debug: bool = False,
        **overrides: Any,
    ) -> None:
        if config is None:
            config = load_config(path=config_path, overrides=overrides or None, search=False)
        self._config = config
        self._pipeline = CrunchPipeline(config, compressor=compressor)
        self._debug = debug

        if self._debug:
            logging.basicConfig(level=logging.DEBUG)
            logger.debug(
                "PayloadCruncher 初始化完成：decompression_type=%s, iterations=%d, "
                "block_splitting=%s, skip_compression=%s, skip_decompression_script=%s",
                config.decompression_type,
                config.compression.iterations,
                config.compression.block_splitting,
                config.skip_compression,
                config.skip_decompression_script,
            )

    @property
    def config(self) -> CrunchConfig:
        return self._config

    def crunch(self, payload: bytes) -> CrunchResult:
        """在内存中生成产物，不写文件。"""
        return self._pipeline.run(payload)

    def crunch_file(self, input_path: str | Path, output_path: str | Path) -> CrunchOutcome:
        """
        读取负载文件，生成产物并写出。

        先写 HTML，再写裸负载文件。任一写入失败立即中止。

        参数:
            input_path: 负载文件路径
            output_path: HTML 产物路径（裸负载文件路径由它派生）

        返回:
            CrunchOutcome

        异常:
            PayloadIOError: 读取或写入失败，或负载文件为空
            CompressionError: 压缩器没有产出
            InternalConsistencyError: 偏移量自检失败
        """
        output_cfg = self._config.output
        payload = read_payload(input_path)
        result = self.crunch(payload)

        html_path: Path | None = None
        raw_path: Path | None = None

        if output_cfg.write_html:
            html_path = Path(output_path)
            write_atomic(html_path, result.artifact.data)

        if output_cfg.dump_raw:
            raw_path = raw_dump_path(output_path, output_cfg.raw_suffix)
            write_atomic(raw_path, result.payload)

        reports = build_reports(
            input_size=len(payload),
            artifact_size=result.artifact.size if html_path else None,
            raw_size=len(result.payload) if raw_path else None,
            compression_skipped=result.compression.skipped,
            decompression_type=self._config.decompression_type,
        )

        return CrunchOutcome(
            result=result,
            html_path=html_path,
            raw_path=raw_path,
            reports=reports,
        )
