"""
体积统计：输入/输出大小与占比。

统计只用于展示，不影响产物的正确性。CLI 用 rich 表格渲染这些报告。
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SizeReport:
    """
    一份输出文件的体积报告。

    属性:
        output_type: 输出类型（"html" / "raw"）
        input_size: 原始负载字节数
        output_size: 输出文件字节数
        compression_skipped: 是否跳过了压缩
        decompression_type: 解压类型（仅写出 HTML 时展示）
    """

    output_type: str
    input_size: int
    output_size: int
    compression_skipped: bool = False
    decompression_type: str | None = None

    @property
    def ratio_percent(self) -> float:
        """输出占输入的百分比。"""
        if self.input_size == 0:
            return 0.0
        return self.output_size / self.input_size * 100.0

    def lines(self) -> list[str]:
        """纯文本形式（日志与非终端输出使用）。"""
        result = [
            f"Input Javascript size: {self.input_size} bytes",
            f"Output {self.output_type} file size: {self.output_size} bytes",
            f"Output is {self.ratio_percent:.2f} percent of input",
        ]
        if self.compression_skipped:
            result.append("No compression flag was specified")
        if self.decompression_type:
            result.append(f"Decompression type is '{self.decompression_type}'")
        return result


def build_reports(
    input_size: int,
    artifact_size: int | None,
    raw_size: int | None,
    compression_skipped: bool,
    decompression_type: str | None,
) -> list[SizeReport]:
    """
    为实际写出的每个文件生成报告。

    参数:
        input_size: 原始负载字节数
        artifact_size: HTML 产物字节数（未写出时为 None）
        raw_size: 裸负载文件字节数（未写出时为 None）
        compression_skipped: 是否跳过了压缩
        decompression_type: 配置的解压类型（只在写出 HTML 时展示）

    返回:
        报告列表，HTML 在前
    """
    reports: list[SizeReport] = []
    if artifact_size is not None:
        reports.append(SizeReport(
            output_type="html",
            input_size=input_size,
            output_size=artifact_size,
            compression_skipped=compression_skipped,
            decompression_type=decompression_type,
        ))
    if raw_size is not None:
        reports.append(SizeReport(
            output_type="raw",
            input_size=input_size,
            output_size=raw_size,
            compression_skipped=compression_skipped,
            decompression_type=decompression_type if artifact_size is not None else None,
        ))
    return reports
