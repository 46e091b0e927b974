"""
CLI 工具函数：Rich 输出、错误处理、统计表格。
"""

from __future__ import annotations

import logging
import sys
from typing import NoReturn

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from payload_crunch.errors import PayloadCrunchError
from payload_crunch.observability.stats import SizeReport

logger = logging.getLogger(__name__)

_console: Console | None = None


def create_console() -> Console:
    """创建或获取全局 Rich Console 实例。"""
    global _console
    if _console is None:
        _console = Console()
    return _console


def print_success(message: str) -> None:
    """打印成功信息。"""
    console = create_console()
    console.print(f"[bold green]OK[/bold green] {escape(message)}")


def print_warning(message: str) -> None:
    """打印警告信息。"""
    console = create_console()
    console.print(f"[bold yellow]![/bold yellow] {escape(message)}")


def format_byte_count(count: int) -> str:
    """
    格式化字节数，带千分位分隔符。

    示例::

        >>> format_byte_count(10000)
        '10,000 bytes'
    """
    return f"{count:,} bytes"


def create_report_table(report: SizeReport) -> Table:
    """
    把一份体积报告渲染为表格。

    参数:
        report: SizeReport

    返回:
        Rich Table 对象
    """
    table = Table(
        title=f"{report.output_type.upper()} 输出统计",
        show_header=False,
        title_justify="left",
    )
    table.add_column("项目", style="bold")
    table.add_column("值", justify="right", style="cyan")

    table.add_row("输入大小", format_byte_count(report.input_size))
    table.add_row("输出大小", format_byte_count(report.output_size))
    table.add_row("输出/输入", f"{report.ratio_percent:.2f}%")
    if report.compression_skipped:
        table.add_row("压缩", "已跳过（--no-compression）")
    if report.decompression_type:
        table.add_row("解压类型", escape(report.decompression_type))

    return table


def print_reports(reports: list[SizeReport]) -> None:
    """
    打印统计报告。

    统计只用于展示，渲染失败只记录警告，不影响退出码。
    """
    console = create_console()
    for report in reports:
        try:
            console.print(create_report_table(report))
        except Exception as e:
            logger.warning("打印 %s 统计失败：%s", report.output_type, e)
            print_warning(f"{report.output_type} 统计不可用")


def handle_crunch_error(error: PayloadCrunchError) -> NoReturn:
    """统一处理 PayloadCrunchError：打印三段式信息，退出码 1。"""
    console = create_console()
    console.print("\n[bold red]X 错误[/bold red]\n")
    console.print(escape(error.full_message))
    sys.exit(1)
