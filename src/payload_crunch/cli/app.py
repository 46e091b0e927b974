"""
Payload Crunch CLI：命令行工具入口。

用法::

    js-payload-compress [options] infile.js outfile.html
    js-payload-compress --zopfli-iterations=200 intro.js intro.html
    js-payload-compress --no-compression --no-decompression-script intro.js test.html
    js-payload-compress --dump-compressed-raw --write-no-html intro.js intro.html

选项可以出现在位置参数之前或之后。
"""

from __future__ import annotations

import logging
from typing import Any

import typer
from rich.markup import escape

from payload_crunch.cli.utils import (
    create_console,
    handle_crunch_error,
    print_reports,
    print_success,
)
from payload_crunch.errors import PayloadCrunchError

app = typer.Typer(
    name="js-payload-compress",
    help="把 JavaScript 压缩进一个自解压的单文件 HTML。",
    add_completion=False,
)

console = create_console()


def _version_callback(value: bool) -> None:
    if value:
        from payload_crunch import __version__
        console.print(f"Payload Crunch v{__version__}")
        raise typer.Exit()


@app.command()
def crunch(
    infile: str = typer.Argument(
        ...,
        help="输入负载文件（例如 intro.js）",
    ),
    outfile: str = typer.Argument(
        ...,
        help="输出 HTML 文件（裸负载文件为 <outfile>.raw）",
    ),
    zopfli_iterations: int | None = typer.Option(
        None,
        "--zopfli-iterations",
        help="zopfli 迭代次数。越多越慢，但可能略小。默认 50。",
    ),
    decompression_type: str | None = typer.Option(
        None,
        "--decompression-type",
        help="DecompressionStream 解压类型：deflate-raw（默认）/ deflate / gzip。",
    ),
    no_blocksplitting: bool = typer.Option(
        False,
        "--no-blocksplitting",
        help="不使用块分割。",
    ),
    no_compression: bool = typer.Option(
        False,
        "--no-compression",
        help="不压缩负载（例如输入已是 gzip 数据，或用于测试）。",
    ),
    no_decompression_script: bool = typer.Option(
        False,
        "--no-decompression-script",
        help="使用不解压的引导脚本（用于测试）。",
    ),
    dump_compressed_raw: bool = typer.Option(
        False,
        "--dump-compressed-raw",
        help="额外把负载写入 <outfile>.raw（不含引导脚本）。",
    ),
    write_no_html: bool = typer.Option(
        False,
        "--write-no-html",
        help="不写 HTML（例如只要裸负载）。",
    ),
    no_statistics: bool = typer.Option(
        False,
        "--no-statistics",
        help="不显示统计信息。",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML 配置文件路径（命令行参数优先）。",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="详细输出（DEBUG 日志）。",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="显示版本信息。",
    ),
) -> None:
    """压缩 INFILE 并写出自解压的 OUTFILE。"""
    from payload_crunch.config.loader import load_config
    from payload_crunch.facade import PayloadCruncher

    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    overrides = _collect_overrides(
        zopfli_iterations=zopfli_iterations,
        decompression_type=decompression_type,
        no_blocksplitting=no_blocksplitting,
        no_compression=no_compression,
        no_decompression_script=no_decompression_script,
        dump_compressed_raw=dump_compressed_raw,
        write_no_html=write_no_html,
        no_statistics=no_statistics,
    )

    try:
        crunch_config = load_config(path=config, overrides=overrides)
        cruncher = PayloadCruncher(crunch_config, debug=verbose)
        outcome = cruncher.crunch_file(infile, outfile)
    except PayloadCrunchError as e:
        handle_crunch_error(e)

    if outcome.html_path is not None:
        print_success(f"已写入 {outcome.html_path}（{outcome.result.artifact.size:,} 字节）")
    if outcome.raw_path is not None:
        print_success(f"已写入 {outcome.raw_path}（{len(outcome.result.payload):,} 字节）")
    if outcome.html_path is None and outcome.raw_path is None:
        console.print("[dim]未写出任何文件（--write-no-html 且未指定 --dump-compressed-raw）[/dim]")

    if crunch_config.output.show_statistics:
        print_reports(outcome.reports)

    if verbose:
        timings = ", ".join(
            f"{escape(name)}={ms:.1f}ms" for name, ms in outcome.result.timings_ms.items()
        )
        console.print(f"[dim]阶段耗时：{timings}[/dim]")


def _collect_overrides(
    zopfli_iterations: int | None,
    decompression_type: str | None,
    no_blocksplitting: bool,
    no_compression: bool,
    no_decompression_script: bool,
    dump_compressed_raw: bool,
    write_no_html: bool,
    no_statistics: bool,
) -> dict[str, Any]:
    """只收集命令行上显式给出的选项，避免默认值覆盖配置文件。"""
    overrides: dict[str, Any] = {}
    compression: dict[str, Any] = {}
    output: dict[str, Any] = {}

    if zopfli_iterations is not None:
        compression["iterations"] = zopfli_iterations
    if no_blocksplitting:
        compression["block_splitting"] = False
    if decompression_type is not None:
        overrides["decompression_type"] = decompression_type
    if no_compression:
        overrides["skip_compression"] = True
    if no_decompression_script:
        overrides["skip_decompression_script"] = True
    if dump_compressed_raw:
        output["dump_raw"] = True
    if write_no_html:
        output["write_html"] = False
    if no_statistics:
        output["show_statistics"] = False

    if compression:
        overrides["compression"] = compression
    if output:
        overrides["output"] = output
    return overrides


def main() -> None:
    """CLI 入口点。"""
    app()


if __name__ == "__main__":
    main()
