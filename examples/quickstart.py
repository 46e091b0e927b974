"""
Payload Crunch 快速上手示例。

演示最基本的用法：内存中打包、写出文件、读取嵌入的偏移量。

运行方式：
    python examples/quickstart.py

需要安装 zopfli，无需任何配置文件。
"""

import tempfile
from pathlib import Path

INTRO = b"""
c=document.body.appendChild(document.createElement('canvas'));
x=c.getContext('2d');
setInterval(t=>{for(i=0;i<99;i++)x.fillRect(Math.sin(i+Date.now()/1e3)*99+99,i*2,2,2)},16);
""" * 20


def main() -> None:
    from payload_crunch import PayloadCruncher, read_embedded_offset

    # ===== 场景 1：内存中打包 =====
    print("=" * 60)
    print("场景 1：内存中打包")
    print("=" * 60)

    cruncher = PayloadCruncher(compression={"iterations": 15})
    result = cruncher.crunch(INTRO)

    print(f"\n输入：{len(INTRO):,} 字节")
    print(f"输出：{result.artifact.size:,} 字节（引导脚本 {result.artifact.offset} 字节）")
    print(f"各阶段耗时：{result.timings_ms}")
    print(f"\n引导脚本：\n  {result.artifact.bootstrap.text}")

    # ===== 场景 2：写出文件 =====
    print("\n" + "=" * 60)
    print("场景 2：写出 HTML 和裸负载")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as tmp:
        src = Path(tmp) / "intro.js"
        src.write_bytes(INTRO)

        cruncher = PayloadCruncher(
            decompression_type="gzip",
            output={"dump_raw": True},
        )
        outcome = cruncher.crunch_file(src, Path(tmp) / "intro.html")

        for report in outcome.reports:
            print()
            for line in report.lines():
                print(f"  {line}")

        # ===== 场景 3：从产物读回偏移量 =====
        html = outcome.html_path.read_bytes()
        offset = read_embedded_offset(html)
        print(f"\n嵌入的偏移量：{offset}")
        print(f"HTML 尾部与裸负载一致：{html[offset:] == outcome.raw_path.read_bytes()}")


if __name__ == "__main__":
    main()
