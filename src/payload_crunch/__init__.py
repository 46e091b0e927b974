"""
Payload Crunch：自解压 HTML 打包工具。

把 JavaScript（或任意字节）用 zopfli 压缩后，前面加上一小段
``<svg onload=...>`` 引导脚本，得到一个单文件 HTML。浏览器打开时，
引导脚本 fetch 自身、切掉自己、用 DecompressionStream 解压并 eval。
面向 4k/8k/64k intro 作者。

快速上手::

    from payload_crunch import PayloadCruncher

    cruncher = PayloadCruncher()
    outcome = cruncher.crunch_file("intro.js", "intro.html")

命令行::

    js-payload-compress --zopfli-iterations=200 intro.js intro.html
"""

from payload_crunch.bootstrap import (
    DECOMPRESSING,
    PASS_THROUGH,
    extract_payload,
    read_embedded_offset,
    render_bootstrap,
    resolve_offset,
    select_template,
)
from payload_crunch.compress import CompressionResult, PayloadCompressor, ZopfliCompressor
from payload_crunch.config import CompressionConfig, CrunchConfig, OutputConfig, load_config
from payload_crunch.errors import (
    ArtifactFormatError,
    CompressionError,
    ConfigLoadError,
    ConfigurationError,
    InternalConsistencyError,
    PayloadCrunchError,
    PayloadIOError,
    PipelineStageError,
)
from payload_crunch.facade import CrunchOutcome, PayloadCruncher
from payload_crunch.models import (
    Artifact,
    BootstrapKind,
    BootstrapTemplate,
    CompressionParameters,
    RenderedBootstrap,
)
from payload_crunch.observability import SizeReport
from payload_crunch.pipeline import CrunchPipeline, CrunchResult, assemble_artifact

__version__ = "0.1.0"

__all__ = [
    # 顶层入口
    "PayloadCruncher",
    "CrunchOutcome",
    "CrunchPipeline",
    "CrunchResult",
    # 数据模型
    "Artifact",
    "BootstrapKind",
    "BootstrapTemplate",
    "CompressionParameters",
    "RenderedBootstrap",
    # 引导脚本
    "DECOMPRESSING",
    "PASS_THROUGH",
    "extract_payload",
    "read_embedded_offset",
    "render_bootstrap",
    "resolve_offset",
    "select_template",
    # 组装
    "assemble_artifact",
    # 压缩
    "CompressionResult",
    "PayloadCompressor",
    "ZopfliCompressor",
    # 配置
    "CompressionConfig",
    "CrunchConfig",
    "OutputConfig",
    "load_config",
    # 统计
    "SizeReport",
    # 异常
    "ArtifactFormatError",
    "CompressionError",
    "ConfigLoadError",
    "ConfigurationError",
    "InternalConsistencyError",
    "PayloadCrunchError",
    "PayloadIOError",
    "PipelineStageError",
    # 版本
    "__version__",
]
