"""
Payload Crunch 流水线模块：压缩 → 渲染 → 组装。
"""

from payload_crunch.pipeline.assemble import assemble_artifact
from payload_crunch.pipeline.base import CrunchPipeline, CrunchResult
from payload_crunch.pipeline.compress_stage import prepare_payload

__all__ = ["CrunchPipeline", "CrunchResult", "assemble_artifact", "prepare_payload"]
