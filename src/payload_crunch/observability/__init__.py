"""
可观测性模块：体积统计报告。
"""

from payload_crunch.observability.stats import SizeReport, build_reports

__all__ = ["SizeReport", "build_reports"]
