"""
Payload Crunch CLI：命令行工具。
"""

from payload_crunch.cli.app import app, main

__all__ = ["app", "main"]
