"""
存储模块：负载读取、原子写入与裸负载文件路径。
"""

from payload_crunch.storage.files import raw_dump_path, read_payload, write_atomic

__all__ = ["raw_dump_path", "read_payload", "write_atomic"]
