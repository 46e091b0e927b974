"""
文件读写。

写入总是先写到目标目录下的临时文件，权限按 umask 设置（与直接 open 创建的文件一致），
完整写入并 fsync 之后再 os.replace 到目标路径。任何失败都会删除临时文件，
目标路径要么是旧内容，要么是完整的新内容，不会留下截断的产物。
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from payload_crunch.config.defaults import DEFAULT_RAW_SUFFIX
from payload_crunch.errors import PayloadIOError

logger = logging.getLogger(__name__)


def read_payload(path: str | Path, allow_empty: bool = False) -> bytes:
    """
    读取负载文件。

    参数:
        path: 文件路径
        allow_empty: 是否允许空文件

    返回:
        文件内容

    异常:
        PayloadIOError: 文件不存在、无法读取或为空
    """
    path = Path(path)
    try:
        with path.open("rb") as f:
            data = f.read()
    except OSError as e:
        raise PayloadIOError(
            what=f"无法读取源文件 '{path}'。",
            why=str(e),
            how="请检查输入路径是否正确以及文件权限。",
            path=str(path),
            operation="read",
        ) from e

    if not data and not allow_empty:
        raise PayloadIOError(
            what=f"源文件 '{path}' 为空。",
            why="读取到 0 字节。",
            how="请确认输入文件包含要打包的脚本。",
            path=str(path),
            operation="read",
        )

    logger.debug("读取 %s：%d 字节", path, len(data))
    return data


def write_atomic(path: str | Path, data: bytes) -> int:
    """
    原子地写入文件。

    参数:
        path: 目标路径
        data: 要写入的字节

    返回:
        写入的字节数

    异常:
        PayloadIOError: 创建临时文件、写入或替换失败
    """
    path = Path(path)
    directory = path.parent

    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.",
            suffix=".tmp",
            dir=directory,
        )
    except OSError as e:
        raise PayloadIOError(
            what=f"无法创建目标文件 '{path}'。",
            why=str(e),
            how="请检查输出目录是否存在以及是否有写权限。",
            path=str(path),
            operation="create",
        ) from e

    try:
        with os.fdopen(fd, "wb") as f:
            os.fchmod(f.fileno(), 0o666 & ~_current_umask())
            written = f.write(data)
            if written != len(data):
                raise OSError(f"只写入了 {written}/{len(data)} 字节")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        _remove_quietly(tmp_name)
        raise PayloadIOError(
            what=f"写入目标文件 '{path}' 失败。",
            why=str(e),
            how="请检查磁盘空间和写权限。目标文件未被修改。",
            path=str(path),
            operation="write",
        ) from e
    except BaseException:
        _remove_quietly(tmp_name)
        raise

    logger.info("已写入 %s：%d 字节", path, len(data))
    return len(data)


def raw_dump_path(html_path: str | Path, suffix: str = DEFAULT_RAW_SUFFIX) -> Path:
    """裸负载文件路径：在完整输出路径后追加后缀（out.html → out.html.raw）。"""
    html_path = Path(html_path)
    return html_path.with_name(html_path.name + suffix)


def _current_umask() -> int:
    """当前进程的 umask（os.umask 只能通过设置来读取）。"""
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _remove_quietly(name: str) -> None:
    try:
        os.unlink(name)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("清理临时文件 %s 失败：%s", name, e)
