"""
结构化异常体系：错误信息即文档。

每条异常遵循"三段式"规范：
1. What went wrong（发生了什么）
2. Why it happened（为什么发生）
3. How to fix it（怎么修）

CLI 直接打印 full_message，退出码为 1。

示例::

    PayloadIOError(
        what="无法读取源文件 'intro.js'。",
        why="[Errno 2] No such file or directory",
        how="请检查输入路径是否正确。",
        path="intro.js",
        operation="read",
    )
"""

from __future__ import annotations

from typing import Any


class PayloadCrunchError(Exception):
    """
    Payload Crunch 异常基类。

    属性:
        what: 发生了什么
        why: 为什么发生
        how: 怎么修复
        details: 额外的上下文信息（用于调试）
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.what = what
        self.why = why
        self.how = how
        self.details = details or {}

        parts = [what]
        if why:
            parts.append(f"→ 原因：{why}")
        if how:
            parts.append(f"→ 修复建议：{how}")

        self.full_message = "\n".join(parts)
        super().__init__(self.full_message)

    def __str__(self) -> str:
        return self.full_message

    def to_dict(self) -> dict[str, Any]:
        """转换为字典格式，用于日志或 JSON 输出。"""
        result: dict[str, Any] = {
            "error_type": type(self).__name__,
            "what": self.what,
        }
        if self.why:
            result["why"] = self.why
        if self.how:
            result["how"] = self.how
        if self.details:
            result["details"] = self.details
        return result


# === 配置相关异常 ===


class ConfigurationError(PayloadCrunchError):
    """
    配置异常。

    缺少输入/输出路径、数值参数非法、解压类型不受支持时抛出。

    示例::

        raise ConfigurationError(
            what="配置 '<cli>' 校验失败（1 个错误）。",
            why="字段 'compression → iterations': Input should be greater than 0",
            how="zopfli 迭代次数必须是正整数。",
            config_path="<cli>",
            field_path="compression.iterations",
        )
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        config_path: str = "",
        field_path: str = "",
        **kwargs: Any,
    ) -> None:
        details = {
            "config_path": config_path,
            "field_path": field_path,
        }
        details.update(kwargs)
        super().__init__(what=what, why=why, how=how, details=details)
        self.config_path = config_path
        self.field_path = field_path


class ConfigLoadError(ConfigurationError):
    """
    配置文件加载异常。

    当 YAML 配置文件不存在、无法读取或格式错误时抛出。
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        file_path: str = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(what=what, why=why, how=how, config_path=file_path, **kwargs)
        self.file_path = file_path


# === I/O 相关异常 ===


class PayloadIOError(PayloadCrunchError):
    """
    文件读写异常。

    打开、读取、写入失败，或读取/写入不完整时抛出。
    写入失败时目标文件保持原状，不会留下截断的产物。
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        path: str = "",
        operation: str = "",
        **kwargs: Any,
    ) -> None:
        details = {"path": path, "operation": operation}
        details.update(kwargs)
        super().__init__(what=what, why=why, how=how, details=details)
        self.path = path
        self.operation = operation


# === 压缩相关异常 ===


class CompressionError(PayloadCrunchError):
    """
    压缩异常。

    zopfli 没有产出任何数据或在压缩过程中报错时抛出。不做重试。
    """

    pass


# === 产物相关异常 ===


class InternalConsistencyError(PayloadCrunchError):
    """
    内部一致性异常。

    渲染后的引导脚本长度与其中嵌入的偏移量不一致时抛出。
    这意味着程序缺陷而非用户输入错误，绝不能输出错误的偏移量。
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        expected: int = 0,
        actual: int = 0,
        **kwargs: Any,
    ) -> None:
        details = {"expected": expected, "actual": actual}
        details.update(kwargs)
        super().__init__(what=what, why=why, how=how, details=details)
        self.expected = expected
        self.actual = actual


class ArtifactFormatError(PayloadCrunchError):
    """在给定字节中找不到任何已注册的引导脚本。"""

    pass


# === 流水线相关异常 ===


class PipelineStageError(PayloadCrunchError):
    """
    流水线阶段异常。

    阶段内部抛出了非结构化异常时，由流水线包装后抛出。
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        stage_name: str = "",
        **kwargs: Any,
    ) -> None:
        details = {"stage_name": stage_name}
        details.update(kwargs)
        super().__init__(what=what, why=why, how=how, details=details)
        self.stage_name = stage_name
