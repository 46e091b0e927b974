"""
YAML 配置文件加载与校验。

本模块负责：
1. 从显式路径或当前目录的默认位置加载 YAML 配置
2. 把命令行覆盖项深度合并到 YAML 配置之上
3. 使用 Pydantic Schema 校验，错误精确到字段

配置文件示例::

    decompression_type: deflate-raw
    compression:
      iterations: 200
      block_splitting: true
    output:
      dump_raw: true
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from payload_crunch.config.defaults import CONFIG_SEARCH_PATHS
from payload_crunch.config.schema import CrunchConfig
from payload_crunch.errors import ConfigLoadError, ConfigurationError

logger = logging.getLogger(__name__)


def load_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
    search: bool = True,
) -> CrunchConfig:
    """
    加载并校验运行配置。

    加载优先级：
    1. 显式指定的路径
    2. 当前目录下的默认搜索路径（search=True 时）
    3. 内置默认值

    参数:
        path: YAML 文件路径
        overrides: 覆盖项（通常来自命令行），合并到 YAML 配置之上
        search: 未指定 path 时是否自动搜索默认路径

    返回:
        CrunchConfig 实例

    异常:
        ConfigLoadError: 文件不存在或格式错误
        ConfigurationError: 配置校验失败
    """
    raw_config: dict[str, Any] = {}
    source = "<default>"

    if path is not None:
        raw_config = _load_yaml_file(Path(path))
        source = str(path)
    elif search:
        for candidate in CONFIG_SEARCH_PATHS:
            search_path = Path(candidate)
            if search_path.exists():
                logger.info("自动发现配置文件：%s", search_path)
                raw_config = _load_yaml_file(search_path)
                source = str(search_path)
                break

    if overrides:
        raw_config = _deep_merge(raw_config, overrides)

    return _validate_config(raw_config, source)


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """加载并解析 YAML 文件。"""
    if not path.exists():
        raise ConfigLoadError(
            what=f"配置文件 '{path}' 不存在。",
            why=f"在路径 '{path.absolute()}' 下未找到该文件。",
            how="请检查 --config 指定的路径是否正确。",
            file_path=str(path),
        )

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigLoadError(
            what=f"无法读取配置文件 '{path}'。",
            why=str(e),
            how="请检查文件权限和编码（需要 UTF-8）。",
            file_path=str(path),
        ) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigLoadError(
            what=f"配置文件 '{path}' 的 YAML 格式无效。",
            why=str(e),
            how="请使用 YAML 格式校验工具检查文件语法。",
            file_path=str(path),
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigLoadError(
            what=f"配置文件 '{path}' 的根元素必须是字典（mapping）。",
            why=f"实际类型为 {type(data).__name__}。",
            how="请确保 YAML 文件的根元素是键值对形式，例如：\n"
                "  decompression_type: deflate-raw\n"
                "  compression:\n"
                "    iterations: 50",
            file_path=str(path),
        )

    return data


def _validate_config(raw: dict[str, Any], source: str) -> CrunchConfig:
    """使用 Pydantic 校验配置字典。"""
    try:
        return CrunchConfig(**raw)
    except ValidationError as e:
        errors = e.errors()
        error_details = []
        for err in errors:
            field_path = " → ".join(str(loc) for loc in err["loc"])
            error_details.append(f"  字段 '{field_path}': {err['msg']}")

        first_field = ".".join(str(loc) for loc in errors[0]["loc"]) if errors else ""
        raise ConfigurationError(
            what=f"配置 '{source}' 校验失败（{len(errors)} 个错误）。",
            why="\n".join(error_details),
            how="请修正上述字段。可以使用 validate_config_file() 进行预校验。",
            config_path=source,
            field_path=first_field,
        ) from e


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """深度合并两个字典。override 中的值优先。"""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def validate_config_file(path: str | Path) -> list[str]:
    """
    校验配置文件，返回错误列表。

    不抛出异常，而是收集错误信息。空列表表示校验通过。
    """
    errors: list[str] = []

    try:
        load_config(path=path)
    except ConfigurationError as e:
        errors.append(e.full_message)

    return errors
