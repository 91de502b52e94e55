# -*- coding: utf-8 -*-
"""
部署目标配置：从独立的 deploy_targets.json 读取/写入目标列表，并解析工作区根目录。
配置文件默认与主程序同目录（或由调用方指定 config_dir）。跨平台：Windows / macOS / Linux。

文件格式::

    {"targets": [{"name": "viewer", "type": "app", "app": "tools/viewer",
                  "arguments": ["--open", "${file}"], "separator": ","}]}
"""
from __future__ import annotations

import json
import os
import sys
from typing import Any

from app_deploy.contracts import DeployTargetApp
from app_deploy.helpers import normalize_string_list, to_string_safe
from app_deploy.log import get_logger

CONFIG_FILENAME = "deploy_targets.json"
WORKSPACE_ENV = "APP_DEPLOY_WORKSPACE"

_log = get_logger("config")


def get_workspace_root() -> str:
    """工作区根目录：优先环境变量 APP_DEPLOY_WORKSPACE，否则为当前工作目录。"""
    root = os.environ.get(WORKSPACE_ENV, "").strip()
    return os.path.abspath(os.path.expanduser(root) if root else os.getcwd())


def _user_config_dir() -> str:
    """打包后使用用户可写目录。"""
    if sys.platform == "win32":
        base = (
            os.environ.get("APPDATA")
            or os.environ.get("LOCALAPPDATA")
            or os.path.join(os.path.expanduser("~"), "AppData", "Roaming")
        )
        return os.path.join(base, "AppDeploy")
    if sys.platform == "darwin":
        return os.path.join(os.path.expanduser("~"), "Library", "Application Support", "AppDeploy")
    return os.path.join(
        os.environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config"),
        "AppDeploy",
    )


def _default_config_dir() -> str:
    if getattr(sys, "frozen", False):
        return _user_config_dir()
    return os.path.dirname(os.path.abspath(sys.argv[0] if sys.argv else "."))


def get_config_path(config_dir: str | None = None) -> str:
    """返回 deploy_targets.json 的完整路径。config_dir 为空时使用默认目录。"""
    base = config_dir if config_dir else _default_config_dir()
    return os.path.join(base, CONFIG_FILENAME)


def _resolve_path(config_path: str | None, config_dir: str | None) -> str:
    if config_path and not os.path.isdir(config_path):
        return config_path
    dir_ = config_dir if config_dir else (config_path if config_path and os.path.isdir(config_path) else None)
    return get_config_path(dir_)


def _normalize_target(item: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {
        "name": to_string_safe(item.get("name")),
        "type": to_string_safe(item.get("type")) or "app",
    }
    for key in ("description", "app", "separator"):
        if item.get(key) is not None:
            out[key] = to_string_safe(item.get(key))
    arguments = normalize_string_list(item.get("arguments"))
    if arguments is not None:
        out["arguments"] = arguments
    return out


def load_config(config_path: str | None = None, config_dir: str | None = None) -> dict[str, Any]:
    """
    加载部署目标配置。config_path 可为文件路径或目录；未传则用 config_dir 或默认目录。
    文件不存在或内容无效时返回空列表，不抛异常。
    返回格式: {"targets": [{"name": str, "type": str, ...}, ...]}
    """
    path = _resolve_path(config_path, config_dir)
    out: dict[str, Any] = {"targets": []}
    if not os.path.isfile(path):
        return out
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        _log.warning("load_config: cannot read %s: %s", path, e)
        return out
    if isinstance(data, dict) and isinstance(data.get("targets"), list):
        out["targets"] = [_normalize_target(item) for item in data["targets"] if isinstance(item, dict)]
    return out


def save_config(
    targets: list[dict[str, Any] | DeployTargetApp],
    config_path: str | None = None,
    config_dir: str | None = None,
) -> str:
    """将目标列表写入 deploy_targets.json，返回实际写入的路径。写入失败时抛 OSError。"""
    path = _resolve_path(config_path, config_dir)
    items = [t.to_dict() if isinstance(t, DeployTargetApp) else _normalize_target(t) for t in targets]
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"targets": items}, f, ensure_ascii=False, indent=2)
    return path


def load_targets(config_path: str | None = None, config_dir: str | None = None) -> list[DeployTargetApp]:
    """只返回 type 为 app 的目标（其它类型由别的插件处理）。"""
    return [
        DeployTargetApp.from_dict(item)
        for item in load_config(config_path, config_dir)["targets"]
        if item.get("type") == "app"
    ]
