# -*- coding: utf-8 -*-
"""
部署插件注册表：编排器按 target.type 取得插件实例。

用法:
    from app_deploy.plugins import create_plugin
    plugin = create_plugin(target.type, ctx)
    plugin.deploy_file(path, target, options)
"""
from __future__ import annotations

from typing import Callable

from app_deploy.contracts import DeployPlugin
from app_deploy.objects import DeployContext
from app_deploy.plugins import app as _app

PluginFactory = Callable[[DeployContext | None], DeployPlugin]

_FACTORIES: dict[str, PluginFactory] = {
    "app": _app.create_plugin,
}


def available_plugin_types() -> list[str]:
    return sorted(_FACTORIES)


def create_plugin(target_type: str, ctx: DeployContext | None = None) -> DeployPlugin:
    key = str(target_type or "").strip().lower()
    factory = _FACTORIES.get(key)
    if factory is None:
        raise KeyError(f"no deploy plugin for target type {target_type!r} (known: {available_plugin_types()})")
    return factory(ctx)


__all__ = ["available_plugin_types", "create_plugin"]
