# -*- coding: utf-8 -*-
"""Plugin base class and the dependency bundle handed to every plugin."""
from __future__ import annotations

import concurrent.futures as _futures
from collections.abc import Sequence
from typing import Any, Callable

from app_deploy.config import get_workspace_root
from app_deploy.contracts import (
    DeployFileOptions,
    DeployTarget,
    DeployWorkspaceOptions,
)
from app_deploy.log import get_logger

Launcher = Callable[..., _futures.Future]

_log = get_logger("plugins")


class DeployContext:
    """
    插件运行所需的外部依赖：工作区根目录与启动器。
    workspace_root 可传字符串或无参函数；不传时读取 config.get_workspace_root()。
    """

    def __init__(
        self,
        workspace_root: str | Callable[[], str] | None = None,
        launcher: Launcher | None = None,
    ) -> None:
        self._workspace_root = workspace_root
        self._launcher = launcher

    def workspace_root(self) -> str:
        root = self._workspace_root
        if callable(root):
            return root()
        if root:
            return root
        return get_workspace_root()

    def launch(self, target: str, app: Sequence[str], wait: bool) -> _futures.Future:
        launcher = self._launcher
        if launcher is None:
            from app_deploy.launcher import launch_application

            launcher = launch_application
        return launcher(target, app=list(app), wait=wait)


class DeployPluginBase:
    def __init__(self, ctx: DeployContext | None = None) -> None:
        self._context = ctx or DeployContext()

    @property
    def context(self) -> DeployContext:
        return self._context

    def deploy_file(
        self,
        file: str,
        target: DeployTarget,
        options: DeployFileOptions | None = None,
    ) -> None:
        raise NotImplementedError

    def deploy_workspace(
        self,
        files: Sequence[str],
        target: DeployTarget,
        options: DeployWorkspaceOptions | None = None,
    ) -> None:
        raise NotImplementedError

    def _emit(self, callback: Callable[[Any, Any], None] | None, event: Any) -> None:
        if callback is not None:
            callback(self, event)

    def _notify(self, callback: Callable[[Any, Any], None] | None, event: Any) -> None:
        """完成类回调：回调自身抛出的异常只记录日志，不再向调用方传播。"""
        try:
            self._emit(callback, event)
        except Exception:
            _log.exception("%s: completion callback %r raised", type(self).__name__, callback)
