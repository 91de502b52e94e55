# -*- coding: utf-8 -*-
"""
app 插件：不传输文件内容，而是把文件交给外部应用打开（查看器、编辑器、脚本等）。

- deploy_file：单个文件作为启动目标，等待外部进程退出后回调 on_completed；
- deploy_workspace：第一个文件作为启动目标，其余文件追加到参数中，只启动一次，
  启动确认后依次为每个文件回调 on_before_deploy_file / on_file_completed，最后回调 on_completed。
参数模板中的字面量 ${file} 会被替换为文件路径（工作区模式下为附加文件按 separator 拼接后的字符串）。
"""
from __future__ import annotations

import concurrent.futures as _futures
import os
from collections.abc import Sequence
from typing import Any

from app_deploy.config import get_workspace_root
from app_deploy.contracts import (
    DEFAULT_SEPARATOR,
    FILE_PLACEHOLDER,
    DeployFileCompletedEventArguments,
    DeployFileEventArguments,
    DeployFileOptions,
    DeployTargetApp,
    DeployWorkspaceCompletedEventArguments,
    DeployWorkspaceOptions,
)
from app_deploy.helpers import replace_all_strings, to_string_safe
from app_deploy.log import get_logger
from app_deploy.objects import DeployContext, DeployPluginBase

_log = get_logger("plugins.app")


def create_app_args_list(
    file: Any,
    app: str | None,
    args: Sequence[Any] | None,
    root_dir: str | None = None,
) -> list[str]:
    """
    生成传给启动器的 [app, *args]。

    - app 为相对路径时拼接到工作区根目录（root_dir 为 None 时读取 get_workspace_root()）；
    - args 中每一项的 ${file} 全部替换为 file（字面量替换）；
    - 结果去掉空字符串，保持原有顺序。不修改传入的 args。
    """
    file = to_string_safe(file)
    app = to_string_safe(app)
    if app and not os.path.isabs(app):
        app = os.path.join(get_workspace_root() if root_dir is None else root_dir, app)

    substituted = [replace_all_strings(x, FILE_PLACEHOLDER, file) for x in (args or [])]
    return [x for x in [app] + substituted if x]


def _future_error(future: _futures.Future) -> BaseException | None:
    if future.cancelled():
        return _futures.CancelledError()
    return future.exception()


class AppPlugin(DeployPluginBase):
    def deploy_file(
        self,
        file: str,
        target: DeployTargetApp,
        options: DeployFileOptions | None = None,
    ) -> None:
        options = options or DeployFileOptions()
        app = to_string_safe(getattr(target, "app", None))

        def completed(error: BaseException | None = None) -> None:
            if error is not None:
                _log.warning("deploy_file %r failed: %s", file, error)
            else:
                _log.debug("deploy_file %r done", file)
            self._notify(
                options.on_completed,
                DeployFileCompletedEventArguments(file=file, target=target, error=error),
            )

        try:
            self._emit(options.on_before_deploy, DeployFileEventArguments(file=file, target=target))

            app_args = create_app_args_list(
                file, app, getattr(target, "arguments", None), self.context.workspace_root()
            )
            _log.debug("deploy_file %r -> %s", file, app_args)
            future = self.context.launch(file, app_args, wait=True)
        except Exception as e:
            completed(e)
            return

        future.add_done_callback(lambda f: completed(_future_error(f)))

    def deploy_workspace(
        self,
        files: Sequence[str],
        target: DeployTargetApp,
        options: DeployWorkspaceOptions | None = None,
    ) -> None:
        options = options or DeployWorkspaceOptions()
        files = list(files or [])

        def completed(error: BaseException | None = None) -> None:
            if error is not None:
                _log.warning("deploy_workspace (%s files) failed: %s", len(files), error)
            for x in files:
                file_error: BaseException | None = None
                try:
                    self._emit(options.on_before_deploy_file, DeployFileEventArguments(file=x, target=target))
                except Exception as e:
                    _log.warning("on_before_deploy_file %r raised: %s", x, e)
                    file_error = e
                self._notify(
                    options.on_file_completed,
                    DeployFileCompletedEventArguments(file=x, target=target, error=file_error),
                )
            self._notify(options.on_completed, DeployWorkspaceCompletedEventArguments(error=error))

        try:
            if not files:
                raise ValueError("deploy_workspace: no files to deploy")

            app = to_string_safe(getattr(target, "app", None))
            first_file = files[0]
            next_files = files[1:]

            args = list(getattr(target, "arguments", None) or []) + next_files
            args = [x for x in args if x]

            separator = to_string_safe(getattr(target, "separator", None)) or DEFAULT_SEPARATOR
            joined = separator.join(to_string_safe(x) for x in next_files)

            app_args = create_app_args_list(joined, app, args, self.context.workspace_root())
            _log.debug("deploy_workspace %r (+%s) -> %s", first_file, len(next_files), app_args)
            future = self.context.launch(first_file, app_args, wait=False)
        except Exception as e:
            completed(e)
            return

        future.add_done_callback(lambda f: completed(_future_error(f)))


def create_plugin(ctx: DeployContext | None = None) -> AppPlugin:
    """Creates a new app plugin bound to ctx (default context when omitted)."""
    return AppPlugin(ctx)
