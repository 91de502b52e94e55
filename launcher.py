# -*- coding: utf-8 -*-
"""
启动外部应用打开文件：部署插件唯一的异步边界。

launch_application(target, app=[program, *args], wait=...) 返回 Future：
- wait=True：进程退出后完成，退出码非 0 时以 LaunchError 失败；
- wait=False：进程启动成功即完成，不跟踪退出。
app 为空时交给系统默认程序（macOS open / Windows start / 其它 xdg-open）。
跨平台：Windows 分离启动沿用 Qt 的 QProcess.startDetached，正确传递带空格的路径。
"""
from __future__ import annotations

import concurrent.futures as _futures
import subprocess
import sys
import threading
from collections.abc import Sequence
from typing import Any, Callable

from app_deploy.helpers import to_string_safe
from app_deploy.log import get_logger

if sys.platform == "win32":
    try:
        from PySide6.QtCore import QProcess
    except ImportError:
        try:
            from PyQt6.QtCore import QProcess
        except ImportError:
            from PyQt5.QtCore import QProcess
    _QProcess = QProcess
else:
    _QProcess = None

_log = get_logger("launcher")


class LaunchError(RuntimeError):
    """外部应用启动失败或（等待模式下）以非 0 退出码结束。"""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


def split_app_vector(app: Sequence[str] | str | None) -> tuple[str, list[str]]:
    """[program, *args] -> (program, args)；单个字符串视为只有程序名。"""
    if app is None:
        return "", []
    if isinstance(app, str):
        return app, []
    items = [to_string_safe(x) for x in app]
    if not items:
        return "", []
    return items[0], items[1:]


def _quote_windows_target(target: str) -> str:
    quoted = subprocess.list2cmdline([target])
    # 引号内的 & 由 cmd 原样传递，只有未加引号时才需要转义
    if quoted.startswith('"'):
        return quoted
    return quoted.replace("&", "^&")


def build_command(
    target: str,
    program: str = "",
    app_args: Sequence[str] = (),
    wait: bool = False,
    platform: str | None = None,
) -> list[str] | str:
    """
    按平台拼出实际执行的命令（不启动进程）。

    Windows 返回整行字符串：start 的空标题 "" 必须原样出现在命令行里，
    交给 list2cmdline 会被转义成 \\"\\"，带引号的目标路径就会被 start 当成窗口标题。
    """
    platform = platform or sys.platform
    app_args = list(app_args)
    if platform == "darwin":
        cmd = ["open"]
        if wait:
            cmd.append("-W")
        if program:
            cmd += ["-a", program]
        cmd.append(target)
        if app_args:
            cmd += ["--args"] + app_args
        return cmd
    if platform == "win32":
        rest: list[str] = []
        if wait:
            rest.append("/wait")
        if program:
            rest.append(program)
        rest += app_args
        line = 'cmd /c start ""'
        if rest:
            line += " " + subprocess.list2cmdline(rest)
        return line + " " + _quote_windows_target(target)
    return [program or "xdg-open"] + app_args + [target]


def _run(command: list[str] | str, wait: bool) -> int | None:
    if not wait:
        subprocess.Popen(
            command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=sys.platform != "win32",
        )
        _log.debug("launched detached: %s", command)
        return None
    proc = subprocess.Popen(command)
    returncode = proc.wait()
    _log.debug("process exited code=%s: %s", returncode, command)
    if returncode > 0:
        raise LaunchError(f"Exited with code {returncode}", returncode=returncode)
    return returncode


def _start_detached_qt(program: str, args: list[str]) -> None:
    result = _QProcess.startDetached(program, args)
    # PyQt6 返回 (ok, pid)，PyQt5 / PySide6 的部分重载只返回 bool
    ok = result[0] if isinstance(result, tuple) else bool(result)
    if not ok:
        raise LaunchError(f"QProcess.startDetached failed: {program}")


def _settle(future: _futures.Future, fn: Callable[..., Any], *args: Any) -> None:
    if not future.set_running_or_notify_cancel():
        return
    try:
        result = fn(*args)
    except BaseException as exc:
        future.set_exception(exc)
    else:
        future.set_result(result)


def launch_application(
    target: str,
    app: Sequence[str] | str | None = None,
    wait: bool = False,
) -> _futures.Future:
    """
    用外部应用打开 target。

    - wait=False：在调用线程里直接启动，返回时 Future 已经完成（启动确认或启动失败）；
    - wait=True：每次启动使用独立的后台线程等待进程退出，互不阻塞。

    Args:
        target: 要打开的文件（工作区模式下为主文件）。
        app: [程序路径, 参数...]；为空则使用系统默认程序。
        wait: True 时等待进程退出。

    Returns:
        concurrent.futures.Future，成功时结果为退出码（wait=False 时为 None）。
    """
    target = to_string_safe(target)
    program, app_args = split_app_vector(app)
    future: _futures.Future = _futures.Future()
    if sys.platform == "win32" and _QProcess is not None and program and not wait:
        _log.info("launch (QProcess) %s %s", program, app_args + [target])
        _settle(future, _start_detached_qt, program, app_args + [target])
        return future
    command = build_command(target, program, app_args, wait=wait)
    _log.info("launch wait=%s %s", wait, command)
    if not wait:
        _settle(future, _run, command, False)
        return future
    threading.Thread(
        target=_settle,
        args=(future, _run, command, True),
        name="launch-wait",
        daemon=True,
    ).start()
    return future
