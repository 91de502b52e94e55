# -*- coding: utf-8 -*-
"""app_deploy.log – minimal logging for deploy diagnostics (file + stderr).

Usage::
    from app_deploy.log import get_logger
    log = get_logger("plugins.app")
    log.info("deploying %s", path)
    try:
        ...
    except Exception:
        log.exception("launch failed")
"""
from __future__ import annotations

import os
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

_APP_NAME = "AppDeploy"


def _default_log_file() -> str | None:
    """打包后默认写入用户日志目录；开发态只输出到 stderr。"""
    override = os.environ.get("APP_DEPLOY_LOG_FILE", "").strip()
    if override:
        return override
    if not getattr(sys, "frozen", False):
        return None

    if sys.platform == "win32":
        base = (
            os.environ.get("LOCALAPPDATA")
            or os.environ.get("APPDATA")
            or str(Path.home() / "AppData" / "Local")
        )
        log_dir = Path(base) / _APP_NAME / "logs"
    elif sys.platform == "darwin":
        log_dir = Path.home() / "Library" / "Logs" / _APP_NAME
    else:
        log_dir = Path(os.environ.get("XDG_STATE_HOME") or (Path.home() / ".local" / "state")) / _APP_NAME

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        return None
    return str(log_dir / "deploy.log")


LOG_FILE: str | None = _default_log_file()
LOG_LEVEL: str = os.environ.get("APP_DEPLOY_LOG_LEVEL", "INFO").upper()  # DEBUG | INFO | WARNING | ERROR

_LEVEL_ORDER = {"DEBUG": 0, "INFO": 1, "WARNING": 2, "ERROR": 3}
_loggers: dict[str, "_Logger"] = {}


def set_level(level: str) -> None:
    """Change the threshold for every logger at runtime."""
    global LOG_LEVEL
    level = str(level or "").upper()
    if level not in _LEVEL_ORDER:
        raise ValueError(f"unknown log level: {level!r}")
    LOG_LEVEL = level


def _level_ok(level: str) -> bool:
    return _LEVEL_ORDER.get(level.upper(), 0) >= _LEVEL_ORDER.get(LOG_LEVEL.upper(), 0)


def _format(level: str, name: str, msg: str, *args: Any) -> str:
    text = msg % args if args else msg
    return f"{datetime.now().strftime('%Y-%m-%d %H:%M:%S')} {level} app_deploy.{name} {text}"


class _Logger:
    def __init__(self, name: str) -> None:
        self.name = name
        self._file: TextIO | None = None
        if LOG_FILE:
            try:
                self._file = open(LOG_FILE, "a", encoding="utf-8")  # noqa: SIM115
            except OSError:
                pass

    def _write(self, level: str, msg: str, *args: Any, exc_text: str = "") -> None:
        if not _level_ok(level):
            return
        line = _format(level, self.name, msg, *args) + "\n" + exc_text
        if self._file:
            try:
                self._file.write(line)
                self._file.flush()
            except OSError:
                pass
        err = sys.stderr
        if err is None or not hasattr(err, "write"):
            return
        try:
            err.write(line)
            err.flush()
        except OSError:
            pass

    def debug(self, msg: str, *args: Any) -> None:
        self._write("DEBUG", msg, *args)

    def info(self, msg: str, *args: Any) -> None:
        self._write("INFO", msg, *args)

    def warning(self, msg: str, *args: Any) -> None:
        self._write("WARNING", msg, *args)

    def error(self, msg: str, *args: Any) -> None:
        self._write("ERROR", msg, *args)

    def exception(self, msg: str, *args: Any) -> None:
        """ERROR 级别，并附带当前正在处理的异常堆栈。"""
        exc_text = traceback.format_exc() if sys.exc_info()[0] is not None else ""
        self._write("ERROR", msg, *args, exc_text=exc_text)


def get_logger(name: str) -> _Logger:
    """同名 logger 复用同一个实例，避免重复打开日志文件。"""
    logger = _loggers.get(name)
    if logger is None:
        logger = _loggers[name] = _Logger(name)
    return logger


def get_log_file_path() -> str | None:
    return LOG_FILE
