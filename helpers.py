# -*- coding: utf-8 -*-
"""String helpers shared by targets, config and plugins (no GUI deps)."""
from __future__ import annotations

import os
from typing import Any


def to_string_safe(value: Any, default: str = "") -> str:
    """把任意值转成字符串；None 或转换失败时返回 default。"""
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    try:
        return str(value)
    except Exception:
        return default


def replace_all_strings(text: Any, search: Any, replacement: Any) -> str:
    """Literal replace of every occurrence (no regex)."""
    text = to_string_safe(text)
    search = to_string_safe(search)
    if not search:
        return text
    return text.replace(search, to_string_safe(replacement))


def normalize_string_list(values: Any) -> list[str] | None:
    """配置中的参数列表：None 保持 None，单个字符串视为一项，其余逐项转字符串。"""
    if values is None:
        return None
    if isinstance(values, (str, bytes)):
        values = [values]
    try:
        items = list(values)
    except TypeError:
        items = [values]
    return [to_string_safe(item) for item in items]
