"""Process-wide log handle and level-named logging functions."""

from __future__ import annotations

import inspect
import threading
from typing import Any

from .common import LogLevel, SourceLocation
from .handle import VariadicLogHandle

# Records below this level are dropped before reaching any handle.
ACTIVE_LEVEL = LogLevel.TRACE

_lock = threading.Lock()
_handle: VariadicLogHandle | None = None


def init_logger(handle: VariadicLogHandle | None) -> None:
    """Install ``handle`` as the process-wide log handle (None removes it)."""
    global _handle
    with _lock:
        _handle = handle


def get_log_handle() -> VariadicLogHandle | None:
    """Return the process-wide log handle, or None if none is installed."""
    with _lock:
        return _handle


def _caller_location(depth: int) -> SourceLocation:
    frame = inspect.currentframe()
    try:
        target = frame
        for _ in range(depth + 1):
            if target is None:
                break
            target = target.f_back
        if target is None:
            return SourceLocation()
        code = target.f_code
        return SourceLocation(code.co_filename, target.f_lineno, code.co_name)
    finally:
        del frame


def _emit(handle, level: LogLevel, fmt: str, args: tuple, depth: int) -> None:
    if level < ACTIVE_LEVEL or not handle:
        return
    handle.logf(level, fmt, *args, location=_caller_location(depth + 1))


def log_with(handle: VariadicLogHandle | None, level: LogLevel, fmt: str, *args: Any) -> None:
    """Log through ``handle``, tagging the record with the caller's location."""
    _emit(handle, LogLevel(level), fmt, args, 1)


def trace(fmt: str, *args: Any) -> None:
    _emit(get_log_handle(), LogLevel.TRACE, fmt, args, 1)


def debug(fmt: str, *args: Any) -> None:
    _emit(get_log_handle(), LogLevel.DEBUG, fmt, args, 1)


def info(fmt: str, *args: Any) -> None:
    _emit(get_log_handle(), LogLevel.INFO, fmt, args, 1)


def warn(fmt: str, *args: Any) -> None:
    _emit(get_log_handle(), LogLevel.WARN, fmt, args, 1)


def error(fmt: str, *args: Any) -> None:
    _emit(get_log_handle(), LogLevel.ERROR, fmt, args, 1)


def critical(fmt: str, *args: Any) -> None:
    _emit(get_log_handle(), LogLevel.FATAL, fmt, args, 1)