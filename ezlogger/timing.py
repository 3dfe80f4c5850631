"""Diagnostic logging of the library itself and a block timer."""

from __future__ import annotations

import inspect
import os
import time
from datetime import datetime, timezone

ENABLE_ENV = "EZLOGGER_ENABLE_LOG"
_LEVELS = frozenset({"INFO", "DEBUG", "WARN", "ERROR"})


def _enabled() -> bool:
    return os.environ.get(ENABLE_ENV, "").strip().lower() in {"1", "true", "yes", "on"}


def internal_log(level: str, message: str) -> str | None:
    """Print a diagnostic line when enabled by the environment.

    Returns the printed line, or None when diagnostics are switched off.
    """
    name = str(level).upper()
    if name not in _LEVELS:
        raise ValueError(f"unknown internal log level: {level!r}")
    if not _enabled():
        return None
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    if caller is not None:
        file_name, line = caller.f_code.co_filename, caller.f_lineno
    else:
        file_name, line = "?", 0
    del frame, caller
    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S.%f")
    text = f"[{name}] [{file_name} : {line}] {stamp} {message}"
    print(text, flush=True)
    return text


class TimeCount:
    """Measure the run time of a ``with`` block in microseconds."""

    def __init__(self, info: str) -> None:
        self.info = info
        self.elapsed_us: int | None = None
        self._start = time.perf_counter_ns()

    def __enter__(self) -> "TimeCount":
        self._start = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.elapsed_us = (time.perf_counter_ns() - self._start) // 1000
        internal_log("INFO", f"{self.info} took {self.elapsed_us} microseconds")
        return False