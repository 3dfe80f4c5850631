"""Filtering of log records by level and dispatch to the registered sinks."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from typing import Any

from .common import LogLevel, LogMsg, SourceLocation
from .sinks import LogSink


class LogHandle:
    """Drop records below the current level and hand the rest to every sink."""

    def __init__(self, sinks: LogSink | Iterable[LogSink]) -> None:
        if sinks is None:
            raise ValueError("LogSink cannot be null")
        if isinstance(sinks, LogSink):
            sink_list = [sinks]
        else:
            sink_list = list(sinks)
            if any(sink is None for sink in sink_list):
                raise ValueError("LogSink cannot be null")
        self._sinks: tuple[LogSink, ...] = tuple(sink_list)
        self._level = LogLevel.INFO
        self._lock = threading.Lock()

    @property
    def level(self) -> LogLevel:
        return self._level

    @level.setter
    def level(self, value: LogLevel | int) -> None:
        self._level = LogLevel(value)

    @property
    def sinks(self) -> tuple[LogSink, ...]:
        return self._sinks

    def should_log(self, level: LogLevel | int) -> bool:
        """True when ``level`` passes the filter and there is a sink to write to."""
        return level >= self._level and bool(self._sinks)

    def _dispatch(self, msg: LogMsg) -> None:
        with self._lock:
            for sink in self._sinks:
                sink.log(msg)

    def log(self, level: LogLevel, location: SourceLocation, message: str) -> None:
        """Record ``message`` if its level passes the filter."""
        if not self.should_log(level):
            return
        self._dispatch(LogMsg(LogLevel(level), message, location))


class VariadicLogHandle(LogHandle):
    """A handle that also formats ``str.format`` style templates."""

    def logf(
        self,
        level: LogLevel,
        fmt: str,
        *args: Any,
        location: SourceLocation | None = None,
    ) -> None:
        """Format ``fmt`` with ``args`` and record it; filtered records are not formatted."""
        if not self.should_log(level):
            return
        text = fmt.format(*args)
        self._dispatch(LogMsg(LogLevel(level), text, location or SourceLocation()))