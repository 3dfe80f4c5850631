"""Core log record types: levels, source locations and messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity of a log record; a larger value is more severe."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5
    OFF = 6


def _base_name(path: str) -> str:
    """Strip the directory part of a Unix or Windows path."""
    pos = path.rfind("/")
    if pos != -1:
        return path[pos + 1:]
    pos = path.rfind("\\")
    if pos != -1:
        return path[pos + 1:]
    return path


@dataclass(frozen=True)
class SourceLocation:
    """Where a log call was made: file name, line number and function."""

    file_name: str = ""
    line: int = 0
    func_name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "file_name", _base_name(self.file_name))


@dataclass(frozen=True)
class LogMsg:
    """The smallest unit of logging: level, message text and source location."""

    level: LogLevel
    message: str
    location: SourceLocation = field(default_factory=SourceLocation)