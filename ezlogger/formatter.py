"""Formatters turn a log record into the text a sink writes out."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod

from .common import LogMsg
from .sysutil import get_process_id, get_thread_id, local_time

# One character per level, indexed by the level's value.
_LEVEL_CHARS = "TDIWEFO"
_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class Formatter(ABC):
    """Interface of every formatter."""

    @abstractmethod
    def format(self, msg: LogMsg) -> str:
        """Return the formatted text of ``msg``."""


class DefaultFormatter(Formatter):
    """Human-readable one-line format.

    ``[YYYY-mm-dd HH:MM:SS] [L] [file:line] [pid:tid] message``
    """

    def format(self, msg: LogMsg) -> str:
        stamp = time.strftime(_TIME_FORMAT, local_time())
        level_char = _LEVEL_CHARS[int(msg.level)]
        location = msg.location
        return (
            f"[{stamp}] [{level_char}] [{location.file_name}:{location.line}] "
            f"[{get_process_id()}:{get_thread_id()}] {msg.message}"
        )