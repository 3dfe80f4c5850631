"""Destinations that log records are written to."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from .common import LogMsg
from .formatter import DefaultFormatter, Formatter


class LogSink(ABC):
    """Interface of every log destination."""

    @abstractmethod
    def log(self, msg: LogMsg) -> None:
        """Write one record."""

    @abstractmethod
    def set_formatter(self, formatter: Formatter) -> None:
        """Replace the formatter used for later records."""

    def flush(self) -> None:
        """Push buffered output to its destination; nothing by default."""


class ConsoleSink(LogSink):
    """Write each formatted record as one line to a text stream.

    With no stream given, the process's current standard output is used.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._formatter: Formatter = DefaultFormatter()

    @property
    def formatter(self) -> Formatter:
        return self._formatter

    def _out(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def log(self, msg: LogMsg) -> None:
        try:
            text = self._formatter.format(msg)
            out = self._out()
            out.write(text)
            out.write("\n")
            out.flush()
        except Exception as exc:  # one bad record must not stop logging
            print(f"ConsoleSink format error: {exc}", file=sys.stderr, flush=True)

    def set_formatter(self, formatter: Formatter) -> None:
        if formatter is None:
            raise ValueError("Formatter cannot be null")
        if not isinstance(formatter, Formatter):
            raise TypeError("formatter must be a Formatter")
        self._formatter = formatter

    def flush(self) -> None:
        self._out().flush()