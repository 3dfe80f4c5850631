"""Logging with level filtering, pluggable sinks and formatters, plus task-runner, mmap, byte-size and crypto helpers."""

__version__ = "0.1.0"