"""Run a callable when a block is left, however it is left."""

from __future__ import annotations

from typing import Any, Callable


class ExecuteOnScopeExit:
    """Context manager that calls ``func(*args, **kwargs)`` on exit unless cancelled."""

    def __init__(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        if not callable(func):
            raise TypeError("func must be callable")
        self._func = func
        self._args = args
        self._kwargs = kwargs
        self._armed = True

    def __enter__(self) -> "ExecuteOnScopeExit":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._armed:
            self._armed = False
            self._func(*self._args, **self._kwargs)
        return False

    def cancel(self) -> None:
        """Disarm: the callable will not run on exit."""
        self._armed = False