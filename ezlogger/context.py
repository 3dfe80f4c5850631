"""Process-wide executor and shorthand functions for posting tasks."""

from __future__ import annotations

import threading
from typing import Any

from .executor import Delta, Executor, Task


class Context:
    """Owns the executor shared by the whole process.

    Use :meth:`get_instance` for the shared context.
    """

    _instance: "Context | None" = None
    _instance_lock = threading.Lock()

    def __init__(self) -> None:
        self._executor = Executor()

    @staticmethod
    def get_instance() -> "Context":
        """Return the process-wide context, creating it on first use."""
        with Context._instance_lock:
            if Context._instance is None:
                Context._instance = Context()
            return Context._instance

    def executor(self) -> Executor:
        """Return the executor used for task scheduling."""
        return self._executor

    def new_task_runner(self, tag: int) -> int:
        """Create a task runner and return the tag it was given."""
        return self._executor.add_task_runner(tag)


def _executor() -> Executor:
    return Context.get_instance().executor()


def new_task_runner(tag: int) -> int:
    """Create a runner in the shared context and return its tag."""
    return Context.get_instance().new_task_runner(tag)


def post_task(runner_tag: int, task: Task) -> None:
    """Queue ``task`` on a runner of the shared context."""
    _executor().post_task(runner_tag, task)


def wait_task_idle(runner_tag: int) -> None:
    """Block until every task queued so far on the runner has run."""
    _executor().post_task_and_get_result(runner_tag, lambda: None).result()


def post_repeated_task(runner_tag: int, task: Task, delta: Delta, repeat_num: int) -> Any:
    """Queue ``task`` now and every ``delta`` after, ``repeat_num`` times; return its id."""
    return _executor().post_repeated_task(runner_tag, task, delta, repeat_num)