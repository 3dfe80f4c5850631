"""Task runners, delayed and repeated tasks on serial per-tag queues.

Every task runner is a single-threaded pool, so the tasks posted to one
runner run one after another in the order they were posted. Delayed and
repeated tasks are kept by a timer thread and, when due, are handed to
their runner.
"""

from __future__ import annotations

import heapq
import itertools
import threading
import time
from concurrent.futures import Future
from datetime import timedelta
from functools import partial
from typing import Any, Callable, Union

from .thread_pool import ThreadPool
from .timing import internal_log

Task = Callable[[], Any]
Delta = Union[timedelta, int, float]


def _seconds(delta: Delta) -> float:
    """Turn a timedelta or a number of seconds into seconds."""
    if isinstance(delta, timedelta):
        return delta.total_seconds()
    if isinstance(delta, bool) or not isinstance(delta, (int, float)):
        raise TypeError("delta must be a timedelta or a number of seconds")
    return float(delta)


class _RunnerRegistry:
    """Map runner tags to started single-threaded pools."""

    def __init__(self) -> None:
        self._runners: dict[int, ThreadPool] = {}
        self._lock = threading.Lock()
        self._next_tag = itertools.count(1)

    def add(self, tag: int) -> int:
        with self._lock:
            latest = tag
            while latest in self._runners:
                latest = next(self._next_tag)
            runner = ThreadPool(1)
            runner.start()
            self._runners[latest] = runner
            return latest

    def get(self, tag: int) -> ThreadPool:
        with self._lock:
            try:
                return self._runners[tag]
            except KeyError:
                raise KeyError(f"no task runner with tag {tag}") from None

    def close(self) -> None:
        with self._lock:
            runners, self._runners = list(self._runners.values()), {}
        for runner in runners:
            runner.stop()


class _Timer:
    """Run tasks at given points in time on one background thread."""

    def __init__(self) -> None:
        self._queue: list[tuple[float, int, Task]] = []
        self._seq = itertools.count()
        self._cond = threading.Condition()
        self._running = False
        self._pool: ThreadPool | None = None
        self._repeated_ids = itertools.count()
        self._active: set[int] = set()
        self._active_lock = threading.Lock()

    def start(self) -> bool:
        with self._cond:
            if self._running:
                return True
            self._running = True
            if self._pool is None:
                self._pool = ThreadPool(1)
            pool = self._pool
        started = pool.start()
        pool.submit_task(self._run)
        return started

    def stop(self) -> None:
        with self._cond:
            self._running = False
            self._cond.notify_all()
            pool, self._pool = self._pool, None
        if pool is not None:
            pool.stop()

    def _push(self, when: float, task: Task) -> None:
        with self._cond:
            heapq.heappush(self._queue, (when, next(self._seq), task))
            self._cond.notify()

    def _run(self) -> None:
        while True:
            with self._cond:
                if not self._running:
                    return
                if not self._queue:
                    self._cond.wait()
                    continue
                when, _, task = self._queue[0]
                remaining = when - time.monotonic()
                if remaining > 0:
                    self._cond.wait(remaining)
                    continue
                heapq.heappop(self._queue)
            try:
                task()
            except Exception as exc:  # a failing task must not stop the timer
                internal_log("ERROR", f"timer task raised {exc!r}")

    def post_delayed_task(self, task: Task, delta: float) -> None:
        self._push(time.monotonic() + delta, task)

    def post_repeated_task(self, task: Task, delta: float, repeat_num: int) -> int:
        task_id = next(self._repeated_ids)
        with self._active_lock:
            self._active.add(task_id)
        self._post_repeated(task, delta, task_id, repeat_num)
        return task_id

    def cancel_repeated_task(self, task_id: int) -> None:
        with self._active_lock:
            self._active.discard(task_id)

    def _post_repeated(self, task: Task, delta: float, task_id: int, repeat_num: int) -> None:
        with self._active_lock:
            active = task_id in self._active
        if not active or repeat_num == 0:
            with self._active_lock:
                self._active.discard(task_id)
            return
        task()
        self._push(
            time.monotonic() + delta,
            partial(self._post_repeated, task, delta, task_id, repeat_num - 1),
        )


class Executor:
    """Post immediate, delayed, repeated and result-returning tasks to tagged runners."""

    def __init__(self) -> None:
        self._runners = _RunnerRegistry()
        self._timer = _Timer()

    def add_task_runner(self, tag: int) -> int:
        """Create a runner under ``tag``; if taken, under a fresh tag. Return the tag used."""
        if isinstance(tag, bool) or not isinstance(tag, int):
            raise TypeError("tag must be an int")
        return self._runners.add(tag)

    def post_task(self, runner_tag: int, task: Task) -> None:
        """Queue ``task`` on the runner ``runner_tag``."""
        self._runners.get(runner_tag).submit_task(task)

    def post_delayed_task(self, runner_tag: int, task: Task, delta: Delta) -> None:
        """Queue ``task`` on the runner once ``delta`` has passed."""
        seconds = _seconds(delta)
        self._runners.get(runner_tag)
        self._timer.start()
        self._timer.post_delayed_task(partial(self.post_task, runner_tag, task), seconds)

    def post_repeated_task(
        self, runner_tag: int, task: Task, delta: Delta, repeat_num: int
    ) -> int:
        """Queue ``task`` now and then every ``delta``, ``repeat_num`` times in all.

        Return an id that :meth:`cancel_repeated_task` accepts.
        """
        seconds = _seconds(delta)
        if isinstance(repeat_num, bool) or not isinstance(repeat_num, int):
            raise TypeError("repeat_num must be an int")
        if repeat_num < 0:
            raise ValueError("repeat_num must not be negative")
        self._runners.get(runner_tag)
        self._timer.start()
        return self._timer.post_repeated_task(
            partial(self.post_task, runner_tag, task), seconds, repeat_num
        )

    def post_task_and_get_result(
        self, runner_tag: int, func: Callable[..., Any], *args: Any, **kwargs: Any
    ) -> Future:
        """Queue ``func(*args, **kwargs)`` and return a future for its result."""
        future: Future = Future()

        def task() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                future.set_exception(exc)
            else:
                future.set_result(result)

        self.post_task(runner_tag, task)
        return future

    def cancel_repeated_task(self, task_id: int) -> None:
        """Stop further runs of a repeated task."""
        self._timer.cancel_repeated_task(task_id)

    def close(self) -> None:
        """Stop the timer and every runner; queued runner tasks finish first."""
        self._timer.stop()
        self._runners.close()