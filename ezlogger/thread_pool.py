"""A fixed-size pool of worker threads fed from one FIFO task queue."""

from __future__ import annotations

import threading
from collections import deque
from concurrent.futures import Future
from typing import Any, Callable

from .timing import internal_log

_NOT_AVAILABLE = "Thread pool not available"


class ThreadPool:
    """Run submitted callables on ``thread_count`` worker threads.

    Tasks are taken from the queue in submission order, so a pool with a
    single thread runs them strictly one after another. On :meth:`stop`,
    workers finish the tasks already queued before they exit.
    """

    def __init__(self, thread_count: int) -> None:
        if isinstance(thread_count, bool) or not isinstance(thread_count, int):
            raise TypeError("thread_count must be an int")
        if thread_count < 0:
            raise ValueError("thread_count must not be negative")
        self._thread_count = thread_count
        self._tasks: deque[Callable[[], None]] = deque()
        self._cond = threading.Condition()
        self._state_lock = threading.Lock()
        self._threads: list[threading.Thread] = []
        self._shutdown = False
        self._available = False

    @property
    def thread_count(self) -> int:
        return self._thread_count

    @property
    def is_running(self) -> bool:
        return self._available

    def start(self) -> bool:
        """Start the workers; return False if the pool was already started."""
        with self._state_lock:
            if self._available:
                return False
            self._available = True
            for index in range(self._thread_count):
                self._add_thread(index)
            return True

    def stop(self) -> None:
        """Signal shutdown, wait for the workers and drop anything left queued."""
        with self._state_lock:
            if not self._available:
                return
            with self._cond:
                self._available = False
                self._shutdown = True
                self._cond.notify_all()
            threads, self._threads = self._threads, []
        current = threading.current_thread()
        for thread in threads:
            if thread is not current:
                thread.join()
        with self._cond:
            self._tasks.clear()

    def submit_task(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        """Queue ``func(*args, **kwargs)``; ignored if the pool is not running."""
        if self._shutdown or not self._available:
            return
        with self._cond:
            if self._shutdown or not self._available:
                raise RuntimeError(_NOT_AVAILABLE)
            self._tasks.append(lambda: self._run_quietly(func, args, kwargs))
            self._cond.notify()

    def submit_ret_task(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Queue ``func(*args, **kwargs)`` and return a future for its result.

        If the pool is not running, the returned future already holds a
        RuntimeError.
        """
        future: Future = Future()
        if self._shutdown or not self._available:
            future.set_exception(RuntimeError(_NOT_AVAILABLE))
            return future

        def task() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                future.set_exception(exc)
            else:
                future.set_result(result)

        with self._cond:
            self._tasks.append(task)
            self._cond.notify()
        return future

    def __enter__(self) -> "ThreadPool":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.stop()
        return False

    @staticmethod
    def _run_quietly(func: Callable[..., Any], args: tuple, kwargs: dict) -> None:
        try:
            func(*args, **kwargs)
        except Exception as exc:  # a failing task must not end its worker
            internal_log("ERROR", f"thread pool task raised {exc!r}")

    def _add_thread(self, index: int) -> None:
        thread = threading.Thread(
            target=self._worker, name=f"ThreadPool-worker-{index}", daemon=True
        )
        self._threads.append(thread)
        thread.start()

    def _worker(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._shutdown or bool(self._tasks))
                if not self._tasks:
                    break
                task = self._tasks.popleft()
            task()