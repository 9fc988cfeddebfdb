"""FIFO admission queue bounding concurrent upstream requests."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RequestQueue:
    """Runs at most ``concurrency`` tasks at once, starting the rest in submission order.

    A task is a zero-argument callable returning an awaitable. The queue keeps
    only a running counter and a deque of waiters; both are touched solely from
    the event loop thread at admission and completion, so no lock is needed.
    """

    def __init__(self, concurrency: int = 5) -> None:
        """Initialize the queue.

        Args:
            concurrency: Maximum number of tasks executing at any instant (>= 1)

        Raises:
            ValueError: If concurrency is less than 1
        """
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        self._concurrency = concurrency
        self._running = 0
        self._waiting: deque[tuple[Callable[[], Awaitable[Any]], asyncio.Future[Any]]] = deque()
        # Strong references to in-flight asyncio tasks
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def concurrency(self) -> int:
        return self._concurrency

    @property
    def running(self) -> int:
        """Number of tasks currently executing."""
        return self._running

    @property
    def pending(self) -> int:
        """Number of tasks waiting for a free slot."""
        return len(self._waiting)

    def submit(self, task: Callable[[], Awaitable[T]]) -> asyncio.Future[T]:
        """Queue a task and return a future settling with its result.

        The task's result or exception is passed through unchanged. Must be
        called from a running event loop.

        Args:
            task: Zero-argument callable returning an awaitable

        Returns:
            Future resolved with the task's outcome
        """
        future: asyncio.Future[T] = asyncio.get_running_loop().create_future()
        self._waiting.append((task, future))
        if self._running >= self._concurrency:
            logger.debug(f"Queue full ({self._running}/{self._concurrency}), {len(self._waiting)} waiting")
        self._start_next()
        return future

    def _start_next(self) -> None:
        while self._running < self._concurrency and self._waiting:
            task, future = self._waiting.popleft()
            self._running += 1
            runner = asyncio.ensure_future(self._run(task, future))
            self._tasks.add(runner)
            runner.add_done_callback(self._tasks.discard)

    async def _run(self, task: Callable[[], Awaitable[Any]], future: asyncio.Future[Any]) -> None:
        try:
            result = await task()
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as e:
            if not future.done():
                future.set_exception(e)
        else:
            if not future.done():
                future.set_result(result)
        finally:
            self._running -= 1
            self._start_next()
