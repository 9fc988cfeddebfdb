"""Tests for the FIFO request queue."""

from __future__ import annotations

import asyncio

import pytest

from webscraping_ai_mcp.queue import RequestQueue


class TestRequestQueue:
    """Tests for RequestQueue admission control."""

    def test_rejects_zero_concurrency(self) -> None:
        with pytest.raises(ValueError):
            RequestQueue(0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("concurrency,total", [(1, 5), (2, 7), (3, 12)])
    async def test_never_exceeds_concurrency(self, concurrency: int, total: int) -> None:
        """At most `concurrency` tasks run at any instant."""
        queue = RequestQueue(concurrency)
        active = 0
        peak = 0

        async def work(i: int) -> int:
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            assert queue.running <= concurrency
            await asyncio.sleep(0.01 * (i % 3 + 1))
            active -= 1
            return i

        results = await asyncio.gather(*(queue.submit(lambda i=i: work(i)) for i in range(total)))

        assert results == list(range(total))
        assert peak == concurrency
        assert queue.running == 0
        assert queue.pending == 0

    @pytest.mark.asyncio
    async def test_starts_in_submission_order(self) -> None:
        """Waiting tasks are admitted first-in, first-out."""
        queue = RequestQueue(1)
        started: list[int] = []

        async def work(i: int) -> None:
            started.append(i)
            await asyncio.sleep(0)

        await asyncio.gather(*(queue.submit(lambda i=i: work(i)) for i in range(6)))

        assert started == [0, 1, 2, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_completion_order_unconstrained(self) -> None:
        """A later task may finish before an earlier one."""
        queue = RequestQueue(2)
        finished: list[str] = []

        async def work(name: str, delay: float) -> None:
            await asyncio.sleep(delay)
            finished.append(name)

        await asyncio.gather(
            queue.submit(lambda: work("slow", 0.05)),
            queue.submit(lambda: work("fast", 0.0)),
        )

        assert finished == ["fast", "slow"]

    @pytest.mark.asyncio
    async def test_result_passes_through(self) -> None:
        queue = RequestQueue(1)

        async def work() -> dict[str, int]:
            return {"answer": 42}

        assert await queue.submit(work) == {"answer": 42}

    @pytest.mark.asyncio
    async def test_exception_passes_through_and_frees_slot(self) -> None:
        """A failing task propagates its own exception and releases its slot."""
        queue = RequestQueue(1)

        async def boom() -> None:
            raise RuntimeError("upstream exploded")

        async def ok() -> str:
            return "ok"

        failing = queue.submit(boom)
        following = queue.submit(ok)

        with pytest.raises(RuntimeError, match="upstream exploded"):
            await failing
        assert await following == "ok"
        assert queue.running == 0

    @pytest.mark.asyncio
    async def test_pending_counts_waiters(self) -> None:
        queue = RequestQueue(1)
        release = asyncio.Event()

        async def blocked() -> None:
            await release.wait()

        futures = [queue.submit(blocked) for _ in range(3)]
        await asyncio.sleep(0)

        assert queue.running == 1
        assert queue.pending == 2

        release.set()
        await asyncio.gather(*futures)

        assert queue.running == 0
        assert queue.pending == 0

    @pytest.mark.asyncio
    async def test_all_tasks_settle(self) -> None:
        """Every submitted task eventually runs, including after failures."""
        queue = RequestQueue(2)

        async def work(i: int) -> int:
            await asyncio.sleep(0)
            if i % 4 == 0:
                raise ValueError(i)
            return i

        results = await asyncio.gather(
            *(queue.submit(lambda i=i: work(i)) for i in range(20)),
            return_exceptions=True,
        )

        assert len(results) == 20
        assert sum(isinstance(r, ValueError) for r in results) == 5
        assert [r for r in results if not isinstance(r, Exception)] == [i for i in range(20) if i % 4]
