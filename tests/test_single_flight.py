"""Tests du registre single-flight."""

from __future__ import annotations

import asyncio

import pytest

from insight_core.domain.single_flight import SingleFlight

CONCURRENT_CALLERS = 5


@pytest.mark.asyncio
async def test_concurrent_calls_share_one_execution() -> None:
    flights: SingleFlight[str, int] = SingleFlight()
    started = 0
    joins = 0

    async def work() -> int:
        nonlocal started
        started += 1
        await asyncio.sleep(0.01)
        return 42

    def on_join() -> None:
        nonlocal joins
        joins += 1

    results = await asyncio.gather(
        *(flights.run("k", work, on_join=on_join) for _ in range(CONCURRENT_CALLERS))
    )

    assert results == [42] * CONCURRENT_CALLERS
    assert started == 1
    assert joins == CONCURRENT_CALLERS - 1
    await asyncio.sleep(0)
    assert len(flights) == 0


@pytest.mark.asyncio
async def test_distinct_keys_run_independently() -> None:
    flights: SingleFlight[str, str] = SingleFlight()

    async def work(value: str) -> str:
        await asyncio.sleep(0.01)
        return value

    a, b = await asyncio.gather(
        flights.run("a", lambda: work("A")), flights.run("b", lambda: work("B"))
    )

    assert (a, b) == ("A", "B")


@pytest.mark.asyncio
async def test_caller_cancellation_does_not_cancel_execution() -> None:
    """Un appelant qui abandonne n'interrompt pas la tâche partagée."""
    flights: SingleFlight[str, str] = SingleFlight()
    finished = asyncio.Event()

    async def work() -> str:
        await asyncio.sleep(0.02)
        finished.set()
        return "done"

    caller = asyncio.create_task(flights.run("k", work))
    await asyncio.sleep(0.005)
    caller.cancel()
    with pytest.raises(asyncio.CancelledError):
        await caller

    await asyncio.wait_for(finished.wait(), timeout=1)
    assert finished.is_set()


@pytest.mark.asyncio
async def test_failure_is_shared_and_entry_released() -> None:
    flights: SingleFlight[str, str] = SingleFlight()
    calls = 0

    async def boom() -> str:
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.01)
        raise RuntimeError("boom")

    results = await asyncio.gather(
        flights.run("k", boom), flights.run("k", boom), return_exceptions=True
    )

    assert calls == 1
    assert all(isinstance(r, RuntimeError) for r in results)
    await asyncio.sleep(0)
    assert not flights.in_flight("k")
