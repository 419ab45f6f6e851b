from __future__ import annotations

import asyncio
import time

import pytest

from lanprobe.core.timeouts import ProbeTimeoutError, with_timeout


def test_with_timeout_returns_result_when_fast():
    async def _fast() -> str:
        await asyncio.sleep(0)
        return "done"

    assert asyncio.run(with_timeout(_fast(), 1.0)) == "done"


def test_with_timeout_fails_within_deadline_for_hung_operation():
    async def _hang() -> None:
        await asyncio.Event().wait()

    start = time.perf_counter()
    with pytest.raises(ProbeTimeoutError) as excinfo:
        asyncio.run(with_timeout(_hang(), 0.05))

    assert time.perf_counter() - start < 1.0
    assert excinfo.value.timeout == 0.05
    assert isinstance(excinfo.value, TimeoutError)


def test_with_timeout_cancels_the_late_operation():
    cancelled = []

    async def _slow() -> None:
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise

    async def _run() -> None:
        with pytest.raises(ProbeTimeoutError):
            await with_timeout(_slow(), 0.01)

    asyncio.run(_run())
    assert cancelled == [True]


def test_with_timeout_propagates_operation_errors():
    async def _boom() -> None:
        raise ValueError("bad output")

    with pytest.raises(ValueError, match="bad output"):
        asyncio.run(with_timeout(_boom(), 1.0))
