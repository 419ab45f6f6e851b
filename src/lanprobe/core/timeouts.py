"""Hard deadlines for probe operations."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProbeTimeoutError(TimeoutError):
    """Raised when a guarded operation misses its deadline."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Operation timed out after {timeout:.2f}s")
        self.timeout = timeout


async def with_timeout(operation: Awaitable[T], timeout: float) -> T:
    """Race ``operation`` against ``timeout`` seconds.

    The first to finish decides the outcome. A late operation is cancelled,
    so anything it owns (a child process, a socket) gets a chance to clean up
    instead of lingering after the caller has moved on.
    """
    try:
        return await asyncio.wait_for(operation, timeout=timeout)
    except (asyncio.TimeoutError, TimeoutError) as exc:
        logger.debug("Deadline of %.2fs exceeded", timeout)
        raise ProbeTimeoutError(timeout) from exc
