from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Success(Generic[T, R]):
    item: T
    value: R

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure(Generic[T]):
    item: T
    error: Exception

    @property
    def ok(self) -> bool:
        return False


Outcome = Union[Success[T, R], Failure[T]]


class ItemState(str, Enum):
    PENDING = "pending"
    IN_FLIGHT = "in_flight"
    SETTLED = "settled"


class BatchRunner(Generic[T, R]):
    """Run ``process`` over items in fixed-size windows.

    Items are dispatched in consecutive chunks of ``ceiling``. A chunk starts
    only once every item of the previous chunk has settled, so at most
    ``ceiling`` calls are ever in flight. Exceptions raised by ``process``
    settle the item as a Failure instead of aborting the chunk.
    """

    def __init__(self, process: Callable[[T], Awaitable[R]], ceiling: int) -> None:
        if ceiling < 1:
            raise ValueError(f"Concurrency ceiling must be at least 1, got {ceiling}")
        self._process = process
        self.ceiling = ceiling
        self.states: list[ItemState] = []
        self.in_flight = 0
        self.peak_in_flight = 0

    async def _settle(self, index: int, item: T) -> Outcome[T, R]:
        self.states[index] = ItemState.IN_FLIGHT
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            value = await self._process(item)
        except Exception as exc:
            logger.debug("Item %r failed: %s", item, exc)
            return Failure(item, exc)
        finally:
            self.in_flight -= 1
            self.states[index] = ItemState.SETTLED
        return Success(item, value)

    async def run(self, items: Sequence[T]) -> list[Outcome[T, R]]:
        self.states = [ItemState.PENDING] * len(items)
        self.in_flight = 0
        self.peak_in_flight = 0

        outcomes: list[Outcome[T, R]] = []
        chunk_count = (len(items) + self.ceiling - 1) // self.ceiling
        for chunk_index, start in enumerate(range(0, len(items), self.ceiling)):
            chunk = items[start : start + self.ceiling]
            logger.debug(
                "Dispatching chunk %d/%d (%d items)",
                chunk_index + 1,
                chunk_count,
                len(chunk),
            )
            settled = await asyncio.gather(
                *(self._settle(start + offset, item) for offset, item in enumerate(chunk))
            )
            outcomes.extend(settled)
        return outcomes


async def run_in_batches(
    items: Sequence[T], process: Callable[[T], Awaitable[R]], batch_size: int
) -> list[Outcome[T, R]]:
    return await BatchRunner(process, batch_size).run(items)
