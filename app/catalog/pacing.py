"""
Pacing helper for remote fetches.

Fast responses make a loading indicator flicker.  ``with_minimum_duration``
holds back the result of an awaitable until a minimum amount of wall-clock
time has passed since it was started.  The operation itself is never
delayed, shortened or cancelled; only its resolution is.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MINIMUM_MS = 3000


async def with_minimum_duration(
    operation: Awaitable[T],
    minimum_ms: int = DEFAULT_MINIMUM_MS,
    *,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Await ``operation`` and return its result no earlier than ``minimum_ms``.

    Parameters
    ----------
    operation : Awaitable[T]
        The coroutine to run.  It is awaited exactly once.
    minimum_ms : int
        Floor for the total elapsed time, in milliseconds.  When the
        operation already took longer, no extra delay is added.
    clock, sleep
        Time source (seconds) and sleep coroutine.  Tests swap these for
        a fake clock.

    Returns
    -------
    T
        Whatever the operation returned.  If it raised an ``Exception``,
        that is re-raised once the floor has been reached as well;
        cancellation and interrupts are not held back.
    """
    started = clock()

    async def hold():
        elapsed_ms = (clock() - started) * 1000
        remaining_ms = max(0.0, minimum_ms - elapsed_ms)
        if remaining_ms > 0:
            logger.debug("Holding result for %.0f ms", remaining_ms)
            await sleep(remaining_ms / 1000)

    # Cancellation and interrupts propagate at once, unpaced
    try:
        result = await operation
    except Exception:
        await hold()
        raise
    await hold()
    return result
