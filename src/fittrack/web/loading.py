"""Request-scoped page loading.

A page's fetches run as a task tied to the request. If the browser goes
away before the fetches finish, the task is cancelled and nothing is
rendered.
"""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable
from typing import Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Non-standard status used when the client closed the connection first
CLIENT_CLOSED_REQUEST = 499


class Disconnectable(Protocol):
    async def is_disconnected(self) -> bool: ...


async def load_while_connected(
    request: Disconnectable,
    loader: Awaitable[T],
    poll_interval: float = 0.1,
) -> T | None:
    """Await ``loader`` while the client stays connected.

    Args:
        request: The incoming request
        loader: Coroutine performing the page's fetches
        poll_interval: Seconds between disconnect checks

    Returns:
        The loader's result, or None if the client disconnected first
        (the loader is cancelled in that case).
    """
    task = asyncio.ensure_future(loader)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if task in done:
                return task.result()
            if await request.is_disconnected():
                logger.info("Client disconnected, discarding page load")
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
                return None
    finally:
        if not task.done():
            task.cancel()
