"""Bridge futures into asyncio."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, TypeVar

from lazyfuture.errors import Rejected
from lazyfuture.kernel import Future

logger = logging.getLogger(__name__)

S = TypeVar("S")


def to_awaitable(
    future: Future[Any, S],
    loop: asyncio.AbstractEventLoop | None = None,
) -> asyncio.Future[S]:
    """Run ``future`` once and expose its outcome as an ``asyncio.Future``.

    Semantics:
        - Success sets the result; failure sets ``Rejected(reason)``
        - Continuations fired from another thread are marshalled onto ``loop``
        - Cancelling the awaitable before an outcome releases ``future``

    Args:
        future: The future to run.
        loop: Target event loop; defaults to the running loop.

    Returns:
        asyncio.Future completed with the outcome of ``future``.
    """
    if loop is None:
        loop = asyncio.get_running_loop()
    waiter: asyncio.Future[Any] = loop.create_future()
    outcome = threading.Event()

    def settle(setter: Any, value: Any) -> None:
        if not waiter.done():
            setter(value)

    def deliver(setter: Any, value: Any) -> None:
        outcome.set()
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is loop:
            settle(setter, value)
        else:
            loop.call_soon_threadsafe(settle, setter, value)

    def on_done(fut: asyncio.Future[Any]) -> None:
        if fut.cancelled() and not outcome.is_set():
            logger.debug("Awaitable cancelled before the future settled, releasing it")
            future.release()

    waiter.add_done_callback(on_done)
    future.run(
        lambda reason: deliver(waiter.set_exception, Rejected(reason)),
        lambda value: deliver(waiter.set_result, value),
    )
    return waiter
