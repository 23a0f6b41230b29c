"""
Timeout by racing a slow computation against a timer.

This example shows:
1. Wrapping loop.call_later as a Future collaborator with cleanup
2. concat as a timeout: the loser's timer is cancelled
3. Recovering from the timeout with or_else
4. Awaiting the result through to_awaitable
"""

import asyncio
from typing import Any

from lazyfuture import Future, Rejected, succeeded, to_awaitable


def sleep(delay: float, value: Any, fail: bool = False) -> Future[Any, Any]:
    """A future settling after ``delay`` seconds on the running loop."""
    handles: list[asyncio.TimerHandle] = []

    def run(reject, resolve):
        loop = asyncio.get_running_loop()
        handle = loop.call_later(delay, reject if fail else resolve, value)
        handles.append(handle)
        return handle

    def release():
        for handle in handles:
            handle.cancel()

    return Future(run, release)


def with_timeout(future: Future[Any, Any], seconds: float) -> Future[Any, Any]:
    return future.concat(sleep(seconds, "timeout", fail=True))


async def main() -> None:
    fast = with_timeout(sleep(0.05, "fast answer"), 1.0)
    print("fast:", await to_awaitable(fast))

    slow = with_timeout(sleep(5.0, "slow answer"), 0.1)
    try:
        await to_awaitable(slow)
    except Rejected as exc:
        print("slow:", exc.reason)

    recovered = slow.or_else(lambda reason: succeeded(f"fallback after {reason}"))
    print("recovered:", await to_awaitable(recovered))


if __name__ == "__main__":
    asyncio.run(main())
