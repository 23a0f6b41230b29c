"""Observation helpers and algebraic laws for futures.

Futures satisfy the following laws, where ``≡`` means both deliver the same
outcome on the same channel:

1. Left identity: succeeded(x).chain(f) ≡ f(x)
2. Right identity: c.chain(succeeded) ≡ c
3. Functor identity: c.map(lambda x: x) ≡ c
4. Functor composition: c.map(f).map(g) ≡ c.map(lambda x: g(f(x)))
5. Monoid identity: c.concat(never()) ≡ c ≡ never().concat(c)
6. Swap involution: c.swap().swap() ≡ c

The helpers only observe synchronous outcomes; a future settling later is
observed as pending.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

from lazyfuture.kernel import Future, never, succeeded

Channel = Literal["rejected", "resolved", "pending"]


@dataclass(frozen=True)
class Outcome:
    """What a single run of a future delivered.

    Attributes:
        channel: The channel reached first, or "pending".
        value: The value delivered on that channel.
        rejections: How many times the failure continuation was called.
        resolutions: How many times the success continuation was called.
    """

    channel: Channel
    value: Any = None
    rejections: int = 0
    resolutions: int = 0

    @property
    def settled_once(self) -> bool:
        return self.rejections + self.resolutions == 1


def observe(future: Future[Any, Any]) -> Outcome:
    """Run ``future`` with counting continuations and report what arrived."""
    events: list[tuple[Channel, Any]] = []
    future.run(
        lambda reason: events.append(("rejected", reason)),
        lambda value: events.append(("resolved", value)),
    )
    if not events:
        return Outcome(channel="pending")
    channel, value = events[0]
    return Outcome(
        channel=channel,
        value=value,
        rejections=sum(1 for c, _ in events if c == "rejected"),
        resolutions=sum(1 for c, _ in events if c == "resolved"),
    )


def equivalent(a: Future[Any, Any], b: Future[Any, Any]) -> bool:
    """Whether two futures deliver the same value on the same channel."""
    left, right = observe(a), observe(b)
    return (left.channel, left.value) == (right.channel, right.value)


def left_identity(value: Any, func: Callable[[Any], Future[Any, Any]]) -> bool:
    return equivalent(succeeded(value).chain(func), func(value))


def right_identity(future: Future[Any, Any]) -> bool:
    return equivalent(future.chain(succeeded), future)


def functor_identity(future: Future[Any, Any]) -> bool:
    return equivalent(future.map(lambda x: x), future)


def functor_composition(
    future: Future[Any, Any],
    f: Callable[[Any], Any],
    g: Callable[[Any], Any],
) -> bool:
    return equivalent(future.map(f).map(g), future.map(lambda x: g(f(x))))


def concat_identity(future: Future[Any, Any]) -> bool:
    return equivalent(future.concat(never()), future) and equivalent(
        never().concat(future), future
    )


def swap_involution(future: Future[Any, Any]) -> bool:
    return equivalent(future.swap().swap(), future)
