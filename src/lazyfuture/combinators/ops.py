"""Combinator primitives over many futures: race, sequence, traverse, lift2."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from functools import reduce
from typing import Any, TypeVar

from lazyfuture.kernel import Future, never, succeeded

F = TypeVar("F")
S = TypeVar("S")
T = TypeVar("T")
R = TypeVar("R")


def race(futures: Iterable[Future[F, S]]) -> Future[F, S]:
    """Settle with whichever future settles first.

    Semantics:
        - Every future is started when the result is run
        - The first outcome wins; the others are released
        - An empty iterable gives a future that never settles

    Args:
        futures: Futures to race.

    Returns:
        Future[F, S]: The concat of all futures.
    """
    return reduce(lambda acc, future: acc.concat(future), futures, never())


def traverse(
    items: Iterable[T],
    func: Callable[[T], Future[F, S]],
) -> Future[F, list[S]]:
    """Run ``func(item)`` for each item in order, collecting success values.

    Semantics:
        - ``func`` is called for an item only after the previous future succeeded
        - The first failure short-circuits the rest
        - Cleanup follows chain: the result carries no cleanup of its own

    Args:
        items: Inputs, consumed when traverse is called.
        func: Builds a future for one input.

    Returns:
        Future[F, list[S]]: Success values in input order.
    """
    def step(acc: Future[F, list[S]], item: T) -> Future[F, list[S]]:
        return acc.chain(lambda values: func(item).map(lambda value: [*values, value]))

    return reduce(step, list(items), succeeded([]))


def sequence(futures: Iterable[Future[F, S]]) -> Future[F, list[S]]:
    """Run futures one after another, collecting their success values."""
    return traverse(futures, lambda future: future)


def lift2(
    func: Callable[[Any, Any], R],
    first: Future[F, Any],
    second: Future[F, Any],
) -> Future[F, R]:
    """Apply a binary function to the values of two futures, in order."""
    return first.map(lambda a: lambda b: func(a, b)).ap(second)
