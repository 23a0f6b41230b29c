"""
Sequencing callback-style lookups with tracing.

This example shows:
1. Adapting a callback API into a Future
2. traverse to run dependent lookups one after another
3. fold to collapse both channels into a report
4. Trace events for each traced step
"""

from __future__ import annotations

from typing import Any

from lazyfuture import Future, Trace, traverse

USERS = {"ada": 36, "alan": 41}


def lookup_age(name: str, on_error, on_result) -> None:
    """A callback API, standing in for any external collaborator."""
    if name in USERS:
        on_result(USERS[name])
    else:
        on_error(f"unknown user {name!r}")


def age_of(name: str) -> Future[str, int]:
    return Future(lambda reject, resolve: lookup_age(name, reject, resolve))


def report(names: list[str], trace: Trace) -> Future[Any, str]:
    return (
        traverse(names, lambda name: age_of(name).traced(trace, name))
        .map(sum)
        .fold(lambda reason: f"failed: {reason}", lambda total: f"total age: {total}")
    )


if __name__ == "__main__":
    trace = Trace()
    for names in (["ada", "alan"], ["ada", "grace", "alan"]):
        report(names, trace).run(print, print)

    for event in trace.get_events():
        print(event.id, event.parent_id, event.action, event.label)
