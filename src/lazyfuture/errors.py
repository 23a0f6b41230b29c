"""Error types for lazyfuture.

Domain failures never appear here: they travel through a Future's failure
channel as plain values. These exceptions signal misuse of the combinators
or cross the boundary into code that expects raised errors.
"""

from __future__ import annotations

from typing import Any


class FutureError(Exception):
    """Base class for lazyfuture errors."""


class NotAFutureError(FutureError, TypeError):
    """Raised when a chaining callback returns something other than a Future.

    The offending value is preserved for debugging.
    """

    def __init__(self, message: str, raw_value: object) -> None:
        self.raw_value = raw_value
        super().__init__(message)

    def __repr__(self) -> str:
        return f"NotAFutureError({super().__repr__()}, raw_value={self.raw_value!r})"


class Rejected(FutureError):
    """A Future's failure value surfaced as an exception.

    Raised when awaiting a Future bridged into asyncio that ends on its
    failure channel.
    """

    def __init__(self, reason: Any) -> None:
        self.reason = reason
        super().__init__(f"Future rejected with {reason!r}")
