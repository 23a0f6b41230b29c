"""Kernel layer - the Future type and its supporting records."""

from lazyfuture.kernel.future import Future, failed, never, succeeded
from lazyfuture.kernel.pattern import Pattern
from lazyfuture.kernel.trace import Evidence, Trace

__all__ = [
    "Future",
    "succeeded",
    "failed",
    "never",
    "Pattern",
    # Tracing
    "Evidence",
    "Trace",
]
