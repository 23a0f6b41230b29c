from .combinators import lift2, race, sequence, to_awaitable, traverse
from .errors import FutureError, NotAFutureError, Rejected
from .kernel import Evidence, Future, Pattern, Trace, failed, never, succeeded

__all__ = [
    # Core
    "Future",
    "succeeded",
    "failed",
    "never",
    "Pattern",
    # Combinators
    "race",
    "sequence",
    "traverse",
    "lift2",
    "to_awaitable",
    # Errors
    "FutureError",
    "NotAFutureError",
    "Rejected",
    # Tracing
    "Trace",
    "Evidence",
]
