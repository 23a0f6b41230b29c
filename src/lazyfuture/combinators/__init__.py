"""Combinators - composition primitives over many futures."""

from .bridge import to_awaitable
from .laws import Outcome, equivalent, observe
from .ops import lift2, race, sequence, traverse

__all__ = [
    "race",
    "sequence",
    "traverse",
    "lift2",
    "to_awaitable",
    # Laws
    "Outcome",
    "observe",
    "equivalent",
]
