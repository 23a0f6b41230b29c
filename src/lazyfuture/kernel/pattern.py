"""Pattern record for Future.cata."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Self

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Pattern(BaseModel):
    """Pair of handlers, one per outcome channel.

    Accepts both ``rejected``/``resolved`` and the capitalised
    ``Rejected``/``Resolved`` field names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rejected: Callable[[Any], Any] = Field(
        validation_alias=AliasChoices("rejected", "Rejected"),
    )
    resolved: Callable[[Any], Any] = Field(
        validation_alias=AliasChoices("resolved", "Resolved"),
    )

    @classmethod
    def coerce(cls, value: Any) -> Self:
        """Build a Pattern from a Pattern, a mapping, or an object with handler attributes.

        Raises:
            pydantic.ValidationError: if a handler is missing or not callable.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls.model_validate(dict(value))
        return cls.model_validate(value, from_attributes=True)
