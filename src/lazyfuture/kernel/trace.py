"""Runtime trace infrastructure - separate from computed values.

Captures fork/outcome/release events of traced futures for debugging.
Trace is runtime infrastructure: it never alters what a Future delivers.
Tree relationships are reconstructed only on demand via as_tree().
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Evidence:
    """A single recorded event.

    Outcome events point at the fork event that produced them via parent_id.
    """

    action: str
    id: int = 0
    parent_id: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    info: dict[str, Any] = field(default_factory=dict)

    @property
    def label(self) -> str | None:
        return self.info.get("label")


class Trace:
    """Event log for traced futures.

    Continuations may fire from any thread, so recording is lock-protected.

    Performance guarantees:
    - Trace disabled → single flag check
    - Evidence append is O(1)
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._events: list[Evidence] = []
        self._next_id: int = 0
        self._lock = threading.Lock()

    def record(
        self,
        action: str,
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
    ) -> int | None:
        """Record an evidence event.

        Args:
            action: What happened (e.g., "fork", "resolved", "release")
            info: Additional context
            parent_id: Event ID this event descends from

        Returns:
            Event ID for linking child events, or None if tracing disabled
        """
        if not self.enabled:
            return None

        with self._lock:
            event_id = self._next_id
            self._next_id += 1
            self._events.append(
                Evidence(
                    action=action,
                    id=event_id,
                    parent_id=parent_id,
                    timestamp=datetime.now(UTC),
                    info=info or {},
                )
            )
        return event_id

    def get_events(self) -> list[Evidence]:
        """Get all recorded events in recording order."""
        with self._lock:
            return list(self._events)

    def actions(self, label: str | None = None) -> list[str]:
        """Recorded actions, optionally restricted to one label."""
        return [
            ev.action
            for ev in self.get_events()
            if label is None or ev.label == label
        ]

    def as_tree(self) -> dict[int | None, list[int]]:
        """Reconstruct parent-child relationships.

        Returns:
            Dict mapping parent_id to list of child_ids
        """
        tree: dict[int | None, list[int]] = {}
        for ev in self.get_events():
            tree.setdefault(ev.parent_id, []).append(ev.id)
        return tree

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def clear(self) -> None:
        """Clear all events (for reuse)."""
        with self._lock:
            self._events.clear()
            self._next_id = 0
