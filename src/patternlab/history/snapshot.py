"""
Snapshot definition and the originator contract.

Milestone
---------
M3 | Snapshot History
Step 3.1 | Immutable snapshots

This module defines the immutable record of an originator's state at a
specific point in time, and the :class:`Restorable` protocol every caretaker
relies on. It is separated from the managers to avoid circular imports and to
keep the data structure definition reusable.

Design Notes
------------
- **Immutability**: a snapshot is ``frozen=True`` and its value is a private
  deep copy. :attr:`Snapshot.state` hands out a *fresh* copy on every access,
  so callers can mutate what they get without touching the stored value.
- **Timestamps**: ``created_at`` is a timezone-aware UTC ``datetime`` used for
  ordering and display only. :attr:`Snapshot.timestamp` renders it as an
  ISO-8601 string with a trailing ``Z``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Generic, Protocol, TypeVar, runtime_checkable

from patternlab.core.clone import deep_clone

T = TypeVar("T")

_NAME_PREVIEW_CHARS = 20


@dataclass(frozen=True, slots=True)
class Snapshot(Generic[T]):
    """
    Immutable record of an originator's state.

    Attributes
    ----------
    _value : T
        Private deep copy of the state at capture time. Use :attr:`state`.
    created_at : datetime
        UTC time of capture.
    note : str | None
        Optional human-readable label (e.g. 'before boss fight').
    """

    _value: T
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    note: str | None = None

    @classmethod
    def capture(cls, value: T, note: str | None = None) -> Snapshot[T]:
        """Deep-copy ``value`` and stamp it with the current time."""
        return cls(deep_clone(value), note=note)

    @property
    def state(self) -> T:
        """Return a fresh deep copy of the captured state."""
        return deep_clone(self._value)

    @property
    def timestamp(self) -> str:
        """ISO-8601 capture time, e.g. ``2025-01-01T10:00:00.123456Z``."""
        return self.created_at.strftime("%Y-%m-%dT%H:%M:%S.%fZ")

    @property
    def name(self) -> str:
        """Display name: timestamp plus a short preview of the state."""
        return f"{self.timestamp} / {repr(self._value)[:_NAME_PREVIEW_CHARS]}..."


@runtime_checkable
class Restorable(Protocol[T]):
    """Anything that can hand out snapshots of itself and roll back to them."""

    def save(self) -> Snapshot[T]: ...

    def restore(self, snapshot: Snapshot[T]) -> None: ...


__all__ = ["Snapshot", "Restorable"]
