"""
Cursor-based undo/redo history.

Milestone
---------
M3 | Snapshot History
Step 3.3 | Linear undo/redo

The history is a list of snapshots plus a cursor pointing at the snapshot that
matches the subject's current state.

State machine
-------------
``Empty`` (no snapshots, cursor -1) -> ``HasHistory`` (cursor in range).
Construction saves the initial state, so a fresh history is already in
``HasHistory`` with cursor 0.

- ``save_state``: drop every entry after the cursor (the redo branch), append
  a new snapshot, move the cursor to it, then evict the oldest entry while the
  list is longer than ``max_size``.
- ``undo`` / ``redo``: move the cursor one step and restore that snapshot;
  return ``False`` (and do nothing) at either end.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar

from patternlab.core.settings import get_logger, load_settings

from .snapshot import Restorable, Snapshot

T = TypeVar("T")

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Listing row for one snapshot: when it was taken and what it held."""

    created_at: datetime
    preview: str


class UndoHistory(Generic[T]):
    """
    Linear undo/redo over a :class:`Restorable` subject.

    Parameters
    ----------
    subject : Restorable[T]
        The originator whose state is tracked.
    max_size : int | None
        Maximum number of snapshots kept. Defaults to
        ``settings.history_max_size``.
    preview : Callable[[T], str] | None
        Turns a state into text for :meth:`history_states`. Defaults to the
        subject's own ``preview`` callable when it has one (as
        :class:`~patternlab.history.document.TextDocument` does), else ``repr``.
    """

    def __init__(
        self,
        subject: Restorable[T],
        max_size: int | None = None,
        *,
        preview: Callable[[T], str] | None = None,
    ) -> None:
        cfg = load_settings()
        self.max_size: int = cfg.history_max_size if max_size is None else max_size
        if self.max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {self.max_size}")
        self._subject = subject
        self._preview: Callable[[T], str] = preview or getattr(subject, "preview", repr)
        self._preview_length = cfg.preview_length
        self._mementos: list[Snapshot[T]] = []
        self._index: int = -1
        self.save_state()

    # ----- writes -----------------------------------------------------------

    def save_state(self) -> None:
        """Record the subject's current state, discarding any redo entries."""
        if self._index < len(self._mementos) - 1:
            dropped = len(self._mementos) - self._index - 1
            del self._mementos[self._index + 1 :]
            logger.debug("Discarded %d redo entries", dropped)

        self._mementos.append(self._subject.save())
        self._index = len(self._mementos) - 1

        while len(self._mementos) > self.max_size:
            self._mementos.pop(0)
            self._index -= 1
            logger.debug("History full (%d); evicted oldest entry", self.max_size)

    # ----- navigation -------------------------------------------------------

    def undo(self) -> bool:
        if not self.can_undo():
            return False
        self._index -= 1
        self._subject.restore(self._mementos[self._index])
        return True

    def redo(self) -> bool:
        if not self.can_redo():
            return False
        self._index += 1
        self._subject.restore(self._mementos[self._index])
        return True

    def can_undo(self) -> bool:
        return self._index > 0

    def can_redo(self) -> bool:
        return self._index < len(self._mementos) - 1

    # ----- inspection -------------------------------------------------------

    @property
    def size(self) -> int:
        return len(self._mementos)

    @property
    def current_index(self) -> int:
        return self._index

    def snapshots(self) -> list[Snapshot[T]]:
        """Return a shallow copy of the snapshot list (oldest first)."""
        return list(self._mementos)

    def history_states(self) -> list[HistoryEntry]:
        """Return ``(created_at, preview)`` rows, previews truncated with ``...``."""
        rows: list[HistoryEntry] = []
        for snap in self._mementos:
            text = self._preview(snap.state)
            if len(text) > self._preview_length:
                text = text[: self._preview_length] + "..."
            rows.append(HistoryEntry(created_at=snap.created_at, preview=text))
        return rows

    def __len__(self) -> int:
        return len(self._mementos)


__all__ = ["UndoHistory", "HistoryEntry"]
