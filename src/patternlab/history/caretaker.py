"""
Stack-style caretaker over any :class:`Restorable` originator.

Milestone
---------
M3 | Snapshot History
Step 3.2 | Caretaker

The caretaker keeps an ordered list of snapshots (oldest first). It never
looks inside them; it only asks the originator to ``save()`` and
``restore()``.

Undo policy
-----------
- No snapshots: nothing happens (logged).
- Exactly one snapshot: restore it. The oldest snapshot is the floor and is
  never popped, so repeated undos keep returning to it.
- More than one: pop the most recent snapshot and restore the one beneath it.
  The popped snapshot is discarded; this model has no redo (see
  :class:`~patternlab.history.undo.UndoHistory` for that).
- If ``restore`` raises, the popped snapshot is pushed back before the error
  propagates, so the list is exactly as it was before the call.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from patternlab.core.errors import InvalidIndex
from patternlab.core.settings import get_logger

from .snapshot import Restorable, Snapshot

T = TypeVar("T")

logger = get_logger(__name__)


class Caretaker(Generic[T]):
    """Ordered snapshot list with floor-preserving undo and positional restore."""

    __slots__ = ("_originator", "_mementos")

    def __init__(self, originator: Restorable[T]) -> None:
        self._originator = originator
        self._mementos: list[Snapshot[T]] = []

    def backup(self) -> Snapshot[T]:
        """Append a snapshot of the originator's current state and return it."""
        logger.info("Caretaker: Saving originator's state...")
        snap = self._originator.save()
        self._mementos.append(snap)
        return snap

    def undo(self) -> None:
        """Step back one snapshot (see module docstring for the policy)."""
        if not self._mementos:
            logger.info("Caretaker: No mementos to restore")
            return

        if len(self._mementos) == 1:
            floor = self._mementos[0]
            logger.info("Caretaker: Restoring state to: %s", floor.name)
            try:
                self._originator.restore(floor)
            except Exception:
                logger.error("Caretaker: Failed to restore initial state", exc_info=True)
                raise
            return

        current = self._mementos.pop()
        previous = self._mementos[-1]
        logger.info("Caretaker: Restoring state to: %s", previous.name)
        try:
            self._originator.restore(previous)
        except Exception:
            self._mementos.append(current)
            logger.error("Caretaker: Failed to restore state", exc_info=True)
            raise

    def restore_to_index(self, index: int) -> None:
        """Restore the snapshot at ``index`` without changing the list.

        Raises
        ------
        InvalidIndex
            ``index`` is outside ``[0, len(self))``. Negative indices are not
            accepted.
        """
        if not 0 <= index < len(self._mementos):
            raise InvalidIndex(index, len(self._mementos))
        self._originator.restore(self._mementos[index])

    def mementos(self) -> list[Snapshot[T]]:
        """Return a shallow copy of the snapshot list (oldest first)."""
        return list(self._mementos)

    def history_names(self) -> list[str]:
        """Log and return the display name of every snapshot."""
        logger.info("Caretaker: Here's the list of mementos:")
        names = [m.name for m in self._mementos]
        for name in names:
            logger.info(name)
        return names

    def __len__(self) -> int:
        return len(self._mementos)


__all__ = ["Caretaker"]
