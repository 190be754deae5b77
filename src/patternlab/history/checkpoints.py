"""
Named checkpoints and a bounded auto-save ring.

Milestone
---------
M3 | Snapshot History
Step 3.4 | Checkpoints

Both stores sit beside, not inside, any linear undo history:

- **Checkpoints** map a label to exactly one snapshot. Creating a checkpoint
  under an existing label replaces it.
- **Auto-saves** form a ring of ``capacity`` snapshots; appending past the
  capacity silently drops the oldest one.

Lookups that find nothing return ``False`` rather than raising, because a
missing checkpoint is an ordinary outcome for a game menu or an editor.
"""

from __future__ import annotations

from collections import deque
from typing import Generic, TypeVar

from patternlab.core.settings import get_logger, load_settings

from .snapshot import Restorable, Snapshot

T = TypeVar("T")

logger = get_logger(__name__)


class CheckpointManager(Generic[T]):
    """
    Checkpoint and auto-save caretaker for a :class:`Restorable` subject.

    Parameters
    ----------
    subject : Restorable[T]
        The originator to snapshot.
    capacity : int | None
        Number of auto-saves kept. Defaults to ``settings.autosave_capacity``.
    """

    def __init__(self, subject: Restorable[T], capacity: int | None = None) -> None:
        cap = load_settings().autosave_capacity if capacity is None else capacity
        if cap < 1:
            raise ValueError(f"capacity must be >= 1, got {cap}")
        self._subject = subject
        self._checkpoints: dict[str, Snapshot[T]] = {}
        self._autosaves: deque[Snapshot[T]] = deque(maxlen=cap)

    @property
    def capacity(self) -> int:
        return self._autosaves.maxlen or 0

    # ------------------------------ Checkpoints -----------------------------

    def create_checkpoint(self, name: str) -> None:
        self._checkpoints[name] = self._subject.save()
        logger.info("Checkpoint created: %s", name)

    def restore_checkpoint(self, name: str) -> bool:
        """Restore the checkpoint called ``name``; ``False`` if there is none."""
        snap = self._checkpoints.get(name)
        if snap is None:
            logger.info("Checkpoint not found: %s", name)
            return False
        self._subject.restore(snap)
        logger.info("Restored checkpoint: %s", name)
        return True

    def delete_checkpoint(self, name: str) -> bool:
        """Remove ``name``; return whether it existed."""
        return self._checkpoints.pop(name, None) is not None

    def clear_all_checkpoints(self) -> None:
        self._checkpoints.clear()
        logger.info("All checkpoints cleared")

    def checkpoint_names(self) -> list[str]:
        """Checkpoint labels in creation order."""
        return list(self._checkpoints)

    # ------------------------------- Auto-saves -----------------------------

    def auto_save(self) -> None:
        if len(self._autosaves) == self.capacity:
            logger.debug("Auto-save ring full; dropping oldest entry")
        self._autosaves.append(self._subject.save())
        logger.info("Auto-saved (%d/%d)", len(self._autosaves), self.capacity)

    def load_last_auto_save(self) -> bool:
        """Restore the most recent auto-save; ``False`` if none exist."""
        if not self._autosaves:
            logger.info("No auto-saves available")
            return False
        self._subject.restore(self._autosaves[-1])
        logger.info("Loaded last auto-save")
        return True

    @property
    def auto_save_count(self) -> int:
        return len(self._autosaves)

    def auto_saves(self) -> list[Snapshot[T]]:
        """Shallow copy of the auto-save ring, oldest first."""
        return list(self._autosaves)


__all__ = ["CheckpointManager"]
