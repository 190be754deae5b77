"""Snapshot history manager (Memento pattern).

Pieces
------
- :class:`Snapshot`           : immutable, timestamped deep copy of a state.
- :class:`Originator`         : generic owner of one live state value.
- :class:`Caretaker`          : stack of snapshots with floor-preserving undo.
- :class:`UndoHistory`        : cursor-based undo/redo with a size bound.
- :class:`CheckpointManager`  : named checkpoints plus an auto-save ring.
- :class:`TextDocument`, :class:`GameCharacter` : concrete originators.
"""

from __future__ import annotations

from .caretaker import Caretaker
from .character import CharacterState, GameCharacter, InventoryItem, Position
from .checkpoints import CheckpointManager
from .document import DocumentState, Formatting, TextDocument
from .originator import Originator
from .snapshot import Restorable, Snapshot
from .undo import HistoryEntry, UndoHistory

__all__ = [
    "Snapshot",
    "Restorable",
    "Originator",
    "Caretaker",
    "UndoHistory",
    "HistoryEntry",
    "CheckpointManager",
    "TextDocument",
    "DocumentState",
    "Formatting",
    "GameCharacter",
    "CharacterState",
    "Position",
    "InventoryItem",
]
