"""
Text document originator for editor-style undo/redo.

Pair it with :class:`~patternlab.history.undo.UndoHistory`:

>>> from patternlab.history.undo import UndoHistory
>>> doc = TextDocument()
>>> history = UndoHistory(doc)
>>> doc.type_text("Hello"); history.save_state()
>>> doc.type_text(" World"); history.save_state()
>>> history.undo(); doc.content
True
'Hello'
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from patternlab.core.settings import get_logger

from .snapshot import Snapshot

logger = get_logger(__name__)


class Formatting(BaseModel):
    """Character formatting applied to the whole document."""

    is_bold: bool = False
    is_italic: bool = False
    font_size: int = Field(default=12, gt=0)
    font_family: str = "Arial"


class DocumentState(BaseModel):
    """Everything an undo step has to bring back."""

    content: str = ""
    cursor_position: int = Field(default=0, ge=0)
    selection_length: int = Field(default=0, ge=0)
    formatting: Formatting = Field(default_factory=Formatting)


class TextDocument:
    """
    A single-cursor text buffer.

    Typing replaces the current selection (if any) and leaves the cursor after
    the inserted text. Cursor moves and selections outside the content are
    ignored rather than clamped.
    """

    def __init__(self, initial_content: str = "") -> None:
        self._state = DocumentState(content=initial_content)

    # ----- editing ----------------------------------------------------------

    def type_text(self, text: str) -> None:
        s = self._state
        end = s.cursor_position + s.selection_length
        s.content = s.content[: s.cursor_position] + text + s.content[end:]
        s.cursor_position += len(text)
        s.selection_length = 0

    def delete(self) -> None:
        """Delete the selection, or the character after the cursor."""
        s = self._state
        if s.selection_length > 0:
            end = s.cursor_position + s.selection_length
            s.content = s.content[: s.cursor_position] + s.content[end:]
            s.selection_length = 0
        elif s.cursor_position < len(s.content):
            s.content = s.content[: s.cursor_position] + s.content[s.cursor_position + 1 :]

    def move_cursor(self, position: int) -> None:
        if 0 <= position <= len(self._state.content):
            self._state.cursor_position = position
            self._state.selection_length = 0

    def select(self, start: int, length: int) -> None:
        if start >= 0 and length >= 0 and start + length <= len(self._state.content):
            self._state.cursor_position = start
            self._state.selection_length = length

    def apply_formatting(self, **changes: Any) -> None:
        """Merge ``changes`` (e.g. ``is_bold=True``) into the current formatting.

        Raises
        ------
        ValueError
            A key is not a :class:`Formatting` field, or a value fails validation.
        """
        unknown = set(changes) - set(Formatting.model_fields)
        if unknown:
            raise ValueError(f"Unknown formatting option(s): {sorted(unknown)}")
        merged = {**self._state.formatting.model_dump(), **changes}
        self._state.formatting = Formatting.model_validate(merged)

    # ----- state ------------------------------------------------------------

    @property
    def content(self) -> str:
        return self._state.content

    @staticmethod
    def preview(state: DocumentState) -> str:
        """History row text for ``state``: its content."""
        return state.content

    def get_state(self) -> DocumentState:
        return self._state.model_copy(deep=True)

    def save(self) -> Snapshot[DocumentState]:
        return Snapshot.capture(self._state)

    def restore(self, snapshot: Snapshot[DocumentState]) -> None:
        self._state = snapshot.state
        logger.debug("Document restored (%d chars)", len(self._state.content))


__all__ = ["TextDocument", "DocumentState", "Formatting"]
