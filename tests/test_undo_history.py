"""Tests for the cursor-based undo/redo history over a text document."""

from __future__ import annotations

from typing import Any

import pytest

from patternlab.core.settings import load_settings
from patternlab.history import DocumentState, Originator, TextDocument, UndoHistory


@pytest.fixture  # type: ignore[misc]
def document() -> TextDocument:
    return TextDocument()


@pytest.fixture  # type: ignore[misc]
def history(document: TextDocument) -> UndoHistory[DocumentState]:
    return UndoHistory(document)


def test_typing_undo_redo(document: TextDocument, history: UndoHistory[DocumentState]) -> None:
    """Undo steps back one save, redo steps forward again."""
    document.type_text("Hello")
    history.save_state()
    document.type_text(" World")
    history.save_state()
    assert document.content == "Hello World"

    assert history.undo() is True
    assert document.content == "Hello"
    assert history.redo() is True
    assert document.content == "Hello World"


def test_selection_replace_and_undo(
    document: TextDocument, history: UndoHistory[DocumentState]
) -> None:
    """Typing over a selection replaces it; selection-only steps are undoable too."""
    document.type_text("Hello World")
    history.save_state()
    document.select(6, 5)
    history.save_state()
    document.type_text("Universe")
    history.save_state()
    assert document.content == "Hello Universe"

    history.undo()
    assert document.content == "Hello World"
    assert document.get_state().selection_length == 5
    history.undo()
    assert document.content == "Hello World"
    assert document.get_state().selection_length == 0
    history.undo()
    assert document.content == ""


def test_delete_selection(document: TextDocument, history: UndoHistory[DocumentState]) -> None:
    """Deleting a selection removes it and can be undone."""
    document.type_text("Hello World")
    history.save_state()
    document.select(6, 5)
    document.delete()
    history.save_state()
    assert document.content == "Hello "

    document.type_text("Python")
    history.save_state()
    assert document.content == "Hello Python"

    history.undo()
    assert document.content == "Hello "
    history.undo()
    assert document.content == "Hello World"


def test_delete_without_selection() -> None:
    """Without a selection, delete removes the character after the cursor."""
    doc = TextDocument("abc")
    doc.move_cursor(1)
    doc.delete()
    assert doc.content == "ac"
    doc.move_cursor(2)
    doc.delete()
    assert doc.content == "ac"


def test_out_of_range_cursor_and_selection_ignored() -> None:
    """Invalid positions leave the cursor and selection unchanged."""
    doc = TextDocument("abc")
    doc.move_cursor(10)
    doc.select(2, 5)
    doc.select(-1, 1)
    state = doc.get_state()
    assert (state.cursor_position, state.selection_length) == (0, 0)


def test_formatting_changes(document: TextDocument, history: UndoHistory[DocumentState]) -> None:
    """Formatting merges into the current values and is undoable."""
    document.type_text("Hello")
    history.save_state()
    document.apply_formatting(is_bold=True)
    history.save_state()
    document.apply_formatting(is_italic=True, font_size=14)
    history.save_state()

    fmt = document.get_state().formatting
    assert (fmt.is_bold, fmt.is_italic, fmt.font_size) == (True, True, 14)

    history.undo()
    fmt = document.get_state().formatting
    assert (fmt.is_bold, fmt.is_italic, fmt.font_size) == (True, False, 12)

    history.undo()
    assert document.get_state().formatting.is_bold is False


@pytest.mark.parametrize(  # type: ignore[misc]
    "changes",
    [{"is_underlined": True}, {"font_size": 0}],
)
def test_invalid_formatting_rejected(document: TextDocument, changes: dict[str, Any]) -> None:
    """Unknown keys and invalid values raise and leave formatting untouched."""
    with pytest.raises(ValueError):
        document.apply_formatting(**changes)
    assert document.get_state().formatting.font_size == 12


def test_can_undo_can_redo(document: TextDocument, history: UndoHistory[DocumentState]) -> None:
    """The flags track the cursor position within the history."""
    assert (history.can_undo(), history.can_redo()) == (False, False)

    document.type_text("Hello")
    history.save_state()
    assert (history.can_undo(), history.can_redo()) == (True, False)

    history.undo()
    assert (history.can_undo(), history.can_redo()) == (False, True)

    history.redo()
    assert (history.can_undo(), history.can_redo()) == (True, False)


def test_undo_redo_at_ends_return_false(history: UndoHistory[DocumentState]) -> None:
    """Nothing to undo or redo is reported, not raised."""
    assert history.undo() is False
    assert history.redo() is False
    assert history.current_index == 0


def test_new_change_discards_redo_branch(
    document: TextDocument, history: UndoHistory[DocumentState]
) -> None:
    """Saving after an undo drops every entry past the cursor."""
    for step in ("Step 1", " - Step 2", " - Step 3"):
        document.type_text(step)
        history.save_state()
    history.undo()
    history.undo()
    assert document.content == "Step 1"

    document.type_text(" - New direction")
    history.save_state()
    assert document.content == "Step 1 - New direction"
    assert history.can_redo() is False
    assert history.size == 3

    history.undo()
    assert document.content == "Step 1"


def test_max_size_evicts_oldest(document: TextDocument) -> None:
    """The oldest snapshots fall off once the bound is reached."""
    history = UndoHistory(document, max_size=3)
    for ch in "abcde":
        document.type_text(ch)
        history.save_state()

    assert history.size == 3
    assert history.current_index == 2
    while history.undo():
        pass
    assert document.content == "abc"


def test_max_size_from_settings(monkeypatch: Any, document: TextDocument) -> None:
    """Without an explicit bound the configured one applies."""
    monkeypatch.setenv("PATTERNLAB_HISTORY_MAX_SIZE", "2")
    load_settings.cache_clear()
    history = UndoHistory(document)
    for ch in "xyz":
        document.type_text(ch)
        history.save_state()
    assert history.max_size == 2
    assert len(history) == 2


def test_invalid_max_size(document: TextDocument) -> None:
    """A bound below one is rejected."""
    with pytest.raises(ValueError):
        UndoHistory(document, max_size=0)


def test_history_states_previews(document: TextDocument) -> None:
    """Previews are truncated to the configured length plus an ellipsis."""
    history = UndoHistory(document, preview=lambda s: s.content)
    document.type_text("short")
    history.save_state()
    document.type_text(" and then a much longer piece of text")
    history.save_state()

    previews = [row.preview for row in history.history_states()]
    assert previews[0] == ""
    assert previews[1] == "short"
    assert previews[2] == "short and then a much longer p..."
    assert all(row.created_at.tzinfo is not None for row in history.history_states())


def test_document_previews_show_content_by_default(
    document: TextDocument, history: UndoHistory[DocumentState]
) -> None:
    """Without `preview=`, document rows show the text rather than the model repr."""
    document.type_text("hi")
    history.save_state()
    assert [row.preview for row in history.history_states()] == ["", "hi"]


def test_repr_preview_for_plain_subjects() -> None:
    """Subjects without their own preview fall back to repr."""
    subject = Originator({"n": 1})
    history = UndoHistory(subject)
    assert history.history_states()[0].preview == "{'n': 1}"
