"""Generic originator: one live state value, copied at every boundary."""

from __future__ import annotations

from typing import Generic, TypeVar

from patternlab.core.clone import deep_clone
from patternlab.core.settings import get_logger

from .snapshot import Snapshot

T = TypeVar("T")

logger = get_logger(__name__)


class Originator(Generic[T]):
    """
    Owner of a mutable state value of type ``T``.

    The live value never leaves the object: :meth:`get_state` returns a copy,
    :meth:`set_state` stores a copy, and snapshots are copies too. Mutating
    anything handed in or out therefore never changes the live state.
    """

    __slots__ = ("_state",)

    def __init__(self, state: T) -> None:
        self._state: T = deep_clone(state)

    def get_state(self) -> T:
        return deep_clone(self._state)

    def set_state(self, state: T) -> None:
        logger.debug("State changing to: %r", state)
        self._state = deep_clone(state)

    def save(self, note: str | None = None) -> Snapshot[T]:
        """Capture the current state. History is not touched."""
        logger.debug("Saving state...")
        return Snapshot.capture(self._state, note=note)

    def restore(self, snapshot: Snapshot[T]) -> None:
        """Replace the live state with a copy of ``snapshot``'s value."""
        self._state = snapshot.state
        logger.debug("State restored to: %r", self._state)


__all__ = ["Originator"]
