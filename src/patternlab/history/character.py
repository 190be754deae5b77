"""Game character originator used with checkpoints and auto-saves."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from patternlab.core.settings import get_logger

from .snapshot import Snapshot

logger = get_logger(__name__)

MAX_HEALTH = 100
EXPERIENCE_PER_LEVEL = 100


class Position(BaseModel):
    x: float = 0
    y: float = 0
    z: float = 0


class InventoryItem(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str
    name: str
    quantity: int = Field(default=1, ge=1)


class CharacterState(BaseModel):
    """Full game state of one character."""

    name: str
    level: int = Field(default=1, ge=1)
    health: int = Field(default=MAX_HEALTH, ge=0, le=MAX_HEALTH)
    mana: int = Field(default=50, ge=0)
    position: Position = Field(default_factory=Position)
    inventory: list[InventoryItem] = Field(default_factory=list)
    skills: dict[str, int] = Field(default_factory=dict, description="skill name -> level")


def _check_quantity(quantity: int) -> None:
    if quantity < 1:
        raise ValueError(f"quantity must be >= 1, got {quantity}")


class GameCharacter:
    """
    A player character whose whole state can be checkpointed.

    Health is kept in ``[0, MAX_HEALTH]``. Experience is not accumulated: each
    call to :meth:`gain_experience` grants one level per full
    ``EXPERIENCE_PER_LEVEL`` points in that award.
    """

    def __init__(self, name: str) -> None:
        self._state = CharacterState(name=name)

    @property
    def name(self) -> str:
        return self._state.name

    # ----- vitals -----------------------------------------------------------

    def take_damage(self, amount: int) -> None:
        self._state.health = max(0, self._state.health - amount)
        logger.info("%s takes %d damage. Health: %d", self.name, amount, self._state.health)

    def heal(self, amount: int) -> None:
        self._state.health = min(MAX_HEALTH, self._state.health + amount)
        logger.info("%s heals for %d. Health: %d", self.name, amount, self._state.health)

    def use_mana(self, amount: int) -> bool:
        if self._state.mana < amount:
            logger.info("%s doesn't have enough mana!", self.name)
            return False
        self._state.mana -= amount
        logger.info("%s uses %d mana. Remaining: %d", self.name, amount, self._state.mana)
        return True

    def move(self, x: float, y: float, z: float) -> None:
        self._state.position = Position(x=x, y=y, z=z)
        logger.info("%s moves to position (%s, %s, %s)", self.name, x, y, z)

    # ----- inventory --------------------------------------------------------

    def _find_item(self, item_id: str) -> InventoryItem | None:
        return next((i for i in self._state.inventory if i.id == item_id), None)

    def add_item(self, item_id: str, name: str, quantity: int = 1) -> None:
        """Add ``quantity`` of an item, stacking onto an existing entry with the same id.

        Raises
        ------
        ValueError
            ``quantity`` is below 1.
        """
        _check_quantity(quantity)
        existing = self._find_item(item_id)
        if existing is not None:
            existing.quantity += quantity
        else:
            self._state.inventory.append(InventoryItem(id=item_id, name=name, quantity=quantity))
        logger.info("%s acquired %d %s", self.name, quantity, name)

    def remove_item(self, item_id: str, quantity: int = 1) -> bool:
        """Use up ``quantity`` of an item; the entry disappears when it runs out.

        Raises
        ------
        ValueError
            ``quantity`` is below 1.
        """
        _check_quantity(quantity)
        item = self._find_item(item_id)
        if item is None:
            logger.info("%s doesn't have that item!", self.name)
            return False
        if item.quantity <= quantity:
            self._state.inventory.remove(item)
        else:
            item.quantity -= quantity
        logger.info("%s used %d %s", self.name, quantity, item.name)
        return True

    # ----- progression ------------------------------------------------------

    def gain_experience(self, amount: int) -> None:
        levels = amount // EXPERIENCE_PER_LEVEL
        if levels > 0:
            self._state.level += levels
            logger.info("%s levels up to %d!", self.name, self._state.level)
        else:
            logger.info("%s needs more experience to level up.", self.name)

    def learn_skill(self, skill: str, level: int = 1) -> None:
        self._state.skills[skill] = level
        logger.info("%s learned %s (Level %d)", self.name, skill, level)

    def improve_skill(self, skill: str) -> bool:
        if skill not in self._state.skills:
            logger.info("%s doesn't know %s skill!", self.name, skill)
            return False
        self._state.skills[skill] += 1
        logger.info("%s's %s improved to Level %d!", self.name, skill, self._state.skills[skill])
        return True

    # ----- state ------------------------------------------------------------

    def get_state(self) -> CharacterState:
        return self._state.model_copy(deep=True)

    def save(self) -> Snapshot[CharacterState]:
        return Snapshot.capture(self._state)

    def restore(self, snapshot: Snapshot[CharacterState]) -> None:
        self._state = snapshot.state
        logger.info("%s's state has been restored!", self.name)


__all__ = ["GameCharacter", "CharacterState", "Position", "InventoryItem", "MAX_HEALTH"]
