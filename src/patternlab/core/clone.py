"""
Structural deep-copy primitive used by every snapshot.

Milestone
---------
M1 | Snapshots & State
Step 1.1 | Value isolation

A snapshot is only useful if nothing outside the history can reach into it.
:func:`deep_clone` returns a copy of a state value that is equal to the
original and shares no mutable sub-object with it.

Strategies
----------
- Immutable scalars (None, bool, numbers, str, bytes, dates, enums) are
  returned as-is.
- list / dict / set -> new container with recursively cloned items.
  Subclasses (``defaultdict``, ``OrderedDict``, ``Counter`` ...) go through
  :func:`copy.deepcopy`, which keeps their type and extra attributes.
- tuple / frozenset -> rebuilt, because they may still hold mutable items.
- Pydantic models -> ``model_copy(deep=True)``.
- Dataclass instances -> rebuilt field by field.
- Objects with a ``clone()`` method -> that method.
- Anything else -> :func:`copy.deepcopy`.

New state types can register their own strategy with
``@deep_clone.register``.
"""

from __future__ import annotations

import copy
import dataclasses
import datetime as dt
import enum
from decimal import Decimal
from fractions import Fraction
from functools import singledispatch
from typing import Any, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

_IMMUTABLE: tuple[type, ...] = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    Decimal,
    Fraction,
    dt.date,
    dt.time,
    dt.timedelta,
    enum.Enum,
)


@singledispatch
def deep_clone(value: T) -> T:
    """Return a structurally equal copy of ``value`` with no shared mutable parts."""
    if isinstance(value, _IMMUTABLE):
        return value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _clone_dataclass(value)
    clone_method = getattr(value, "clone", None)
    if callable(clone_method):
        return clone_method()  # type: ignore[no-any-return]
    return copy.deepcopy(value)


@deep_clone.register
def _(value: list) -> list[Any]:  # type: ignore[type-arg]
    if type(value) is not list:
        return copy.deepcopy(value)
    return [deep_clone(item) for item in value]


@deep_clone.register
def _(value: dict) -> dict[Any, Any]:  # type: ignore[type-arg]
    if type(value) is not dict:
        return copy.deepcopy(value)
    # Keys are hashable and therefore treated as immutable.
    return {key: deep_clone(item) for key, item in value.items()}


@deep_clone.register
def _(value: tuple) -> tuple[Any, ...]:  # type: ignore[type-arg]
    items = [deep_clone(item) for item in value]
    if hasattr(value, "_fields"):  # namedtuple
        return type(value)(*items)
    return type(value)(items)


@deep_clone.register
def _(value: set) -> set[Any]:  # type: ignore[type-arg]
    if type(value) is not set:
        return copy.deepcopy(value)
    return {deep_clone(item) for item in value}


@deep_clone.register
def _(value: frozenset) -> frozenset[Any]:  # type: ignore[type-arg]
    return frozenset(deep_clone(item) for item in value)


@deep_clone.register
def _(value: BaseModel) -> BaseModel:
    return value.model_copy(deep=True)


def _clone_dataclass(value: Any) -> Any:
    """Rebuild a dataclass instance from cloned field values.

    Fields excluded from ``__init__`` are copied over after construction;
    ``object.__setattr__`` keeps this working for frozen dataclasses.
    """
    fields = dataclasses.fields(value)
    init_kwargs = {f.name: deep_clone(getattr(value, f.name)) for f in fields if f.init}
    clone = type(value)(**init_kwargs)
    for f in fields:
        if not f.init and hasattr(value, f.name):
            object.__setattr__(clone, f.name, deep_clone(getattr(value, f.name)))
    return clone


__all__ = ["deep_clone"]
