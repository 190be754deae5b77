"""Variable bindings consulted while evaluating an expression tree."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any

from patternlab.core.errors import UndefinedVariable

Value = int | float | bool

_MISSING: Any = object()


class Context(MutableMapping[str, Value]):
    """
    Mutable mapping from variable name to a number or boolean.

    Besides the mapping protocol it offers :meth:`set` / :meth:`get` for
    explicit use. Without a default, :meth:`get` raises
    :class:`UndefinedVariable` instead of returning ``None``, because an
    unbound name is always an evaluation error; with one it behaves like
    ``Mapping.get``. Item access keeps the plain mapping contract and raises
    ``KeyError``.

    Examples
    --------
    >>> ctx = Context(a=10, b=5)
    >>> ctx.set("c", 7)
    >>> ctx.get("c")
    7
    """

    __slots__ = ("_vars",)

    def __init__(self, bindings: Mapping[str, Value] | None = None, **kwargs: Value) -> None:
        self._vars: dict[str, Value] = {}
        if bindings:
            self._vars.update(bindings)
        self._vars.update(kwargs)

    def set(self, name: str, value: Value) -> None:
        """Bind ``name`` to ``value``, replacing any previous binding."""
        self._vars[name] = value

    def get(self, name: str, default: Any = _MISSING) -> Any:
        """Return the value bound to ``name``.

        Falls back to ``default`` when given, else raises :class:`UndefinedVariable`.
        """
        try:
            return self._vars[name]
        except KeyError:
            if default is not _MISSING:
                return default
            raise UndefinedVariable(name) from None

    # ----- MutableMapping protocol -------------------------------------------

    def __getitem__(self, name: str) -> Value:
        return self._vars[name]

    def __setitem__(self, name: str, value: Value) -> None:
        self.set(name, value)

    def __delitem__(self, name: str) -> None:
        del self._vars[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __repr__(self) -> str:
        return f"Context({self._vars!r})"


__all__ = ["Context", "Value"]
