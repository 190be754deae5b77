"""Lightweight, typed Result container for explicit success/failure returns.

Motivation
----------
The parser and the evaluator raise :class:`~patternlab.core.errors.ExpressionError`
subclasses, which is the right default inside the library. At the boundary
(CLI, batch evaluation of many expressions) it is more convenient to get a
value back that says *either* "here is the number" *or* "here is what went
wrong". This module provides a minimal `Result[T, E]` with:
- `Ok(value)` / `Err(error)` variants,
- combinators: `map`, `map_err`, `flat_map`, `or_else`,
- ergonomic helpers: `unwrap`, `expect`, `unwrap_err`, `get_or`.

Example
-------
>>> from patternlab.core.result import ok, err, Result
>>> def half(x: int) -> Result[float, str]:
...     return ok(x / 2) if x else err("nothing to halve")
>>> ok(10).flat_map(half).unwrap()
5.0
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, cast

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")

_MISSING: Any = object()


class Result(Generic[T, E]):
    """Sum type representing either success (`Ok[T]`) or failure (`Err[E]`)."""

    # ----- Introspection -----------------------------------------------------
    def is_ok(self) -> bool:
        """Return ``True`` if this is an :class:`Ok` value."""
        return isinstance(self, Ok)

    def is_err(self) -> bool:
        """Return ``True`` if this is an :class:`Err` value."""
        return isinstance(self, Err)

    # ----- Unwraps -----------------------------------------------------------
    def unwrap(self, default: T = _MISSING) -> T:
        """Return the inner value if ``Ok``, else return ``default`` or raise.

        Parameters
        ----------
        default:
            Fallback returned when this is ``Err``. When omitted, unwrapping an
            ``Err`` raises :class:`RuntimeError`. ``None`` and ``False`` are
            valid fallbacks.
        """
        match self:
            case Ok(value=value):
                return cast(T, value)
        if default is not _MISSING:
            return default
        raise RuntimeError(f"Attempted to unwrap Err: {self!r}")

    def expect(self, msg: str) -> T:
        """Return the inner value if ``Ok``, else raise ``RuntimeError(msg)``."""
        match self:
            case Ok(value=value):
                return cast(T, value)
        raise RuntimeError(msg)

    def unwrap_err(self) -> E:
        """Return the error value if ``Err``, else raise."""
        match self:
            case Err(error=error):
                return cast(E, error)
        raise RuntimeError(f"Attempted to unwrap_err on Ok: {self!r}")

    # ----- Combinators -------------------------------------------------------
    def map(self, fn: Callable[[T], U]) -> Result[U, E]:
        """Apply ``fn`` to the success value; propagate error unchanged."""
        match self:
            case Ok(value=value):
                return Ok(fn(value))
        return cast(Result[U, E], self)

    def map_err(self, fn: Callable[[E], F]) -> Result[T, F]:
        """Apply ``fn`` to the error value; propagate success unchanged."""
        match self:
            case Err(error=error):
                return Err(fn(error))
        return cast(Result[T, F], self)

    def flat_map(self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain computations that already return a :class:`Result`."""
        match self:
            case Ok(value=value):
                return fn(value)
        return cast(Result[U, E], self)

    # ----- Utilities ---------------------------------------------------------
    def or_else(self, fallback: Callable[[E], Result[T, E]]) -> Result[T, E]:
        """If ``Err``, call ``fallback(err)``; otherwise return ``self``."""
        match self:
            case Err(error=error):
                return fallback(error)
        return self

    def get_or(self, default: T) -> T:
        """Return the success value or ``default`` if ``Err``."""
        return self.unwrap(default)


@dataclass(frozen=True, repr=False)
class Ok(Result[T, E]):
    """Successful result wrapping a value of type ``T``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, repr=False)
class Err(Result[T, E]):
    """Failed result wrapping an error payload of type ``E``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# ----- Convenience constructors ----------------------------------------------
def ok(value: T) -> Result[T, Any]:
    """Construct :class:`Ok` with better type inference at call sites."""
    return Ok(value)


def err(error: E) -> Result[Any, E]:
    """Construct :class:`Err` with better type inference at call sites."""
    return Err(error)


__all__ = ["Result", "Ok", "Err", "ok", "err"]
