"""
SQL-like query interpreter over in-memory records.

Milestone
---------
M2 | Interpreter
Step 2.3 | Record queries

Each query expression maps a :class:`QueryContext` to a filtered list of
records; :class:`CompositeQuery` threads the output of one expression into the
next, so ``SELECT * / age > 25 / active = true`` reads like a pipeline.

Records are plain dicts. Filtering never mutates or copies them: the result
lists hold the same record objects as the input.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any

from patternlab.core.errors import ExpressionError

from .context import Context
from .nodes import Expression, interpret

Record = dict[str, Any]
Predicate = Callable[[Record], bool]


class QueryContext:
    """The record set a query expression runs against."""

    __slots__ = ("_records",)

    def __init__(self, records: Iterable[Record]) -> None:
        self._records: list[Record] = list(records)

    @property
    def records(self) -> list[Record]:
        return list(self._records)


class QueryExpression(ABC):
    """Base class for query nodes."""

    @abstractmethod
    def interpret(self, context: QueryContext) -> list[Record]:
        """Return the records selected from ``context``."""

    @abstractmethod
    def __str__(self) -> str: ...


class SelectAll(QueryExpression):
    def interpret(self, context: QueryContext) -> list[Record]:
        return context.records

    def __str__(self) -> str:
        return "SELECT *"


class Where(QueryExpression):
    """Keep records for which ``predicate`` holds; ``description`` is display only."""

    def __init__(self, predicate: Predicate, description: str) -> None:
        self.predicate = predicate
        self.description = description

    @classmethod
    def from_expression(cls, expression: Expression) -> Where:
        """
        Build a filter from a boolean expression tree.

        Each record is used as the variable context. A record that lacks a
        referenced field, or whose fields have the wrong type, does not match.
        """

        def predicate(record: Record) -> bool:
            try:
                return interpret(expression, Context(record)) is True
            except ExpressionError:
                return False

        return cls(predicate, str(expression))

    def interpret(self, context: QueryContext) -> list[Record]:
        return [r for r in context.records if self.predicate(r)]

    def __str__(self) -> str:
        return f"WHERE {self.description}"


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return f"'{value}'"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Equals(QueryExpression):
    """``field = value``; missing fields never match."""

    def __init__(self, field: str, value: Any) -> None:
        self.field = field
        self.value = value

    def interpret(self, context: QueryContext) -> list[Record]:
        return [r for r in context.records if self.field in r and r[self.field] == self.value]

    def __str__(self) -> str:
        return f"{self.field} = {_format_value(self.value)}"


class GreaterThan(QueryExpression):
    """``field > value`` for numeric fields; missing or non-numeric fields never match."""

    def __init__(self, field: str, value: int | float) -> None:
        self.field = field
        self.value = value

    def interpret(self, context: QueryContext) -> list[Record]:
        out: list[Record] = []
        for r in context.records:
            v = r.get(self.field)
            if isinstance(v, int | float) and not isinstance(v, bool) and v > self.value:
                out.append(r)
        return out

    def __str__(self) -> str:
        return f"{self.field} > {_format_value(self.value)}"


class CompositeQuery(QueryExpression):
    """Apply expressions in order, each to the previous one's result."""

    def __init__(self, *expressions: QueryExpression) -> None:
        self._expressions: list[QueryExpression] = list(expressions)

    def add(self, expression: QueryExpression) -> CompositeQuery:
        """Append ``expression``; returns ``self`` for chaining."""
        self._expressions.append(expression)
        return self

    def interpret(self, context: QueryContext) -> list[Record]:
        result = context.records
        for expression in self._expressions:
            result = expression.interpret(QueryContext(result))
        return result

    def __str__(self) -> str:
        return " ".join(str(e) for e in self._expressions)


__all__ = [
    "Record",
    "QueryContext",
    "QueryExpression",
    "SelectAll",
    "Where",
    "Equals",
    "GreaterThan",
    "CompositeQuery",
]
