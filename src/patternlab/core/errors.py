"""Exception taxonomy shared by the interpreter and history components.

All errors are local and recoverable: callers decide whether to handle or
propagate them. "Not found" lookups (checkpoints, auto-saves) are *not*
errors and return booleans instead.

Hierarchy
---------
PatternLabError
├── ExpressionError
│   ├── UndefinedVariable
│   ├── DivisionByZero
│   ├── TypeMismatch
│   └── ParseError
│       └── EmptyExpression
└── HistoryError
    └── InvalidIndex
"""

from __future__ import annotations

from typing import Any


class PatternLabError(Exception):
    """Base class for every error raised by PatternLab."""


# ---- Expression evaluation / parsing ---------------------------------------


class ExpressionError(PatternLabError):
    """Evaluation or parse failure of an expression."""


class UndefinedVariable(ExpressionError):
    """Raised when evaluation references a name that is not bound in the context."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Variable {name} not defined")
        self.name = name


class DivisionByZero(ExpressionError):
    """Raised when the divisor of an arithmetic division evaluates to zero."""

    def __init__(self) -> None:
        super().__init__("Division by zero")


class TypeMismatch(ExpressionError):
    """Raised when an operator receives an operand of the wrong kind."""

    def __init__(self, operator: str, value: Any) -> None:
        super().__init__(
            f"Operator {operator} cannot be applied to {type(value).__name__} {value!r}"
        )
        self.operator = operator
        self.value = value


class ParseError(ExpressionError):
    """Raised when expression text is malformed."""

    def __init__(self, message: str, position: int | None = None) -> None:
        text = message if position is None else f"{message} (at position {position})"
        super().__init__(text)
        self.position = position


class EmptyExpression(ParseError):
    """Raised when the parser is handed an empty token stream."""

    def __init__(self) -> None:
        super().__init__("Empty expression")


# ---- Snapshot history -------------------------------------------------------


class HistoryError(PatternLabError):
    """Failure while navigating a snapshot history."""


class InvalidIndex(HistoryError):
    """Raised when a positional restore falls outside ``[0, size)``."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"Invalid memento index {index} (history has {size} entries)")
        self.index = index
        self.size = size


__all__ = [
    "PatternLabError",
    "ExpressionError",
    "UndefinedVariable",
    "DivisionByZero",
    "TypeMismatch",
    "ParseError",
    "EmptyExpression",
    "HistoryError",
    "InvalidIndex",
]
