"""
Expression tree nodes, evaluation and canonical rendering.

Milestone
---------
M2 | Interpreter
Step 2.1 | Closed node set

The tree is a closed tagged variant of four frozen dataclasses:

- :class:`Literal`  : a number or boolean constant.
- :class:`Variable` : a name resolved against a :class:`Context`.
- :class:`UnaryOp`  : ``NEG`` (arithmetic) or ``NOT`` (boolean) applied to one operand.
- :class:`BinaryOp` : ``+ - * /`` or ``AND OR`` applied to two operands.

Evaluation (:func:`interpret`) and rendering (:func:`render`) are each a single
``match`` over the variant, so a new node kind or operator is a type error
until both are taught about it.

Design Notes
------------
- **Immutability**: nodes are ``frozen=True`` and own their children; trees
  never share subtrees in the parser output.
- **No short-circuit**: both operands of ``AND``/``OR`` are always evaluated.
  Evaluation is side-effect free, so the only observable difference is that an
  unbound variable on the right-hand side is always reported.
- **Strict operand kinds**: arithmetic operators reject booleans and boolean
  operators reject numbers (:class:`TypeMismatch`), even though ``bool`` is an
  ``int`` subclass in Python.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import assert_never

from patternlab.core.errors import DivisionByZero, TypeMismatch

from .context import Context, Value

Number = int | float


class Operator(enum.Enum):
    """Closed operator set.

    The value is the rendered symbol, except for ``NEG`` which renders as ``-``
    but needs a distinct value from ``SUB``.
    """

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    NEG = "neg"
    AND = "AND"
    OR = "OR"
    NOT = "NOT"

    @property
    def symbol(self) -> str:
        """Return the textual form used by :func:`render`."""
        return "-" if self is Operator.NEG else self.value

    @property
    def is_unary(self) -> bool:
        return self in (Operator.NEG, Operator.NOT)

    @property
    def is_boolean(self) -> bool:
        return self in (Operator.AND, Operator.OR, Operator.NOT)


class _Node:
    """Mixin giving every node ``interpret`` and ``__str__``."""

    __slots__ = ()

    def interpret(self, context: Context) -> Value:
        """Evaluate this tree against ``context``."""
        return interpret(self, context)  # type: ignore[arg-type]

    def __str__(self) -> str:
        return render(self)  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class Literal(_Node):
    """A constant number or boolean."""

    value: Value


@dataclass(frozen=True, slots=True)
class Variable(_Node):
    """A reference to a name bound in the evaluation context."""

    name: str


@dataclass(frozen=True, slots=True)
class UnaryOp(_Node):
    """A prefix operator applied to a single operand."""

    operator: Operator
    operand: Expression

    def __post_init__(self) -> None:
        if not self.operator.is_unary:
            raise ValueError(f"{self.operator.name} is not a unary operator")


@dataclass(frozen=True, slots=True)
class BinaryOp(_Node):
    """An infix operator applied to two operands."""

    operator: Operator
    left: Expression
    right: Expression

    def __post_init__(self) -> None:
        if self.operator.is_unary:
            raise ValueError(f"{self.operator.name} is not a binary operator")


Expression = Literal | Variable | UnaryOp | BinaryOp


# --------------------------------------------------------------------------- #
# Evaluation
# --------------------------------------------------------------------------- #


def _number(operator: Operator, value: Value) -> Number:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise TypeMismatch(operator.symbol, value)
    return value


def _truth(operator: Operator, value: Value) -> bool:
    if not isinstance(value, bool):
        raise TypeMismatch(operator.symbol, value)
    return value


def interpret(node: Expression, context: Context) -> Value:
    """
    Recursively evaluate ``node`` against ``context``.

    Raises
    ------
    UndefinedVariable
        A :class:`Variable` name is not bound in ``context``.
    DivisionByZero
        The right operand of a division evaluates to zero.
    TypeMismatch
        An operator receives an operand of the wrong kind.
    """
    match node:
        case Literal(value=value):
            return value
        case Variable(name=name):
            return context.get(name)
        case UnaryOp(operator=Operator.NEG, operand=operand):
            return -_number(Operator.NEG, interpret(operand, context))
        case UnaryOp(operator=Operator.NOT, operand=operand):
            return not _truth(Operator.NOT, interpret(operand, context))
        case UnaryOp(operator=op):
            raise ValueError(f"Unsupported unary operator: {op}")
        case BinaryOp(operator=op, left=left, right=right):
            lhs = interpret(left, context)
            rhs = interpret(right, context)
            return _apply_binary(op, lhs, rhs)
        case _:
            assert_never(node)


def _apply_binary(op: Operator, lhs: Value, rhs: Value) -> Value:
    if op.is_boolean:
        a, b = _truth(op, lhs), _truth(op, rhs)
        if op is Operator.AND:
            return a and b
        return a or b

    x, y = _number(op, lhs), _number(op, rhs)
    match op:
        case Operator.ADD:
            return x + y
        case Operator.SUB:
            return x - y
        case Operator.MUL:
            return x * y
        case Operator.DIV:
            if y == 0:
                raise DivisionByZero()
            return x / y
    raise ValueError(f"Unsupported binary operator: {op}")


# --------------------------------------------------------------------------- #
# Rendering
# --------------------------------------------------------------------------- #


def format_value(value: Value) -> str:
    """Text form of a number or boolean as used in rendered expressions."""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render(node: Expression) -> str:
    """
    Return the fully parenthesized, deterministic text form of ``node``.

    Binary nodes render as ``(<left> <op> <right>)``; ``NOT`` renders as
    ``NOT <operand>`` and unary minus as ``-<operand>`` without adding
    parentheses (a binary operand brings its own). The one exception is a
    non-negative number under unary minus, rendered ``-(5)``: the parser reads
    ``-5`` as the literal ``-5``, so the parentheses keep the two trees apart.

    >>> render(BinaryOp(Operator.ADD, Variable("a"), Literal(5)))
    '(a + 5)'
    """
    match node:
        case Literal(value=value):
            return format_value(value)
        case Variable(name=name):
            return name
        case UnaryOp(operator=Operator.NOT, operand=operand):
            return f"NOT {render(operand)}"
        case UnaryOp(operator=Operator.NEG, operand=Literal(value=value)) if (
            not isinstance(value, bool) and value >= 0
        ):
            return f"-({format_value(value)})"
        case UnaryOp(operator=op, operand=operand):
            return f"{op.symbol}{render(operand)}"
        case BinaryOp(operator=op, left=left, right=right):
            return f"({render(left)} {op.symbol} {render(right)})"
        case _:
            assert_never(node)


# --------------------------------------------------------------------------- #
# Builders
# --------------------------------------------------------------------------- #


def num(value: Number) -> Literal:
    """Numeric literal."""
    return Literal(value)


def boolean(value: bool) -> Literal:
    """Boolean literal."""
    return Literal(bool(value))


def var(name: str) -> Variable:
    return Variable(name)


def add(left: Expression, right: Expression) -> BinaryOp:
    return BinaryOp(Operator.ADD, left, right)


def sub(left: Expression, right: Expression) -> BinaryOp:
    return BinaryOp(Operator.SUB, left, right)


def mul(left: Expression, right: Expression) -> BinaryOp:
    return BinaryOp(Operator.MUL, left, right)


def div(left: Expression, right: Expression) -> BinaryOp:
    return BinaryOp(Operator.DIV, left, right)


def neg(operand: Expression) -> UnaryOp:
    return UnaryOp(Operator.NEG, operand)


def and_(left: Expression, right: Expression) -> BinaryOp:
    return BinaryOp(Operator.AND, left, right)


def or_(left: Expression, right: Expression) -> BinaryOp:
    return BinaryOp(Operator.OR, left, right)


def not_(operand: Expression) -> UnaryOp:
    return UnaryOp(Operator.NOT, operand)


__all__ = [
    "Operator",
    "Expression",
    "Literal",
    "Variable",
    "UnaryOp",
    "BinaryOp",
    "interpret",
    "render",
    "format_value",
    "num",
    "boolean",
    "var",
    "add",
    "sub",
    "mul",
    "div",
    "neg",
    "and_",
    "or_",
    "not_",
]
