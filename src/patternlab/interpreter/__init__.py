"""Expression evaluator (Interpreter pattern).

Re-exports the node types, parsers and query interpreter, and offers
:func:`evaluate`, a one-call ``text -> Result`` entry point for callers that
prefer explicit success/failure values over exceptions.
"""

from __future__ import annotations

from collections.abc import Mapping

from patternlab.core.errors import ExpressionError
from patternlab.core.result import Result, err, ok
from patternlab.core.settings import get_logger

from .context import Context, Value
from .nodes import (
    BinaryOp,
    Expression,
    Literal,
    Operator,
    UnaryOp,
    Variable,
    add,
    and_,
    boolean,
    div,
    interpret,
    mul,
    neg,
    not_,
    num,
    or_,
    render,
    sub,
    var,
)
from .parser import (
    BooleanExpressionParser,
    ExpressionParser,
    parse_arithmetic,
    parse_boolean,
    tokenize,
)
from .query import (
    CompositeQuery,
    Equals,
    GreaterThan,
    QueryContext,
    QueryExpression,
    SelectAll,
    Where,
)

logger = get_logger(__name__)


def evaluate(
    text: str,
    bindings: Mapping[str, Value] | Context | None = None,
    *,
    logic: bool = False,
) -> Result[tuple[Expression, Value], ExpressionError]:
    """Parse and evaluate ``text`` in one step.

    Parameters
    ----------
    text : str
        Infix expression.
    bindings : Mapping[str, Value] | Context | None
        Variable values; a plain mapping is wrapped in a :class:`Context`.
    logic : bool
        Use the boolean grammar instead of the arithmetic one.

    Returns
    -------
    Result[tuple[Expression, Value], ExpressionError]
        ``Ok((tree, value))`` on success, ``Err(error)`` for any parse or
        evaluation failure.
    """
    ctx = bindings if isinstance(bindings, Context) else Context(bindings)
    parser = BooleanExpressionParser() if logic else ExpressionParser()
    try:
        tree = parser.parse(text)
        value = tree.interpret(ctx)
    except ExpressionError as exc:
        logger.debug("Evaluation of %r failed: %s", text, exc)
        return err(exc)
    return ok((tree, value))


__all__ = [
    "Context",
    "Value",
    "Operator",
    "Expression",
    "Literal",
    "Variable",
    "UnaryOp",
    "BinaryOp",
    "interpret",
    "render",
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
    "tokenize",
    "ExpressionParser",
    "BooleanExpressionParser",
    "parse_arithmetic",
    "parse_boolean",
    "QueryContext",
    "QueryExpression",
    "SelectAll",
    "Where",
    "Equals",
    "GreaterThan",
    "CompositeQuery",
    "evaluate",
]
