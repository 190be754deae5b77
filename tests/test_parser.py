"""Tests for tokenizing and parsing infix expression text."""

from __future__ import annotations

import pytest

from patternlab.core.errors import EmptyExpression, ParseError
from patternlab.interpreter import (
    BinaryOp,
    BooleanExpressionParser,
    Context,
    Expression,
    ExpressionParser,
    Literal,
    Operator,
    UnaryOp,
    Variable,
    mul,
    neg,
    num,
    parse_arithmetic,
    parse_boolean,
    sub,
    tokenize,
    var,
)
from patternlab.interpreter.parser import TokenKind


@pytest.fixture  # type: ignore[misc]
def ctx() -> Context:
    return Context(a=10, b=5, c=7)


# ---- tokenizer ---------------------------------------------------------------


def test_tokenize_positions_and_kinds() -> None:
    """Tokens carry their kind and starting offset; whitespace is optional."""
    tokens = tokenize("a+(12 *b)")
    assert [t.text for t in tokens] == ["a", "+", "(", "12", "*", "b", ")"]
    assert [t.position for t in tokens] == [0, 1, 2, 3, 6, 7, 8]
    assert tokens[3].kind is TokenKind.NUMBER


def test_tokenize_keywords_case_insensitive() -> None:
    """Keywords are recognized in any case and normalized to upper case."""
    tokens = tokenize("x and Not y", frozenset({"AND", "NOT"}))
    assert [(t.kind, t.text) for t in tokens] == [
        (TokenKind.NAME, "x"),
        (TokenKind.KEYWORD, "AND"),
        (TokenKind.KEYWORD, "NOT"),
        (TokenKind.NAME, "y"),
    ]


def test_tokenize_rejects_unknown_character() -> None:
    """A character outside the token set is reported with its position."""
    with pytest.raises(ParseError, match="position 2") as info:
        tokenize("a % b")
    assert info.value.position == 2


# ---- arithmetic --------------------------------------------------------------


@pytest.mark.parametrize(  # type: ignore[misc]
    ("text", "rendered", "value"),
    [
        ("a + b * c", "(a + (b * c))", 45),
        ("a * b + c", "((a * b) + c)", 57),
        ("(a + b) * c", "((a + b) * c)", 105),
        ("(a + b) / (c - 2)", "((a + b) / (c - 2))", 3),
        ("a - b - c", "((a - b) - c)", -2),
        ("a / b / 2", "((a / b) / 2)", 1),
        ("((a))", "a", 10),
        ("-a + b", "(-a + b)", -5),
        ("a - -b", "(a - -b)", 15),
        ("-(a + b) * 2", "(-(a + b) * 2)", -30),
        ("2.5 * 2", "(2.5 * 2)", 5),
        ("a+b*c", "(a + (b * c))", 45),
    ],
)
def test_arithmetic_parse(ctx: Context, text: str, rendered: str, value: float) -> None:
    """Standard precedence, left associativity and unary minus."""
    tree = parse_arithmetic(text)
    assert str(tree) == rendered
    assert tree.interpret(ctx) == value


def test_parse_then_render_is_stable(ctx: Context) -> None:
    """Re-parsing rendered text yields an equal tree."""
    tree = parse_arithmetic("a + b * (c - 2) / -b")
    again = parse_arithmetic(str(tree))
    assert again == tree
    assert again.interpret(ctx) == tree.interpret(ctx)


def test_literals_keep_numeric_type() -> None:
    """Integers stay integers; decimals become floats."""
    assert parse_arithmetic("42") == Literal(42)
    assert parse_arithmetic("0.5") == Literal(0.5)
    assert parse_arithmetic(".5") == Literal(0.5)


@pytest.mark.parametrize(  # type: ignore[misc]
    ("text", "message"),
    [
        ("(a + b", "Unmatched '\\('"),
        ("a + b)", "Unmatched '\\)'"),
        ("a +", "missing its right operand"),
        ("* a", "missing its left operand"),
        ("a b", "Unexpected token 'b'"),
        ("()", "Empty parentheses"),
        ("-", "missing its operand"),
        ("a AND b", "Unexpected token 'AND'"),
    ],
)
def test_arithmetic_errors(text: str, message: str) -> None:
    """Malformed input raises ParseError with a readable message."""
    with pytest.raises(ParseError, match=message):
        ExpressionParser().parse(text)


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])  # type: ignore[misc]
def test_empty_input(text: str) -> None:
    """Blank input is its own error, still a ParseError."""
    with pytest.raises(EmptyExpression):
        parse_arithmetic(text)
    with pytest.raises(ParseError, match="Empty expression"):
        parse_boolean(text)


# ---- boolean -----------------------------------------------------------------


@pytest.fixture  # type: ignore[misc]
def bctx() -> Context:
    return Context(x=True, y=False, z=True)


@pytest.mark.parametrize(  # type: ignore[misc]
    ("text", "rendered", "value"),
    [
        ("x AND (y OR z)", "(x AND (y OR z))", True),
        ("(x AND y) OR (NOT z)", "((x AND y) OR NOT z)", False),
        ("x OR y AND z", "(x OR (y AND z))", True),
        ("NOT x AND y", "(NOT x AND y)", False),
        ("NOT (x AND y)", "NOT (x AND y)", True),
        ("x and not y", "(x AND NOT y)", True),
        ("X Or Y", "(x OR y)", True),
        ("TRUE and false", "(TRUE AND FALSE)", False),
        ("NOT NOT y", "NOT NOT y", False),
    ],
)
def test_boolean_parse(bctx: Context, text: str, rendered: str, value: bool) -> None:
    """OR binds loosest, NOT tightest; keywords and names are case-folded."""
    tree = BooleanExpressionParser().parse(text)
    assert str(tree) == rendered
    assert tree.interpret(bctx) is value


def test_boolean_variables_are_lowercased() -> None:
    """Mixed-case names resolve to their lower-case binding."""
    assert parse_boolean("Flag") == Variable("flag")


@pytest.mark.parametrize(  # type: ignore[misc]
    ("text", "message"),
    [
        ("x + y", "not part of the boolean grammar"),
        ("x AND", "missing its right operand"),
        ("OR y", "missing its left operand"),
        ("x y", "Unexpected token 'y'"),
        ("NOT", "missing its operand"),
    ],
)
def test_boolean_errors(text: str, message: str) -> None:
    """The boolean grammar rejects arithmetic symbols and dangling operators."""
    with pytest.raises(ParseError, match=message):
        parse_boolean(text)


def test_negative_literals() -> None:
    """A minus directly before a number is a literal; parentheses keep a negation."""
    assert parse_arithmetic("-5") == Literal(-5)
    assert parse_arithmetic("-2.5") == Literal(-2.5)
    assert parse_arithmetic("-(5)") == UnaryOp(Operator.NEG, Literal(5))
    assert parse_arithmetic("a * -5") == BinaryOp(Operator.MUL, Variable("a"), Literal(-5))


@pytest.mark.parametrize(  # type: ignore[misc]
    "tree",
    [
        neg(num(-5)),
        neg(num(5)),
        num(-5),
        neg(neg(num(5))),
        sub(var("a"), num(-5)),
        mul(neg(num(2.5)), var("b")),
    ],
)
def test_negation_renders_back_to_same_tree(ctx: Context, tree: Expression) -> None:
    """Rendering signed numbers and negations re-parses to an equal tree."""
    again = parse_arithmetic(str(tree))
    assert again == tree
    assert again.interpret(ctx) == tree.interpret(ctx)
