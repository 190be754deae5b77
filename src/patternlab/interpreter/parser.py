"""
Infix parsers for the arithmetic and boolean grammars.

Milestone
---------
M2 | Interpreter
Step 2.2 | Text -> tree

Both grammars share one algorithm, driven by a :class:`Grammar` table:

1. **Tokenize** on whitespace and the operator characters ``()+-*/``.
   Identifiers that spell a grammar keyword (``AND OR NOT TRUE FALSE``) are
   matched case-insensitively and normalized to upper case.
2. **Strip** a pair of outer parentheses, but only when it wraps the whole
   token run: ``(a + b) + (c + d)`` starts with ``(`` and ends with ``)`` and
   is still *not* wrapped.
3. **Split** on the loosest-binding operator found outside any parentheses.
   The right-most occurrence is used, which makes every binary operator
   left-associative.
4. Otherwise the run is a **prefix** operator (``-`` / ``NOT``) applied to the
   rest, or a single **atom** (number, keyword literal, variable).

Because prefix operators are only considered after all binary splits, they
bind tighter than any binary operator: ``NOT x AND y`` is ``(NOT x) AND y``.
A minus written directly before a number is folded into a negative literal,
so ``-5`` parses as ``Literal(-5)`` while ``-(5)`` stays a negation.

Precedence
----------
=========== ========================= =====================
Grammar     loosest -> tightest       prefix
=========== ========================= =====================
arithmetic  ``+ -`` then ``* /``       ``-`` (negation)
boolean     ``OR`` then ``AND``        ``NOT``
=========== ========================= =====================

Variable names in the boolean grammar are folded to lower case, so
``X and Y`` looks up ``x`` and ``y``.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import ClassVar

from patternlab.core.errors import EmptyExpression, ParseError

from .nodes import BinaryOp, Expression, Literal, Operator, UnaryOp, Variable

# ---- Tokens ------------------------------------------------------------------


class TokenKind(enum.Enum):
    NUMBER = "number"
    NAME = "name"
    KEYWORD = "keyword"
    SYMBOL = "symbol"


@dataclass(frozen=True, slots=True)
class Token:
    """A lexeme and the character offset where it starts."""

    kind: TokenKind
    text: str
    position: int


_TOKEN_RE = re.compile(
    r"(?P<number>\d+(?:\.\d*)?|\.\d+)"
    r"|(?P<name>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<symbol>[()+\-*/])"
)


def tokenize(text: str, keywords: frozenset[str] = frozenset()) -> list[Token]:
    """
    Split ``text`` into tokens.

    Parameters
    ----------
    text : str
        Raw expression text. Whitespace is optional between tokens.
    keywords : frozenset[str]
        Upper-case words that become :attr:`TokenKind.KEYWORD` tokens when
        they appear in any letter case.

    Raises
    ------
    ParseError
        On any character that cannot start a token.
    """
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        if text[pos].isspace():
            pos += 1
            continue
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise ParseError(f"Unexpected character {text[pos]!r}", pos)
        kind = TokenKind(m.lastgroup)
        lexeme = m.group()
        if kind is TokenKind.NAME and lexeme.upper() in keywords:
            kind, lexeme = TokenKind.KEYWORD, lexeme.upper()
        tokens.append(Token(kind, lexeme, pos))
        pos = m.end()
    return tokens


# ---- Grammar tables ----------------------------------------------------------


@dataclass(frozen=True)
class Grammar:
    """Operator table consumed by :class:`ExpressionParser`.

    Attributes
    ----------
    name : str
        Label used in error messages.
    binary_levels : tuple[Mapping[str, Operator], ...]
        Binary operators grouped by precedence, loosest first.
    prefix : Mapping[str, Operator]
        Prefix (unary) operators.
    literals : Mapping[str, bool]
        Keywords that evaluate to constants.
    fold_variables : bool
        Lower-case variable names while parsing.
    """

    name: str
    binary_levels: tuple[Mapping[str, Operator], ...]
    prefix: Mapping[str, Operator]
    literals: Mapping[str, bool] = field(default_factory=dict)
    fold_variables: bool = False

    @property
    def keywords(self) -> frozenset[str]:
        words = set(self.literals) | set(self.prefix)
        for level in self.binary_levels:
            words |= set(level)
        return frozenset(w for w in words if w.isalpha())

    def is_operator(self, token: Token) -> bool:
        if token.kind not in (TokenKind.SYMBOL, TokenKind.KEYWORD):
            return False
        if token.text in self.prefix:
            return True
        return any(token.text in level for level in self.binary_levels)


ARITHMETIC = Grammar(
    name="arithmetic",
    binary_levels=(
        {"+": Operator.ADD, "-": Operator.SUB},
        {"*": Operator.MUL, "/": Operator.DIV},
    ),
    prefix={"-": Operator.NEG},
)

BOOLEAN = Grammar(
    name="boolean",
    binary_levels=({"OR": Operator.OR}, {"AND": Operator.AND}),
    prefix={"NOT": Operator.NOT},
    literals={"TRUE": True, "FALSE": False},
    fold_variables=True,
)


# ---- Parser ------------------------------------------------------------------


class ExpressionParser:
    """
    Parse arithmetic infix text into an :data:`Expression` tree.

    >>> str(ExpressionParser().parse("a + b * c"))
    '(a + (b * c))'
    """

    grammar: ClassVar[Grammar] = ARITHMETIC

    def parse(self, text: str) -> Expression:
        """Tokenize ``text`` and build the tree.

        Raises
        ------
        EmptyExpression
            ``text`` holds no tokens.
        ParseError
            Unbalanced parentheses, dangling operators, adjacent operands or
            characters outside the grammar.
        """
        tokens = tokenize(text, self.grammar.keywords)
        if not tokens:
            raise EmptyExpression()
        self._check_tokens(tokens)
        return self._parse(tokens)

    # ----- validation --------------------------------------------------------

    def _check_tokens(self, tokens: Sequence[Token]) -> None:
        open_parens: list[Token] = []
        for tok in tokens:
            if tok.kind is not TokenKind.SYMBOL:
                continue
            if tok.text == "(":
                open_parens.append(tok)
            elif tok.text == ")":
                if not open_parens:
                    raise ParseError("Unmatched ')'", tok.position)
                open_parens.pop()
            elif not self.grammar.is_operator(tok):
                raise ParseError(
                    f"Operator {tok.text!r} is not part of the {self.grammar.name} grammar",
                    tok.position,
                )
        if open_parens:
            raise ParseError("Unmatched '('", open_parens[-1].position)

    # ----- recursive descent over token runs --------------------------------

    def _parse(self, tokens: Sequence[Token]) -> Expression:
        tokens = self._strip_wrapping(tokens)

        for level in self.grammar.binary_levels:
            idx = self._find_split(tokens, level)
            if idx is None:
                continue
            op_tok = tokens[idx]
            left, right = tokens[:idx], tokens[idx + 1 :]
            if not right:
                raise ParseError(
                    f"Operator {op_tok.text!r} is missing its right operand", op_tok.position
                )
            return BinaryOp(level[op_tok.text], self._parse(left), self._parse(right))

        first = tokens[0]
        if self._is_prefix(first):
            rest = tokens[1:]
            if not rest:
                raise ParseError(f"Operator {first.text!r} is missing its operand", first.position)
            op = self.grammar.prefix[first.text]
            if op is Operator.NEG and len(rest) == 1 and rest[0].kind is TokenKind.NUMBER:
                # A minus written directly before a number is a negative literal.
                return Literal(-self._number(rest[0]))
            return UnaryOp(op, self._parse(rest))

        if self.grammar.is_operator(first):
            raise ParseError(f"Operator {first.text!r} is missing its left operand", first.position)

        end = self._operand_end(tokens)
        if end < len(tokens):
            stray = tokens[end]
            raise ParseError(f"Unexpected token {stray.text!r}", stray.position)
        return self._atom(first)

    def _strip_wrapping(self, tokens: Sequence[Token]) -> Sequence[Token]:
        """Remove outer parentheses for as long as they wrap the whole run."""
        while tokens and tokens[0].text == "(" and self._matching(tokens, 0) == len(tokens) - 1:
            inner = tokens[1:-1]
            if not inner:
                raise ParseError("Empty parentheses", tokens[0].position)
            tokens = inner
        return tokens

    @staticmethod
    def _matching(tokens: Sequence[Token], open_idx: int) -> int:
        """Return the index of the ``)`` closing the ``(`` at ``open_idx``."""
        depth = 0
        for i in range(open_idx, len(tokens)):
            if tokens[i].text == "(":
                depth += 1
            elif tokens[i].text == ")":
                depth -= 1
                if depth == 0:
                    return i
        raise ParseError("Unmatched '('", tokens[open_idx].position)

    def _find_split(self, tokens: Sequence[Token], level: Mapping[str, Operator]) -> int | None:
        """Right-most top-level binary operator from ``level``, or ``None``."""
        depth = 0
        found: int | None = None
        for i, tok in enumerate(tokens):
            if tok.text == "(":
                depth += 1
            elif tok.text == ")":
                depth -= 1
            elif depth == 0 and tok.text in level and self.grammar.is_operator(tok):
                # An operator right after another operator (or at the start)
                # is in prefix position, not a binary split point.
                if i > 0 and not self.grammar.is_operator(tokens[i - 1]):
                    found = i
        return found

    def _is_prefix(self, tok: Token) -> bool:
        return tok.kind in (TokenKind.SYMBOL, TokenKind.KEYWORD) and tok.text in self.grammar.prefix

    def _operand_end(self, tokens: Sequence[Token]) -> int:
        """Index just past the first complete operand of ``tokens``."""
        if tokens[0].text == "(":
            return self._matching(tokens, 0) + 1
        return 1

    @staticmethod
    def _number(tok: Token) -> int | float:
        return float(tok.text) if "." in tok.text else int(tok.text)

    def _atom(self, tok: Token) -> Expression:
        if tok.kind is TokenKind.NUMBER:
            return Literal(self._number(tok))
        if tok.kind is TokenKind.KEYWORD and tok.text in self.grammar.literals:
            return Literal(self.grammar.literals[tok.text])
        if tok.kind is TokenKind.NAME:
            name = tok.text.lower() if self.grammar.fold_variables else tok.text
            return Variable(name)
        raise ParseError(f"Unexpected token {tok.text!r}", tok.position)


class BooleanExpressionParser(ExpressionParser):
    """
    Parse boolean infix text (``AND``/``OR``/``NOT``/``TRUE``/``FALSE``).

    >>> str(BooleanExpressionParser().parse("x and (y or z)"))
    '(x AND (y OR z))'
    """

    grammar: ClassVar[Grammar] = BOOLEAN


def parse_arithmetic(text: str) -> Expression:
    """Shortcut for ``ExpressionParser().parse(text)``."""
    return ExpressionParser().parse(text)


def parse_boolean(text: str) -> Expression:
    """Shortcut for ``BooleanExpressionParser().parse(text)``."""
    return BooleanExpressionParser().parse(text)


__all__ = [
    "Token",
    "TokenKind",
    "tokenize",
    "Grammar",
    "ARITHMETIC",
    "BOOLEAN",
    "ExpressionParser",
    "BooleanExpressionParser",
    "parse_arithmetic",
    "parse_boolean",
]
