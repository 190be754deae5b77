# src/patternlab/cli.py
"""
PatternLab Command Line Interface (CLI).

This module implements a small terminal front-end for the expression evaluator
using `typer` and `rich`.

Features
--------
- **Arithmetic**: ``eval`` parses ``+ - * /`` expressions with parentheses and
  unary minus.
- **Boolean**: ``logic`` parses ``AND OR NOT TRUE FALSE`` expressions.
- **Tree view**: ``--tree`` draws the parsed expression tree.

Usage
-----
    $ patternlab eval "(a + b) / (c - 2)" --var a=10 --var b=5 --var c=7
    $ patternlab logic "x AND (y OR z)" -V x=true -V y=false -V z=true --tree
"""

from __future__ import annotations

from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.tree import Tree

from patternlab.core.errors import ExpressionError
from patternlab.interpreter import evaluate
from patternlab.interpreter.context import Value
from patternlab.interpreter.nodes import (
    BinaryOp,
    Expression,
    Literal,
    UnaryOp,
    Variable,
    format_value,
    render,
)

# Pick up LOG_LEVEL / PATTERNLAB_* overrides from a local .env file
load_dotenv()

app = typer.Typer(
    help="PatternLab: evaluate arithmetic and boolean expressions.",
    rich_markup_mode="markdown",
    no_args_is_help=True,
)
console = Console()

_TRUE_WORDS = {"true", "t", "yes", "1"}
_FALSE_WORDS = {"false", "f", "no", "0"}


# --------------------------------------------------------------------------- #
# Helpers: bindings & rendering
# --------------------------------------------------------------------------- #


def _split_binding(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    name, value = name.strip(), value.strip()
    if not sep or not name or not value:
        raise typer.BadParameter(f"Expected NAME=VALUE, got {raw!r}", param_hint="--var")
    return name, value


def _number(raw: str) -> Value:
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        raise typer.BadParameter(f"{raw!r} is not a number", param_hint="--var") from None


def _truth(raw: str) -> Value:
    word = raw.lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise typer.BadParameter(f"{raw!r} is not a boolean", param_hint="--var")


def parse_bindings(raw: list[str] | None, *, logic: bool) -> dict[str, Value]:
    """Turn repeated ``--var NAME=VALUE`` options into a bindings dict.

    Boolean variable names are lower-cased to match the boolean parser.
    """
    bindings: dict[str, Value] = {}
    for item in raw or []:
        name, value = _split_binding(item)
        if logic:
            bindings[name.lower()] = _truth(value)
        else:
            bindings[name] = _number(value)
    return bindings


def _build_tree(node: Expression, tree: Tree) -> None:
    """Append ``node`` and its children under ``tree``."""
    match node:
        case Literal() | Variable():
            tree.add(f"[green]{render(node)}[/green]")
        case UnaryOp(operator=op, operand=operand):
            branch = tree.add(f"[bold magenta]{op.symbol}[/bold magenta]")
            _build_tree(operand, branch)
        case BinaryOp(operator=op, left=left, right=right):
            branch = tree.add(f"[bold cyan]{op.symbol}[/bold cyan]")
            _build_tree(left, branch)
            _build_tree(right, branch)


def _run(expression: str, variables: list[str] | None, *, logic: bool, show_tree: bool) -> None:
    bindings = parse_bindings(variables, logic=logic)
    result = evaluate(expression, bindings, logic=logic)

    if result.is_err():
        error: ExpressionError = result.unwrap_err()
        console.print(f"[bold red]❌ {type(error).__name__}:[/bold red] {escape(str(error))}")
        raise typer.Exit(code=1)

    tree, value = result.unwrap()
    console.print(
        Panel.fit(
            f"[bold]{render(tree)}[/bold]\n= [bold green]{format_value(value)}[/bold green]",
            title="Boolean" if logic else "Arithmetic",
            border_style="cyan",
        )
    )
    if show_tree:
        root = Tree("[dim]expression[/dim]")
        _build_tree(tree, root)
        console.print(root)


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #

VarsOption = Annotated[
    list[str] | None,
    typer.Option(
        "--var",
        "-V",
        help="Variable binding NAME=VALUE (repeatable).",
    ),
]
TreeOption = Annotated[
    bool,
    typer.Option("--tree", "-t", help="Draw the parsed expression tree."),
]


@app.command("eval")  # type: ignore[misc]
def eval_command(
    expression: Annotated[str, typer.Argument(help="Arithmetic expression, e.g. 'a + b * c'.")],
    var: VarsOption = None,
    tree: TreeOption = False,
) -> None:
    """
    Evaluate an arithmetic expression.

    Supports `+ - * /`, parentheses, unary minus and numeric literals.
    """
    _run(expression, var, logic=False, show_tree=tree)


@app.command("logic")  # type: ignore[misc]
def logic_command(
    expression: Annotated[str, typer.Argument(help="Boolean expression, e.g. 'x AND NOT y'.")],
    var: VarsOption = None,
    tree: TreeOption = False,
) -> None:
    """
    Evaluate a boolean expression.

    Keywords `AND OR NOT TRUE FALSE` are case-insensitive; `NOT` binds
    tightest, then `AND`, then `OR`.
    """
    _run(expression, var, logic=True, show_tree=tree)


if __name__ == "__main__":
    app()
