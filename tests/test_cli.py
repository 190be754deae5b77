# tests/test_cli.py
"""
Tests for the PatternLab command-line interface (CLI).

Scope
-----
These tests verify the interaction layer provided by Typer:
1.  **Command Registration**: `eval`, `logic` and `--help` work.
2.  **Binding Parsing**: `--var NAME=VALUE` is validated before evaluation.
3.  **Evaluation**: results and expression errors are rendered with Rich and
    mapped to exit codes (0 success, 1 expression error, 2 usage error).

We use `typer.testing.CliRunner` to invoke the app in-process.
"""

from __future__ import annotations

import pytest
import typer
from typer.testing import CliRunner

from patternlab.cli import app, parse_bindings


@pytest.fixture  # type: ignore[misc]
def runner() -> CliRunner:
    """Create a fresh CliRunner for each test."""
    return CliRunner()


def test_cli_help_shows_commands(runner: CliRunner) -> None:
    """Invoking --help should list both commands and exit 0."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0, f"Help failed: {result.output}"
    assert "eval" in result.output
    assert "logic" in result.output


def test_eval_happy_path(runner: CliRunner) -> None:
    """Arithmetic evaluation prints the canonical form and the value."""
    result = runner.invoke(
        app, ["eval", "a + b * c", "--var", "a=10", "--var", "b=5", "-V", "c=7"]
    )
    assert result.exit_code == 0, f"CLI failed: {result.output}"
    assert "(a + (b * c))" in result.output
    assert "45" in result.output


def test_eval_with_tree(runner: CliRunner) -> None:
    """`--tree` draws operator and leaf nodes."""
    result = runner.invoke(app, ["eval", "(a + b) / 2", "-V", "a=1", "-V", "b=3", "--tree"])
    assert result.exit_code == 0, f"CLI failed: {result.output}"
    assert "expression" in result.output
    assert "/" in result.output


def test_logic_happy_path(runner: CliRunner) -> None:
    """Boolean evaluation accepts mixed-case names and truthy words."""
    result = runner.invoke(
        app, ["logic", "X and (y or z)", "-V", "X=yes", "-V", "y=false", "-V", "z=1"]
    )
    assert result.exit_code == 0, f"CLI failed: {result.output}"
    assert "(x AND (y OR z))" in result.output
    assert "TRUE" in result.output


@pytest.mark.parametrize(  # type: ignore[misc]
    ("args", "error_name"),
    [
        (["eval", "a / 0", "-V", "a=1"], "DivisionByZero"),
        (["eval", "a + b", "-V", "a=1"], "UndefinedVariable"),
        (["eval", "(a + 1"], "ParseError"),
        (["logic", "x AND"], "ParseError"),
    ],
)
def test_expression_errors_exit_1(runner: CliRunner, args: list[str], error_name: str) -> None:
    """Expression failures are reported by type with exit code 1."""
    result = runner.invoke(app, args)
    assert result.exit_code == 1, f"Unexpected exit: {result.output}"
    assert error_name in result.output


@pytest.mark.parametrize(  # type: ignore[misc]
    "args",
    [
        ["eval", "a", "-V", "a"],
        ["eval", "a", "-V", "a=ten"],
        ["logic", "x", "-V", "x=maybe"],
    ],
)
def test_bad_binding_is_usage_error(runner: CliRunner, args: list[str]) -> None:
    """Malformed `--var` values are rejected before evaluation."""
    result = runner.invoke(app, args)
    assert result.exit_code == 2, f"Unexpected exit: {result.output}"


def test_parse_bindings_types() -> None:
    """Numbers keep int/float; boolean names are lower-cased."""
    assert parse_bindings(["a=1", "b=2.5"], logic=False) == {"a": 1, "b": 2.5}
    assert parse_bindings(["Flag=T", "other=no"], logic=True) == {"flag": True, "other": False}
    assert parse_bindings(None, logic=False) == {}
    with pytest.raises(typer.BadParameter):
        parse_bindings(["=1"], logic=False)
