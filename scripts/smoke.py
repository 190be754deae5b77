# scripts/smoke.py
"""
Smoke Test Script for PatternLab.

Walks through both halves of the toolkit end to end: parses and evaluates a
few expressions, then edits a document with undo/redo and checkpoints a game
character.

Usage
-----
1. Run with the default expressions:
    $ uv run python scripts/smoke.py

2. Evaluate your own arithmetic expression with a=10, b=5, c=7 bound:
    $ uv run python scripts/smoke.py --expr "a * (b - c)"
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from patternlab.history import CheckpointManager, GameCharacter, TextDocument, UndoHistory
from patternlab.interpreter import Context, evaluate

# --------------------------------------------------------------------------- #
# Environment Setup
# --------------------------------------------------------------------------- #
env_path = Path(".env")
if env_path.exists():
    load_dotenv(env_path)
    print("✅ Loaded .env file")

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

# --------------------------------------------------------------------------- #
# Test Data
# --------------------------------------------------------------------------- #
ARITHMETIC = ["a + b * c", "(a + b) / (c - 2)", "a / (b - 5)", "a + d"]
BOOLEAN = ["x AND (y OR z)", "(x AND y) OR (NOT z)"]


def run_expressions(extra: str | None) -> None:
    numbers = Context(a=10, b=5, c=7)
    flags = Context(x=True, y=False, z=True)

    print("\n🧮 Arithmetic")
    for text in ARITHMETIC + ([extra] if extra else []):
        result = evaluate(text, numbers)
        if result.is_ok():
            tree, value = result.unwrap()
            print(f"  {tree} = {value}")
        else:
            print(f"  {text} -> ❌ {result.unwrap_err()}")

    print("\n🔣 Boolean")
    for text in BOOLEAN:
        tree, value = evaluate(text, flags, logic=True).unwrap()
        print(f"  {tree} = {value}")


def run_history() -> None:
    print("\n📝 Document undo/redo")
    doc = TextDocument()
    history = UndoHistory(doc)
    for chunk in ("Hello", " World", "!"):
        doc.type_text(chunk)
        history.save_state()
    history.undo()
    print(f"  after undo: {doc.content!r}")
    history.redo()
    print(f"  after redo: {doc.content!r}")
    for row in history.history_states():
        print(f"  - {row.created_at:%H:%M:%S} {row.preview!r}")

    print("\n🎮 Character checkpoints")
    hero = GameCharacter("Hero")
    saves = CheckpointManager(hero, capacity=3)
    saves.create_checkpoint("start")
    hero.take_damage(40)
    hero.add_item("potion", "Health Potion", 2)
    saves.auto_save()
    saves.restore_checkpoint("start")
    print(f"  restored health: {hero.get_state().health}")
    saves.load_last_auto_save()
    print(f"  auto-save health: {hero.get_state().health}")


def main() -> None:
    """Execute the smoke test workflow."""
    parser = argparse.ArgumentParser(description="Run PatternLab Smoke Test")
    parser.add_argument("--expr", "-e", type=str, help="Extra arithmetic expression to evaluate")
    args = parser.parse_args()

    run_expressions(args.expr)
    run_history()

    print("\n" + "=" * 60)
    print("✅ Smoke run finished")
    print("=" * 60)


if __name__ == "__main__":
    main()
