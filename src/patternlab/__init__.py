"""PatternLab package bootstrap.

Two independent components live under this package:

- :mod:`patternlab.interpreter`: arithmetic/boolean expression trees, parsers
  and a small record query interpreter.
- :mod:`patternlab.history`: deep-copied state snapshots with caretaker,
  undo/redo and checkpoint managers.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
