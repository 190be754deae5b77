"""Core package initializer for PatternLab.

Shared plumbing used by both components:
    from patternlab.core.settings import settings, load_settings, Settings, get_logger
    from patternlab.core.errors import PatternLabError
    from patternlab.core.clone import deep_clone
"""

from __future__ import annotations

__all__ = ["__doc__"]
