"""ANSI styling helpers for terminal output."""

from __future__ import annotations

import os

_FG_CODES = {"yellow": 33}

# Thinking blocks switch the foreground to bright black and back to default.
THINK_STYLE = "\x1b[90m"
DEFAULT_FG = "\x1b[39m"
RESET = "\x1b[0m"


def color_enabled() -> bool:
    return os.getenv("NO_COLOR") is None


def color(text: str, *, fg: str) -> str:
    """Wrap ``text`` in a foreground color unless ``NO_COLOR`` is set."""

    if not color_enabled():
        return text
    return f"\x1b[{_FG_CODES[fg]}m{text}{RESET}"


__all__ = ["THINK_STYLE", "DEFAULT_FG", "RESET", "color", "color_enabled"]
