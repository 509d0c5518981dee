"""ANSI color and style helpers.

- Disabled automatically when stdout is not a TTY, unless FORCE_COLOR=1.
- NO_COLOR disables color completely.
- Both are read once at import time; changing them later has no effect.
"""

import os
import sys

from todo_cli.domain.task import Priority


_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
ENABLED = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR


def _code(part: str) -> str:
    """ANSI escape code for a style part."""
    return f"\033[{part}m" if ENABLED else ""


RESET = _code("0")
BOLD = _code("1")
DIM = _code("2")

RED = _code("31")
GREEN = _code("32")
YELLOW = _code("33")
CYAN = _code("36")
WHITE = _code("37")

PRIORITY_COLOR: dict[Priority, str] = {
    Priority.HIGH: RED + BOLD,
    Priority.MEDIUM: YELLOW,
    Priority.LOW: GREEN,
}

HEADER_COLOR = CYAN + BOLD
OVERDUE_COLOR = RED + BOLD
DUE_COLOR = CYAN
MUTED_COLOR = DIM


def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not ENABLED or not any(styles):
        return text
    return "".join(styles) + text + RESET


def clear_screen_sequence() -> str:
    """Escape sequence that homes the cursor and clears the terminal."""
    return "\033[H\033[2J" if ENABLED else ""
