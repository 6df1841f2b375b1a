"""Script assembly helpers."""

from __future__ import annotations

from collections.abc import Iterable


def render_script(lines: Iterable[str]) -> str:
    """Join one script's lines and terminate it with a double newline."""
    return "\n".join(lines) + "\n\n"


def render_block(lines: Iterable[str]) -> str:
    """Render one batch device block, followed by two blank lines."""
    return "\n".join(lines) + "\n\n\n"
