"""Curses colour setup for the mbx TUI.

Palette follows the 256-colour terminal codes: focused 205, blurred 240,
selected row 229 on 57. Terminals without colour fall back to plain
attributes.
"""

from __future__ import annotations

import curses
import logging

from mbx.cli.tui.types import StyleRole

logger = logging.getLogger(__name__)

_PAIRS: dict[StyleRole, tuple[int, int, int]] = {
    # role: (pair number, 256-colour fg, 256-colour bg)
    StyleRole.FOCUSED: (1, 205, -1),
    StyleRole.BLURRED: (2, 240, -1),
    StyleRole.SELECTED: (3, 229, 57),
    StyleRole.HEADER: (4, 240, -1),
    StyleRole.ERROR: (5, 196, -1),
    StyleRole.SUCCESS: (6, 42, -1),
    StyleRole.WARNING: (7, 214, -1),
}

_FALLBACK: dict[StyleRole, tuple[int, int]] = {
    StyleRole.FOCUSED: (curses.COLOR_MAGENTA, -1),
    StyleRole.BLURRED: (curses.COLOR_WHITE, -1),
    StyleRole.SELECTED: (curses.COLOR_YELLOW, curses.COLOR_BLUE),
    StyleRole.HEADER: (curses.COLOR_WHITE, -1),
    StyleRole.ERROR: (curses.COLOR_RED, -1),
    StyleRole.SUCCESS: (curses.COLOR_GREEN, -1),
    StyleRole.WARNING: (curses.COLOR_YELLOW, -1),
}


class Theme:
    """Role to curses attribute mapping."""

    def __init__(self, attrs: dict[StyleRole, int] | None = None):
        self._attrs = attrs or {}

    def attr(self, role: StyleRole) -> int:
        return self._attrs.get(role, curses.A_NORMAL)


def _plain_attrs() -> dict[StyleRole, int]:
    return {
        StyleRole.HEADER: curses.A_UNDERLINE,
        StyleRole.SELECTED: curses.A_REVERSE,
        StyleRole.FOCUSED: curses.A_BOLD,
        StyleRole.BLURRED: curses.A_DIM,
        StyleRole.PLACEHOLDER: curses.A_DIM,
        StyleRole.HELP: curses.A_DIM,
        StyleRole.ERROR: curses.A_BOLD,
        StyleRole.WARNING: curses.A_BOLD,
    }


def init_theme() -> Theme:
    """Initialize colour pairs. Must run inside `curses.wrapper`."""
    attrs = _plain_attrs()
    if not curses.has_colors():
        return Theme(attrs)

    curses.start_color()
    try:
        curses.use_default_colors()
    except curses.error:
        pass

    use_extended = getattr(curses, "COLORS", 0) >= 256
    for role, (pair, fg, bg) in _PAIRS.items():
        if not use_extended:
            fg, bg = _FALLBACK[role]
        try:
            curses.init_pair(pair, fg, bg)
        except curses.error as e:
            logger.debug("init_pair %d failed: %s", pair, e)
            continue
        attrs[role] = curses.color_pair(pair)

    attrs[StyleRole.HEADER] = attrs[StyleRole.HEADER] | curses.A_UNDERLINE
    attrs[StyleRole.PLACEHOLDER] = attrs[StyleRole.BLURRED]
    attrs[StyleRole.HELP] = attrs[StyleRole.BLURRED]
    attrs[StyleRole.INFO] = attrs[StyleRole.BLURRED]
    return Theme(attrs)
