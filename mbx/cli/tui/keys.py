"""Key normalization for curses input.

`get_wch()` yields `str` for characters and `int` for function keys. Both are
mapped to one vocabulary: printable characters stay single-character strings,
everything else becomes a named key such as "up", "enter" or "ctrl+c".
"""

from __future__ import annotations

import curses

Key = str

_SPECIAL_KEYS: dict[int, Key] = {
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_LEFT: "left",
    curses.KEY_RIGHT: "right",
    curses.KEY_HOME: "home",
    curses.KEY_END: "end",
    curses.KEY_PPAGE: "pgup",
    curses.KEY_NPAGE: "pgdown",
    curses.KEY_DC: "delete",
    curses.KEY_BACKSPACE: "backspace",
    curses.KEY_ENTER: "enter",
    curses.KEY_BTAB: "shift+tab",
    curses.KEY_RESIZE: "resize",
}

_CONTROL_CHARS: dict[int, Key] = {
    8: "backspace",
    9: "tab",
    10: "enter",
    13: "enter",
    27: "esc",
    127: "backspace",
}


def normalize_key(raw: int | str) -> Key | None:
    """Translate a raw curses key into a key name.

    Returns:
        The key name, or None for keys with no meaning to any session
    """
    if isinstance(raw, str):
        if len(raw) != 1:
            return None
        code = ord(raw)
        if code >= 32 and code != 127:
            return raw
    else:
        code = raw
        if code in _SPECIAL_KEYS:
            return _SPECIAL_KEYS[code]
        if code >= 256:
            return None
        if 32 <= code < 127:
            return chr(code)

    if code in _CONTROL_CHARS:
        return _CONTROL_CHARS[code]
    if 1 <= code <= 26:
        return f"ctrl+{chr(code + 96)}"
    return None


def is_printable(key: Key) -> bool:
    return len(key) == 1 and key.isprintable()
