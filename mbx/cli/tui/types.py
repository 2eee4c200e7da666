"""Shared TUI types."""

from __future__ import annotations

import curses
from enum import Enum
from typing import NamedTuple, TypeAlias


class NotificationLevel(str, Enum):
    """Notification severity levels."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"


class TableState(str, Enum):
    """Browse session states."""

    BROWSING = "browsing"
    AWAITING_REFRESH = "awaiting_refresh"
    AWAITING_DELETE = "awaiting_delete"
    EXITED = "exited"


class FormState(str, Enum):
    """Compose session states."""

    EDITING = "editing"
    CANCELLED = "cancelled"
    SUBMITTED = "submitted"


class ActiveSession(str, Enum):
    """Which session currently owns the terminal."""

    TABLE = "table"
    FORM = "form"
    NONE = "none"


class StyleRole(str, Enum):
    """Rendering roles mapped to curses attributes by the theme."""

    NORMAL = "normal"
    HEADER = "header"
    SELECTED = "selected"
    FOCUSED = "focused"
    BLURRED = "blurred"
    PLACEHOLDER = "placeholder"
    HELP = "help"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class Segment(NamedTuple):
    """A run of text rendered with one style."""

    text: str
    role: StyleRole = StyleRole.NORMAL


RenderLine: TypeAlias = list[Segment]

CursesWindow: TypeAlias = curses.window
