"""Compose view - three-field form for a new submission.

Focus ranges over the fields followed by the Cancel and Submit buttons:
indexes 0..2 are fields, 3 is Cancel, 4 is Submit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from mbx.cli.models import NewEntry
from mbx.cli.tui.keys import Key, is_printable
from mbx.cli.tui.types import FormState, RenderLine, Segment, StyleRole
from mbx.cli.tui.views.base import BaseView
from mbx.constants import FROM_MAX_LEN, MESSAGE_MAX_LEN, SUBJECT_MAX_LEN

logger = logging.getLogger(__name__)

ABORT_KEYS = frozenset({"esc", "ctrl+c"})
NEXT_KEYS = frozenset({"tab", "down", "ctrl+n", "enter"})
PREV_KEYS = frozenset({"shift+tab", "up", "ctrl+p"})

HELP_LINE = "(enter & arrow keys, ctrl+c to exit)"


@dataclass
class TextField:
    """Single-line text input with its own cursor and length limit."""

    prompt: str
    placeholder: str
    max_length: int
    value: str = ""
    cursor: int = 0
    focused: bool = False

    def __post_init__(self) -> None:
        self.value = self.value[: self.max_length]
        self.cursor = len(self.value)

    def handle_key(self, key: Key) -> bool:
        """Apply an editing key.

        Returns:
            True if the key was an editing key (even when it changed nothing)
        """
        if is_printable(key):
            if len(self.value) < self.max_length:
                self.value = self.value[: self.cursor] + key + self.value[self.cursor :]
                self.cursor += 1
        elif key == "backspace":
            if self.cursor > 0:
                self.value = self.value[: self.cursor - 1] + self.value[self.cursor :]
                self.cursor -= 1
        elif key == "delete":
            self.value = self.value[: self.cursor] + self.value[self.cursor + 1 :]
        elif key == "left":
            self.cursor = max(0, self.cursor - 1)
        elif key == "right":
            self.cursor = min(len(self.value), self.cursor + 1)
        elif key in ("home", "ctrl+a"):
            self.cursor = 0
        elif key in ("end", "ctrl+e"):
            self.cursor = len(self.value)
        elif key == "ctrl+u":
            self.value = self.value[self.cursor :]
            self.cursor = 0
        elif key == "ctrl+k":
            self.value = self.value[: self.cursor]
        else:
            return False
        return True

    def render(self, width: int) -> RenderLine:
        role = StyleRole.FOCUSED if self.focused else StyleRole.NORMAL
        segments = [Segment(self.prompt, role)]
        room = max(0, width - len(self.prompt) - 1)
        if not self.value:
            if self.focused:
                segments.append(Segment("█", StyleRole.FOCUSED))
            segments.append(Segment(self.placeholder[:room], StyleRole.PLACEHOLDER))
            return segments

        # Keep the cursor inside the visible window of long values.
        start = max(0, self.cursor - room + 1) if room else 0
        visible = self.value[start : start + room]
        if self.focused:
            pos = self.cursor - start
            segments.append(Segment(visible[:pos], role))
            segments.append(Segment(visible[pos : pos + 1] or "█", StyleRole.SELECTED))
            segments.append(Segment(visible[pos + 1 :], role))
        else:
            segments.append(Segment(visible, role))
        return segments


@dataclass(frozen=True)
class ComposeResult:
    """Outcome of a finished compose session. `entry` is None when cancelled."""

    entry: NewEntry | None

    @property
    def submitted(self) -> bool:
        return self.entry is not None


def build_fields(sender: str = "", subject: str = "", message: str = "") -> list[TextField]:
    return [
        TextField("From (email): ", "user@example.com", FROM_MAX_LEN, sender),
        TextField("Subject:      ", "My subject", SUBJECT_MAX_LEN, subject),
        TextField("Message:      ", "Message", MESSAGE_MAX_LEN, message),
    ]


class ComposeView(BaseView):
    """Form session producing a new entry or a cancellation.

    Field content is not validated here; the server owns validation.
    """

    def __init__(self, sender: str = "", subject: str = "", message: str = ""):
        """Initialize compose view.

        Args:
            sender: Pre-filled From value
            subject: Pre-filled Subject value
            message: Pre-filled Message value
        """
        self.fields = build_fields(sender, subject, message)
        self.focus_index = 0
        self.fields[0].focused = True
        self.state = FormState.EDITING

    @property
    def cancel_index(self) -> int:
        return len(self.fields)

    @property
    def submit_index(self) -> int:
        return len(self.fields) + 1

    @property
    def focus_slots(self) -> int:
        return len(self.fields) + 2

    @property
    def exited(self) -> bool:
        return self.state is not FormState.EDITING

    @property
    def result(self) -> ComposeResult | None:
        """Outcome once exited, None while still editing."""
        if self.state is FormState.EDITING:
            return None
        if self.state is FormState.CANCELLED:
            return ComposeResult(None)
        sender, subject, message = (f.value for f in self.fields)
        return ComposeResult(NewEntry(sender=sender, subject=subject, message=message))

    def set_focus(self, index: int) -> None:
        """Move focus, touching only the previously and newly focused fields."""
        index %= self.focus_slots
        if index == self.focus_index:
            return
        if self.focus_index < len(self.fields):
            self.fields[self.focus_index].focused = False
        if index < len(self.fields):
            self.fields[index].focused = True
        self.focus_index = index

    def focus_next(self) -> None:
        self.set_focus(self.focus_index + 1)

    def focus_prev(self) -> None:
        self.set_focus(self.focus_index - 1 + self.focus_slots)

    def _finish(self, state: FormState) -> None:
        logger.debug("compose state %s -> %s", self.state.value, state.value)
        self.state = state

    def handle_key(self, key: Key) -> None:
        """Handle key press while editing."""
        if self.exited:
            return

        if key in ABORT_KEYS:
            self._finish(FormState.CANCELLED)
            return

        if key == "enter" and self.focus_index == self.cancel_index:
            self._finish(FormState.CANCELLED)
            return
        if key == "enter" and self.focus_index == self.submit_index:
            self._finish(FormState.SUBMITTED)
            return

        if key in NEXT_KEYS:
            self.focus_next()
        elif key in PREV_KEYS:
            self.focus_prev()
        elif self.focus_index < len(self.fields):
            self.fields[self.focus_index].handle_key(key)

    def _button(self, label: str, focused: bool) -> list[Segment]:
        if focused:
            return [Segment(f"[ {label} ]", StyleRole.FOCUSED)]
        return [Segment("[ "), Segment(label, StyleRole.BLURRED), Segment(" ]")]

    def get_render_segments(self, width: int, height: int) -> list[RenderLine]:
        lines: list[RenderLine] = [field.render(width) for field in self.fields]
        lines.append([])
        buttons = self._button("Cancel", self.focus_index == self.cancel_index)
        buttons.append(Segment(" "))
        buttons.extend(self._button("Submit", self.focus_index == self.submit_index))
        lines.append(buttons)
        lines.append([])
        lines.append([Segment(HELP_LINE, StyleRole.HELP)])
        return lines
