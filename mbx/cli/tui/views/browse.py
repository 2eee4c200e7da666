"""Browse view - paged table of contact form submissions."""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from mbx.cli.api_client import APIError
from mbx.cli.models import Entry
from mbx.cli.pagination import PageSource, fetch_all_entries
from mbx.cli.tui.keys import Key
from mbx.cli.tui.types import NotificationLevel, RenderLine, Segment, StyleRole, TableState
from mbx.cli.tui.views.base import BaseView, ScrollableViewMixin
from mbx.constants import DEFAULT_TABLE_HEIGHT, TABLE_COLUMNS

logger = logging.getLogger(__name__)


class EntriesAPI(PageSource, Protocol):
    def delete_entry(self, entry_id: str) -> None: ...


QUIT_KEYS = frozenset({"q", "esc", "ctrl+c"})
UP_KEYS = frozenset({"up", "k"})
DOWN_KEYS = frozenset({"down", "j"})
PAGE_UP_KEYS = frozenset({"pgup", "b"})
PAGE_DOWN_KEYS = frozenset({"pgdown", "f", " "})
HOME_KEYS = frozenset({"home", "g"})
END_KEYS = frozenset({"end", "G"})
DELETE_KEYS = frozenset({"x", "delete"})
REFRESH_KEYS = frozenset({"r"})

HELP_LINE = "↑/↓ move  r refresh  x delete  q quit"


def _cell(value: str, width: int) -> str:
    text = " ".join(value.split())
    if len(text) > width:
        text = text[: width - 1] + "…"
    return text.ljust(width)


def format_row(entry: Entry) -> str:
    values = (entry.id, entry.sender, entry.subject, entry.message)
    return " ".join(_cell(value, width) for value, (_, width) in zip(values, TABLE_COLUMNS))


def format_header() -> str:
    return " ".join(_cell(title, width) for title, width in TABLE_COLUMNS)


class BrowseView(ScrollableViewMixin[Entry], BaseView):
    """Table session: cursor over all entries with refresh and delete.

    Every mutation is followed by a full sweep; rows are never patched in
    place. A failed refresh or delete leaves the current rows untouched.
    """

    def __init__(
        self,
        api: EntriesAPI,
        rows: list[Entry] | None = None,
        height: int = DEFAULT_TABLE_HEIGHT,
        notify: Callable[[str, NotificationLevel], None] | None = None,
    ):
        """Initialize browse view.

        Args:
            api: API client instance
            rows: Rows from the initial sweep
            height: Number of visible table rows
            notify: Notification callback
        """
        self.api = api
        self.notify = notify
        self.flat_items: list[Entry] = list(rows or [])
        self.selected_index = 0
        self.scroll_offset = 0
        self.visible_height = max(1, height)
        self.state = TableState.BROWSING

    @property
    def exited(self) -> bool:
        return self.state is TableState.EXITED

    @property
    def selected(self) -> Entry | None:
        if not self.flat_items:
            return None
        return self.flat_items[self.selected_index]

    def _notify(self, message: str, level: NotificationLevel) -> None:
        if self.notify:
            self.notify(message, level)

    def _set_state(self, state: TableState) -> None:
        logger.debug("browse state %s -> %s", self.state.value, state.value)
        self.state = state

    def handle_key(self, key: Key) -> None:
        """Handle key press while browsing."""
        if self.state is not TableState.BROWSING:
            return

        if key in QUIT_KEYS:
            self._set_state(TableState.EXITED)
        elif key in UP_KEYS:
            self.move_up()
        elif key in DOWN_KEYS:
            self.move_down()
        elif key in PAGE_UP_KEYS:
            self.move_up(self.visible_height)
        elif key in PAGE_DOWN_KEYS:
            self.move_down(self.visible_height)
        elif key == "u":
            self.move_up(max(1, self.visible_height // 2))
        elif key == "d":
            self.move_down(max(1, self.visible_height // 2))
        elif key in HOME_KEYS:
            self.move_to(0)
        elif key in END_KEYS:
            self.move_to(len(self.flat_items) - 1)
        elif key in REFRESH_KEYS:
            self.refresh()
        elif key in DELETE_KEYS:
            self.delete_selected()

    def refresh(self) -> bool:
        """Replace all rows with a fresh sweep.

        Returns:
            True if the sweep succeeded
        """
        self._set_state(TableState.AWAITING_REFRESH)
        self._notify("Refreshing…", NotificationLevel.INFO)
        try:
            ok = self._resync()
        finally:
            self._set_state(TableState.BROWSING)
        if ok:
            self._notify(f"Loaded {len(self.flat_items)} submissions", NotificationLevel.SUCCESS)
        return ok

    def delete_selected(self) -> bool:
        """Delete the selected entry, then resync the whole table.

        Returns:
            True if the delete succeeded
        """
        entry = self.selected
        if entry is None:
            return False

        self._set_state(TableState.AWAITING_DELETE)
        self._notify(f"Deleting {entry.id}…", NotificationLevel.INFO)
        try:
            try:
                self.api.delete_entry(entry.id)
            except APIError as e:
                logger.warning("Failed to delete %s: %s", entry.id, e)
                self._notify(str(e), NotificationLevel.ERROR)
                return False

            logger.info("Deleted entry %s", entry.id)
            if self._resync():
                self._notify(f"Deleted {entry.id}", NotificationLevel.SUCCESS)
            return True
        finally:
            self._set_state(TableState.BROWSING)

    def _resync(self) -> bool:
        try:
            rows = fetch_all_entries(self.api)
        except APIError as e:
            logger.warning("Refresh failed: %s", e)
            self._notify(f"Refresh failed: {e}", NotificationLevel.ERROR)
            return False
        self.flat_items = rows
        self.clamp_selection()
        return True

    def get_render_segments(self, width: int, height: int) -> list[RenderLine]:
        lines: list[RenderLine] = [[Segment(format_header()[:width], StyleRole.HEADER)]]
        if not self.flat_items:
            lines.append([Segment("(no submissions)"[:width], StyleRole.BLURRED)])
        else:
            start, end = self.visible_range()
            for i in range(start, end):
                role = StyleRole.SELECTED if i == self.selected_index else StyleRole.NORMAL
                lines.append([Segment(format_row(self.flat_items[i])[:width], role)])

        position = f"{self.selected_index + 1}/{len(self.flat_items)}" if self.flat_items else "0/0"
        lines.append([])
        lines.append([Segment(f"{position}  {HELP_LINE}"[:width], StyleRole.HELP)])
        return lines
