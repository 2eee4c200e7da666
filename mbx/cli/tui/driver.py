"""Session driver: single-threaded curses loop over one active session.

Each iteration renders the active session, blocks for one key, and hands it
to the session. A key is processed to completion, including any network call
it triggers, before the next key is read.
"""

from __future__ import annotations

import curses
import logging
import os

from mbx.cli.tui.keys import normalize_key
from mbx.cli.tui.theme import Theme, init_theme
from mbx.cli.tui.types import ActiveSession, CursesWindow, NotificationLevel, RenderLine, Segment, StyleRole
from mbx.cli.tui.views.base import BaseView
from mbx.cli.tui.views.browse import BrowseView
from mbx.cli.tui.views.compose import ComposeView

logger = logging.getLogger(__name__)

_LEVEL_ROLES = {
    NotificationLevel.INFO: StyleRole.INFO,
    NotificationLevel.SUCCESS: StyleRole.SUCCESS,
    NotificationLevel.WARNING: StyleRole.WARNING,
    NotificationLevel.ERROR: StyleRole.ERROR,
}


class SessionDriver:
    """Feeds keys to the active session and redraws after each one."""

    def __init__(self, session: BaseView | None = None):
        self.session: BaseView | None = None
        self.notification: tuple[str, NotificationLevel] | None = None
        self._stdscr: CursesWindow | None = None
        self._theme = Theme()
        if session is not None:
            self.attach(session)

    @property
    def active(self) -> ActiveSession:
        if isinstance(self.session, BrowseView):
            return ActiveSession.TABLE
        if isinstance(self.session, ComposeView):
            return ActiveSession.FORM
        return ActiveSession.NONE

    def attach(self, session: BaseView) -> None:
        """Make session the active one."""
        self.session = session
        if isinstance(session, BrowseView):
            session.notify = self.notify
        logger.debug("active session: %s", self.active.value)

    def notify(self, message: str, level: NotificationLevel) -> None:
        """Show message on the status line.

        Called synchronously by sessions, so busy notices are painted before
        the blocking call that follows them.
        """
        self.notification = (message, level)
        if self._stdscr is not None:
            self.render()

    def run(self, stdscr: CursesWindow) -> None:
        """Run until the active session exits. Intended for `curses.wrapper`."""
        self._stdscr = stdscr
        try:
            try:
                curses.curs_set(0)
            except curses.error:
                pass
            self._theme = init_theme()
            self.loop()
        finally:
            self._stdscr = None

    def loop(self) -> None:
        """Render / read / dispatch until the session exits."""
        stdscr = self._stdscr
        if stdscr is None:
            return
        while self.session is not None and not self.session.exited:
            self.render()
            try:
                raw = stdscr.get_wch()
            except KeyboardInterrupt:
                raw = "\x03"
            except curses.error:
                continue
            self.dispatch(raw)

    def dispatch(self, raw: int | str) -> None:
        """Deliver one raw key to the active session."""
        if self.session is None:
            return
        key = normalize_key(raw)
        if key is None or key == "resize":
            return
        self.session.handle_key(key)

    def render_lines(self, width: int, height: int) -> list[RenderLine]:
        """Lines for the whole screen: session view plus status line."""
        if self.session is None:
            return []
        lines = self.session.get_render_segments(width, height)
        if self.notification:
            message, level = self.notification
            lines.append([])
            lines.append([Segment(message, _LEVEL_ROLES[level])])
        return lines

    def render(self) -> None:
        stdscr = self._stdscr
        if stdscr is None:
            return
        stdscr.erase()
        height, width = stdscr.getmaxyx()
        for row, line in enumerate(self.render_lines(width, height)[:height]):
            col = 0
            for segment in line:
                room = width - 1 - col
                if room <= 0:
                    break
                text = segment.text[:room]
                try:
                    stdscr.addstr(row, col, text, self._theme.attr(segment.role))
                except curses.error:
                    pass
                col += len(text)
        stdscr.refresh()


def run_session(session: BaseView) -> None:
    """Run session in a fresh curses screen until it exits."""
    os.environ.setdefault("ESCDELAY", "25")
    driver = SessionDriver(session)
    curses.wrapper(driver.run)
