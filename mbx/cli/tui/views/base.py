"""Base classes and mixins for TUI views."""

from __future__ import annotations

from typing import Generic, TypeVar

from mbx.cli.tui.keys import Key
from mbx.cli.tui.types import RenderLine


class BaseView:
    """Base class for all TUI views.

    Provides testable interface for view rendering without curses dependency.
    """

    @property
    def exited(self) -> bool:
        raise NotImplementedError(f"{self.__class__.__name__} must implement exited")

    def handle_key(self, key: Key) -> None:
        """Apply one key press to the view state."""
        raise NotImplementedError(f"{self.__class__.__name__} must implement handle_key()")

    def get_render_segments(self, width: int, height: int) -> list[RenderLine]:
        """Return styled lines for the current state.

        Args:
            width: Terminal width
            height: Terminal height
        """
        raise NotImplementedError(f"{self.__class__.__name__} must implement get_render_segments()")

    def get_render_lines(self, width: int, height: int) -> list[str]:
        """Return lines this view would render (testable without curses).

        Args:
            width: Terminal width
            height: Terminal height

        Returns:
            List of strings representing rendered output
        """
        return ["".join(seg.text for seg in line) for line in self.get_render_segments(width, height)]


T = TypeVar("T")


class ScrollableViewMixin(Generic[T]):
    """Mixin providing cursor and viewport behavior over a flat item list.

    Requires these attributes on the class:
    - flat_items: list - Items to scroll through
    - selected_index: int - Currently selected item index
    - scroll_offset: int - First visible item index
    - visible_height: int - Number of rows the viewport shows

    The viewport always contains the selected index.
    """

    flat_items: list[T]
    selected_index: int
    scroll_offset: int
    visible_height: int

    def move_to(self, index: int) -> None:
        """Select index clamped to the item range and scroll it into view."""
        if not self.flat_items:
            self.selected_index = 0
            self.scroll_offset = 0
            return
        self.selected_index = max(0, min(len(self.flat_items) - 1, index))
        self._scroll_to_selection()

    def move_up(self, step: int = 1) -> None:
        """Move selection up, adjusting scroll if needed."""
        self.move_to(self.selected_index - step)

    def move_down(self, step: int = 1) -> None:
        """Move selection down, adjusting scroll if needed."""
        self.move_to(self.selected_index + step)

    def clamp_selection(self) -> None:
        """Re-apply bounds after the item list was replaced."""
        self.move_to(self.selected_index)

    def visible_range(self) -> tuple[int, int]:
        """Return the (start, end) slice of items inside the viewport."""
        start = self.scroll_offset
        return start, min(start + self.visible_height, len(self.flat_items))

    def _scroll_to_selection(self) -> None:
        height = max(1, self.visible_height)
        if self.selected_index < self.scroll_offset:
            self.scroll_offset = self.selected_index
        elif self.selected_index >= self.scroll_offset + height:
            self.scroll_offset = self.selected_index - height + 1
        max_scroll = max(0, len(self.flat_items) - height)
        self.scroll_offset = max(0, min(self.scroll_offset, max_scroll))
