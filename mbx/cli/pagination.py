"""Full-collection sweep over the paginated entries endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from mbx.cli.models import Entry

logger = logging.getLogger(__name__)


class PageSource(Protocol):
    def list_page(self, page: int) -> tuple[list[Entry], int | None]: ...


@dataclass
class SweepProgress:
    """Client-side tally of one sweep, for logging only.

    The server's per-page cursor (`page`, `page_count`, `entry_count`) is
    `EntriesPage`; `list_page` reduces it to the next page index.
    """

    page: int = 0
    pages_fetched: int = 0
    rows_fetched: int = 0


def fetch_all_entries(api: PageSource) -> list[Entry]:
    """Fetch every page starting at 0 and return the rows in server order.

    The sweep is fail-fast: the first page error propagates and nothing
    gathered so far is returned.

    Raises:
        APIError: If any page request fails
    """
    progress = SweepProgress()
    rows: list[Entry] = []
    next_page: int | None = progress.page
    while next_page is not None:
        progress.page = next_page
        entries, next_page = api.list_page(progress.page)
        rows.extend(entries)
        progress.pages_fetched += 1
        progress.rows_fetched += len(entries)
        logger.debug("Fetched page %d (%d entries, next=%s)", progress.page, len(entries), next_page)

    logger.debug("Sweep complete: %d pages, %d entries", progress.pages_fetched, progress.rows_fetched)
    return rows
