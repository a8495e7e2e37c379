"""Archive paginator — walks searcharchives pages and aggregates the records."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from src.groupsio.client import DEFAULT_PAGE_DELAY_SECONDS, FetchError
from src.groupsio.types import MessageRecord, ResultSet, SearchTarget, Session

if TYPE_CHECKING:
    from src.groupsio.client import GroupsIOClient

logger = logging.getLogger(__name__)

# groups.io returns this many records per searcharchives page
PAGE_SIZE = 10


def total_pages(total_count: int, page_size: int = PAGE_SIZE) -> int:
    """Number of pages the server will serve for ``total_count`` matches."""
    return total_count // page_size + 1


class ArchivePaginator:
    """Fetches every page of a search, one request at a time.

    Stops when the current page reaches the page count derived from the
    server's ``total_count``, or as soon as a page comes back empty; the
    empty page wins if the two disagree.  A failed fetch ends pagination
    early and whatever was collected so far is returned.

    Usage::

        paginator = ArchivePaginator(client)
        results = await paginator.collect(session, target)
    """

    def __init__(
        self,
        client: GroupsIOClient,
        page_size: int = PAGE_SIZE,
        page_delay: float = DEFAULT_PAGE_DELAY_SECONDS,
    ) -> None:
        self._client = client
        self._page_size = page_size
        self._page_delay = page_delay

    async def collect(self, session: Session, target: SearchTarget) -> ResultSet:
        """Return all records matching ``target``, in server order."""
        collected: list[MessageRecord] = []
        page = 1
        while True:
            logger.info("Fetching page %d...", page)
            try:
                response = await self._client.fetch_page(session, target, page)
            except FetchError as exc:
                logger.error(
                    "Error fetching page %d: %s (keeping %d result(s) collected so far)",
                    page,
                    exc,
                    len(collected),
                )
                if exc.body:
                    logger.error("Response data: %s", exc.body)
                break

            if not response.records:
                logger.info("No messages found on page %d", page)
                break

            collected.extend(response.records)
            logger.info(
                "Retrieved %d messages. Total so far: %d",
                len(response.records),
                len(collected),
            )

            if page >= total_pages(response.total_count, self._page_size):
                break

            await self._pause()
            page += 1

        return tuple(collected)

    async def _pause(self) -> None:
        """Fixed pause between pages to stay clear of rate limiting."""
        await asyncio.sleep(self._page_delay)
