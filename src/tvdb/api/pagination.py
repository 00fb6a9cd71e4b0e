"""Fetch-and-merge of paginated list responses."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from tvdb.api.errors import ParseError
from tvdb.api.models import Envelope, Links, RequestOptions

logger = logging.getLogger(__name__)

PageFetcher = Callable[[str, RequestOptions], Awaitable[Envelope]]


def remaining_pages(links: Links | None) -> list[int]:
    """Page numbers still to fetch after the first response."""
    if links is None or links.next is None or links.next < 2:
        return []
    if links.last is None:
        return [links.next]
    if links.last <= 1:
        return []
    return list(range(links.next, links.last + 1))


async def collect_pages(
    first: Envelope,
    path: str,
    options: RequestOptions,
    fetch_page: PageFetcher,
) -> Any:
    """Return ``first.data`` merged with the data of every following page.

    Pages are fetched one at a time in ascending order. Non-list data is
    never paginated. Any failing page propagates its error and the pages
    gathered so far are dropped.
    """
    if not isinstance(first.data, list):
        return first.data

    pages = remaining_pages(first.links)
    if not pages:
        return first.data

    logger.debug("Fetching %d more page(s) of %s", len(pages), path)
    merged = list(first.data)
    for page in pages:
        envelope = await fetch_page(path, options.with_page(page))
        if envelope.data is None:
            continue
        if not isinstance(envelope.data, list):
            raise ParseError(f"Page {page} of {path} did not return a list")
        merged.extend(envelope.data)
    return merged
