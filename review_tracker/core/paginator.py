"""
Paginator for pretalx list endpoints.

pretalx list endpoints return pages of the form ``{"results": [...], "next": url}``.
This module walks the ``next`` pointers from a seed URL and accumulates every
page's results in arrival order.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Set, Tuple

from loguru import logger

from ..exceptions import FetchError

PageFetcher = Callable[[str], Dict[str, Any]]


@dataclass(frozen=True)
class PageWalk:
    """Outcome of a pagination walk: the accumulated results and, if the walk was aborted, why."""

    results: Tuple[Any, ...]
    pages_fetched: int
    error: Optional[FetchError] = None

    @property
    def complete(self) -> bool:
        return self.error is None


def fetch_all(seed_url: str, fetch_page: PageFetcher) -> PageWalk:
    """
    Fetch every page of a paginated endpoint.

    A failed page never raises out of this function: the walk stops and the
    results gathered so far are returned together with the error, so the
    caller can decide whether partial data is usable.

    Args:
        seed_url: URL of the first page
        fetch_page: Callable returning the decoded page for a URL

    Returns:
        PageWalk: Accumulated results, number of pages fetched and the error, if any
    """
    results = []
    visited: Set[str] = set()
    pages_fetched = 0
    url: Optional[str] = seed_url

    while url is not None:
        if url in visited:
            error = FetchError("Pagination loop detected", url=url)
            logger.warning(f"Aborting walk from {seed_url}: {error}")
            return PageWalk(tuple(results), pages_fetched, error)
        visited.add(url)

        try:
            page = fetch_page(url)
        except FetchError as e:
            logger.warning(f"Aborting walk from {seed_url} after {pages_fetched} pages: {e}")
            return PageWalk(tuple(results), pages_fetched, e)

        if not isinstance(page, dict) or not isinstance(page.get("results", []), list):
            error = FetchError("Malformed page, expected an object with a results list", url=url)
            logger.warning(f"Aborting walk from {seed_url} after {pages_fetched} pages: {error}")
            return PageWalk(tuple(results), pages_fetched, error)

        next_url = page.get("next")
        if next_url is not None and not isinstance(next_url, str):
            error = FetchError("Malformed page, 'next' is not a URL", url=url)
            logger.warning(f"Aborting walk from {seed_url} after {pages_fetched} pages: {error}")
            return PageWalk(tuple(results), pages_fetched, error)

        pages_fetched += 1
        results.extend(page.get("results") or [])

        url = next_url or None
        if url is not None:
            logger.info(f"Visiting {url} next")

    logger.debug(f"Fetched {len(results)} results in {pages_fetched} pages from {seed_url}")
    return PageWalk(tuple(results), pages_fetched)
