"""
Cursor pagination over Coinbase list endpoints.

Each list call returns one page plus a cursor. paginate() chains those calls
into a lazy generator of batches, one batch per HTTP round-trip. The API uses
two termination conventions, preserved per endpoint:

- has_next: an explicit flag (accounts, orders)
- empty cursor: no flag, an empty cursor marks the last page (fills)
"""

import logging
from typing import Callable, Iterator, List, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

R = TypeVar("R")
T = TypeVar("T")

Extract = Callable[[R], Tuple[List[T], Optional[str]]]


def paginate(
    request_factory: Callable[[Optional[str]], R],
    extract: Extract,
    cursor: Optional[str] = None,
) -> Iterator[List[T]]:
    """
    Lazily yield batches from a cursor-paginated endpoint.

    Nothing is requested until the first batch is pulled, and each pull issues
    exactly one request. An error raised by a request propagates at the pull
    that triggered it and ends the sequence.

    Args:
        request_factory: Performs one request for the given cursor (None on the first call)
        extract: Returns (items, next cursor or None when there are no more pages)
        cursor: Cursor to resume from

    Yields:
        One list of items per page
    """
    page = 0
    while True:
        response = request_factory(cursor)
        items, cursor = extract(response)
        page += 1
        logger.debug(f"Page {page}: {len(items)} items, more={cursor is not None}")
        yield items
        if cursor is None:
            return


def has_next_continuation(items_field: str) -> Extract:
    """Extract for envelopes with a has_next flag."""

    def extract(response):
        items = getattr(response, items_field)
        return items, (response.cursor if response.has_next else None)

    return extract


def cursor_continuation(items_field: str) -> Extract:
    """Extract for envelopes whose last page carries an empty cursor."""

    def extract(response):
        items = getattr(response, items_field)
        return items, (response.cursor or None)

    return extract
