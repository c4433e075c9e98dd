"""Cursor pagination over the word catalog."""

import logging
from dataclasses import dataclass
from typing import Any

from dictapi.models import Word
from dictapi.services.catalog.store import Bound, WordCatalog
from dictapi.services.errors import InvalidCursorError

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50
MAX_LIMIT = 100


def clamp_limit(limit: int | None, default: int = DEFAULT_LIMIT, maximum: int = MAX_LIMIT) -> int:
    """Clamp a requested page size into [1, maximum]; None means default."""
    if limit is None:
        limit = default
    return max(1, min(limit, maximum))


@dataclass
class WordPage:
    """One page of catalog entries plus the cursors around it."""

    results: list[Word]
    total_docs: int
    next: str | None
    previous: str | None
    has_next: bool
    has_prev: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "results": [w.to_dict() for w in self.results],
            "totalDocs": self.total_docs,
            "next": self.next,
            "previous": self.previous,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }


class WordPaginator:
    """
    Resolve cursors to pages of the catalog in (value, id) order.

    A cursor is the id of a catalog entry; its (value, id) pair is used as an
    exclusive bound. ``has_prev`` only says that a cursor was supplied, and a
    backward page always reports ``has_next``. Neither flag is checked
    against the data, so both can be stale if the catalog changes between
    requests.
    """

    def __init__(
        self,
        catalog: WordCatalog,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ) -> None:
        self.catalog = catalog
        self.default_limit = default_limit
        self.max_limit = max_limit

    async def _resolve(self, cursor: str, direction: str) -> Bound:
        word = await self.catalog.get(cursor)
        if word is None:
            raise InvalidCursorError(cursor, direction)
        return word.value, word.id

    async def list_words(
        self,
        search: str | None = None,
        limit: int | None = None,
        next_cursor: str | None = None,
        previous_cursor: str | None = None,
    ) -> WordPage:
        """
        Return one page of words.

        Args:
            search: Optional case-insensitive prefix filter, matched literally
            limit: Page size, clamped to [1, max_limit]
            next_cursor: Id of the last entry of the page before this one
            previous_cursor: Id of the first entry of the page after this one

        Raises:
            InvalidCursorError: if a cursor does not name a catalog entry
        """
        page_size = clamp_limit(limit, self.default_limit, self.max_limit)
        search = search or None

        if next_cursor and previous_cursor:
            logger.debug("Both cursors supplied, following the next cursor")

        if next_cursor or not previous_cursor:
            after = await self._resolve(next_cursor, "next") if next_cursor else None
            rows = await self.catalog.fetch(search, page_size + 1, after=after)
            has_next = len(rows) > page_size
            results = rows[:page_size]
        else:
            before = await self._resolve(previous_cursor, "previous")
            rows = await self.catalog.fetch(search, page_size + 1, before=before)
            rows.reverse()
            # Keep the rows adjacent to the cursor; the extra one is furthest back
            results = rows[-page_size:]
            has_next = True

        total_docs = await self.catalog.count(search)

        return WordPage(
            results=results,
            total_docs=total_docs,
            next=results[-1].id if results and has_next else None,
            previous=results[0].id if results else None,
            has_next=has_next,
            has_prev=bool(next_cursor or previous_cursor),
        )
