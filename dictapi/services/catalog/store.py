"""Word catalog storage: sorted, prefix-searchable access to the words table."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from dictapi.models import Word

logger = logging.getLogger(__name__)

# (value, id) pair identifying a position in the catalog ordering
Bound = tuple[str, str]

# Keep IN (...) lists well below SQLite's bound parameter limit
_CHUNK_SIZE = 500


class WordCatalog(ABC):
    """Read access to the catalog, ordered by (value, id)."""

    @abstractmethod
    async def get(self, word_id: str) -> Word | None:
        """Return the entry with this id, or None."""
        ...  # pragma: no cover

    @abstractmethod
    async def fetch(
        self,
        search: str | None,
        limit: int,
        after: Bound | None = None,
        before: Bound | None = None,
    ) -> list[Word]:
        """
        Return up to ``limit`` entries matching the prefix filter.

        With ``before`` the entries strictly below the bound are returned in
        descending (value, id) order. Otherwise entries strictly above
        ``after`` (or all entries) are returned in ascending order.
        """
        ...  # pragma: no cover

    @abstractmethod
    async def count(self, search: str | None = None) -> int:
        """Count entries matching the prefix filter."""
        ...  # pragma: no cover


class SqlWordCatalog(WordCatalog):
    """WordCatalog backed by the ``words`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _filters(search: str | None) -> list:
        if not search:
            return []
        # Case-insensitive "starts with"; % and _ in the search text are literal
        return [Word.value.istartswith(search, autoescape=True)]

    async def get(self, word_id: str) -> Word | None:
        return await self.session.get(Word, word_id)

    async def find_by_value(self, value: str) -> Word | None:
        stmt = select(Word).where(Word.value == value.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def fetch(
        self,
        search: str | None,
        limit: int,
        after: Bound | None = None,
        before: Bound | None = None,
    ) -> list[Word]:
        stmt = select(Word).where(*self._filters(search))

        if before is not None:
            value, word_id = before
            stmt = stmt.where(
                or_(Word.value < value, and_(Word.value == value, Word.id < word_id))
            ).order_by(Word.value.desc(), Word.id.desc())
        else:
            if after is not None:
                value, word_id = after
                stmt = stmt.where(
                    or_(Word.value > value, and_(Word.value == value, Word.id > word_id))
                )
            stmt = stmt.order_by(Word.value, Word.id)

        result = await self.session.execute(stmt.limit(limit))
        return list(result.scalars().all())

    async def count(self, search: str | None = None) -> int:
        stmt = select(func.count(Word.id)).where(*self._filters(search))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def create(self, value: str) -> Word:
        """Add a single word (stored lowercased)."""
        word = Word(value=value.strip().lower())
        self.session.add(word)
        await self.session.flush()
        return word

    async def add_many(self, values: Iterable[str]) -> int:
        """
        Insert words that are not in the catalog yet.

        Returns the number of words inserted.
        """
        pending = list(dict.fromkeys(v.strip().lower() for v in values if v.strip()))
        inserted = 0

        for start in range(0, len(pending), _CHUNK_SIZE):
            chunk = pending[start : start + _CHUNK_SIZE]
            result = await self.session.execute(select(Word.value).where(Word.value.in_(chunk)))
            existing = set(result.scalars().all())

            new_words = [Word(value=v) for v in chunk if v not in existing]
            self.session.add_all(new_words)
            inserted += len(new_words)

        await self.session.flush()
        logger.debug(f"Inserted {inserted} of {len(pending)} catalog words")
        return inserted
