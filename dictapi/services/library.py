"""Per-user lookup history and favorites."""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from dictapi.models import Favorite, HistoryEntry, Word

logger = logging.getLogger(__name__)

_USER_WORD = ["user_id", "word_id"]


class LibraryService:
    """Bookkeeping of which words a user looked up or bookmarked."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _insert(self, model: type[HistoryEntry] | type[Favorite]):
        """INSERT with ON CONFLICT support for the session's database."""
        if self.session.get_bind().dialect.name == "postgresql":
            return postgresql.insert(model)
        return sqlite.insert(model)

    async def record_history(self, user_id: str, word_id: str) -> HistoryEntry:
        """
        Record that a user looked up a word.

        A repeated lookup moves the existing entry to the top instead of
        adding a second one. The upsert is a single statement, so concurrent
        lookups of the same word by the same user do not collide.
        """
        now = datetime.now(timezone.utc)
        stmt = (
            self._insert(HistoryEntry)
            .values(user_id=user_id, word_id=word_id, created_at=now)
            .on_conflict_do_update(index_elements=_USER_WORD, set_={"created_at": now})
        )
        await self.session.execute(stmt)

        # Refresh an entry already loaded in this session
        result = await self.session.execute(
            select(HistoryEntry)
            .where(HistoryEntry.user_id == user_id, HistoryEntry.word_id == word_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def list_history(
        self, user_id: str, limit: int = 100
    ) -> list[tuple[HistoryEntry, Word]]:
        """Return a user's history with the looked-up words, most recent first."""
        stmt = (
            select(HistoryEntry, Word)
            .join(Word, HistoryEntry.word_id == Word.id)
            .where(HistoryEntry.user_id == user_id)
            .order_by(HistoryEntry.created_at.desc(), HistoryEntry.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(entry, word) for entry, word in result.all()]

    async def clear_history(self, user_id: str) -> int:
        """Delete a user's history. Returns the number of entries removed."""
        count_result = await self.session.execute(
            select(func.count(HistoryEntry.id)).where(HistoryEntry.user_id == user_id)
        )
        count = count_result.scalar() or 0

        await self.session.execute(delete(HistoryEntry).where(HistoryEntry.user_id == user_id))
        await self.session.flush()

        logger.debug("Cleared %d history entries for user %s", count, user_id)
        return int(count)

    async def _find_favorite(self, user_id: str, word_id: str) -> Favorite | None:
        stmt = select(Favorite).where(Favorite.user_id == user_id, Favorite.word_id == word_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def is_favorite(self, user_id: str, word_id: str) -> bool:
        return await self._find_favorite(user_id, word_id) is not None

    async def add_favorite(self, user_id: str, word_id: str) -> Favorite:
        """Bookmark a word; bookmarking it twice returns the existing entry."""
        stmt = (
            self._insert(Favorite)
            .values(user_id=user_id, word_id=word_id, created_at=datetime.now(timezone.utc))
            .on_conflict_do_nothing(index_elements=_USER_WORD)
        )
        await self.session.execute(stmt)

        result = await self.session.execute(
            select(Favorite).where(Favorite.user_id == user_id, Favorite.word_id == word_id)
        )
        return result.scalar_one()

    async def remove_favorite(self, user_id: str, word_id: str) -> bool:
        """Remove a bookmark. Returns False if there was none."""
        favorite = await self._find_favorite(user_id, word_id)
        if favorite is None:
            return False

        await self.session.delete(favorite)
        await self.session.flush()
        return True

    async def list_favorites(self, user_id: str) -> list[tuple[Favorite, Word]]:
        """Return a user's favorites with their words, most recent first."""
        stmt = (
            select(Favorite, Word)
            .join(Word, Favorite.word_id == Word.id)
            .where(Favorite.user_id == user_id)
            .order_by(Favorite.created_at.desc(), Favorite.id.desc())
        )
        result = await self.session.execute(stmt)
        return [(favorite, word) for favorite, word in result.all()]
