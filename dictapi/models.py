"""SQLAlchemy ORM models."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import ForeignKey, Index, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from dictapi.database import Base


def _utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class Word(Base):
    """Headword in the browsable word catalog."""

    __tablename__ = "words"
    __table_args__ = (Index("ix_words_value_id", "value", "id"),)

    id: Mapped[str] = mapped_column(Text, primary_key=True, default=_new_id)
    value: Mapped[str] = mapped_column(Text, unique=True)  # lowercased headword
    created_at: Mapped[datetime] = mapped_column(default=_utc_now)

    def to_dict(self) -> dict[str, str]:
        """Catalog entry as exposed by the word list."""
        return {"id": self.id, "value": self.value}


class HistoryEntry(Base):
    """A word a user has looked up."""

    __tablename__ = "history"
    __table_args__ = (UniqueConstraint("user_id", "word_id", name="uq_history_user_word"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(Text, index=True)
    word_id: Mapped[str] = mapped_column(ForeignKey("words.id", ondelete="CASCADE"))
    created_at: Mapped[datetime] = mapped_column(default=_utc_now)


class Favorite(Base):
    """A word a user has bookmarked."""

    __tablename__ = "favorites"
    __table_args__ = (UniqueConstraint("user_id", "word_id", name="uq_favorite_user_word"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(Text, index=True)
    word_id: Mapped[str] = mapped_column(ForeignKey("words.id", ondelete="CASCADE"))
    created_at: Mapped[datetime] = mapped_column(default=_utc_now)
