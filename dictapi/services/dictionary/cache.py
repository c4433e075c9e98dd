"""Definition cache: storage backends and the fault-absorbing gateway."""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from redis.asyncio import Redis, from_url
from sqlalchemy import Index, Text, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import Mapped, mapped_column

from dictapi.database import Base
from dictapi.services.dictionary.base import NormalizedDefinition

logger = logging.getLogger(__name__)

KEY_PREFIX = "dictionary:word:"


def _utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(timezone.utc)


def cache_key(word: str) -> str:
    """Cache key for a headword (case-insensitive)."""
    return f"{KEY_PREFIX}{word.lower()}"


def serialize_definitions(definitions: Sequence[NormalizedDefinition]) -> str:
    """Serialize definitions to the JSON array stored in the cache."""
    return json.dumps([d.to_dict() for d in definitions], ensure_ascii=False)


def deserialize_definitions(data: str) -> list[NormalizedDefinition]:
    """
    Deserialize a cached JSON array back into definitions.

    Raises:
        ValueError: if the payload is not valid JSON or not an array
        KeyError, TypeError: if an element lacks required fields
    """
    obj = json.loads(data)
    if not isinstance(obj, list):
        raise ValueError(f"Expected a JSON array, got {type(obj).__name__}")
    return [NormalizedDefinition.from_dict(item) for item in obj]


class CacheRecord(Base):
    """Cached definition payload, used when no Redis server is available."""

    __tablename__ = "dictionary_cache"
    __table_args__ = (Index("ix_cache_expires_at", "expires_at"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    key: Mapped[str] = mapped_column(Text, unique=True)
    data: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(default=_utc_now)
    expires_at: Mapped[datetime | None] = mapped_column(nullable=True)  # null = no expiry


class CacheStore(ABC):
    """Raw key-value cache resource. Implementations may raise on any call."""

    name: str = ""

    @abstractmethod
    async def get(self, key: str) -> str | None: ...  # pragma: no cover

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        ...  # pragma: no cover

    @abstractmethod
    async def delete(self, key: str) -> None: ...  # pragma: no cover

    async def close(self) -> None:
        return None


class NullCacheStore(CacheStore):
    """Cache that never stores anything."""

    name = "none"

    async def get(self, key: str) -> str | None:
        return None

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        return None

    async def delete(self, key: str) -> None:
        return None


class RedisCacheStore(CacheStore):
    """Redis-backed cache, connected lazily on first use."""

    name = "redis"

    def __init__(self, url: str, client: Redis | None = None) -> None:
        self.url = url
        self._redis = client

    @property
    def redis(self) -> Redis:
        if self._redis is None:
            logger.info(f"Connecting to Redis at {self.url}")
            self._redis = from_url(self.url, decode_responses=True)
        return self._redis

    async def get(self, key: str) -> str | None:
        value = await self.redis.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        await self.redis.set(key, value, ex=ttl_seconds)

    async def delete(self, key: str) -> None:
        await self.redis.delete(key)

    async def close(self) -> None:
        """Close the connection pool."""
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None


class DatabaseCacheStore(CacheStore):
    """Cache stored in the ``dictionary_cache`` table.

    Each operation runs in its own short session so cache writes never
    share a transaction with the caller's catalog work.
    """

    name = "database"

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def get(self, key: str) -> str | None:
        now = _utc_now()
        stmt = select(CacheRecord.data).where(
            CacheRecord.key == key,
            (CacheRecord.expires_at.is_(None)) | (CacheRecord.expires_at > now),
        )
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        now = _utc_now()
        expires_at = now + timedelta(seconds=ttl_seconds) if ttl_seconds else None

        async with self.session_factory() as session:
            result = await session.execute(select(CacheRecord).where(CacheRecord.key == key))
            existing = result.scalar_one_or_none()

            if existing:
                existing.data = value
                existing.created_at = now
                existing.expires_at = expires_at
            else:
                session.add(
                    CacheRecord(key=key, data=value, created_at=now, expires_at=expires_at)
                )
            await session.commit()

    async def delete(self, key: str) -> None:
        async with self.session_factory() as session:
            await session.execute(delete(CacheRecord).where(CacheRecord.key == key))
            await session.commit()

    async def cleanup_expired(self) -> int:
        """
        Remove expired cache entries.

        Returns the number of entries deleted.
        """
        now = _utc_now()
        expired = CacheRecord.expires_at <= now

        async with self.session_factory() as session:
            count_result = await session.execute(
                select(func.count()).select_from(CacheRecord).where(expired)
            )
            count = count_result.scalar() or 0

            await session.execute(delete(CacheRecord).where(expired))
            await session.commit()

        return int(count)


class CacheGateway:
    """
    Fault-absorbing front for a CacheStore.

    Caching is an optimization: a store that is down or erroring behaves
    like an empty cache. ``get`` returns None on failure and ``set``/``delete``
    report failure through their boolean result instead of raising.
    Nothing is retried.
    """

    def __init__(self, store: CacheStore) -> None:
        self.store = store

    @property
    def backend(self) -> str:
        return self.store.name

    async def get(self, key: str) -> str | None:
        try:
            return await self.store.get(key)
        except Exception as e:
            logger.warning(f"Cache get failed for '{key}': {e}")
            return None

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> bool:
        try:
            await self.store.set(key, value, ttl_seconds)
            return True
        except Exception as e:
            logger.warning(f"Cache set failed for '{key}': {e}")
            return False

    async def delete(self, key: str) -> bool:
        try:
            await self.store.delete(key)
            return True
        except Exception as e:
            logger.warning(f"Cache delete failed for '{key}': {e}")
            return False

    async def close(self) -> None:
        await self.store.close()


def build_cache_store(
    backend: str,
    redis_url: str = "",
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> CacheStore:
    """Create the cache store named by the ``cache_backend`` setting."""
    if backend == "redis":
        return RedisCacheStore(redis_url)
    if backend == "database":
        if session_factory is None:
            raise ValueError("The database cache backend needs a session factory")
        return DatabaseCacheStore(session_factory)
    if backend == "none":
        return NullCacheStore()
    raise ValueError(f"Unknown cache backend: {backend}")
