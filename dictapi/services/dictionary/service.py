"""Dictionary service: cache-aside lookups over the external provider."""

import logging

from dictapi.services.dictionary.base import DictionaryProvider, LookupResult
from dictapi.services.dictionary.cache import (
    CacheGateway,
    cache_key,
    deserialize_definitions,
    serialize_definitions,
)
from dictapi.services.dictionary.normalizer import normalize_entries

logger = logging.getLogger(__name__)


class DictionaryService:
    """
    Look up words through the cache, falling back to the provider.

    Cache problems (unavailable store, corrupt payload) never reach the
    caller and simply behave like a miss. Provider errors are not masked.
    """

    DEFAULT_TTL_SECONDS = 3600

    def __init__(
        self,
        provider: DictionaryProvider,
        cache: CacheGateway,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ) -> None:
        """
        Initialize the dictionary service.

        Args:
            provider: Source of raw dictionary entries
            cache: Gateway to the definition cache
            ttl_seconds: Lifetime of cached definitions
        """
        self.provider = provider
        self.cache = cache
        self.ttl_seconds = ttl_seconds

    async def search_word(self, word: str) -> LookupResult | None:
        """
        Return normalized definitions for a word.

        Args:
            word: The word to look up (case-insensitive for caching)

        Returns:
            LookupResult tagged with from_cache, or None if the provider
            does not know the word

        Raises:
            DictionaryProviderError: if the provider could not be reached
        """
        key = cache_key(word)

        cached = await self.cache.get(key)
        if cached is not None:
            try:
                definitions = deserialize_definitions(cached)
            except (ValueError, KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Discarding corrupt cache entry for '{word}': {e}")
            else:
                logger.debug(f"Cache hit for '{word}'")
                return LookupResult(definition=definitions, from_cache=True)

        logger.debug(f"Cache miss for '{word}', querying {self.provider.name}")
        entries = await self.provider.get_definition(word)
        if not entries:
            # Unknown words are not cached
            return None

        definitions = normalize_entries(entries)
        await self.cache.set(key, serialize_definitions(definitions), self.ttl_seconds)

        return LookupResult(definition=definitions, from_cache=False)

    async def clear_word_cache(self, word: str) -> bool:
        """
        Drop the cached definition for a word.

        Returns False only when the cache delete itself failed.
        """
        cleared = await self.cache.delete(cache_key(word))
        if cleared:
            logger.info(f"Cleared cached definition for '{word}'")
        return cleared

    async def close(self) -> None:
        """Close provider and cache connections."""
        await self.provider.close()
        await self.cache.close()
