"""Dictionary lookups backed by an external API and a definition cache."""

from dictapi.services.dictionary.base import (
    DictionaryProvider,
    LookupResult,
    NormalizedDefinition,
    RawDefinitionEntry,
)
from dictapi.services.dictionary.cache import (
    CacheGateway,
    CacheStore,
    DatabaseCacheStore,
    NullCacheStore,
    RedisCacheStore,
    build_cache_store,
    deserialize_definitions,
    serialize_definitions,
)
from dictapi.services.dictionary.normalizer import normalize_entries
from dictapi.services.dictionary.provider import FreeDictionaryProvider
from dictapi.services.dictionary.service import DictionaryService

__all__ = [
    "CacheGateway",
    "CacheStore",
    "DatabaseCacheStore",
    "DictionaryProvider",
    "DictionaryService",
    "FreeDictionaryProvider",
    "LookupResult",
    "NormalizedDefinition",
    "NullCacheStore",
    "RawDefinitionEntry",
    "RedisCacheStore",
    "build_cache_store",
    "deserialize_definitions",
    "normalize_entries",
    "serialize_definitions",
]
