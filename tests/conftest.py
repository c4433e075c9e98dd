"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import dictapi.models  # noqa: F401
import dictapi.services.dictionary.cache  # noqa: F401
from dictapi.database import Base, get_session
from dictapi.dependencies import get_dictionary_service
from dictapi.main import app
from dictapi.models import Word
from dictapi.services.dictionary import (
    CacheGateway,
    CacheStore,
    DictionaryProvider,
    DictionaryService,
    RawDefinitionEntry,
)


class InMemoryCacheStore(CacheStore):
    """Dict-backed cache store that records TTLs."""

    name = "memory"

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        self.data[key] = value
        self.ttls[key] = ttl_seconds

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)
        self.ttls.pop(key, None)


class StubProvider(DictionaryProvider):
    """Provider answering from a fixed word -> entries mapping."""

    def __init__(self, entries: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self.entries = entries or {}
        self.calls: list[str] = []
        self.closed = False

    @property
    def name(self) -> str:
        return "stub"

    async def get_definition(self, word: str) -> list[RawDefinitionEntry] | None:
        self.calls.append(word)
        raw = self.entries.get(word.lower())
        if not raw:
            return None
        return [RawDefinitionEntry.from_dict(item) for item in raw]

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def hello_entries() -> list[dict[str, Any]]:
    """Two provider entries for "hello", shaped like dictionaryapi.dev output."""
    return [
        {
            "word": "hello",
            "phonetic": "həˈləʊ",
            "phonetics": [
                {
                    "text": "həˈləʊ",
                    "audio": "https://api.dictionaryapi.dev/media/pronunciations/en/hello-uk.mp3",
                    "sourceUrl": "https://commons.wikimedia.org/w/index.php?curid=9021983",
                    "license": {
                        "name": "BY 3.0 US",
                        "url": "https://creativecommons.org/licenses/by/3.0/us",
                    },
                },
                {"text": "hɛˈləʊ", "audio": ""},
            ],
            "meanings": [
                {
                    "partOfSpeech": "exclamation",
                    "definitions": [
                        {
                            "definition": "Used as a greeting.",
                            "example": "Hello, everyone.",
                            "synonyms": [],
                            "antonyms": [],
                        }
                    ],
                    "synonyms": ["hi"],
                    "antonyms": ["bye"],
                }
            ],
            "license": {
                "name": "CC BY-SA 3.0",
                "url": "https://creativecommons.org/licenses/by-sa/3.0",
            },
            "sourceUrls": ["https://en.wiktionary.org/wiki/hello"],
        },
        {
            "word": "hello",
            "phonetics": [
                {
                    "text": "həˈləʊ",
                    "audio": "https://api.dictionaryapi.dev/media/pronunciations/en/hello-uk.mp3",
                }
            ],
            "meanings": [
                {
                    "partOfSpeech": "noun",
                    "definitions": [{"definition": "\"Hello!\" or an equivalent greeting."}],
                },
                {
                    "partOfSpeech": "exclamation",
                    "definitions": [{"definition": "Used to show surprise."}],
                    "synonyms": ["hey"],
                },
            ],
            "sourceUrls": [
                "https://en.wiktionary.org/wiki/hello",
                "https://en.wiktionary.org/wiki/hullo",
            ],
        },
    ]


@pytest.fixture
def cache_store() -> InMemoryCacheStore:
    return InMemoryCacheStore()


@pytest.fixture
def stub_provider(hello_entries: list[dict[str, Any]]) -> StubProvider:
    return StubProvider({"hello": hello_entries})


@pytest.fixture
def dictionary_service(
    stub_provider: StubProvider, cache_store: InMemoryCacheStore
) -> DictionaryService:
    return DictionaryService(stub_provider, CacheGateway(cache_store))


@pytest.fixture
async def async_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def async_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def sample_words(async_session: AsyncSession) -> list[Word]:
    """The three-word catalog: ant, bee, cat with ids 1, 2, 3."""
    words = [Word(id="1", value="ant"), Word(id="2", value="bee"), Word(id="3", value="cat")]
    async_session.add_all(words)
    await async_session.commit()
    return words


@pytest.fixture
def test_app(async_session: AsyncSession, dictionary_service: DictionaryService) -> FastAPI:
    """Create a test FastAPI application."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        yield async_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_dictionary_service] = lambda: dictionary_service
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(test_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an asynchronous test client."""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as client:
        yield client
