"""Service construction and FastAPI dependencies.

Long-lived collaborators (cache gateway, provider) are built once by
``build_dictionary_service`` and kept on ``app.state``; catalog and library
services are built per request around the request's database session.
"""

import logging

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dictapi.config import Settings, settings
from dictapi.database import async_session, get_session
from dictapi.services.catalog import SqlWordCatalog, WordPaginator
from dictapi.services.dictionary import (
    CacheGateway,
    DictionaryService,
    FreeDictionaryProvider,
    build_cache_store,
)
from dictapi.services.library import LibraryService

logger = logging.getLogger(__name__)


def build_dictionary_service(
    config: Settings = settings,
    session_factory: async_sessionmaker[AsyncSession] = async_session,
) -> DictionaryService:
    """Assemble the lookup service from configuration."""
    store = build_cache_store(
        config.cache_backend,
        redis_url=config.redis_url,
        session_factory=session_factory,
    )
    provider = FreeDictionaryProvider(
        base_url=config.dictionary_api_url,
        timeout=config.dictionary_timeout_seconds,
    )
    logger.info(f"Dictionary cache backend: {store.name}")
    return DictionaryService(provider, CacheGateway(store), ttl_seconds=config.cache_ttl_seconds)


def get_dictionary_service(request: Request) -> DictionaryService:
    """Return the lookup service created at startup."""
    service: DictionaryService = request.app.state.dictionary_service
    return service


def get_word_catalog(session: AsyncSession = Depends(get_session)) -> SqlWordCatalog:
    return SqlWordCatalog(session)


def get_paginator(catalog: SqlWordCatalog = Depends(get_word_catalog)) -> WordPaginator:
    return WordPaginator(
        catalog,
        default_limit=settings.page_size_default,
        max_limit=settings.page_size_max,
    )


def get_library(session: AsyncSession = Depends(get_session)) -> LibraryService:
    return LibraryService(session)


async def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """
    Identify the caller.

    Authentication happens upstream; the authenticating proxy forwards the
    user id in the ``X-User-Id`` header.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return x_user_id.strip()
