"""Word list, lookup and favorite routes."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from dictapi.database import get_session
from dictapi.dependencies import (
    get_current_user_id,
    get_dictionary_service,
    get_library,
    get_paginator,
    get_word_catalog,
)
from dictapi.models import Word
from dictapi.services.catalog import SqlWordCatalog, WordPaginator
from dictapi.services.dictionary import DictionaryService
from dictapi.services.errors import DictionaryProviderError, InvalidCursorError
from dictapi.services.library import LibraryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/entries/en", tags=["words"])


async def _get_word_or_404(catalog: SqlWordCatalog, word_id: str) -> Word:
    word = await catalog.get(word_id)
    if word is None:
        raise HTTPException(status_code=404, detail="Word not found")
    return word


@router.get("")
async def list_words(
    search: str | None = Query(None, max_length=100),
    limit: int | None = Query(None),
    next_cursor: str | None = Query(None, alias="next"),
    previous_cursor: str | None = Query(None, alias="previous"),
    paginator: WordPaginator = Depends(get_paginator),
) -> dict[str, Any]:
    """List catalog words a page at a time."""
    try:
        page = await paginator.list_words(
            search=search.strip() if search else None,
            limit=limit,
            next_cursor=next_cursor,
            previous_cursor=previous_cursor,
        )
    except InvalidCursorError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None

    return page.to_dict()


@router.get("/{word_id}")
async def get_word(
    word_id: str,
    response: Response,
    user_id: str = Depends(get_current_user_id),
    catalog: SqlWordCatalog = Depends(get_word_catalog),
    library: LibraryService = Depends(get_library),
    dictionary: DictionaryService = Depends(get_dictionary_service),
    session: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    """Look up a catalog word in the dictionary and record it in the user's history."""
    word = await _get_word_or_404(catalog, word_id)

    try:
        result = await dictionary.search_word(word.value)
    except DictionaryProviderError as e:
        logger.error(f"Dictionary lookup failed for '{word.value}': {e}")
        raise HTTPException(status_code=502, detail="Dictionary service unavailable") from None

    if result is None:
        raise HTTPException(status_code=404, detail="Word not found in dictionary")

    await library.record_history(user_id, word.id)
    is_favorite = await library.is_favorite(user_id, word.id)
    await session.commit()

    response.headers["x-cache"] = "HIT" if result.from_cache else "MISS"
    return {
        "id": word.id,
        "word": word.value,
        **result.to_dict(),
        "isFavorite": is_favorite,
    }


@router.delete("/{word_id}/cache")
async def clear_word_cache(
    word_id: str,
    catalog: SqlWordCatalog = Depends(get_word_catalog),
    dictionary: DictionaryService = Depends(get_dictionary_service),
) -> dict[str, bool]:
    """Invalidate the cached definition of a word."""
    word = await _get_word_or_404(catalog, word_id)
    cleared = await dictionary.clear_word_cache(word.value)
    return {"cleared": cleared}


@router.post("/{word_id}/favorite", status_code=status.HTTP_201_CREATED)
async def add_favorite(
    word_id: str,
    user_id: str = Depends(get_current_user_id),
    catalog: SqlWordCatalog = Depends(get_word_catalog),
    library: LibraryService = Depends(get_library),
    session: AsyncSession = Depends(get_session),
) -> dict[str, Any]:
    """Bookmark a word."""
    word = await _get_word_or_404(catalog, word_id)
    favorite = await library.add_favorite(user_id, word.id)
    await session.commit()

    return {
        "id": word.id,
        "word": word.value,
        "createdAt": favorite.created_at.isoformat(),
    }


@router.delete("/{word_id}/unfavorite", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(
    word_id: str,
    user_id: str = Depends(get_current_user_id),
    catalog: SqlWordCatalog = Depends(get_word_catalog),
    library: LibraryService = Depends(get_library),
    session: AsyncSession = Depends(get_session),
) -> Response:
    """Remove a bookmark (no-op if the word was not bookmarked)."""
    word = await _get_word_or_404(catalog, word_id)
    await library.remove_favorite(user_id, word.id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
