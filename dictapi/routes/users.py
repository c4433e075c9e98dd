"""Current user's history and favorites."""

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dictapi.database import get_session
from dictapi.dependencies import get_current_user_id, get_library
from dictapi.services.library import LibraryService

router = APIRouter(prefix="/user/me", tags=["user"])


@router.get("/history")
async def list_history(
    user_id: str = Depends(get_current_user_id),
    library: LibraryService = Depends(get_library),
) -> dict[str, Any]:
    """Words the user looked up, most recent first."""
    entries = await library.list_history(user_id)
    return {
        "results": [
            {"id": word.id, "word": word.value, "addedAt": entry.created_at.isoformat()}
            for entry, word in entries
        ]
    }


@router.delete("/history")
async def clear_history(
    user_id: str = Depends(get_current_user_id),
    library: LibraryService = Depends(get_library),
    session: AsyncSession = Depends(get_session),
) -> dict[str, int]:
    deleted = await library.clear_history(user_id)
    await session.commit()
    return {"deleted": deleted}


@router.get("/favorites")
async def list_favorites(
    user_id: str = Depends(get_current_user_id),
    library: LibraryService = Depends(get_library),
) -> dict[str, Any]:
    """Words the user bookmarked, most recent first."""
    favorites = await library.list_favorites(user_id)
    return {
        "results": [
            {"id": word.id, "word": word.value, "addedAt": favorite.created_at.isoformat()}
            for favorite, word in favorites
        ]
    }
