"""Route handlers for dictapi."""

from dictapi.routes.users import router as users_router
from dictapi.routes.words import router as words_router

__all__ = [
    "users_router",
    "words_router",
]
