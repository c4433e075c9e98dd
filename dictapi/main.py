"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from dictapi import __version__
from dictapi.config import settings
from dictapi.database import init_db
from dictapi.dependencies import build_dictionary_service
from dictapi.logging_config import setup_logging
from dictapi.routes import users_router, words_router

# Configure logging
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    logger.info("Starting dictapi...")

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    await init_db()
    logger.info("Database initialized")

    app.state.dictionary_service = build_dictionary_service()

    yield

    # Shutdown
    logger.info("Shutting down dictapi...")
    await app.state.dictionary_service.close()


app = FastAPI(
    title="dictapi",
    description="English dictionary lookups with caching and a paginated word list",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(words_router)
app.include_router(users_router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
    }


def run() -> None:
    """Run the application (for use with `dictapi-server` command)."""
    import uvicorn

    uvicorn.run(
        "dictapi.main:app",
        host="0.0.0.0",  # noqa: S104  # nosec B104 - Development server
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    run()
