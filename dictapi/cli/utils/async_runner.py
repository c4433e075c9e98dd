"""Async runner utilities for CLI commands."""

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

from dictapi.database import engine

T = TypeVar("T")


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run an async coroutine from synchronous CLI code.

    The database engine is disposed before the loop closes so no aiosqlite
    worker thread outlives the command.
    """

    async def _main() -> T:
        try:
            return await coro
        finally:
            await engine.dispose()

    return asyncio.run(_main())
