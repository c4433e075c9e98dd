"""Status command for displaying application statistics."""

from rich.panel import Panel
from rich.table import Table
from sqlalchemy import func, select

from dictapi.cli.utils.async_runner import run_async
from dictapi.cli.utils.console import console
from dictapi.config import settings
from dictapi.database import async_session
from dictapi.models import Favorite, HistoryEntry, Word


def status() -> None:
    """Show catalog and cache status."""
    run_async(_status())


async def _status() -> None:
    """Async implementation of status command."""
    async with async_session() as session:
        word_result = await session.execute(select(func.count(Word.id)))
        word_count: int = word_result.scalar() or 0

        history_result = await session.execute(select(func.count(HistoryEntry.id)))
        history_count: int = history_result.scalar() or 0

        favorite_result = await session.execute(select(func.count(Favorite.id)))
        favorite_count: int = favorite_result.scalar() or 0

        users_result = await session.execute(
            select(func.count(func.distinct(HistoryEntry.user_id)))
        )
        user_count: int = users_result.scalar() or 0

    catalog_table = Table(show_header=False, box=None, padding=(0, 2))
    catalog_table.add_column("Label", style="bold")
    catalog_table.add_column("Value", justify="right")

    catalog_table.add_row("Words", str(word_count))
    catalog_table.add_row("History entries", str(history_count))
    catalog_table.add_row("Favorites", str(favorite_count))
    catalog_table.add_row("Active users", str(user_count))

    catalog_panel = Panel(catalog_table, title="[bold]Catalog[/]", border_style="blue")

    cache_table = Table(show_header=False, box=None, padding=(0, 2))
    cache_table.add_column("Label", style="bold")
    cache_table.add_column("Value", justify="right")

    cache_table.add_row("Backend", settings.cache_backend)
    if settings.cache_backend == "redis":
        cache_table.add_row("Redis", f"[dim]{settings.redis_url}[/]")
    cache_table.add_row("TTL", f"{settings.cache_ttl_seconds}s")
    cache_table.add_row("Dictionary API", f"[dim]{settings.dictionary_api_url}[/]")

    cache_panel = Panel(cache_table, title="[bold]Lookups[/]", border_style="blue")

    console.print()
    console.print(catalog_panel)
    console.print(cache_panel)
    console.print()
