"""Main CLI application entry point."""

import typer

from dictapi.cli.commands import lookup, status, words
from dictapi.cli.utils.async_runner import run_async
from dictapi.cli.utils.console import error_console
from dictapi.config import settings
from dictapi.database import init_db
from dictapi.logging_config import setup_logging

app = typer.Typer(
    name="dictapi",
    help="English dictionary lookups with caching and a paginated word catalog",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def startup() -> None:
    """Initialize application on startup."""
    setup_logging()
    settings.data_dir.mkdir(parents=True, exist_ok=True)

    try:
        run_async(init_db())
    except Exception as e:
        error_console.print(f"[error]Failed to initialize database: {e}[/]")
        raise typer.Exit(1) from None


app.command(name="status", help="Show catalog and cache status")(status.status)

app.command(name="lookup", help="Look up a word in the dictionary")(lookup.lookup)

# Sub-command groups
app.add_typer(lookup.cache_app, name="cache")
app.add_typer(words.app, name="words")


if __name__ == "__main__":
    app()
