"""Word catalog commands."""

from pathlib import Path

import typer
from rich.table import Table

from dictapi.cli.utils.async_runner import run_async
from dictapi.cli.utils.console import console, error_console
from dictapi.cli.utils.progress import create_simple_progress
from dictapi.config import settings
from dictapi.database import async_session
from dictapi.services.catalog import SqlWordCatalog, WordPaginator, import_words
from dictapi.services.errors import InvalidCursorError

app = typer.Typer(
    name="words",
    help="Word catalog commands",
    no_args_is_help=True,
)


@app.command(name="import")
def import_file(
    file_path: Path = typer.Argument(..., help="Word list, one word per line"),
) -> None:
    """Import a word list into the catalog."""
    if not file_path.is_file():
        error_console.print(f"[error]File not found: {file_path}[/]")
        raise typer.Exit(1)

    run_async(_import_file(file_path))


async def _import_file(file_path: Path) -> None:
    """Async implementation of import command."""
    lines = file_path.read_text(encoding="utf-8").splitlines()

    async with async_session() as session:
        with create_simple_progress() as progress:
            progress.add_task(f"Importing {file_path.name}...", total=None)
            report = await import_words(SqlWordCatalog(session), lines)
        await session.commit()

    console.print(f"Found [info]{report.total}[/] words")
    console.print(f"Valid: [success]{report.valid}[/]  Invalid: [warning]{report.invalid}[/]")
    if report.invalid_examples:
        console.print(f"[dim]Examples of filtered words: {', '.join(report.invalid_examples)}[/]")
    console.print(
        f"[success]Inserted {report.inserted} new words[/] "
        f"[dim]({report.skipped} already in the catalog)[/]"
    )


@app.command(name="list")
def list_words(
    search: str = typer.Option("", "--search", "-s", help="Filter by prefix"),
    limit: int = typer.Option(20, "--limit", "-n", help="Page size (1-100)"),
    next_cursor: str = typer.Option("", "--next", help="Cursor of the page to continue after"),
    previous_cursor: str = typer.Option("", "--previous", help="Cursor of the page to go back from"),
) -> None:
    """Show one page of the word catalog."""
    run_async(_list_words(search, limit, next_cursor, previous_cursor))


async def _list_words(search: str, limit: int, next_cursor: str, previous_cursor: str) -> None:
    """Async implementation of list command."""
    async with async_session() as session:
        paginator = WordPaginator(
            SqlWordCatalog(session),
            default_limit=settings.page_size_default,
            max_limit=settings.page_size_max,
        )
        try:
            page = await paginator.list_words(
                search=search.strip() or None,
                limit=limit,
                next_cursor=next_cursor or None,
                previous_cursor=previous_cursor or None,
            )
        except InvalidCursorError as e:
            error_console.print(f"[error]{e}[/]")
            raise typer.Exit(1) from None

    if not page.results:
        console.print("[dim]No words found.[/]")
        return

    table = Table(title=f"Words ({page.total_docs} matching)")
    table.add_column("ID", style="dim")
    table.add_column("Word", style="word")
    for word in page.results:
        table.add_row(word.id, word.value)

    console.print(table)
    if page.has_prev and page.previous:
        console.print(f"[dim]Previous page:[/] [cursor]--previous {page.previous}[/]")
    if page.has_next and page.next:
        console.print(f"[dim]Next page:[/] [cursor]--next {page.next}[/]")
