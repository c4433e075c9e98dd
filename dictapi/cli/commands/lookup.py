"""Dictionary lookup and cache commands."""

import json

import typer
from rich.panel import Panel
from rich.text import Text

from dictapi.cli.utils.async_runner import run_async
from dictapi.cli.utils.console import console, error_console
from dictapi.config import settings
from dictapi.database import async_session
from dictapi.dependencies import build_dictionary_service
from dictapi.services.dictionary import DatabaseCacheStore, NormalizedDefinition
from dictapi.services.errors import DictionaryProviderError

cache_app = typer.Typer(
    name="cache",
    help="Definition cache commands",
    no_args_is_help=True,
)


def lookup(
    word: str = typer.Argument(..., help="Word to look up"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON payload"),
) -> None:
    """Look up a word in the dictionary."""
    run_async(_lookup(word, as_json))


def render_definition(definition: NormalizedDefinition) -> Panel:
    """Render one headword's definitions as a Rich panel."""
    body = Text()
    if definition.phonetic:
        body.append(f"{definition.phonetic}\n", style="phonetic")

    for meaning in definition.meanings:
        body.append(f"\n{meaning.part_of_speech}\n", style="pos")
        for number, sense in enumerate(meaning.definitions, start=1):
            body.append(f"  {number}. {sense.definition}\n")
            if sense.example:
                body.append(f"     “{sense.example}”\n", style="dim")
        if meaning.synonyms:
            body.append(f"  synonyms: {', '.join(meaning.synonyms)}\n", style="info")

    return Panel(body, title=f"[word]{definition.word}[/]", border_style="blue")


async def _lookup(word: str, as_json: bool) -> None:
    """Async implementation of lookup command."""
    word = word.strip()
    if not word:
        error_console.print("[error]Word cannot be empty[/]")
        raise typer.Exit(1)

    service = build_dictionary_service()
    try:
        result = await service.search_word(word)
    except DictionaryProviderError as e:
        error_console.print(f"[error]Dictionary lookup failed: {e}[/]")
        raise typer.Exit(1) from None
    finally:
        await service.close()

    if result is None:
        error_console.print(f"[warning]No definitions found for '{word}'[/]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps(result.to_dict(), ensure_ascii=False))
        return

    for definition in result.definition:
        console.print(render_definition(definition))
    source = "[success]cache HIT[/]" if result.from_cache else "[info]cache MISS[/]"
    console.print(f"[dim]Served from[/] {source}")


@cache_app.command(name="clear")
def clear(word: str = typer.Argument(..., help="Word whose cached definition to drop")) -> None:
    """Invalidate the cached definition of a word."""
    run_async(_clear(word))


async def _clear(word: str) -> None:
    service = build_dictionary_service()
    try:
        cleared = await service.clear_word_cache(word)
    finally:
        await service.close()

    if not cleared:
        error_console.print(f"[error]Could not clear the cache entry for '{word}'[/]")
        raise typer.Exit(1)
    console.print(f"[success]Cleared cached definition for '{word}'[/]")


@cache_app.command(name="cleanup")
def cleanup() -> None:
    """Delete expired entries from the database cache."""
    run_async(_cleanup())


async def _cleanup() -> None:
    if settings.cache_backend != "database":
        console.print(
            f"[dim]Cache backend is '{settings.cache_backend}', entries expire on their own.[/]"
        )
        return

    deleted = await DatabaseCacheStore(async_session).cleanup_expired()
    console.print(f"[success]Removed {deleted} expired cache entries[/]")
