"""Rich progress indicators."""

from rich.progress import Progress, SpinnerColumn, TextColumn

from dictapi.cli.utils.console import console


def create_simple_progress() -> Progress:
    """Create a transient spinner for work without a known total."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    )
