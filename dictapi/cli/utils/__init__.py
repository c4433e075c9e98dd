"""CLI utility modules."""

from dictapi.cli.utils.async_runner import run_async
from dictapi.cli.utils.console import console, error_console
from dictapi.cli.utils.progress import create_simple_progress

__all__ = ["run_async", "console", "error_console", "create_simple_progress"]
