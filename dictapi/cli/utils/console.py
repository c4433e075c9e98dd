"""Rich consoles shared by the dictapi commands.

Headwords, parts of speech, phonetics and page cursors each get a theme
style so lookups and word listings read the same across commands.
"""

from rich.console import Console
from rich.theme import Theme

dictapi_theme = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red bold",
        "dim": "dim",
        "word": "magenta bold",
        "pos": "blue italic",
        "phonetic": "dim italic",
        "cursor": "bold cyan",
    }
)

console = Console(theme=dictapi_theme)

# Errors and warnings go to stderr
error_console = Console(theme=dictapi_theme, stderr=True)
