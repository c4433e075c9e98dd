"""Validation and normalization of words entering the catalog."""

import re
from collections.abc import Iterable

MIN_LENGTH = 2
MAX_LENGTH = 50

# Typographic punctuation from copy-pasted word lists
_PROBLEMATIC_CHARS = re.compile(r"[–—‘’“”…]")
# Basic Latin letters, hyphens, straight apostrophes and periods only
_VALID_CHARS = re.compile(r"^[a-zA-Z\-'.]+$")
_LETTER = re.compile(r"[a-zA-Z]")
_PUNCTUATION_RUN = re.compile(r"[\-'.]{3,}")
_REPEATED_PUNCTUATION = re.compile(r"--+|\.\.+|''+")
_DOTTED_ABBREVIATION = re.compile(r"\.[a-zA-Z]\.|[a-zA-Z]\.[a-zA-Z]\.")


def normalize_word(word: str) -> str:
    """Normalize a word for storage: trimmed and lowercased."""
    return word.strip().lower()


def is_valid_word(word: str) -> bool:
    """
    Check that a word is well-formed enough to list in the catalog.

    Straight apostrophes are allowed for contractions ("don't") and a
    trailing period for abbreviations ("etc."), but not dotted
    abbreviations ("e.g."), leading hyphens/periods or trailing hyphens.
    """
    if not word or not isinstance(word, str):
        return False

    trimmed = word.strip()

    if not MIN_LENGTH <= len(trimmed) <= MAX_LENGTH:
        return False
    if _PROBLEMATIC_CHARS.search(trimmed):
        return False
    if not _VALID_CHARS.match(trimmed):
        return False

    # At least half of the word must be letters
    letters = len(_LETTER.findall(trimmed))
    if letters / len(trimmed) < 0.5:
        return False

    if _PUNCTUATION_RUN.search(trimmed):
        return False
    if trimmed[0] in "-." or trimmed.endswith("-"):
        return False
    if _REPEATED_PUNCTUATION.search(trimmed):
        return False
    if _DOTTED_ABBREVIATION.search(trimmed):
        return False

    return True


def filter_valid_words(words: Iterable[str]) -> list[str]:
    """Keep only valid words, preserving order."""
    return [w for w in words if is_valid_word(w)]
