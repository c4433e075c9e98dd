"""Bulk import of word lists into the catalog."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from dictapi.services.catalog.store import SqlWordCatalog
from dictapi.services.catalog.validator import is_valid_word, normalize_word

logger = logging.getLogger(__name__)

EXAMPLE_LIMIT = 10


@dataclass
class ImportReport:
    """Outcome of a word list import."""

    total: int = 0
    valid: int = 0
    invalid: int = 0
    inserted: int = 0
    invalid_examples: list[str] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        """Valid words that were already in the catalog."""
        return self.valid - self.inserted


async def import_words(catalog: SqlWordCatalog, lines: Iterable[str]) -> ImportReport:
    """
    Validate and insert words, one per line.

    Blank lines are ignored. Valid words are lowercased and deduplicated
    before insertion; words already in the catalog are skipped.
    """
    report = ImportReport()
    valid_words: dict[str, None] = {}

    for line in lines:
        word = line.strip()
        if not word:
            continue
        report.total += 1

        if is_valid_word(word):
            valid_words.setdefault(normalize_word(word), None)
        else:
            report.invalid += 1
            if len(report.invalid_examples) < EXAMPLE_LIMIT:
                report.invalid_examples.append(word)

    report.valid = len(valid_words)
    report.inserted = await catalog.add_many(valid_words)

    logger.info(
        "Imported %d new words (%d valid, %d invalid, %d lines)",
        report.inserted,
        report.valid,
        report.invalid,
        report.total,
    )
    return report
