"""Word catalog: storage, cursor pagination and imports."""

from dictapi.services.catalog.importer import ImportReport, import_words
from dictapi.services.catalog.pagination import WordPage, WordPaginator, clamp_limit
from dictapi.services.catalog.store import SqlWordCatalog, WordCatalog
from dictapi.services.catalog.validator import filter_valid_words, is_valid_word, normalize_word

__all__ = [
    "ImportReport",
    "SqlWordCatalog",
    "WordCatalog",
    "WordPage",
    "WordPaginator",
    "clamp_limit",
    "filter_valid_words",
    "import_words",
    "is_valid_word",
    "normalize_word",
]
