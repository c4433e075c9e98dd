"""Services for dictionary lookups, the word catalog and user libraries."""

from dictapi.services.catalog import SqlWordCatalog, WordPaginator
from dictapi.services.dictionary import DictionaryService
from dictapi.services.errors import DictionaryProviderError, InvalidCursorError
from dictapi.services.library import LibraryService

__all__ = [
    "DictionaryProviderError",
    "DictionaryService",
    "InvalidCursorError",
    "LibraryService",
    "SqlWordCatalog",
    "WordPaginator",
]
