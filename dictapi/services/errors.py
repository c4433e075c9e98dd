"""Exceptions raised by the lookup and catalog services."""


class DictionaryProviderError(Exception):
    """The external dictionary could not answer (transport error or non-2xx)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidCursorError(Exception):
    """A pagination cursor names a catalog entry that does not exist."""

    def __init__(self, cursor: str, direction: str = "next") -> None:
        super().__init__(f"Invalid {direction} page cursor: {cursor!r}")
        self.cursor = cursor
        self.direction = direction
