"""Client for the Free Dictionary API (dictionaryapi.dev)."""

import logging
from urllib.parse import quote

import httpx

from dictapi.config import settings
from dictapi.services.dictionary.base import DictionaryProvider, RawDefinitionEntry
from dictapi.services.errors import DictionaryProviderError

logger = logging.getLogger(__name__)


class FreeDictionaryProvider(DictionaryProvider):
    """Fetch raw English entries over HTTP."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = (base_url or settings.dictionary_api_url).rstrip("/")
        self.timeout = timeout or settings.dictionary_timeout_seconds
        self._client = client

    @property
    def name(self) -> str:
        return "dictionaryapi"

    @property
    def client(self) -> httpx.AsyncClient:
        """Shared HTTP client, created on first use."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def get_definition(self, word: str) -> list[RawDefinitionEntry] | None:
        url = f"{self.base_url}/{quote(word, safe='')}"

        try:
            response = await self.client.get(url)
        except httpx.HTTPError as e:
            raise DictionaryProviderError(f"Dictionary request for '{word}' failed: {e}") from e

        # The API answers 404 with a "No Definitions Found" body for unknown words
        if response.status_code == 404:
            logger.debug(f"No definitions found for '{word}'")
            return None

        if response.is_error:
            raise DictionaryProviderError(
                f"Dictionary API returned HTTP {response.status_code} for '{word}'",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise DictionaryProviderError(f"Dictionary API returned invalid JSON for '{word}'") from e

        if not isinstance(payload, list):
            raise DictionaryProviderError(
                f"Unexpected dictionary response for '{word}': {type(payload).__name__}"
            )
        if not payload:
            return None

        return [RawDefinitionEntry.from_dict(item) for item in payload if isinstance(item, dict)]

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
