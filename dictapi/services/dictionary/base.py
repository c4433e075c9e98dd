"""Dictionary entry types, their JSON wire shape, and the provider interface.

The wire shape follows the provider's camelCase JSON. Optional fields
(``example``, ``sourceUrl``, ``license``) are omitted when unknown, while
nullable fields (``phonetic``, phonetic ``text``/``audio``) are always written,
so that a definition read back from the cache compares equal to the one that
was stored.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class License:
    """License attached to an entry or a pronunciation."""

    name: str
    url: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "url": self.url}

    @classmethod
    def from_dict(cls, obj: Any) -> "License | None":
        if not isinstance(obj, dict):
            return None
        return cls(name=obj.get("name", ""), url=obj.get("url", ""))


@dataclass
class PhoneticVariant:
    """One pronunciation: transcription and/or audio recording."""

    text: str | None = None
    audio: str | None = None
    source_url: str | None = None
    license: License | None = None

    @property
    def dedup_key(self) -> str:
        return f"{self.text or ''}__{self.audio or ''}"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"text": self.text, "audio": self.audio}
        if self.source_url is not None:
            data["sourceUrl"] = self.source_url
        if self.license is not None:
            data["license"] = self.license.to_dict()
        return data

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> "PhoneticVariant":
        return cls(
            text=obj.get("text"),
            audio=obj.get("audio"),
            source_url=obj.get("sourceUrl"),
            license=License.from_dict(obj.get("license")),
        )


@dataclass
class Definition:
    """A single sense of a word."""

    definition: str
    example: str | None = None
    synonyms: list[str] = field(default_factory=list)
    antonyms: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"definition": self.definition}
        if self.example is not None:
            data["example"] = self.example
        data["synonyms"] = list(self.synonyms)
        data["antonyms"] = list(self.antonyms)
        return data

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> "Definition":
        return cls(
            definition=obj.get("definition", ""),
            example=obj.get("example"),
            synonyms=list(obj.get("synonyms") or []),
            antonyms=list(obj.get("antonyms") or []),
        )


@dataclass
class Meaning:
    """Definitions grouped under one part of speech."""

    part_of_speech: str
    definitions: list[Definition] = field(default_factory=list)
    synonyms: list[str] = field(default_factory=list)
    antonyms: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "partOfSpeech": self.part_of_speech,
            "definitions": [d.to_dict() for d in self.definitions],
            "synonyms": list(self.synonyms),
            "antonyms": list(self.antonyms),
        }

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> "Meaning":
        return cls(
            part_of_speech=obj.get("partOfSpeech", ""),
            definitions=[Definition.from_dict(d) for d in obj.get("definitions") or []],
            synonyms=list(obj.get("synonyms") or []),
            antonyms=list(obj.get("antonyms") or []),
        )


@dataclass
class RawDefinitionEntry:
    """One entry exactly as the external provider returned it.

    A provider may return several entries for the same headword (homographs),
    which is why lookups run through the normalizer before being cached.
    """

    word: str
    phonetic: str | None = None
    phonetics: list[PhoneticVariant] = field(default_factory=list)
    meanings: list[Meaning] = field(default_factory=list)
    license: License | None = None
    source_urls: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> "RawDefinitionEntry":
        """Parse a provider entry; missing collections become empty lists."""
        return cls(
            word=obj.get("word", ""),
            phonetic=obj.get("phonetic"),
            phonetics=[PhoneticVariant.from_dict(p) for p in obj.get("phonetics") or []],
            meanings=[Meaning.from_dict(m) for m in obj.get("meanings") or []],
            license=License.from_dict(obj.get("license")),
            source_urls=list(obj.get("sourceUrls") or []),
        )


@dataclass
class NormalizedDefinition:
    """All provider entries for one headword, merged and deduplicated."""

    word: str
    phonetic: str | None = None
    phonetics: list[PhoneticVariant] = field(default_factory=list)
    meanings: list[Meaning] = field(default_factory=list)
    license: License | None = None
    source_urls: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "word": self.word,
            "phonetic": self.phonetic,
            "phonetics": [p.to_dict() for p in self.phonetics],
            "meanings": [m.to_dict() for m in self.meanings],
        }
        if self.license is not None:
            data["license"] = self.license.to_dict()
        data["sourceUrls"] = list(self.source_urls)
        return data

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> "NormalizedDefinition":
        """Rebuild a definition from its wire form.

        Raises KeyError/TypeError when required keys are missing, so a
        corrupt cache payload is detectable by the caller.
        """
        return cls(
            word=obj["word"],
            phonetic=obj["phonetic"],
            phonetics=[PhoneticVariant.from_dict(p) for p in obj["phonetics"]],
            meanings=[Meaning.from_dict(m) for m in obj["meanings"]],
            license=License.from_dict(obj.get("license")),
            source_urls=list(obj["sourceUrls"]),
        )


@dataclass
class LookupResult:
    """Definitions for a word plus where they were served from."""

    definition: list[NormalizedDefinition]
    from_cache: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "definition": [d.to_dict() for d in self.definition],
            "fromCache": self.from_cache,
        }


class DictionaryProvider(ABC):
    """Abstract base class for external dictionary sources."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this provider."""
        ...  # pragma: no cover

    @abstractmethod
    async def get_definition(self, word: str) -> list[RawDefinitionEntry] | None:
        """
        Fetch the raw entries for a word.

        Args:
            word: The word to look up

        Returns:
            The provider's entries, or None if the word is unknown

        Raises:
            DictionaryProviderError: on transport errors or unexpected responses
        """
        ...  # pragma: no cover

    async def close(self) -> None:
        """Release any connections held by the provider."""
        return None
