"""Merge raw provider entries into one definition per headword."""

from collections.abc import Iterable

from dictapi.services.dictionary.base import (
    Definition,
    Meaning,
    NormalizedDefinition,
    PhoneticVariant,
    RawDefinitionEntry,
)


def _copy_definition(definition: Definition) -> Definition:
    return Definition(
        definition=definition.definition,
        example=definition.example,
        synonyms=list(definition.synonyms),
        antonyms=list(definition.antonyms),
    )


def _merge_phonetics(record: NormalizedDefinition, variants: Iterable[PhoneticVariant]) -> None:
    seen = {p.dedup_key for p in record.phonetics}
    for variant in variants:
        # Nothing to pronounce or play
        if not variant.text and not variant.audio:
            continue
        key = variant.dedup_key
        if key in seen:
            continue
        seen.add(key)
        record.phonetics.append(
            PhoneticVariant(
                text=variant.text,
                audio=variant.audio,
                source_url=variant.source_url,
                license=variant.license,
            )
        )


def _merge_meanings(record: NormalizedDefinition, meanings: Iterable[Meaning]) -> None:
    for meaning in meanings:
        definitions = [_copy_definition(d) for d in meaning.definitions]
        existing = next(
            (m for m in record.meanings if m.part_of_speech == meaning.part_of_speech),
            None,
        )
        if existing is not None:
            # Concatenate, duplicates across entries are kept
            existing.definitions.extend(definitions)
            existing.synonyms.extend(meaning.synonyms)
            existing.antonyms.extend(meaning.antonyms)
        else:
            record.meanings.append(
                Meaning(
                    part_of_speech=meaning.part_of_speech,
                    definitions=definitions,
                    synonyms=list(meaning.synonyms),
                    antonyms=list(meaning.antonyms),
                )
            )


def normalize_entries(entries: Iterable[RawDefinitionEntry]) -> list[NormalizedDefinition]:
    """
    Merge provider entries into one record per distinct headword.

    Records come out in the order their headword was first seen. For each
    headword, phonetic variants are deduplicated on their text/audio pair,
    meanings are merged by part of speech, source URLs are deduplicated in
    insertion order, and the first non-empty phonetic and first license win.

    Args:
        entries: Raw entries as returned by the provider

    Returns:
        One NormalizedDefinition per headword
    """
    records: dict[str, NormalizedDefinition] = {}

    for entry in entries:
        record = records.get(entry.word)
        if record is None:
            record = NormalizedDefinition(
                word=entry.word,
                phonetic=entry.phonetic,
                license=entry.license,
            )
            records[entry.word] = record

        _merge_phonetics(record, entry.phonetics)
        _merge_meanings(record, entry.meanings)

        for url in entry.source_urls:
            if url not in record.source_urls:
                record.source_urls.append(url)

        if not record.phonetic and entry.phonetic:
            record.phonetic = entry.phonetic

    return list(records.values())
