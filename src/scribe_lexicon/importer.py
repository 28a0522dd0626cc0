"""Bulk import of autocomplete words for scribe-lexicon.

Word lists are YAML documents::

    language: en
    words:
      - scribe
      - keyboard

Imports may repeat words already in the dataset, so every import ends with
the deduplication pass.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from scribe_lexicon.config import is_file_path, load_yaml_file, load_yaml_string
from scribe_lexicon.exceptions import ConfigError, DataImportError
from scribe_lexicon.models import ImportResult, get_iso_code
from scribe_lexicon.store import LexiconStore

logger = logging.getLogger(__name__)


@dataclass
class WordList:
    """Words to add to one language's autocomplete lexicon."""

    words: list[str] = field(default_factory=list)
    language: str | None = None
    source_file: Path | None = None


def load_word_list(source: str | Path | dict[str, Any]) -> WordList:
    """Load a word list from a YAML file, YAML string or dictionary."""
    source_path: Path | None = None
    if isinstance(source, dict):
        data = source
    elif isinstance(source, Path) or (isinstance(source, str) and is_file_path(source)):
        source_path = Path(source)
        if not source_path.exists():
            raise FileNotFoundError(f"File not found: {source_path}")
        data = load_yaml_file(source_path)
    else:
        data = load_yaml_string(source)

    words = data.get("words")
    if words is None:
        raise ConfigError("Missing required field: 'words'")
    if not isinstance(words, list):
        raise ConfigError("Field 'words' must be a list")
    for i, word in enumerate(words):
        if not isinstance(word, str) or not word.strip():
            raise ConfigError(f"Word #{i + 1} must be a non-empty string")

    language = data.get("language")
    if language is not None:
        if not isinstance(language, str):
            raise ConfigError("Field 'language' must be a string")
        try:
            language = get_iso_code(language)
        except ValueError as e:
            raise ConfigError(str(e)) from e

    return WordList(
        words=[w.strip() for w in words],
        language=language,
        source_file=source_path,
    )


def import_words(store: LexiconStore, words: Iterable[str]) -> ImportResult:
    """Insert *words* into the autocomplete lexicon, then deduplicate."""
    batch = [w for w in (word.strip() for word in words) if w]
    added = store.insert_autocomplete_entries(batch)
    removed = store.deduplicate_autocomplete_entries()
    logger.info(
        "Imported %d of %d words into %r", added, len(batch), store,
    )
    return ImportResult(submitted=len(batch), added=added, removed_duplicates=removed)


def import_word_list(store: LexiconStore, word_list: WordList) -> ImportResult:
    """Import a loaded word list, checking it targets the store's language."""
    if (
        word_list.language is not None
        and store.language is not None
        and word_list.language != store.language
    ):
        raise DataImportError(
            f"Word list is for {word_list.language!r}, "
            f"store is {store.language!r}"
        )
    return import_words(store, word_list.words)


def import_from_wn(
    store: LexiconStore,
    lexicon: str,
    *,
    single_words: bool = True,
) -> ImportResult:
    """Import the lemmas of an installed ``wn`` lexicon.

    With ``single_words`` (the default) multi-word lemmas such as
    ``"ice cream"`` are skipped, since the keyboard completes one word at
    a time.
    """
    import wn

    try:
        wordnet = wn.Wordnet(lexicon)
        lemmas = [w.lemma() for w in wordnet.words()]
    except wn.Error as e:
        raise DataImportError(f"Lexicon not available in wn: {lexicon!r}: {e}") from e

    words = []
    seen = set()
    for lemma in lemmas:
        lemma = str(lemma)
        if single_words and (" " in lemma or "_" in lemma):
            continue
        if lemma not in seen:
            seen.add(lemma)
            words.append(lemma)
    logger.debug("Collected %d lemmas from wn lexicon %s", len(words), lexicon)
    return import_words(store, words)
