"""Schema enums, result helpers and language codes for scribe-lexicon."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from scribe_lexicon.exceptions import UnknownLanguageError

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Table(str, Enum):
    """Tables of a packaged language dataset."""

    AUTOCOMPLETE_LEXICON = "autocomplete_lexicon"
    AUTOSUGGESTIONS = "autosuggestions"
    EMOJI_KEYWORDS = "emoji_keywords"
    NOUNS = "nouns"
    VERBS = "verbs"
    PREPOSITIONS = "prepositions"
    TRANSLATIONS = "translations"


# Key column each table is looked up by
KEY_COLUMNS: dict[Table, str] = {
    Table.AUTOCOMPLETE_LEXICON: "word",
    Table.AUTOSUGGESTIONS: "word",
    Table.EMOJI_KEYWORDS: "word",
    Table.NOUNS: "noun",
    Table.VERBS: "verb",
    Table.PREPOSITIONS: "preposition",
    Table.TRANSLATIONS: "word",
}

SUGGESTION_COLUMNS = ("suggestion_0", "suggestion_1", "suggestion_2")
EMOJI_COLUMNS = ("emoji_0", "emoji_1", "emoji_2")

# Number of completions returned for a prefix
AUTOCOMPLETE_LIMIT = 3

# ---------------------------------------------------------------------------
# Sentinel convention
# ---------------------------------------------------------------------------

# Returned by every ``lookup_*`` method when no row matches.
NOT_FOUND: tuple[str, ...] = ("",)


def to_sentinel(values: list[str] | None) -> list[str]:
    """Map an explicit lookup result onto the ``[""]`` not-found convention."""
    if not values:
        return list(NOT_FOUND)
    return values


def is_not_found(values: list[str]) -> bool:
    """True if *values* is the not-found sentinel."""
    return list(values) == list(NOT_FOUND)


# ---------------------------------------------------------------------------
# Languages
# ---------------------------------------------------------------------------

LANGUAGE_CODES: dict[str, str] = {
    "english": "en",
    "french": "fr",
    "german": "de",
    "italian": "it",
    "portuguese": "pt",
    "russian": "ru",
    "spanish": "es",
    "swedish": "sv",
}


def get_iso_code(language: str) -> str:
    """Return the ISO 639-1 code for a language name or code.

    >>> get_iso_code("German")
    'de'
    >>> get_iso_code("SV")
    'sv'
    """
    key = language.strip().lower()
    if key in LANGUAGE_CODES:
        return LANGUAGE_CODES[key]
    if key in LANGUAGE_CODES.values():
        return key
    raise UnknownLanguageError(f"Unsupported language: {language!r}")


@dataclass
class ImportResult:
    """Outcome of a bulk import into ``autocomplete_lexicon``."""

    submitted: int
    added: int
    removed_duplicates: int = 0

    @property
    def ignored(self) -> int:
        """Words already present (or rejected) at insert time."""
        return self.submitted - self.added
