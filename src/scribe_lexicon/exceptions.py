"""Custom exception hierarchy for scribe-lexicon."""


class LexiconError(Exception):
    """Base exception for all scribe-lexicon errors."""


class InitializationError(LexiconError):
    """No usable dataset (packaged file missing, copy and fallback both failed)."""


class InvalidAttributeError(LexiconError, ValueError):
    """Requested column is not part of the dataset's schema."""


class UnknownLanguageError(LexiconError, ValueError):
    """Language name or code is not supported."""


class ResourceError(LexiconError):
    """Grammar resource missing or malformed."""


class ConfigError(LexiconError):
    """Invalid configuration file or word list."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        super().__init__(message)


class DataImportError(LexiconError):
    """Failed to import words (unknown wn lexicon, etc.)."""
