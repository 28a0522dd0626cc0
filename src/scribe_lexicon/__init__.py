__version__ = "0.1.0"

from .store import LexiconStore as LexiconStore
from .session import LanguageSession as LanguageSession
from .locks import ReadWriteLock as ReadWriteLock

from .models import (
    Table as Table,
    ImportResult as ImportResult,
    NOT_FOUND as NOT_FOUND,
    LANGUAGE_CODES as LANGUAGE_CODES,
    get_iso_code as get_iso_code,
    is_not_found as is_not_found,
)

from .exceptions import (
    LexiconError as LexiconError,
    InitializationError as InitializationError,
    InvalidAttributeError as InvalidAttributeError,
    UnknownLanguageError as UnknownLanguageError,
    ResourceError as ResourceError,
    ConfigError as ConfigError,
    DataImportError as DataImportError,
)

from .config import (
    StoreConfig as StoreConfig,
    load_config as load_config,
)
from .resources import load_json as load_json
from .importer import (
    WordList as WordList,
    load_word_list as load_word_list,
    import_words as import_words,
    import_word_list as import_word_list,
    import_from_wn as import_from_wn,
)

__all__ = [
    # Store and session
    "LexiconStore",
    "LanguageSession",
    "ReadWriteLock",
    # Schema and results
    "Table",
    "ImportResult",
    "NOT_FOUND",
    "LANGUAGE_CODES",
    "get_iso_code",
    "is_not_found",
    # Exceptions
    "LexiconError",
    "InitializationError",
    "InvalidAttributeError",
    "UnknownLanguageError",
    "ResourceError",
    "ConfigError",
    "DataImportError",
    # Configuration and resources
    "StoreConfig",
    "load_config",
    "load_json",
    # Bulk import
    "WordList",
    "load_word_list",
    "import_words",
    "import_word_list",
    "import_from_wn",
]
