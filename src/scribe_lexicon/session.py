"""Active-language session: owns the one open LexiconStore."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any

from scribe_lexicon.models import get_iso_code
from scribe_lexicon.store import LexiconStore

if TYPE_CHECKING:
    from scribe_lexicon.config import StoreConfig

logger = logging.getLogger(__name__)


class LanguageSession:
    """Holds the store of the active keyboard language.

    Callers pass the session (or its :attr:`store`) to whatever needs
    lookups instead of reaching for a process-wide instance.
    """

    def __init__(
        self,
        resource_dir: str | Path,
        storage_dir: str | Path,
        *,
        refresh: bool = False,
    ) -> None:
        self.resource_dir = Path(resource_dir)
        self.storage_dir = Path(storage_dir)
        self.refresh = refresh
        self._store: LexiconStore | None = None
        self._switch_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: StoreConfig) -> LanguageSession:
        session = cls(config.resource_dir, config.storage_dir, refresh=config.refresh)
        session.switch_language(config.language)
        return session

    @property
    def store(self) -> LexiconStore | None:
        return self._store

    @property
    def language(self) -> str | None:
        return self._store.language if self._store is not None else None

    def switch_language(self, language: str) -> LexiconStore:
        """Make *language* active and return its store.

        The new store is opened before the old one is closed, so a failed
        open leaves the previous language usable. The old store's
        ``close()`` waits for its in-flight operations.
        """
        code = get_iso_code(language)
        with self._switch_lock:
            previous = self._store
            if previous is not None and previous.language == code and not previous.closed:
                return previous
            store = LexiconStore.open(
                code, self.resource_dir, self.storage_dir, refresh=self.refresh,
            )
            self._store = store
        if previous is not None:
            previous.close()
            logger.info("Switched language %s -> %s", previous.language, code)
        return store

    def close(self) -> None:
        with self._switch_lock:
            store, self._store = self._store, None
        if store is not None:
            store.close()

    def __enter__(self) -> LanguageSession:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
