"""LexiconStore: typed, fail-soft access to one language dataset."""

from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Iterable, Sequence
from contextlib import closing
from pathlib import Path
from typing import Any

from scribe_lexicon import db as _db
from scribe_lexicon.exceptions import InitializationError, InvalidAttributeError
from scribe_lexicon.locks import ReadWriteLock
from scribe_lexicon.models import (
    AUTOCOMPLETE_LIMIT,
    EMOJI_COLUMNS,
    KEY_COLUMNS,
    SUGGESTION_COLUMNS,
    Table,
    get_iso_code,
    to_sentinel,
)

logger = logging.getLogger(__name__)

_INSERT_WORD = "INSERT OR IGNORE INTO autocomplete_lexicon (word) VALUES (?)"

_DELETE_DUPLICATE_WORDS = (
    "DELETE FROM autocomplete_lexicon "
    "WHERE rowid NOT IN ("
    "SELECT MIN(rowid) FROM autocomplete_lexicon GROUP BY word"
    ")"
)

_SELECT_COMPLETIONS = (
    "SELECT word FROM autocomplete_lexicon "
    "WHERE unicode_lower(word) LIKE ? ESCAPE '\\' "
    "ORDER BY word COLLATE NOCASE ASC "
    f"LIMIT {AUTOCOMPLETE_LIMIT}"
)

# The literal spelling wins over the lowercased one when both exist
_SELECT_NOUN_FORM = (
    'SELECT "form" FROM nouns '
    "WHERE noun = ? OR noun = ? "
    "ORDER BY CASE WHEN noun = ? THEN 0 ELSE 1 END"
)


def _quote(column: str) -> str:
    return '"' + column.replace('"', '""') + '"'


def _select_by_key(table: Table, columns: Sequence[str]) -> str:
    cols = ", ".join(_quote(c) for c in columns)
    return f"SELECT {cols} FROM {table.value} WHERE {KEY_COLUMNS[table]} = ?"


def _escape_like(prefix: str) -> str:
    return prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _text(value: Any) -> str:
    return "" if value is None else str(value)


class LexiconStore:
    """Lookups and autocomplete writes against one language dataset.

    Every operation absorbs ``sqlite3`` failures: the error is logged with
    the statement and its arguments, reads return "not found" and writes
    do nothing. Lookups come in two flavours. ``find_*`` methods return
    ``None`` when nothing matches; ``lookup_*`` methods return ``[""]``
    instead, which keyboard code checks as a fast not-found test.

    All access goes through one :class:`ReadWriteLock`, so lookups never
    run alongside a write or ``close()``. Lookups also take a plain mutex
    around the shared connection: a statement that calls back into Python
    (``unicode_lower``) must not step while another thread drives the same
    connection.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        *,
        language: str | None = None,
        path: str | Path | None = None,
        read_only: bool = False,
    ) -> None:
        self._conn = conn
        self._lock = ReadWriteLock()
        self._conn_lock = threading.Lock()
        self._closed = False
        self.language = language
        self.path = Path(path) if path is not None else None
        self.read_only = read_only
        self._verb_columns: tuple[str, ...] = ()
        try:
            missing = _db.missing_tables(conn)
            self._verb_columns = _db.table_columns(conn, Table.VERBS)
        except sqlite3.Error as e:
            logger.error("Could not inspect dataset schema of %s: %s", self.path, e)
        else:
            if missing:
                logger.warning(
                    "Dataset %s is missing tables: %s",
                    self.path or ":memory:",
                    ", ".join(t.value for t in missing),
                )

    @classmethod
    def open(
        cls,
        language: str,
        resource_dir: str | Path,
        storage_dir: str | Path,
        *,
        refresh: bool = False,
    ) -> LexiconStore:
        """Open the dataset for *language*, materializing it first.

        The packaged ``<CODE>LanguageData.sqlite`` in *resource_dir* is
        copied into *storage_dir* (or an existing copy reused). If that
        fails the packaged file is opened read-only in place and the store
        rejects writes.
        """
        code = get_iso_code(language)
        filename = _db.dataset_filename(code)
        packaged = Path(resource_dir) / filename
        if not packaged.is_file():
            raise InitializationError(f"Packaged dataset not found: {packaged}")

        try:
            path = _db.materialize(packaged, Path(storage_dir) / filename, refresh=refresh)
            conn = _db.connect(path, wal=True)
        except (OSError, sqlite3.Error) as e:
            logger.warning(
                "Could not materialize %s (%s); opening packaged dataset read-only",
                packaged, e,
            )
        else:
            return cls(conn, language=code, path=path)

        conn = None
        try:
            conn = _db.connect(packaged, read_only=True)
            conn.execute("SELECT COUNT(*) FROM sqlite_master").fetchone()
        except sqlite3.Error as e:
            if conn is not None:
                conn.close()
            raise InitializationError(
                f"Could not open dataset {packaged}: {e}"
            ) from e
        return cls(conn, language=code, path=packaged, read_only=True)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def verb_attributes(self) -> tuple[str, ...]:
        """Columns of the ``verbs`` table that ``find_verb`` may project."""
        return self._verb_columns

    def close(self) -> None:
        """Close the connection once in-flight operations have finished."""
        with self._lock.write():
            if self._closed:
                return
            self._closed = True
            self._conn.close()
        logger.debug("Closed dataset %s", self.path or ":memory:")

    def __enter__(self) -> LexiconStore:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        mode = "ro" if self.read_only else "rw"
        return f"<LexiconStore {self.language or '?'} {mode} {self.path or ':memory:'}>"

    # ------------------------------------------------------------------
    # Query plumbing
    # ------------------------------------------------------------------

    def _log_failure(self, error: sqlite3.Error, sql: str, args: Any) -> None:
        logger.error(
            "Query failed (%s): %s args=%r", error, sql, args,
        )

    def _query_row(
        self, sql: str, args: Sequence[Any], width: int
    ) -> list[str] | None:
        try:
            with self._lock.read(), self._conn_lock:
                with closing(self._conn.execute(sql, args)) as cursor:
                    row = cursor.fetchone()
        except sqlite3.Error as e:
            self._log_failure(e, sql, args)
            return None
        if row is None:
            return None
        return [_text(row[i]) for i in range(width)]

    def _query_column(self, sql: str, args: Sequence[Any]) -> list[str] | None:
        try:
            with self._lock.read(), self._conn_lock:
                with closing(self._conn.execute(sql, args)) as cursor:
                    rows = cursor.fetchall()
        except sqlite3.Error as e:
            self._log_failure(e, sql, args)
            return None
        return [_text(r[0]) for r in rows] or None

    def _write(self, sql: str, params: Sequence[Any] | None = None, *, many: bool = False) -> int:
        """Run one write statement in its own transaction; return rows changed."""
        if self.read_only:
            logger.warning(
                "Rejected write to read-only dataset %s: %s", self.path, sql,
            )
            return 0
        try:
            with self._lock.write():
                before = self._conn.total_changes
                with self._conn:
                    if many:
                        self._conn.executemany(sql, params or [])
                    elif params is None:
                        self._conn.execute(sql)
                    else:
                        self._conn.execute(sql, params)
                return self._conn.total_changes - before
        except sqlite3.Error as e:
            self._log_failure(e, sql, params)
            return 0

    # ------------------------------------------------------------------
    # Explicit lookups (None when nothing matches)
    # ------------------------------------------------------------------

    def find_autocompletions(self, prefix: str) -> list[str] | None:
        """Up to three words starting with *prefix*, case-insensitively."""
        pattern = _escape_like(prefix.lower()) + "%"
        return self._query_column(_SELECT_COMPLETIONS, (pattern,))

    def find_autosuggestions(self, word: str) -> list[str] | None:
        sql = _select_by_key(Table.AUTOSUGGESTIONS, SUGGESTION_COLUMNS)
        return self._query_row(sql, (word,), len(SUGGESTION_COLUMNS))

    def find_emojis(self, word: str) -> list[str] | None:
        sql = _select_by_key(Table.EMOJI_KEYWORDS, EMOJI_COLUMNS)
        return self._query_row(sql, (word,), len(EMOJI_COLUMNS))

    def find_noun_form(self, word: str) -> list[str] | None:
        """Gender/form of a noun, matching either its spelling or lowercase."""
        return self._query_row(_SELECT_NOUN_FORM, (word, word.lower(), word), 1)

    def find_noun_plural(self, word: str) -> list[str] | None:
        return self._query_row(_select_by_key(Table.NOUNS, ("plural",)), (word,), 1)

    def find_preposition_form(self, word: str) -> list[str] | None:
        return self._query_row(_select_by_key(Table.PREPOSITIONS, ("form",)), (word,), 1)

    def find_translation(self, word: str) -> list[str] | None:
        return self._query_row(
            _select_by_key(Table.TRANSLATIONS, ("translation",)), (word,), 1
        )

    def find_verb(
        self, word: str, attributes: Iterable[str] = ("verb",)
    ) -> list[str] | None:
        """Project *attributes* of the ``verbs`` row keyed by *word*.

        A dataset without a readable ``verbs`` table fails soft like any
        other query failure.

        Raises:
            InvalidAttributeError: if an attribute is not a column of the
                open dataset's ``verbs`` table.
        """
        attrs = tuple(attributes)
        if not attrs:
            raise InvalidAttributeError("At least one verb attribute is required")
        if not self._verb_columns:
            logger.error(
                "Verb lookup for %r failed: dataset %s has no readable verbs table",
                word, self.path or ":memory:",
            )
            return None
        unknown = [a for a in attrs if a not in self._verb_columns]
        if unknown:
            raise InvalidAttributeError(
                f"Unknown verb attribute(s): {', '.join(map(repr, unknown))}"
            )
        return self._query_row(_select_by_key(Table.VERBS, attrs), (word,), len(attrs))

    # ------------------------------------------------------------------
    # Sentinel lookups (``[""]`` when nothing matches)
    # ------------------------------------------------------------------

    def lookup_autocompletions(self, prefix: str) -> list[str]:
        return to_sentinel(self.find_autocompletions(prefix))

    def lookup_autosuggestions(self, word: str) -> list[str]:
        return to_sentinel(self.find_autosuggestions(word))

    def lookup_emojis(self, word: str) -> list[str]:
        return to_sentinel(self.find_emojis(word))

    def lookup_noun_form(self, word: str) -> list[str]:
        return to_sentinel(self.find_noun_form(word))

    def lookup_noun_plural(self, word: str) -> list[str]:
        return to_sentinel(self.find_noun_plural(word))

    def lookup_preposition_form(self, word: str) -> list[str]:
        return to_sentinel(self.find_preposition_form(word))

    def lookup_translation(self, word: str) -> list[str]:
        return to_sentinel(self.find_translation(word))

    def lookup_verb(self, word: str, attributes: Iterable[str] = ("verb",)) -> list[str]:
        return to_sentinel(self.find_verb(word, attributes))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert_autocomplete_entry(self, word: str) -> bool:
        """Add *word* to the autocomplete lexicon. True if a row was added."""
        return self._write(_INSERT_WORD, (word,)) > 0

    def insert_autocomplete_entries(self, words: Iterable[str]) -> int:
        """Add many words in one transaction; return how many were new."""
        return self._write(_INSERT_WORD, [(w,) for w in words], many=True)

    def deduplicate_autocomplete_entries(self) -> int:
        """Keep the lowest-rowid row of every word; return rows removed."""
        removed = self._write(_DELETE_DUPLICATE_WORDS)
        if removed:
            logger.info("Removed %d duplicate autocomplete entries", removed)
        return removed
