"""Database connection, DDL, and dataset materialization for scribe-lexicon."""

from __future__ import annotations

import logging
import os
import re
import shutil
import sqlite3
from pathlib import Path

from scribe_lexicon.models import Table, get_iso_code

logger = logging.getLogger(__name__)

DATASET_SUFFIX = "LanguageData.sqlite"

# Verb form columns used when building a new dataset. Packaged datasets
# carry their own, language-specific set.
DEFAULT_VERB_COLUMNS = (
    "presSimp",
    "presTPS",
    "presPart",
    "pastSimp",
    "pastPart",
)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


# ---------------------------------------------------------------------------
# DDL statements
# ---------------------------------------------------------------------------

_DDL = """
CREATE TABLE IF NOT EXISTS autocomplete_lexicon (
    word TEXT NOT NULL,
    UNIQUE (word)
);

CREATE TABLE IF NOT EXISTS autosuggestions (
    word TEXT NOT NULL,
    suggestion_0 TEXT,
    suggestion_1 TEXT,
    suggestion_2 TEXT,
    UNIQUE (word)
);

CREATE TABLE IF NOT EXISTS emoji_keywords (
    word TEXT NOT NULL,
    emoji_0 TEXT,
    emoji_1 TEXT,
    emoji_2 TEXT,
    UNIQUE (word)
);

CREATE TABLE IF NOT EXISTS nouns (
    noun TEXT NOT NULL,
    form TEXT,
    plural TEXT,
    UNIQUE (noun)
);
CREATE INDEX IF NOT EXISTS noun_index ON nouns (noun);

CREATE TABLE IF NOT EXISTS prepositions (
    preposition TEXT NOT NULL,
    form TEXT,
    UNIQUE (preposition)
);

CREATE TABLE IF NOT EXISTS translations (
    word TEXT NOT NULL,
    translation TEXT,
    UNIQUE (word)
);
"""

_VERB_DDL = """
CREATE TABLE IF NOT EXISTS verbs (
    verb TEXT NOT NULL,
    {columns}
    UNIQUE (verb)
);
"""


def _unicode_lower(value: str | None) -> str | None:
    return value.lower() if isinstance(value, str) else value


def connect(
    db_path: str | Path = ":memory:",
    *,
    read_only: bool = False,
    wal: bool = False,
) -> sqlite3.Connection:
    """Open a dataset connection.

    The connection may be used from several threads; callers serialize
    access themselves. ``read_only`` opens through a ``mode=ro`` URI so
    every write fails at the SQLite level. ``wal`` switches a writable
    file to write-ahead logging; packaged datasets are left in rollback
    mode so they stay openable read-only.
    """
    db_path_str = str(db_path)
    if read_only and db_path_str != ":memory:":
        uri = Path(db_path_str).resolve().as_uri() + "?mode=ro"
        conn = sqlite3.connect(uri, uri=True, check_same_thread=False)
    else:
        conn = sqlite3.connect(db_path_str, check_same_thread=False)
        if wal and db_path_str != ":memory:":
            try:
                conn.execute("PRAGMA journal_mode = WAL")
            except sqlite3.Error:
                conn.close()
                raise
    conn.row_factory = sqlite3.Row
    conn.create_function("unicode_lower", 1, _unicode_lower, deterministic=True)
    return conn


def create_schema(
    conn: sqlite3.Connection,
    verb_columns: tuple[str, ...] | list[str] = DEFAULT_VERB_COLUMNS,
) -> None:
    """Create all dataset tables if they don't exist."""
    for col in verb_columns:
        if not _IDENTIFIER.match(col) or col == "verb":
            raise ValueError(f"Invalid verb column name: {col!r}")
    columns = "".join(f"{col} TEXT,\n    " for col in verb_columns)
    conn.executescript(_DDL + _VERB_DDL.format(columns=columns))
    conn.commit()


def table_columns(conn: sqlite3.Connection, table: Table) -> tuple[str, ...]:
    """Column names of *table*, in declaration order. Empty if missing."""
    rows = conn.execute(f'PRAGMA table_info("{Table(table).value}")').fetchall()
    return tuple(row["name"] for row in rows)


def missing_tables(conn: sqlite3.Connection) -> list[Table]:
    """Dataset tables that are not present in the open database."""
    names = {
        row[0]
        for row in conn.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table'"
        ).fetchall()
    }
    return [table for table in Table if table.value not in names]


# ---------------------------------------------------------------------------
# Dataset files
# ---------------------------------------------------------------------------

def dataset_filename(language: str) -> str:
    """File name of a language dataset, e.g. ``ENLanguageData.sqlite``."""
    return f"{get_iso_code(language).upper()}{DATASET_SUFFIX}"


def materialize(
    source: str | Path,
    destination: str | Path,
    *,
    refresh: bool = False,
) -> Path:
    """Copy a packaged dataset to a writable location.

    An existing copy is reused unless ``refresh`` is set. The copy is
    written to a temporary sibling first so an interrupted copy never
    leaves a truncated dataset behind.
    """
    source = Path(source)
    destination = Path(destination)
    if destination.exists() and not refresh:
        logger.debug("Reusing materialized dataset %s", destination)
        return destination

    destination.parent.mkdir(parents=True, exist_ok=True)
    # WAL sidecars of a previous copy must not be replayed onto the new one
    for suffix in ("-wal", "-shm"):
        sidecar = destination.with_name(destination.name + suffix)
        if sidecar.exists():
            sidecar.unlink()
    tmp_path = destination.with_name(destination.name + ".tmp")
    try:
        shutil.copyfile(source, tmp_path)
        os.replace(tmp_path, destination)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()
    logger.info("Materialized dataset %s -> %s", source, destination)
    return destination
