"""Shared test fixtures for scribe-lexicon."""

import pytest

from scribe_lexicon import LexiconStore, db

VERB_COLUMNS = ("presSimp", "presTPS", "pastSimp", "pastPart")
DE_VERB_COLUMNS = ("presFPS", "presTPS", "perfFPS")


def populate_en(conn):
    """English sample rows for every dataset table."""
    conn.executemany(
        "INSERT INTO autocomplete_lexicon (word) VALUES (?)",
        [("cat",), ("car",), ("cab",), ("dog",), ("apple",), ("Zebra",)],
    )
    conn.executemany(
        "INSERT INTO autosuggestions VALUES (?, ?, ?, ?)",
        [
            ("the", "best", "first", "same"),
            ("hello", "world", None, None),
        ],
    )
    conn.execute(
        "INSERT INTO emoji_keywords VALUES (?, ?, ?, ?)",
        ("happy", "😀", "😊", "🙂"),
    )
    conn.executemany(
        "INSERT INTO nouns VALUES (?, ?, ?)",
        [
            ("run", "N", "runs"),
            ("Mark", "PN", "Marks"),
            ("mark", "N", "marks"),
        ],
    )
    conn.execute("INSERT INTO prepositions VALUES (?, ?)", ("with", "Acc"))
    conn.execute("INSERT INTO translations VALUES (?, ?)", ("hello", "hallo"))
    conn.execute(
        "INSERT INTO verbs (verb, presSimp, presTPS, pastSimp, pastPart) "
        "VALUES (?, ?, ?, ?, ?)",
        ("go", "go", "goes", "went", "gone"),
    )
    conn.commit()


def populate_de(conn):
    """German sample rows."""
    conn.executemany(
        "INSERT INTO autocomplete_lexicon (word) VALUES (?)",
        [("Haus",), ("hallo",), ("Hund",)],
    )
    conn.execute("INSERT INTO nouns VALUES (?, ?, ?)", ("Hund", "M", "Hunde"))
    conn.execute("INSERT INTO prepositions VALUES (?, ?)", ("mit", "Dat"))
    conn.execute(
        "INSERT INTO verbs (verb, presFPS, presTPS, perfFPS) VALUES (?, ?, ?, ?)",
        ("gehen", "gehe", "geht", "bin gegangen"),
    )
    conn.commit()


def build_dataset(path, verb_columns, populate):
    conn = db.connect(path)
    try:
        db.create_schema(conn, verb_columns)
        populate(conn)
    finally:
        conn.close()
    return path


@pytest.fixture
def resource_dir(tmp_path):
    """Directory of packaged EN and DE datasets."""
    path = tmp_path / "resources"
    path.mkdir()
    build_dataset(path / "ENLanguageData.sqlite", VERB_COLUMNS, populate_en)
    build_dataset(path / "DELanguageData.sqlite", DE_VERB_COLUMNS, populate_de)
    return path


@pytest.fixture
def storage_dir(tmp_path):
    return tmp_path / "storage"


@pytest.fixture
def store(resource_dir, storage_dir):
    """English store opened from a materialized copy."""
    with LexiconStore.open("en", resource_dir, storage_dir) as st:
        yield st


@pytest.fixture
def memory_store():
    """English store over an in-memory connection."""
    conn = db.connect(":memory:")
    db.create_schema(conn, VERB_COLUMNS)
    populate_en(conn)
    with LexiconStore(conn, language="en") as st:
        yield st
