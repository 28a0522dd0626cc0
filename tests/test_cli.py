"""Tests for the scribe-lexicon command-line interface."""

import pytest

from scribe_lexicon import LexiconStore, db
from scribe_lexicon.cli import create_parser, main


@pytest.fixture
def run(resource_dir, storage_dir, capsys):
    """Run the CLI against the sample datasets; return (code, stdout, stderr)."""

    def _run(*args):
        code = main(["--resources", str(resource_dir), "--storage", str(storage_dir), *args])
        out, err = capsys.readouterr()
        return code, out, err

    return _run


class TestParser:

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "commands" in capsys.readouterr().out

    def test_verb_attributes_optional(self):
        args = create_parser().parse_args(["verb", "go"])
        assert args.attributes == []


class TestLookups:

    def test_complete(self, run):
        code, out, _ = run("complete", "ca")
        assert code == 0
        assert out.splitlines() == ["cab", "car", "cat"]

    def test_not_found(self, run):
        code, out, _ = run("complete", "xq")
        assert code == 1
        assert "No result for 'xq'" in out

    def test_suggest(self, run):
        code, out, _ = run("suggest", "the")
        assert out.splitlines() == ["best", "first", "same"]

    def test_emoji_and_translate(self, run):
        assert run("emoji", "happy")[1].split() == ["😀", "😊", "🙂"]
        assert run("translate", "hello")[1].strip() == "hallo"

    def test_noun(self, run):
        assert run("noun", "Run")[1].strip() == "N"
        assert run("noun", "--plural", "run")[1].strip() == "runs"

    def test_verb(self, run):
        code, out, _ = run("verb", "go", "pastSimp", "pastPart")
        assert code == 0
        assert out.splitlines() == ["went", "gone"]

    def test_verb_unknown_attribute(self, run):
        code, _, err = run("verb", "go", "presFPS")
        assert code == 1
        assert "Unknown verb attribute" in err

    def test_language_option(self, run):
        code, out, _ = run("--language", "German", "preposition", "mit")
        assert code == 0
        assert out.strip() == "Dat"

    def test_requires_resources(self, capsys):
        assert main(["complete", "ca"]) == 1
        assert "--resources" in capsys.readouterr().err

    def test_missing_dataset(self, run):
        code, _, err = run("--language", "fr", "complete", "ca")
        assert code == 1
        assert "not found" in err


class TestWrites:

    def test_add_then_complete(self, run):
        code, out, _ = run("add", "quixotic", "quiet", "cat")
        assert code == 0
        assert "Added 2 of 3" in out
        assert run("complete", "qu")[1].splitlines() == ["quiet", "quixotic"]

    def test_dedupe(self, run):
        code, out, _ = run("dedupe")
        assert code == 0
        assert "Removed 0 duplicate entries" in out

    def test_import(self, run, tmp_path):
        word_file = tmp_path / "words.yaml"
        word_file.write_text("language: en\nwords: [zephyr, zest, cat]\n")

        code, out, _ = run("import", str(word_file))

        assert code == 0
        assert "Added:      2" in out
        assert run("complete", "ze")[1].splitlines() == ["Zebra", "zephyr", "zest"]

    def test_import_uses_word_list_language(self, resource_dir, storage_dir, tmp_path, capsys):
        word_file = tmp_path / "words.yaml"
        word_file.write_text("language: de\nwords: [Katze]\n")

        code = main([
            "--resources", str(resource_dir), "--storage", str(storage_dir),
            "import", str(word_file),
        ])

        assert code == 0
        with LexiconStore.open("de", resource_dir, storage_dir) as st:
            assert st.lookup_autocompletions("kat") == ["Katze"]

    def test_import_bad_word_list(self, run, tmp_path):
        word_file = tmp_path / "words.yaml"
        word_file.write_text("words: not-a-list\n")
        code, _, err = run("import", str(word_file))
        assert code == 1
        assert "CONFIG ERROR" in err


class TestConfigFile:

    def test_lookup_with_config(self, resource_dir, storage_dir, tmp_path, capsys):
        config_file = tmp_path / "scribe.yaml"
        config_file.write_text(
            f"resource_dir: {resource_dir}\n"
            f"storage_dir: {storage_dir}\n"
            "language: de\n"
        )
        code = main(["--config", str(config_file), "complete", "ha"])
        assert code == 0
        assert capsys.readouterr().out.splitlines() == ["hallo", "Haus"]


class TestInit:

    def test_creates_dataset(self, tmp_path, capsys):
        path = tmp_path / "SVLanguageData.sqlite"
        assert main(["init", str(path), "--verb-columns", "presens", "preteritum"]) == 0
        conn = db.connect(path, read_only=True)
        assert db.missing_tables(conn) == []
        conn.close()
        assert "Created" in capsys.readouterr().out

    def test_refuses_existing_file(self, tmp_path, capsys):
        path = tmp_path / "x.sqlite"
        path.write_bytes(b"")
        assert main(["init", str(path)]) == 1
        assert "already exists" in capsys.readouterr().err

    def test_invalid_verb_column(self, tmp_path, capsys):
        path = tmp_path / "bad.sqlite"
        assert main(["init", str(path), "--verb-columns", "bad column"]) == 1
        assert not path.exists()
