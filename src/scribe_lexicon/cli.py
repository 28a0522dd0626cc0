"""
Command-line interface for scribe-lexicon datasets.
"""
from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from . import db as _db
from .config import StoreConfig, load_config
from .exceptions import ConfigError, LexiconError
from .importer import import_from_wn, import_word_list, load_word_list
from .models import ImportResult
from .store import LexiconStore


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the scribe-lexicon CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose > 1 else
        logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except ConfigError as e:
        line_info = f" (line {e.line})" if e.line else ""
        print(f"[CONFIG ERROR] {e}{line_info}", file=sys.stderr)
        return 1
    except (LexiconError, FileNotFoundError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="scribe-lexicon",
        description="Query and maintain Scribe keyboard language datasets",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s (scribe-lexicon)",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="YAML config file (resource_dir, storage_dir, language)",
    )
    parser.add_argument(
        "--language", "-l",
        help="Language name or ISO code (overrides config)",
    )
    parser.add_argument(
        "--resources",
        type=Path,
        help="Directory holding packaged <CODE>LanguageData.sqlite files",
    )
    parser.add_argument(
        "--storage",
        type=Path,
        help="Directory for writable dataset copies",
    )
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="Re-copy the packaged dataset even if a copy exists",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="More logging (repeat for debug output)",
    )

    subparsers = parser.add_subparsers(title="commands", dest="command")

    init_parser = subparsers.add_parser(
        "init",
        help="Create an empty dataset with the standard tables",
    )
    init_parser.add_argument("file", type=Path, help="Dataset file to create")
    init_parser.add_argument(
        "--verb-columns",
        nargs="+",
        default=list(_db.DEFAULT_VERB_COLUMNS),
        help="Verb form columns (default: %(default)s)",
    )
    init_parser.set_defaults(func=cmd_init)

    _add_lookup(subparsers, "complete", "prefix", "Autocomplete a prefix",
                lambda store, args: store.find_autocompletions(args.prefix))
    _add_lookup(subparsers, "suggest", "word", "Words suggested after a word",
                lambda store, args: store.find_autosuggestions(args.word))
    _add_lookup(subparsers, "emoji", "word", "Emojis for a word",
                lambda store, args: store.find_emojis(args.word))
    _add_lookup(subparsers, "translate", "word", "Translate a word",
                lambda store, args: store.find_translation(args.word))
    _add_lookup(subparsers, "preposition", "word", "Case governed by a preposition",
                lambda store, args: store.find_preposition_form(args.word))

    noun_parser = _add_lookup(
        subparsers, "noun", "word", "Form (gender) or plural of a noun",
        lambda store, args: (
            store.find_noun_plural(args.word) if args.plural
            else store.find_noun_form(args.word)
        ),
    )
    noun_parser.add_argument(
        "--plural",
        action="store_true",
        help="Show the plural instead of the form",
    )

    verb_parser = _add_lookup(
        subparsers, "verb", "word", "Conjugations of a verb",
        lambda store, args: store.find_verb(args.word, args.attributes or ("verb",)),
    )
    verb_parser.add_argument(
        "attributes",
        nargs="*",
        help="Verb columns to show (default: verb)",
    )

    add_parser = subparsers.add_parser(
        "add",
        help="Add words to the autocomplete lexicon",
    )
    add_parser.add_argument("words", nargs="+", help="Words to add")
    add_parser.set_defaults(func=cmd_add)

    dedupe_parser = subparsers.add_parser(
        "dedupe",
        help="Remove duplicate autocomplete entries",
    )
    dedupe_parser.set_defaults(func=cmd_dedupe)

    import_parser = subparsers.add_parser(
        "import",
        help="Import a YAML word list",
    )
    import_parser.add_argument("file", type=Path, help="YAML word list")
    import_parser.set_defaults(func=cmd_import)

    import_wn_parser = subparsers.add_parser(
        "import-wn",
        help="Import lemmas from an installed wn lexicon",
    )
    import_wn_parser.add_argument("lexicon", help="wn lexicon specifier, e.g. oewn:2024")
    import_wn_parser.add_argument(
        "--multi-word",
        action="store_true",
        help="Also import lemmas containing spaces",
    )
    import_wn_parser.set_defaults(func=cmd_import_wn)

    return parser


def _add_lookup(
    subparsers: argparse._SubParsersAction,
    name: str,
    argument: str,
    help_text: str,
    lookup: Callable[[LexiconStore, argparse.Namespace], list[str] | None],
) -> argparse.ArgumentParser:
    """Register a read-only lookup command."""
    sub = subparsers.add_parser(name, help=help_text)
    sub.add_argument(argument)
    sub.set_defaults(func=cmd_lookup, lookup=lookup)
    return sub


def resolve_config(args: argparse.Namespace) -> StoreConfig:
    """Merge the config file (if any) with command-line overrides."""
    if args.config is not None:
        config = load_config(args.config)
    elif args.resources is not None:
        config = StoreConfig(resource_dir=args.resources)
    else:
        raise ConfigError("Either --config or --resources is required")

    if args.resources is not None:
        config.resource_dir = args.resources
    if args.storage is not None:
        config.storage_dir = args.storage
    if args.language is not None:
        config.language = args.language
    if args.refresh:
        config.refresh = True
    return config


def open_store(args: argparse.Namespace) -> LexiconStore:
    config = resolve_config(args)
    return LexiconStore.open(
        config.language,
        config.resource_dir,
        config.storage_dir,
        refresh=config.refresh,
    )


def cmd_init(args: argparse.Namespace) -> int:
    """Handle init command."""
    if args.file.exists():
        print(f"[ERROR] {args.file} already exists", file=sys.stderr)
        return 1
    try:
        conn = _db.connect(args.file)
        try:
            _db.create_schema(conn, args.verb_columns)
        finally:
            conn.close()
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        if args.file.exists():
            args.file.unlink()
        return 1
    print(f"Created {args.file}")
    return 0


def cmd_lookup(args: argparse.Namespace) -> int:
    """Handle the lookup commands (complete, suggest, emoji, ...)."""
    with open_store(args) as store:
        values = args.lookup(store, args)

    if values is None:
        key = vars(args).get("word", vars(args).get("prefix"))
        print(f"No result for {key!r}")
        return 1
    for value in values:
        print(value)
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    """Handle add command."""
    with open_store(args) as store:
        if store.read_only:
            print("[ERROR] Dataset is open read-only; nothing added", file=sys.stderr)
            return 1
        added = store.insert_autocomplete_entries(args.words)
    print(f"Added {added} of {len(args.words)} word(s).")
    return 0


def cmd_dedupe(args: argparse.Namespace) -> int:
    """Handle dedupe command."""
    with open_store(args) as store:
        removed = store.deduplicate_autocomplete_entries()
    print(f"Removed {removed} duplicate entr{'y' if removed == 1 else 'ies'}.")
    return 0


def cmd_import(args: argparse.Namespace) -> int:
    """Handle import command."""
    word_list = load_word_list(args.file)
    print(f"\nLoading {args.file}...")
    print(f"  Words: {len(word_list.words)}")
    if word_list.language:
        print(f"  Language: {word_list.language}")
        if args.language is None:
            args.language = word_list.language

    with open_store(args) as store:
        result = import_word_list(store, word_list)
    _print_import_result(result)
    return 0


def cmd_import_wn(args: argparse.Namespace) -> int:
    """Handle import-wn command."""
    with open_store(args) as store:
        result = import_from_wn(store, args.lexicon, single_words=not args.multi_word)
    _print_import_result(result)
    return 0


def _print_import_result(result: ImportResult) -> None:
    print("\nResults:")
    print(f"  Submitted:  {result.submitted}")
    print(f"  Added:      {result.added}")
    print(f"  Ignored:    {result.ignored}")
    print(f"  Duplicates: {result.removed_duplicates}")


if __name__ == "__main__":
    sys.exit(main())
