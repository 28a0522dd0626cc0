"""
YAML configuration for scribe-lexicon.

A config file names where packaged datasets live, where writable copies
go, and which language to open first::

    resource_dir: ./datasets
    storage_dir: ~/.scribe
    language: de
    refresh: false
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigError
from .models import get_iso_code

# Default location for materialized datasets
DEFAULT_STORAGE_DIR = Path.home() / ".scribe"


@dataclass
class StoreConfig:
    """Where datasets are read from and materialized to."""
    resource_dir: Path
    storage_dir: Path = field(default_factory=lambda: DEFAULT_STORAGE_DIR)
    language: str = "en"
    refresh: bool = False


def load_config(source: str | Path | dict[str, Any]) -> StoreConfig:
    """Load a StoreConfig from a YAML file, YAML string or dictionary.

    Relative paths in a file are resolved against the file's directory.

    Raises:
        ConfigError: If the YAML is malformed or a field is invalid
        FileNotFoundError: If the file does not exist
    """
    base_dir: Path | None = None

    if isinstance(source, dict):
        data = source
    elif isinstance(source, Path) or (isinstance(source, str) and is_file_path(source)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        data = load_yaml_file(path)
        base_dir = path.parent
    else:
        data = load_yaml_string(source)

    return _parse_config(data, base_dir)


def is_file_path(s: str) -> bool:
    """Check if a string looks like a file path rather than YAML content."""
    if "\n" in s:
        return False
    if "/" in s or "\\" in s:
        return True
    return s.endswith((".yaml", ".yml"))


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML mapping from a file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", line=_error_line(e)) from e
    return _require_mapping(data, "Empty YAML file")


def load_yaml_string(s: str) -> dict[str, Any]:
    """Load a YAML mapping from a string."""
    try:
        data = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", line=_error_line(e)) from e
    return _require_mapping(data, "Empty YAML content")


def _error_line(e: yaml.YAMLError) -> int | None:
    mark = getattr(e, "problem_mark", None)
    return mark.line + 1 if mark else None


def _require_mapping(data: Any, empty_message: str) -> dict[str, Any]:
    if data is None:
        raise ConfigError(empty_message)
    if not isinstance(data, dict):
        raise ConfigError("YAML root must be a mapping (dictionary)")
    return data


def _parse_config(data: dict[str, Any], base_dir: Path | None) -> StoreConfig:
    resource_dir = data.get("resource_dir")
    if not resource_dir:
        raise ConfigError("Missing required field: 'resource_dir'")

    config = StoreConfig(resource_dir=_resolve(resource_dir, "resource_dir", base_dir))

    if data.get("storage_dir") is not None:
        config.storage_dir = _resolve(data["storage_dir"], "storage_dir", base_dir)

    language = data.get("language")
    if language is not None:
        if not isinstance(language, str):
            raise ConfigError("Field 'language' must be a string")
        try:
            config.language = get_iso_code(language)
        except ValueError as e:
            raise ConfigError(str(e)) from e

    refresh = data.get("refresh")
    if refresh is not None:
        if not isinstance(refresh, bool):
            raise ConfigError("Field 'refresh' must be a boolean")
        config.refresh = refresh

    return config


def _resolve(value: Any, name: str, base_dir: Path | None) -> Path:
    if not isinstance(value, str):
        raise ConfigError(f"Field '{name}' must be a string")
    path = Path(value).expanduser()
    if base_dir is not None and not path.is_absolute():
        path = base_dir / path
    return path
