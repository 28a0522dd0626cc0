"""Grammar resource loading for scribe-lexicon."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from scribe_lexicon.exceptions import ResourceError


def load_json(filename: str, resource_dir: str | Path) -> dict[str, Any]:
    """Load ``<filename>.json`` from *resource_dir* into a dictionary.

    Grammar files ship with the app, so a missing or malformed one is a
    hard failure rather than an empty result.
    """
    name = filename if filename.endswith(".json") else f"{filename}.json"
    path = Path(resource_dir) / name
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ResourceError(f"Grammar resource not found: {path}") from e
    except OSError as e:
        raise ResourceError(f"Could not read grammar resource {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ResourceError(
            f"Malformed grammar resource {path} (line {e.lineno}): {e.msg}"
        ) from e
    except UnicodeDecodeError as e:
        raise ResourceError(f"Malformed grammar resource {path}: {e}") from e
    if not isinstance(data, dict):
        raise ResourceError(f"Grammar resource {path} must hold a JSON object")
    return data
