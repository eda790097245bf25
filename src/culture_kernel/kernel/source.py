"""
Definition source: the static file the catalog is seeded from.

Accepts a JSON array or a YAML sequence of Ritual objects. Unlike the
tolerant read path, every entry must validate; one bad entry makes the
whole source unusable.
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, List, Union

import yaml
from pydantic import ValidationError

from .errors import InitError
from .schema import Ritual

BUNDLED_SOURCE = "rituals.json"
YAML_SUFFIXES = {".yaml", ".yml"}


def bundled_source_path() -> Path:
    """Path of the rituals file shipped inside the package."""
    return Path(str(resources.files("culture_kernel.data").joinpath(BUNDLED_SOURCE)))


def _parse(text: str, path: Path) -> Any:
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise InitError(f"Malformed definition source {path}: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise InitError(f"Malformed definition source {path}: {e}") from e


def load_rituals(path: Union[str, Path]) -> List[Ritual]:
    """
    Load and validate every Ritual in a definition file.

    Raises:
        InitError: the file is missing, unreadable, malformed, or empty.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise InitError(f"Definition source not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise InitError(f"Cannot read definition source {path}: {e}") from e

    data = _parse(text, path)
    if not isinstance(data, list):
        raise InitError(f"Definition source {path} must hold a list of rituals")
    if not data:
        raise InitError(f"Definition source {path} holds no rituals")

    rituals: List[Ritual] = []
    for index, entry in enumerate(data):
        try:
            rituals.append(Ritual.model_validate(entry))
        except ValidationError as e:
            raise InitError(f"Invalid ritual at index {index} in {path}: {e}") from e
    return rituals
