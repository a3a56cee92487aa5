"""Field-group definition files kept alongside the plugin.

Custom field groups are exported as JSON files into a definitions
directory inside the plugin so they live in version control. This module
resolves the save and load paths, guarantees the directory exists, and
reads the exported groups back.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from portfolio_cms.config import CmsConfig

logger = logging.getLogger(__name__)

KEEP_FILENAME = ".gitkeep"


class FieldGroup(BaseModel):
    """One exported field group."""

    key: str
    title: str = ""
    fields: list[dict[str, Any]] = Field(default_factory=list)
    location: list[Any] = Field(default_factory=list)
    active: bool = True
    source_path: str = ""


def save_path(config: CmsConfig, default: Path | None = None) -> Path:
    """Where exported definitions are written.

    Any incoming default (the theme directory) is replaced by the plugin
    definitions directory.
    """
    return config.definitions_dir


def load_paths(config: CmsConfig, paths: list[Path]) -> list[Path]:
    """Definition directories to read, in order.

    The first incoming path is the theme default and is dropped; the
    plugin directory is appended.
    """
    return [*paths[1:], config.definitions_dir]


def ensure_definitions_dir(directory: Path) -> Path:
    """Create the definitions directory and its placeholder if missing.

    Uses create-if-missing semantics throughout, so concurrent callers
    cannot fail each other. Raises OSError if the filesystem refuses.
    """
    directory.mkdir(parents=True, exist_ok=True)
    keep = directory / KEEP_FILENAME
    keep.touch(exist_ok=True)
    return directory


def load_field_groups(paths: list[Path]) -> list[FieldGroup]:
    """Read every ``*.json`` field group from the given directories.

    Later directories override earlier ones for the same group key.
    Unreadable or malformed files are skipped with a warning.
    """
    groups: dict[str, FieldGroup] = {}
    for directory in paths:
        if not directory.is_dir():
            continue
        for json_path in sorted(directory.glob("*.json")):
            group = _read_group(json_path)
            if group is not None:
                groups[group.key] = group
    return list(groups.values())


def _read_group(json_path: Path) -> FieldGroup | None:
    try:
        raw = json.loads(json_path.read_text(encoding="utf-8"))
        return FieldGroup.model_validate({**raw, "source_path": str(json_path)})
    except (OSError, json.JSONDecodeError, ValidationError, TypeError) as exc:
        logger.warning("Skipping field group %s: %s", json_path, exc)
        return None
