"""JSON-backed key/value store for per-owner profile fields.

Values are keyed by (field storage key, owner key). The whole store is one
JSON file, loaded on init and rewritten atomically after every write.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field

from portfolio_cms.storage import atomic_write

logger = logging.getLogger(__name__)

STORE_FILENAME = ".portfolio-cms-profiles.json"


class _StoreData(BaseModel):
    """Internal wrapper for JSON serialization."""

    owners: dict[str, dict[str, str]] = Field(default_factory=dict)


class ProfileFieldStore:
    """Owner-keyed field values with success/failure write results.

    Reads have no side effects. ``set`` and ``delete`` return False
    (and log a warning) when the file cannot be written; the in-memory
    state is rolled back so it keeps matching disk.
    """

    def __init__(self, data_dir: Path) -> None:
        self._path = data_dir / STORE_FILENAME
        self._data = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> _StoreData:
        if not self._path.exists():
            return _StoreData()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return _StoreData.model_validate(raw)
        except (json.JSONDecodeError, ValueError):
            logger.warning("Corrupt profile store at %s, starting fresh", self._path)
            return _StoreData()

    def _save(self) -> bool:
        try:
            atomic_write(self._path, self._data.model_dump_json(indent=2))
        except OSError as exc:
            logger.warning("Failed to write profile store %s: %s", self._path, exc)
            return False
        return True

    # ── Reads ────────────────────────────────────────────────────

    def get(self, field_name: str, owner: str) -> str | None:
        """Return the stored value, or None when unset."""
        return self._data.owners.get(owner, {}).get(field_name)

    def get_many(self, owner: str, field_names: list[str] | None = None) -> dict[str, str | None]:
        """Fetch several fields for one owner in a single lookup.

        With ``field_names`` omitted, every stored field is returned.
        """
        values = self._data.owners.get(owner, {})
        if field_names is None:
            return dict(values)
        return {name: values.get(name) for name in field_names}

    # ── Writes ───────────────────────────────────────────────────

    def set(self, field_name: str, owner: str, value: str) -> bool:
        """Store a value. Returns whether the write succeeded."""
        values = self._data.owners.setdefault(owner, {})
        previous = values.get(field_name)
        values[field_name] = value
        if self._save():
            return True
        self._restore(owner, field_name, previous)
        return False

    def delete(self, field_name: str, owner: str) -> bool:
        """Remove a value. Returns whether the write succeeded.

        Deleting an unset field succeeds without touching disk.
        """
        values = self._data.owners.get(owner)
        if values is None or field_name not in values:
            return True
        previous = values.pop(field_name)
        if not values:
            del self._data.owners[owner]
        if self._save():
            return True
        self._restore(owner, field_name, previous)
        return False

    def _restore(self, owner: str, field_name: str, previous: str | None) -> None:
        values = self._data.owners.setdefault(owner, {})
        if previous is None:
            values.pop(field_name, None)
            if not values:
                del self._data.owners[owner]
        else:
            values[field_name] = previous
