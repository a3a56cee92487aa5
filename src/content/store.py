"""JSON-backed host content store.

Persists users, media and content items in a single JSON file, loaded on
init and saved after every write operation.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field

from portfolio_cms.content.models import ContentItem, ContentStatus, MediaItem, User
from portfolio_cms.storage import atomic_write

logger = logging.getLogger(__name__)

STORE_FILENAME = ".portfolio-cms-content.json"

# Alias to avoid shadowing by ContentStore.list method
_list = list


class _StoreData(BaseModel):
    """Internal wrapper for JSON serialization."""

    users: list[User] = Field(default_factory=list)
    media: list[MediaItem] = Field(default_factory=list)
    items: list[ContentItem] = Field(default_factory=list)


class ContentStore:
    """JSON-backed CRUD store for users, media and content items.

    Loads the store file on init and saves after every mutation.
    """

    def __init__(self, data_dir: Path) -> None:
        self._path = data_dir / STORE_FILENAME
        self._data = self._load()

    @property
    def path(self) -> Path:
        return self._path

    # ── Private helpers ──────────────────────────────────────────

    def _load(self) -> _StoreData:
        if not self._path.exists():
            return _StoreData()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return _StoreData.model_validate(raw)
        except (json.JSONDecodeError, ValueError):
            logger.warning("Corrupt content store at %s, starting fresh", self._path)
            return _StoreData()

    def _save(self) -> None:
        atomic_write(self._path, self._data.model_dump_json(indent=2))

    # ── Users ────────────────────────────────────────────────────

    def upsert_user(self, user: User) -> None:
        """Insert or replace a user by id."""
        self._data.users = [u for u in self._data.users if u.id != user.id]
        self._data.users.append(user)
        self._save()

    def get_user(self, user_id: int) -> User | None:
        for user in self._data.users:
            if user.id == user_id:
                return user
        return None

    def users(self, role: str | None = None) -> _list[User]:
        """Return users ordered by id, optionally filtered by role."""
        results = sorted(self._data.users, key=lambda u: u.id)
        if role is not None:
            results = [u for u in results if u.has_role(role)]
        return results

    # ── Media ────────────────────────────────────────────────────

    def upsert_media(self, media: MediaItem) -> None:
        """Insert or replace a media item by id."""
        self._data.media = [m for m in self._data.media if m.id != media.id]
        self._data.media.append(media)
        self._save()

    def get_media(self, media_id: int) -> MediaItem | None:
        for media in self._data.media:
            if media.id == media_id:
                return media
        return None

    # ── Content items ────────────────────────────────────────────

    def upsert(self, item: ContentItem) -> None:
        """Insert or replace a content item by id."""
        self._data.items = [i for i in self._data.items if i.id != item.id]
        self._data.items.append(item)
        self._save()

    def get(self, item_id: int, post_type: str | None = None) -> ContentItem | None:
        """Return an item by id, or None if not found or of another type."""
        for item in self._data.items:
            if item.id == item_id:
                if post_type is not None and item.post_type != post_type:
                    return None
                return item
        return None

    def list(
        self,
        post_type: str | None = None,
        status: ContentStatus | None = None,
    ) -> _list[ContentItem]:
        """Return items ordered by id, optionally filtered by type and/or status."""
        results = sorted(self._data.items, key=lambda i: i.id)
        if post_type is not None:
            results = [i for i in results if i.post_type == post_type]
        if status is not None:
            results = [i for i in results if i.status == status]
        return results

    def delete(self, item_id: int) -> bool:
        """Remove an item, returning whether it existed."""
        before = len(self._data.items)
        self._data.items = [i for i in self._data.items if i.id != item_id]
        if len(self._data.items) == before:
            return False
        self._save()
        return True
