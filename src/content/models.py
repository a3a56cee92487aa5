"""Host content models: pure Pydantic v2 data types.

These stand in for the records the host CMS owns: users, uploaded media and
content items. This package never declares schema; it only stores the data
the projection layer reads.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ContentStatus(StrEnum):
    """Publication status of a content item."""

    DRAFT = "draft"
    PENDING = "pending"
    PRIVATE = "private"
    PUBLISHED = "publish"


class User(BaseModel):
    """An account that can own content items."""

    id: int
    login: str
    display_name: str = ""
    roles: list[str] = Field(default_factory=list)

    def has_role(self, role: str) -> bool:
        return role in self.roles


class MediaItem(BaseModel):
    """An uploaded image with its generated renditions."""

    id: int
    source_url: str
    sizes: dict[str, str] = Field(default_factory=dict)

    def url_for(self, size: str) -> str | None:
        """URL at the named rendition, else the original upload."""
        return self.sizes.get(size) or self.source_url or None


class ContentItem(BaseModel):
    """A single article or project."""

    id: int
    post_type: str
    slug: str
    title: str = ""
    body: str = ""
    excerpt: str = ""
    status: ContentStatus = ContentStatus.DRAFT
    author_id: int | None = None
    featured_image_id: int | None = None
    terms: dict[str, list[str]] = Field(default_factory=dict)
    custom_fields: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))

    @property
    def is_published(self) -> bool:
        return self.status == ContentStatus.PUBLISHED
