"""Content domain — host users, media and content items.

Provides the records the projection layer joins against, and a
JSON-backed ContentStore for CRUD operations.
"""

from portfolio_cms.content.models import (
    ContentItem,
    ContentStatus,
    MediaItem,
    User,
)
from portfolio_cms.content.store import ContentStore

__all__ = [
    "ContentItem",
    "ContentStatus",
    "ContentStore",
    "MediaItem",
    "User",
]
