"""Projection of author data onto user and content item representations.

Every value here is derived at request time from the content store and the
profile field store; nothing is written back except explicit profile field
updates. Missing authors, images or profile values fall back to defaults
instead of raising.
"""

from __future__ import annotations

import logging
from functools import partial

from portfolio_cms.config import DEFAULT_FALLBACK_AUTHOR, DEFAULT_IMAGE_SIZE
from portfolio_cms.content.models import ContentItem, User
from portfolio_cms.content.store import ContentStore
from portfolio_cms.profiles.fields import (
    PROFILE_FIELDS,
    AuthorProfile,
    ProfileField,
    owner_key,
)
from portfolio_cms.profiles.store import ProfileFieldStore
from portfolio_cms.rest.fields import RestFieldRegistry
from portfolio_cms.schema.registry import SchemaRegistry

logger = logging.getLogger(__name__)

USER_OBJECT_TYPE = "user"

AUTHOR_NAME_FIELD = "author_name"
FEATURED_IMAGE_URL_FIELD = "featured_image_url"
AUTHOR_PROFILE_FIELD = "author_profile"

_STORAGE_KEYS = [f.storage_key for f in PROFILE_FIELDS]


class RequestContext:
    """Lookups memoised for the duration of one representation build.

    A new context is created per request, so cached values never outlive
    the request that loaded them.
    """

    def __init__(self, content: ContentStore, profiles: ProfileFieldStore) -> None:
        self._content = content
        self._profiles = profiles
        self._users: dict[int, User | None] = {}
        self._author_profiles: dict[int, AuthorProfile] = {}

    def user(self, user_id: int) -> User | None:
        if user_id not in self._users:
            self._users[user_id] = self._content.get_user(user_id)
        return self._users[user_id]

    def profile(self, user_id: int) -> AuthorProfile:
        """All profile attributes for a user, fetched in one store call."""
        if user_id not in self._author_profiles:
            stored = self._profiles.get_many(owner_key(user_id), _STORAGE_KEYS)
            self._author_profiles[user_id] = AuthorProfile.from_stored(user_id, stored)
        return self._author_profiles[user_id]


def empty_profile() -> dict[str, str]:
    return {f.name: f.default for f in PROFILE_FIELDS}


class ProjectionLayer:
    """Computes the derived fields and registers them as REST fields."""

    def __init__(
        self,
        content: ContentStore,
        profiles: ProfileFieldStore,
        *,
        fallback_author_name: str = DEFAULT_FALLBACK_AUTHOR,
        image_size: str = DEFAULT_IMAGE_SIZE,
    ) -> None:
        self.content = content
        self.profiles = profiles
        self.fallback_author_name = fallback_author_name
        self.image_size = image_size

    def new_context(self) -> RequestContext:
        return RequestContext(self.content, self.profiles)

    # ── User fields ──────────────────────────────────────────────

    def user_field(self, field: ProfileField, user: User, context: RequestContext) -> str:
        return getattr(context.profile(user.id), field.name)

    def update_user_field(self, field: ProfileField, value: str | None, user: User) -> bool:
        """Write one attribute through to the profile store.

        ``None`` deletes the stored value. The store's result is returned
        unchanged.
        """
        key = owner_key(user.id)
        if value is None:
            return self.profiles.delete(field.storage_key, key)
        return self.profiles.set(field.storage_key, key, str(value))

    # ── Content item fields ──────────────────────────────────────

    def author_name(self, item: ContentItem, context: RequestContext) -> str:
        author = context.user(item.author_id) if item.author_id is not None else None
        if author is None or not author.display_name:
            return self.fallback_author_name
        return author.display_name

    def featured_image_url(self, item: ContentItem, context: RequestContext) -> str | None:
        if item.featured_image_id is None:
            return None
        media = self.content.get_media(item.featured_image_id)
        if media is None:
            logger.warning(
                "Item %s references missing media %s", item.id, item.featured_image_id
            )
            return None
        return media.url_for(self.image_size)

    def author_profile(self, item: ContentItem, context: RequestContext) -> dict[str, str]:
        author = context.user(item.author_id) if item.author_id is not None else None
        if author is None:
            return empty_profile()
        return context.profile(author.id).fields()

    # ── Registration ─────────────────────────────────────────────

    def register(self, fields: RestFieldRegistry, registry: SchemaRegistry) -> None:
        """Attach the projected fields to users and every REST content type."""
        for profile_field in PROFILE_FIELDS:
            fields.register(
                USER_OBJECT_TYPE,
                profile_field.name,
                get_callback=partial(self.user_field, profile_field),
                update_callback=partial(self.update_user_field, profile_field),
                schema={
                    "type": "string",
                    "description": profile_field.label,
                    "context": ["view", "edit"],
                },
            )

        for content_type in registry.rest_content_types():
            fields.register(
                content_type.key,
                AUTHOR_NAME_FIELD,
                get_callback=self.author_name,
                schema={"type": "string", "description": "Display name of the author"},
            )
            fields.register(
                content_type.key,
                FEATURED_IMAGE_URL_FIELD,
                get_callback=self.featured_image_url,
                schema={
                    "type": ["string", "null"],
                    "description": f"Featured image URL ({self.image_size})",
                },
            )
            fields.register(
                content_type.key,
                AUTHOR_PROFILE_FIELD,
                get_callback=self.author_profile,
                schema={
                    "type": "object",
                    "description": "Author profile links and call to action",
                    "properties": {f.name: {"type": "string"} for f in PROFILE_FIELDS},
                },
            )
