"""Read/write entry points for user and content item representations."""

from __future__ import annotations

import logging
from typing import Any

from portfolio_cms.content.models import ContentItem, ContentStatus, User
from portfolio_cms.content.store import ContentStore
from portfolio_cms.errors import NotFoundError, UnknownFieldError
from portfolio_cms.rest.fields import RestFieldRegistry
from portfolio_cms.rest.projection import USER_OBJECT_TYPE, ProjectionLayer, RequestContext
from portfolio_cms.schema.models import ContentTypeDefinition
from portfolio_cms.schema.registry import SchemaRegistry

logger = logging.getLogger(__name__)


class ContentAPI:
    """Builds representations and applies registered field updates.

    Representations are plain dicts: the base record followed by every
    REST field registered for the object type.
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        content: ContentStore,
        fields: RestFieldRegistry,
        projection: ProjectionLayer,
    ) -> None:
        self.registry = registry
        self.content = content
        self.fields = fields
        self.projection = projection

    # ── Users ────────────────────────────────────────────────────

    def get_user(self, user_id: int) -> dict[str, Any]:
        """Representation of a user, including profile fields.

        Raises NotFoundError if the user does not exist.
        """
        user = self._require_user(user_id)
        data: dict[str, Any] = {
            "id": user.id,
            "name": user.display_name,
            "slug": user.login,
        }
        return self._add_fields(USER_OBJECT_TYPE, data, user)

    def update_user(self, user_id: int, values: dict[str, str | None]) -> dict[str, bool]:
        """Apply field updates to a user.

        Each value is handed to the field's update callback; ``None``
        clears the field. Returns the per-field success flag verbatim.

        Raises NotFoundError for an unknown user and UnknownFieldError
        for a name that is not a writable field.
        """
        user = self._require_user(user_id)
        for name in values:
            rest_field = self.fields.get(USER_OBJECT_TYPE, name)
            if rest_field is None or not rest_field.writable:
                raise UnknownFieldError(name, USER_OBJECT_TYPE)

        results: dict[str, bool] = {}
        for name, value in values.items():
            rest_field = self.fields.get(USER_OBJECT_TYPE, name)
            results[name] = bool(rest_field.update_callback(value, user))
            if not results[name]:
                logger.warning("Update of %s for user %s failed", name, user_id)
        return results

    # ── Content items ────────────────────────────────────────────

    def get_item(self, rest_base: str, item_id: int) -> dict[str, Any]:
        """Representation of a published content item.

        Raises NotFoundError for an unknown rest base, or a missing or
        unpublished item.
        """
        definition = self._require_type(rest_base)
        item = self.content.get(item_id, post_type=definition.key)
        if item is None or not item.is_published:
            raise NotFoundError(definition.key, item_id)
        return self._item_representation(definition, item)

    def list_items(self, rest_base: str) -> list[dict[str, Any]]:
        """Representations of every published item of a type."""
        definition = self._require_type(rest_base)
        items = self.content.list(post_type=definition.key, status=ContentStatus.PUBLISHED)
        return [self._item_representation(definition, item) for item in items]

    # ── Private helpers ──────────────────────────────────────────

    def _require_user(self, user_id: int) -> User:
        user = self.content.get_user(user_id)
        if user is None:
            raise NotFoundError("user", user_id)
        return user

    def _require_type(self, rest_base: str) -> ContentTypeDefinition:
        definition = self.registry.content_type_for_rest_base(rest_base)
        if definition is None:
            raise NotFoundError("content type", rest_base)
        return definition

    def _item_representation(
        self, definition: ContentTypeDefinition, item: ContentItem
    ) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": item.id,
            "type": item.post_type,
            "slug": item.slug,
            "status": item.status.value,
            "date": item.created_at.isoformat(),
            "title": item.title,
            "content": item.body,
            "excerpt": item.excerpt,
            "author": item.author_id,
            "featured_media": item.featured_image_id,
        }
        for taxonomy in self.registry.taxonomies_for(definition.key):
            if taxonomy.show_in_rest:
                data[taxonomy.rest_base] = list(item.terms.get(taxonomy.key, []))
        return self._add_fields(definition.key, data, item)

    def _add_fields(self, object_type: str, data: dict[str, Any], obj: object) -> dict[str, Any]:
        context: RequestContext = self.projection.new_context()
        for rest_field in self.fields.fields_for(object_type):
            if rest_field.readable:
                data[rest_field.name] = rest_field.get_callback(obj, context)
        return data
