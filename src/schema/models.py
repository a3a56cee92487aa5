"""Schema declaration models: immutable Pydantic v2 types.

A content type or taxonomy definition is fixed once constructed; the
registry compares definitions by value to keep re-declaration idempotent.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


def _default_to_key(data: Any, *names: str) -> Any:
    """Fill empty ``names`` in raw input with the definition's key."""
    if not isinstance(data, dict) or not data.get("key"):
        return data
    data = dict(data)
    for name in names:
        if not data.get(name):
            data[name] = data["key"]
    return data


class Support(StrEnum):
    """Editor features a content type supports."""

    TITLE = "title"
    EDITOR = "editor"
    THUMBNAIL = "thumbnail"
    EXCERPT = "excerpt"
    CUSTOM_FIELDS = "custom-fields"


class Labels(BaseModel):
    """Admin-facing names for a content type or taxonomy."""

    model_config = ConfigDict(frozen=True)

    name: str
    singular_name: str
    menu_name: str = ""
    all_items: str = ""


class ContentTypeDefinition(BaseModel):
    """Declaration of a kind of publishable item."""

    model_config = ConfigDict(frozen=True)

    key: str
    labels: Labels
    supports: tuple[Support, ...] = (
        Support.TITLE,
        Support.EDITOR,
        Support.THUMBNAIL,
        Support.EXCERPT,
        Support.CUSTOM_FIELDS,
    )
    public: bool = True
    show_in_rest: bool = True
    publicly_queryable: bool = True
    show_ui: bool = True
    show_in_menu: bool = True
    show_in_nav_menus: bool = False
    has_archive: bool = False
    rewrite_slug: str = ""
    rest_base: str = ""
    show_in_graphql: bool = True
    graphql_single_name: str = ""
    graphql_plural_name: str = ""

    @model_validator(mode="before")
    @classmethod
    def _fill_defaults(cls, data: Any) -> Any:
        return _default_to_key(data, "rest_base", "rewrite_slug")

    def supports_feature(self, feature: Support | str) -> bool:
        return Support(feature) in self.supports


class TaxonomyDefinition(BaseModel):
    """Declaration of a classification scheme attachable to content types."""

    model_config = ConfigDict(frozen=True)

    key: str
    labels: Labels
    hierarchical: bool
    object_types: frozenset[str]
    public: bool = True
    show_in_rest: bool = True
    show_ui: bool = True
    rewrite_slug: str = ""
    rest_base: str = ""
    show_in_graphql: bool = True
    graphql_single_name: str = ""
    graphql_plural_name: str = ""

    @model_validator(mode="before")
    @classmethod
    def _fill_defaults(cls, data: Any) -> Any:
        return _default_to_key(data, "rest_base", "rewrite_slug")

    def applies_to(self, type_key: str) -> bool:
        return type_key in self.object_types
