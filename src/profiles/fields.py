"""Author-profile field table.

Every per-user attribute projected onto the API is one row here. Read and
write handlers are built by iterating this table, so adding an attribute
means adding a row.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from portfolio_cms.errors import UnknownFieldError


class ProfileField(BaseModel):
    """One author-profile attribute and where it is stored."""

    model_config = ConfigDict(frozen=True)

    name: str
    storage_key: str
    label: str
    default: str = ""


def _field(name: str, label: str) -> ProfileField:
    return ProfileField(name=name, storage_key=name, label=label)


PROFILE_FIELDS: tuple[ProfileField, ...] = (
    _field("author_profile_image", "Profile image URL"),
    _field("linkedin_url", "LinkedIn"),
    _field("twitter_url", "Twitter / X"),
    _field("instagram_url", "Instagram"),
    _field("facebook_url", "Facebook"),
    _field("youtube_url", "YouTube"),
    _field("web_portfolio_url", "Web portfolio"),
    _field("other_url_1", "Other link 1"),
    _field("other_url_2", "Other link 2"),
    _field("other_url_3", "Other link 3"),
    _field("author_cta_hook", "Call-to-action text"),
    _field("author_cta_action_url", "Call-to-action URL"),
)

PROFILE_FIELD_NAMES: tuple[str, ...] = tuple(f.name for f in PROFILE_FIELDS)

_BY_NAME = {f.name: f for f in PROFILE_FIELDS}


def get_profile_field(name: str) -> ProfileField:
    """Look up a row by field name.

    Raises UnknownFieldError if the name is not in the table.
    """
    try:
        return _BY_NAME[name]
    except KeyError:
        raise UnknownFieldError(name, "user") from None


def owner_key(user_id: int) -> str:
    """Storage owner key for a user."""
    return f"user_{user_id}"


class AuthorProfile(BaseModel):
    """Snapshot of every profile attribute for one user."""

    owner_user_id: int
    author_profile_image: str = ""
    linkedin_url: str = ""
    twitter_url: str = ""
    instagram_url: str = ""
    facebook_url: str = ""
    youtube_url: str = ""
    web_portfolio_url: str = ""
    other_url_1: str = ""
    other_url_2: str = ""
    other_url_3: str = ""
    author_cta_hook: str = ""
    author_cta_action_url: str = ""

    @classmethod
    def from_stored(cls, owner_user_id: int, stored: dict[str, str | None]) -> AuthorProfile:
        """Build a profile from raw stored values keyed by storage key."""
        values = {}
        for field in PROFILE_FIELDS:
            value = stored.get(field.storage_key)
            values[field.name] = value if value else field.default
        return cls(owner_user_id=owner_user_id, **values)

    def fields(self) -> dict[str, str]:
        """The attribute values, without the owner id."""
        return {name: getattr(self, name) for name in PROFILE_FIELD_NAMES}
