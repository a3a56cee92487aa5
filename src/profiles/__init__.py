"""Author-profile fields and the store that holds them."""

from portfolio_cms.profiles.fields import (
    PROFILE_FIELD_NAMES,
    PROFILE_FIELDS,
    AuthorProfile,
    ProfileField,
    get_profile_field,
    owner_key,
)
from portfolio_cms.profiles.store import ProfileFieldStore

__all__ = [
    "PROFILE_FIELDS",
    "PROFILE_FIELD_NAMES",
    "AuthorProfile",
    "ProfileField",
    "ProfileFieldStore",
    "get_profile_field",
    "owner_key",
]
