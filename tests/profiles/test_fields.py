"""Tests for the author-profile field table."""

import pytest
from portfolio_cms.errors import UnknownFieldError
from portfolio_cms.profiles.fields import (
    PROFILE_FIELD_NAMES,
    PROFILE_FIELDS,
    AuthorProfile,
    get_profile_field,
    owner_key,
)

EXPECTED_FIELDS = [
    "author_profile_image",
    "linkedin_url",
    "twitter_url",
    "instagram_url",
    "facebook_url",
    "youtube_url",
    "web_portfolio_url",
    "other_url_1",
    "other_url_2",
    "other_url_3",
    "author_cta_hook",
    "author_cta_action_url",
]


class TestFieldTable:
    def test_twelve_fields_in_order(self):
        assert list(PROFILE_FIELD_NAMES) == EXPECTED_FIELDS

    def test_defaults_are_empty_strings(self):
        assert all(f.default == "" for f in PROFILE_FIELDS)

    def test_lookup(self):
        field = get_profile_field("twitter_url")
        assert field.storage_key == "twitter_url"
        assert field.label

    def test_unknown_field(self):
        with pytest.raises(UnknownFieldError) as exc_info:
            get_profile_field("mastodon_url")
        assert exc_info.value.name == "mastodon_url"

    def test_owner_key(self):
        assert owner_key(42) == "user_42"


class TestAuthorProfile:
    def test_model_covers_table(self):
        profile = AuthorProfile(owner_user_id=1)
        assert list(profile.fields()) == EXPECTED_FIELDS
        assert set(profile.fields().values()) == {""}

    def test_from_stored_fills_gaps(self):
        profile = AuthorProfile.from_stored(
            7, {"linkedin_url": "https://linkedin.com/in/x", "twitter_url": None}
        )
        assert profile.owner_user_id == 7
        assert profile.linkedin_url == "https://linkedin.com/in/x"
        assert profile.twitter_url == ""
        assert profile.author_cta_hook == ""

    def test_from_stored_ignores_unknown_keys(self):
        profile = AuthorProfile.from_stored(1, {"favourite_colour": "green"})
        assert "favourite_colour" not in profile.fields()
