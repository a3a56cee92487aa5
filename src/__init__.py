"""Content schema and author-profile projection for a headless portfolio CMS."""

__version__ = "1.0.0"
