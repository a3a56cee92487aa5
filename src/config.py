"""Unified configuration loaded from .portfolio-cms.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".portfolio-cms.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "portfolio-cms" / "config.toml"

DEFAULT_FALLBACK_AUTHOR = "Dean Forant"
DEFAULT_IMAGE_SIZE = "large"


class SiteConfig(BaseModel):
    """[site] section."""

    fallback_author_name: str = DEFAULT_FALLBACK_AUTHOR
    image_size: str = DEFAULT_IMAGE_SIZE


class StorageConfig(BaseModel):
    """[storage] section."""

    data_dir: str = "./cms-data"


class PluginConfig(BaseModel):
    """[plugin] section: where field-group definitions live."""

    directory: str = "."
    definitions_dirname: str = "acf-json"


class CmsConfig(BaseModel):
    """Top-level configuration model."""

    site: SiteConfig = Field(default_factory=SiteConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    plugin: PluginConfig = Field(default_factory=PluginConfig)

    @property
    def data_dir(self) -> Path:
        return Path(self.storage.data_dir)

    @property
    def definitions_dir(self) -> Path:
        """Directory holding exported field-group definitions."""
        return Path(self.plugin.directory) / self.plugin.definitions_dirname


def load_config(path: str | Path | None = None) -> CmsConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .portfolio-cms.toml in CWD
    3. ~/.config/portfolio-cms/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged CmsConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = CmsConfig.model_validate(data) if data else CmsConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: CmsConfig, **cli_kwargs: object) -> CmsConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).

    Args:
        config: Base config.
        **cli_kwargs: CLI flag values, e.g. ``data_dir``, ``plugin_dir``.

    Returns:
        Updated config with CLI overrides applied.
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "data_dir": ("storage", "data_dir"),
        "plugin_dir": ("plugin", "directory"),
        "fallback_author": ("site", "fallback_author_name"),
        "image_size": ("site", "image_size"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = str(value)

    return CmsConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: CmsConfig) -> CmsConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "PORTFOLIO_CMS_DATA_DIR": ("storage", "data_dir"),
        "PORTFOLIO_CMS_PLUGIN_DIR": ("plugin", "directory"),
        "PORTFOLIO_CMS_FALLBACK_AUTHOR": ("site", "fallback_author_name"),
        "PORTFOLIO_CMS_IMAGE_SIZE": ("site", "image_size"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    return CmsConfig.model_validate(data)
