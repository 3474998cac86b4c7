"""Unified configuration loaded from .crabcms.toml and env vars.

Loading order: defaults → TOML file → env vars.  CLI flags are applied
by the caller on top of the returned object.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".crabcms.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG = Path.home() / ".config" / "crabcms" / "config.toml"


class StorageSectionConfig(BaseModel):
    """[storage] section."""

    backend: Literal["local", "remote"] = "local"
    data_file: str = ".crabcms-data.json"
    simulate_latency: bool = False


class RemoteSectionConfig(BaseModel):
    """[remote] section."""

    source: str = "public/db.json"
    export_dir: str = "./downloads"
    timeout: float = 10.0


class CMSConfig(BaseModel):
    """Top-level configuration."""

    storage: StorageSectionConfig = Field(default_factory=StorageSectionConfig)
    remote: RemoteSectionConfig = Field(default_factory=RemoteSectionConfig)


def load_config(path: str | Path | None = None) -> CMSConfig:
    """Load configuration from a TOML file, then overlay env vars.

    Search order when *path* is None:
    1. .crabcms.toml in CWD
    2. ~/.config/crabcms/config.toml

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged CMSConfig.
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
        if not data and GLOBAL_CONFIG.exists():
            data = _load_toml(GLOBAL_CONFIG)
            logger.info("Loaded config from %s", GLOBAL_CONFIG)

    try:
        config = CMSConfig.model_validate(data) if data else CMSConfig()
    except ValidationError as exc:
        logger.warning("Invalid config, using defaults: %s", exc)
        config = CMSConfig()

    return _apply_env_vars(config)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: CMSConfig) -> CMSConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "CRABCMS_BACKEND": ("storage", "backend"),
        "CRABCMS_DATA_FILE": ("storage", "data_file"),
        "CRABCMS_SIMULATE_LATENCY": ("storage", "simulate_latency"),
        "CRABCMS_REMOTE_SOURCE": ("remote", "source"),
        "CRABCMS_EXPORT_DIR": ("remote", "export_dir"),
    }

    changed = False
    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value
            changed = True

    if not changed:
        return config
    try:
        return CMSConfig.model_validate(data)
    except ValidationError as exc:
        logger.warning("Ignoring invalid environment overrides: %s", exc)
        return config
