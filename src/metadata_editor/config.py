"""Editor settings: defaults, then a TOML file, then ``METADATA_EDITOR_*`` variables."""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

ENV_PREFIX = "METADATA_EDITOR_"


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes", "on")


# Variable suffix -> (section, key, parser)
ENV_OVERRIDES: dict[str, tuple[str, str, Callable[[str], Any]]] = {
    "ID3_V2_VERSION": ("id3", "v2_version", str.strip),
    "ID3_V23_SEPARATOR": ("id3", "v23_separator", str),
    "ID3_KEEP_LEGACY_TAG": ("id3", "keep_legacy_tag", _env_flag),
    "LOGGING_LEVEL": ("logging", "level", str.strip),
    "LOGGING_HASH_PATHS": ("logging", "hash_paths", _env_flag),
}


class Id3Config(BaseModel):
    """How MP3 tags are written on commit."""

    # Reads accept every ID3v2 version; writes use this one
    v2_version: int = Field(default=4, ge=3, le=4)
    # Joins multi-value text frames in v2.3, which has no null separator
    v23_separator: str = Field(default="/", min_length=1)
    # When False, commit drops the ID3v1 tag even if it still holds data
    keep_legacy_tag: bool = True


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    hash_paths: bool = False


class EditorConfig(BaseModel):
    """Settings shared by sessions and the ``medit`` command."""

    id3: Id3Config = Field(default_factory=Id3Config)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> EditorConfig:
        """Build the config from ``config_path`` (if it exists) and the environment.

        Environment variables win over the file, e.g.
        ``METADATA_EDITOR_ID3_V2_VERSION=3``.
        """
        raw: dict[str, Any] = {}
        if config_path and config_path.exists():
            with open(config_path, "rb") as f:
                raw = tomllib.load(f)
            logger.debug(f"Read config sections {sorted(raw)} from {config_path}")

        return cls.model_validate(cls._apply_env(raw, os.environ))

    @staticmethod
    def _apply_env(raw: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
        """Return a copy of ``raw`` with every set override variable applied."""
        merged = {
            name: dict(section) if isinstance(section, dict) else {}
            for name, section in raw.items()
        }
        for suffix, (section, key, parse) in ENV_OVERRIDES.items():
            value = environ.get(ENV_PREFIX + suffix)
            if value:
                merged.setdefault(section, {})[key] = parse(value)
        return merged
