"""filerelay application configuration.

Loads settings from an optional YAML file (filerelay.settings.yaml). Every
field has a default, so the service runs with no file at all.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

SETTINGS_FILE = Path("filerelay.settings.yaml")


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.warning("Config file not found: %s", path)
        return {}
    with path.open(encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


# ---------------------------------------------------------------------------
# Settings models
# ---------------------------------------------------------------------------


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080


class StorageSettings(BaseModel):
    """Where uploads land and how they are moved."""
    root:       str = "data"
    chunk_size: int = 32_000
    sniff_len:  int = 512

    @field_validator("chunk_size", "sniff_len")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value


class LoggingSettings(BaseModel):
    level: str = "info"


class AppConfig(BaseModel):
    server:  ServerSettings  = Field(default_factory=ServerSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------


def load_config(settings_path: Optional[Path] = None) -> AppConfig:
    """Load settings into a single *AppConfig* object.

    A relative ``storage.root`` is resolved against the directory holding the
    settings file, so the store does not move with the working directory.
    """
    path = Path(settings_path) if settings_path else SETTINGS_FILE
    config = AppConfig(**_load_yaml(path))

    root = Path(config.storage.root)
    if not root.is_absolute():
        config.storage.root = str(path.resolve().parent / root)

    logger.info(
        "Settings loaded (server=%s:%s, storage.root=%s)",
        config.server.host,
        config.server.port,
        config.storage.root,
    )
    return config


_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Return the process-wide config, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached config (for testing)."""
    global _config
    _config = None
