"""Tests for config loading and path resolution."""
from pathlib import Path

import pytest
from pydantic import ValidationError

from filerelay.config import AppConfig, StorageSettings, get_config, load_config, reset_config


def test_defaults():
    cfg = AppConfig()
    assert cfg.server.port == 8080
    assert cfg.storage.chunk_size == 32_000
    assert cfg.storage.sniff_len == 512
    assert cfg.logging.level == "info"


def test_missing_file_uses_defaults(tmp_path):
    cfg = load_config(settings_path=tmp_path / "absent.yaml")
    assert cfg.server.port == 8080
    assert Path(cfg.storage.root) == tmp_path.resolve() / "data"


def test_values_from_yaml(tmp_path):
    settings_file = tmp_path / "filerelay.settings.yaml"
    settings_file.write_text(
        "server:\n"
        "  port: 9090\n"
        "storage:\n"
        "  root: uploads\n"
        "  chunk_size: 4096\n"
        "logging:\n"
        "  level: debug\n",
        encoding="utf-8",
    )

    cfg = load_config(settings_path=settings_file)

    assert cfg.server.port == 9090
    assert cfg.storage.chunk_size == 4096
    assert cfg.logging.level == "debug"
    assert Path(cfg.storage.root) == tmp_path.resolve() / "uploads"


def test_absolute_root_unchanged(tmp_path):
    absolute_root = tmp_path / "elsewhere"
    settings_file = tmp_path / "filerelay.settings.yaml"
    settings_file.write_text(f"storage:\n  root: {absolute_root}\n", encoding="utf-8")

    cfg = load_config(settings_path=settings_file)
    assert Path(cfg.storage.root) == absolute_root


@pytest.mark.parametrize("field", ["chunk_size", "sniff_len"])
def test_non_positive_sizes_rejected(field):
    with pytest.raises(ValidationError):
        StorageSettings(**{field: 0})


def test_get_config_is_cached():
    reset_config()
    try:
        assert get_config() is get_config()
    finally:
        reset_config()
