"""Pytest fixtures for stagegate tests."""

import json
import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def clear_caches(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Clear the config cache and any deployment env vars before each test."""
    from stagegate.config import PLATFORM_ENV, clear_config_cache

    for env_key in PLATFORM_ENV.values():
        monkeypatch.delenv(env_key, raising=False)
    for env_key in list(os.environ):
        if env_key.startswith("STAGEGATE_"):
            monkeypatch.delenv(env_key, raising=False)
    monkeypatch.setenv("STAGEGATE_CONFIG_DIR", str(tmp_path / "stagegate-config"))

    clear_config_cache()

    yield

    # Also clear after test (cleanup)
    clear_config_cache()


@pytest.fixture
def write_config():
    """Write a config.json into a directory and return the directory."""

    def _write(config_dir: Path, **values) -> Path:
        config_dir.mkdir(parents=True, exist_ok=True)
        (config_dir / "config.json").write_text(json.dumps(values))
        return config_dir

    return _write
