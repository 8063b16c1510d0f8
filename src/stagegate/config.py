"""Configuration system with env overrides and frozen gate settings."""

import json
import os
from pathlib import Path
from typing import Any

from stagegate.models import GateSettings

# Module-level cache for singleton pattern
_config_cache: "Config | None" = None


def clear_config_cache() -> None:
    """Clear the config cache. Useful for testing or config reload."""
    global _config_cache
    _config_cache = None


def get_default_config_dir() -> Path:
    """Get default config directory, respecting STAGEGATE_CONFIG_DIR env var.

    This is the single source of truth for config directory resolution.
    """
    config_dir = os.environ.get("STAGEGATE_CONFIG_DIR")
    if config_dir:
        return Path(config_dir)
    return Path.home() / ".config" / "stagegate"


class ConfigMeta:
    """Schema definition - separate from runtime state."""

    TOGGLES: dict[str, str] = {
        "strict_environment_match": "Ignore staging/preview substrings in the deployment URL",
        "force_protection": "Protect every production-mode run, even without deployment hints",
    }


# Platform variables read as fallbacks for the STAGEGATE_* overrides
PLATFORM_ENV: dict[str, str] = {
    "node_env": "NODE_ENV",
    "vercel_env": "VERCEL_ENV",
    "public_env": "NEXT_PUBLIC_ENV",
    "deployment_url": "VERCEL_URL",
    "staging_username": "STAGING_USERNAME",
    "staging_password": "STAGING_PASSWORD",
}


class Config:
    """Runtime configuration with env override support."""

    DEFAULTS: dict[str, Any] = {
        # Toggles
        "strict_environment_match": False,
        "force_protection": False,
        # Deployment identity
        "node_env": "development",
        "vercel_env": "",
        "public_env": "",
        "deployment_url": "",
        # Secrets (empty = every credential check fails)
        "staging_username": "",
        "staging_password": "",
        # Challenge page
        "realm": "Staging Environment",
        "contact_email": "",
        "public_paths": "",
        # Server
        "host": "127.0.0.1",
        "port": 8080,
    }

    def __init__(self, config_dir: Path | None = None):
        self._config_dir = config_dir or get_default_config_dir()
        self._config_file = self._config_dir / "config.json"
        self._data: dict[str, Any] = {}

    @classmethod
    def load(cls, config_dir: Path | None = None) -> "Config":
        """Factory method - explicit loading with caching."""
        global _config_cache

        # Return cached instance if available and no custom dir specified
        if _config_cache is not None and config_dir is None:
            return _config_cache

        config = cls(config_dir)
        config._load_from_file()
        config._apply_platform_env()
        config._apply_env_overrides()

        # Cache if using default directory
        if config_dir is None:
            _config_cache = config

        return config

    def __getattr__(self, name: str) -> Any:
        """Access config values as attributes."""
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._data:
            return self._data[name]
        if name in self.DEFAULTS:
            return self.DEFAULTS[name]
        raise AttributeError(f"Config has no attribute '{name}'")

    def get_toggles(self) -> list[tuple[str, str, bool]]:
        """Return (attr, description, enabled) for status output."""
        return [
            (name, desc, bool(getattr(self, name))) for name, desc in ConfigMeta.TOGGLES.items()
        ]

    def settings(self) -> GateSettings:
        """Freeze the current values into an immutable GateSettings."""
        return GateSettings(
            node_env=str(self.node_env or ""),
            vercel_env=str(self.vercel_env or ""),
            public_env=str(self.public_env or ""),
            deployment_url=str(self.deployment_url or ""),
            staging_username=str(self.staging_username or ""),
            staging_password=str(self.staging_password or ""),
            realm=str(self.realm or self.DEFAULTS["realm"]),
            contact_email=str(self.contact_email or ""),
            public_paths=_split_paths(self.public_paths),
            strict_environment_match=bool(self.strict_environment_match),
            force_protection=bool(self.force_protection),
        )

    def _load_from_file(self) -> None:
        if self._config_file.exists():
            try:
                content = self._config_file.read_text()
                if content.strip():
                    self._data = json.loads(content)
            except json.JSONDecodeError:
                # Corrupted config - use defaults
                self._data = {}

    def _apply_platform_env(self) -> None:
        """Apply NODE_ENV, VERCEL_URL and friends (below STAGEGATE_* vars)."""
        for key, env_key in PLATFORM_ENV.items():
            if env_key in os.environ:
                self._data[key] = os.environ[env_key]

    def _apply_env_overrides(self) -> None:
        """Apply STAGEGATE_* env vars (highest priority)."""
        for key, default in self.DEFAULTS.items():
            env_key = f"STAGEGATE_{key.upper()}"
            if env_key in os.environ:
                self._data[key] = self._coerce(os.environ[env_key], type(default))

    @staticmethod
    def _coerce(value: str, target_type: type) -> Any:
        """Coerce string env value to target type."""
        if target_type is bool:
            return value.lower() in ("true", "1", "yes")
        if target_type is int:
            return int(value)
        return value


def _split_paths(raw: Any) -> tuple[str, ...]:
    if isinstance(raw, (list, tuple)):
        items = [str(p) for p in raw]
    else:
        items = str(raw or "").split(",")
    return tuple(p.strip() for p in items if p.strip())
