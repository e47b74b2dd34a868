"""Configuration loading and dot-path access."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from layoutkit.errors import ConfigError, ConfigNotFoundError

__all__ = ["Config", "DEFAULTS"]

DEFAULTS: dict[str, Any] = {
    "theme": {
        "root": None,
        "schemas_dir": "schemas",
        "sections_dir": "views/sections",
        "templates_dir": "templates",
        "snippets_dir": "views/snippets",
        "label": "Active Theme",
    },
    "core": {
        "sections_dir": None,
        "label": "Core",
    },
    "files": {
        "definition_ext": "yaml",
        "content_ext": "twig",
        "template_ext": "json",
        "schema_filename": "schema",
    },
    "cache": {
        "key": "layoutkit_registry_index_v1",
        "ttl": 3600,
    },
}


def _lookup(data: dict[str, Any], parts: list[str]) -> tuple[bool, Any]:
    current: Any = data
    for part in parts:
        if isinstance(current, dict) and part in current:
            current = current[part]
        else:
            return False, None
    return True, current


class Config:
    """Configuration accessor with dot-path key support.

    Lookups fall back to :data:`DEFAULTS` when a key is absent from the
    supplied data, then to the ``default`` argument.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def from_yaml(cls, path: str | Path) -> Config:
        """Load configuration from a YAML file.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the file is not valid YAML or not a mapping.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigNotFoundError(config_path=str(path))

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(message=f"Invalid YAML in config file: {path}", cause=e) from e

        if parsed is None:
            return cls({})
        if not isinstance(parsed, dict):
            raise ConfigError(message=f"Config file must be a YAML mapping: {path}")
        return cls(parsed)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        parts = key.split(".")
        found, value = _lookup(self._data, parts)
        if found:
            return value
        found, value = _lookup(DEFAULTS, parts)
        if found and value is not None:
            return value
        return default
