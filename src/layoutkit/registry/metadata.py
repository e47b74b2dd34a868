"""Section metadata loading for the registry system."""

from __future__ import annotations

import logging
from typing import Any

import yaml

from layoutkit.fs import FileSystem
from layoutkit.registry.types import DEFAULT_CATEGORY, DEFAULT_ICON, default_display_name

logger = logging.getLogger(__name__)

__all__ = ["parse_metadata", "section_fields"]


def parse_metadata(fs: FileSystem, path: str) -> dict[str, Any]:
    """Load a section metadata YAML file.

    Metadata is optional: a missing, unreadable or malformed file yields an
    empty dict and never raises.
    """
    if not fs.exists(path):
        logger.debug("Metadata file %s does not exist", path)
        return {}

    raw = fs.read_bytes(path)
    if raw is None:
        return {}

    try:
        parsed = yaml.safe_load(raw.decode("utf-8"))
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        logger.warning("Invalid metadata file %s: %s", path, e)
        return {}

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        logger.warning("Metadata file must be a YAML mapping: %s", path)
        return {}
    return parsed


def _text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def section_fields(meta: dict[str, Any], resource_id: str) -> dict[str, Any]:
    """Map raw metadata to ResourceRecord fields, applying section defaults."""
    return {
        "display_name": _text(meta.get("name")) or default_display_name(resource_id),
        "category": _text(meta.get("category")) or DEFAULT_CATEGORY,
        "icon": _text(meta.get("icon")) or DEFAULT_ICON,
        "preview_image": _text(meta.get("preview")),
    }
