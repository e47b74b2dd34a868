"""Resource lookups for rendering collaborators, layered over the Registry."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from layoutkit.registry.registry import Registry
from layoutkit.registry.scanner import scan_directory
from layoutkit.registry.types import ResourceKind, default_display_name

__all__ = ["ResourceFinder", "describe"]

logger = logging.getLogger(__name__)


class ResourceFinder:
    """Finds content files and template documents, registry first.

    When the registry has no match, the finder falls back to the legacy
    locations a theme or the core directory may still use.
    """

    def __init__(self, registry: Registry, core_templates_dir: str | None = None) -> None:
        self._registry = registry
        self._fs = registry.fs
        self._core_templates_dir = core_templates_dir

    def _first_existing(self, candidates: list[str]) -> str | None:
        for path in candidates:
            if self._fs.exists(path) and not self._fs.is_dir(path):
                return path
        return None

    def find_section_file(self, section_id: str) -> str | None:
        """Return the content file of ``section_id``, or None."""
        record = self._registry.resolve(ResourceKind.SECTION, section_id)
        if record is not None and self._fs.exists(record.content_path):
            return record.content_path

        ext = self._registry.settings.content_ext
        roots: list[str] = []
        theme = self._registry.theme
        if theme is not None:
            roots.append(theme.path(theme.sections_dir))
        if self._registry.core_dir:
            roots.append(self._registry.core_dir)

        candidates: list[str] = []
        for root in roots:
            candidates.append(os.path.join(root, f"{section_id}.{ext}"))
            candidates.append(os.path.join(root, section_id, f"{section_id}.{ext}"))
        return self._first_existing(candidates)

    def find_snippet_file(self, snippet_id: str) -> str | None:
        record = self._registry.resolve(ResourceKind.SNIPPET, snippet_id)
        if record is not None and self._fs.exists(record.content_path):
            return record.content_path

        theme = self._registry.theme
        if theme is None:
            return None
        ext = self._registry.settings.content_ext
        return self._first_existing([os.path.join(theme.path(theme.snippets_dir), f"{snippet_id}.{ext}")])

    def _read_json(self, path: str) -> Any | None:
        raw = self._fs.read_bytes(path)
        if raw is None:
            return None
        try:
            return json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Invalid JSON in template %s: %s", path, e)
            return None

    def load_template(self, name: str) -> dict[str, Any] | None:
        """Load and parse the JSON document of template ``name``.

        The lookup goes through ``list_all``, so when several sources define
        ``name`` the one kept by the flattened view is used, not the one
        :meth:`Registry.resolve` would pick.
        """
        by_id = {record.id: record for record in self._registry.list_all(ResourceKind.TEMPLATE)}
        record = by_id.get(name)
        if record is not None:
            data = self._read_json(record.content_path)
            if isinstance(data, dict):
                logger.debug("Template '%s' loaded from %s (%s)", name, record.content_path, record.source)
                return data
            logger.debug("Template '%s' from registry is unusable, trying theme directory", name)

        theme = self._registry.theme
        if theme is None:
            return None
        path = os.path.join(theme.path(theme.templates_dir), f"{name}.{self._registry.settings.template_ext}")
        if not self._fs.exists(path):
            logger.debug("Template '%s' not found", name)
            return None
        data = self._read_json(path)
        return data if isinstance(data, dict) else None

    def available_templates(self) -> dict[str, dict[str, Any]]:
        """Selectable templates: JSON documents that declare a ``template`` key.

        Theme templates are listed first; core-directory templates fill the
        remaining names when ``core_templates_dir`` was given.
        """
        settings = self._registry.settings
        dirs: list[tuple[str, str]] = []
        theme = self._registry.theme
        if theme is not None:
            dirs.append((theme.path(theme.templates_dir), "theme"))
        if self._core_templates_dir:
            dirs.append((self._core_templates_dir, "core"))

        templates: dict[str, dict[str, Any]] = {}
        for directory, source in dirs:
            for template_id, path in scan_directory(self._fs, directory, settings.template_ext).items():
                if template_id in templates:
                    continue
                data = self._read_json(path)
                if not isinstance(data, dict) or "template" not in data:
                    continue
                templates[template_id] = {
                    "name": data.get("name") or default_display_name(template_id),
                    "description": data.get("description", ""),
                    "path": path,
                    "source": source,
                }
        return templates


def describe(registry: Registry) -> str:
    """Plain-text summary of the sections and templates currently indexed."""
    lines = ["=== LAYOUTKIT REGISTRY ===", ""]

    sections = registry.get_all_sections()
    lines.append(f"Available sections: {len(sections)}")
    for record in sections:
        lines.append(f"- {record.display_name} [{record.id}] (source: {record.source_label})")
    lines.append("")

    templates = registry.get_all_templates()
    lines.append(f"Available templates: {len(templates)}")
    for record in templates:
        lines.append(f"- {record.id} (source: {record.source})")
    return "\n".join(lines) + "\n"
