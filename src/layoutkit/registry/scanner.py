"""Directory scanners producing ResourceRecords from the two supported layouts."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from layoutkit.fs import FileSystem
from layoutkit.registry.metadata import parse_metadata, section_fields
from layoutkit.registry.types import ResourceKind, ResourceRecord, default_display_name

logger = logging.getLogger(__name__)

__all__ = [
    "ScanSettings",
    "scan_directory",
    "scan_consolidated_folder",
    "scan_separate",
    "scan_flat",
]


@dataclass(frozen=True)
class ScanSettings:
    """File naming conventions shared by every scanner."""

    definition_ext: str = "yaml"
    content_ext: str = "twig"
    template_ext: str = "json"
    schema_filename: str = "schema"

    def extension_for(self, kind: ResourceKind) -> str:
        if kind is ResourceKind.TEMPLATE:
            return self.template_ext
        return self.content_ext


def scan_directory(fs: FileSystem, path: str | None, extension: str) -> dict[str, str]:
    """Map base name -> file path for direct children of ``path`` ending in ``.extension``.

    A missing or non-directory ``path`` yields an empty mapping.
    """
    if not path or not fs.is_dir(path):
        return {}

    suffix = f".{extension}"
    found: dict[str, str] = {}
    for file_path in fs.list_dir(path, f"*{suffix}"):
        name = os.path.basename(file_path)
        if name.startswith("."):
            continue
        if fs.is_dir(file_path):
            continue
        found[name[: -len(suffix)]] = file_path
    return found


def _section_record(
    fs: FileSystem,
    resource_id: str,
    definition_path: str,
    content_path: str,
    source: str,
    source_label: str,
) -> ResourceRecord:
    meta = parse_metadata(fs, definition_path)
    return ResourceRecord(
        id=resource_id,
        kind=ResourceKind.SECTION,
        content_path=content_path,
        definition_path=definition_path,
        source=source,
        source_label=source_label,
        **section_fields(meta, resource_id),
    )


def scan_consolidated_folder(
    fs: FileSystem,
    sections_root: str | None,
    *,
    source: str,
    source_label: str,
    settings: ScanSettings,
) -> list[ResourceRecord]:
    """Scan the one-folder-per-section layout.

    ``<root>/<name>/schema.<def-ext>`` and ``<root>/<name>/<name>.<content-ext>``
    must both exist for ``name`` to become a section.
    """
    if not sections_root or not fs.is_dir(sections_root):
        return []

    records: list[ResourceRecord] = []
    for folder in fs.list_dir(sections_root):
        name = os.path.basename(folder)
        if name.startswith(".") or not fs.is_dir(folder):
            continue

        definition_path = os.path.join(folder, f"{settings.schema_filename}.{settings.definition_ext}")
        content_path = os.path.join(folder, f"{name}.{settings.content_ext}")
        if not (fs.exists(definition_path) and fs.exists(content_path)):
            logger.debug("Skipping incomplete section folder %s", folder)
            continue

        records.append(_section_record(fs, name, definition_path, content_path, source, source_label))
    return records


def scan_separate(
    fs: FileSystem,
    schemas_dir: str | None,
    sections_dir: str | None,
    *,
    source: str,
    source_label: str,
    settings: ScanSettings,
) -> list[ResourceRecord]:
    """Scan the split layout: metadata and content directories joined by base name."""
    schemas = scan_directory(fs, schemas_dir, settings.definition_ext)
    contents = scan_directory(fs, sections_dir, settings.content_ext)

    records: list[ResourceRecord] = []
    for name, definition_path in schemas.items():
        content_path = contents.get(name)
        if content_path is None:
            logger.debug("Metadata %s has no matching content file, skipping", definition_path)
            continue
        records.append(_section_record(fs, name, definition_path, content_path, source, source_label))
    return records


def scan_flat(
    fs: FileSystem,
    directory: str | None,
    kind: ResourceKind,
    *,
    source: str,
    source_label: str,
    settings: ScanSettings,
) -> list[ResourceRecord]:
    """Scan a flat directory of template or snippet files."""
    files = scan_directory(fs, directory, settings.extension_for(kind))
    return [
        ResourceRecord(
            id=name,
            kind=kind,
            display_name=default_display_name(name),
            content_path=path,
            source=source,
            source_label=source_label,
        )
        for name, path in files.items()
    ]
