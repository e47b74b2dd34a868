"""Walks the theme, extension and core tiers into a UnifiedIndex."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Iterable

from layoutkit.fs import FileSystem
from layoutkit.registry.index import UnifiedIndex
from layoutkit.registry.scanner import (
    ScanSettings,
    scan_consolidated_folder,
    scan_flat,
    scan_separate,
)
from layoutkit.registry.types import (
    CORE_SOURCE,
    THEME_SOURCE,
    ExtensionConfig,
    ResourceKind,
    ResourceRecord,
)

logger = logging.getLogger(__name__)

__all__ = ["ThemeLayout", "SourceWalker"]


@dataclass(frozen=True)
class ThemeLayout:
    """Theme root and the theme-relative directory of each resource role."""

    root: str
    schemas_dir: str = "schemas"
    sections_dir: str = "views/sections"
    templates_dir: str = "templates"
    snippets_dir: str = "views/snippets"
    label: str = "Active Theme"

    def path(self, relative: str) -> str:
        return os.path.join(self.root, relative)


class SourceWalker:
    """Produces ResourceRecords for one tier at a time and adds them to an index."""

    def __init__(self, fs: FileSystem, settings: ScanSettings | None = None) -> None:
        self._fs = fs
        self._settings = settings or ScanSettings()

    def _add_all(self, index: UnifiedIndex, records: Iterable[ResourceRecord]) -> int:
        count = 0
        for record in records:
            index.add(record)
            count += 1
        return count

    def walk_theme(self, index: UnifiedIndex, theme: ThemeLayout | None) -> int:
        """Index the theme's sections (split layout), templates and snippets."""
        if theme is None:
            return 0
        fs, settings = self._fs, self._settings

        count = self._add_all(
            index,
            scan_separate(
                fs,
                theme.path(theme.schemas_dir),
                theme.path(theme.sections_dir),
                source=THEME_SOURCE,
                source_label=theme.label,
                settings=settings,
            ),
        )
        for kind, directory in (
            (ResourceKind.TEMPLATE, theme.templates_dir),
            (ResourceKind.SNIPPET, theme.snippets_dir),
        ):
            count += self._add_all(
                index,
                scan_flat(
                    fs,
                    theme.path(directory),
                    kind,
                    source=THEME_SOURCE,
                    source_label=theme.label,
                    settings=settings,
                ),
            )
        logger.debug("Theme tier at %s contributed %d resources", theme.root, count)
        return count

    def walk_extension(self, index: UnifiedIndex, ext: ExtensionConfig) -> int:
        """Index one extension according to its declared schema location."""
        fs, settings, paths = self._fs, self._settings, ext.paths

        if ext.schema_location == "separate":
            sections = scan_separate(
                fs,
                paths.schemas_dir,
                paths.sections_dir,
                source=ext.id,
                source_label=ext.name,
                settings=settings,
            )
        else:
            sections = scan_consolidated_folder(
                fs,
                paths.sections_dir,
                source=ext.id,
                source_label=ext.name,
                settings=settings,
            )
        count = self._add_all(index, sections)

        if paths.templates_dir:
            count += self._add_all(
                index,
                scan_flat(
                    fs,
                    paths.templates_dir,
                    ResourceKind.TEMPLATE,
                    source=ext.id,
                    source_label=ext.name,
                    settings=settings,
                ),
            )
        if paths.snippets_dir:
            count += self._add_all(
                index,
                scan_flat(
                    fs,
                    paths.snippets_dir,
                    ResourceKind.SNIPPET,
                    source=ext.id,
                    source_label=ext.name,
                    settings=settings,
                ),
            )
        logger.debug("Extension '%s' contributed %d resources", ext.id, count)
        return count

    def walk_extensions(self, index: UnifiedIndex, extensions: Iterable[ExtensionConfig]) -> int:
        return sum(self.walk_extension(index, ext) for ext in extensions)

    def walk_core(self, index: UnifiedIndex, sections_dir: str | None, label: str = "Core") -> int:
        """Index the built-in sections. Core contributes no templates or snippets."""
        count = self._add_all(
            index,
            scan_consolidated_folder(
                self._fs,
                sections_dir,
                source=CORE_SOURCE,
                source_label=label,
                settings=self._settings,
            ),
        )
        logger.debug("Core tier contributed %d sections", count)
        return count
