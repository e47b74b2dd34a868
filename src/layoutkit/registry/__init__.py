"""layoutkit registry: resource discovery, indexing and resolution.

Indexes sections, templates and snippets contributed by the active theme,
registered extensions and the built-in core set.

Usage::

    from layoutkit.registry import Registry, ResourceKind

    registry = Registry(theme_dir="./theme", core_dir="./core/sections")
    registry.register_extension({"id": "shop", "name": "Shop", "paths": {"sections_dir": "./shop/sections"}})
    registry.build()
    hero = registry.resolve(ResourceKind.SECTION, "hero")
"""

from __future__ import annotations

from layoutkit.registry.extensions import ExtensionDirectory
from layoutkit.registry.index import UnifiedIndex
from layoutkit.registry.metadata import parse_metadata
from layoutkit.registry.registry import ENTRY_POINT_GROUP, REGISTRY_EVENTS, InvalidationEvent, Registry
from layoutkit.registry.scanner import (
    ScanSettings,
    scan_consolidated_folder,
    scan_directory,
    scan_flat,
    scan_separate,
)
from layoutkit.registry.types import (
    CORE_SOURCE,
    THEME_SOURCE,
    ExtensionConfig,
    ExtensionPaths,
    ResourceKind,
    ResourceRecord,
)
from layoutkit.registry.walker import SourceWalker, ThemeLayout

__all__ = [
    "CORE_SOURCE",
    "ENTRY_POINT_GROUP",
    "ExtensionConfig",
    "ExtensionDirectory",
    "ExtensionPaths",
    "InvalidationEvent",
    "REGISTRY_EVENTS",
    "Registry",
    "ResourceKind",
    "ResourceRecord",
    "ScanSettings",
    "SourceWalker",
    "THEME_SOURCE",
    "ThemeLayout",
    "UnifiedIndex",
    "parse_metadata",
    "scan_consolidated_folder",
    "scan_directory",
    "scan_flat",
    "scan_separate",
]
