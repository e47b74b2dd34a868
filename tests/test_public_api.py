"""Tests for the layoutkit public API surface.

Verifies that all expected names are importable from the top-level
``layoutkit`` package and that ``__all__`` is comprehensive.
"""

import re

import layoutkit
import layoutkit.registry


class TestPublicAPIImports:
    """Key components must be importable from ``import layoutkit``."""

    def test_registry_importable(self):
        from layoutkit import Registry

        assert Registry is layoutkit.registry.Registry

    def test_resource_kind_importable(self):
        from layoutkit import ResourceKind

        assert ResourceKind.SECTION.value == "sections"

    def test_finder_importable(self):
        from layoutkit import ResourceFinder, describe

        assert callable(describe)
        assert ResourceFinder is not None

    def test_version_is_set(self):
        assert isinstance(layoutkit.__version__, str)
        assert re.match(r"^\d+\.\d+\.\d+", layoutkit.__version__)


class TestPublicAPIAll:
    """Verify __all__ is comprehensive and matches actual exports."""

    EXPECTED_NAMES = {
        # Core
        "Registry",
        "InvalidationEvent",
        "ResourceKind",
        "ResourceRecord",
        "ExtensionConfig",
        "ExtensionPaths",
        # Registry constants
        "REGISTRY_EVENTS",
        "ENTRY_POINT_GROUP",
        # Capabilities
        "CacheStore",
        "MemoryCacheStore",
        "FileCacheStore",
        "RegistryCache",
        "FileSystem",
        "LocalFileSystem",
        # Config
        "Config",
        # Errors
        "ErrorCodes",
        "LayoutKitError",
        "ConfigError",
        "ConfigNotFoundError",
        "InvalidInputError",
        # Lookups
        "ResourceFinder",
        "describe",
    }

    def test_all_contains_all_expected_names(self):
        missing = self.EXPECTED_NAMES - set(layoutkit.__all__)
        assert not missing, f"Missing from __all__: {missing}"

    def test_all_has_no_unexpected_extras(self):
        extra = set(layoutkit.__all__) - self.EXPECTED_NAMES
        assert not extra, f"Unexpected names in __all__: {extra}"

    def test_all_names_are_importable(self):
        _MISSING = object()
        for module in (layoutkit, layoutkit.registry):
            for name in module.__all__:
                obj = getattr(module, name, _MISSING)
                assert obj is not _MISSING, f"Name '{name}' listed in __all__ but not found on {module.__name__}"
