"""layoutkit - Layered discovery and resolution of theme layout resources."""

from __future__ import annotations

# Core
from layoutkit.registry import Registry
from layoutkit.registry.registry import ENTRY_POINT_GROUP, REGISTRY_EVENTS, InvalidationEvent
from layoutkit.registry.types import ExtensionConfig, ExtensionPaths, ResourceKind, ResourceRecord

# Capabilities
from layoutkit.cache import CacheStore, FileCacheStore, MemoryCacheStore, RegistryCache
from layoutkit.fs import FileSystem, LocalFileSystem

# Config
from layoutkit.config import Config

# Errors
from layoutkit.errors import (
    ConfigError,
    ConfigNotFoundError,
    ErrorCodes,
    InvalidInputError,
    LayoutKitError,
)

# Lookups
from layoutkit.lookup import ResourceFinder, describe

__version__ = "0.1.0"

__all__ = [
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
]
