"""Central resource registry: build, resolve and cache layout resources."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from importlib.metadata import entry_points
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping

from layoutkit.cache import MemoryCacheStore, RegistryCache
from layoutkit.config import Config
from layoutkit.errors import InvalidInputError
from layoutkit.fs import FileSystem, LocalFileSystem
from layoutkit.registry.extensions import ExtensionDirectory
from layoutkit.registry.index import UnifiedIndex
from layoutkit.registry.scanner import ScanSettings
from layoutkit.registry.types import ExtensionConfig, ResourceKind, ResourceRecord
from layoutkit.registry.walker import SourceWalker, ThemeLayout

if TYPE_CHECKING:
    from layoutkit.cache import CacheStore

logger = logging.getLogger(__name__)

__all__ = ["Registry", "InvalidationEvent", "REGISTRY_EVENTS", "ENTRY_POINT_GROUP"]

REGISTRY_EVENTS = ("build", "invalidate")
ENTRY_POINT_GROUP = "layoutkit.extensions"


class InvalidationEvent(str, Enum):
    """Environment changes after which the index must be rebuilt."""

    PLUGIN_ACTIVATED = "plugin_activated"
    PLUGIN_DEACTIVATED = "plugin_deactivated"
    THEME_SWITCHED = "theme_switched"
    PACKAGE_UPGRADED = "package_upgraded"
    EXTENSION_REGISTERED = "extension_registered"


class Registry:
    """Indexes sections, templates and snippets from theme, extensions and core."""

    def __init__(
        self,
        config: Config | None = None,
        theme_dir: str | None = None,
        core_dir: str | None = None,
        fs: FileSystem | None = None,
        cache_store: CacheStore | None = None,
    ) -> None:
        """Initialize the Registry and seed it from the cache when possible.

        Args:
            config: Optional Config; explicit arguments take precedence over it.
            theme_dir: Root of the active theme. None disables the theme tier.
            core_dir: Built-in consolidated sections directory. None disables the core tier.
            fs: Filesystem capability, defaults to the local disk.
            cache_store: TTL store for the index, defaults to an in-memory store.
        """
        cfg = config if config is not None else Config()

        theme_root = theme_dir if theme_dir is not None else cfg.get("theme.root")
        self._theme: ThemeLayout | None = None
        if theme_root:
            self._theme = ThemeLayout(
                root=str(theme_root),
                schemas_dir=cfg.get("theme.schemas_dir"),
                sections_dir=cfg.get("theme.sections_dir"),
                templates_dir=cfg.get("theme.templates_dir"),
                snippets_dir=cfg.get("theme.snippets_dir"),
                label=cfg.get("theme.label"),
            )
        core_root = core_dir if core_dir is not None else cfg.get("core.sections_dir")
        self._core_dir: str | None = str(core_root) if core_root else None
        self._core_label: str = cfg.get("core.label")

        self._settings = ScanSettings(
            definition_ext=cfg.get("files.definition_ext"),
            content_ext=cfg.get("files.content_ext"),
            template_ext=cfg.get("files.template_ext"),
            schema_filename=cfg.get("files.schema_filename"),
        )
        self._fs: FileSystem = fs if fs is not None else LocalFileSystem()
        self._walker = SourceWalker(self._fs, self._settings)
        self._cache = RegistryCache(
            cache_store if cache_store is not None else MemoryCacheStore(),
            key=cfg.get("cache.key"),
            ttl=int(cfg.get("cache.ttl")),
        )

        # Internal state
        self._index = UnifiedIndex()
        self._extensions = ExtensionDirectory()
        self._callbacks: dict[str, list[Callable[..., Any]]] = {event: [] for event in REGISTRY_EVENTS}
        self._write_lock = threading.RLock()
        self._loaded_from_cache = False

        self._load_from_cache()

    # ----- Accessors -----

    @property
    def fs(self) -> FileSystem:
        return self._fs

    @property
    def theme(self) -> ThemeLayout | None:
        return self._theme

    @property
    def core_dir(self) -> str | None:
        return self._core_dir

    @property
    def settings(self) -> ScanSettings:
        return self._settings

    @property
    def loaded_from_cache(self) -> bool:
        """Whether the current index was seeded from the cache rather than built."""
        return self._loaded_from_cache

    # ----- Build -----

    def build(self) -> int:
        """Re-scan theme, extensions and core, replace the index and persist it.

        Returns:
            Number of resources indexed.
        """
        with self._write_lock:
            index = UnifiedIndex()
            extensions = list(self._extensions.list_all().values())

            count = self._walker.walk_theme(index, self._theme)
            count += self._walker.walk_extensions(index, extensions)
            count += self._walker.walk_core(index, self._core_dir, self._core_label)

            self._index = index
            self._loaded_from_cache = False
            self._cache.save(index.to_dict(), self._extensions.to_dict())

        logger.info(
            "Registry built: %d sections, %d templates, %d snippets from %d extensions",
            index.count(ResourceKind.SECTION),
            index.count(ResourceKind.TEMPLATE),
            index.count(ResourceKind.SNIPPET),
            len(extensions),
        )
        self._trigger_event("build", index)
        return count

    # ----- Query Methods -----

    def resolve(self, kind: ResourceKind | str, resource_id: str) -> ResourceRecord | None:
        """Return the winning record: theme, then extensions, then core."""
        with self._write_lock:
            index = self._index
        return index.resolve(kind, resource_id)

    def list_by_source(self, kind: ResourceKind | str, source: str) -> list[ResourceRecord]:
        with self._write_lock:
            index = self._index
        return index.list_by_source(kind, source)

    def list_by_category(self, kind: ResourceKind | str, category: str) -> list[ResourceRecord]:
        """Records of every source whose category matches; no category counts as ``general``."""
        with self._write_lock:
            index = self._index
        return index.list_by_category(kind, category)

    def list_all(self, kind: ResourceKind | str) -> list[ResourceRecord]:
        """One record per id across all sources.

        Not priority-aware: on an id collision the last source wins here,
        while :meth:`resolve` prefers the theme. Use :meth:`resolve` to
        pick the record that will actually be rendered.
        """
        with self._write_lock:
            index = self._index
        return index.list_all(kind)

    def get_section(self, section_id: str) -> ResourceRecord | None:
        return self.resolve(ResourceKind.SECTION, section_id)

    def get_template(self, template_id: str) -> ResourceRecord | None:
        return self.resolve(ResourceKind.TEMPLATE, template_id)

    def get_snippet(self, snippet_id: str) -> ResourceRecord | None:
        return self.resolve(ResourceKind.SNIPPET, snippet_id)

    def get_all_sections(self) -> list[ResourceRecord]:
        return self.list_all(ResourceKind.SECTION)

    def get_all_templates(self) -> list[ResourceRecord]:
        return self.list_all(ResourceKind.TEMPLATE)

    def sources(self, kind: ResourceKind | str) -> list[str]:
        with self._write_lock:
            return self._index.sources(kind)

    def dumps(self) -> str:
        """Canonical serialized form of the current index."""
        with self._write_lock:
            return self._index.dumps()

    # ----- Extensions -----

    def register_extension(self, config: ExtensionConfig | Mapping[str, Any]) -> bool:
        """Register an extension. The new source is picked up by the next :meth:`build`.

        Returns:
            False if the config is incomplete or its id is already registered.
        """
        with self._write_lock:
            if not self._extensions.register(config):
                return False
        self.invalidate_cache()
        return True

    def get_extension(self, ext_id: str) -> ExtensionConfig | None:
        with self._write_lock:
            return self._extensions.get(ext_id)

    def list_extensions(self) -> dict[str, ExtensionConfig]:
        with self._write_lock:
            return self._extensions.list_all()

    def run_registration_phase(
        self,
        registrars: Iterable[Callable[[Registry], Any]] | None = None,
        entry_point_group: str | None = ENTRY_POINT_GROUP,
    ) -> int:
        """Let external code register extensions before the first build.

        Each registrar is called with this registry. Installed entry points
        in ``entry_point_group`` are loaded and called the same way. A
        failing registrar is logged and skipped.

        Returns:
            Number of registrars that ran successfully.
        """
        callables: list[tuple[str, Callable[[Registry], Any]]] = [
            (getattr(fn, "__name__", repr(fn)), fn) for fn in (registrars or [])
        ]
        if entry_point_group:
            for ep in entry_points(group=entry_point_group):
                try:
                    callables.append((ep.name, ep.load()))
                except Exception as e:
                    logger.error("Failed to load extension entry point '%s': %s", ep.name, e)

        ran = 0
        for name, fn in callables:
            try:
                fn(self)
            except Exception as e:
                logger.error("Extension registrar '%s' failed: %s", name, e)
                continue
            ran += 1
        return ran

    # ----- Cache -----

    def _load_from_cache(self) -> None:
        payload = self._cache.load()
        if payload is None:
            return
        try:
            index = UnifiedIndex.from_dict(payload["index"])
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Ignoring unreadable registry cache entry: %s", e)
            return
        with self._write_lock:
            self._index = index
            self._extensions = ExtensionDirectory.from_dict(payload["extensions"])
            self._loaded_from_cache = True
        logger.debug("Registry seeded from cache with %d resources", index.count())

    def invalidate_cache(self) -> None:
        """Delete the cached index. The in-memory index is left untouched."""
        self._cache.invalidate()

    def on_invalidation_event(self, event: InvalidationEvent | str | None = None) -> int:
        """Clear the cache and rebuild synchronously.

        Integrations call this on plugin activation or deactivation, theme
        switches, package upgrades, or after registering extensions.

        Returns:
            Number of resources indexed by the rebuild.
        """
        if event is not None and not isinstance(event, InvalidationEvent):
            try:
                event = InvalidationEvent(event)
            except ValueError:
                raise InvalidInputError(message=f"Invalid invalidation event: {event!r}") from None
        logger.info("Rebuilding registry after %s", event.value if event else "invalidation")
        self.invalidate_cache()
        self._trigger_event("invalidate", event)
        return self.build()

    # ----- Event System -----

    def on(self, event: str, callback: Callable[..., Any]) -> None:
        """Register an event callback.

        Args:
            event: ``'build'`` (called with the new UnifiedIndex) or
                ``'invalidate'`` (called with the InvalidationEvent or None).
            callback: Callable to invoke on the event.

        Raises:
            InvalidInputError: If event name is invalid.
        """
        with self._write_lock:
            if event not in self._callbacks:
                raise InvalidInputError(message=f"Invalid event: {event}. Must be one of {', '.join(REGISTRY_EVENTS)}")
            self._callbacks[event].append(callback)

    def _trigger_event(self, event: str, payload: Any) -> None:
        """Trigger all callbacks for an event. Errors are logged and swallowed."""
        with self._write_lock:
            callbacks = list(self._callbacks.get(event, []))
        for cb in callbacks:
            try:
                cb(payload)
            except Exception as e:
                logger.error("Callback error for event '%s': %s", event, e)
