"""TTL cache stores and the registry cache layer built on them."""

from __future__ import annotations

import json
import logging
import os
import re
import threading
import time
from pathlib import Path
from typing import Any, Callable, Protocol, runtime_checkable

__all__ = [
    "CacheStore",
    "MemoryCacheStore",
    "FileCacheStore",
    "RegistryCache",
    "DEFAULT_CACHE_KEY",
    "DEFAULT_CACHE_TTL",
]

logger = logging.getLogger(__name__)

DEFAULT_CACHE_KEY = "layoutkit_registry_index_v1"
DEFAULT_CACHE_TTL = 3600

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for a key-value store with per-entry expiry."""

    def get(self, key: str) -> Any | None:
        """Return the stored value, or None when absent or expired."""
        ...

    def set(self, key: str, value: Any, ttl: int) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key``. Missing keys are ignored."""
        ...


class MemoryCacheStore:
    """In-process TTL store.

    Values are kept by reference; callers that need isolation should store
    plain serializable data, which is what :class:`RegistryCache` does.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl: int) -> None:
        with self._lock:
            self._entries[key] = (self._clock() + ttl, value)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)


class FileCacheStore:
    """TTL store keeping one JSON document per key in a directory.

    Several processes can share the same directory; the last writer wins.
    """

    def __init__(self, directory: str | Path, clock: Callable[[], float] = time.time) -> None:
        self._dir = Path(directory)
        self._clock = clock

    def _path_for(self, key: str) -> Path:
        return self._dir / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"

    def get(self, key: str) -> Any | None:
        path = self._path_for(key)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Cannot read cache file %s: %s", path, e)
            return None

        try:
            doc = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Corrupt cache file %s: %s", path, e)
            return None

        if not isinstance(doc, dict) or not isinstance(doc.get("expires_at"), (int, float)):
            logger.warning("Malformed cache file %s, ignoring", path)
            return None
        if self._clock() >= doc["expires_at"]:
            self.delete(key)
            return None
        return doc.get("value")

    def set(self, key: str, value: Any, ttl: int) -> None:
        path = self._path_for(key)
        doc = {"expires_at": self._clock() + ttl, "value": value}
        tmp = path.with_suffix(".tmp")
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(doc), encoding="utf-8")
            os.replace(tmp, path)
        except OSError as e:
            logger.warning("Cannot write cache file %s: %s", path, e)
            if tmp.exists():
                tmp.unlink()

    def delete(self, key: str) -> None:
        try:
            self._path_for(key).unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Cannot delete cache file %s: %s", self._path_for(key), e)


class RegistryCache:
    """Persists the registry payload (index + extension configs) in a CacheStore."""

    def __init__(
        self,
        store: CacheStore,
        key: str = DEFAULT_CACHE_KEY,
        ttl: int = DEFAULT_CACHE_TTL,
    ) -> None:
        self.store = store
        self.key = key
        self.ttl = ttl

    def load(self) -> dict[str, Any] | None:
        """Return ``{"index": ..., "extensions": ...}`` or None on a miss."""
        payload = self.store.get(self.key)
        if payload is None:
            logger.debug("Registry cache miss for key '%s'", self.key)
            return None
        if (
            not isinstance(payload, dict)
            or not isinstance(payload.get("index"), dict)
            or not isinstance(payload.get("extensions"), dict)
        ):
            logger.warning("Discarding malformed registry cache entry '%s'", self.key)
            return None
        return payload

    def save(self, index: dict[str, Any], extensions: dict[str, Any]) -> None:
        self.store.set(self.key, {"index": index, "extensions": extensions}, self.ttl)

    def invalidate(self) -> None:
        self.store.delete(self.key)
        logger.debug("Registry cache '%s' invalidated", self.key)
