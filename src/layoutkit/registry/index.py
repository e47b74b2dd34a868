"""Unified kind -> source -> id index with priority-ordered lookup."""

from __future__ import annotations

import json
from typing import Any, Iterator

from layoutkit.errors import InvalidInputError
from layoutkit.registry.types import (
    CORE_SOURCE,
    DEFAULT_CATEGORY,
    THEME_SOURCE,
    ResourceKind,
    ResourceRecord,
)

__all__ = ["UnifiedIndex", "coerce_kind"]


def coerce_kind(kind: ResourceKind | str) -> ResourceKind:
    """Accept a ResourceKind or its string value."""
    if isinstance(kind, ResourceKind):
        return kind
    try:
        return ResourceKind(kind)
    except ValueError:
        valid = ", ".join(k.value for k in ResourceKind)
        raise InvalidInputError(message=f"Invalid resource kind: {kind!r}. Must be one of: {valid}") from None


class UnifiedIndex:
    """Three independent mappings, one per kind, each keyed by source then id.

    Sources keep the order in which they were first written, which is the
    build order: theme, extensions in registration order, core.
    """

    def __init__(self) -> None:
        self._data: dict[ResourceKind, dict[str, dict[str, ResourceRecord]]] = {kind: {} for kind in ResourceKind}

    def add(self, record: ResourceRecord) -> None:
        self._data[record.kind].setdefault(record.source, {})[record.id] = record

    def sources(self, kind: ResourceKind | str) -> list[str]:
        return list(self._data[coerce_kind(kind)].keys())

    def _tiers(self, kind: ResourceKind) -> Iterator[dict[str, ResourceRecord]]:
        """Slices of ``kind`` in resolution order: theme, other sources, core."""
        slices = self._data[kind]
        if THEME_SOURCE in slices:
            yield slices[THEME_SOURCE]
        for source, records in slices.items():
            if source not in (THEME_SOURCE, CORE_SOURCE):
                yield records
        if CORE_SOURCE in slices:
            yield slices[CORE_SOURCE]

    def resolve(self, kind: ResourceKind | str, resource_id: str) -> ResourceRecord | None:
        """Return the winning record for ``resource_id`` or None."""
        for records in self._tiers(coerce_kind(kind)):
            record = records.get(resource_id)
            if record is not None:
                return record
        return None

    def list_by_source(self, kind: ResourceKind | str, source: str) -> list[ResourceRecord]:
        return list(self._data[coerce_kind(kind)].get(source, {}).values())

    def list_by_category(self, kind: ResourceKind | str, category: str) -> list[ResourceRecord]:
        return [
            record
            for records in self._data[coerce_kind(kind)].values()
            for record in records.values()
            if (record.category or DEFAULT_CATEGORY) == category
        ]

    def list_all(self, kind: ResourceKind | str) -> list[ResourceRecord]:
        """Flatten every source into one entry per id.

        Later sources overwrite earlier ones, so on an id collision the
        entry kept here is usually NOT the one :meth:`resolve` returns.
        Use :meth:`resolve` when priority matters.
        """
        merged: dict[str, ResourceRecord] = {}
        for records in self._data[coerce_kind(kind)].values():
            merged.update(records)
        return list(merged.values())

    def count(self, kind: ResourceKind | str | None = None) -> int:
        kinds = list(ResourceKind) if kind is None else [coerce_kind(kind)]
        return sum(len(records) for k in kinds for records in self._data[k].values())

    # ----- Serialization -----

    def to_dict(self) -> dict[str, Any]:
        return {
            kind.value: {
                source: {rid: record.to_dict() for rid, record in records.items()}
                for source, records in self._data[kind].items()
            }
            for kind in ResourceKind
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UnifiedIndex:
        index = cls()
        for kind in ResourceKind:
            slices = data.get(kind.value) or {}
            if not isinstance(slices, dict):
                raise ValueError(f"'{kind.value}' is not a mapping of sources")
            for source, records in slices.items():
                if not isinstance(records, dict):
                    raise ValueError(f"'{kind.value}' slice '{source}' is not a mapping")
                for raw in records.values():
                    index.add(ResourceRecord.from_dict(raw))
        return index

    def dumps(self) -> str:
        """Canonical JSON form of the index."""
        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))
