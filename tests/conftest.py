"""Shared fixtures: on-disk theme, extension and core layouts under tmp_path."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml

from layoutkit.cache import MemoryCacheStore
from layoutkit.registry.registry import Registry


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class LayoutBuilder:
    """Writes resource files in the layouts the registry understands."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.theme = root / "theme"
        self.core = root / "core" / "sections"
        self.theme.mkdir(parents=True)

    # -- theme (split layout) --

    def theme_section(
        self, name: str, meta: dict[str, Any] | None = None, *, schema: bool = True, content: bool = True
    ) -> None:
        if schema:
            schemas = self.theme / "schemas"
            schemas.mkdir(parents=True, exist_ok=True)
            (schemas / f"{name}.yaml").write_text(yaml.dump(meta or {}))
        if content:
            views = self.theme / "views" / "sections"
            views.mkdir(parents=True, exist_ok=True)
            (views / f"{name}.twig").write_text(f"<section>{name}</section>")

    def theme_template(self, name: str, doc: dict[str, Any] | None = None) -> Path:
        templates = self.theme / "templates"
        templates.mkdir(parents=True, exist_ok=True)
        path = templates / f"{name}.json"
        path.write_text(json.dumps(doc if doc is not None else {"sections": {}}))
        return path

    def theme_snippet(self, name: str) -> Path:
        snippets = self.theme / "views" / "snippets"
        snippets.mkdir(parents=True, exist_ok=True)
        path = snippets / f"{name}.twig"
        path.write_text(f"{{# {name} #}}")
        return path

    # -- consolidated layout --

    def folder_section(
        self,
        sections_root: Path,
        name: str,
        meta: dict[str, Any] | None = None,
        *,
        schema: bool = True,
        content: bool = True,
    ) -> Path:
        folder = sections_root / name
        folder.mkdir(parents=True, exist_ok=True)
        if schema:
            (folder / "schema.yaml").write_text(yaml.dump(meta or {}))
        if content:
            (folder / f"{name}.twig").write_text(f"<section>{name}</section>")
        return folder

    def core_section(self, name: str, meta: dict[str, Any] | None = None) -> Path:
        return self.folder_section(self.core, name, meta)

    def extension_dir(self, ext_id: str) -> Path:
        path = self.root / "extensions" / ext_id
        path.mkdir(parents=True, exist_ok=True)
        return path


@pytest.fixture
def layout(tmp_path: Path) -> LayoutBuilder:
    return LayoutBuilder(tmp_path)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache_store(clock: FakeClock) -> MemoryCacheStore:
    return MemoryCacheStore(clock=clock)


@pytest.fixture
def make_registry(layout: LayoutBuilder, cache_store: MemoryCacheStore):
    """Factory for registries over the fixture layout sharing one cache store."""

    def _make(**kwargs: Any) -> Registry:
        kwargs.setdefault("theme_dir", str(layout.theme))
        kwargs.setdefault("core_dir", str(layout.core))
        kwargs.setdefault("cache_store", cache_store)
        return Registry(**kwargs)

    return _make
