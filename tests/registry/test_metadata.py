"""Tests for section metadata parsing and defaulting."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import yaml

from layoutkit.fs import LocalFileSystem
from layoutkit.registry.metadata import parse_metadata, section_fields


@pytest.fixture
def fs() -> LocalFileSystem:
    return LocalFileSystem()


# === parse_metadata() ===


class TestParseMetadata:
    def test_valid_yaml(self, fs: LocalFileSystem, tmp_path: Path) -> None:
        meta = tmp_path / "hero.yaml"
        meta.write_text(yaml.dump({"name": "Hero", "category": "headers", "settings": [{"id": "title"}]}))
        result = parse_metadata(fs, str(meta))
        assert result["name"] == "Hero"
        assert result["category"] == "headers"
        assert result["settings"] == [{"id": "title"}]

    def test_missing_file_returns_empty(self, fs: LocalFileSystem, tmp_path: Path) -> None:
        assert parse_metadata(fs, str(tmp_path / "missing.yaml")) == {}

    def test_empty_file_returns_empty(self, fs: LocalFileSystem, tmp_path: Path) -> None:
        meta = tmp_path / "empty.yaml"
        meta.write_text("")
        assert parse_metadata(fs, str(meta)) == {}

    def test_invalid_yaml_returns_empty_and_logs(
        self, fs: LocalFileSystem, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        meta = tmp_path / "bad.yaml"
        meta.write_text("{{invalid yaml:")
        with caplog.at_level(logging.WARNING, logger="layoutkit.registry.metadata"):
            assert parse_metadata(fs, str(meta)) == {}
        assert "Invalid metadata file" in caplog.text

    def test_non_mapping_returns_empty(self, fs: LocalFileSystem, tmp_path: Path) -> None:
        meta = tmp_path / "list.yaml"
        meta.write_text("- a\n- b\n")
        assert parse_metadata(fs, str(meta)) == {}

    def test_python_tags_are_not_executed(self, fs: LocalFileSystem, tmp_path: Path) -> None:
        meta = tmp_path / "evil.yaml"
        meta.write_text("name: !!python/object/apply:os.system ['echo hi']\n")
        assert parse_metadata(fs, str(meta)) == {}


# === section_fields() ===


class TestSectionFields:
    def test_defaults(self) -> None:
        assert section_fields({}, "hero-banner") == {
            "display_name": "Hero banner",
            "category": "general",
            "icon": "dashicons-layout",
            "preview_image": None,
        }

    def test_declared_values(self) -> None:
        fields = section_fields(
            {"name": "Hero", "category": "headers", "icon": "dashicons-star", "preview": "hero.png"}, "hero"
        )
        assert fields == {
            "display_name": "Hero",
            "category": "headers",
            "icon": "dashicons-star",
            "preview_image": "hero.png",
        }

    def test_unknown_keys_ignored(self) -> None:
        fields = section_fields({"name": "Hero", "blocks": []}, "hero")
        assert "blocks" not in fields

    def test_empty_name_uses_default(self) -> None:
        assert section_fields({"name": ""}, "cta")["display_name"] == "Cta"
