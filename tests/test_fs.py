"""Tests for the LocalFileSystem capability."""

from __future__ import annotations

from pathlib import Path

from layoutkit.fs import FileSystem, LocalFileSystem


class TestLocalFileSystem:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(LocalFileSystem(), FileSystem)

    def test_exists_and_is_dir(self, tmp_path: Path) -> None:
        fs = LocalFileSystem()
        (tmp_path / "a.twig").write_text("")
        assert fs.exists(str(tmp_path / "a.twig"))
        assert not fs.is_dir(str(tmp_path / "a.twig"))
        assert fs.is_dir(str(tmp_path))
        assert not fs.exists(str(tmp_path / "missing"))

    def test_read_bytes(self, tmp_path: Path) -> None:
        (tmp_path / "a.twig").write_bytes(b"<p>hi</p>")
        assert LocalFileSystem().read_bytes(str(tmp_path / "a.twig")) == b"<p>hi</p>"

    def test_read_missing_returns_none(self, tmp_path: Path) -> None:
        assert LocalFileSystem().read_bytes(str(tmp_path / "missing")) is None

    def test_list_dir_pattern_sorted(self, tmp_path: Path) -> None:
        for name in ("b.twig", "a.twig", "c.json"):
            (tmp_path / name).write_text("")
        listed = LocalFileSystem().list_dir(str(tmp_path), "*.twig")
        assert listed == [str(tmp_path / "a.twig"), str(tmp_path / "b.twig")]

    def test_list_dir_default_pattern_includes_directories(self, tmp_path: Path) -> None:
        (tmp_path / "hero").mkdir()
        (tmp_path / "x.json").write_text("")
        assert LocalFileSystem().list_dir(str(tmp_path)) == [str(tmp_path / "hero"), str(tmp_path / "x.json")]

    def test_list_missing_dir_is_empty(self, tmp_path: Path) -> None:
        assert LocalFileSystem().list_dir(str(tmp_path / "missing")) == []
