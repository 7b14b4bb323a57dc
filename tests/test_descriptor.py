"""Tests for mirari.core.descriptor module."""

from pathlib import Path

import pytest

from mirari.core.config import parse_key_values
from mirari.core.descriptor import BASE_DEPENDENCY, BuildDescriptor
from mirari.errors import MirariError


def _descriptor(tmp_path: Path, *lines: str) -> BuildDescriptor:
    return BuildDescriptor.from_pairs(parse_key_values(lines), "www", tmp_path)


class TestBuildDescriptor:
    """Tests for BuildDescriptor class."""

    def test_depends_last_line_first(self, tmp_path: Path):
        """Test dependency order across and within lines."""
        descriptor = _descriptor(tmp_path, "depends: a, b", "depends: c")
        assert descriptor.depends == ["c", "a", "b"]
        assert descriptor.build_depends == [BASE_DEPENDENCY, "c", "a", "b"]

    def test_packages_last_line_first(self, tmp_path: Path):
        """Test package order across and within lines."""
        descriptor = _descriptor(tmp_path, "packages: x", "packages: y, z")
        assert descriptor.packages == ["y", "z", "x"]

    def test_base_dependency_always_present(self, tmp_path: Path):
        """Test that mirage is listed even with no depends lines."""
        descriptor = _descriptor(tmp_path, "main-ip: f")
        assert descriptor.depends == []
        assert descriptor.build_depends == ["mirage"]
        assert "  buildDepends: mirage\n" in descriptor.render()

    def test_empty_depends_item_is_kept(self, tmp_path: Path):
        """Test that a bare depends line contributes an empty item."""
        descriptor = _descriptor(tmp_path, "depends:")
        assert descriptor.depends == [""]
        assert "  buildDepends: mirage, \n" in descriptor.render()

    def test_render(self, tmp_path: Path):
        """Test the full descriptor text."""
        descriptor = _descriptor(tmp_path, "depends: cohttp.mirage, uri")
        assert descriptor.render() == (
            "obuild-ver: 1\n"
            "name: www\n"
            "version: 0.0.0\n"
            "\n"
            "executable www\n"
            "  main: main.ml\n"
            "  buildDepends: mirage, cohttp.mirage, uri\n"
            "  pp: camlp4o\n"
        )

    def test_write(self, tmp_path: Path):
        """Test writing main.obuild next to the config."""
        descriptor = _descriptor(tmp_path, "depends: a")
        (tmp_path / "main.obuild").write_text("old")
        path = descriptor.write()
        assert path == tmp_path / "main.obuild"
        assert path.read_text().startswith("obuild-ver: 1\n")

    def test_write_failure(self, tmp_path: Path):
        """Test that an unwritable descriptor path is a MirariError."""
        (tmp_path / "main.obuild").mkdir()
        with pytest.raises(MirariError) as exc_info:
            _descriptor(tmp_path, "depends: a").write()
        assert "Cannot write" in str(exc_info.value)

    def test_to_dict(self, tmp_path: Path):
        """Test structured view of the descriptor."""
        data = _descriptor(tmp_path, "depends: a", "packages: p").to_dict()
        assert data == {
            "name": "www",
            "depends": ["a"],
            "packages": ["p"],
            "build_depends": ["mirage", "a"],
        }
