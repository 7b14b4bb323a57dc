"""Tests for packaging consistency and template inclusion."""

from pathlib import Path

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[no-redef]

import mirari
from mirari.templates import get_obuild_templates_dir


REPO_ROOT = Path(__file__).resolve().parent.parent
PYPROJECT = REPO_ROOT / "pyproject.toml"


class TestVersionConsistency:
    """Ensure __version__ and pyproject.toml stay in sync."""

    def test_version_matches_pyproject(self):
        with open(PYPROJECT, "rb") as f:
            meta = tomllib.load(f)
        assert mirari.__version__ == meta["project"]["version"]


class TestTemplateInclusion:
    """Ensure template data files are present in the source tree."""

    def test_obuild_template_exists(self):
        assert (get_obuild_templates_dir() / "main.obuild.template").is_file()


class TestEntryPoint:
    """Ensure the CLI entry point is importable."""

    def test_cli_main_importable(self):
        from mirari.cli import main  # noqa: F401

    def test_script_declared(self):
        with open(PYPROJECT, "rb") as f:
            meta = tomllib.load(f)
        assert meta["project"]["scripts"]["mirari"] == "mirari.cli:main"
