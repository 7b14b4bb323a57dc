"""Tests for mirari.core.runner module."""

import os
from pathlib import Path

import pytest

from mirari.core.runner import ProcessRunner, in_dir
from mirari.errors import CommandError, ToolNotFoundError


class TestInDir:
    """Tests for the in_dir context manager."""

    def test_changes_and_restores(self, tmp_path: Path):
        """Test that the working directory is changed then restored."""
        before = Path.cwd()
        with in_dir(tmp_path):
            assert Path.cwd().resolve() == tmp_path.resolve()
        assert Path.cwd() == before

    def test_restores_on_error(self, tmp_path: Path):
        """Test that the working directory is restored when the body raises."""
        before = Path.cwd()
        with pytest.raises(RuntimeError):
            with in_dir(tmp_path):
                raise RuntimeError("boom")
        assert Path.cwd() == before

    def test_same_directory(self):
        """Test that entering the current directory is a no-op."""
        before = Path.cwd()
        with in_dir(before):
            assert Path.cwd() == before
        assert Path.cwd() == before

    def test_missing_directory(self, tmp_path: Path):
        """Test that a missing directory fails before the body runs."""
        before = Path.cwd()
        ran = []
        with pytest.raises(OSError):
            with in_dir(tmp_path / "missing"):
                ran.append(True)
        assert ran == []
        assert Path.cwd() == before


@pytest.mark.skipif(os.name != "posix", reason="uses POSIX shell built-ins")
class TestProcessRunner:
    """Tests for ProcessRunner class."""

    def test_success(self, capsys):
        """Test that a zero exit status returns normally."""
        ProcessRunner().run("true")
        assert "+ Executing: true" in capsys.readouterr().out

    def test_failure_carries_command_and_code(self):
        """Test that a non-zero exit raises CommandError."""
        with pytest.raises(CommandError) as exc_info:
            ProcessRunner(echo=False).run("exit 3")
        assert exc_info.value.command == "exit 3"
        assert exc_info.value.return_code == 3
        assert str(exc_info.value) == 'The command "exit 3" exited with code 3.'

    def test_runs_in_current_directory(self, tmp_path: Path):
        """Test that commands see the scoped working directory."""
        runner = ProcessRunner(echo=False)
        with runner.in_dir(tmp_path):
            runner.run("touch marker")
        assert (tmp_path / "marker").is_file()

    def test_which(self):
        """Test tool lookup on PATH."""
        runner = ProcessRunner()
        assert runner.which("sh") is not None
        assert runner.which("surely-not-a-real-tool-xyz") is None

    def test_require(self):
        """Test that a missing tool raises ToolNotFoundError."""
        with pytest.raises(ToolNotFoundError) as exc_info:
            ProcessRunner().require("surely-not-a-real-tool-xyz")
        assert "is not installed" in str(exc_info.value)
