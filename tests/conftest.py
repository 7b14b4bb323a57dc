"""Pytest configuration and fixtures for mirari tests."""

from pathlib import Path
from typing import Callable, Optional

import pytest

from mirari.core.runner import Runner
from mirari.errors import CommandError


class RecordingRunner(Runner):
    """Runner that records commands instead of executing them.

    Args:
        fail_on: Substring; the first command containing it fails.
        return_code: Exit code reported for the failing command.
        missing_tools: Tools that ``which`` reports as absent.
        on_run: Optional callback invoked with each command, used to
            simulate tool side effects (e.g. obuild creating dist/setup).
    """

    def __init__(
        self,
        fail_on: Optional[str] = None,
        return_code: int = 2,
        missing_tools: tuple[str, ...] = (),
        on_run: Optional[Callable[[str], None]] = None,
    ):
        self.fail_on = fail_on
        self.return_code = return_code
        self.missing_tools = set(missing_tools)
        self.on_run = on_run
        self.commands: list[str] = []
        self.cwds: list[Path] = []

    def run(self, command: str) -> None:
        self.commands.append(command)
        self.cwds.append(Path.cwd())
        if self.fail_on is not None and self.fail_on in command:
            raise CommandError(command, self.return_code)
        if self.on_run is not None:
            self.on_run(command)

    def which(self, tool: str) -> Optional[str]:
        if tool in self.missing_tools:
            return None
        return f"/usr/bin/{tool}"

    def commands_starting_with(self, prefix: str) -> list[str]:
        return [c for c in self.commands if c.startswith(prefix)]


@pytest.fixture
def runner() -> RecordingRunner:
    """Recording runner that accepts every command."""
    return RecordingRunner()


@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    """Directory holding the configuration file under test."""
    path = tmp_path / "app"
    path.mkdir()
    return path


@pytest.fixture
def write_config(app_dir: Path) -> Callable[..., Path]:
    """Factory writing a config file into app_dir and returning its path."""

    def _write(text: str, name: str = "www.conf") -> Path:
        path = app_dir / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def minimal_config(write_config) -> Path:
    """Config with only the required entry point."""
    return write_config("main-ip: Handler.main\n")


@pytest.fixture
def http_config(write_config, app_dir: Path) -> Path:
    """Config exercising every device and both list keys."""
    (app_dir / "static").mkdir()
    return write_config(
        "fs-static: static\n"
        "ip-address: 192.168.1.5\n"
        "http-port: 8080\n"
        "http-address: *\n"
        "main-http: Dispatch.t\n"
        "depends: cohttp.mirage, uri\n"
        "packages: cohttp, uri\n"
    )


@pytest.fixture
def make_runner() -> Callable[..., RecordingRunner]:
    """Factory for RecordingRunner with failure or missing-tool settings."""
    return RecordingRunner
