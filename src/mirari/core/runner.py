"""
Execution of external commands.

Every tool mirari drives (mir-crunch, opam, obuild, mir-build) goes
through a Runner, so the pipeline can be exercised with a recording
runner instead of real processes.
"""

import os
import shutil
import subprocess
import sys
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from mirari.errors import CommandError, ToolNotFoundError


@contextmanager
def in_dir(directory: Path) -> Iterator[Path]:
    """
    Run the body with ``directory`` as the working directory.

    The previous working directory is restored on exit, whether the body
    returns or raises.
    """
    previous = Path.cwd()
    directory = Path(directory)
    changed = directory.resolve() != previous.resolve()
    if changed:
        os.chdir(directory)
    try:
        yield directory
    finally:
        if changed:
            os.chdir(previous)


class Runner(ABC):
    """Interface for running external commands."""

    @abstractmethod
    def run(self, command: str) -> None:
        """
        Run a shell command and wait for it to finish.

        Raises:
            CommandError: If the command exits with a non-zero status.
        """
        pass

    @abstractmethod
    def which(self, tool: str) -> Optional[str]:
        """Return the path of ``tool`` on the search path, or None."""
        pass

    def require(self, tool: str) -> None:
        """
        Check that ``tool`` can be found on the search path.

        Raises:
            ToolNotFoundError: If the tool is missing.
        """
        if self.which(tool) is None:
            raise ToolNotFoundError(f"{tool} is not installed.")

    def in_dir(self, directory: Path):
        """Scoped working directory change; see :func:`in_dir`."""
        return in_dir(directory)


class ProcessRunner(Runner):
    """Runner backed by subprocess.

    Commands inherit stdout/stderr so tool output reaches the user as it
    is produced.
    """

    def __init__(self, echo: bool = True):
        self.echo = echo

    def run(self, command: str) -> None:
        if self.echo:
            print(f"+ Executing: {command}", flush=True)
        # Keep our own output ahead of the child's
        sys.stdout.flush()
        result = subprocess.run(command, shell=True)
        if result.returncode != 0:
            raise CommandError(command, result.returncode)

    def which(self, tool: str) -> Optional[str]:
        return shutil.which(tool)
