"""
Filesystem device: directories embedded into the program with mir-crunch.
"""

import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from mirari.core.config import KeyValue
from mirari.core.runner import Runner
from mirari.core.source import Fragment
from mirari.core.toolchain import Toolchain
from mirari.devices.base import Device
from mirari.errors import ConfigError


@dataclass(frozen=True)
class FilesystemEntry:
    """One ``fs-<name>: <relative-path>`` directive."""

    name: str
    path: str

    @property
    def module_file(self) -> str:
        return f"filesystem_{self.name}.ml"

    @property
    def module_name(self) -> str:
        return f"Filesystem_{self.name}"


@dataclass
class FilesystemDevice(Device):
    """Embedded filesystems, one generated module per entry."""

    base_dir: Path
    entries: list[FilesystemEntry] = field(default_factory=list)

    namespace = "fs"

    @classmethod
    def create(cls, pairs: list[KeyValue], base_dir: Path) -> "FilesystemDevice":
        entries = [FilesystemEntry(name=p.key, path=p.value) for p in pairs]
        device = cls(base_dir=base_dir, entries=entries)
        device.validate()
        return device

    def source_dir(self, entry: FilesystemEntry) -> Path:
        return self.base_dir / entry.path

    def module_path(self, entry: FilesystemEntry) -> Path:
        return self.base_dir / entry.module_file

    def validate(self) -> None:
        """
        Check that every entry's directory exists.

        Raises:
            ConfigError: For the first entry whose directory is missing.
        """
        for entry in self.entries:
            path = self.source_dir(entry)
            if not path.exists():
                raise ConfigError(f"The directory {path} does not exist.")

    def fragment(self) -> Optional[Fragment]:
        return Fragment(
            name="filesystem",
            lines=[f"open {entry.module_name}" for entry in self.entries],
        )

    def prepare(self, runner: Runner, toolchain: Toolchain) -> None:
        """Run mir-crunch once per entry."""
        if not self.entries:
            return
        self.validate()
        runner.require(toolchain.crunch)
        for entry in self.entries:
            output = self.module_path(entry)
            print(f"Creating {output}.", flush=True)
            command = " ".join(
                [
                    toolchain.crunch,
                    "-name",
                    shlex.quote(entry.name),
                    shlex.quote(str(self.source_dir(entry))),
                    ">",
                    shlex.quote(str(output)),
                ]
            )
            runner.run(command)

    def generated_files(self) -> list[Path]:
        return [self.module_path(entry) for entry in self.entries]

    def to_dict(self) -> dict[str, Any]:
        return {
            "entries": [
                {
                    "name": entry.name,
                    "path": entry.path,
                    "module": entry.module_name,
                }
                for entry in self.entries
            ]
        }
