"""
Project model for mirari.

A Project is everything derived from one configuration file: its devices
in emission order and its build descriptor. It is built once per
invocation and not modified afterwards.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mirari.core.config import RawConfig
from mirari.core.descriptor import MAIN_SOURCE_FILE, BuildDescriptor
from mirari.core.source import SourceFile
from mirari.devices import Device, create_devices


@dataclass
class Project:
    """Devices and build descriptor resolved from a configuration file."""

    config: RawConfig
    descriptor: BuildDescriptor
    devices: list[Device] = field(default_factory=list)

    @classmethod
    def from_file(cls, config_file: Path | str) -> "Project":
        """
        Load and resolve a configuration file.

        Args:
            config_file: Path to the configuration file.

        Returns:
            The resolved project.

        Raises:
            ConfigError: If the file is missing or declares invalid devices.
        """
        config = RawConfig.load(config_file)
        pairs = config.key_values()
        return cls(
            config=config,
            devices=create_devices(pairs, config.base_dir),
            descriptor=BuildDescriptor.from_pairs(
                pairs, config.name, config.base_dir
            ),
        )

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def base_dir(self) -> Path:
        return self.config.base_dir

    @property
    def main_ml(self) -> Path:
        return self.base_dir / MAIN_SOURCE_FILE

    def source(self) -> SourceFile:
        """Assemble the generated source from each device's fragment."""
        source = SourceFile()
        for device in self.devices:
            source.add(device.fragment())
        return source

    def generate(self) -> list[Path]:
        """
        Write ``main.ml`` and ``main.obuild``, replacing previous versions.

        Returns:
            Paths of the written files.
        """
        print(f"Generating {self.main_ml}.", flush=True)
        self.source().write(self.main_ml)

        print(f"Generating {self.descriptor.path}.", flush=True)
        return [self.main_ml, self.descriptor.write()]

    def generated_files(self) -> list[Path]:
        """Every file mirari itself writes for this project."""
        files = [self.main_ml, self.descriptor.path]
        for device in self.devices:
            files.extend(device.generated_files())
        return files

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "config": str(self.config.path),
            "devices": {
                device.namespace: device.to_dict() for device in self.devices
            },
            "descriptor": self.descriptor.to_dict(),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
