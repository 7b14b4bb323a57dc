"""
Abstract base class for device implementations.

A device is built from the key/value pairs under its namespace prefix and
contributes one fragment to the generated ``main.ml``.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from mirari.core.config import KeyValue
from mirari.core.runner import Runner
from mirari.core.source import Fragment
from mirari.core.toolchain import Toolchain


class Device(ABC):
    """Abstract base class for device implementations."""

    # Namespace prefix of the device's keys (e.g. 'fs' for 'fs-<name>')
    namespace: str = "base"

    @classmethod
    @abstractmethod
    def create(cls, pairs: list[KeyValue], base_dir: Path) -> "Device":
        """
        Build the device from its namespaced pairs.

        Args:
            pairs: Pairs under this device's namespace, prefix stripped.
            base_dir: Directory holding the configuration file.

        Raises:
            ConfigError: If the pairs do not describe a valid device.
        """
        pass

    @abstractmethod
    def fragment(self) -> Optional[Fragment]:
        """
        Source fragment for ``main.ml``.

        Returns:
            The fragment, or None if the device emits nothing.
        """
        pass

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        pass

    def prepare(self, runner: Runner, toolchain: Toolchain) -> None:
        """Pre-build action run after ``main.ml`` is generated."""
        pass

    def generated_files(self) -> list[Path]:
        """Files produced by :meth:`prepare`, removed by ``clean``."""
        return []
