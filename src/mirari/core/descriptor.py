"""
Build descriptor (``main.obuild``) for the generated program.
"""

from dataclasses import dataclass, field
from pathlib import Path
from string import Template
from typing import Any, Iterable

from mirari.core.config import KeyValue, values_of
from mirari.errors import MirariError
from mirari.templates import read_template

# Dependency every generated program links against
BASE_DEPENDENCY = "mirage"

DESCRIPTOR_FORMAT_VERSION = 1
DESCRIPTOR_VERSION = "0.0.0"
DESCRIPTOR_FILE = "main.obuild"
MAIN_SOURCE_FILE = "main.ml"


@dataclass
class BuildDescriptor:
    """Package name, dependencies and opam packages declared by a config."""

    name: str
    base_dir: Path
    depends: list[str] = field(default_factory=list)
    packages: list[str] = field(default_factory=list)

    @classmethod
    def from_pairs(
        cls, pairs: Iterable[KeyValue], name: str, base_dir: Path
    ) -> "BuildDescriptor":
        pairs = list(pairs)
        return cls(
            name=name,
            base_dir=base_dir,
            depends=values_of(pairs, "depends"),
            packages=values_of(pairs, "packages"),
        )

    @property
    def path(self) -> Path:
        return self.base_dir / DESCRIPTOR_FILE

    @property
    def build_depends(self) -> list[str]:
        """Declared dependencies with the base dependency in front."""
        return [BASE_DEPENDENCY] + self.depends

    def render(self) -> str:
        template = Template(read_template(f"{DESCRIPTOR_FILE}.template"))
        return template.substitute(
            format_version=DESCRIPTOR_FORMAT_VERSION,
            name=self.name,
            version=DESCRIPTOR_VERSION,
            main=MAIN_SOURCE_FILE,
            build_depends=", ".join(self.build_depends),
        )

    def write(self) -> Path:
        """Write the descriptor next to the config file, replacing it."""
        try:
            self.path.write_text(
                self.render(), encoding="utf-8", errors="surrogateescape"
            )
        except OSError as e:
            raise MirariError(f"Cannot write {self.path}: {e}") from e
        return self.path

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "depends": self.depends,
            "packages": self.packages,
            "build_depends": self.build_depends,
        }
