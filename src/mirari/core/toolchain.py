"""
Names of the external tools mirari drives.

Each tool can be overridden through an environment variable, so a
toolchain installed under a different name (or a wrapper script) can be
used without changing the configuration file.
"""

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

# Environment variable overriding each Toolchain field
ENV_OVERRIDES = {
    "crunch": "MIRARI_CRUNCH",
    "opam": "MIRARI_OPAM",
    "obuild": "MIRARI_OBUILD",
    "mir_build": "MIRARI_MIR_BUILD",
}


@dataclass(frozen=True)
class Toolchain:
    """External tools used by the pipeline."""

    # Embeds a directory into a generated OCaml module
    crunch: str = "mir-crunch"

    # Package installer
    opam: str = "opam"

    # Build-configure and build tool
    obuild: str = "obuild"

    # Platform image packaging tool (Xen only)
    mir_build: str = "mir-build"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Toolchain":
        """
        Resolve tool names from the environment.

        An MIRARI_* variable takes priority over the default name.
        """
        if environ is None:
            environ = os.environ
        overrides = {}
        for attr, var in ENV_OVERRIDES.items():
            value = environ.get(var)
            if value:
                overrides[attr] = value
        return cls(**overrides)

    def validate(self) -> list[str]:
        """
        Validate the toolchain.

        Returns:
            List of validation error messages (empty if valid).
        """
        errors = []
        for f in fields(self):
            value = getattr(self, f.name)
            if not value or not value.strip():
                errors.append(f"Tool '{f.name}' has an empty command name.")
        return errors
