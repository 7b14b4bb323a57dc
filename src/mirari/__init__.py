"""
mirari - Generate and build Mirage applications from a small config file.

This package provides tools to:
- Parse a ``<key>: <value>`` configuration into devices (filesystem,
  network, HTTP listener, entry point) and a build descriptor
- Generate ``main.ml`` and ``main.obuild`` from those devices
- Run the configure/build pipeline through mir-crunch, opam, obuild and
  mir-build
"""

from mirari.core.project import Project
from mirari.core.pipeline import Pipeline, PipelineState, build, configure
from mirari.errors import MirariError

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Project",
    "Pipeline",
    "PipelineState",
    "configure",
    "build",
    "MirariError",
]
