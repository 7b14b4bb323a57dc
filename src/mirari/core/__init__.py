"""
Core modules for mirari.

Only the leaf modules are re-exported here; the project and pipeline
modules depend on mirari.devices, which in turn builds on these.
"""

from mirari.core.config import KeyValue, RawConfig, namespace, parse_key_values
from mirari.core.descriptor import BuildDescriptor
from mirari.core.runner import ProcessRunner, Runner, in_dir
from mirari.core.source import Fragment, SourceFile
from mirari.core.toolchain import Toolchain

__all__ = [
    "KeyValue",
    "RawConfig",
    "namespace",
    "parse_key_values",
    "BuildDescriptor",
    "ProcessRunner",
    "Runner",
    "in_dir",
    "Fragment",
    "SourceFile",
    "Toolchain",
]
