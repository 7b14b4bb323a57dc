"""
Device implementations for mirari.

Each device (filesystem, network, HTTP listener, entry point) reads the
keys under its namespace prefix and contributes one fragment to the
generated ``main.ml``.

The DEVICE_REGISTRY is ordered: fragments are emitted in registry order,
so later devices may refer to bindings made by earlier ones (the entry
point uses ``ip``, ``listen_port`` and ``listen_address``).
"""

from pathlib import Path
from typing import Iterable, Type

from mirari.core.config import KeyValue, namespace
from mirari.devices.base import Device
from mirari.devices.filesystem import FilesystemDevice, FilesystemEntry
from mirari.devices.network import NetworkDevice, Dhcp, StaticIp
from mirari.devices.http import HttpDevice, HttpListener
from mirari.devices.entrypoint import EntryPointDevice, IpMain, HttpMain


# Registry mapping namespace prefixes to device classes, in emission order.
# To add a new device:
#   1. Create devices/newdevice.py with a class extending Device
#   2. Import it here
#   3. Add an entry to DEVICE_REGISTRY at the position its fragment belongs
DEVICE_REGISTRY: dict[str, Type[Device]] = {
    FilesystemDevice.namespace: FilesystemDevice,
    NetworkDevice.namespace: NetworkDevice,
    HttpDevice.namespace: HttpDevice,
    EntryPointDevice.namespace: EntryPointDevice,
}


def create_devices(pairs: Iterable[KeyValue], base_dir: Path) -> list[Device]:
    """
    Build every registered device from a config's key/value pairs.

    Args:
        pairs: All key/value pairs of the config file, in file order.
        base_dir: Directory holding the config file.

    Returns:
        One device per registry entry, in emission order.

    Raises:
        ConfigError: If any device's keys are invalid.
    """
    pairs = list(pairs)
    return [
        device_cls.create(namespace(pairs, prefix), base_dir)
        for prefix, device_cls in DEVICE_REGISTRY.items()
    ]


__all__ = [
    "Device",
    "FilesystemDevice",
    "FilesystemEntry",
    "NetworkDevice",
    "Dhcp",
    "StaticIp",
    "HttpDevice",
    "HttpListener",
    "EntryPointDevice",
    "IpMain",
    "HttpMain",
    "DEVICE_REGISTRY",
    "create_devices",
]
