"""
HTTP listener device.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from mirari.core.config import KeyValue, lookup
from mirari.core.source import Fragment, ocaml_string
from mirari.devices.base import Device
from mirari.errors import ConfigError

# http-address value meaning "listen on every interface"
BIND_ALL = "*"

MAX_PORT = 65535


@dataclass(frozen=True)
class HttpListener:
    """Port and optional bind address; None binds all interfaces."""

    port: int
    address: Optional[str] = None


def parse_port(value: str) -> int:
    """
    Parse an ``http-port`` value.

    Raises:
        ConfigError: If the value is not an integer in the TCP port range.
    """
    try:
        port = int(value)
    except ValueError:
        raise ConfigError(f'"{value}" is not a valid port number.') from None
    if not 0 <= port <= MAX_PORT:
        raise ConfigError(f'"{value}" is not a valid port number.')
    return port


@dataclass
class HttpDevice(Device):
    """Optional HTTP listener; present only when port and address are both set."""

    listener: Optional[HttpListener] = None

    namespace = "http"

    @classmethod
    def create(cls, pairs: list[KeyValue], base_dir: Path) -> "HttpDevice":
        port = lookup(pairs, "port")
        address = lookup(pairs, "address")
        if port is None or address is None:
            return cls()

        return cls(
            listener=HttpListener(
                port=parse_port(port),
                address=None if address == BIND_ALL else address,
            )
        )

    def fragment(self) -> Optional[Fragment]:
        if self.listener is None:
            return None

        lines = [f"let listen_port = {self.listener.port}"]
        if self.listener.address is None:
            lines.append("let listen_address = None")
        else:
            lines.append(
                "let listen_address = Net.Nettypes.ipv4_addr_of_string "
                f"{ocaml_string(self.listener.address)}"
            )
        return Fragment(name="http", lines=lines)

    def to_dict(self) -> dict[str, Any]:
        if self.listener is None:
            return {"listener": None}
        return {
            "listener": {
                "port": self.listener.port,
                "address": self.listener.address,
            }
        }
