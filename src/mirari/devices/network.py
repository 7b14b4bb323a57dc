"""
Network device: DHCP or a static IPv4 configuration.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from mirari.core.config import KeyValue, lookup
from mirari.core.source import Fragment, ocaml_string
from mirari.devices.base import Device

DEFAULT_ADDRESS = "10.0.0.2"
DEFAULT_NETMASK = "255.255.255.0"
DEFAULT_GATEWAY = "10.0.0.1"


@dataclass(frozen=True)
class Dhcp:
    """Obtain the address through DHCP."""

    kind = "dhcp"


@dataclass(frozen=True)
class StaticIp:
    """Fixed IPv4 address, netmask and gateway."""

    address: str = DEFAULT_ADDRESS
    netmask: str = DEFAULT_NETMASK
    gateway: str = DEFAULT_GATEWAY

    kind = "static"


NetworkConfig = Union[Dhcp, StaticIp]


def _parse_address(literal: str) -> str:
    # A bad literal fails when the generated program starts, not here
    return f"get (Net.Nettypes.ipv4_addr_of_string {ocaml_string(literal)})"


@dataclass
class NetworkDevice(Device):
    """Network configuration bound to ``ip`` in the generated program."""

    config: NetworkConfig = field(default_factory=StaticIp)

    namespace = "ip"

    @classmethod
    def create(cls, pairs: list[KeyValue], base_dir: Path) -> "NetworkDevice":
        if lookup(pairs, "use-dhcp") == "true":
            return cls(config=Dhcp())

        return cls(
            config=StaticIp(
                address=lookup(pairs, "address") or DEFAULT_ADDRESS,
                netmask=lookup(pairs, "netmask") or DEFAULT_NETMASK,
                gateway=lookup(pairs, "gateway") or DEFAULT_GATEWAY,
            )
        )

    def fragment(self) -> Optional[Fragment]:
        if isinstance(self.config, Dhcp):
            return Fragment(name="network", lines=["let ip = `DHCP"])

        ip = self.config
        return Fragment(
            name="network",
            lines=[
                'let get = function Some x -> x | None -> failwith "Bad IP!"',
                "let ip = `IPv4 (",
                f"  {_parse_address(ip.address)},",
                f"  {_parse_address(ip.netmask)},",
                f"  [{_parse_address(ip.gateway)}]",
                ")",
            ],
        )

    def to_dict(self) -> dict[str, Any]:
        if isinstance(self.config, Dhcp):
            return {"mode": Dhcp.kind}
        return {
            "mode": StaticIp.kind,
            "address": self.config.address,
            "netmask": self.config.netmask,
            "gateway": self.config.gateway,
        }
