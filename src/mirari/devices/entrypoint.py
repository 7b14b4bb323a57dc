"""
Entry point device: the ``main`` function of the generated program.

Exactly one of ``main-ip`` and ``main-http`` must be given. The HTTP
flavour serves the named callback with cohttp on the listener declared by
the ``http-*`` keys; the IP flavour hands the configured interface to the
named function.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from mirari.core.config import KeyValue, lookup
from mirari.core.source import Fragment
from mirari.devices.base import Device
from mirari.errors import ConfigError


@dataclass(frozen=True)
class IpMain:
    """``main-ip: <function>``, called as ``<function> mgr interface id``."""

    function: str

    kind = "ip"


@dataclass(frozen=True)
class HttpMain:
    """``main-http: <function>``, used as the cohttp request callback."""

    function: str

    kind = "http"


MainFunction = Union[IpMain, HttpMain]


def _ip_main_lines(main: IpMain) -> list[str]:
    return [
        "let main () =",
        "  Net.Manager.create (fun mgr interface id ->",
        "    Net.Manager.configure interface ip >>",
        f"    {main.function} mgr interface id",
        "  )",
    ]


def _http_main_lines(main: HttpMain) -> list[str]:
    return [
        "let main () =",
        "  let spec = Cohttp_lwt_mirage.Server.({",
        f"    callback    = {main.function};",
        "    conn_closed = (fun _ () -> ());",
        "  }) in",
        "  Net.Manager.create (fun mgr interface id ->",
        '    Printf.eprintf "listening to HTTP on port %d\\n" listen_port;',
        "    Net.Manager.configure interface ip >>",
        "    Cohttp_lwt_mirage.listen mgr (listen_address, listen_port) spec",
        "  )",
    ]


@dataclass
class EntryPointDevice(Device):
    """The program's ``main`` function."""

    main: MainFunction

    namespace = "main"

    @classmethod
    def create(cls, pairs: list[KeyValue], base_dir: Path) -> "EntryPointDevice":
        http = lookup(pairs, HttpMain.kind)
        ip = lookup(pairs, IpMain.kind)

        if http is None and ip is None:
            raise ConfigError(
                "No main function specified. You need to add "
                "'main-ip: <NAME>' or 'main-http: <NAME>'."
            )
        if http is not None and ip is not None:
            raise ConfigError(
                "Too many main functions: use either 'main-ip' or 'main-http', "
                "not both."
            )

        if http is not None:
            return cls(main=HttpMain(http))
        return cls(main=IpMain(ip))

    def fragment(self) -> Optional[Fragment]:
        if isinstance(self.main, HttpMain):
            lines = _http_main_lines(self.main)
        else:
            lines = _ip_main_lines(self.main)
        return Fragment(name="main", lines=lines)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.main.kind, "function": self.main.function}
