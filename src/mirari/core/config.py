"""
Reader for mirari configuration files.

A configuration file holds one ``<key>: <value>`` directive per line.
Keys grouped under a device use a namespace prefix (``fs-``, ``ip-``,
``http-``, ``main-``); ``depends`` and ``packages`` are top-level lists.

Typical data flow:

    config file -> RawConfig.load() -> parse_key_values() -> namespace()
                                                          -> values_of()
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from mirari.errors import ConfigError

# Separator between a key and its value
KEY_SEPARATOR = ":"

# Separator between a namespace prefix and the rest of the key
NAMESPACE_SEPARATOR = "-"

# Separator between items of a list value (depends, packages)
LIST_SEPARATOR = ","


@dataclass(frozen=True)
class KeyValue:
    """A single ``key: value`` directive, both sides trimmed."""

    key: str
    value: str


@dataclass(frozen=True)
class RawConfig:
    """Lines of a configuration file, read once per invocation."""

    path: Path
    lines: tuple[str, ...]

    @property
    def base_dir(self) -> Path:
        """Directory holding the config file; generated files go here."""
        return self.path.parent

    @property
    def name(self) -> str:
        """Config file name without its extension."""
        return self.path.stem

    @classmethod
    def load(cls, path: Path | str) -> "RawConfig":
        """
        Read a configuration file.

        Args:
            path: Path to the configuration file.

        Returns:
            RawConfig with the file's lines in order.

        Raises:
            ConfigError: If the file does not exist or cannot be read.
        """
        path = Path(path).resolve()
        if not path.is_file():
            raise ConfigError(f"Configuration file not found: {path}")

        # Undecodable bytes are kept as surrogates so they only affect their line
        try:
            content = path.read_text(encoding="utf-8", errors="surrogateescape")
        except OSError as e:
            raise ConfigError(f"Cannot read configuration file {path}: {e}") from e

        return cls(path=path, lines=split_lines(content))

    def key_values(self) -> list[KeyValue]:
        """Parse the file's lines into ordered key/value pairs."""
        return parse_key_values(self.lines)


def split_lines(content: str) -> tuple[str, ...]:
    """
    Split file content into lines at newlines only.

    A trailing carriage return is removed from each line, and a final
    newline does not start an extra empty line.
    """
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return tuple(line.removesuffix("\r") for line in lines)


def parse_line(line: str) -> Optional[KeyValue]:
    """
    Parse one line into a KeyValue.

    The line is split at the first separator. Lines without one are not
    directives and yield None.
    """
    key, sep, value = line.partition(KEY_SEPARATOR)
    if not sep:
        return None
    return KeyValue(key=key.strip(), value=value.strip())


def parse_key_values(lines: Iterable[str]) -> list[KeyValue]:
    """Parse lines into key/value pairs, dropping lines that are not directives."""
    pairs = []
    for line in lines:
        pair = parse_line(line)
        if pair is not None:
            pairs.append(pair)
    return pairs


def namespace(pairs: Iterable[KeyValue], prefix: str) -> list[KeyValue]:
    """
    Select the pairs whose key lives under ``prefix``.

    The part of the key before its first ``-`` is compared to ``prefix``
    case-insensitively; the remainder becomes the key of the returned pair.

    Args:
        pairs: Key/value pairs in file order.
        prefix: Namespace prefix, without the trailing ``-``.

    Returns:
        Matching pairs with the prefix stripped, in file order.
    """
    wanted = prefix.lower()
    selected = []
    for pair in pairs:
        head, sep, rest = pair.key.partition(NAMESPACE_SEPARATOR)
        if sep and head.lower() == wanted:
            selected.append(KeyValue(key=rest, value=pair.value))
    return selected


def lookup(pairs: Iterable[KeyValue], key: str) -> Optional[str]:
    """Return the value of the first pair named ``key``, or None."""
    for pair in pairs:
        if pair.key == key:
            return pair.value
    return None


def split_list(value: str) -> list[str]:
    """Split a comma-separated value into trimmed items, keeping empty ones."""
    return [item.strip() for item in value.split(LIST_SEPARATOR)]


def values_of(pairs: Iterable[KeyValue], key: str) -> list[str]:
    """
    Collect the list items of every pair named ``key``.

    Each line's items keep their order, but lines are folded so that the
    items of the last matching line come first, then those of the line
    before it, and so on.
    """
    collected: list[str] = []
    for pair in pairs:
        if pair.key == key:
            collected = split_list(pair.value) + collected
    return collected
