"""
Intermediate representation of the generated ``main.ml``.

Devices contribute named fragments; SourceFile keeps them in device order
and is the only place that turns them into text.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from mirari.errors import MirariError

HEADER = "(* Generated by mirari *)"

# Final statement of every generated program
RUN_LOOP = "let () = OS.Main.run (main ())"


def ocaml_string(value: str) -> str:
    """Quote ``value`` as an OCaml string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass
class Fragment:
    """A named block of generated source lines."""

    name: str
    lines: list[str] = field(default_factory=list)

    def render(self) -> str:
        return "\n".join(self.lines) + "\n"


@dataclass
class SourceFile:
    """Ordered list of fragments making up the generated source file."""

    fragments: list[Fragment] = field(default_factory=list)
    header: str = HEADER

    def add(self, fragment: Optional[Fragment]) -> None:
        """Append a fragment; None and empty fragments are skipped."""
        if fragment is not None and fragment.lines:
            self.fragments.append(fragment)

    @property
    def names(self) -> list[str]:
        return [f.name for f in self.fragments]

    def render(self) -> str:
        """
        Render the header, every fragment, then the run-loop trailer.

        Each block is followed by a blank line except the trailer.
        """
        blocks = [self.header + "\n"]
        blocks.extend(fragment.render() for fragment in self.fragments)
        return "\n".join(blocks) + "\n" + RUN_LOOP + "\n"

    def write(self, path: Path) -> None:
        """Write the rendered source, replacing any previous content."""
        try:
            path.write_text(
                self.render(), encoding="utf-8", errors="surrogateescape"
            )
        except OSError as e:
            raise MirariError(f"Cannot write {path}: {e}") from e
