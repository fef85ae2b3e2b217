"""Managed block inside the exclusion list (``.gitignore``).

The block is delimited by two sentinel lines and fully regenerated from the
manifest's paths on every write. Lines outside it belong to the user and are
kept verbatim.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .exceptions import CollaboratorError

BEGIN = "# git-owl BEGIN: DO NOT EDIT!"
END = "# git-owl END"


@dataclass
class ExclusionBlock:
    """User lines of an exclusion list, with the managed region removed."""
    preamble: list[str] = field(default_factory=list)

    @classmethod
    def load(cls, filename: str) -> ExclusionBlock:
        """Read *filename*, dropping the first BEGIN..END region.

        Lines after END are kept and end up ahead of the regenerated block
        on the next :meth:`write`. A missing file gives an empty preamble.
        """
        preamble: list[str] = []
        state = "before"
        try:
            with open(filename, encoding="utf-8", newline="") as f:
                for raw in f:
                    line = raw.rstrip("\n").rstrip("\r")
                    if state == "before" and line == BEGIN:
                        state = "inside"
                    elif state == "inside":
                        if line == END:
                            state = "after"
                    else:
                        preamble.append(line)
        except FileNotFoundError:
            return cls()
        except OSError as exc:
            raise CollaboratorError(f"Cannot read {filename}: {exc}")
        return cls(preamble)

    def render(self, paths: Iterable[str]) -> str:
        lines = [*self.preamble, BEGIN, *paths, END]
        return "".join(f"{line}\n" for line in lines)

    def write(self, filename: str, paths: Iterable[str]) -> None:
        """Truncate *filename* and write preamble then the managed block.

        Not atomic: a failure mid-write can leave the file truncated.
        """
        text = self.render(paths)
        try:
            with open(filename, "w", encoding="utf-8", newline="\n") as f:
                f.write(text)
        except OSError as exc:
            raise CollaboratorError(f"Cannot write {filename}: {exc}")
