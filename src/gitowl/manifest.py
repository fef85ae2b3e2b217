"""Manifest: tracked paths and their content digests.

The persisted form is one line per entry, sorted by path::

    <40 lowercase hex>  <path>

Entries without a digest only exist transiently (while merging a fresh path
list and before digests are computed); they are never written to disk.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ._paths import validate_path
from .exceptions import CollaboratorError, ManifestParseError, PreconditionError

if TYPE_CHECKING:
    from .fs import LocalFS
    from .worktree import GitWorkTree

_LINE_RE = re.compile(r"^([0-9a-f]{40})  (.+)$")


@dataclass
class ManifestEntry:
    """A tracked file.

    Attributes:
        path: Slash-separated path relative to the working-tree root.
        digest: 40-char lowercase hex git blob id, or ``None`` when not yet
            computed or the file could not be hashed.
    """
    path: str
    digest: str | None = None


class Manifest:
    """Collection of :class:`ManifestEntry` keyed by path.

    Construction appends in insertion order; :meth:`merge` and
    :meth:`serialize` normalize to lexicographic path order.
    """

    def __init__(self, entries: Iterable[ManifestEntry] = (), *, found: bool = True):
        self._entries: dict[str, ManifestEntry] = {}
        self.found = found
        for entry in entries:
            self.insert(entry)

    def __repr__(self) -> str:
        return f"Manifest({len(self._entries)} entries)"

    def __iter__(self) -> Iterator[ManifestEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __eq__(self, other):
        if isinstance(other, Manifest):
            return list(self._entries.values()) == list(other._entries.values())
        return NotImplemented

    def get(self, path: str) -> ManifestEntry | None:
        return self._entries.get(path)

    def paths(self) -> list[str]:
        return list(self._entries)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_text(cls, text: str, *, filename: str = "<manifest>") -> Manifest:
        """Parse the persisted manifest format.

        Raises :class:`ManifestParseError` naming the 1-based line number
        of a malformed line or a duplicate path.
        """
        manifest = cls()
        for lineno, line in enumerate(text.split("\n"), start=1):
            line = line.rstrip("\r")
            if not line:
                continue
            m = _LINE_RE.match(line)
            if m is None:
                raise ManifestParseError(filename, lineno, "malformed manifest line")
            digest, path = m.group(1), m.group(2)
            validate_path(path)
            if path in manifest:
                raise ManifestParseError(filename, lineno, f"duplicate path {path!r}")
            manifest.insert(ManifestEntry(path, digest))
        return manifest

    @classmethod
    def from_path_list(cls, data: str) -> Manifest:
        """Build a digest-less manifest from NUL-separated paths."""
        manifest = cls()
        for token in data.split("\0"):
            if token:
                manifest.insert(ManifestEntry(validate_path(token)))
        return manifest

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> Manifest:
        return cls.from_path_list("\0".join(paths))

    @classmethod
    def load(cls, filename: str) -> Manifest:
        """Read *filename*; a missing file yields an empty manifest with
        ``found`` set to False."""
        try:
            with open(filename, encoding="utf-8", newline="") as f:
                text = f.read()
        except FileNotFoundError:
            return cls(found=False)
        except OSError as exc:
            raise CollaboratorError(f"Cannot read manifest {filename}: {exc}")
        return cls.from_text(text, filename=filename)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def insert(self, entry: ManifestEntry) -> bool:
        """Add *entry* unless its path is already present (first writer wins).

        Returns True if the entry was inserted.
        """
        if entry.path in self._entries:
            return False
        self._entries[entry.path] = entry
        return True

    def merge(self, other: Manifest, pattern: str | None = None) -> Manifest:
        """Insert entries of *other* (matching *pattern*) absent from self.

        On conflict self's entry, digest included, is kept. Entries are
        copied so later digest refreshes never alias *other*. Returns self.
        """
        regex = re.compile(pattern) if pattern is not None else None
        for entry in other:
            if regex is not None and not regex.search(entry.path):
                continue
            self.insert(ManifestEntry(entry.path, entry.digest))
        self._sort()
        return self

    def refresh_digests(
        self,
        root_dir: str,
        worktree: GitWorkTree,
        fs: LocalFS,
        *,
        force_all: bool = False,
        quit_if_all_missing: bool = False,
    ) -> None:
        """Compute digests for entries lacking one (every entry if *force_all*).

        A file that does not exist gets no digest. With
        *quit_if_all_missing*, a file that is absent or yields no digest
        raises :class:`PreconditionError`.
        """
        for entry in self._entries.values():
            if entry.digest is not None and not force_all:
                continue
            full = os.path.join(root_dir, *entry.path.split("/"))
            if not fs.exists(full):
                if quit_if_all_missing:
                    raise PreconditionError(f"File vanished before hashing: {entry.path}")
                entry.digest = None
                continue
            digest = worktree.compute_digest(full)
            if digest is None and quit_if_all_missing:
                raise PreconditionError(f"Cannot compute digest of {entry.path}")
            entry.digest = digest

    def _sort(self) -> None:
        self._entries = dict(sorted(self._entries.items()))

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def serialize(self) -> str:
        lines = []
        for path in sorted(self._entries):
            digest = self._entries[path].digest
            if digest is None:
                raise RuntimeError(f"Manifest entry {path!r} has no digest")
            lines.append(f"{digest}  {path}\n")
        return "".join(lines)

    def save(self, filename: str) -> None:
        """Truncate and rewrite *filename* with :meth:`serialize` output."""
        text = self.serialize()
        try:
            with open(filename, "w", encoding="utf-8", newline="\n") as f:
                f.write(text)
        except OSError as exc:
            raise CollaboratorError(f"Cannot write manifest {filename}: {exc}")
        self.found = True
