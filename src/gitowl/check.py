"""Integrity checks and presence listing of manifest entries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .manifest import Manifest

if TYPE_CHECKING:
    from .context import RepositoryContext
    from .fs import LocalFS
    from .worktree import GitWorkTree


class Finding(str, Enum):
    """Classification of a manifest entry that failed a full check."""
    MISSING = "MISSING"
    FAILED = "FAILED"

    def __str__(self) -> str:          # noqa: D105
        return self.value


@dataclass
class CheckResult:
    path: str
    finding: Finding

    def __str__(self) -> str:
        return f"{self.path}: {self.finding}"


class ListMode(str, Enum):
    """Which entries ``ls`` shows: ``PRESENT`` (default), ``ALL``, ``MISSING``."""
    PRESENT = "present"
    ALL = "all"
    MISSING = "missing"


def check_missing(ctx: RepositoryContext, manifest: Manifest, fs: LocalFS) -> list[str]:
    """Paths of entries whose file is absent. No hashing."""
    return [
        entry.path for entry in sorted(manifest, key=lambda e: e.path)
        if not fs.exists(ctx.abspath(entry.path))
    ]


def check_integrity(
    ctx: RepositoryContext,
    manifest: Manifest,
    worktree: GitWorkTree,
    fs: LocalFS,
    pattern: str | None = None,
) -> list[CheckResult]:
    """Re-hash every entry matching *pattern* and compare to the record.

    Returns one :class:`CheckResult` per entry that is missing or whose
    digest changed; matching entries produce nothing.
    """
    current = Manifest().merge(manifest, pattern)
    current.refresh_digests(ctx.root_dir, worktree, fs, force_all=True)
    results = []
    for entry in sorted(manifest, key=lambda e: e.path):
        fresh = current.get(entry.path)
        if fresh is None:
            continue
        if fresh.digest is None:
            results.append(CheckResult(entry.path, Finding.MISSING))
        elif fresh.digest != entry.digest:
            results.append(CheckResult(entry.path, Finding.FAILED))
    return results


def list_entries(
    ctx: RepositoryContext,
    manifest: Manifest,
    worktree: GitWorkTree,
    mode: ListMode = ListMode.PRESENT,
) -> list[str]:
    """Names for ``ls``.

    Present (untracked) files are listed by their working-tree name,
    absent ones by absolute path.
    """
    names = []
    for entry in sorted(manifest, key=lambda e: e.path):
        full = ctx.abspath(entry.path)
        name = worktree.resolve_working_tree_name(full)
        if name is not None:
            if mode is not ListMode.MISSING:
                names.append(name)
        elif mode is not ListMode.PRESENT:
            names.append(full)
    return names
