"""add / prepull / pull: keeping manifest files and the working tree in step."""

from __future__ import annotations

import os
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ._exclude import ExclusionBlock
from ._paths import validate_paths
from .exceptions import PreconditionError
from .manifest import Manifest

if TYPE_CHECKING:
    from .context import RepositoryContext
    from .fs import LocalFS
    from .worktree import GitWorkTree


# ---------------------------------------------------------------------------
# add
# ---------------------------------------------------------------------------

def add(
    ctx: RepositoryContext,
    paths: Sequence[str],
    worktree: GitWorkTree,
    fs: LocalFS,
) -> Manifest | None:
    """Register untracked files under *paths* and persist the result.

    Digests already recorded are kept for paths that are added again.
    Rewrites the manifest and the managed exclusion block, then stages
    both files. Returns the merged manifest, or None when *paths* is empty.
    """
    if not paths:
        return None
    validate_paths(paths)
    listed = worktree.list_untracked(paths, must_all_match=True)
    if not listed:
        raise PreconditionError("No untracked files among: " + " ".join(paths))

    manifest = Manifest.load(ctx.manifest_file)
    manifest.merge(Manifest.from_paths(listed))
    manifest.refresh_digests(ctx.root_dir, worktree, fs, quit_if_all_missing=True)
    manifest.save(ctx.manifest_file)

    ExclusionBlock.load(ctx.exclude_file).write(ctx.exclude_file, manifest.paths())
    worktree.stage([ctx.exclude_file, ctx.manifest_file])
    return manifest


# ---------------------------------------------------------------------------
# prepull
# ---------------------------------------------------------------------------

def prepull(ctx: RepositoryContext, manifest: Manifest, fs: LocalFS) -> list[str]:
    """Create the containing directory of every entry; returns those made."""
    created = []
    for entry in manifest:
        target = os.path.dirname(ctx.abspath(entry.path))
        if not fs.exists(target):
            fs.make_dirs(target)
            created.append(target)
    return created


# ---------------------------------------------------------------------------
# pull
# ---------------------------------------------------------------------------

class PullActionKind(str, Enum):
    MKDIR = "mkdir"
    COPY = "copy"

    def __str__(self) -> str:          # noqa: D105
        return self.value


@dataclass
class PullAction:
    """One step of a pull: create *target*, or copy *src* into *target*.

    Attributes:
        kind: :class:`PullActionKind`.
        target: Absolute directory path.
        src: Source file in the other working tree (copy only).
        path: Manifest path being restored (copy only).
    """
    kind: PullActionKind
    target: str
    src: str | None = None
    path: str | None = None

    def __str__(self) -> str:
        if self.kind == PullActionKind.MKDIR:
            return f"mkdir -p {self.target}"
        return f"cp {self.src} {self.target}"


_MSYS_DRIVE_RE = re.compile(r"^/([A-Za-z])/(.*)$")


def native_remote_path(url: str, *, windows: bool | None = None) -> str:
    """Turn a configured remote URL into a local directory path.

    Drops a ``file://`` scheme. On Windows, ``/c/dir`` becomes ``c:/dir``.
    """
    if windows is None:
        windows = os.name == "nt"
    if url.startswith("file://"):
        url = url[len("file://"):]
    if windows:
        m = _MSYS_DRIVE_RE.match(url)
        if m:
            url = f"{m.group(1)}:/{m.group(2)}"
    return url


def resolve_other_root(other_root: str | None, worktree: GitWorkTree) -> str:
    """Explicit *other_root*, else the default remote's location."""
    if other_root is None:
        remote = worktree.get_default_remote()
        if remote is None:
            raise PreconditionError(
                "No source working tree given and remote.origin.url is not set"
            )
        other_root = native_remote_path(remote)
    return other_root.rstrip("/\\") or other_root


def plan_pull(
    ctx: RepositoryContext,
    manifest: Manifest,
    other_root: str,
    worktree: GitWorkTree,
    fs: LocalFS,
) -> list[PullAction]:
    """Actions that restore every entry whose file is absent locally.

    Present files are never touched. Each missing directory gets one
    ``mkdir`` ahead of its first copy.
    """
    actions = []
    planned_dirs: set[str] = set()
    for entry in manifest:
        full = ctx.abspath(entry.path)
        if fs.exists(full):
            continue
        target = os.path.dirname(full)
        if target not in planned_dirs and not worktree.path_is_untracked_directory(target):
            actions.append(PullAction(PullActionKind.MKDIR, target))
        planned_dirs.add(target)
        src = os.path.join(other_root, *entry.path.split("/"))
        actions.append(PullAction(PullActionKind.COPY, target, src=src, path=entry.path))
    return actions


def run_pull(
    ctx: RepositoryContext,
    actions: Sequence[PullAction],
    worktree: GitWorkTree,
    fs: LocalFS,
) -> Iterator[str]:
    """Execute *actions* in order, yielding each copied file's name.

    The first failing action raises and stops the pull.
    """
    for action in actions:
        if action.kind == PullActionKind.MKDIR:
            fs.make_dirs(action.target)
            continue
        fs.copy_file(action.src, action.target)
        name = worktree.resolve_working_tree_name(ctx.abspath(action.path))
        yield name if name is not None else action.path
