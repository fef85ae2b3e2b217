"""Git working-tree collaborator built on dulwich.

Answers the questions the manifest commands ask of git: where the root is,
which files are untracked, what a file's blob id is, and what the default
remote points at. Also stages files.
"""

from __future__ import annotations

import hashlib
import os
from collections.abc import Iterable
from pathlib import Path

from dulwich import porcelain
from dulwich.errors import NoIndexPresent, NotGitRepository
from dulwich.repo import Repo

from .exceptions import CollaboratorError, PreconditionError

_HASH_CHUNK_SIZE = 65536


def _blob_hasher(size: int) -> hashlib._Hash:
    """Return a SHA-1 hasher pre-loaded with the git blob header.

    Git blob OID = SHA-1(``blob <size>\\0`` + content).
    """
    return hashlib.sha1(f"blob {size}\0".encode())


def file_blob_id(path: str | Path) -> str:
    """Git blob id of the file at *path*, streamed in chunks."""
    full = Path(path)
    size = full.stat().st_size
    h = _blob_hasher(size)
    with open(full, "rb") as f:
        while True:
            chunk = f.read(_HASH_CHUNK_SIZE)
            if not chunk:
                break
            h.update(chunk)
    return h.hexdigest()


class GitWorkTree:
    """A non-bare git repository's working tree."""

    def __init__(self, repo: Repo):
        if repo.bare:
            raise PreconditionError(f"Not a working tree (bare repository): {repo.path}")
        self._repo = repo
        self.root_dir = os.path.realpath(repo.path)

    def __repr__(self) -> str:
        return f"GitWorkTree({self.root_dir!r})"

    @classmethod
    def discover(cls, start: str | Path = ".") -> GitWorkTree:
        """Find the repository containing *start* (searching upward)."""
        try:
            return cls(Repo.discover(str(start)))
        except NotGitRepository:
            raise PreconditionError(f"Not a git working tree: {os.path.abspath(start)}")

    def resolve_root(self) -> str:
        return self.root_dir

    # ------------------------------------------------------------------
    # Index lookups
    # ------------------------------------------------------------------

    def _index_paths(self) -> set[bytes]:
        try:
            return set(self._repo.open_index())
        except (NoIndexPresent, FileNotFoundError):
            return set()

    def _rel(self, path: str) -> str | None:
        """Root-relative slash-separated name of *path*, or None if outside."""
        # Resolve the parent only; a symlinked file keeps its own name.
        parent, name = os.path.split(os.path.abspath(path))
        rel = os.path.relpath(os.path.join(os.path.realpath(parent), name), self.root_dir)
        if rel == os.curdir or rel == os.pardir or rel.startswith(os.pardir + os.sep):
            return None
        return rel.replace(os.sep, "/")

    def list_untracked(self, paths: Iterable[str], must_all_match: bool = False) -> list[str]:
        """Untracked files at or below each of *paths*, root-relative.

        Files are untracked when absent from the index; ignored files
        count. With *must_all_match*, an argument that yields nothing
        raises :class:`PreconditionError`.
        """
        index = self._index_paths()
        found: set[str] = set()
        for arg in paths:
            full = os.path.abspath(arg)
            candidates = []
            if os.path.isdir(full):
                for dirpath, dirnames, filenames in os.walk(full):
                    dirnames[:] = [d for d in dirnames if d != ".git"]
                    candidates.extend(os.path.join(dirpath, n) for n in filenames)
            elif os.path.isfile(full) or os.path.islink(full):
                candidates.append(full)
            names = []
            for cand in candidates:
                rel = self._rel(cand)
                if rel is None or rel.split("/", 1)[0] == ".git":
                    continue
                if rel.encode("utf-8") not in index:
                    names.append(rel)
            if must_all_match and not names:
                raise PreconditionError(f"No untracked files match: {arg}")
            found.update(names)
        return sorted(found)

    def path_is_untracked_directory(self, path: str) -> bool:
        """True if *path* already exists as a directory in the working tree."""
        return os.path.isdir(path) and self._rel(path) is not None

    def resolve_working_tree_name(self, abs_path: str) -> str | None:
        """Root-relative name of *abs_path* if it exists and is untracked."""
        if not os.path.isfile(abs_path):
            return None
        rel = self._rel(abs_path)
        if rel is None or rel.encode("utf-8") in self._index_paths():
            return None
        return rel

    # ------------------------------------------------------------------
    # Content and config
    # ------------------------------------------------------------------

    def compute_digest(self, path: str) -> str | None:
        """Git blob id of *path*, or None if it cannot be read."""
        try:
            return file_blob_id(path)
        except OSError:
            return None

    def get_default_remote(self) -> str | None:
        """``remote.origin.url`` from the repository config, if set."""
        config = self._repo.get_config()
        try:
            url = config.get((b"remote", b"origin"), b"url")
        except KeyError:
            return None
        if isinstance(url, bytes):
            url = url.decode("utf-8")
        return url or None

    def stage(self, paths: Iterable[str]) -> None:
        """Add *paths* (absolute) to the index."""
        paths = [os.path.abspath(p) for p in paths]
        try:
            porcelain.add(self._repo, paths=paths)
        except OSError as exc:
            raise CollaboratorError(f"git add failed: {exc}")
