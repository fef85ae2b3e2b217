"""Shared fixtures for git-owl tests."""

import hashlib
import os

import pytest
from click.testing import CliRunner
from dulwich.repo import Repo

from gitowl.context import RepositoryContext
from gitowl.exceptions import CollaboratorError


def blob_id(data: bytes) -> str:
    return hashlib.sha1(b"blob %d\0" % len(data) + data).hexdigest()


# ---------------------------------------------------------------------------
# In-memory collaborators
# ---------------------------------------------------------------------------

class FakeFS:
    """Records mutations instead of touching disk."""

    def __init__(self, files=(), dirs=()):
        self.files = set(files)
        self.dirs = set(dirs)
        self.made = []
        self.copied = []
        self.sources = set()

    def exists(self, path):
        return path in self.files or path in self.dirs

    def make_dirs(self, path):
        self.made.append(path)
        while path and path not in self.dirs:
            self.dirs.add(path)
            parent = os.path.dirname(path)
            if parent == path:
                break
            path = parent

    def copy_file(self, src, dest_dir):
        if src not in self.sources:
            raise CollaboratorError(f"cp {src} {dest_dir} failed: no such file")
        self.copied.append((src, dest_dir))
        dest = os.path.join(dest_dir, os.path.basename(src))
        self.files.add(dest)
        return dest


class FakeWorkTree:
    """Answers git questions from dictionaries."""

    def __init__(self, digests=None, untracked=(), remote=None):
        self.digests = dict(digests or {})
        self.untracked = list(untracked)
        self.remote = remote
        self.staged = []
        self.untracked_dirs = set()
        self.digest_calls = []

    def list_untracked(self, paths, must_all_match=False):
        return [p for p in self.untracked if any(p.startswith(a) for a in paths)]

    def compute_digest(self, path):
        self.digest_calls.append(path)
        return self.digests.get(path)

    def stage(self, paths):
        self.staged.extend(paths)

    def get_default_remote(self):
        return self.remote

    def path_is_untracked_directory(self, path):
        return path in self.untracked_dirs

    def resolve_working_tree_name(self, abs_path):
        return None


@pytest.fixture
def repo_ctx(tmp_path):
    return RepositoryContext.for_root(str(tmp_path / "root"))


@pytest.fixture
def fake_fs():
    return FakeFS()


@pytest.fixture
def fake_worktree():
    return FakeWorkTree()


# ---------------------------------------------------------------------------
# Real working trees
# ---------------------------------------------------------------------------

@pytest.fixture
def runner():
    return CliRunner()


def make_worktree(path):
    """Create a non-bare git repository at *path* and return its path."""
    path.mkdir(parents=True, exist_ok=True)
    Repo.init(str(path)).close()
    return path


@pytest.fixture
def work(tmp_path):
    """Empty working tree."""
    return make_worktree(tmp_path / "work")


@pytest.fixture
def work_with_data(work):
    """Working tree with untracked data/x.bin, data/sub/y.bin and notes.txt."""
    (work / "data" / "sub").mkdir(parents=True)
    (work / "data" / "x.bin").write_bytes(b"\x00\x01\x02")
    (work / "data" / "sub" / "y.bin").write_bytes(b"yyyy")
    (work / "notes.txt").write_text("hello\n")
    return work
