"""Per-invocation repository context."""

from __future__ import annotations

import os
from dataclasses import dataclass

MANIFEST_NAME = ".gitowl"
EXCLUDE_NAME = ".gitignore"


@dataclass(frozen=True)
class RepositoryContext:
    """Resolved working-tree locations, computed once per process.

    Attributes:
        root_dir: Absolute path of the working-tree root.
        manifest_file: Absolute path of the persisted manifest.
        exclude_file: Absolute path of the exclusion list.
    """
    root_dir: str
    manifest_file: str
    exclude_file: str

    @classmethod
    def for_root(cls, root_dir: str) -> RepositoryContext:
        root_dir = os.path.abspath(root_dir)
        return cls(
            root_dir=root_dir,
            manifest_file=os.path.join(root_dir, MANIFEST_NAME),
            exclude_file=os.path.join(root_dir, EXCLUDE_NAME),
        )

    def abspath(self, rel: str) -> str:
        """Absolute path of the slash-separated, root-relative *rel*."""
        return os.path.join(self.root_dir, *rel.split("/"))
