"""Plain file-system collaborator: existence, mkdir -p, single-file copy."""

from __future__ import annotations

import os
import shutil

from .exceptions import CollaboratorError


class LocalFS:
    """Blocking file-system actions on the local host.

    Failures of the mutating actions raise :class:`CollaboratorError`
    naming the action; nothing is retried.
    """

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def make_dirs(self, path: str) -> None:
        """Create *path* and any missing ancestors."""
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as exc:
            raise CollaboratorError(f"mkdir -p {path} failed: {exc}")

    def copy_file(self, src: str, dest_dir: str) -> str:
        """Copy *src* into *dest_dir*, keeping its name and mtime.

        Returns the path of the new file.
        """
        try:
            return shutil.copy2(src, dest_dir)
        except OSError as exc:
            raise CollaboratorError(f"cp {src} {dest_dir} failed: {exc}")
