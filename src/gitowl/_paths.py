"""Path validation shared by every component."""

from __future__ import annotations

from .exceptions import PathValidationError

_UNSAFE = (
    ("'", "single quote"),
    ('"', "double quote"),
    ("\\", "backslash"),
    ("\n", "newline"),
    ("\r", "carriage return"),
)


def validate_path(path: str) -> str:
    """Return *path* unchanged, or raise if it contains an unsafe character."""
    for ch, label in _UNSAFE:
        if ch in path:
            raise PathValidationError(f"Invalid path {path!r}: contains {label}")
    return path


def validate_paths(paths) -> list[str]:
    """Validate every path in *paths*, returning them as a list."""
    return [validate_path(p) for p in paths]
