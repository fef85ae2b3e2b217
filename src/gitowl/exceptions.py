"""Exceptions for git-owl."""

EXIT_FAILURE = 1
EXIT_PRECONDITION = 3


class OwlError(Exception):
    """Base class for fatal git-owl errors.

    ``exit_code`` is the process status the CLI exits with.
    """
    exit_code = EXIT_FAILURE


class PathValidationError(OwlError, ValueError):
    """Raised when a path contains a quote or backslash."""


class PreconditionError(OwlError):
    """Raised when a required input is absent or unusable.

    Distinct exit code so scripts can tell "nothing to do" apart from a
    tool malfunction.
    """
    exit_code = EXIT_PRECONDITION


class ManifestParseError(PreconditionError):
    """Raised for a malformed or duplicate line in the manifest file."""

    def __init__(self, filename: str, lineno: int, reason: str):
        self.filename = filename
        self.lineno = lineno
        self.reason = reason
        super().__init__(f"{filename}:{lineno}: {reason}")


class CollaboratorError(OwlError):
    """Raised when a file-system or git action fails (mkdir, copy, write)."""
