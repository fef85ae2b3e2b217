from .context import RepositoryContext
from .manifest import Manifest, ManifestEntry
from .exceptions import (
    OwlError, PathValidationError, PreconditionError, ManifestParseError, CollaboratorError,
)
from ._exclude import ExclusionBlock
from .check import check_missing, check_integrity, list_entries, CheckResult, Finding, ListMode
from .sync import add, prepull, plan_pull, run_pull, resolve_other_root, PullAction
from .fs import LocalFS
from .worktree import GitWorkTree

__all__ = [
    "RepositoryContext", "Manifest", "ManifestEntry",
    "OwlError", "PathValidationError", "PreconditionError", "ManifestParseError",
    "CollaboratorError",
    "ExclusionBlock",
    "check_missing", "check_integrity", "list_entries", "CheckResult", "Finding", "ListMode",
    "add", "prepull", "plan_pull", "run_pull", "resolve_other_root", "PullAction",
    "LocalFS", "GitWorkTree",
]
