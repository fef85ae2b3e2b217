"""Shared helpers, option decorators, and the main CLI group."""

from __future__ import annotations

import functools

import click

from ..context import RepositoryContext
from ..exceptions import OwlError
from ..fs import LocalFS
from ..manifest import Manifest
from ..worktree import GitWorkTree


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class OwlClickException(click.ClickException):
    """ClickException carrying the exit code of an :class:`OwlError`."""

    def __init__(self, message: str, exit_code: int):
        super().__init__(message)
        self.exit_code = exit_code


def _owl_errors(f):
    """Turn core errors raised by a command into click errors."""
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except OwlError as exc:
            raise OwlClickException(str(exc), exc.exit_code)
    return wrapper


def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


def _store_root(ctx, param, value):
    """Click callback: store --root value in the context."""
    ctx.ensure_object(dict)
    if value is not None:
        ctx.obj["root"] = value
    return value


def _dry_run_option(f):
    """Shared --dry-run/-n flag."""
    return click.option(
        "-n", "--dry-run", "dry_run", is_flag=True, default=False,
        help="Show what would be done without doing it.",
    )(f)


def _open_worktree(ctx) -> tuple[RepositoryContext, GitWorkTree, LocalFS]:
    """Discover the working tree once and build the repository context."""
    worktree = GitWorkTree.discover(ctx.obj.get("root") or ".")
    repo_ctx = RepositoryContext.for_root(worktree.resolve_root())
    _status(ctx, f"Working tree: {repo_ctx.root_dir}")
    return repo_ctx, worktree, LocalFS()


def _load_manifest(repo_ctx: RepositoryContext) -> Manifest:
    return Manifest.load(repo_ctx.manifest_file)


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--root", "-C", type=click.Path(file_okay=False), envvar="GIT_OWL_ROOT",
              help="Start working-tree discovery here (or set GIT_OWL_ROOT).",
              expose_value=False, callback=_store_root, is_eager=True)
@click.option("-v", "--verbose", is_flag=True, help="Verbose output on stderr.")
@click.pass_context
def main(ctx, verbose):
    """git-owl: keep large files beside a git working tree.

    Tracked files stay untracked by git: their paths and blob ids live in
    the .gitowl manifest, and a generated block in .gitignore keeps git
    from picking them up.

    \b
    Commands:
      add PATH...       Record untracked files in the manifest
      check [-m]        Verify files against recorded digests
      ls [-a|-m]        List tracked files by presence
      prepull           Create directories for tracked files
      pull [ROOT]       Copy missing files from another working tree

    \b
    Exit codes:
        0  success
        1  check found problems, or an action failed
        3  precondition failed (nothing to add, no remote, bad manifest)
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
