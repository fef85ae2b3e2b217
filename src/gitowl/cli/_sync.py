"""Mutating commands: add, prepull, pull."""

from __future__ import annotations

import click

from ..context import EXCLUDE_NAME, MANIFEST_NAME
from ..sync import add as add_paths
from ..sync import plan_pull, prepull as prepare_dirs, resolve_other_root, run_pull
from ._helpers import (
    main,
    _dry_run_option,
    _load_manifest,
    _open_worktree,
    _owl_errors,
    _status,
)


@main.command()
@click.argument("paths", nargs=-1, type=click.Path())
@click.pass_context
@_owl_errors
def add(ctx, paths):
    """Start tracking untracked files.

    Each PATH is a file or directory; untracked files under it are
    recorded with their blob id. The manifest and .gitignore are then
    staged. Fails with exit code 3 if no PATH names an untracked file.
    """
    if not paths:
        return
    repo_ctx, worktree, fs = _open_worktree(ctx)
    manifest = add_paths(repo_ctx, list(paths), worktree, fs)
    _status(ctx, f"Tracking {len(manifest)} files; staged {EXCLUDE_NAME} and {MANIFEST_NAME}")


@main.command()
@click.pass_context
@_owl_errors
def prepull(ctx):
    """Create the directories that hold tracked files."""
    repo_ctx, _worktree, fs = _open_worktree(ctx)
    manifest = _load_manifest(repo_ctx)
    for target in prepare_dirs(repo_ctx, manifest, fs):
        _status(ctx, f"Created {target}")


@main.command()
@click.argument("other_root", required=False, type=click.Path(file_okay=False))
@_dry_run_option
@click.pass_context
@_owl_errors
def pull(ctx, other_root, dry_run):
    """Copy missing tracked files from another working tree.

    OTHER_ROOT defaults to the location of remote "origin". Files already
    present are never overwritten.

    \b
    Examples:
        git-owl pull ../main-checkout
        git-owl pull --dry-run
    """
    repo_ctx, worktree, fs = _open_worktree(ctx)
    manifest = _load_manifest(repo_ctx)
    source = resolve_other_root(other_root, worktree)
    _status(ctx, f"Pulling from {source}")
    actions = plan_pull(repo_ctx, manifest, source, worktree, fs)
    if dry_run:
        for action in actions:
            click.echo(str(action))
        return
    for name in run_pull(repo_ctx, actions, worktree, fs):
        click.echo(name)
