"""Read-only commands: check, ls, help."""

from __future__ import annotations

import re

import click

from ..check import ListMode, check_integrity, check_missing, list_entries
from ._helpers import (
    main,
    _load_manifest,
    _open_worktree,
    _owl_errors,
    _status,
)


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------

@main.command()
@click.option("-m", "--missing", "missing_only", is_flag=True, default=False,
              help="Only report files absent from disk (no hashing).")
@click.argument("pattern", required=False)
@click.pass_context
@_owl_errors
def check(ctx, missing_only, pattern):
    """Verify tracked files against the manifest.

    Prints PATH: MISSING for files that are gone and PATH: FAILED for files
    whose content changed. PATTERN is a regular expression limiting which
    paths are checked.

    \b
    Exit codes:
        0  all checked files are intact
        1  at least one file was reported
    """
    if missing_only and pattern is not None:
        raise click.UsageError("-m does not take a pattern")
    if pattern is not None:
        try:
            re.compile(pattern)
        except re.error as exc:
            raise click.BadParameter(str(exc), param_hint="PATTERN")
    repo_ctx, worktree, fs = _open_worktree(ctx)
    manifest = _load_manifest(repo_ctx)
    if not manifest.found:
        click.echo(f"git-owl is not initialized in {repo_ctx.root_dir}")
        return

    if missing_only:
        reported = check_missing(repo_ctx, manifest, fs)
    else:
        reported = check_integrity(repo_ctx, manifest, worktree, fs, pattern)
    for item in reported:
        click.echo(str(item))
    _status(ctx, f"Checked {len(manifest)} entries, {len(reported)} reported")
    if reported:
        ctx.exit(1)


# ---------------------------------------------------------------------------
# ls
# ---------------------------------------------------------------------------

@main.command()
@click.option("-a", "--all", "mode", flag_value="all",
              help="Show present and absent files.")
@click.option("-m", "--missing", "mode", flag_value="missing",
              help="Show only absent files.")
@click.pass_context
@_owl_errors
def ls(ctx, mode):
    """List tracked files.

    Present files are shown relative to the working-tree root, absent
    files by absolute path. Without a flag only present files are shown.
    """
    repo_ctx, worktree, _fs = _open_worktree(ctx)
    manifest = _load_manifest(repo_ctx)
    for name in list_entries(repo_ctx, manifest, worktree, ListMode(mode or "present")):
        click.echo(name)


# ---------------------------------------------------------------------------
# help
# ---------------------------------------------------------------------------

@main.command("help")
@click.pass_context
def help_cmd(ctx):
    """Show usage."""
    click.echo(ctx.parent.get_help())
