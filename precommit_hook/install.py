"""
Hook installer - wires the runner into the repository's `pre-commit` hook.

An existing hook that this tool did not write is kept as `pre-commit.old` and
restored again on uninstall.
"""

import logging
import os
import shlex
import stat
import sys
from pathlib import Path

from precommit_hook import commands
from precommit_hook.transaction import TransactionError, atomic_write_text

logger = logging.getLogger(__name__)

HOOK_NAME = "pre-commit"
BACKUP_SUFFIX = ".old"
MARKER = "# installed by precommit-hook"

HOOK_MODE = stat.S_IRWXU | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH


class InstallError(Exception):
    """Raised when the hook cannot be installed or removed."""
    pass


def find_hooks_dir(start: Path | str = ".") -> Path:
    """
    Ask git where it reads hooks from for the repository containing `start`.

    Linked worktrees share the main repository's hooks, and `core.hooksPath`
    overrides the default `.git/hooks`; `git rev-parse --git-path hooks`
    accounts for both.

    Raises:
        InstallError: git is missing or `start` is not inside a repository.
    """
    start = Path(start).resolve()
    git = commands.which("git")
    if not git:
        raise InstallError("Failed to locate the `git` binary")

    result = commands.run_command([git, "rev-parse", "--git-path", "hooks"], cwd=start)
    hooks = result.output.strip()
    if result.code or not hooks:
        raise InstallError(f"Not a git repository: {start}")
    # Relative paths are relative to the directory git ran in
    return (start / hooks).resolve()


def hook_script(python: str | None = None) -> str:
    """Shell script git runs before each commit."""
    python = python or sys.executable
    return "\n".join([
        "#!/bin/sh",
        MARKER,
        f"exec {shlex.quote(python)} -m precommit_hook.cli run",
        "",
    ])


def is_installed_hook(path: Path) -> bool:
    try:
        return MARKER in path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False


def install(start: Path | str = ".", python: str | None = None) -> Path:
    """
    Install the pre-commit hook for the repository containing `start`.

    Returns:
        Path of the written hook.
    """
    hooks_dir = find_hooks_dir(start)
    hook = hooks_dir / HOOK_NAME
    backup = hooks_dir / (HOOK_NAME + BACKUP_SUFFIX)

    try:
        hooks_dir.mkdir(parents=True, exist_ok=True)
        if hook.exists() and not is_installed_hook(hook):
            if backup.exists():
                raise InstallError(
                    f"{hook} is not ours and {backup} already exists; "
                    "move one of them away before installing"
                )
            logger.info(f"Backing up existing hook to {backup}")
            os.replace(hook, backup)
        atomic_write_text(hook, hook_script(python), mode=HOOK_MODE)
    except (OSError, TransactionError) as e:
        raise InstallError(f"Failed to install {hook}: {e}") from e

    return hook


def uninstall(start: Path | str = ".") -> bool:
    """
    Remove our hook and restore any backed up one.

    Returns:
        True when a hook written by this tool was removed.
    """
    hooks_dir = find_hooks_dir(start)
    hook = hooks_dir / HOOK_NAME
    backup = hooks_dir / (HOOK_NAME + BACKUP_SUFFIX)

    if not hook.exists():
        return False
    if not is_installed_hook(hook):
        logger.warning(f"{hook} was not installed by precommit-hook, leaving it alone")
        return False

    try:
        if backup.exists():
            logger.info(f"Restoring {backup}")
            os.replace(backup, hook)
        else:
            hook.unlink()
    except OSError as e:
        raise InstallError(f"Failed to uninstall {hook}: {e}") from e

    return True
