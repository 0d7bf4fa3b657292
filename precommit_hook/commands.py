"""
External tools - git and npm invocations used by the hook.

Every call returns a CommandResult instead of raising, so the pipeline can
turn tool problems into skip notices:

  git rev-parse --show-toplevel     # repository root
  git status --porcelain            # working tree changes
  git config commit.template <path> # commit message template
  npm --silent run <script>         # configured scripts
"""

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# Upper bound for git queries; a hung git must not hang the commit forever.
GIT_TIMEOUT = 30


@dataclass(frozen=True)
class CommandResult:
    code: int
    output: str = ""


@dataclass(frozen=True)
class RepositoryState:
    """Snapshot of the repository taken when the hook starts."""

    root: Path
    status: str


def which(binary: str) -> str | None:
    """Absolute path of an executable on $PATH, or None."""
    return shutil.which(binary)


def run_command(
    args: list[str],
    cwd: Path | str | None = None,
    timeout: float | None = GIT_TIMEOUT,
) -> CommandResult:
    """Run a command capturing stdout. Failures to start map to code 1."""
    logger.debug(f"exec: {' '.join(args)}")
    try:
        result = subprocess.run(
            args,
            cwd=cwd,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning(f"Timed out after {timeout}s: {' '.join(args)}")
        return CommandResult(1)
    except OSError as e:
        logger.warning(f"Failed to execute {args[0]}: {e}")
        return CommandResult(1)

    if result.returncode != 0:
        logger.debug(f"exit {result.returncode}: {result.stderr.strip()}")
    return CommandResult(result.returncode, result.stdout)


# =============================================================================
# git
# =============================================================================

def git_toplevel(git: str, cwd: Path | str | None = None) -> CommandResult:
    return run_command([git, "rev-parse", "--show-toplevel"], cwd=cwd)


def git_status(git: str, cwd: Path | str | None = None) -> CommandResult:
    return run_command([git, "status", "--porcelain"], cwd=cwd)


def set_commit_template(git: str, template: str, cwd: Path | str | None = None) -> CommandResult:
    """Point `commit.template` in the local git config at a template file."""
    return run_command([git, "config", "commit.template", template], cwd=cwd)


# =============================================================================
# npm
# =============================================================================

def npm_run(npm: str, script: str, silent: bool = False, cwd: Path | str | None = None) -> int:
    """
    Run `npm --silent run <script>` and return its exit code.

    In silent mode the script's own output goes to /dev/null, undecoded;
    otherwise it streams straight to the terminal. No timeout: test suites may
    run long.
    """
    args = [npm, "--silent", "run", script]
    sink = subprocess.DEVNULL if silent else None
    logger.debug(f"exec: {' '.join(args)}")
    try:
        result = subprocess.run(args, cwd=cwd, stdout=sink, stderr=sink)
    except OSError as e:
        logger.error(f"Failed to execute {npm}: {e}")
        return 1
    return result.returncode
