"""
Hook - decision pipeline and script executor for the git pre-commit hook.

The pipeline is a straight line of checks. Each check either advances or halts
with a skip notice and exit code 0, so a broken local environment never blocks
a commit:

  CheckBinaries -> CheckGitStatus -> CheckRepoRoot -> CheckEmptyChangeset
    -> ParseManifest -> ApplyTemplate -> CheckScriptsConfigured -> Run

Only a failing npm script produces a non-zero exit code.

Usage:
    outcome = Hook(cwd=".").run()
    sys.exit(outcome.code)
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, TextIO

from precommit_hook import commands, messages
from precommit_hook.commands import RepositoryState
from precommit_hook.config import RunConfiguration, load_manifest, resolve_config
from precommit_hook.reporter import ExitCallback, Outcome, Reporter

logger = logging.getLogger(__name__)

BINARIES = ("git", "npm")


@dataclass(frozen=True)
class ExecutionResult:
    script: str
    code: int


# =============================================================================
# Script Executor
# =============================================================================

def run_scripts(
    npm: str,
    scripts: Sequence[str],
    silent: bool = False,
    cwd: Path | str | None = None,
) -> ExecutionResult | None:
    """
    Run npm scripts one after another, stopping at the first failure.

    Returns:
        ExecutionResult of the first failing script, or None when all passed.
    """
    for script in scripts:
        logger.info(f"Running npm script: {script}")
        code = commands.npm_run(npm, script, silent=silent, cwd=cwd)
        if code != 0:
            logger.info(f"Script {script} exited with {code}")
            return ExecutionResult(script, code)
    return None


# =============================================================================
# Decision Pipeline
# =============================================================================

class Hook:
    """
    One pre-commit hook invocation.

    State is filled in by initialize() and read by execute(); a Hook is not
    meant to be run twice.

    Args:
        cwd: Directory git runs in (defaults to the process cwd).
        on_exit: Optional callback receiving (code, lines) for every halt.
        stdout: Stream for skip notices.
        stderr: Stream for failures.
    """

    def __init__(
        self,
        cwd: Path | str | None = None,
        on_exit: ExitCallback | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.cwd = cwd
        self.on_exit = on_exit
        self.stdout = stdout
        self.stderr = stderr

        self.git = ""
        self.npm = ""
        self.state: RepositoryState | None = None
        self.config = RunConfiguration()
        self.outcome = Outcome(0)
        self.reporter = self._make_reporter()

    def _make_reporter(self) -> Reporter:
        return Reporter.for_config(
            self.config, on_exit=self._exit, stdout=self.stdout, stderr=self.stderr
        )

    def _exit(self, code: int, lines: list[str]) -> None:
        self.outcome = Outcome(code, tuple(lines))
        if self.on_exit is not None:
            self.on_exit(code, lines)

    def log(self, message: str, code: int = 1) -> Outcome:
        self.reporter.log(message, code)
        return self.outcome

    def run(self) -> Outcome:
        """Run every check and, when they all pass, the configured scripts."""
        halted = self.initialize()
        if halted is not None:
            return halted
        return self.execute()

    def initialize(self) -> Outcome | None:
        """
        Walk the checks up to CheckScriptsConfigured.

        Returns:
            The skip Outcome of the first check that halts, or None when the
            hook is ready to execute scripts.
        """
        # CheckBinaries
        for binary in BINARIES:
            location = commands.which(binary)
            if not location:
                logger.info(f"{binary} not found on PATH")
                return self.log(messages.BINARY.format(binary), 0)
            setattr(self, binary, location)

        # CheckGitStatus / CheckRepoRoot (both queried before either is checked)
        root = commands.git_toplevel(self.git, cwd=self.cwd)
        status = commands.git_status(self.git, cwd=self.cwd)

        if status.code:
            return self.log(messages.STATUS, 0)
        if root.code:
            return self.log(messages.ROOT, 0)

        self.state = RepositoryState(Path(root.output.strip()), status.output.strip())

        # CheckEmptyChangeset
        if not self.state.status:
            return self.log(messages.EMPTY, 0)

        # ParseManifest
        try:
            self.config = resolve_config(load_manifest(self.state.root))
        except (OSError, ValueError) as e:
            logger.debug(f"Manifest error in {self.state.root}: {e!r}")
            return self.log(messages.JSON.format(e), 0)
        self.reporter = self._make_reporter()
        logger.debug(f"Resolved configuration: {self.config}")

        # ApplyTemplate: applied even when nothing runs afterwards, never undone
        if self.config.template:
            result = commands.set_commit_template(
                self.git, self.config.template, cwd=self.state.root
            )
            if result.code:
                logger.warning(f"Failed to set commit.template to {self.config.template}")

        # CheckScriptsConfigured
        if not self.config.run:
            return self.log(messages.RUN, 0)

        return None

    def execute(self) -> Outcome:
        """Run the configured scripts; the first failure decides the exit code."""
        root = self.state.root if self.state else self.cwd
        failed = run_scripts(self.npm, self.config.run, silent=self.config.silent, cwd=root)
        if failed is not None:
            return self.log(messages.FAILURE.format(failed.script, failed.code), failed.code)

        self._exit(0, [])
        return self.outcome
