"""Reporter - prefixed terminal output and exit bookkeeping for the hook."""

import sys
from dataclasses import dataclass
from typing import Callable, Sequence, TextIO

from precommit_hook.config import RunConfiguration

ORANGE = "\033[38;5;166m"
RESET = "\033[39;49m"

PREFIX = "pre-commit:"

ExitCallback = Callable[[int, list[str]], None]


@dataclass(frozen=True)
class Outcome:
    """Final result of a hook run: exit code plus the decorated lines shown."""

    code: int
    messages: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.code == 0


def supports_color(stream: TextIO) -> bool:
    """True when the stream is an interactive terminal."""
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except (ValueError, OSError):
        # Closed or detached stream
        return False


class Reporter:
    """
    Writes hook messages to the terminal and hands the exit code to a callback.

    Args:
        silent: Suppress all output (the callback still fires).
        colors: Colour the `pre-commit:` prefix.
        on_exit: Called as on_exit(code, lines) after every message.
        stdout: Stream for zero exit codes (default sys.stdout).
        stderr: Stream for non-zero exit codes (default sys.stderr).
    """

    def __init__(
        self,
        silent: bool = False,
        colors: bool = False,
        on_exit: ExitCallback | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.silent = silent
        self.colors = colors
        self.on_exit = on_exit
        self.stdout = stdout
        self.stderr = stderr

    @classmethod
    def for_config(
        cls,
        config: RunConfiguration,
        on_exit: ExitCallback | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> "Reporter":
        """Reporter honouring `silent` and `colors` from a RunConfiguration."""
        out = stdout if stdout is not None else sys.stdout
        colors = config.colors is not False and supports_color(out)
        return cls(config.silent, colors, on_exit, stdout, stderr)

    @property
    def prefix(self) -> str:
        if self.colors:
            return f"{ORANGE}{PREFIX}{RESET} "
        return f"{PREFIX} "

    def decorate(self, message: str | Sequence[str]) -> list[str]:
        """Split, pad with blank lines and prefix a message."""
        lines = message.split("\n") if isinstance(message, str) else list(message)
        lines = ["", *lines, ""]
        return [self.prefix + line for line in lines]

    def log(self, message: str | Sequence[str], code: int = 1) -> bool:
        """
        Emit a message and report the exit code.

        Lines go to stderr for a non-zero code, stdout otherwise.

        Returns:
            True only when code is exactly 0.
        """
        lines = self.decorate(message)

        if not self.silent:
            stream = (self.stderr or sys.stderr) if code else (self.stdout or sys.stdout)
            for line in lines:
                print(line, file=stream)

        if self.on_exit is not None:
            self.on_exit(code, lines)
        return code == 0
