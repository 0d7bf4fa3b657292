#!/usr/bin/env python3
"""
precommit-hook CLI - run npm scripts from package.json before every commit.

Usage:
  precommit-hook run          # Hook mode (what .git/hooks/pre-commit calls)
  precommit-hook install      # Write .git/hooks/pre-commit
  precommit-hook uninstall    # Remove it, restoring any previous hook

Environment Variables:
  PRECOMMIT_HOOK_DEBUG - Set to 1 for debug logging on stderr
"""

import argparse
import logging
import os
import sys

from precommit_hook.hook import Hook
from precommit_hook.install import InstallError, install, uninstall

logger = logging.getLogger("precommit_hook")


def setup_logging(verbose: bool = False) -> None:
    debug = verbose or os.environ.get("PRECOMMIT_HOOK_DEBUG", "") not in ("", "0")
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="precommit-hook",
        description="Run package.json scripts as a git pre-commit hook.",
    )
    parser.add_argument("--cwd", default=None, help="Repository directory (default: current)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument(
        "mode",
        nargs="?",
        default="run",
        choices=["run", "install", "uninstall"],
        help="What to do (default: run)",
    )
    return parser


def cmd_run(cwd: str | None) -> int:
    outcome = Hook(cwd=cwd).run()
    return outcome.code


def cmd_install(cwd: str | None) -> int:
    try:
        hook = install(cwd or ".")
    except InstallError as e:
        print(f"precommit-hook: {e}", file=sys.stderr)
        return 1
    print(f"installed: {hook}")
    return 0


def cmd_uninstall(cwd: str | None) -> int:
    try:
        removed = uninstall(cwd or ".")
    except InstallError as e:
        print(f"precommit-hook: {e}", file=sys.stderr)
        return 1
    print("uninstalled" if removed else "nothing to uninstall")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point with mode dispatch."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    logger.debug(f"mode={args.mode} cwd={args.cwd}")

    if args.mode == "install":
        return cmd_install(args.cwd)
    if args.mode == "uninstall":
        return cmd_uninstall(args.cwd)
    return cmd_run(args.cwd)


if __name__ == "__main__":
    sys.exit(main())
