"""User-facing messages for the pre-commit hook runner.

Templates use ``str.format`` placeholders. Every message except FAILURE is a
skip notice: the hook exits 0 after printing it.
"""

BINARY = "\n".join([
    "Failed to locate the `{}` binary, make sure it's installed in your $PATH.",
    "Skipping the pre-commit hook.",
])

STATUS = "\n".join([
    "Failed to retrieve the `git status` from the project.",
    "Skipping the pre-commit hook.",
])

ROOT = "\n".join([
    "Failed to find the root of this git repository, cannot locate the `package.json`.",
    "Skipping the pre-commit hook.",
])

EMPTY = "\n".join([
    "No changes detected.",
    "Skipping the pre-commit hook.",
])

JSON = "\n".join([
    "Received an error while parsing or locating the `package.json` file:",
    "",
    "  {}",
    "",
    "Skipping the pre-commit hook.",
])

RUN = "\n".join([
    "We have no pre-commit hooks to run. Either you're missing the `scripts`",
    "in your `package.json` or have configured pre-commit to run nothing.",
    "Skipping the pre-commit hook.",
])

FAILURE = "\n".join([
    "We've failed to pass the specified git pre-commit hooks as the `{}`",
    "hook returned an exit code ({}). If you're feeling adventurous you can",
    "skip the git pre-commit hooks by committing using:",
    "",
    "  git commit -n (or --no-verify)",
    "",
    "Obviously this is not advised as you clearly broke things..",
])
