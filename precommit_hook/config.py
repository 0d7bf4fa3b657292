"""
Configuration Resolver - Turns a project's package.json into run settings.

The pre-commit configuration can live in several places of the manifest:

  {"pre-commit": ["lint", "test"]}                  # plain list of scripts
  {"pre-commit": "lint, test"}                      # comma/space separated
  {"pre-commit": {"run": [...], "silent": true}}    # object form
  {"precommit": ...}                                # same, without the dash
  {"pre-commit.silent": true, "precommit.colors": false}   # flattened options

When nothing is configured but the project has a real `scripts.test` entry,
the hook defaults to running `npm run test`.
"""

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

MANIFEST_NAME = "package.json"

# The `scripts.test` value `npm init` writes when no test runner is set up.
PLACEHOLDER_TEST = 'echo "Error: no test specified" && exit 1'

OPTIONS = ("silent", "colors", "template")

_RUN_SEPARATOR = re.compile(r"[, ]+")


# =============================================================================
# Data Model
# =============================================================================

@dataclass(frozen=True)
class RunConfiguration:
    """Resolved pre-commit settings for a single hook invocation."""

    silent: bool = False
    colors: bool | None = None
    template: str | None = None
    run: tuple[str, ...] = ()


@dataclass(frozen=True)
class Manifest:
    """Read-only view over the parsed package.json object."""

    data: dict[str, Any]

    def precommit_section(self) -> Any | None:
        """Value of `pre-commit`, falling back to `precommit`."""
        section = self.data.get("pre-commit")
        if is_unset(section):
            section = self.data.get("precommit")
        return section

    def flattened_option(self, name: str) -> tuple[bool, Any]:
        """
        Look up a dotted option key such as `precommit.silent`.

        Returns:
            Tuple of (found, value). `precommit.<name>` wins over
            `pre-commit.<name>`.
        """
        for key in (f"precommit.{name}", f"pre-commit.{name}"):
            if key in self.data:
                return True, self.data[key]
        return False, None

    def test_script(self) -> str | None:
        scripts = self.data.get("scripts")
        if not isinstance(scripts, dict):
            return None
        test = scripts.get("test")
        return test if test else None


# =============================================================================
# Loading
# =============================================================================

def load_manifest(root: Path | str) -> Manifest:
    """
    Read and parse `<root>/package.json`.

    Raises:
        OSError: The file is missing or unreadable.
        ValueError: The content is not valid JSON or not a JSON object.
    """
    path = Path(root) / MANIFEST_NAME
    data = json.loads(path.read_text(encoding="utf-8-sig"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a JSON object")
    return Manifest(data)


# =============================================================================
# Resolution
# =============================================================================

def is_unset(value: Any) -> bool:
    """
    True for null, false, "" and 0.

    Empty lists and objects count as set: `"pre-commit": []` means "run nothing".
    """
    return value in (None, False, "", 0)


def split_scripts(value: str) -> list[str]:
    """Split `"lint, test"` style strings into script names."""
    return [name for name in _RUN_SEPARATOR.split(value) if name]


def resolve_config(manifest: Manifest) -> RunConfiguration:
    """Build the RunConfiguration for a manifest. Never raises on odd shapes."""
    pre = manifest.precommit_section()
    base = pre if isinstance(pre, dict) else {}

    options: dict[str, Any] = {}
    for name in OPTIONS:
        if name in base:
            options[name] = base[name]
            continue
        found, value = manifest.flattened_option(name)
        if found:
            options[name] = value

    run = base.get("run")
    if is_unset(run):
        run = pre
    if isinstance(run, str):
        run = split_scripts(run)

    if not isinstance(run, list):
        test = manifest.test_script()
        run = ["test"] if test and test != PLACEHOLDER_TEST else []

    colors = options.get("colors")
    template = options.get("template")

    return RunConfiguration(
        silent=bool(options.get("silent")),
        colors=None if colors is None else colors is not False,
        template=str(template) if template else None,
        run=tuple(str(script) for script in run),
    )
