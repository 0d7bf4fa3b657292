"""Shared pytest fixtures for hook tests."""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Any, Callable

import pytest


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with initial commit."""
    repo_dir = tmp_path / "test-repo"
    repo_dir.mkdir()

    subprocess.run(["git", "init"], cwd=repo_dir, check=True, capture_output=True)
    subprocess.run(
        ["git", "config", "user.email", "test@example.com"],
        cwd=repo_dir,
        check=True,
        capture_output=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test User"],
        cwd=repo_dir,
        check=True,
        capture_output=True,
    )

    readme = repo_dir / "README.md"
    readme.write_text("# Test Repository\n")
    subprocess.run(["git", "add", "README.md"], cwd=repo_dir, check=True, capture_output=True)
    subprocess.run(
        ["git", "commit", "-m", "Initial commit"],
        cwd=repo_dir,
        check=True,
        capture_output=True,
    )

    return repo_dir


@pytest.fixture
def write_manifest() -> Callable[[Path, Any], Path]:
    """Write a package.json into a directory."""
    def _write(directory: Path, data: Any) -> Path:
        path = directory / "package.json"
        path.write_text(json.dumps(data, indent=2))
        return path
    return _write


@pytest.fixture
def fake_npm(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Put a fake `npm` on PATH.

    It appends the script name to npm-calls.log and exits with the code found
    in `<script>.code` next to it (0 when missing).
    """
    if sys.platform == "win32":
        pytest.skip("fake npm is a POSIX shell script")

    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    npm = bin_dir / "npm"
    npm.write_text(
        "#!/bin/sh\n"
        f'echo "$3" >> "{bin_dir}/npm-calls.log"\n'
        f'if [ -f "{bin_dir}/$3.code" ]; then exit "$(cat "{bin_dir}/$3.code")"; fi\n'
        "exit 0\n"
    )
    npm.chmod(0o755)
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    return bin_dir
