r"""Atomic, locked file writes used when installing the git hook.

**Guarantees:**
- Atomicity: content lands via temp file + os.replace, never half-written
- Isolation: portalocker holds an exclusive lock on a sibling `.lock` file
  for the duration of the write, so concurrent installs cannot interleave.
  The lock file is never deleted.

**Error handling:**
- LockTimeoutError: Lock not acquired within the timeout (default 5s)
- TransactionError: Any other write or rename failure
"""

import os
import tempfile
from pathlib import Path

import portalocker

DEFAULT_TIMEOUT = 5.0


class TransactionError(Exception):
    """Base exception for atomic write failures."""
    pass


class LockTimeoutError(TransactionError):
    """Raised when lock acquisition times out."""
    pass


def lock_path(path: Path) -> Path:
    return path.with_name(path.name + ".lock")


def atomic_write_text(
    path: Path | str,
    content: str,
    mode: int | None = None,
    fsync: bool = True,
    timeout: float = DEFAULT_TIMEOUT,
) -> None:
    """Write text atomically under an exclusive lock.

    Args:
        path: Target file path
        content: Text content to write
        mode: Permission bits applied before the rename (e.g. 0o755)
        fsync: Force OS flush to disk (default: True)
        timeout: Lock acquisition timeout in seconds

    Raises:
        LockTimeoutError: If the lock could not be acquired in time
        TransactionError: On write or rename failure
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    lock_file = lock_path(path)

    try:
        with portalocker.Lock(
            str(lock_file),
            mode="a",
            flags=portalocker.LOCK_EX | portalocker.LOCK_NB,
            timeout=timeout,
        ):
            _replace(path, content, mode, fsync)
    except portalocker.exceptions.LockException as e:
        raise LockTimeoutError(f"Lock timeout writing {path} after {timeout}s") from e


def _replace(path: Path, content: str, mode: int | None, fsync: bool) -> None:
    tmp_file = None
    tmp_path = None

    try:
        tmp_file = tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            delete=False,
            suffix=".tmp",
            newline="\n",
        )
        tmp_path = Path(tmp_file.name)

        tmp_file.write(content)
        tmp_file.flush()

        if fsync:
            os.fsync(tmp_file.fileno())

        tmp_file.close()

        if mode is not None:
            os.chmod(tmp_path, mode)

        os.replace(tmp_path, path)

    except Exception as e:
        if tmp_file is not None and not tmp_file.closed:
            tmp_file.close()
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise TransactionError(f"Atomic text write failed for {path}: {e}") from e
