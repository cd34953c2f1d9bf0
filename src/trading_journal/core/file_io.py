"""Safe file I/O utilities.

Provides atomic whole-file replacement for the JSON blob store with file
locking (``fcntl``) and ``fsync`` to minimise data loss on crash or
concurrent access.
"""

from __future__ import annotations

import fcntl
import os
import tempfile
from pathlib import Path


def safe_write_text(path: Path, text: str) -> None:
    """Atomically replace *path* with *text*.

    * The content is written to a temporary file in the same directory,
      flushed and ``fsync``-ed, then moved over *path* with
      ``os.replace`` so readers see either the old or the new file.
    * ``fcntl.LOCK_EX`` on a sibling ``.lock`` file serializes writers
      from concurrent processes sharing the same data directory.
    * Parent directories are created as needed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    lock_path = path.with_name(path.name + ".lock")
    with open(lock_path, "a") as lock:
        fcntl.flock(lock.fileno(), fcntl.LOCK_EX)
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(text)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        finally:
            fcntl.flock(lock.fileno(), fcntl.LOCK_UN)


def read_text_or_none(path: Path) -> str | None:
    """Return the file's text, or ``None`` if it does not exist."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
