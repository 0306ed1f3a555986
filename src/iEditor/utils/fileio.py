"""Helpers for writing binary files atomically."""

from __future__ import annotations

import os
import shutil
import time
from pathlib import Path


def _temporary_sibling(path: Path) -> Path:
    return path.with_suffix(path.suffix + ".tmp")


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Atomically write *data* into *path*, creating parent directories."""

    tmp_path = _temporary_sibling(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with tmp_path.open("wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    # Windows occasionally holds a transient lock on freshly written files
    # (antivirus, indexers), so the rename is retried with a short back-off.
    for attempt in range(5):
        try:
            tmp_path.replace(path)
            return
        except PermissionError:
            if attempt == 4:
                tmp_path.unlink(missing_ok=True)
                raise
            time.sleep(0.05 * (attempt + 1))


def copy_into(source: Path, directory: Path) -> Path:
    """Copy *source* into *directory* keeping its name and return the new path."""

    directory.mkdir(parents=True, exist_ok=True)
    target = directory / source.name
    tmp_target = _temporary_sibling(target)
    try:
        shutil.copyfile(source, tmp_target)
        tmp_target.replace(target)
    except OSError:
        tmp_target.unlink(missing_ok=True)
        raise
    return target
