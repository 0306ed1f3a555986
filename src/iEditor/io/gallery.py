"""Persist exported PNG bytes privately and mirror them into the gallery."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from ..config import EXPORT_SUFFIX, data_dir, gallery_dir
from ..errors import PersistenceError
from ..utils.fileio import atomic_write_bytes, copy_into
from ..utils.logging import get_logger

logger = get_logger()


def unique_filename() -> str:
    """Return a collision-free export file name."""

    return f"{uuid.uuid4().hex}{EXPORT_SUFFIX}"


@dataclass(frozen=True)
class ExportResult:
    private_path: Path
    gallery_path: Path


class GalleryExporter:
    """Write exports to the private directory, then copy them to the gallery.

    Directories are resolved lazily so environment overrides set after
    construction still apply.
    """

    def __init__(
        self,
        private_dir: Optional[Path] = None,
        shared_dir: Optional[Path] = None,
        *,
        name_factory: Callable[[], str] = unique_filename,
    ) -> None:
        self._private_dir = private_dir
        self._shared_dir = shared_dir
        self._name_factory = name_factory

    @property
    def private_dir(self) -> Path:
        return self._private_dir if self._private_dir is not None else data_dir()

    @property
    def shared_dir(self) -> Path:
        return self._shared_dir if self._shared_dir is not None else gallery_dir()

    def save(self, png_bytes: bytes) -> ExportResult:
        """Persist *png_bytes* and return both resulting paths.

        Raises
        ------
        PersistenceError
            ``stage="write"`` when the private copy fails, ``stage="gallery"``
            when only the gallery copy fails (``written_path`` then points at
            the private file).
        """

        target = self.private_dir / self._name_factory()
        try:
            atomic_write_bytes(target, png_bytes)
        except OSError as exc:
            raise PersistenceError(
                f"Could not write {target.name}: {exc.strerror or exc}",
                stage="write",
            ) from exc
        logger.info("Wrote export to %s (%d bytes)", target, len(png_bytes))

        try:
            shared = copy_into(target, self.shared_dir)
        except OSError as exc:
            raise PersistenceError(
                f"Saved {target} but could not add it to the gallery: {exc.strerror or exc}",
                stage="gallery",
                written_path=target,
            ) from exc
        logger.info("Copied export to gallery %s", shared)
        return ExportResult(private_path=target, gallery_path=shared)


__all__ = ["ExportResult", "GalleryExporter", "unique_filename"]
