"""Image acquisition: choosing a file and decoding it into a ``QImage``."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from PySide6.QtGui import QImage, QImageReader

from ..config import IMAGE_FILE_FILTER
from ..errors import ImageLoadError
from ..utils.logging import get_logger

logger = get_logger()


class ImageSource(ABC):
    """Supplies image files on request.

    Both methods return ``None`` when the user dismisses the request; that is
    a normal outcome, not an error.
    """

    @abstractmethod
    def pick_from_library(self) -> Optional[Path]:
        """Let the user choose an existing photo."""

    @abstractmethod
    def capture_from_camera(self) -> Optional[Path]:
        """Take a new photo and return the file it was stored in."""


class DialogImageSource(ImageSource):
    """Desktop image source backed by ``QFileDialog``."""

    def __init__(self, parent=None, start_dir: Optional[Path] = None) -> None:
        self._parent = parent
        self._start_dir = start_dir

    def pick_from_library(self) -> Optional[Path]:
        from PySide6.QtWidgets import QFileDialog

        start = str(self._start_dir) if self._start_dir is not None else ""
        filename, _ = QFileDialog.getOpenFileName(
            self._parent, "Pick an Image", start, IMAGE_FILE_FILTER
        )
        if not filename:
            return None
        path = Path(filename)
        self._start_dir = path.parent
        return path

    def capture_from_camera(self) -> Optional[Path]:
        logger.info("Camera capture is not available on this platform")
        return None


def load_image_file(path: Path) -> QImage:
    """Decode *path*, honouring EXIF orientation.

    Raises
    ------
    ImageLoadError
        When the file is missing or Qt cannot decode it.
    """

    if not path.is_file():
        raise ImageLoadError(f"Image file not found: {path}")

    reader = QImageReader(str(path))
    reader.setAutoTransform(True)
    image = reader.read()
    if image.isNull():
        raise ImageLoadError(f"Could not decode {path.name}: {reader.errorString()}")
    return image


__all__ = ["DialogImageSource", "ImageSource", "load_image_file"]
