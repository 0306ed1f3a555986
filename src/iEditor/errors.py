"""Exception hierarchy shared across iEditor."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class IEditorError(Exception):
    """Base class for recoverable editor failures."""


class NoImageError(IEditorError):
    """Raised when an operation needs a loaded image but none is present."""


class CaptureError(IEditorError):
    """Raised when the compositing surface cannot be captured.

    The surface must be attached to the render tree and have a non-empty
    logical size before it can be flattened into a bitmap.
    """


class ImageLoadError(IEditorError):
    """Raised when an image file cannot be decoded."""


class PersistenceError(IEditorError):
    """Raised when writing an exported image fails.

    ``stage`` names the step that failed (``"write"`` for the private copy,
    ``"gallery"`` for the shared media copy).  ``written_path`` is set when the
    private copy already exists on disk so partial exports can be located.
    """

    def __init__(self, message: str, *, stage: str, written_path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.stage = stage
        self.written_path = written_path


__all__ = [
    "CaptureError",
    "IEditorError",
    "ImageLoadError",
    "NoImageError",
    "PersistenceError",
]
