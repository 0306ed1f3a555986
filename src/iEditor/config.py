"""Static configuration for the editor.

Directory locations can be overridden at runtime through the
``IEDITOR_DATA_DIR`` and ``IEDITOR_GALLERY_DIR`` environment variables, and
the log verbosity through ``IEDITOR_LOG_LEVEL``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

APP_NAME = "iEditor"
WINDOW_TITLE = "Advanced Image Editor"

ADJUSTMENT_KEYS = ("Brightness", "Contrast", "Saturation")
"""Canonical slider order."""

ADJUSTMENT_RANGES: Mapping[str, tuple[float, float]] = {
    "Brightness": (-1.0, 1.0),
    "Contrast": (0.0, 4.0),
    "Saturation": (0.0, 2.0),
}
"""Inclusive ranges for each adjustment slider."""

ADJUSTMENT_DEFAULTS: Mapping[str, float] = {
    "Brightness": 0.0,
    "Contrast": 1.0,
    "Saturation": 1.0,
}

LUMINANCE_WEIGHTS = (0.2126, 0.7152, 0.0722)
"""ITU-R BT.709 luma coefficients for R, G and B."""

CHANNEL_MAX = 255.0
MID_GRAY = 0.5 * CHANNEL_MAX

STROKE_WIDTH = 4.0
"""Pen width in logical surface units."""

STROKE_COLOR = (244, 67, 54)
"""Solid red used for every stroke."""

EXPORT_PIXEL_RATIO = 3.0
"""Supersampling multiplier applied when flattening for export."""

EXPORT_FORMAT = "PNG"
EXPORT_SUFFIX = ".png"

IMAGE_FILE_FILTER = "Images (*.png *.jpg *.jpeg *.bmp *.gif *.webp *.tif *.tiff)"


def _env_path(name: str) -> Path | None:
    value = os.environ.get(name, "").strip()
    if not value:
        return None
    return Path(value).expanduser()


def data_dir() -> Path:
    """Return the application-private directory receiving exports."""

    override = _env_path("IEDITOR_DATA_DIR")
    if override is not None:
        return override

    from PySide6.QtCore import QStandardPaths

    location = QStandardPaths.writableLocation(
        QStandardPaths.StandardLocation.AppDataLocation
    )
    if location:
        return Path(location) / "exports"
    return Path.home() / f".{APP_NAME.lower()}" / "exports"


def gallery_dir() -> Path:
    """Return the shared media directory that mirrors every export."""

    override = _env_path("IEDITOR_GALLERY_DIR")
    if override is not None:
        return override

    from PySide6.QtCore import QStandardPaths

    location = QStandardPaths.writableLocation(
        QStandardPaths.StandardLocation.PicturesLocation
    )
    base = Path(location) if location else Path.home() / "Pictures"
    return base / APP_NAME


def log_level(default: int = logging.INFO) -> int:
    """Return the level named by ``IEDITOR_LOG_LEVEL``, or *default*."""

    name = os.environ.get("IEDITOR_LOG_LEVEL", "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default
