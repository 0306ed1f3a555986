"""Per-pixel ``QColor`` colour matrix executor.

Slow, but it never touches the raw buffer and therefore works with any Qt
binding.  Its output matches the fast paths.
"""

from __future__ import annotations

from PySide6.QtGui import QColor, QImage

from ..color_matrix import ColorMatrix
from .utils import clamp_channel


def apply_matrix_fallback(image: QImage, matrix: ColorMatrix) -> None:
    """Transform *image* in-place one pixel at a time."""

    for y in range(image.height()):
        for x in range(image.width()):
            colour = image.pixelColor(x, y)
            r, g, b, a = matrix.apply(
                (colour.red(), colour.green(), colour.blue(), colour.alpha())
            )
            image.setPixelColor(
                x,
                y,
                QColor(clamp_channel(r), clamp_channel(g), clamp_channel(b), clamp_channel(a)),
            )
