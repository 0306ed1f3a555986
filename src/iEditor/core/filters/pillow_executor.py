"""Pillow colour matrix executor built on ``Image.convert(mode, matrix)``.

Pillow only accepts a 3x4 RGB matrix, so this path handles matrices whose
RGB rows ignore alpha and whose alpha row is the identity.  Every matrix
produced from a :class:`~iEditor.core.color_matrix.ColorAdjustment` qualifies.
"""

from __future__ import annotations

from PIL import Image
from PySide6.QtGui import QImage

from ..color_matrix import ColorMatrix
from .utils import _resolve_pixel_buffer


def pillow_coefficients(matrix: ColorMatrix) -> tuple[float, ...] | None:
    """Return Pillow's 12-tuple for *matrix* or ``None`` if it does not fit."""

    if matrix.row(3) != (0.0, 0.0, 0.0, 1.0, 0.0):
        return None
    coefficients: list[float] = []
    for index in range(3):
        r, g, b, a, offset = matrix.row(index)
        if a != 0.0:
            return None
        coefficients.extend((r, g, b, offset))
    return tuple(coefficients)


def apply_matrix_with_pillow(image: QImage, matrix: ColorMatrix) -> QImage | None:
    """Return a transformed copy of the ARGB32 *image*.

    Returns ``None`` when the matrix cannot be expressed for Pillow or the
    pixel buffer is unavailable.
    """

    coefficients = pillow_coefficients(matrix)
    if coefficients is None:
        return None

    width = image.width()
    height = image.height()
    if width <= 0 or height <= 0:
        return QImage(image)

    try:
        view, buffer_guard = _resolve_pixel_buffer(image)
    except (BufferError, RuntimeError, TypeError):
        return None
    guard = buffer_guard
    _ = guard

    source = Image.frombuffer(
        "RGBA",
        (width, height),
        view,
        "raw",
        "BGRA",
        image.bytesPerLine(),
        1,
    ).copy()
    alpha = source.getchannel("A")
    adjusted = source.convert("RGB").convert("RGB", coefficients)
    adjusted.putalpha(alpha)

    data = adjusted.tobytes("raw", "BGRA")
    result = QImage(data, width, height, width * 4, QImage.Format.Format_ARGB32)
    # ``QImage`` does not own ``data``; copy before the bytes go out of scope.
    return result.copy()
