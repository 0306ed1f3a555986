"""NumPy vectorised colour matrix executor.

The whole ARGB32 buffer is viewed as an ``(height, width, 4)`` array and the
affine transform runs as one matrix product.
"""

from __future__ import annotations

import numpy as np
from PySide6.QtGui import QImage

from ..color_matrix import ColorMatrix
from .utils import _resolve_pixel_buffer, matrix_array

# Memory order of ``Format_ARGB32`` on little-endian hosts is B, G, R, A.
_BGRA_TO_RGBA = [2, 1, 0, 3]


def apply_matrix_vectorized(image: QImage, matrix: ColorMatrix) -> bool:
    """Transform the ARGB32 *image* in-place.

    Returns ``False`` when the pixel buffer cannot be exposed as a writable
    array so the caller can fall back to a slower executor.
    """

    width = image.width()
    height = image.height()
    bytes_per_line = image.bytesPerLine()

    if width <= 0 or height <= 0:
        return True

    try:
        view, guard = _resolve_pixel_buffer(image)
    except (BufferError, RuntimeError, TypeError):
        return False

    if getattr(view, "readonly", False):
        return False

    buffer_guard = guard
    _ = buffer_guard

    buffer = np.frombuffer(view, dtype=np.uint8, count=bytes_per_line * height)
    try:
        surface = buffer.reshape((height, bytes_per_line))
    except ValueError:
        return False

    region = surface[:, : width * 4].reshape((height, width, 4))

    rgba = region[..., _BGRA_TO_RGBA].astype(np.float32)
    m = matrix_array(matrix, dtype=np.float32)
    transformed = rgba @ m[:, :4].T + m[:, 4]
    np.rint(transformed, out=transformed)
    np.clip(transformed, 0.0, 255.0, out=transformed)

    region[...] = transformed.astype(np.uint8)[..., _BGRA_TO_RGBA]
    return True
