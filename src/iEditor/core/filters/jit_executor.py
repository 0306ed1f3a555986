"""Numba JIT colour matrix executor.

The kernel walks the raw ARGB32 buffer of a ``QImage`` directly, avoiding the
temporary float arrays the NumPy path allocates.
"""

from __future__ import annotations

import numpy as np
from numba import jit
from PySide6.QtGui import QImage

from ..color_matrix import ColorMatrix
from .utils import _resolve_pixel_buffer


def apply_matrix_fast_qimage(image: QImage, matrix: ColorMatrix) -> None:
    """Mutate the ARGB32 *image* in-place using the compiled kernel."""

    width = image.width()
    height = image.height()
    bytes_per_line = image.bytesPerLine()

    if width <= 0 or height <= 0:
        return

    view, buffer_guard = _resolve_pixel_buffer(image)
    buffer_handle = buffer_guard
    _ = buffer_handle

    if getattr(view, "readonly", False):
        raise BufferError("QImage pixel buffer is read-only")

    buffer = np.frombuffer(view, dtype=np.uint8, count=bytes_per_line * height)
    coefficients = np.asarray(matrix.values, dtype=np.float64)
    _apply_matrix_kernel(buffer, width, height, bytes_per_line, coefficients)


@jit(nopython=True, cache=True)
def _to_uint8(value: float) -> int:
    if value <= 0.0:
        return 0
    if value >= 255.0:
        return 255
    return int(value + 0.5)


@jit(nopython=True, cache=True)
def _apply_matrix_kernel(
    buffer: np.ndarray,
    width: int,
    height: int,
    bytes_per_line: int,
    m: np.ndarray,
) -> None:
    for y in range(height):
        row_offset = y * bytes_per_line
        for x in range(width):
            offset = row_offset + x * 4

            b = float(buffer[offset])
            g = float(buffer[offset + 1])
            r = float(buffer[offset + 2])
            a = float(buffer[offset + 3])

            out_r = m[0] * r + m[1] * g + m[2] * b + m[3] * a + m[4]
            out_g = m[5] * r + m[6] * g + m[7] * b + m[8] * a + m[9]
            out_b = m[10] * r + m[11] * g + m[12] * b + m[13] * a + m[14]
            out_a = m[15] * r + m[16] * g + m[17] * b + m[18] * a + m[19]

            buffer[offset] = _to_uint8(out_b)
            buffer[offset + 1] = _to_uint8(out_g)
            buffer[offset + 2] = _to_uint8(out_r)
            buffer[offset + 3] = _to_uint8(out_a)
