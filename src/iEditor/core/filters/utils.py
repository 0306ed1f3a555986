"""Pixel buffer helpers shared by the colour matrix executors."""

from __future__ import annotations

import numpy as np
from PySide6.QtGui import QImage

from ..color_matrix import ColorMatrix


def _resolve_pixel_buffer(image: QImage) -> tuple[memoryview, object]:
    """Return a writable byte-level :class:`memoryview` over *image*'s pixels.

    The second element of the tuple is the object returned by
    ``QImage.bits()``; callers must keep it referenced while the view is in
    use or the memory may be reclaimed underneath them.
    """

    bytes_per_line = image.bytesPerLine()
    expected_size = bytes_per_line * image.height()
    buffer = image.bits()
    guard: object = buffer

    if isinstance(buffer, memoryview):
        view = buffer
    else:
        try:
            view = memoryview(buffer)
        except TypeError:
            if hasattr(buffer, "setsize"):
                buffer.setsize(expected_size)
                view = memoryview(buffer)
            else:
                raise RuntimeError("Unsupported QImage.bits() buffer wrapper") from None

    try:
        view = view.cast("B")
    except TypeError:
        view = view.cast("B", (view.nbytes,))

    if len(view) < expected_size:
        raise BufferError("QImage pixel buffer is smaller than expected")
    return view[:expected_size], guard


def matrix_array(matrix: ColorMatrix, dtype=np.float64) -> np.ndarray:
    """Return *matrix* as a ``(4, 5)`` NumPy array."""

    return np.asarray(matrix.values, dtype=dtype).reshape((4, 5))


def clamp_channel(value: float) -> int:
    """Round a 0..255 float to the nearest representable 8-bit level."""

    if value <= 0.0:
        return 0
    if value >= 255.0:
        return 255
    return int(value + 0.5)
