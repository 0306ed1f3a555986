"""Entry point selecting the fastest working colour matrix executor."""

from __future__ import annotations

import logging

from PySide6.QtGui import QImage

from ..color_matrix import ColorMatrix
from .fallback_executor import apply_matrix_fallback
from .jit_executor import apply_matrix_fast_qimage
from .numpy_executor import apply_matrix_vectorized
from .pillow_executor import apply_matrix_with_pillow

_LOGGER = logging.getLogger(__name__)


def apply_color_matrix(image: QImage, matrix: ColorMatrix) -> QImage:
    """Return an ARGB32 copy of *image* with *matrix* applied to every pixel.

    Executors are tried in order: Numba kernel, NumPy, Pillow and finally the
    ``QColor`` loop, which always succeeds.  *image* itself is never modified.
    """

    if image.isNull():
        return QImage()

    result = image.convertToFormat(QImage.Format.Format_ARGB32)
    if matrix.is_identity():
        return result

    try:
        apply_matrix_fast_qimage(result, matrix)
        return result
    except (BufferError, RuntimeError, TypeError, ValueError) as exc:
        _LOGGER.debug("JIT colour matrix path unavailable: %s", exc)

    if apply_matrix_vectorized(result, matrix):
        return result
    _LOGGER.debug("Vectorised colour matrix path unavailable; trying Pillow")

    adjusted = apply_matrix_with_pillow(result, matrix)
    if adjusted is not None:
        return adjusted
    _LOGGER.debug("Pillow colour matrix path unavailable; using QColor fallback")

    apply_matrix_fallback(result, matrix)
    return result
