"""Compositing surface: colour-filtered image with the stroke overlay on top.

The surface owns the :class:`~iEditor.core.editor_state.EditorState`.  The
display layer attaches it with a logical viewport size, forwards pointer
samples that are already in surface-local coordinates and repaints through
:meth:`CompositingSurface.paint`.  Export flattens the same drawing at a fixed
supersampling multiplier.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QBuffer, QByteArray, QIODevice, QRectF, QSize, QSizeF, Qt
from PySide6.QtGui import QImage, QPainter

from ..config import EXPORT_FORMAT, EXPORT_PIXEL_RATIO
from ..errors import CaptureError, NoImageError
from .color_matrix import ColorAdjustment, ColorMatrix
from .editor_state import EditorState
from .filters import apply_color_matrix
from .strokes import DEFAULT_STROKE_STYLE, StrokeStyle, paint_strokes

_LOGGER = logging.getLogger(__name__)


def fit_rect(image_size: QSizeF, bounds: QSizeF) -> QRectF:
    """Return the largest rect with *image_size*'s aspect ratio centred in *bounds*."""

    img_w, img_h = image_size.width(), image_size.height()
    view_w, view_h = bounds.width(), bounds.height()
    if img_w <= 0 or img_h <= 0 or view_w <= 0 or view_h <= 0:
        return QRectF()

    scale = min(view_w / img_w, view_h / img_h)
    width = img_w * scale
    height = img_h * scale
    return QRectF((view_w - width) / 2.0, (view_h - height) / 2.0, width, height)


def encode_png(image: QImage) -> bytes:
    """Serialise *image* to PNG bytes."""

    data = QByteArray()
    buffer = QBuffer(data)
    if not buffer.open(QIODevice.OpenModeFlag.WriteOnly):
        raise CaptureError("Could not open an in-memory buffer for encoding")
    try:
        if not image.save(buffer, EXPORT_FORMAT):
            raise CaptureError(f"Failed to encode the composite as {EXPORT_FORMAT}")
    finally:
        buffer.close()
    return bytes(data.data())


class CompositingSurface:
    """Own the editing state and render it live or flattened for export."""

    def __init__(self, stroke_style: StrokeStyle = DEFAULT_STROKE_STYLE) -> None:
        self._state = EditorState()
        self._stroke_style = stroke_style
        self._attached = False
        self._viewport: Optional[QSizeF] = None
        # (image cache key, matrix, filtered image) for the last colour pass.
        self._filtered: Optional[tuple[int, ColorMatrix, QImage]] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def has_image(self) -> bool:
        return self._state.has_image

    def load_image(self, image: QImage, source_path: Optional[Path] = None) -> None:
        """Replace the base image and reset adjustment and strokes."""

        if image.isNull():
            raise NoImageError("Cannot load an empty image")
        self._state = self._state.with_image(image, source_path)
        self._filtered = None
        _LOGGER.debug("Loaded %dx%d image from %s", image.width(), image.height(), source_path)

    def set_adjustment(self, adjustment: ColorAdjustment) -> bool:
        """Apply *adjustment*; return ``True`` if the state changed."""

        previous = self._state
        self._state = self._state.with_adjustment(adjustment)
        return self._state is not previous

    def set_brightness(self, value: float) -> bool:
        current = self._state.adjustment
        return self.set_adjustment(
            ColorAdjustment.clamped(value, current.contrast, current.saturation)
        )

    def set_contrast(self, value: float) -> bool:
        current = self._state.adjustment
        return self.set_adjustment(
            ColorAdjustment.clamped(current.brightness, value, current.saturation)
        )

    def set_saturation(self, value: float) -> bool:
        current = self._state.adjustment
        return self.set_adjustment(
            ColorAdjustment.clamped(current.brightness, current.contrast, value)
        )

    def add_point(self, x: float, y: float) -> bool:
        """Append a pointer sample given in surface-local coordinates."""

        previous = self._state
        self._state = self._state.with_point(x, y)
        return self._state is not previous

    def lift_pen(self) -> bool:
        """Close the current stroke."""

        previous = self._state
        self._state = self._state.with_pen_lift()
        return self._state is not previous

    # ------------------------------------------------------------------
    # Attachment
    # ------------------------------------------------------------------
    @property
    def is_attached(self) -> bool:
        return self._attached

    def attach(self, size: QSizeF | QSize | None = None) -> None:
        """Mark the surface as displayed with logical *size*.

        ``None`` sizes the surface to the image's natural dimensions.
        """

        self._attached = True
        self._viewport = QSizeF(size) if size is not None else None

    def detach(self) -> None:
        self._attached = False

    def logical_size(self) -> QSizeF:
        if self._viewport is not None:
            return QSizeF(self._viewport)
        image = self._state.image
        if image is None or image.isNull():
            return QSizeF()
        return QSizeF(image.size())

    def image_rect(self) -> QRectF:
        """Return where the image is drawn inside the logical surface."""

        image = self._state.image
        if image is None or image.isNull():
            return QRectF()
        return fit_rect(QSizeF(image.size()), self.logical_size())

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def filtered_image(self) -> QImage:
        """Return the base image with the current colour matrix applied."""

        image = self._state.image
        if image is None or image.isNull():
            return QImage()

        matrix = self._state.color_matrix()
        key = image.cacheKey()
        cached = self._filtered
        if cached is not None and cached[0] == key and cached[1] == matrix:
            return cached[2]

        filtered = apply_color_matrix(image, matrix)
        self._filtered = (key, matrix, filtered)
        return filtered

    def paint(self, painter: QPainter) -> None:
        """Draw the composite in logical surface coordinates."""

        if not self.has_image:
            return
        target = self.image_rect()
        if not target.isEmpty():
            painter.save()
            try:
                painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
                painter.drawImage(target, self.filtered_image())
            finally:
                painter.restore()
        paint_strokes(painter, self._state.strokes, self._stroke_style)

    def render(self, pixel_ratio: float = 1.0) -> QImage:
        """Return the composite rasterised at ``logical size * pixel_ratio``."""

        logical = self.logical_size()
        width = int(round(logical.width() * pixel_ratio))
        height = int(round(logical.height() * pixel_ratio))
        if width <= 0 or height <= 0:
            return QImage()

        target = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
        target.fill(Qt.GlobalColor.transparent)
        painter = QPainter(target)
        try:
            painter.scale(pixel_ratio, pixel_ratio)
            self.paint(painter)
        finally:
            painter.end()
        return target

    def capture(self, pixel_ratio: float = EXPORT_PIXEL_RATIO) -> QImage:
        """Flatten the composite for export.

        Raises :class:`NoImageError` when nothing is loaded and
        :class:`CaptureError` when the surface is detached or has no area.
        """

        if not self.has_image:
            raise NoImageError("No image loaded")
        if not self._attached:
            raise CaptureError("Editor surface is not attached to the display")
        if self.logical_size().isEmpty():
            raise CaptureError("Editor surface has zero size")

        image = self.render(pixel_ratio)
        if image.isNull():
            raise CaptureError("Failed to allocate the capture bitmap")
        return image

    def export_png(self, pixel_ratio: float = EXPORT_PIXEL_RATIO) -> bytes:
        """Capture at *pixel_ratio* and return lossless PNG bytes."""

        return encode_png(self.capture(pixel_ratio))


__all__ = ["CompositingSurface", "encode_png", "fit_rect"]
