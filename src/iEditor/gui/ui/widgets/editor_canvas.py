"""Widget presenting the compositing surface and collecting pen input."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QSizeF, Qt
from PySide6.QtGui import QMouseEvent, QPainter, QPaintEvent, QResizeEvent
from PySide6.QtWidgets import QSizePolicy, QWidget

from ..controllers.editor_controller import NO_IMAGE_MESSAGE, EditorController


class EditorCanvas(QWidget):
    """Paint the composite and forward pointer samples in local coordinates.

    The widget's own coordinate frame is the surface's frame, so mouse
    positions are passed through untouched.
    """

    def __init__(self, controller: EditorController, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._controller = controller
        self._drawing = False
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(200, 200)
        self.setMouseTracking(False)
        controller.stateChanged.connect(self.update)

    # ------------------------------------------------------------------
    # Attachment follows visibility and geometry
    # ------------------------------------------------------------------
    def showEvent(self, event) -> None:  # type: ignore[override]
        super().showEvent(event)
        self._controller.surface.attach(QSizeF(self.size()))

    def hideEvent(self, event) -> None:  # type: ignore[override]
        super().hideEvent(event)
        self._controller.surface.detach()

    def resizeEvent(self, event: QResizeEvent) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        if self.isVisible():
            self._controller.surface.attach(QSizeF(event.size()))

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------
    def paintEvent(self, event: QPaintEvent) -> None:  # type: ignore[override]
        painter = QPainter(self)
        try:
            surface = self._controller.surface
            if not surface.has_image:
                painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, NO_IMAGE_MESSAGE)
                return
            surface.paint(painter)
        finally:
            painter.end()

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------
    def mousePressEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        self._drawing = True
        position = event.position()
        self._controller.pointer_moved(position.x(), position.y())

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if not self._drawing:
            super().mouseMoveEvent(event)
            return
        position = event.position()
        self._controller.pointer_moved(position.x(), position.y())

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() != Qt.MouseButton.LeftButton or not self._drawing:
            super().mouseReleaseEvent(event)
            return
        self._drawing = False
        self._controller.pointer_released()


__all__ = ["EditorCanvas"]
