"""Top-level editor window."""

from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import QMainWindow, QStyle, QToolBar, QVBoxLayout, QWidget

from ...config import WINDOW_TITLE
from ...core.compositor import CompositingSurface
from ...io.gallery import GalleryExporter
from ...io.image_source import DialogImageSource, ImageSource
from .controllers.editor_controller import EditorController
from .widgets.adjustment_panel import AdjustmentPanel
from .widgets.editor_canvas import EditorCanvas

NOTIFICATION_TIMEOUT_MS = 3000


class MainWindow(QMainWindow):
    """Toolbar with Camera/Photo/Save, the canvas and the adjustment sliders."""

    def __init__(
        self,
        *,
        image_source: Optional[ImageSource] = None,
        exporter: Optional[GalleryExporter] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(900, 760)

        self.controller = EditorController(
            CompositingSurface(),
            image_source or DialogImageSource(self),
            exporter or GalleryExporter(),
            parent=self,
        )

        self.canvas = EditorCanvas(self.controller, self)
        self.panel = AdjustmentPanel(self)
        self.panel.setEnabled(False)

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.canvas, 1)
        layout.addWidget(self.panel)
        self.setCentralWidget(central)

        toolbar = QToolBar("Actions", self)
        toolbar.setMovable(False)
        style = self.style()
        self.camera_action = toolbar.addAction(
            style.standardIcon(QStyle.StandardPixmap.SP_DesktopIcon), "Camera"
        )
        self.photo_action = toolbar.addAction(
            style.standardIcon(QStyle.StandardPixmap.SP_DirOpenIcon), "Photo"
        )
        self.save_action = toolbar.addAction(
            style.standardIcon(QStyle.StandardPixmap.SP_DialogSaveButton), "Save"
        )
        self.addToolBar(toolbar)

        self.camera_action.triggered.connect(lambda: self.controller.capture_image())
        self.photo_action.triggered.connect(lambda: self.controller.pick_image())
        self.save_action.triggered.connect(lambda: self.controller.request_export())
        self.panel.valueChanged.connect(self.controller.set_adjustment_value)
        self.controller.imageLoaded.connect(self._handle_image_loaded)
        self.controller.notify.connect(self._show_notification)

    def _handle_image_loaded(self) -> None:
        adjustment = self.controller.surface.state.adjustment
        self.panel.set_values(adjustment.as_mapping())
        self.panel.setEnabled(True)

    def _show_notification(self, message: str) -> None:
        self.statusBar().showMessage(message, NOTIFICATION_TIMEOUT_MS)


__all__ = ["MainWindow"]
