"""Controller routing UI events into the compositing surface."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PySide6.QtCore import QObject, QThreadPool, Signal

from ....core.compositor import CompositingSurface
from ....errors import CaptureError, ImageLoadError, NoImageError
from ....io.gallery import ExportResult, GalleryExporter
from ....io.image_source import ImageSource, load_image_file
from ....utils.logging import get_logger
from ..tasks.export_worker import ExportWorker

logger = get_logger()

SAVED_MESSAGE = "Image Saved to Gallery"
NO_IMAGE_MESSAGE = "Pick or Capture an Image"


class EditorController(QObject):
    """Apply user input to the :class:`CompositingSurface` in arrival order.

    Export is asynchronous: the composite is captured on the calling thread,
    then encoded and written by an :class:`ExportWorker`.  Requests made while
    an export is running are coalesced into one follow-up export.
    """

    stateChanged = Signal()
    """Emitted after any mutation that requires a repaint."""

    imageLoaded = Signal()
    """Emitted after a new base image replaced the session."""

    notify = Signal(str)
    """Emitted with a transient user-facing message."""

    exportFinished = Signal(object)
    """Emitted with the :class:`ExportResult` of a successful export."""

    exportFailed = Signal(str)
    """Emitted with the message of a failed export."""

    def __init__(
        self,
        surface: CompositingSurface,
        image_source: ImageSource,
        exporter: GalleryExporter,
        *,
        thread_pool: Optional[QThreadPool] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._surface = surface
        self._image_source = image_source
        self._exporter = exporter
        self._pool = thread_pool or QThreadPool.globalInstance()
        self._job_id = 0
        self._active_job: Optional[int] = None
        self._export_pending = False
        # Keep running workers referenced until their signals are delivered.
        self._workers: dict[int, ExportWorker] = {}

    @property
    def surface(self) -> CompositingSurface:
        return self._surface

    @property
    def export_in_flight(self) -> bool:
        return self._active_job is not None

    # ------------------------------------------------------------------
    # Image acquisition
    # ------------------------------------------------------------------
    def pick_image(self) -> bool:
        return self._open_from(self._image_source.pick_from_library())

    def capture_image(self) -> bool:
        return self._open_from(self._image_source.capture_from_camera())

    def _open_from(self, path: Optional[Path]) -> bool:
        if path is None:
            return False
        return self.open_image(path)

    def open_image(self, path: Path) -> bool:
        """Load *path* as the new base image, resetting the session."""

        try:
            image = load_image_file(path)
        except ImageLoadError as exc:
            logger.warning("Failed to open %s: %s", path, exc)
            self.notify.emit(f"Error: {exc}")
            return False
        self._surface.load_image(image, path)
        logger.info("Opened %s (%dx%d)", path, image.width(), image.height())
        self.imageLoaded.emit()
        self.stateChanged.emit()
        return True

    # ------------------------------------------------------------------
    # Adjustments and strokes
    # ------------------------------------------------------------------
    def set_adjustment_value(self, key: str, value: float) -> None:
        setters = {
            "Brightness": self._surface.set_brightness,
            "Contrast": self._surface.set_contrast,
            "Saturation": self._surface.set_saturation,
        }
        try:
            setter = setters[key]
        except KeyError:
            raise ValueError(f"Unknown adjustment {key!r}") from None
        if setter(value):
            self.stateChanged.emit()

    def pointer_moved(self, x: float, y: float) -> None:
        if self._surface.add_point(x, y):
            self.stateChanged.emit()

    def pointer_released(self) -> None:
        if self._surface.lift_pen():
            self.stateChanged.emit()

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def request_export(self) -> bool:
        """Start an export, or queue one if an export is already running.

        Returns ``False`` when the export could not be started.
        """

        if not self._surface.has_image:
            self.notify.emit(NO_IMAGE_MESSAGE)
            return False
        if self._active_job is not None:
            self._export_pending = True
            logger.info("Export %d still running; queued another", self._active_job)
            return True
        return self._start_export()

    def _start_export(self) -> bool:
        try:
            image = self._surface.capture()
        except (CaptureError, NoImageError) as exc:
            logger.warning("Capture failed: %s", exc)
            self._report_failure(str(exc))
            return False

        self._job_id += 1
        job_id = self._job_id
        worker = ExportWorker(self._exporter, image, job_id)
        worker.signals.finished.connect(self._handle_export_finished)
        worker.signals.failed.connect(self._handle_export_failed)
        self._workers[job_id] = worker
        self._active_job = job_id
        self._pool.start(worker)
        return True

    def _handle_export_finished(self, result: ExportResult, job_id: int) -> None:
        self._workers.pop(job_id, None)
        self.notify.emit(SAVED_MESSAGE)
        self.exportFinished.emit(result)
        self._drain_queue(job_id)

    def _handle_export_failed(self, message: str, job_id: int) -> None:
        self._workers.pop(job_id, None)
        self._report_failure(message)
        self._drain_queue(job_id)

    def _report_failure(self, message: str) -> None:
        self.notify.emit(f"Error: {message}")
        self.exportFailed.emit(message)

    def _drain_queue(self, job_id: int) -> None:
        if self._active_job == job_id:
            self._active_job = None
        if self._export_pending and self._active_job is None:
            self._export_pending = False
            self._start_export()


__all__ = ["EditorController", "NO_IMAGE_MESSAGE", "SAVED_MESSAGE"]
