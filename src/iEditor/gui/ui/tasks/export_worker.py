"""Worker that encodes and persists a captured composite off the UI thread."""

from __future__ import annotations

from PySide6.QtCore import QObject, QRunnable, Signal
from PySide6.QtGui import QImage

from ....core.compositor import encode_png
from ....errors import IEditorError
from ....io.gallery import GalleryExporter
from ....utils.logging import get_logger

logger = get_logger()


class ExportSignals(QObject):
    """Signals emitted by :class:`ExportWorker`."""

    finished = Signal(object, int)
    """Emitted with the :class:`~iEditor.io.gallery.ExportResult` and job id."""

    failed = Signal(str, int)
    """Emitted with a user-facing message and the job id."""


class ExportWorker(QRunnable):
    """Encode *image* as PNG and hand it to the exporter."""

    def __init__(self, exporter: GalleryExporter, image: QImage, job_id: int) -> None:
        super().__init__()
        self._exporter = exporter
        self._image = image
        self._job_id = job_id
        self.signals = ExportSignals()

    @property
    def job_id(self) -> int:
        return self._job_id

    def run(self) -> None:  # type: ignore[override]
        try:
            png_bytes = encode_png(self._image)
            result = self._exporter.save(png_bytes)
        except IEditorError as exc:
            logger.warning("Export job %d failed: %s", self._job_id, exc)
            self.signals.failed.emit(str(exc), self._job_id)
            return
        except Exception as exc:
            logger.exception("Export job %d crashed", self._job_id)
            self.signals.failed.emit(f"Unexpected export failure: {exc}", self._job_id)
            return
        self.signals.finished.emit(result, self._job_id)


__all__ = ["ExportSignals", "ExportWorker"]
