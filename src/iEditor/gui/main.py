"""Application entry point."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Sequence

from PySide6.QtWidgets import QApplication

from ..config import APP_NAME
from ..utils.logging import get_logger
from .ui.main_window import MainWindow

logger = get_logger()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the editor; an optional first argument is opened immediately."""

    args = list(sys.argv if argv is None else argv)
    app = QApplication.instance() or QApplication(args)
    app.setApplicationName(APP_NAME)

    window = MainWindow()
    window.show()

    if len(args) > 1:
        window.controller.open_image(Path(args[1]))

    logger.info("%s started", APP_NAME)
    return app.exec()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
