import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Render without a display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def solid_image(qapp):
    """Return a factory for opaque ARGB32 images filled with one colour."""

    from PySide6.QtGui import QColor, QImage

    def _make(width: int = 40, height: int = 30, rgb=(100, 100, 100)) -> QImage:
        image = QImage(width, height, QImage.Format.Format_ARGB32)
        image.fill(QColor(*rgb))
        return image

    return _make


@pytest.fixture
def image_file(tmp_path, solid_image) -> Path:
    """Write a 40x30 gray PNG and return its path."""

    path = tmp_path / "source.png"
    assert solid_image().save(str(path), "PNG")
    return path
