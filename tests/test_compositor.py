"""Tests for CompositingSurface rendering and export capture."""

from __future__ import annotations

from pathlib import Path

import pytest

pytest.importorskip("PySide6", reason="PySide6 is required for compositing tests", exc_type=ImportError)

from PySide6.QtCore import QSizeF
from PySide6.QtGui import QImage

from iEditor.config import EXPORT_PIXEL_RATIO
from iEditor.core.color_matrix import ColorAdjustment
from iEditor.core.compositor import CompositingSurface, encode_png, fit_rect
from iEditor.errors import CaptureError, NoImageError


@pytest.fixture
def surface(solid_image) -> CompositingSurface:
    surface = CompositingSurface()
    surface.load_image(solid_image(40, 30, (100, 100, 100)), Path("gray.png"))
    surface.attach()
    return surface


def test_fit_rect_centres_with_aspect_ratio() -> None:
    rect = fit_rect(QSizeF(200, 100), QSizeF(100, 100))

    assert (rect.x(), rect.y(), rect.width(), rect.height()) == (0.0, 25.0, 100.0, 50.0)
    assert fit_rect(QSizeF(0, 10), QSizeF(10, 10)).isEmpty()


def test_loading_resets_session(surface: CompositingSurface, solid_image) -> None:
    surface.set_adjustment(ColorAdjustment(brightness=0.5, contrast=2.0, saturation=0.0))
    surface.add_point(1, 1)
    surface.add_point(5, 5)
    surface.lift_pen()

    surface.load_image(solid_image(8, 8))

    assert surface.state.adjustment == ColorAdjustment()
    assert surface.state.strokes.is_empty()


def test_mutations_without_image_do_nothing(qapp) -> None:
    surface = CompositingSurface()

    assert not surface.add_point(1, 2)
    assert not surface.lift_pen()
    assert not surface.set_brightness(0.5)
    assert surface.render().isNull()


def test_slider_setters_clamp_and_keep_other_values(surface: CompositingSurface) -> None:
    assert surface.set_contrast(1.5)
    assert surface.set_brightness(7.0)
    assert not surface.set_brightness(1.0)

    assert surface.state.adjustment == ColorAdjustment(brightness=1.0, contrast=1.5, saturation=1.0)


def test_load_rejects_null_image(qapp) -> None:
    with pytest.raises(NoImageError):
        CompositingSurface().load_image(QImage())


def test_capture_requires_image(qapp) -> None:
    surface = CompositingSurface()
    surface.attach(QSizeF(10, 10))

    with pytest.raises(NoImageError):
        surface.capture()


def test_capture_requires_attachment(surface: CompositingSurface) -> None:
    surface.add_point(1, 1)
    before = surface.state
    surface.detach()

    with pytest.raises(CaptureError):
        surface.capture()
    assert surface.state is before


def test_capture_rejects_zero_size(surface: CompositingSurface) -> None:
    surface.attach(QSizeF(0, 0))

    with pytest.raises(CaptureError):
        surface.capture()


def test_end_to_end_export(surface: CompositingSurface) -> None:
    surface.set_brightness(0.2)
    surface.set_contrast(1.2)
    surface.set_saturation(0.8)
    surface.add_point(5, 5)
    surface.add_point(35, 5)
    surface.lift_pen()

    captured = surface.capture()

    assert captured.width() == 40 * EXPORT_PIXEL_RATIO
    assert captured.height() == 30 * EXPORT_PIXEL_RATIO

    # Gray 100 -> contrast 1.2 around 127.5 -> +51 brightness = 145.5.
    body = captured.pixelColor(60, 60)
    for channel in (body.red(), body.green(), body.blue()):
        assert abs(channel - 145.5) <= 1
    stroke = captured.pixelColor(20 * 3, 5 * 3)
    assert stroke.red() > 200 and stroke.green() < 120

    png = surface.export_png()
    assert png.startswith(b"\x89PNG\r\n\x1a\n")
    decoded = QImage.fromData(png, "PNG")
    assert (decoded.width(), decoded.height()) == (120, 90)


def _stroke_thickness(image: QImage, x: int) -> int:
    """Count the rows in column *x* covered by the red stroke."""

    covered = 0
    for y in range(image.height()):
        color = image.pixelColor(x, y)
        if color.red() > 180 and color.green() < 130:
            covered += 1
    return covered


def test_exported_strokes_keep_their_displayed_width(surface: CompositingSurface) -> None:
    surface.add_point(5, 15)
    surface.add_point(35, 15)
    surface.lift_pen()

    live = _stroke_thickness(surface.render(1.0), 20)
    exported = _stroke_thickness(surface.capture(), int(20 * EXPORT_PIXEL_RATIO))

    assert abs(live - 4) <= 1
    assert abs(exported - 4 * EXPORT_PIXEL_RATIO) <= 1
    assert abs(exported - live * EXPORT_PIXEL_RATIO) <= EXPORT_PIXEL_RATIO


def test_viewport_letterboxes_image(surface: CompositingSurface) -> None:
    surface.attach(QSizeF(80, 30))

    rendered = surface.render(1.0)

    assert (rendered.width(), rendered.height()) == (80, 30)
    assert rendered.pixelColor(2, 15).alpha() == 0
    assert rendered.pixelColor(40, 15).red() == 100


def test_filtered_image_is_cached_per_matrix(surface: CompositingSurface) -> None:
    first = surface.filtered_image()
    assert surface.filtered_image().cacheKey() == first.cacheKey()

    surface.set_saturation(0.0)
    assert surface.filtered_image().cacheKey() != first.cacheKey()


def test_encode_png_round_trips_dimensions(solid_image) -> None:
    data = encode_png(solid_image(7, 3))

    assert QImage.fromData(data, "PNG").size().width() == 7
