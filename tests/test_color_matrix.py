"""Tests for colour matrix composition."""

from __future__ import annotations

import pytest

from iEditor.core.color_matrix import (
    IDENTITY_MATRIX,
    ColorAdjustment,
    ColorMatrix,
    brightness_matrix,
    build_color_matrix,
    compose,
    contrast_matrix,
    saturation_matrix,
)

LUMA_ROW = (0.2126, 0.7152, 0.0722, 0.0, 0.0)


def test_identity_adjustment_yields_identity_matrix() -> None:
    matrix = build_color_matrix(ColorAdjustment(brightness=0.0, contrast=1.0, saturation=1.0))

    expected = (
        1.0, 0.0, 0.0, 0.0, 0.0,
        0.0, 1.0, 0.0, 0.0, 0.0,
        0.0, 0.0, 1.0, 0.0, 0.0,
        0.0, 0.0, 0.0, 1.0, 0.0,
    )
    assert matrix.values == expected
    assert matrix.is_identity()
    assert ColorAdjustment().is_identity()


def test_zero_saturation_rows_are_pure_luminance() -> None:
    matrix = build_color_matrix(ColorAdjustment(saturation=0.0))

    for row in range(3):
        assert matrix.row(row) == LUMA_ROW
    assert matrix.row(3) == (0.0, 0.0, 0.0, 1.0, 0.0)


def test_contrast_pivots_around_mid_gray() -> None:
    matrix = build_color_matrix(ColorAdjustment(contrast=2.0))

    r, g, b, a = matrix.apply((127.5, 127.5, 127.5, 255.0))
    assert (r, g, b) == pytest.approx((127.5, 127.5, 127.5))
    assert a == 255.0

    white = matrix.apply((255.0, 255.0, 255.0, 255.0))
    assert all(channel >= 255.0 for channel in white[:3])


def test_brightness_adds_scaled_offset() -> None:
    matrix = build_color_matrix(ColorAdjustment(brightness=-0.5))

    assert matrix.apply((200.0, 100.0, 0.0, 255.0)) == pytest.approx((72.5, -27.5, -127.5, 255.0))


def test_oversaturation_extrapolates_away_from_gray() -> None:
    matrix = saturation_matrix(2.0)
    r, g, b, _ = matrix.apply((200.0, 100.0, 50.0, 255.0))
    gray = 0.2126 * 200.0 + 0.7152 * 100.0 + 0.0722 * 50.0

    assert r == pytest.approx(2 * 200.0 - gray)
    assert g == pytest.approx(2 * 100.0 - gray)
    assert b == pytest.approx(2 * 50.0 - gray)


def test_composition_order_is_saturation_contrast_brightness() -> None:
    adjustment = ColorAdjustment(brightness=0.2, contrast=1.5, saturation=0.5)

    manual = compose(
        brightness_matrix(0.2),
        compose(contrast_matrix(1.5), saturation_matrix(0.5)),
    )
    assert build_color_matrix(adjustment) == manual

    reversed_order = compose(
        saturation_matrix(0.5),
        compose(contrast_matrix(1.5), brightness_matrix(0.2)),
    )
    pixel = (200.0, 40.0, 90.0, 255.0)
    assert manual.apply(pixel) != pytest.approx(reversed_order.apply(pixel))


def test_composed_matrix_matches_step_by_step_application() -> None:
    adjustment = ColorAdjustment(brightness=0.1, contrast=0.7, saturation=1.3)
    pixel = (12.0, 180.0, 240.0, 128.0)

    stepwise = saturation_matrix(1.3).apply(pixel)
    stepwise = contrast_matrix(0.7).apply(stepwise)
    stepwise = brightness_matrix(0.1).apply(stepwise)

    assert build_color_matrix(adjustment).apply(pixel) == pytest.approx(stepwise)


def test_compose_folds_both_offsets() -> None:
    outer = contrast_matrix(2.0)
    inner = brightness_matrix(0.1)

    composed = compose(outer, inner)

    # 2 * 25.5 from the inner offset plus the outer pivot offset of -127.5.
    assert composed.at(0, 4) == pytest.approx(2.0 * 25.5 - 127.5)
    assert composed.at(3, 4) == 0.0


def test_compose_with_identity_is_neutral() -> None:
    matrix = build_color_matrix(ColorAdjustment(brightness=0.3, contrast=0.4, saturation=1.7))

    assert compose(IDENTITY_MATRIX, matrix) == matrix
    assert compose(matrix, IDENTITY_MATRIX) == matrix


def test_build_is_deterministic() -> None:
    adjustment = ColorAdjustment(brightness=-0.33, contrast=3.1, saturation=0.12)

    assert build_color_matrix(adjustment).values == build_color_matrix(adjustment).values


def test_clamped_forces_values_into_ranges() -> None:
    adjustment = ColorAdjustment.clamped(brightness=-3.0, contrast=9.0, saturation=-1.0)

    assert adjustment == ColorAdjustment(brightness=-1.0, contrast=4.0, saturation=0.0)


def test_as_mapping_uses_slider_keys() -> None:
    adjustment = ColorAdjustment(contrast=1.5)

    assert adjustment.as_mapping() == {"Brightness": 0.0, "Contrast": 1.5, "Saturation": 1.0}


def test_color_matrix_rejects_wrong_shape() -> None:
    with pytest.raises(ValueError):
        ColorMatrix((1.0,) * 19)
    with pytest.raises(ValueError):
        ColorMatrix.from_rows([[1.0, 0.0, 0.0, 0.0]])
    with pytest.raises(ValueError):
        IDENTITY_MATRIX.apply((1.0, 2.0, 3.0))
