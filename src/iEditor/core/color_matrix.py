"""Compose brightness, contrast and saturation into one affine colour matrix.

A :class:`ColorMatrix` is a 4x5 row-major affine transform acting on RGBA
colours expressed on the 0..255 scale::

    out[i] = M[i][0]*r + M[i][1]*g + M[i][2]*b + M[i][3]*a + M[i][4]

Each adjustment contributes both a scale and an offset, so the individual
matrices do not commute.  :func:`build_color_matrix` always applies saturation
first, then contrast, then brightness.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ..config import (
    ADJUSTMENT_DEFAULTS,
    ADJUSTMENT_RANGES,
    CHANNEL_MAX,
    LUMINANCE_WEIGHTS,
    MID_GRAY,
)

ROWS = 4
COLUMNS = 5


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, float(value)))


@dataclass(frozen=True)
class ColorAdjustment:
    """Slider values driving the colour matrix.

    The default instance is the identity adjustment.
    """

    brightness: float = ADJUSTMENT_DEFAULTS["Brightness"]
    contrast: float = ADJUSTMENT_DEFAULTS["Contrast"]
    saturation: float = ADJUSTMENT_DEFAULTS["Saturation"]

    @classmethod
    def clamped(
        cls,
        brightness: float = ADJUSTMENT_DEFAULTS["Brightness"],
        contrast: float = ADJUSTMENT_DEFAULTS["Contrast"],
        saturation: float = ADJUSTMENT_DEFAULTS["Saturation"],
    ) -> ColorAdjustment:
        """Return an adjustment with every value forced into its slider range."""

        return cls(
            brightness=_clamp(brightness, *ADJUSTMENT_RANGES["Brightness"]),
            contrast=_clamp(contrast, *ADJUSTMENT_RANGES["Contrast"]),
            saturation=_clamp(saturation, *ADJUSTMENT_RANGES["Saturation"]),
        )

    def as_mapping(self) -> dict[str, float]:
        return {
            "Brightness": self.brightness,
            "Contrast": self.contrast,
            "Saturation": self.saturation,
        }

    def is_identity(self) -> bool:
        return self == ColorAdjustment()


@dataclass(frozen=True)
class ColorMatrix:
    """Immutable 4x5 affine colour transform stored as 20 row-major floats."""

    values: tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.values) != ROWS * COLUMNS:
            raise ValueError(
                f"ColorMatrix expects {ROWS * COLUMNS} values, got {len(self.values)}"
            )

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[float]]) -> ColorMatrix:
        flat: list[float] = []
        for row in rows:
            if len(row) != COLUMNS:
                raise ValueError(f"ColorMatrix rows need {COLUMNS} entries, got {len(row)}")
            flat.extend(float(value) for value in row)
        return cls(tuple(flat))

    @classmethod
    def identity(cls) -> ColorMatrix:
        return cls.from_rows(
            [1.0 if column == row else 0.0 for column in range(COLUMNS)]
            for row in range(ROWS)
        )

    def at(self, row: int, column: int) -> float:
        return self.values[row * COLUMNS + column]

    def row(self, index: int) -> tuple[float, ...]:
        start = index * COLUMNS
        return self.values[start : start + COLUMNS]

    def is_identity(self) -> bool:
        return self == IDENTITY_MATRIX

    def apply(self, rgba: Sequence[float]) -> tuple[float, float, float, float]:
        """Transform a single 0..255 RGBA colour without clamping."""

        if len(rgba) != ROWS:
            raise ValueError(f"Expected an RGBA 4-vector, got {len(rgba)} values")
        out = []
        for row in range(ROWS):
            total = 0.0
            for k in range(ROWS):
                total += self.at(row, k) * float(rgba[k])
            out.append(total + self.at(row, ROWS))
        return (out[0], out[1], out[2], out[3])


IDENTITY_MATRIX = ColorMatrix.identity()


def compose(outer: ColorMatrix, inner: ColorMatrix) -> ColorMatrix:
    """Return ``outer ∘ inner``: the transform applying *inner* then *outer*.

    The linear 4x4 parts multiply as usual.  The offset column of the result
    is *inner*'s offset pushed through *outer*'s linear part plus *outer*'s
    own offset.
    """

    result = [0.0] * (ROWS * COLUMNS)
    for i in range(ROWS):
        for j in range(COLUMNS):
            total = 0.0
            for k in range(ROWS):
                total += outer.at(i, k) * inner.at(k, j)
            if j == ROWS:
                total += outer.at(i, ROWS)
            result[i * COLUMNS + j] = total
    return ColorMatrix(tuple(result))


def saturation_matrix(saturation: float) -> ColorMatrix:
    """Blend each channel between BT.709 luma (``0``) and itself (``1``)."""

    s = float(saturation)
    lr, lg, lb = (weight * (1.0 - s) for weight in LUMINANCE_WEIGHTS)
    return ColorMatrix.from_rows(
        [
            [lr + s, lg, lb, 0.0, 0.0],
            [lr, lg + s, lb, 0.0, 0.0],
            [lr, lg, lb + s, 0.0, 0.0],
            [0.0, 0.0, 0.0, 1.0, 0.0],
        ]
    )


def contrast_matrix(contrast: float) -> ColorMatrix:
    """Scale RGB by *contrast* around mid-gray."""

    c = float(contrast)
    t = (1.0 - c) * MID_GRAY
    return ColorMatrix.from_rows(
        [
            [c, 0.0, 0.0, 0.0, t],
            [0.0, c, 0.0, 0.0, t],
            [0.0, 0.0, c, 0.0, t],
            [0.0, 0.0, 0.0, 1.0, 0.0],
        ]
    )


def brightness_matrix(brightness: float) -> ColorMatrix:
    """Shift RGB by ``brightness * 255``."""

    b = float(brightness) * CHANNEL_MAX
    return ColorMatrix.from_rows(
        [
            [1.0, 0.0, 0.0, 0.0, b],
            [0.0, 1.0, 0.0, 0.0, b],
            [0.0, 0.0, 1.0, 0.0, b],
            [0.0, 0.0, 0.0, 1.0, 0.0],
        ]
    )


def build_color_matrix(adjustment: ColorAdjustment) -> ColorMatrix:
    """Return ``Brightness ∘ (Contrast ∘ Saturation)`` for *adjustment*."""

    saturated = saturation_matrix(adjustment.saturation)
    contrasted = compose(contrast_matrix(adjustment.contrast), saturated)
    return compose(brightness_matrix(adjustment.brightness), contrasted)


__all__ = [
    "ColorAdjustment",
    "ColorMatrix",
    "IDENTITY_MATRIX",
    "brightness_matrix",
    "build_color_matrix",
    "compose",
    "contrast_matrix",
    "saturation_matrix",
]
