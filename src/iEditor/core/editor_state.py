"""Immutable editing session state and its transitions."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from PySide6.QtGui import QImage

from .color_matrix import ColorAdjustment, ColorMatrix, build_color_matrix
from .strokes import StrokeLog


@dataclass(frozen=True)
class EditorState:
    """Snapshot of the image, the colour adjustment and the stroke log.

    Every transition returns a new instance.  Presentation code holds
    references to old snapshots safely because nothing is mutated in place.
    """

    image: Optional[QImage] = None
    source_path: Optional[Path] = None
    adjustment: ColorAdjustment = field(default_factory=ColorAdjustment)
    strokes: StrokeLog = field(default_factory=StrokeLog)

    @property
    def has_image(self) -> bool:
        return self.image is not None and not self.image.isNull()

    def color_matrix(self) -> ColorMatrix:
        return build_color_matrix(self.adjustment)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def with_image(self, image: QImage, source_path: Optional[Path] = None) -> EditorState:
        """Start a new session on *image*, discarding adjustments and strokes."""

        return EditorState(image=image, source_path=source_path)

    def with_adjustment(self, adjustment: ColorAdjustment) -> EditorState:
        if not self.has_image or adjustment == self.adjustment:
            return self
        return replace(self, adjustment=adjustment)

    def with_point(self, x: float, y: float) -> EditorState:
        if not self.has_image:
            return self
        return replace(self, strokes=self.strokes.with_point(x, y))

    def with_pen_lift(self) -> EditorState:
        if not self.has_image:
            return self
        return replace(self, strokes=self.strokes.with_pen_lift())


__all__ = ["EditorState"]
