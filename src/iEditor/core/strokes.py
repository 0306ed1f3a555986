"""Freehand stroke log and its line-segment renderer.

A :class:`StrokeLog` records pointer samples in arrival order.  ``PEN_LIFT``
entries mark where the pen left the surface; no segment is ever drawn across
one.  The log is immutable: appending returns a new instance so a stored
:class:`~iEditor.core.editor_state.EditorState` never changes under a reader.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Union

from PySide6.QtCore import QLineF, Qt
from PySide6.QtGui import QColor, QPainter, QPen

from ..config import STROKE_COLOR, STROKE_WIDTH


@dataclass(frozen=True)
class StrokePoint:
    """Pointer sample in surface-local logical coordinates."""

    x: float
    y: float


class _PenLift:
    """Marker type for the pen-lift sentinel."""

    _instance: Optional["_PenLift"] = None

    def __new__(cls) -> "_PenLift":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "PEN_LIFT"

    def __reduce__(self) -> str:
        return "PEN_LIFT"


PEN_LIFT = _PenLift()
"""Sentinel separating two strokes in a :class:`StrokeLog`."""

StrokeEntry = Union[StrokePoint, _PenLift]
Segment = tuple[StrokePoint, StrokePoint]


@dataclass(frozen=True)
class StrokeLog:
    """Append-only sequence of stroke points and pen lifts."""

    entries: tuple[StrokeEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[StrokeEntry]:
        return iter(self.entries)

    def is_empty(self) -> bool:
        return not self.entries

    def with_point(self, x: float, y: float) -> StrokeLog:
        """Return a log extended by the sample ``(x, y)``."""

        return StrokeLog(self.entries + (StrokePoint(float(x), float(y)),))

    def with_pen_lift(self) -> StrokeLog:
        """Return a log extended by one pen-lift sentinel."""

        return StrokeLog(self.entries + (PEN_LIFT,))

    def segments(self) -> Iterator[Segment]:
        """Yield ``(start, end)`` for each adjacent pair of concrete points."""

        for start, end in zip(self.entries, self.entries[1:]):
            if isinstance(start, StrokePoint) and isinstance(end, StrokePoint):
                yield start, end


@dataclass(frozen=True)
class StrokeStyle:
    """Pen used for every stroke: solid colour, round caps, fixed width."""

    color: tuple[int, int, int] = STROKE_COLOR
    width: float = STROKE_WIDTH

    def pen(self) -> QPen:
        pen = QPen(QColor(*self.color))
        pen.setWidthF(self.width)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        return pen


DEFAULT_STROKE_STYLE = StrokeStyle()


def paint_strokes(
    painter: QPainter,
    log: StrokeLog,
    style: StrokeStyle = DEFAULT_STROKE_STYLE,
) -> int:
    """Draw *log* onto *painter* and return the number of segments drawn.

    Coordinates are logical; callers rendering at a higher density scale the
    painter, which widens the pen by the same factor.
    """

    lines = [
        QLineF(start.x, start.y, end.x, end.y)
        for start, end in log.segments()
    ]
    if not lines:
        return 0

    painter.save()
    try:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.setPen(style.pen())
        painter.drawLines(lines)
    finally:
        painter.restore()
    return len(lines)


__all__ = [
    "DEFAULT_STROKE_STYLE",
    "PEN_LIFT",
    "Segment",
    "StrokeEntry",
    "StrokeLog",
    "StrokePoint",
    "StrokeStyle",
    "paint_strokes",
]
