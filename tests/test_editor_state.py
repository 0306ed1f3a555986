"""Tests for EditorState transitions."""

from __future__ import annotations

from pathlib import Path

from iEditor.core.color_matrix import ColorAdjustment
from iEditor.core.editor_state import EditorState
from iEditor.core.strokes import PEN_LIFT


def test_mutations_without_image_are_noops() -> None:
    state = EditorState()

    assert state.with_point(1, 2) is state
    assert state.with_pen_lift() is state
    assert state.with_adjustment(ColorAdjustment(brightness=0.5)) is state
    assert state.color_matrix().is_identity()


def test_loading_resets_adjustment_and_strokes(solid_image) -> None:
    state = EditorState().with_image(solid_image(), Path("first.png"))
    state = state.with_adjustment(ColorAdjustment(brightness=0.4, contrast=2.0, saturation=0.1))
    state = state.with_point(1, 1).with_point(2, 2).with_pen_lift()
    assert not state.adjustment.is_identity()
    assert len(state.strokes) == 3

    reloaded = state.with_image(solid_image(10, 10), Path("second.png"))

    assert reloaded.adjustment == ColorAdjustment()
    assert reloaded.strokes.is_empty()
    assert reloaded.source_path == Path("second.png")
    assert reloaded.image.width() == 10


def test_transitions_leave_previous_snapshot_untouched(solid_image) -> None:
    before = EditorState().with_image(solid_image())
    after = before.with_point(3, 4).with_pen_lift()

    assert before.strokes.is_empty()
    assert list(after.strokes)[-1] is PEN_LIFT


def test_identical_adjustment_keeps_state(solid_image) -> None:
    state = EditorState().with_image(solid_image())

    assert state.with_adjustment(ColorAdjustment()) is state
