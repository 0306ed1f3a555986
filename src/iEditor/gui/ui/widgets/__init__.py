"""Custom widgets used by the editor window."""

from .adjustment_panel import AdjustmentPanel
from .editor_canvas import EditorCanvas

__all__ = ["AdjustmentPanel", "EditorCanvas"]
