"""Controllers coordinating widgets with the editing core."""

from .editor_controller import EditorController

__all__ = ["EditorController"]
