"""GUI layer built on PySide6."""
