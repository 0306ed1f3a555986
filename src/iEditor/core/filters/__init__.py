"""Per-pixel colour matrix application.

- facade: executor selection
- executors: Numba JIT, NumPy, Pillow and a ``QColor`` fallback
- utils: raw pixel buffer access
"""

from __future__ import annotations

from .facade import apply_color_matrix

__all__ = ["apply_color_matrix"]
