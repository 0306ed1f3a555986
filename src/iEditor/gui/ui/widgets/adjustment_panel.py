"""Slider column for brightness, contrast and saturation."""

from __future__ import annotations

from typing import Mapping, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QFormLayout, QLabel, QSlider, QWidget

from ....config import ADJUSTMENT_DEFAULTS, ADJUSTMENT_KEYS, ADJUSTMENT_RANGES

_SLIDER_STEPS = 1000


class AdjustmentPanel(QWidget):
    """Expose one slider per adjustment and report float values in range."""

    valueChanged = Signal(str, float)
    """Emitted with the adjustment key and its new value."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._sliders: dict[str, QSlider] = {}
        self._labels: dict[str, QLabel] = {}

        layout = QFormLayout(self)
        layout.setContentsMargins(12, 6, 12, 6)
        for key in ADJUSTMENT_KEYS:
            slider = QSlider(Qt.Orientation.Horizontal, self)
            slider.setRange(0, _SLIDER_STEPS)
            slider.setToolTip(key)
            slider.valueChanged.connect(
                lambda position, name=key: self._handle_slider_moved(name, position)
            )
            label = QLabel(self)
            label.setMinimumWidth(40)
            self._sliders[key] = slider
            self._labels[key] = label
            layout.addRow(key, slider)
            layout.addRow("", label)
        self.set_values(ADJUSTMENT_DEFAULTS)

    def value(self, key: str) -> float:
        return self._position_to_value(key, self._sliders[key].value())

    def set_values(self, values: Mapping[str, float]) -> None:
        """Move the sliders without emitting :attr:`valueChanged`."""

        for key, slider in self._sliders.items():
            value = float(values.get(key, ADJUSTMENT_DEFAULTS[key]))
            slider.blockSignals(True)
            try:
                slider.setValue(self._value_to_position(key, value))
            finally:
                slider.blockSignals(False)
            self._labels[key].setText(f"{value:.2f}")

    def _handle_slider_moved(self, key: str, position: int) -> None:
        value = self._position_to_value(key, position)
        self._labels[key].setText(f"{value:.2f}")
        self.valueChanged.emit(key, value)

    @staticmethod
    def _position_to_value(key: str, position: int) -> float:
        lower, upper = ADJUSTMENT_RANGES[key]
        return lower + (upper - lower) * position / _SLIDER_STEPS

    @staticmethod
    def _value_to_position(key: str, value: float) -> int:
        lower, upper = ADJUSTMENT_RANGES[key]
        clamped = max(lower, min(upper, value))
        return int(round((clamped - lower) / (upper - lower) * _SLIDER_STEPS))


__all__ = ["AdjustmentPanel"]
