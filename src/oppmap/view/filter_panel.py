"""Filter panel widget for custom range highlighting.

Provides min/max score ranges for each of the three axes:
- ROI
- Enjoyment
- Complexity
"""

from PyQt6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QPushButton,
    QLabel,
    QSpinBox,
    QGroupBox,
)
from PyQt6.QtCore import pyqtSignal

from oppmap.model.board import RangeFilter
from oppmap.model.task import SCORE_MAX, SCORE_MIN


class FilterPanel(QWidget):
    """Range filter panel for the opportunity map.

    Tasks inside every range are highlighted when the filter is applied.
    """

    # Signals
    filter_changed = pyqtSignal(object)  # Emits RangeFilter
    filters_cleared = pyqtSignal()

    AXES = (
        ("roi", "ROI"),
        ("enjoyment", "Enjoyment"),
        ("complexity", "Complexity"),
    )

    def __init__(self, parent=None) -> None:
        """Initialize filter panel."""
        super().__init__(parent)
        self._min_inputs: dict[str, QSpinBox] = {}
        self._max_inputs: dict[str, QSpinBox] = {}
        self._setup_ui()

    def _setup_ui(self) -> None:
        """Set up the filter panel UI."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        title = QLabel("<b>Custom Filters</b>")
        layout.addWidget(title)

        for key, label in self.AXES:
            group = QGroupBox(label)
            group_layout = QHBoxLayout()

            group_layout.addWidget(QLabel("Min:"))
            min_input = QSpinBox()
            min_input.setRange(SCORE_MIN, SCORE_MAX)
            min_input.setValue(SCORE_MIN)
            group_layout.addWidget(min_input)

            group_layout.addWidget(QLabel("Max:"))
            max_input = QSpinBox()
            max_input.setRange(SCORE_MIN, SCORE_MAX)
            max_input.setValue(SCORE_MAX)
            group_layout.addWidget(max_input)

            group.setLayout(group_layout)
            layout.addWidget(group)

            self._min_inputs[key] = min_input
            self._max_inputs[key] = max_input

        # Actions
        actions_layout = QHBoxLayout()

        clear_btn = QPushButton("Clear")
        clear_btn.clicked.connect(self._clear_filters)
        actions_layout.addWidget(clear_btn)

        apply_btn = QPushButton("Apply Filters")
        apply_btn.clicked.connect(self._on_filter_changed)
        actions_layout.addWidget(apply_btn)

        layout.addLayout(actions_layout)

    def _on_filter_changed(self) -> None:
        """Handle the apply button."""
        self.filter_changed.emit(self.get_filter())

    def _clear_filters(self) -> None:
        """Reset every range to the full score span."""
        self.reset()
        self.filters_cleared.emit()

    def reset(self) -> None:
        """Reset inputs without emitting a signal."""
        for key, _ in self.AXES:
            self._min_inputs[key].setValue(SCORE_MIN)
            self._max_inputs[key].setValue(SCORE_MAX)

    def get_filter(self) -> RangeFilter:
        """Get the current ranges.

        Returns:
            RangeFilter built from the spin boxes
        """
        return RangeFilter(
            min_roi=self._min_inputs["roi"].value(),
            max_roi=self._max_inputs["roi"].value(),
            min_enjoyment=self._min_inputs["enjoyment"].value(),
            max_enjoyment=self._max_inputs["enjoyment"].value(),
            min_complexity=self._min_inputs["complexity"].value(),
            max_complexity=self._max_inputs["complexity"].value(),
        )

    def has_active_filters(self) -> bool:
        """Check if any range is narrower than the full span."""
        return not self.get_filter().is_default
