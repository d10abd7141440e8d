"""Text overlay for labels on top of the 3D view.

The GL pass draws geometry only; task names, tick numbers and axis titles
are painted here with QPainter at screen positions the renderer projects
every frame.
"""

from dataclasses import dataclass

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QFont, QPainter
from PyQt6.QtWidgets import QWidget


@dataclass
class ScreenLabel:
    """Label text at a widget-local pixel position."""

    text: str
    x: int
    y: int
    is_title: bool = False
    is_task: bool = False


class TextOverlay(QWidget):
    """Transparent widget that paints labels over the renderer."""

    def __init__(self, parent=None, color: tuple[float, float, float, float] = (0.12, 0.16, 0.27, 1.0)) -> None:
        """Initialize text overlay.

        Args:
            parent: Parent widget (should be the Renderer)
            color: Label color as normalized RGBA
        """
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)

        self._labels: list[ScreenLabel] = []
        self._color = QColor.fromRgbF(*color)

    def set_labels(self, labels: list[ScreenLabel]) -> None:
        """Set text labels to render."""
        self._labels = labels
        self.update()

    def clear(self) -> None:
        """Clear all labels."""
        self._labels = []
        self.update()

    @property
    def label_count(self) -> int:
        return len(self._labels)

    def paintEvent(self, event) -> None:
        """Paint the text overlay."""
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setPen(self._color)

        tick_font = QFont("Arial", 8)
        title_font = QFont("Arial", 10)
        title_font.setBold(True)
        task_font = QFont("Arial", 9)

        for label in self._labels:
            if label.is_title:
                painter.setFont(title_font)
            elif label.is_task:
                painter.setFont(task_font)
            else:
                painter.setFont(tick_font)
            width = painter.fontMetrics().horizontalAdvance(label.text)
            painter.drawText(label.x - width // 2, label.y, label.text)

        painter.end()
