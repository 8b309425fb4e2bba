"""
Tuning meter widget - pointer swinging over a +/-50 cents scale.
"""

import math

from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QBrush, QColor, QPainter, QPen
from PySide6.QtWidgets import QWidget

from ..display import meter_ticks
from .styles import ACCENT_GREEN, BORDER_COLOR, ERROR_RED, TEXT_SECONDARY, WARNING_ORANGE


class TuningMeter(QWidget):
    """
    Semicircular meter showing the deviation of the displayed note.

    Displays:
    - 11 scale ticks, one every 10 cents, strong ticks at -50, 0 and +50
    - A pointer rotated by the projected meter angle (0 = in tune)
    """

    # Pointer rotation limit when drawing; angles beyond it are pinned
    MAX_DRAW_ANGLE = 60.0

    def __init__(self, parent=None):
        super().__init__(parent)
        self._angle = 0.0
        self._ticks = meter_ticks()
        self.setMinimumSize(320, 180)

    def set_angle(self, angle: float):
        """Set the pointer angle in degrees."""
        self._angle = angle
        self.update()

    @property
    def angle(self) -> float:
        return self._angle

    def paintEvent(self, event):
        """Paint the meter."""
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)

        width = self.width()
        height = self.height()
        pivot = QPointF(width / 2, height - 10)
        radius = min(width / 2, height) - 20

        # Scale ticks
        for tick_angle, strong in self._ticks:
            length = 18 if strong else 10
            pen_width = 3 if strong else 1
            painter.setPen(QPen(QColor(TEXT_SECONDARY if strong else BORDER_COLOR), pen_width))
            outer = self._point_at(pivot, radius, tick_angle)
            inner = self._point_at(pivot, radius - length, tick_angle)
            painter.drawLine(inner, outer)

        # Pointer, pinned to the drawable range
        angle = max(-self.MAX_DRAW_ANGLE, min(self.MAX_DRAW_ANGLE, self._angle))
        painter.setPen(QPen(self._pointer_color(), 3, Qt.SolidLine, Qt.RoundCap))
        painter.drawLine(pivot, self._point_at(pivot, radius - 4, angle))

        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(self._pointer_color()))
        painter.drawEllipse(pivot, 6, 6)

    def _pointer_color(self) -> QColor:
        """Green near 0 cents, orange further out, red off the scale."""
        deviation = abs(self._angle)
        if deviation <= 4.5:  # 5 cents
            return QColor(ACCENT_GREEN)
        elif deviation <= 45.0:
            return QColor(WARNING_ORANGE)
        return QColor(ERROR_RED)

    @staticmethod
    def _point_at(pivot: QPointF, radius: float, angle: float) -> QPointF:
        """Point at radius from pivot, angle in degrees clockwise from vertical."""
        rad = math.radians(angle)
        return QPointF(pivot.x() + radius * math.sin(rad), pivot.y() - radius * math.cos(rad))
