# type: ignore
from PyQt5.QtWidgets import QWidget, QSizePolicy
from PyQt5.QtCore import Qt, QRectF
from PyQt5.QtGui import QPainter, QBrush, QColor, QPen, QLinearGradient

from .timer_state import EngineState
from .utils import format_clock, phase_color, phase_text


# Circular countdown display for the main window
class ProgressRing(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setMinimumSize(180, 180)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

        self.progress = 0.0
        self.active_color = QColor(phase_color(None))
        self.remaining_time = 0
        self.caption = phase_text(None)
        self.ring_width = 12

    def set_state(self, state: EngineState):
        self.progress = state.progress
        self.active_color = QColor(phase_color(state.phase))
        self.remaining_time = state.time_remaining
        self.caption = phase_text(state.phase)
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)

        side = min(self.width(), self.height()) - self.ring_width
        rect = QRectF((self.width() - side) / 2, (self.height() - side) / 2, side, side)

        # Background disc with gradient
        gradient = QLinearGradient(0, rect.top(), 0, rect.bottom())
        gradient.setColorAt(0, QColor(85, 60, 115))
        gradient.setColorAt(1, QColor(40, 40, 85))
        painter.setBrush(QBrush(gradient))
        painter.setPen(Qt.NoPen)
        painter.drawEllipse(rect)

        # Track and progress arc
        painter.setBrush(Qt.NoBrush)
        painter.setPen(QPen(QColor("#3D3D3D"), self.ring_width))
        painter.drawEllipse(rect)
        if self.progress > 0:
            pen = QPen(self.active_color, self.ring_width)
            pen.setCapStyle(Qt.RoundCap)
            painter.setPen(pen)
            span_angle = int(-self.progress * 360 * 16)  # QPainter uses 16th of a degree
            painter.drawArc(rect, 90 * 16, span_angle)

        # Caption above, time below
        font = painter.font()
        font.setPointSize(max(int(side // 12), 8))
        painter.setFont(font)
        painter.setPen(self.active_color)
        top_rect = rect.adjusted(0, 0, 0, -rect.height() / 4)
        painter.drawText(top_rect, Qt.AlignCenter, self.caption)

        font.setPointSize(max(int(side // 7), 10))
        font.setBold(True)
        painter.setFont(font)
        painter.setPen(Qt.white)
        bottom_rect = rect.adjusted(0, rect.height() / 4, 0, 0)
        painter.drawText(bottom_rect, Qt.AlignCenter, format_clock(self.remaining_time))
