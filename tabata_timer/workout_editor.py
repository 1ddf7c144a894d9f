# type: ignore
from dataclasses import replace

from PyQt5.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QSlider,
    QSizePolicy, QDialogButtonBox
)
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QIntValidator

from .config import WORKOUT_LIMITS, WorkoutConfig

FIELD_LABELS = [
    ("Exercise (sec)",    "exercise_duration"),
    ("Rest (sec)",        "rest_duration"),
    ("Exercises / round", "exercise_count"),
    ("Rounds",            "round_count"),
    ("Round rest (sec)",  "round_rest_duration"),
]


class WorkoutEditor(QDialog):
    def __init__(self, workout: WorkoutConfig, creating: bool = False, parent=None):
        """Dialog for creating or editing one workout."""
        super().__init__(parent)
        self.workout = workout
        self.setWindowTitle(f"{'Create' if creating else 'Edit'} Workout")
        self.setMinimumWidth(380)

        layout = QVBoxLayout(self)
        layout.setSpacing(10)

        # Name
        name_row = QHBoxLayout()
        name_row.addWidget(QLabel("Name"))
        self.name_edit = QLineEdit(workout.name)
        self.name_edit.setPlaceholderText("Enter workout name")
        name_row.addWidget(self.name_edit)
        layout.addLayout(name_row)

        # Sliders + TextBoxes, one per numeric field
        for text, attr in FIELD_LABELS:
            minv, maxv, _default = WORKOUT_LIMITS[attr]
            h = QHBoxLayout()
            lbl = QLabel(text)
            lbl.setMinimumWidth(110)
            lbl.setSizePolicy(QSizePolicy.Minimum, QSizePolicy.Preferred)
            h.addWidget(lbl)

            slider = QSlider(Qt.Horizontal)
            slider.setMinimum(minv)
            slider.setMaximum(maxv)
            slider.setValue(getattr(workout, attr))
            slider.setPageStep(1)
            slider.setMinimumWidth(120)
            slider.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
            setattr(self, f"{attr}_slider", slider)
            h.addWidget(slider)

            tb = QLineEdit(str(getattr(workout, attr)))
            tb.setFixedWidth(50)
            tb.setValidator(QIntValidator(minv, maxv))
            tb.editingFinished.connect(lambda a=attr, t=tb: self.text_box_changed(a, t))
            setattr(self, f"{attr}_text_box", tb)
            slider.valueChanged.connect(lambda v, t=tb: t.setText(str(v)))
            h.addWidget(tb)

            layout.addLayout(h)

        self.error_label = QLabel()
        self.error_label.setStyleSheet("color: #EF4444;")
        layout.addWidget(self.error_label)

        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def text_box_changed(self, attr, text_box):
        """Update the slider from the text box input."""
        try:
            getattr(self, f"{attr}_slider").setValue(int(text_box.text()))
        except ValueError:
            pass

    def result_workout(self) -> WorkoutConfig:
        values = {attr: getattr(self, f"{attr}_slider").value() for _, attr in FIELD_LABELS}
        return replace(self.workout, name=self.name_edit.text().strip(), **values)

    def accept(self):
        if not self.name_edit.text().strip():
            self.error_label.setText("Please enter a workout name")
            return
        self.workout = self.result_workout()
        super().accept()
