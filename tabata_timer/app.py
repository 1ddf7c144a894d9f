# type: ignore
import os
import time
import logging

from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QComboBox, QToolTip, QMenu, QAction, QMessageBox, QDialog
)
from PyQt5.QtCore import Qt, QTimer
from PyQt5.QtGui import QFont, QIcon

from .utils import resource_path, format_clock
from .config import Config, SETTINGS_FILE
from .cues import CueEmitter
from .engine import IntervalEngine
from .timer_state import EngineState, Phase
from .wake_lock import WakeLockManager
from .widgets import ProgressRing
from .workout_editor import WorkoutEditor

logger = logging.getLogger(__name__)

QToolTip.showTime = 4000  # Set tooltip display time

FANFARE_DISPLAY_SECONDS = 2.0
TOGGLE_STYLE = """
    QPushButton { padding:5px; solid #666; background-color:#444; }
    QPushButton:checked { background-color:#2a5699; border-color:#1a3b6d; }
    QPushButton:hover { background-color:#555; }
    QPushButton:checked:hover { background-color:#366bb8; }
"""


class WorkoutTimer(QMainWindow):
    def __init__(self, settings_file: str = SETTINGS_FILE, engine: IntervalEngine = None):
        """Initialize the Tabata Timer window."""
        super().__init__()
        # --- Settings from settings.json ---
        self.settings_file = settings_file
        self.settings = Config.load_from_file(settings_file)

        # --- Status Bar (pre-created to avoid layout jump when messages appear)
        self.status_bar = self.statusBar()
        self.status_bar.setFixedHeight(22)
        self.status_bar.clearMessage()

        # --- Engine, audio and wake lock ---
        self.engine = engine or IntervalEngine(
            cues=CueEmitter(enabled=self.settings.sound_enabled),
            wake_lock=WakeLockManager(enabled=self.settings.keep_screen_awake),
            parent=self,
        )
        self.engine.updated.connect(self.update_ui_elements)
        self.engine.completed.connect(self.trigger_visual_fanfare)
        self.fanfare_start_time = None

        #####################################
        # UI Setup
        #####################################
        self.initUI()

        # --- Fanfare label refresh ---
        self.fanfare_timer = QTimer(self)
        self.fanfare_timer.timeout.connect(self.update_fanfare)
        self.fanfare_timer.start(100)

    def initUI(self):
        self.setWindowTitle("Tabata Timer")
        icon_path = resource_path("icon.ico")
        if os.path.exists(icon_path):
            self.setWindowIcon(QIcon(icon_path))
        self.setGeometry(100, 100, 420, 640)
        self.setMinimumSize(400, 600)

        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setSpacing(10)

        # Fonts
        font_label   = QFont(); font_label.setPointSize(14)
        font_button  = QFont(); font_button.setPointSize(18); font_button.setBold(True)
        font_toggle  = QFont(); font_toggle.setPointSize(9)

        # --- Workout picker + manage menu ---
        picker_row = QHBoxLayout()
        self.workout_combo = QComboBox()
        self.workout_combo.currentIndexChanged.connect(self.workout_selected)
        picker_row.addWidget(self.workout_combo, 1)
        self.manage_button = QPushButton("☰")
        self.manage_button.setFixedWidth(50)
        self.manage_button.setToolTip("Manage workouts")
        self.manage_menu = QMenu(self)
        self.new_action = QAction("New Workout", self)
        self.edit_action = QAction("Edit Workout", self)
        self.delete_action = QAction("Delete Workout", self)
        self.new_action.triggered.connect(self.create_workout)
        self.edit_action.triggered.connect(self.edit_workout)
        self.delete_action.triggered.connect(self.delete_workout)
        self.manage_menu.addAction(self.new_action)
        self.manage_menu.addAction(self.edit_action)
        self.manage_menu.addSeparator()
        self.manage_menu.addAction(self.delete_action)
        self.manage_button.setMenu(self.manage_menu)
        picker_row.addWidget(self.manage_button)
        layout.addLayout(picker_row)

        self.summary_label = QLabel()
        self.summary_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.summary_label)

        # Counters
        counters = QHBoxLayout()
        self.exercise_label = QLabel(); self.exercise_label.setFont(font_label); counters.addWidget(self.exercise_label)
        counters.addStretch()
        self.round_label = QLabel(); self.round_label.setFont(font_label); counters.addWidget(self.round_label)
        layout.addLayout(counters)

        # Progress ring
        self.progress_ring = ProgressRing()
        layout.addWidget(self.progress_ring, 1)

        # Fanfare: Visual completion message
        self.fanfare_label = QLabel()
        self.fanfare_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.fanfare_label)

        # Control Buttons
        control_button_height = 40
        btn_row = QHBoxLayout(); btn_row.setSpacing(10)
        self.start_button = self._control_button("Start Workout", self.start_timer, "Start the selected workout", font_button, control_button_height)
        self.skip_button = self._control_button("Start Exercise", self.engine.skip_ready, "Skip the get-ready countdown", font_button, control_button_height)
        self.pause_button = self._control_button("Pause", self.engine.pause, "Pause the timer", font_button, control_button_height)
        self.resume_button = self._control_button("Resume", self.engine.resume, "Resume the timer from a paused state", font_button, control_button_height)
        self.stop_button = self._control_button("Stop", self.engine.stop, "Stop the timer and reset all states", font_button, control_button_height)
        self.restart_button = self._control_button("Restart Workout", self.engine.restart, "Reset the finished workout", font_button, control_button_height)
        for btn in (self.start_button, self.skip_button, self.pause_button,
                    self.resume_button, self.stop_button, self.restart_button):
            btn_row.addWidget(btn)
        layout.addLayout(btn_row)

        layout.addSpacing(10)

        # Toggle Buttons: Always on Top, Sound, Keep Screen Awake
        toggles = QHBoxLayout(); toggles.setSpacing(10)
        self.always_on_top = self._toggle_button("Always on Top", self.settings.always_on_top, self.toggle_always_on_top, "Keep the timer window always on top of other windows", font_toggle)
        self.sound_toggle = self._toggle_button("Sound", self.settings.sound_enabled, self.toggle_sound, "Play countdown beeps and the completion fanfare", font_toggle)
        self.awake_toggle = self._toggle_button("Keep Screen Awake", self.settings.keep_screen_awake, self.toggle_keep_awake, "Prevent the display from sleeping during a workout", font_toggle)
        for btn in (self.always_on_top, self.sound_toggle, self.awake_toggle):
            toggles.addWidget(btn)
        layout.addLayout(toggles)

        # Final UI sync
        self.refresh_workouts()
        if self.settings.always_on_top:
            self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)
        self.update_ui_elements(self.engine.state)

    def _control_button(self, text, slot, tooltip, font, height):
        btn = QPushButton(text)
        btn.setFont(font)
        btn.setFixedHeight(height)
        btn.setToolTip(tooltip)
        btn.clicked.connect(slot)
        return btn

    def _toggle_button(self, text, checked, slot, tooltip, font):
        btn = QPushButton(text)
        btn.setCheckable(True)
        btn.setChecked(checked)
        btn.setFont(font)
        btn.setToolTip(tooltip)
        btn.setStyleSheet(TOGGLE_STYLE)
        btn.clicked.connect(slot)
        return btn


    #####################################
    # Workout library
    #####################################
    def refresh_workouts(self):
        """Reload the picker from the settings' workout list."""
        selected = self.settings.selected_workout()
        self.workout_combo.blockSignals(True)
        self.workout_combo.clear()
        for w in self.settings.workouts:
            self.workout_combo.addItem(w.name, w.id)
        self.workout_combo.setCurrentIndex(self.workout_combo.findData(selected.id))
        self.workout_combo.blockSignals(False)
        self.delete_action.setEnabled(len(self.settings.workouts) > 1)
        self.update_summary()

    def update_summary(self):
        w = self.settings.selected_workout()
        self.summary_label.setText(
            f"{w.exercise_duration}s work / {w.rest_duration}s rest · "
            f"{w.exercise_count} exercises × {w.round_count} rounds · "
            f"{format_clock(w.total_duration())} total"
        )

    def workout_selected(self, index):
        workout_id = self.workout_combo.itemData(index)
        if workout_id is None:
            return
        self.settings.update(self.settings_file, selected_workout_id=workout_id)
        self.update_summary()
        self.update_ui_elements(self.engine.state)

    def create_workout(self):
        editor = WorkoutEditor(Config.new_workout(), creating=True, parent=self)
        if editor.exec_() == QDialog.Accepted:
            self.settings.add_workout(editor.workout)
            logger.info("Created workout %r", editor.workout.name)
            self._save_settings()
            self.refresh_workouts()
            self.statusBar().showMessage(f"Workout '{editor.workout.name}' created", 2000)

    def edit_workout(self):
        editor = WorkoutEditor(self.settings.selected_workout(), parent=self)
        if editor.exec_() == QDialog.Accepted:
            self.settings.update_workout(editor.workout)
            self._save_settings()
            self.refresh_workouts()
            self.statusBar().showMessage(f"Workout '{editor.workout.name}' saved", 2000)

    def delete_workout(self):
        w = self.settings.selected_workout()
        answer = QMessageBox.question(self, "Delete Workout",
                                      f"Are you sure you want to delete '{w.name}'?")
        if answer != QMessageBox.Yes:
            return
        if not self.settings.delete_workout(w.id):
            self.statusBar().showMessage("You must have at least one workout!", 2000)
            return
        logger.info("Deleted workout %r", w.name)
        self._save_settings()
        self.refresh_workouts()

    def _save_settings(self):
        """Save the current settings to the settings.json file."""
        self.settings.save_to_file(self.settings_file)


    #####################################
    # Timer controls
    #####################################
    def start_timer(self):
        """Start the engine with the selected workout."""
        self.fanfare_start_time = None
        self.fanfare_label.clear()
        self.engine.start(self.settings.selected_workout())

    def trigger_visual_fanfare(self):
        self.fanfare_start_time = time.monotonic()

    def update_fanfare(self):
        if self.fanfare_start_time:
            elapsed_fanfare_time = time.monotonic() - self.fanfare_start_time
            if elapsed_fanfare_time < FANFARE_DISPLAY_SECONDS:
                config = self.engine.config
                self.fanfare_label.setText(f"Congratulations, you completed {config.round_count} rounds!")
            else:
                self.fanfare_start_time = None
                self.fanfare_label.clear()


    #####################################
    # Toggle methods
    #####################################
    def toggle_always_on_top(self):
        """Toggle the 'Always on Top' setting."""
        self.settings.always_on_top = self.always_on_top.isChecked()
        self._save_settings()
        if self.settings.always_on_top:
            self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)
        else:
            self.setWindowFlags(self.windowFlags() & ~Qt.WindowStaysOnTopHint)
        self.show()

    def toggle_sound(self):
        self.settings.sound_enabled = self.sound_toggle.isChecked()
        self.engine.cues.enabled = self.settings.sound_enabled
        self._save_settings()

    def toggle_keep_awake(self):
        self.settings.keep_screen_awake = self.awake_toggle.isChecked()
        self.engine.wake_lock.enabled = self.settings.keep_screen_awake
        if not self.settings.keep_screen_awake:
            self.engine.wake_lock.release()
        elif self.engine.state.is_active or self.engine.state.phase == Phase.Paused:
            self.engine.wake_lock.acquire()
        self._save_settings()


    #####################################
    # Update UI Elements
    #####################################
    def update_ui_elements(self, state: EngineState):
        """Update all UI elements based on the engine state."""
        workout = self.engine.config if state.phase != Phase.Stopped else None
        workout = workout or self.settings.selected_workout()
        self.exercise_label.setText(f"Exercise: {state.current_exercise}/{workout.exercise_count}")
        self.round_label.setText(f"Round: {state.current_round}/{workout.round_count}")
        self.progress_ring.set_state(state)

        # button visibility
        self.start_button.setVisible(state.phase == Phase.Stopped)
        self.skip_button.setVisible(state.phase == Phase.Ready)
        self.pause_button.setVisible(state.is_active)
        self.resume_button.setVisible(state.phase == Phase.Paused)
        self.stop_button.setVisible(state.is_active or state.phase == Phase.Paused)
        self.restart_button.setVisible(state.phase == Phase.Completed)

        # picker only while idle
        idle = state.phase in (Phase.Stopped, Phase.Completed)
        self.workout_combo.setEnabled(idle)
        self.manage_button.setEnabled(idle)

    def closeEvent(self, event):
        self.engine.stop()
        super().closeEvent(event)
