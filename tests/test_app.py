import pytest
from PyQt5.QtWidgets import QDialog, QMessageBox

from tabata_timer.app import WorkoutTimer
from tabata_timer.config import WorkoutConfig
from tabata_timer.engine import IntervalEngine
from tabata_timer.timer_state import Phase
from tabata_timer.workout_editor import WorkoutEditor


@pytest.fixture()
def window(qtbot, tmp_path, cues, wake_lock):
    engine = IntervalEngine(cues=cues, wake_lock=wake_lock)
    win = WorkoutTimer(settings_file=str(tmp_path / "settings.json"), engine=engine)
    qtbot.addWidget(win)
    win.show()
    return win


def test_initial_view(window):
    assert window.workout_combo.currentText() == "Classic Tabata"
    assert window.exercise_label.text() == "Exercise: 1/8"
    assert window.round_label.text() == "Round: 1/1"
    assert window.start_button.isVisible()
    assert not window.pause_button.isVisible()


def test_controls_follow_engine_phase(window):
    window.start_button.click()
    assert window.engine.state.phase == Phase.Ready
    assert window.skip_button.isVisible()
    assert window.pause_button.isVisible()
    assert not window.workout_combo.isEnabled()

    window.pause_button.click()
    assert window.resume_button.isVisible()
    assert window.stop_button.isVisible()

    window.resume_button.click()
    window.stop_button.click()
    assert window.engine.state.phase == Phase.Stopped
    assert window.start_button.isVisible()


def test_completion_shows_fanfare_and_restart(window):
    window.settings.add_workout(window.settings.new_workout())
    window.refresh_workouts()
    window.start_button.click()
    window.skip_button.click()
    while window.engine.state.phase != Phase.Completed:
        window.engine.tick()
    window.update_fanfare()
    assert "Congratulations" in window.fanfare_label.text()
    assert window.restart_button.isVisible()
    window.restart_button.click()
    assert window.engine.state.phase == Phase.Stopped


def test_sound_toggle_updates_emitter_and_settings(window, cues):
    window.sound_toggle.click()
    assert cues.enabled is False
    assert window.settings.sound_enabled is False


def test_keep_awake_toggle_reacquires_during_run(window, wake_lock):
    window.start_button.click()
    assert wake_lock.held
    window.awake_toggle.click()
    assert not wake_lock.held
    window.awake_toggle.click()
    assert wake_lock.held
    assert wake_lock.acquired == 2
    assert window.settings.keep_screen_awake is True


@pytest.fixture()
def editor(qtbot):
    dlg = WorkoutEditor(WorkoutConfig(id="abc", name="Classic"))
    qtbot.addWidget(dlg)
    return dlg


@pytest.mark.parametrize("name", ["", "   "])
def test_editor_requires_a_name(editor, name):
    editor.name_edit.setText(name)
    editor.accept()
    assert editor.error_label.text() == "Please enter a workout name"
    assert editor.result() != QDialog.Accepted
    assert editor.workout.name == "Classic"


def test_editor_returns_slider_values(editor):
    editor.name_edit.setText("  Legs ")
    editor.exercise_duration_slider.setValue(45)
    editor.rest_duration_slider.setValue(15)
    editor.exercise_count_slider.setValue(6)
    editor.round_count_slider.setValue(3)
    editor.round_rest_duration_slider.setValue(90)
    editor.accept()
    assert editor.result() == QDialog.Accepted
    assert editor.workout == WorkoutConfig(id="abc", name="Legs", exercise_duration=45,
                                           rest_duration=15, exercise_count=6,
                                           round_count=3, round_rest_duration=90)


def test_editor_text_box_moves_slider(editor):
    editor.exercise_count_text_box.setText("12")
    editor.text_box_changed("exercise_count", editor.exercise_count_text_box)
    assert editor.exercise_count_slider.value() == 12

    editor.exercise_count_text_box.setText("")
    editor.text_box_changed("exercise_count", editor.exercise_count_text_box)
    assert editor.exercise_count_slider.value() == 12


def test_editor_slider_updates_text_box(editor):
    editor.rest_duration_slider.setValue(25)
    assert editor.rest_duration_text_box.text() == "25"


def test_delete_last_workout_is_refused(window, monkeypatch):
    monkeypatch.setattr(QMessageBox, "question", lambda *a, **k: QMessageBox.Yes)
    window.delete_workout()
    assert len(window.settings.workouts) == 1
    assert window.statusBar().currentMessage() == "You must have at least one workout!"


def test_delete_selected_workout(window, monkeypatch):
    monkeypatch.setattr(QMessageBox, "question", lambda *a, **k: QMessageBox.Yes)
    extra = WorkoutConfig(id="extra", name="Extra")
    window.settings.add_workout(extra)
    window.refresh_workouts()
    assert window.workout_combo.currentText() == "Extra"

    window.delete_workout()
    assert [w.id for w in window.settings.workouts] == ["default"]
    assert window.settings.selected_workout_id == "default"
    assert window.workout_combo.count() == 1
    assert window.workout_combo.currentText() == "Classic Tabata"


def test_delete_cancelled_keeps_workout(window, monkeypatch):
    monkeypatch.setattr(QMessageBox, "question", lambda *a, **k: QMessageBox.No)
    window.settings.add_workout(WorkoutConfig(id="extra", name="Extra"))
    window.refresh_workouts()
    window.delete_workout()
    assert len(window.settings.workouts) == 2
