import json

from tabata_timer.config import Config, WorkoutConfig


def test_defaults_written_when_missing(tmp_path):
    path = tmp_path / "settings.json"
    config = Config.load_from_file(str(path))
    assert path.exists()
    assert [w.name for w in config.workouts] == ["Classic Tabata"]
    assert config.selected_workout().exercise_count == 8


def test_round_trip(tmp_path):
    path = str(tmp_path / "settings.json")
    config = Config.load_from_file(path)
    config.add_workout(WorkoutConfig(id="w2", name="Legs", exercise_duration=45,
                                     rest_duration=15, exercise_count=6, round_count=3,
                                     round_rest_duration=90))
    config.sound_enabled = False
    config.save_to_file(path)

    loaded = Config.load_from_file(path)
    assert loaded.workout("w2") == config.workout("w2")
    assert loaded.selected_workout_id == "w2"
    assert loaded.sound_enabled is False


def test_malformed_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    config = Config.load_from_file(str(path))
    assert config.selected_workout().id == "default"
    assert json.loads(path.read_text())["workouts"][0]["name"] == "Classic Tabata"


def test_unknown_settings_key_falls_back_to_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"bogus": 1}))
    assert Config.load_from_file(str(path)) == Config()


def test_stored_workouts_are_clamped(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"workouts": [
        {"id": "x", "name": "Odd", "exercise_duration": 999, "rest_duration": "abc",
         "exercise_count": 0, "round_count": 3, "extra": True},
    ], "selected_workout_id": "x"}))
    w = Config.load_from_file(str(path)).selected_workout()
    assert (w.exercise_duration, w.rest_duration, w.exercise_count, w.round_count) == (180, 10, 1, 3)
    assert w.round_rest_duration == 60


def test_clamped_returns_same_object_when_valid():
    w = WorkoutConfig()
    assert w.clamped() is w


def test_total_duration():
    assert WorkoutConfig().total_duration() == 5 + 8 * 20 + 7 * 10
    w = WorkoutConfig(exercise_duration=20, rest_duration=10, exercise_count=2,
                      round_count=1, round_rest_duration=60)
    assert w.total_duration() == 55
    w = WorkoutConfig(exercise_duration=30, rest_duration=0, exercise_count=3,
                      round_count=2, round_rest_duration=45)
    assert w.total_duration() == 5 + 2 * 90 + 45


def test_delete_refuses_last_workout():
    config = Config()
    assert config.delete_workout("default") is False
    assert len(config.workouts) == 1


def test_delete_moves_selection():
    config = Config()
    extra = Config.new_workout()
    config.add_workout(extra)
    assert config.selected_workout_id == extra.id
    assert config.delete_workout(extra.id) is True
    assert config.selected_workout_id == "default"
    assert config.delete_workout("missing") is False


def test_update_workout_replaces_in_place():
    config = Config()
    edited = WorkoutConfig(name="Renamed", exercise_duration=500)
    assert config.update_workout(edited) is True
    assert config.workouts[0].name == "Renamed"
    assert config.workouts[0].exercise_duration == 180
    assert config.update_workout(WorkoutConfig(id="nope")) is False


def test_stale_selection_falls_back_to_first():
    config = Config(selected_workout_id="gone")
    assert config.selected_workout().id == "default"


def test_update_saves(tmp_path):
    path = str(tmp_path / "settings.json")
    config = Config()
    config.update(path, always_on_top=True, not_a_setting=1)
    assert Config.load_from_file(path).always_on_top is True


def test_infinite_duration_falls_back_to_default():
    assert WorkoutConfig(exercise_duration=float("inf")).clamped().exercise_duration == 20


def test_stored_infinity_is_replaced_by_default(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text('{"workouts": [{"id": "x", "name": "X", "exercise_duration": Infinity,'
                    ' "round_rest_duration": -Infinity}], "selected_workout_id": "x"}')
    w = Config.load_from_file(str(path)).selected_workout()
    assert w.id == "x"
    assert w.exercise_duration == 20
    assert w.round_rest_duration == 60
