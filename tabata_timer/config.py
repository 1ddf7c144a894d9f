import os
import json
import time
import logging
from dataclasses import dataclass, asdict, field, fields, replace
from typing import List, Optional

logger = logging.getLogger(__name__)

SETTINGS_FILE = "settings.json"

# (minimum, maximum, default) for every numeric workout field
WORKOUT_LIMITS = {
    "exercise_duration":   (1, 180, 20),
    "rest_duration":       (0, 60, 10),
    "exercise_count":      (1, 20, 8),
    "round_count":         (1, 25, 1),
    "round_rest_duration": (0, 180, 60),
}

READY_DURATION = 5


@dataclass(frozen=True)
class WorkoutConfig:
    id: str = "default"
    name: str = "Classic Tabata"
    exercise_duration: int = 20
    rest_duration: int = 10
    exercise_count: int = 8
    round_count: int = 1
    round_rest_duration: int = 60

    def clamped(self) -> "WorkoutConfig":
        """Return a copy with every numeric field inside its valid range."""
        changes = {}
        for attr, (lo, hi, default) in WORKOUT_LIMITS.items():
            raw = getattr(self, attr)
            try:
                value = min(max(int(raw), lo), hi)
            except (TypeError, ValueError, OverflowError):
                value = default
            if value != raw:
                logger.warning("Workout %r: %s=%r adjusted to %d", self.name, attr, raw, value)
                changes[attr] = value
        return replace(self, **changes) if changes else self

    def total_duration(self) -> int:
        """Length of a full run in seconds, Ready countdown included."""
        per_round = (self.exercise_count * self.exercise_duration
                     + (self.exercise_count - 1) * self.rest_duration)
        return (READY_DURATION
                + self.round_count * per_round
                + (self.round_count - 1) * self.round_rest_duration)

    def to_dict(self) -> dict:
        return asdict(self)

    @staticmethod
    def from_dict(data: dict) -> "WorkoutConfig":
        known = {f.name for f in fields(WorkoutConfig)}
        return WorkoutConfig(**{k: v for k, v in data.items() if k in known}).clamped()


def _default_workouts() -> List[WorkoutConfig]:
    return [WorkoutConfig()]


@dataclass
class Config:
    # Default Values
    workouts: List[WorkoutConfig] = field(default_factory=_default_workouts)
    selected_workout_id: str = "default"
    always_on_top: bool = False
    sound_enabled: bool = True
    keep_screen_awake: bool = True

    @staticmethod
    def load_from_file(filename: str = SETTINGS_FILE) -> "Config":
        if os.path.exists(filename):
            try:
                with open(filename, "r") as f:
                    data = json.load(f)
                workouts = [WorkoutConfig.from_dict(w) for w in data.pop("workouts", [])]
                config = Config(**data)
                if workouts:
                    config.workouts = workouts
                return config
            except (json.JSONDecodeError, TypeError, ValueError, OverflowError, AttributeError) as e:
                logger.warning("Settings file %s is malformed (%s), using defaults", filename, e)
                default = Config()
                default.save_to_file(filename)
                return default
        else:
            default = Config()
            default.save_to_file(filename)
            return default

    def save_to_file(self, filename: str = SETTINGS_FILE):
        data = asdict(self)
        try:
            with open(filename, "w") as f:
                json.dump(data, f, indent=4)
        except OSError as e:
            logger.error("Error saving settings to %s: %s", filename, e)

    def update(self, filename: str = SETTINGS_FILE, **kwargs):
        """Update settings attributes and save to file."""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
        self.save_to_file(filename)

    #####################################
    # Workout library
    #####################################
    def workout(self, workout_id: str) -> Optional[WorkoutConfig]:
        for w in self.workouts:
            if w.id == workout_id:
                return w
        return None

    def selected_workout(self) -> WorkoutConfig:
        """The selected workout, or the first one if the selection is stale."""
        return self.workout(self.selected_workout_id) or self.workouts[0]

    @staticmethod
    def new_workout() -> WorkoutConfig:
        return WorkoutConfig(id=str(int(time.time() * 1000)), name="New Workout")

    def add_workout(self, workout: WorkoutConfig):
        self.workouts.append(workout.clamped())
        self.selected_workout_id = workout.id

    def update_workout(self, workout: WorkoutConfig) -> bool:
        for idx, w in enumerate(self.workouts):
            if w.id == workout.id:
                self.workouts[idx] = workout.clamped()
                return True
        return False

    def delete_workout(self, workout_id: str) -> bool:
        """Remove a workout; the last remaining workout cannot be deleted."""
        if len(self.workouts) <= 1 or self.workout(workout_id) is None:
            return False
        self.workouts = [w for w in self.workouts if w.id != workout_id]
        if self.selected_workout_id == workout_id:
            self.selected_workout_id = self.workouts[0].id
        return True
