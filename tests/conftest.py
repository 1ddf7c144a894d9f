import os

import pytest

# Headless Qt and silent pygame for CI
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from tabata_timer.config import WorkoutConfig
from tabata_timer.engine import IntervalEngine


class FakeCues:
    def __init__(self):
        self.enabled = True
        self.prepared = 0
        self.countdowns = 0
        self.fanfares = 0

    def prepare(self):
        self.prepared += 1
        return True

    def play_countdown_sequence(self):
        self.countdowns += 1

    def play_completion_fanfare(self):
        self.fanfares += 1


class FakeWakeLock:
    def __init__(self):
        self.enabled = True
        self.held = False
        self.acquired = 0
        self.released = 0

    def acquire(self):
        if not self.held:
            self.held = True
            self.acquired += 1

    def release(self):
        if self.held:
            self.held = False
            self.released += 1


@pytest.fixture()
def cues():
    return FakeCues()


@pytest.fixture()
def wake_lock():
    return FakeWakeLock()


@pytest.fixture()
def engine(qapp, cues, wake_lock):
    eng = IntervalEngine(cues=cues, wake_lock=wake_lock)
    yield eng
    eng.stop()


@pytest.fixture()
def short_workout():
    return WorkoutConfig(id="short", name="Short", exercise_duration=20, rest_duration=10,
                         exercise_count=2, round_count=1, round_rest_duration=60)
