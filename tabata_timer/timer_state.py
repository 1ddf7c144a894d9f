from enum import Enum
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from .config import READY_DURATION, WorkoutConfig

# Countdown beeps start when this many seconds are left before the decrement
WARNING_AT = 4


class Phase(Enum):
    Stopped = 0
    Ready = 1
    Exercise = 2
    Rest = 3
    RoundRest = 4
    Paused = 5
    Completed = 6


ACTIVE_PHASES = (Phase.Ready, Phase.Exercise, Phase.Rest, Phase.RoundRest)


class Effect(Enum):
    COUNTDOWN_CUE = "countdown_cue"
    COMPLETION_FANFARE = "completion_fanfare"
    RELEASE_WAKE_LOCK = "release_wake_lock"


@dataclass(frozen=True)
class EngineState:
    phase: Phase = Phase.Stopped
    current_round: int = 1
    current_exercise: int = 1
    time_remaining: int = 0
    total_time_for_phase: int = 0
    resume_phase: Optional[Phase] = None
    resume_time_remaining: Optional[int] = None

    @staticmethod
    def initial() -> "EngineState":
        return EngineState()

    @staticmethod
    def ready() -> "EngineState":
        return EngineState(phase=Phase.Ready,
                           time_remaining=READY_DURATION,
                           total_time_for_phase=READY_DURATION)

    @property
    def is_active(self) -> bool:
        return self.phase in ACTIVE_PHASES

    @property
    def progress(self) -> float:
        """Fraction of the current phase already elapsed."""
        if self.total_time_for_phase <= 0:
            return 0.0
        return (self.total_time_for_phase - self.time_remaining) / self.total_time_for_phase


def _enter(state: EngineState, phase: Phase, duration: int, **counters) -> EngineState:
    return replace(state, phase=phase, time_remaining=duration,
                   total_time_for_phase=duration, **counters)


def tick(state: EngineState, config: WorkoutConfig) -> Tuple[EngineState, List[Effect]]:
    """Advance the countdown by one second.

    Returns the new state and the side effects the caller has to carry out.
    States outside an active phase are returned unchanged.
    """
    if not state.is_active:
        return state, []

    if state.time_remaining > 1:
        effects = [Effect.COUNTDOWN_CUE] if state.time_remaining == WARNING_AT else []
        return replace(state, time_remaining=state.time_remaining - 1), effects

    # Phase finished
    if state.phase == Phase.Ready:
        return _enter(state, Phase.Exercise, config.exercise_duration), []

    if state.phase == Phase.Exercise:
        if state.current_exercise < config.exercise_count:
            if config.rest_duration > 0:
                return _enter(state, Phase.Rest, config.rest_duration), []
            return _enter(state, Phase.Exercise, config.exercise_duration,
                          current_exercise=state.current_exercise + 1), []
        if state.current_round < config.round_count:
            counters = dict(current_round=state.current_round + 1, current_exercise=1)
            if config.round_rest_duration > 0:
                return _enter(state, Phase.RoundRest, config.round_rest_duration, **counters), []
            return _enter(state, Phase.Exercise, config.exercise_duration, **counters), []
        done = replace(state, phase=Phase.Completed, time_remaining=0)
        return done, [Effect.COMPLETION_FANFARE, Effect.RELEASE_WAKE_LOCK]

    if state.phase == Phase.Rest:
        return _enter(state, Phase.Exercise, config.exercise_duration,
                      current_exercise=state.current_exercise + 1), []

    # RoundRest
    return _enter(state, Phase.Exercise, config.exercise_duration), []
