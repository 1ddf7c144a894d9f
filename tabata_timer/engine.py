import logging
from dataclasses import replace
from typing import Iterable, Optional

from PyQt5.QtCore import QObject, QTimer, pyqtSignal

from .config import WorkoutConfig
from .cues import CueEmitter
from .timer_state import Effect, EngineState, Phase, tick
from .wake_lock import WakeLockManager

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


class IntervalEngine(QObject):
    """Runs a workout: owns the phase state and the one-second tick timer.

    The transition logic lives in timer_state.tick; this class schedules it,
    carries out the side effects it asks for and publishes every new state.
    Control calls made from the wrong phase are ignored.
    """

    updated = pyqtSignal(object)        # EngineState
    phase_changed = pyqtSignal(object)  # Phase
    completed = pyqtSignal()

    def __init__(self, cues: Optional[CueEmitter] = None,
                 wake_lock: Optional[WakeLockManager] = None, parent=None):
        super().__init__(parent)
        self.cues = cues or CueEmitter()
        self.wake_lock = wake_lock or WakeLockManager()
        self._config: Optional[WorkoutConfig] = None
        self._state = EngineState.initial()

        self._timer = QTimer(self)
        self._timer.setInterval(TICK_INTERVAL_MS)
        self._timer.timeout.connect(self.tick)

    # --- Properties -----------------------------------------------------
    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def config(self) -> Optional[WorkoutConfig]:
        return self._config

    @property
    def ticking(self) -> bool:
        return self._timer.isActive()

    # --- Public API -----------------------------------------------------
    def start(self, config: WorkoutConfig):
        if self._state.phase != Phase.Stopped:
            logger.debug("start() ignored in %s", self._state.phase.name)
            return
        self._config = config.clamped()
        logger.info("Starting workout %r", self._config.name)
        self.cues.prepare()
        self.wake_lock.acquire()
        self._set_state(EngineState.ready())
        self._timer.start()

    def tick(self):
        if not self._state.is_active or self._config is None:
            return
        new_state, effects = tick(self._state, self._config)
        transitioned = (new_state.phase != self._state.phase
                        or new_state.current_exercise != self._state.current_exercise
                        or new_state.current_round != self._state.current_round)
        if transitioned:
            logger.info("%s -> %s (round %d/%d, exercise %d/%d)",
                        self._state.phase.name, new_state.phase.name,
                        new_state.current_round, self._config.round_count,
                        new_state.current_exercise, self._config.exercise_count)
            if new_state.is_active:
                # next tick a full period after the phase began
                self._timer.start()
            else:
                self._timer.stop()
        self._set_state(new_state)
        self._dispatch(effects)
        if new_state.phase == Phase.Completed:
            self.completed.emit()

    def pause(self):
        if not self._state.is_active:
            logger.debug("pause() ignored in %s", self._state.phase.name)
            return
        self._timer.stop()
        self._set_state(replace(self._state,
                                phase=Phase.Paused,
                                resume_phase=self._state.phase,
                                resume_time_remaining=self._state.time_remaining))

    def resume(self):
        if self._state.phase != Phase.Paused:
            logger.debug("resume() ignored in %s", self._state.phase.name)
            return
        self._set_state(replace(self._state,
                                phase=self._state.resume_phase,
                                time_remaining=self._state.resume_time_remaining,
                                resume_phase=None,
                                resume_time_remaining=None))
        self._timer.start()

    def stop(self):
        self._timer.stop()
        self.wake_lock.release()
        self._set_state(EngineState.initial())

    def restart(self):
        if self._state.phase != Phase.Completed:
            logger.debug("restart() ignored in %s", self._state.phase.name)
            return
        self._set_state(EngineState.initial())

    def skip_ready(self):
        """Cut the Ready countdown short and begin the first exercise."""
        if self._state.phase != Phase.Ready:
            logger.debug("skip_ready() ignored in %s", self._state.phase.name)
            return
        duration = self._config.exercise_duration
        self._set_state(replace(self._state, phase=Phase.Exercise,
                                time_remaining=duration, total_time_for_phase=duration))
        self._timer.start()

    # --- Internal -------------------------------------------------------
    def _set_state(self, new_state: EngineState):
        old_phase = self._state.phase
        self._state = new_state
        if new_state.phase != old_phase:
            self.phase_changed.emit(new_state.phase)
        self.updated.emit(new_state)

    def _dispatch(self, effects: Iterable[Effect]):
        for effect in effects:
            if effect is Effect.COUNTDOWN_CUE:
                logger.debug("Countdown beeps, %s ending", self._state.phase.name)
                self.cues.play_countdown_sequence()
            elif effect is Effect.COMPLETION_FANFARE:
                self.cues.play_completion_fanfare()
            elif effect is Effect.RELEASE_WAKE_LOCK:
                self.wake_lock.release()
