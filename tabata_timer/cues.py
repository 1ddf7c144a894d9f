import logging
from typing import Callable, Dict, Optional, Tuple

import numpy as np
import pygame
import pygame.sndarray
from PyQt5.QtCore import QTimer

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100
PEAK_GAIN = 0.4
FLOOR_GAIN = 0.01
ENVELOPE_RAMP_MS = 10

COUNTDOWN_FREQUENCY = 600
COUNTDOWN_DURATION_MS = 100
COUNTDOWN_OFFSETS_MS = (0, 1000, 2000)

FANFARE_NOTE_MS = 400
# (frequency Hz, offset ms): A C# E A, then C and the high E with harmonies
FANFARE = (
    (440, 0),
    (554, 200),
    (659, 400),
    (880, 600),
    (1047, 800),
    (659, 600),
    (880, 800),
    (1319, 1000),
)

Scheduler = Callable[[int, Callable[[], None]], None]


def pulse_envelope(n: int, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Gain curve: linear attack to PEAK_GAIN, hold, exponential decay to FLOOR_GAIN."""
    ramp = min(int(sample_rate * ENVELOPE_RAMP_MS / 1000), n // 2)
    envelope = np.full(n, PEAK_GAIN)
    if ramp > 0:
        envelope[:ramp] = np.linspace(0.0, PEAK_GAIN, ramp, endpoint=False)
        envelope[n - ramp:] = np.geomspace(PEAK_GAIN, FLOOR_GAIN, ramp)
    return envelope


def synthesize_pulse(frequency_hz: float, duration_ms: int,
                     sample_rate: int = SAMPLE_RATE, channels: int = 2) -> np.ndarray:
    """16-bit PCM samples of an enveloped sine tone, shaped for pygame.sndarray."""
    n = max(int(sample_rate * duration_ms / 1000), 1)
    t = np.arange(n) / sample_rate
    wave = np.sin(2 * np.pi * frequency_hz * t) * pulse_envelope(n, sample_rate)
    audio = (wave * 32767).astype(np.int16)
    if channels == 1:
        return audio
    return np.ascontiguousarray(np.repeat(audio.reshape(n, 1), channels, axis=1))


class CueEmitter:
    """Plays the workout's audible cues through pygame's mixer.

    The mixer is only opened on first use, after the user pressed Start.
    Every failure is logged and swallowed so the timer never stops because
    of audio.
    """

    def __init__(self, scheduler: Optional[Scheduler] = None, enabled: bool = True):
        self.enabled = enabled
        self._scheduler = scheduler or QTimer.singleShot
        self._ready = False
        self._unavailable = False
        self._sounds: Dict[Tuple, "pygame.mixer.Sound"] = {}

    @property
    def available(self) -> bool:
        return self._ready

    def prepare(self) -> bool:
        """Open (or unpause) the audio output. Returns True if cues can play."""
        if self._unavailable or not self.enabled:
            return False
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2, buffer=512)
                logger.info("Audio mixer initialised: %s", pygame.mixer.get_init())
            else:
                pygame.mixer.unpause()
        except pygame.error as e:
            logger.warning("Audio not available, cues disabled: %s", e)
            self._unavailable = True
            return False
        self._ready = True
        return True

    def play_pulse(self, frequency_hz: float, duration_ms: int):
        if not self.enabled:
            return
        if not self._ready and not self.prepare():
            return
        try:
            sound = self._sound_for(frequency_hz, duration_ms)
            sound.play()
            logger.debug("Pulse %sHz for %dms", frequency_hz, duration_ms)
        except (pygame.error, TypeError, ValueError) as e:
            logger.warning("Audio playback failed: %s", e)

    def play_countdown_sequence(self):
        for offset in COUNTDOWN_OFFSETS_MS:
            self._at(offset, COUNTDOWN_FREQUENCY, COUNTDOWN_DURATION_MS)

    def play_completion_fanfare(self):
        logger.info("Playing completion fanfare")
        for freq, offset in FANFARE:
            self._at(offset, freq, FANFARE_NOTE_MS)

    def _at(self, offset_ms: int, frequency_hz: float, duration_ms: int):
        if offset_ms <= 0:
            self.play_pulse(frequency_hz, duration_ms)
        else:
            self._scheduler(offset_ms, lambda: self.play_pulse(frequency_hz, duration_ms))

    def _sound_for(self, frequency_hz: float, duration_ms: int):
        sample_rate, _size, channels = pygame.mixer.get_init()
        key = (frequency_hz, duration_ms, sample_rate, channels)
        if key not in self._sounds:
            samples = synthesize_pulse(frequency_hz, duration_ms, sample_rate, channels)
            self._sounds[key] = pygame.sndarray.make_sound(samples)
        return self._sounds[key]
