"""pygame sound backend: sine beeps synthesised with numpy"""

import logging
import os
from functools import lru_cache

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import numpy as np
import pygame

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100


def make_tone(duration_ms: int, frequency: float = 500.0, volume: float = 0.25,
              sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Mono signed 16-bit sine samples for a beep of the given length"""
    sample_count = int(sample_rate * duration_ms / 1000.0)
    if sample_count <= 0:
        return np.zeros(0, dtype=np.int16)

    t = np.arange(sample_count, dtype=np.float64) / sample_rate
    amplitude = volume * np.iinfo(np.int16).max
    return (amplitude * np.sin(2.0 * np.pi * frequency * t)).astype(np.int16)


class PygameBeeper:
    """Sound sink that plays FX18 beeps through pygame.mixer"""

    def __init__(self, frequency: float = 500.0, volume: float = 0.25):
        self.frequency = frequency
        self.volume = volume
        self.enabled = True
        # Recently used durations only; games tend to reuse a few lengths
        self._sound_for = lru_cache(maxsize=10)(self._create_sound)

    def _ensure_mixer(self) -> bool:
        if pygame.mixer.get_init() is None:
            try:
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
            except pygame.error as e:
                logger.warning("audio disabled: %s", e)
                self.enabled = False
                return False
        return True

    def _create_sound(self, duration_ms: int) -> pygame.mixer.Sound:
        rate, _, channels = pygame.mixer.get_init()
        samples = make_tone(duration_ms, self.frequency, self.volume, rate)
        if channels > 1:
            samples = np.repeat(samples[:, np.newaxis], channels, axis=1)
        return pygame.sndarray.make_sound(np.ascontiguousarray(samples))

    def beep(self, duration_ms: int) -> None:
        if duration_ms <= 0 or not self.enabled:
            return
        if not self._ensure_mixer():
            return
        self._sound_for(duration_ms).play()
