"""
Collaborators the interpreter talks to

Display and sound backends are narrow capabilities: the display receives the
frame buffer whenever pixels change, the sound sink receives beep durations.
The null implementations let the core run headless.
"""

import random
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol

from .keypad import Keypad
from .video import VideoBuffer


class Display(Protocol):
    def refresh(self, video: VideoBuffer) -> None:
        ...


class Sound(Protocol):
    def beep(self, duration_ms: int) -> None:
        ...


class NullDisplay:
    """Display sink that discards frames"""

    def refresh(self, video: VideoBuffer) -> None:
        pass


class NullSound:
    """Sound sink that discards beeps"""

    def beep(self, duration_ms: int) -> None:
        pass


class CallbackDisplay:
    """Display sink that forwards frames to a plain function"""

    def __init__(self, callback: Optional[Callable[[VideoBuffer], None]] = None):
        self._callback = callback

    def refresh(self, video: VideoBuffer) -> None:
        if self._callback is not None:
            self._callback(video)


@dataclass
class Peripherals:
    """Everything an instruction may reach outside the machine state"""
    display: Display = field(default_factory=NullDisplay)
    sound: Sound = field(default_factory=NullSound)
    keypad: Keypad = field(default_factory=Keypad)
    rng: random.Random = field(default_factory=random.Random)
