"""
Hex keypad latch

Tracks which of the 16 keys are held and which one went down last. Key
events may arrive from a different thread than the one driving the
interpreter, so every access goes through a lock.

CHIP-8 Keypad:
1 2 3 C
4 5 6 D
7 8 9 E
A 0 B F
"""

import logging
import threading
from collections import OrderedDict
from enum import IntEnum
from typing import List, Optional

from .constants import NUM_KEYS

logger = logging.getLogger(__name__)


class Key(IntEnum):
    K0 = 0x0
    K1 = 0x1
    K2 = 0x2
    K3 = 0x3
    K4 = 0x4
    K5 = 0x5
    K6 = 0x6
    K7 = 0x7
    K8 = 0x8
    K9 = 0x9
    A = 0xA
    B = 0xB
    C = 0xC
    D = 0xD
    E = 0xE
    F = 0xF


class Keypad:
    """Insertion-ordered set of pressed keys; last pressed wins"""

    def __init__(self):
        self._pressed: "OrderedDict[int, None]" = OrderedDict()
        self._lock = threading.Lock()

    def key_down(self, key: int):
        """Mark a key pressed and make it the most recent one"""
        if not 0 <= key < NUM_KEYS:
            logger.debug("ignoring key down for unknown key %r", key)
            return
        with self._lock:
            self._pressed[Key(key)] = None
            self._pressed.move_to_end(Key(key))

    def key_up(self, key: int):
        """Release a key"""
        if not 0 <= key < NUM_KEYS:
            logger.debug("ignoring key up for unknown key %r", key)
            return
        with self._lock:
            self._pressed.pop(Key(key), None)

    def is_pressed(self, key: int) -> bool:
        with self._lock:
            return key in self._pressed

    def any_pressed(self) -> bool:
        with self._lock:
            return bool(self._pressed)

    def most_recent(self) -> Optional[Key]:
        """Most recently pressed key still held, or None"""
        with self._lock:
            if not self._pressed:
                return None
            return next(reversed(self._pressed))

    def pressed(self) -> List[Key]:
        """Held keys, oldest press first"""
        with self._lock:
            return list(self._pressed)

    def release_all(self):
        with self._lock:
            self._pressed.clear()
