"""
Instruction and delay-timer scheduling

The host feeds wall-clock time in arbitrary slices. Two accumulators turn
those slices into discrete ticks: one at the requested instruction rate and
one at the fixed 60Hz delay-timer rate, so timer countdowns stay accurate no
matter how fast instructions run.
"""

from typing import Callable

from .constants import TIMER_HZ

TIMER_INTERVAL = 1.0 / TIMER_HZ

# Slack for float rounding when a slice is an exact multiple of an interval
_EPSILON = 1e-9


class Clock:
    """Time accumulators plus the 8-bit delay register"""

    def __init__(self):
        self.delay = 0
        self._instruction_accumulator = 0.0
        self._timer_accumulator = 0.0

    def reset(self):
        self.delay = 0
        self._instruction_accumulator = 0.0
        self._timer_accumulator = 0.0

    def update(self, on_tick: Callable[[], None], elapsed_seconds: float,
               target_instructions_per_second: int) -> int:
        """Run every instruction and timer tick due in this slice

        Instructions run first, then delay decrements. Returns the number of
        times ``on_tick`` was called.
        """
        ticks = self._process_instructions(on_tick, elapsed_seconds,
                                           target_instructions_per_second)
        self._update_delay(elapsed_seconds)
        return ticks

    def _process_instructions(self, on_tick: Callable[[], None],
                              elapsed_seconds: float, target: int) -> int:
        interval = 1.0 / max(1, target)
        self._instruction_accumulator += elapsed_seconds

        ticks = 0
        while self._instruction_accumulator >= interval - _EPSILON:
            on_tick()
            self._instruction_accumulator -= interval
            ticks += 1
        return ticks

    def _update_delay(self, elapsed_seconds: float):
        self._timer_accumulator += elapsed_seconds

        while self._timer_accumulator >= TIMER_INTERVAL - _EPSILON:
            if self.delay > 0:
                self.delay -= 1
            self._timer_accumulator -= TIMER_INTERVAL
