"""Instruction and 60Hz timer scheduling"""

import pytest

from chip8emu.clock import Clock


def counting_clock():
    clock = Clock()
    calls = []
    return clock, calls, lambda: calls.append(clock.delay)


class TestInstructionCadence:
    def test_zero_one_or_many_per_update(self):
        clock, calls, tick = counting_clock()
        assert clock.update(tick, 0.001, 500) == 0
        assert clock.update(tick, 0.001, 500) == 1
        assert clock.update(tick, 0.010, 500) == 5
        assert len(calls) == 6

    def test_exact_second(self):
        clock, calls, tick = counting_clock()
        clock.update(tick, 1.0, 500)
        assert len(calls) == 500

    def test_remainder_carries_over(self):
        clock, calls, tick = counting_clock()
        for _ in range(3):
            clock.update(tick, 0.005, 100)
        assert len(calls) == 1

    @pytest.mark.parametrize("target", [0, -5])
    def test_rate_floors_at_one(self, target):
        clock, calls, tick = counting_clock()
        clock.update(tick, 0.5, target)
        assert calls == []
        clock.update(tick, 0.5, target)
        assert len(calls) == 1


class TestDelayTimer:
    @pytest.mark.parametrize("slices", [
        [1.0],
        [1.0 / 60] * 60,
        [0.3, 0.2, 0.5],
        [0.001] * 1000,
    ])
    def test_one_second_is_sixty_decrements(self, slices):
        for target in (1, 500, 5000):
            clock, _, tick = counting_clock()
            clock.delay = 200
            for dt in slices:
                clock.update(tick, dt, target)
            assert clock.delay == 140

    def test_clamped_at_zero(self):
        clock, _, tick = counting_clock()
        clock.delay = 10
        clock.update(tick, 1.0, 60)
        assert clock.delay == 0

    def test_instructions_run_before_timer(self):
        clock, calls, tick = counting_clock()
        clock.delay = 1
        clock.update(tick, 1.0 / 60, 60)
        assert calls == [1]
        assert clock.delay == 0

    def test_reset(self):
        clock, calls, tick = counting_clock()
        clock.delay = 9
        clock.update(tick, 0.009, 100)
        clock.reset()
        assert clock.delay == 0
        clock.update(tick, 0.002, 100)
        assert calls == []
