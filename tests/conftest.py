"""Shared fixtures: a headless CPU with recording display and sound sinks"""

import random

import pytest

from chip8emu import CallbackDisplay, Chip8CPU

RNG_SEED = 1234


class RecordingSound:
    def __init__(self):
        self.beeps = []

    def beep(self, duration_ms):
        self.beeps.append(duration_ms)


@pytest.fixture
def frames():
    """Snapshots of every frame handed to the display"""
    return []


@pytest.fixture
def sound():
    return RecordingSound()


@pytest.fixture
def cpu(frames, sound):
    display = CallbackDisplay(lambda video: frames.append(video.pixels.copy()))
    return Chip8CPU(display=display, sound=sound, rng=random.Random(RNG_SEED))


def assemble(*words):
    """Big-endian program bytes from instruction words"""
    return b"".join(w.to_bytes(2, "big") for w in words)


@pytest.fixture
def program(cpu, frames):
    """Load instruction words at 0x200 and return the CPU"""
    def load(*words):
        cpu.load_rom(assemble(*words))
        frames.clear()
        return cpu
    return load


@pytest.fixture
def run(program):
    """Load instruction words and step through all of them"""
    def execute(*words):
        cpu = program(*words)
        for _ in words:
            cpu.step()
        return cpu
    return execute
