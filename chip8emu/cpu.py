"""
CHIP-8 interpreter front door

Chip8CPU owns one machine state and the peripherals it talks to. The host
either single-steps it or hands it slices of wall-clock time through
update(), which runs as many instructions as the target rate allows and
counts the delay timer down at 60Hz.
"""

import logging
import random
from pathlib import Path
from typing import BinaryIO, Optional, Union

from . import instructions
from .constants import DEFAULT_CLOCK_HZ, MAX_ROM_SIZE
from .disasm import disassemble
from .errors import Chip8Error, InvalidRom
from .keypad import Keypad
from .opcode import OpCode
from .peripherals import Display, NullDisplay, NullSound, Peripherals, Sound
from .state import Chip8State

logger = logging.getLogger(__name__)
trace = logging.getLogger("chip8emu.trace")


class Chip8CPU:
    """CHIP-8 interpreter: state, peripherals and the execute loop"""

    def __init__(self, display: Optional[Display] = None,
                 sound: Optional[Sound] = None,
                 keypad: Optional[Keypad] = None,
                 rng: Optional[random.Random] = None):
        self.state = Chip8State()
        self.io = Peripherals(
            display=display if display is not None else NullDisplay(),
            sound=sound if sound is not None else NullSound(),
            keypad=keypad if keypad is not None else Keypad(),
            rng=rng if rng is not None else random.Random(),
        )
        self.running = False
        self.paused = False
        self.clock_hz = DEFAULT_CLOCK_HZ
        self.cycle_count = 0

    @property
    def keypad(self) -> Keypad:
        return self.io.keypad

    def reset(self):
        """Reset CPU to initial state"""
        self.state.reset()
        self.io.keypad.release_all()
        self.running = False
        self.paused = False
        self.cycle_count = 0
        self.io.display.refresh(self.state.video)
        logger.info("machine reset")

    def load_rom(self, data: bytes):
        """Load ROM data into memory and arm the CPU"""
        self.state.load_rom(bytes(data))
        self.io.keypad.release_all()
        self.running = True
        self.paused = False
        self.cycle_count = 0
        self.io.display.refresh(self.state.video)
        logger.info("loaded %d byte ROM", len(data))

    def load_rom_stream(self, stream: BinaryIO):
        """Load ROM from an open binary stream"""
        try:
            data = stream.read(MAX_ROM_SIZE + 1)
        except OSError as e:
            raise InvalidRom(f"unreadable ROM stream: {e}") from e
        if data is None:
            raise InvalidRom("ROM stream returned no data")
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise InvalidRom("ROM stream is not binary")
        self.load_rom(data)

    def load_rom_file(self, filepath: Union[str, Path]):
        """Load ROM from file"""
        try:
            with open(filepath, 'rb') as f:
                self.load_rom_stream(f)
        except OSError as e:
            raise InvalidRom(f"cannot open ROM {filepath}: {e}") from e

    def step(self) -> OpCode:
        """Fetch, decode and execute exactly one instruction

        On a fault PC is put back on the faulting instruction, the CPU
        stops running and the error propagates. IndexError means the
        program addressed memory outside 0x000-0xFFF.
        """
        pc = self.state.registers.PC
        try:
            op = self.state.fetch()
            if trace.isEnabledFor(logging.DEBUG):
                trace.debug("$%03X  %s  %s", pc, op, disassemble(op.word))
            instructions.execute(self.state, self.io, op)
        except (Chip8Error, IndexError):
            self.state.registers.PC = pc
            self.running = False
            raise
        self.cycle_count += 1
        return op

    def update(self, elapsed_seconds: float,
               target_instructions_per_second: Optional[int] = None) -> int:
        """Advance emulated time; returns the number of instructions run"""
        if not self.running or self.paused:
            return 0
        if target_instructions_per_second is None:
            target_instructions_per_second = self.clock_hz
        return self.state.clock.update(self.step, elapsed_seconds,
                                       target_instructions_per_second)

    def key_down(self, key: int):
        """Handle key press"""
        self.io.keypad.key_down(key)

    def key_up(self, key: int):
        """Handle key release"""
        self.io.keypad.key_up(key)
