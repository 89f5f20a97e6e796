"""CPU register file and call stack"""

from dataclasses import dataclass, field
from typing import List

from .constants import NUM_REGISTERS, PROGRAM_START, STACK_SIZE
from .errors import StackOverflow, StackUnderflow


@dataclass
class Registers:
    """CHIP-8 register file"""
    V: List[int] = field(default_factory=lambda: [0] * NUM_REGISTERS)  # V0-VF
    I: int = 0              # Index register (12-bit in practice)
    PC: int = PROGRAM_START # Program counter
    SP: int = 0             # Stack pointer

    # Stack
    stack: List[int] = field(default_factory=lambda: [0] * STACK_SIZE)

    def push(self, value: int):
        """Push a return address; fails when every slot is in use"""
        if self.SP >= len(self.stack):
            raise StackOverflow(len(self.stack))
        self.stack[self.SP] = value & 0xFFFF
        self.SP += 1

    def pop(self) -> int:
        """Pop the most recent return address"""
        if self.SP == 0:
            raise StackUnderflow()
        self.SP -= 1
        return self.stack[self.SP]

    def reset(self):
        """Reset to power-on values"""
        self.V[:] = [0] * NUM_REGISTERS
        self.stack[:] = [0] * len(self.stack)
        self.I = 0
        self.PC = PROGRAM_START
        self.SP = 0
