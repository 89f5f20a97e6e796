"""Machine state shared by every instruction handler"""

from dataclasses import dataclass, field

from .clock import Clock
from .memory import Memory
from .opcode import OpCode
from .registers import Registers
from .video import VideoBuffer


@dataclass
class Chip8State:
    """CHIP-8 machine state container"""
    memory: Memory = field(default_factory=Memory)
    registers: Registers = field(default_factory=Registers)
    video: VideoBuffer = field(default_factory=VideoBuffer)
    clock: Clock = field(default_factory=Clock)

    def fetch(self) -> OpCode:
        """Fetch and decode the word at PC, advancing PC past it"""
        pc = self.registers.PC
        hi = self.memory[pc]
        lo = self.memory[pc + 1]
        self.registers.PC = pc + 2
        return OpCode.from_bytes(hi, lo)

    def peek(self) -> OpCode:
        """Decode the word at PC without moving it"""
        pc = self.registers.PC
        return OpCode.from_bytes(self.memory[pc], self.memory[pc + 1])

    def reset(self):
        self.memory.reset()
        self.registers.reset()
        self.video.reset()
        self.clock.reset()

    def load_rom(self, data: bytes):
        """Reset everything, then install the program at 0x200"""
        self.memory.load_rom(data)
        self.registers.reset()
        self.video.reset()
        self.clock.reset()
