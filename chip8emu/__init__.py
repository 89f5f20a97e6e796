"""CHIP-8 virtual machine"""

__version__ = "1.0.0"

from .cpu import Chip8CPU
from .errors import (Chip8Error, InvalidRom, StackOverflow, StackUnderflow,
                     UnimplementedOpcode)
from .keypad import Key, Keypad
from .opcode import OpCode
from .peripherals import CallbackDisplay, NullDisplay, NullSound, Peripherals
from .state import Chip8State
from .video import VideoBuffer

__all__ = [
    "Chip8CPU", "Chip8State", "OpCode", "VideoBuffer", "Key", "Keypad",
    "Peripherals", "NullDisplay", "NullSound", "CallbackDisplay",
    "Chip8Error", "UnimplementedOpcode", "StackOverflow", "StackUnderflow",
    "InvalidRom",
]
