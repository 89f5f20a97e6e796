"""Emulator fault taxonomy. Every fault is fatal to the current run."""

from typing import Optional


class Chip8Error(Exception):
    """Base class for all emulator faults"""


class UnimplementedOpcode(Chip8Error):
    """Fetched instruction has no handler"""

    def __init__(self, set_: int, sub: Optional[int] = None,
                 word: Optional[int] = None, address: Optional[int] = None):
        self.set = set_
        self.sub = sub
        self.word = word
        self.address = address

        text = f"instruction family 0x{set_:X}"
        if sub is not None:
            text += f" (sub-op 0x{sub:02X})"
        text += " not implemented"
        if word is not None and address is not None:
            text += f": ${word:04X} at ${address:03X}"
        super().__init__(text)


class StackOverflow(Chip8Error):
    """CALL with every stack slot in use"""

    def __init__(self, depth: int):
        self.depth = depth
        super().__init__(f"call stack overflow (depth {depth})")


class StackUnderflow(Chip8Error):
    """RET with an empty stack"""

    def __init__(self):
        super().__init__("call stack underflow (RET with empty stack)")


class InvalidRom(Chip8Error):
    """ROM source is empty, too large or unreadable"""
