"""4KB CHIP-8 address space with the built-in font preloaded at 0x000"""

from .constants import FONTSET, MAX_ROM_SIZE, MEMORY_SIZE, PROGRAM_START
from .errors import InvalidRom


class Memory:
    """Byte-addressable RAM, bounds-checked against 0x000-0xFFF"""

    def __init__(self):
        self._data = bytearray(MEMORY_SIZE)
        self._load_fontset()

    def __len__(self) -> int:
        return len(self._data)

    def _check(self, addr: int):
        if not 0 <= addr < MEMORY_SIZE:
            raise IndexError(f"address ${addr:X} outside 4KB address space")

    def __getitem__(self, addr: int) -> int:
        self._check(addr)
        return self._data[addr]

    def __setitem__(self, addr: int, value: int):
        self._check(addr)
        self._data[addr] = value & 0xFF

    def _load_fontset(self):
        """Load built-in font sprites to memory"""
        self._data[0:len(FONTSET)] = FONTSET

    def reset(self):
        """Zero all RAM and reinstall the font"""
        self._data[:] = bytes(MEMORY_SIZE)
        self._load_fontset()

    def load_rom(self, data: bytes):
        """Reset memory and copy a program in at PROGRAM_START"""
        if not data:
            raise InvalidRom("ROM is empty")
        if len(data) > MAX_ROM_SIZE:
            raise InvalidRom(f"ROM is {len(data)} bytes, limit is {MAX_ROM_SIZE}")

        self.reset()
        self._data[PROGRAM_START:PROGRAM_START + len(data)] = data

    def read(self, addr: int, length: int) -> bytes:
        """Copy `length` bytes starting at `addr`"""
        if length:
            self._check(addr)
            self._check(addr + length - 1)
        return bytes(self._data[addr:addr + length])

    def write(self, addr: int, data: bytes):
        """Copy `data` in at `addr`; nothing is written if any byte is out of range"""
        if data:
            self._check(addr)
            self._check(addr + len(data) - 1)
        self._data[addr:addr + len(data)] = data
