"""
Instruction word decoding

Every CHIP-8 instruction is one big-endian 16-bit word. The top nibble picks
the instruction family; the remaining bits are read as register selectors or
immediates depending on the family:

    SXYN    S = set, X/Y = register selectors, N = low nibble
    S.NN    NN = low byte
    SNNN    NNN = 12-bit address
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class OpCode:
    """Decoded view of one instruction word"""
    word: int
    set: int    # First nibble
    x: int      # 4-bit register index
    y: int      # 4-bit register index
    n: int      # 4-bit constant
    nn: int     # 8-bit constant
    nnn: int    # 12-bit address

    @classmethod
    def decode(cls, word: int) -> "OpCode":
        word &= 0xFFFF
        return cls(
            word=word,
            set=word >> 12,
            x=(word & 0x0F00) >> 8,
            y=(word & 0x00F0) >> 4,
            n=word & 0x000F,
            nn=word & 0x00FF,
            nnn=word & 0x0FFF,
        )

    @classmethod
    def from_bytes(cls, hi: int, lo: int) -> "OpCode":
        return cls.decode((hi << 8) | lo)

    def __str__(self) -> str:
        return f"${self.word:04X}"
