"""Mnemonic rendering of CHIP-8 instruction words"""

from typing import List

from .constants import PROGRAM_START
from .opcode import OpCode

ALU_MNEMONICS = {0x0: "LD", 0x1: "OR", 0x2: "AND", 0x3: "XOR", 0x4: "ADD",
                 0x5: "SUB", 0x6: "SHR", 0x7: "SUBN", 0xE: "SHL"}

MISC_MNEMONICS = {0x07: "LD Vx, DT", 0x0A: "LD Vx, K", 0x15: "LD DT, Vx",
                  0x18: "SND Vx", 0x1E: "ADD I, Vx", 0x29: "LD F, Vx",
                  0x33: "LD B, Vx", 0x55: "LD [I], Vx", 0x65: "LD Vx, [I]"}


def disassemble(word: int) -> str:
    """Disassemble opcode to human-readable string"""
    op = OpCode.decode(word)
    x, y, n, nn, nnn = op.x, op.y, op.n, op.nn, op.nnn

    if op.word == 0x00E0:
        return "CLS"
    elif op.word == 0x00EE:
        return "RET"
    elif op.set == 0x0:
        return f"SYS ${nnn:03X}"
    elif op.set == 0x1:
        return f"JP ${nnn:03X}"
    elif op.set == 0x2:
        return f"CALL ${nnn:03X}"
    elif op.set == 0x3:
        return f"SE V{x:X}, ${nn:02X}"
    elif op.set == 0x4:
        return f"SNE V{x:X}, ${nn:02X}"
    elif op.set == 0x5 and n == 0x0:
        return f"SE V{x:X}, V{y:X}"
    elif op.set == 0x6:
        return f"LD V{x:X}, ${nn:02X}"
    elif op.set == 0x7:
        return f"ADD V{x:X}, ${nn:02X}"
    elif op.set == 0x8 and n in ALU_MNEMONICS:
        if n in (0x6, 0xE):
            return f"{ALU_MNEMONICS[n]} V{x:X}"
        return f"{ALU_MNEMONICS[n]} V{x:X}, V{y:X}"
    elif op.set == 0x9 and n == 0x0:
        return f"SNE V{x:X}, V{y:X}"
    elif op.set == 0xA:
        return f"LD I, ${nnn:03X}"
    elif op.set == 0xB:
        return f"JP V0, ${nnn:03X}"
    elif op.set == 0xC:
        return f"RND V{x:X}, ${nn:02X}"
    elif op.set == 0xD:
        return f"DRW V{x:X}, V{y:X}, {n}"
    elif op.set == 0xE and nn == 0x9E:
        return f"SKP V{x:X}"
    elif op.set == 0xE and nn == 0xA1:
        return f"SKNP V{x:X}"
    elif op.set == 0xF and nn in MISC_MNEMONICS:
        return MISC_MNEMONICS[nn].replace("Vx", f"V{x:X}")

    return f".word ${op.word:04X}"


def disassemble_rom(data: bytes, start_addr: int = PROGRAM_START) -> List[str]:
    """
    Convert a binary program into listing lines.
    Each line: "ADDR:  MNEMONIC"
    """
    lines = []
    addr = start_addr
    i = 0
    while i + 1 < len(data):
        word = (data[i] << 8) | data[i + 1]
        lines.append(f"{addr:04X}:  {disassemble(word)}")
        addr += 2
        i += 2
    # If there is a trailing byte, show it as data
    if i < len(data):
        lines.append(f"{addr:04X}:  .byte ${data[i]:02X}  ; odd trailing byte")
    return lines
