"""
Instruction handlers and dispatch tables

Each handler takes the machine state, the peripherals and the decoded opcode
and performs one instruction. PC already points past the instruction when a
handler runs, so "skip next" is PC += 2 and "repeat this one" is PC -= 2.
"""

from typing import Callable, Dict, Optional, Tuple

from .constants import (DISPLAY_H, DISPLAY_W, FLAG_REGISTER, FONT_GLYPH_SIZE,
                        SPRITE_WIDTH)
from .errors import UnimplementedOpcode
from .opcode import OpCode
from .peripherals import Peripherals
from .state import Chip8State

Handler = Callable[[Chip8State, Peripherals, OpCode], None]


def _unimplemented(state: Chip8State, op: OpCode,
                   sub: Optional[int] = None) -> UnimplementedOpcode:
    return UnimplementedOpcode(op.set, sub, op.word, state.registers.PC - 2)


# ═══════════════════════════════════════════════════════════════════════════════
# 0x0 FAMILY
# ═══════════════════════════════════════════════════════════════════════════════

def cls(state: Chip8State, io: Peripherals, op: OpCode):
    """00E0: CLS - Clear display"""
    state.video.reset()
    io.display.refresh(state.video)


def ret(state: Chip8State, io: Peripherals, op: OpCode):
    """00EE: RET - Return from subroutine"""
    state.registers.PC = state.registers.pop()


def zero_ops(state: Chip8State, io: Peripherals, op: OpCode):
    if op.nnn == 0x0E0:
        cls(state, io, op)
    elif op.nnn == 0x0EE:
        ret(state, io, op)
    else:
        raise _unimplemented(state, op, op.nn)


# ═══════════════════════════════════════════════════════════════════════════════
# FLOW CONTROL
# ═══════════════════════════════════════════════════════════════════════════════

def jump(state: Chip8State, io: Peripherals, op: OpCode):
    """1NNN: JP addr"""
    state.registers.PC = op.nnn


def call(state: Chip8State, io: Peripherals, op: OpCode):
    """2NNN: CALL addr"""
    state.registers.push(state.registers.PC)
    state.registers.PC = op.nnn


def skip_vx_eq_nn(state: Chip8State, io: Peripherals, op: OpCode):
    """3XNN: SE Vx, byte"""
    if state.registers.V[op.x] == op.nn:
        state.registers.PC += 2


def skip_vx_neq_nn(state: Chip8State, io: Peripherals, op: OpCode):
    """4XNN: SNE Vx, byte"""
    if state.registers.V[op.x] != op.nn:
        state.registers.PC += 2


def skip_vx_neq_vy(state: Chip8State, io: Peripherals, op: OpCode):
    """9XY0: SNE Vx, Vy"""
    V = state.registers.V
    if V[op.x] != V[op.y]:
        state.registers.PC += 2


# ═══════════════════════════════════════════════════════════════════════════════
# REGISTERS & ALU
# ═══════════════════════════════════════════════════════════════════════════════

def set_vx(state: Chip8State, io: Peripherals, op: OpCode):
    """6XNN: LD Vx, byte"""
    state.registers.V[op.x] = op.nn


def add_vx(state: Chip8State, io: Peripherals, op: OpCode):
    """7XNN: ADD Vx, byte (no carry flag)"""
    V = state.registers.V
    V[op.x] = (V[op.x] + op.nn) & 0xFF


def alu_ops(state: Chip8State, io: Peripherals, op: OpCode):
    """8XYN: register-to-register arithmetic and logic"""
    V = state.registers.V
    x, y = op.x, op.y

    if op.n == 0x0:
        # 8XY0: LD Vx, Vy
        V[x] = V[y]

    elif op.n == 0x1:
        # 8XY1: OR Vx, Vy
        V[x] |= V[y]

    elif op.n == 0x2:
        # 8XY2: AND Vx, Vy
        V[x] &= V[y]

    elif op.n == 0x3:
        # 8XY3: XOR Vx, Vy
        V[x] ^= V[y]

    elif op.n == 0x4:
        # 8XY4: ADD Vx, Vy (VF = carry)
        result = V[x] + V[y]
        V[x] = result & 0xFF
        V[FLAG_REGISTER] = 1 if result > 0xFF else 0

    elif op.n == 0x5:
        # 8XY5: SUB Vx, Vy (VF = NOT borrow)
        not_borrow = 1 if V[x] > V[y] else 0
        V[x] = (V[x] - V[y]) & 0xFF
        V[FLAG_REGISTER] = not_borrow

    elif op.n == 0x6:
        # 8XY6: SHR Vx (VF = dropped bit)
        dropped = V[x] & 0x1
        V[x] >>= 1
        V[FLAG_REGISTER] = dropped

    elif op.n == 0x7:
        # 8XY7: SUBN Vx, Vy (VF = NOT borrow)
        not_borrow = 1 if V[y] > V[x] else 0
        V[x] = (V[y] - V[x]) & 0xFF
        V[FLAG_REGISTER] = not_borrow

    else:
        raise _unimplemented(state, op, op.n)


def set_i(state: Chip8State, io: Peripherals, op: OpCode):
    """ANNN: LD I, addr"""
    state.registers.I = op.nnn


def rand(state: Chip8State, io: Peripherals, op: OpCode):
    """CXNN: RND Vx, byte"""
    state.registers.V[op.x] = io.rng.randint(0, 255) & op.nn


# ═══════════════════════════════════════════════════════════════════════════════
# DISPLAY
# ═══════════════════════════════════════════════════════════════════════════════

def draw(state: Chip8State, io: Peripherals, op: OpCode):
    """DXYN: DRW Vx, Vy, nibble

    XORs an 8xN sprite from memory[I] onto the screen. Coordinates wrap
    around both edges. VF is 1 if any lit pixel was hit by a set sprite bit
    anywhere in the sprite, else 0. The display is refreshed once, and only
    when some pixel actually changed.
    """
    V = state.registers.V
    memory = state.memory
    video = state.video
    start_x = V[op.x]
    start_y = V[op.y]

    collision = 0
    changed = False

    # Read the whole sprite first so a bad I faults before any pixel changes
    sprite = memory.read(state.registers.I, op.n)

    for row, sprite_byte in enumerate(sprite):
        py = (start_y + row) % DISPLAY_H

        for col in range(SPRITE_WIDTH):
            if not sprite_byte & (0x80 >> col):
                continue

            px = (start_x + col) % DISPLAY_W
            if video[px, py]:
                collision = 1
            video[px, py] = not video[px, py]
            changed = True

    V[FLAG_REGISTER] = collision

    if changed:
        io.display.refresh(video)


# ═══════════════════════════════════════════════════════════════════════════════
# KEYPAD
# ═══════════════════════════════════════════════════════════════════════════════

def skip_on_key(state: Chip8State, io: Peripherals, op: OpCode):
    """EX9E: SKP Vx / EXA1: SKNP Vx"""
    pressed = io.keypad.is_pressed(state.registers.V[op.x])

    if op.nn == 0x9E:
        if pressed:
            state.registers.PC += 2

    elif op.nn == 0xA1:
        if not pressed:
            state.registers.PC += 2

    else:
        raise _unimplemented(state, op, op.nn)


# ═══════════════════════════════════════════════════════════════════════════════
# 0xF FAMILY: timers, sound, index register, memory
# ═══════════════════════════════════════════════════════════════════════════════

def get_delay(state: Chip8State, io: Peripherals, op: OpCode):
    """FX07: LD Vx, DT"""
    state.registers.V[op.x] = state.clock.delay


def wait_key(state: Chip8State, io: Peripherals, op: OpCode):
    """FX0A: LD Vx, K

    Re-runs itself until a key is held; each retry costs one instruction.
    """
    key = io.keypad.most_recent()
    if key is None:
        state.registers.PC -= 2
        return
    state.registers.V[op.x] = int(key)


def set_delay(state: Chip8State, io: Peripherals, op: OpCode):
    """FX15: LD DT, Vx"""
    state.clock.delay = state.registers.V[op.x]


def play_sound(state: Chip8State, io: Peripherals, op: OpCode):
    """FX18: beep for Vx milliseconds"""
    io.sound.beep(state.registers.V[op.x])


def add_i(state: Chip8State, io: Peripherals, op: OpCode):
    """FX1E: ADD I, Vx"""
    regs = state.registers
    regs.I = (regs.I + regs.V[op.x]) & 0xFFFF


def font_char(state: Chip8State, io: Peripherals, op: OpCode):
    """FX29: LD F, Vx (point I to font sprite)"""
    state.registers.I = state.registers.V[op.x] * FONT_GLYPH_SIZE


def bcd(state: Chip8State, io: Peripherals, op: OpCode):
    """FX33: LD B, Vx"""
    value = state.registers.V[op.x]
    state.memory.write(state.registers.I,
                       bytes([value // 100, (value // 10) % 10, value % 10]))


def load_registers(state: Chip8State, io: Peripherals, op: OpCode):
    """FX65: LD Vx, [I] (load V0-Vx)"""
    regs = state.registers
    regs.V[:op.x + 1] = state.memory.read(regs.I, op.x + 1)


MISC_INSTRUCTIONS: Dict[int, Handler] = {
    0x07: get_delay,
    0x0A: wait_key,
    0x15: set_delay,
    0x18: play_sound,
    0x1E: add_i,
    0x29: font_char,
    0x33: bcd,
    0x65: load_registers,
}


def misc_ops(state: Chip8State, io: Peripherals, op: OpCode):
    handler = MISC_INSTRUCTIONS.get(op.nn)
    if handler is None:
        raise _unimplemented(state, op, op.nn)
    handler(state, io, op)


# ═══════════════════════════════════════════════════════════════════════════════
# DISPATCH
# ═══════════════════════════════════════════════════════════════════════════════

# Indexed directly by the top nibble
INSTRUCTIONS: Tuple[Optional[Handler], ...] = (
    zero_ops,        # 0x0 - CLS / RET
    jump,            # 0x1
    call,            # 0x2
    skip_vx_eq_nn,   # 0x3
    skip_vx_neq_nn,  # 0x4
    None,            # 0x5
    set_vx,          # 0x6
    add_vx,          # 0x7
    alu_ops,         # 0x8
    skip_vx_neq_vy,  # 0x9
    set_i,           # 0xA
    None,            # 0xB
    rand,            # 0xC
    draw,            # 0xD
    skip_on_key,     # 0xE
    misc_ops,        # 0xF
)


def execute(state: Chip8State, io: Peripherals, op: OpCode):
    """Run one decoded instruction against the state"""
    handler = INSTRUCTIONS[op.set]
    if handler is None:
        raise _unimplemented(state, op)
    handler(state, io, op)
