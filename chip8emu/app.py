"""
pygame host: window, keyboard, status bar and the 60 FPS driver loop

Keys:
  CHIP-8 Keypad:    Keyboard:
  1 2 3 C           1 2 3 4
  4 5 6 D           Q W E R
  7 8 9 E           A S D F
  A 0 B F           Z X C V

  P = Pause/Resume   N = Step   F5 = Reset   F3 = Debug overlay
  F6 = Cycle colors  +/- = Speed   ESC = Exit
"""

import logging
import os
from pathlib import Path
from typing import Optional

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame

from .audio import PygameBeeper
from .config import COLOR_SCHEMES, COLORS, SPEED_PRESETS, EmulatorConfig
from .constants import DISPLAY_H, DISPLAY_W, MEMORY_SIZE
from .cpu import Chip8CPU
from .disasm import disassemble
from .display import GlowRenderer, PygameDisplay
from .errors import Chip8Error

logger = logging.getLogger(__name__)

STATUS_H = 25
FPS = 60
MAX_FRAME_TIME = 0.25                   # clamp after window drags and hitches

# Keyboard mapping (QWERTY -> CHIP-8 hex keypad)
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}


class StatusBar:
    """Bottom status bar"""

    def __init__(self, y: int, width: int, height: int):
        self.rect = pygame.Rect(0, y, width, height)
        self.text = "Ready"
        self.color = COLORS['text_dim']

    def draw(self, surface: pygame.Surface, font: pygame.font.Font):
        pygame.draw.rect(surface, COLORS['status_bg'], self.rect)
        text_surf = font.render(self.text, True, self.color)
        surface.blit(text_surf, (10, self.rect.y + 5))

    def set_text(self, text: str, error: bool = False):
        self.text = text
        self.color = COLORS['error'] if error else COLORS['text_dim']


class Chip8App:
    """Main emulator application"""

    def __init__(self, config: EmulatorConfig):
        self.config = config

        pygame.init()
        pygame.display.set_caption("CHIP-8")

        width = DISPLAY_W * config.scale
        height = DISPLAY_H * config.scale + STATUS_H
        self.screen = pygame.display.set_mode((width, height))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 20)

        renderer = GlowRenderer(DISPLAY_W, DISPLAY_H, config.scale, config.fg_color,
                                bloom_strength=config.bloom_strength,
                                blur_radius=config.blur_radius)
        self.display = PygameDisplay(renderer)
        self.cpu = Chip8CPU(display=self.display,
                            sound=PygameBeeper(config.beep_frequency, config.beep_volume))
        self.cpu.clock_hz = config.clock_hz

        self.status_bar = StatusBar(height - STATUS_H, width, STATUS_H)

        self.running = True
        self.show_debug = config.show_debug
        self.rom_path: Optional[Path] = None

    # ─── Commands ───

    def load_rom(self, path: str):
        """Load a ROM file; InvalidRom propagates to the caller"""
        self.cpu.load_rom_file(path)
        self.rom_path = Path(path)
        pygame.display.set_caption(f"CHIP-8 - {self.rom_path.stem}")
        self.status_bar.set_text(f"Loaded: {self.rom_path.stem}")

    def reset(self):
        if self.rom_path is not None:
            self.load_rom(str(self.rom_path))
        else:
            self.cpu.reset()
        self.status_bar.set_text("Reset")

    def toggle_pause(self):
        self.cpu.paused = not self.cpu.paused
        self.status_bar.set_text("Paused" if self.cpu.paused else "Running")

    def step(self):
        """Single step execution"""
        if not self.cpu.running:
            return
        self.cpu.paused = True
        self._guarded(self.cpu.step)
        self.status_bar.set_text(f"Step - PC: ${self.cpu.state.registers.PC:03X}")

    def change_speed(self, direction: int):
        presets = sorted(set(SPEED_PRESETS) | {self.cpu.clock_hz})
        i = presets.index(self.cpu.clock_hz) + direction
        self.cpu.clock_hz = presets[max(0, min(i, len(presets) - 1))]
        self.status_bar.set_text(f"Speed: {self.cpu.clock_hz} Hz")

    def cycle_color(self):
        names = list(COLOR_SCHEMES)
        name = names[(names.index(self.config.color_scheme) + 1) % len(names)]
        self.config = self.config.replace(color_scheme=name)
        self.display.renderer.fg_color = COLOR_SCHEMES[name]
        self.display.invalidate()
        self.status_bar.set_text(f"Color: {name}")

    def _guarded(self, action, *args):
        """Run an emulator action; faults halt the machine and are reported"""
        try:
            return action(*args)
        except (Chip8Error, IndexError) as e:
            logger.error("emulation halted: %s", e)
            self.status_bar.set_text(f"Halted: {e}", error=True)
            return None

    # ─── Main loop ───

    def handle_events(self):
        """Process input events"""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_p:
                    self.toggle_pause()
                elif event.key == pygame.K_n:
                    self.step()
                elif event.key == pygame.K_F5:
                    self._guarded(self.reset)
                elif event.key == pygame.K_F3:
                    self.show_debug = not self.show_debug
                elif event.key == pygame.K_F6:
                    self.cycle_color()
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    self.change_speed(1)
                elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                    self.change_speed(-1)
                elif event.key in KEY_MAP:
                    self.cpu.key_down(KEY_MAP[event.key])

            elif event.type == pygame.KEYUP:
                if event.key in KEY_MAP:
                    self.cpu.key_up(KEY_MAP[event.key])

    def render(self):
        self.screen.fill(COLORS['bg_dark'])
        self.display.draw(self.screen, (0, 0))

        if self.show_debug:
            self._render_debug()

        self.status_bar.draw(self.screen, self.font)
        pygame.display.flip()

    def _render_debug(self):
        """Render debug information overlay"""
        regs = self.cpu.state.registers
        lines = [
            f"PC: ${regs.PC:03X}  I: ${regs.I:03X}",
            f"SP: {regs.SP}  DT: {self.cpu.state.clock.delay:02X}  {self.cpu.clock_hz} Hz",
            "V0-V7: " + " ".join(f"{v:02X}" for v in regs.V[:8]),
            "V8-VF: " + " ".join(f"{v:02X}" for v in regs.V[8:]),
        ]
        if regs.PC < MEMORY_SIZE - 1:
            op = self.cpu.state.peek()
            lines.append(f"OP: {op} {disassemble(op.word)}")

        width = self.screen.get_width()
        overlay = pygame.Surface((220, 20 + 18 * len(lines)), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 180))
        self.screen.blit(overlay, (width - 230, 5))

        for i, line in enumerate(lines):
            text = self.font.render(line, True, self.config.fg_color)
            self.screen.blit(text, (width - 225, 12 + i * 18))

    def run(self):
        """Main loop"""
        while self.running:
            elapsed = min(self.clock.tick(FPS) / 1000.0, MAX_FRAME_TIME)
            self.handle_events()
            self._guarded(self.cpu.update, elapsed, self.cpu.clock_hz)
            self.render()

    def close(self):
        pygame.quit()
