"""
pygame display backend with phosphor glow

PygameDisplay is the Display sink handed to the interpreter: refresh() only
snapshots the frame buffer. Surfaces are rebuilt lazily on the next draw()
so a burst of sprite draws inside one host frame costs one render.
"""

import os
from typing import Optional, Tuple

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import numpy as np
import pygame

from .config import COLORS
from .constants import DISPLAY_H, DISPLAY_W
from .video import VideoBuffer

GLOW_UPSCALE = 4                        # Internal upscale for glow blur


# ═══════════════════════════════════════════════════════════════════════════════
# GLOW EFFECT SYSTEM
# ═══════════════════════════════════════════════════════════════════════════════

class GlowRenderer:
    """Phosphor glow/bloom post-processing effect"""

    def __init__(self, width: int, height: int, scale: int,
                 fg_color: Tuple[int, int, int],
                 bg_color: Tuple[int, int, int] = COLORS['bg_dark'],
                 bloom_strength: float = 0.55, blur_radius: int = 1):
        self.width = width
        self.height = height
        self.scale = scale
        self.fg_color = fg_color
        self.bg_color = bg_color
        self.bloom_strength = bloom_strength
        self.blur_radius = blur_radius

        self.final_size = (width * scale, height * scale)

    @staticmethod
    def box_blur(arr: np.ndarray, passes: int = 1) -> np.ndarray:
        """Box blur with toroidal edges, matching CHIP-8 wraparound"""
        a = arr.copy()
        for _ in range(passes):
            a = (np.roll(a, 1, axis=1) + a + np.roll(a, -1, axis=1)) / 3.0
            a = (np.roll(a, 1, axis=0) + a + np.roll(a, -1, axis=0)) / 3.0
        return a

    def _colorize(self, intensity: np.ndarray) -> pygame.Surface:
        """(h, w) intensity in 0..1 to an RGB surface in fg_color"""
        rgb = np.empty(intensity.shape + (3,), dtype=np.uint8)
        for i, c in enumerate(self.fg_color):
            rgb[:, :, i] = (intensity * c).astype(np.uint8)
        # surfarray wants (w, h, 3)
        return pygame.surfarray.make_surface(rgb.transpose(1, 0, 2))

    def render(self, framebuffer: np.ndarray) -> Tuple[pygame.Surface, pygame.Surface]:
        """
        Convert boolean framebuffer to glow surfaces

        Args:
            framebuffer: (height, width) boolean array

        Returns:
            (base_surface, glow_surface) tuple, both at final size
        """
        base = framebuffer.astype(np.float32)

        # Upscale before blurring so the halo is smoother than one pixel
        up = np.kron(base, np.ones((GLOW_UPSCALE, GLOW_UPSCALE), dtype=np.float32))
        glow = self.box_blur(up, passes=1 + self.blur_radius)
        glow = np.clip(glow * self.bloom_strength, 0.0, 1.0)

        base_final = pygame.transform.scale(self._colorize(base), self.final_size)
        glow_final = pygame.transform.smoothscale(self._colorize(glow), self.final_size)
        return base_final, glow_final

    def create_background(self) -> pygame.Surface:
        """Create CRT-style background with scanlines"""
        surf = pygame.Surface(self.final_size)
        surf.fill(self.bg_color)

        line_color = tuple(min(255, c + 5) for c in self.bg_color)
        for y in range(0, self.final_size[1], 2):
            pygame.draw.line(surf, line_color, (0, y), (self.final_size[0], y))

        return surf


class PygameDisplay:
    """Display sink that draws the CHIP-8 screen onto a pygame surface"""

    def __init__(self, renderer: GlowRenderer):
        self.renderer = renderer
        self.background = renderer.create_background()
        self._frame = np.zeros((DISPLAY_H, DISPLAY_W), dtype=bool)
        self._surfaces: Optional[Tuple[pygame.Surface, pygame.Surface]] = None

    def refresh(self, video: VideoBuffer) -> None:
        self._frame = video.pixels.copy()
        self._surfaces = None

    def invalidate(self):
        """Force a re-render, e.g. after a color change"""
        self._surfaces = None

    def draw(self, surface: pygame.Surface, origin: Tuple[int, int]):
        if self._surfaces is None:
            self._surfaces = self.renderer.render(self._frame)
        base_surf, glow_surf = self._surfaces

        surface.blit(self.background, origin)
        # Glow layer (additive blend), then crisp pixels on top
        surface.blit(glow_surf, origin, special_flags=pygame.BLEND_ADD)
        surface.blit(base_surf, origin, special_flags=pygame.BLEND_MAX)
