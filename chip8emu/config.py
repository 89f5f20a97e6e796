"""Front-end configuration: speed, colors, glow and beep settings"""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Dict, Tuple, Union

from .constants import DEFAULT_CLOCK_HZ

# Colors (RGB)
COLORS = {
    'bg_dark': (15, 15, 25),
    'status_bg': (20, 20, 35),
    'text': (200, 200, 200),
    'text_dim': (120, 120, 140),
    'error': (255, 100, 150),
}

COLOR_SCHEMES: Dict[str, Tuple[int, int, int]] = {
    'green': (0, 255, 128),     # Green Phosphor
    'amber': (255, 176, 0),     # Amber CRT
    'white': (220, 220, 220),   # Cool White
    'blue': (100, 180, 255),    # Ice Blue
}

SPEED_PRESETS = (300, 500, 700, 1000, 2000)


@dataclass
class EmulatorConfig:
    clock_hz: int = DEFAULT_CLOCK_HZ
    scale: int = 12
    color_scheme: str = 'green'
    bloom_strength: float = 0.55
    blur_radius: int = 1
    beep_frequency: int = 500
    beep_volume: float = 0.25
    show_debug: bool = False

    def __post_init__(self):
        if self.color_scheme not in COLOR_SCHEMES:
            raise ValueError(f"unknown color scheme {self.color_scheme!r}, "
                             f"choose from {', '.join(COLOR_SCHEMES)}")
        if self.clock_hz < 1:
            raise ValueError("clock_hz must be at least 1")
        if self.scale < 1:
            raise ValueError("scale must be at least 1")
        if not 0.0 <= self.beep_volume <= 1.0:
            raise ValueError("beep_volume must be between 0 and 1")

    @property
    def fg_color(self) -> Tuple[int, int, int]:
        return COLOR_SCHEMES[self.color_scheme]

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "EmulatorConfig":
        """Read a JSON object of field overrides"""
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a JSON object")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"{path}: unknown config keys: {', '.join(unknown)}")
        return cls(**data)

    def replace(self, **overrides) -> "EmulatorConfig":
        """Copy with the given non-None fields replaced"""
        values = asdict(self)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return EmulatorConfig(**values)
