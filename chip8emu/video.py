"""64x32 monochrome frame buffer"""

import numpy as np

from .constants import DISPLAY_H, DISPLAY_W


class VideoBuffer:
    """Boolean pixel grid addressed as ``buffer[x, y]``

    Storage is a (height, width) numpy array so renderers can consume
    ``pixels`` directly as a row-major framebuffer.
    """

    width = DISPLAY_W
    height = DISPLAY_H

    def __init__(self):
        self._data = np.zeros((DISPLAY_H, DISPLAY_W), dtype=bool)

    def __len__(self) -> int:
        return self._data.size

    def __getitem__(self, xy) -> bool:
        x, y = xy
        return bool(self._data[y, x])

    def __setitem__(self, xy, value: bool):
        x, y = xy
        self._data[y, x] = bool(value)

    @property
    def pixels(self) -> np.ndarray:
        """Read-only (height, width) view of the grid"""
        view = self._data.view()
        view.flags.writeable = False
        return view

    def lit_count(self) -> int:
        return int(np.count_nonzero(self._data))

    def reset(self):
        """Turn every pixel off"""
        self._data.fill(False)
