"""Cell values — the four-channel pixels that make up the terrain.

A terrain cell is an RGBA pixel.  Only two channels carry meaning for the
simulation: channel 0 marks the pixel as solid and channel 2 marks it as
breakable.  The remaining channels are visual only and pass straight
through to the renderer.
"""

from __future__ import annotations

from typing import TypeAlias

import numpy as np
from numpy.typing import NDArray

TerrainCell: TypeAlias = NDArray[np.uint8]

SOLID_CHANNEL = 0
BREAKABLE_CHANNEL = 2

EMPTY: tuple[int, int, int, int] = (0, 0, 0, 255)
SOLID_BREAKABLE: tuple[int, int, int, int] = (255, 255, 255, 255)
# Steel: blocks movement but survives digging
SOLID_UNBREAKABLE: tuple[int, int, int, int] = (255, 255, 0, 255)


def is_solid(cell: TerrainCell | tuple[int, ...]) -> bool:
    """Return True if the cell blocks movement."""
    return int(cell[SOLID_CHANNEL]) != 0


def is_breakable(cell: TerrainCell | tuple[int, ...]) -> bool:
    """Return True if the cell can be removed by digging."""
    return int(cell[BREAKABLE_CHANNEL]) != 0


def is_empty(cell: TerrainCell | tuple[int, ...]) -> bool:
    """Return True if the cell equals the canonical EMPTY value."""
    return bool(np.array_equal(np.asarray(cell, dtype=np.uint8), EMPTY))
