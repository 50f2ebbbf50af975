"""Read-only views of simulation state handed to the renderer."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from lemmyr.lemmings.lemming import Direction


@dataclass(frozen=True)
class LemmingView:
    """What the renderer needs to place one lemming sprite."""

    x: int
    y: int
    direction: Direction
    frame_id: str
    sprite_id: str


@dataclass(frozen=True)
class RenderSnapshot:
    """Terrain pixels and lemming placements after a tick.

    Attributes:
        tick: Tick count when the snapshot was taken.
        pixels: Copy of the terrain RGBA buffer, shape ``(h, w, 4)``.
        lemmings: One view per lemming, in update order.
    """

    tick: int
    pixels: NDArray[np.uint8]
    lemmings: tuple[LemmingView, ...]

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])
