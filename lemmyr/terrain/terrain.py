"""TerrainMap — the destructible collision grid lemmings walk on.

The map is a fixed-size RGBA pixel buffer stored as a NumPy array of
shape ``(height, width, 4)``.  Lemmings query it every tick and edit it
in place when digging or bridging.  The same buffer is handed to the
renderer for a direct blit, so visual and collision data never drift
apart.

Queries never fault: any coordinate outside the grid (negative values
included) returns the ``OUT_OF_RANGE`` sentinel, which call sites treat
as empty ground.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np
from numpy.typing import NDArray

from lemmyr.terrain.cell import EMPTY, SOLID_CHANNEL, TerrainCell


class OutOfRange(Enum):
    """Marker type for terrain queries that fall outside the map."""

    OUT_OF_RANGE = auto()


OUT_OF_RANGE = OutOfRange.OUT_OF_RANGE


@dataclass
class TerrainMap:
    """A mutable width x height grid of terrain cells.

    Attributes:
        width: Number of pixel columns.
        height: Number of pixel rows.
        pixels: RGBA buffer indexed as ``pixels[y, x]``.
    """

    width: int
    height: int
    pixels: NDArray[np.uint8] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Fill the grid with EMPTY cells."""
        if self.width <= 0 or self.height <= 0:
            msg = f"terrain must be non-empty, got {self.width}x{self.height}"
            raise ValueError(msg)
        self.pixels = np.empty((self.height, self.width, 4), dtype=np.uint8)
        self.pixels[:, :] = EMPTY

    @classmethod
    def from_pixels(cls, pixels: NDArray[np.uint8]) -> TerrainMap:
        """Build a map from an externally loaded RGBA array.

        The array is copied; the map owns its buffer from then on.

        Args:
            pixels: Array of shape ``(height, width, 4)``.

        Returns:
            A TerrainMap seeded with the given pixels.

        Raises:
            ValueError: If the array is not a non-empty RGBA grid.
        """
        arr = np.asarray(pixels)
        if arr.ndim != 3 or arr.shape[2] != 4:
            msg = f"expected an (h, w, 4) RGBA array, got shape {arr.shape}"
            raise ValueError(msg)
        terrain = cls(width=int(arr.shape[1]), height=int(arr.shape[0]))
        terrain.pixels[...] = arr.astype(np.uint8, copy=False)
        return terrain

    def in_bounds(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` lies inside the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def query(self, x: int, y: int) -> TerrainCell | OutOfRange:
        """Return a copy of the cell at ``(x, y)`` or ``OUT_OF_RANGE``."""
        if not self.in_bounds(x, y):
            return OUT_OF_RANGE
        return self.pixels[y, x].copy()

    def query_mut(self, x: int, y: int) -> TerrainCell | OutOfRange:
        """Return a writable view of the cell at ``(x, y)`` or ``OUT_OF_RANGE``.

        Assigning through the view (``cell[...] = EMPTY``) edits the map.
        """
        if not self.in_bounds(x, y):
            return OUT_OF_RANGE
        return self.pixels[y, x]

    def cell_or_empty(self, x: int, y: int) -> TerrainCell:
        """Return the cell at ``(x, y)``, substituting EMPTY off the map."""
        cell = self.query(x, y)
        if cell is OUT_OF_RANGE:
            return np.array(EMPTY, dtype=np.uint8)
        return cell

    def fill_rect(
        self,
        x: int,
        y: int,
        w: int,
        h: int,
        cell: tuple[int, int, int, int],
    ) -> None:
        """Paint a rectangle, clipped to the map edges.

        Args:
            x: Left column.
            y: Top row.
            w: Width in pixels.
            h: Height in pixels.
            cell: RGBA value to write.
        """
        x0, y0 = max(0, x), max(0, y)
        x1, y1 = min(self.width, x + w), min(self.height, y + h)
        if x0 >= x1 or y0 >= y1:
            return
        self.pixels[y0:y1, x0:x1] = cell

    def settle(self) -> None:
        """Let unsupported terrain drop by one row.

        Rows are scanned bottom-up.  A non-solid cell with a solid cell
        directly above takes that cell's value, and the cell above becomes
        EMPTY.  Because the scan continues upward from the freed cell, a
        whole floating stack moves down one row per call.
        """
        grid = self.pixels
        for y in range(self.height - 1, 0, -1):
            falling = (grid[y, :, SOLID_CHANNEL] == 0) & (
                grid[y - 1, :, SOLID_CHANNEL] != 0
            )
            if not falling.any():
                continue
            grid[y, falling] = grid[y - 1, falling]
            grid[y - 1, falling] = EMPTY

    def count_solid(self) -> int:
        """Return the number of solid cells on the map."""
        return int(np.count_nonzero(self.pixels[:, :, SOLID_CHANNEL]))
