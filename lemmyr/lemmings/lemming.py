"""Lemming -- a single walker on the destructible terrain.

Each tick a lemming runs its behaviours in a fixed order against the
shared TerrainMap:

1. **Walk** -- only when WALK is enabled and the animation clock has
   just entered a locomotion frame, so lateral speed follows the walk
   cycle rather than the raw tick rate.  Walkers follow the terrain up
   steps of at most five pixels and turn around at taller walls.
2. **Fall** -- always.  Without ground directly below, drop one pixel.
3. **Dig** -- when DIG is enabled and the lemming stands on ground,
   clear the breakable cells of a six-pixel strip underfoot and sink
   into it.
4. **Bridge** -- when BRIDGE is enabled and the lemming stands on ground,
   lay a walkway ahead and climb onto it.
5. **Animation** -- always last, so the next tick's walk sees the frame
   change made here.

Capabilities are independent flags: a lemming may dig and bridge in the
same tick.  Terrain edits take effect immediately, so lemmings updated
later in the tick see them.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, Flag, auto
from typing import TYPE_CHECKING

from lemmyr.animation.clock import AnimationClock
from lemmyr.animation.frames import WALK_START
from lemmyr.terrain.cell import (
    EMPTY,
    SOLID_BREAKABLE,
    is_breakable,
    is_empty,
    is_solid,
)
from lemmyr.terrain.terrain import OUT_OF_RANGE

if TYPE_CHECKING:
    from lemmyr.animation.frames import FrameTable
    from lemmyr.terrain.terrain import TerrainMap

# -- Constants ---------------------------------------------------------------

_MAX_STEP_UP = 5  # tallest ledge a walker climbs without turning
_DIG_HALF_WIDTH = 3  # dig strip spans x-3 .. x+2
_BRIDGE_LENGTH = 6  # walkway cells laid ahead, offsets 1..6
_BRIDGE_CLIMB = 2  # horizontal reach of the bridge climb


class Direction(Enum):
    """Facing direction; the value is the horizontal step sign."""

    LEFT = -1
    RIGHT = 1

    @property
    def step(self) -> int:
        """Horizontal pixel offset of one step in this direction."""
        return self.value

    def reversed(self) -> Direction:
        """Return the opposite direction."""
        return Direction.RIGHT if self is Direction.LEFT else Direction.LEFT

    @classmethod
    def from_name(cls, name: str) -> Direction:
        """Parse ``"left"`` / ``"right"`` (case-insensitive)."""
        try:
            return cls[name.upper()]
        except KeyError as exc:
            msg = f"unknown direction {name!r}"
            raise ValueError(msg) from exc


class Action(Flag):
    """Independently togglable lemming capabilities."""

    NONE = 0
    WALK = auto()
    DIG = auto()
    BRIDGE = auto()

    @classmethod
    def from_names(cls, names: Iterable[str]) -> Action:
        """Combine capability names such as ``["walk", "dig"]``."""
        actions = cls.NONE
        for name in names:
            try:
                actions |= cls[name.upper()]
            except KeyError as exc:
                msg = f"unknown action {name!r}"
                raise ValueError(msg) from exc
        return actions


@dataclass
class Lemming:
    """A single lemming.

    Attributes:
        x: Pixel column.  May leave the map; off-map lemmings only fall.
        y: Pixel row of the lemming's feet.
        direction: Facing direction.
        actions: Enabled capabilities.
        clock: Animation timer, which also gates walking.
    """

    x: int
    y: int
    direction: Direction = Direction.RIGHT
    actions: Action = Action.WALK
    clock: AnimationClock = field(
        default_factory=lambda: AnimationClock(frame_id=WALK_START),
    )

    @classmethod
    def from_frames(
        cls,
        x: int,
        y: int,
        frames: FrameTable,
        *,
        direction: Direction = Direction.RIGHT,
        actions: Action = Action.WALK,
    ) -> Lemming:
        """Create a lemming whose clock starts on the table's initial frame."""
        return cls(
            x=x,
            y=y,
            direction=direction,
            actions=actions,
            clock=AnimationClock(frame_id=frames.initial_frame),
        )

    def on_map(self, terrain: TerrainMap) -> bool:
        """Return True if the lemming's position lies inside the map."""
        return terrain.in_bounds(self.x, self.y)

    def on_ground(self, terrain: TerrainMap) -> bool:
        """Return True if the cell directly below is solid."""
        if not self.on_map(terrain):
            return False
        return is_solid(terrain.cell_or_empty(self.x, self.y + 1))

    def sprite_id(self, frames: FrameTable) -> str:
        """Return the sprite drawn for the current animation frame."""
        return frames.sprite_for(self.clock.frame_id)

    def update(self, terrain: TerrainMap, frames: FrameTable, dt: float) -> None:
        """Run one tick of behaviour against the shared terrain.

        Args:
            terrain: The terrain map; edited in place by dig and bridge.
            frames: Animation table (read-only).
            dt: Tick duration fed to the animation clock.
        """
        if (
            Action.WALK in self.actions
            and self.clock.just_transitioned
            and frames.is_locomotion(self.clock.frame_id)
        ):
            self.walk(terrain)
        self.fall(terrain)
        if Action.DIG in self.actions:
            self.dig(terrain)
        if Action.BRIDGE in self.actions:
            self.bridge(terrain)
        self.clock.advance(dt, frames)

    # -- Behaviours --

    def walk(self, terrain: TerrainMap) -> None:
        """Take one step, climbing low ledges and turning at walls.

        When the cell ahead is solid, the column above it is scanned for
        up to five rows (never above row 0) and the lemming rises to the
        first free row.  If the cell ahead is still solid after that, the
        lemming turns around.  Either way it then moves one pixel in its current
        facing direction, so a lemming that has just turned steps away
        from the wall on the same tick.
        """
        if not self.on_map(terrain) or not self.on_ground(terrain):
            return

        ahead = self.x + self.direction.step
        if is_solid(terrain.cell_or_empty(ahead, self.y)):
            for rise in range(1, min(_MAX_STEP_UP, self.y) + 1):
                if not is_solid(terrain.cell_or_empty(ahead, self.y - rise)):
                    self.y -= rise
                    break

        if is_solid(terrain.cell_or_empty(ahead, self.y)):
            self.direction = self.direction.reversed()

        self.x += self.direction.step

    def fall(self, terrain: TerrainMap) -> None:
        """Drop one pixel when nothing solid is underfoot."""
        if not self.on_ground(terrain):
            self.y += 1

    def dig(self, terrain: TerrainMap) -> None:
        """Clear breakable ground under the lemming and sink one row.

        The strip covers the six cells ``x-3 .. x+2`` on the row below
        the lemming.  Unbreakable cells are left alone, but the lemming
        still sinks.
        """
        if not self.on_map(terrain) or not self.on_ground(terrain):
            return

        row = self.y + 1
        for col in range(self.x - _DIG_HALF_WIDTH, self.x + _DIG_HALF_WIDTH):
            cell = terrain.query_mut(col, row)
            if cell is not OUT_OF_RANGE and is_breakable(cell):
                cell[...] = EMPTY
        self.y += 1

    def bridge(self, terrain: TerrainMap) -> None:
        """Lay a walkway ahead, then climb two pixels along it.

        Only EMPTY cells on the lemming's row at offsets 1..6 ahead are
        filled; anything already there is kept.  The climb moves the
        lemming by (+2, -1) when the cell two ahead is solid and the one
        above it is free.  Cells between the lemming and the climb
        target are not checked.
        """
        if not self.on_map(terrain) or not self.on_ground(terrain):
            return

        step = self.direction.step
        for offset in range(1, _BRIDGE_LENGTH + 1):
            cell = terrain.query_mut(self.x + step * offset, self.y)
            if cell is not OUT_OF_RANGE and is_empty(cell):
                cell[...] = SOLID_BREAKABLE

        target_x = self.x + step * _BRIDGE_CLIMB
        base = terrain.query(target_x, self.y)
        headroom = terrain.query(target_x, self.y - 1)
        if base is OUT_OF_RANGE or headroom is OUT_OF_RANGE:
            return
        if is_solid(base) and not is_solid(headroom):
            self.x = target_x
            self.y -= 1
