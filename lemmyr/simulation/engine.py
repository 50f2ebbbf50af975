"""SimulationEngine — the fixed-tick update loop.

Owns the terrain and the lemmings and advances them one tick at a time:

1. Settle terrain (only with ``terrain_gravity`` enabled)
2. Update every lemming in insertion order against the shared terrain
3. Count the tick

Lemmings edit the terrain as they go, so a lemming later in the list
sees the digging and bridging done by earlier ones in the same tick.
Rendering reads ``render_snapshot()`` and never advances the engine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from lemmyr.animation.frames import FrameTable
from lemmyr.lemmings.lemming import Action, Direction, Lemming
from lemmyr.simulation.config import SimulationConfig
from lemmyr.simulation.snapshot import LemmingView, RenderSnapshot
from lemmyr.terrain.cell import SOLID_BREAKABLE, SOLID_UNBREAKABLE
from lemmyr.terrain.terrain import TerrainMap

logger = logging.getLogger(__name__)


@dataclass
class SimulationEngine:
    """Drives the simulation forward tick by tick.

    Attributes:
        config: Loaded simulation configuration.
        terrain: The shared terrain map.  Built from ``config.platforms``
            when not supplied (for example from a loaded level image).
        frames: Animation table shared by all lemmings.
        lemmings: All lemmings, in update order.
        tick: Number of ticks advanced so far.
        time: Total simulated time units.
    """

    config: SimulationConfig
    terrain: TerrainMap | None = None
    frames: FrameTable = field(init=False)
    lemmings: list[Lemming] = field(init=False, default_factory=list)
    tick: int = 0
    time: float = 0.0

    def __post_init__(self) -> None:
        """Build the frame table and terrain, then spawn configured lemmings."""
        self.frames = self.config.frame_table()
        if self.terrain is None:
            self.terrain = self._build_terrain()
        for entry in self.config.spawns:
            self._spawn_from_entry(entry)
        logger.info(
            "Simulation ready: %dx%d terrain, %d lemmings, %d frames",
            self.terrain.width,
            self.terrain.height,
            len(self.lemmings),
            len(self.frames.frames),
        )

    def add_lemming(self, lemming: Lemming) -> None:
        """Append a lemming to the end of the update order.

        Raises:
            ValueError: If the lemming's clock is on a frame this
                engine's table does not define.
        """
        if lemming.clock.frame_id not in self.frames:
            msg = (
                f"lemming clock frame {lemming.clock.frame_id!r} is not in "
                "the frame table"
            )
            raise ValueError(msg)
        self.lemmings.append(lemming)
        logger.debug(
            "Added lemming at (%d, %d) facing %s with %s",
            lemming.x,
            lemming.y,
            lemming.direction.name,
            lemming.actions,
        )

    def spawn(
        self,
        x: int,
        y: int,
        *,
        direction: Direction = Direction.RIGHT,
        actions: Action = Action.WALK,
    ) -> Lemming:
        """Create a lemming on the initial animation frame and add it.

        Returns:
            The new Lemming (also appended to ``self.lemmings``).
        """
        lemming = Lemming.from_frames(
            x,
            y,
            self.frames,
            direction=direction,
            actions=actions,
        )
        self.add_lemming(lemming)
        return lemming

    def advance(self, dt: float) -> None:
        """Advance the simulation by one tick of ``dt`` time units."""
        if self.config.terrain_gravity:
            self.terrain.settle()

        for lemming in self.lemmings:
            lemming.update(self.terrain, self.frames, dt)

        self.tick += 1
        self.time += dt

    def step(self) -> None:
        """Advance by one tick of the configured ``tick_delta``."""
        self.advance(self.config.tick_delta)

    def run(self, ticks: int) -> None:
        """Run the simulation for a fixed number of ticks.

        Args:
            ticks: Number of ticks to advance.
        """
        for _ in range(ticks):
            self.step()

    def render_snapshot(self) -> RenderSnapshot:
        """Return a copy of the terrain and every lemming's placement."""
        views = tuple(
            LemmingView(
                x=lemming.x,
                y=lemming.y,
                direction=lemming.direction,
                frame_id=lemming.clock.frame_id,
                sprite_id=lemming.sprite_id(self.frames),
            )
            for lemming in self.lemmings
        )
        return RenderSnapshot(
            tick=self.tick,
            pixels=self.terrain.pixels.copy(),
            lemmings=views,
        )

    def _build_terrain(self) -> TerrainMap:
        """Paint the configured platforms onto a blank level."""
        terrain = TerrainMap(
            width=self.config.level_width,
            height=self.config.level_height,
        )
        for rect in self.config.platforms:
            cell = (
                SOLID_BREAKABLE if rect.get("breakable", True) else SOLID_UNBREAKABLE
            )
            terrain.fill_rect(rect["x"], rect["y"], rect["w"], rect["h"], cell)
        return terrain

    def _spawn_from_entry(self, entry: dict) -> None:
        """Spawn one lemming described by a ``spawns`` config entry."""
        try:
            x, y = int(entry["x"]), int(entry["y"])
        except KeyError as exc:
            msg = f"spawn entry {entry!r} is missing {exc.args[0]!r}"
            raise ValueError(msg) from exc
        self.spawn(
            x,
            y,
            direction=Direction.from_name(entry.get("direction", "right")),
            actions=Action.from_names(entry.get("actions", ["walk"])),
        )
