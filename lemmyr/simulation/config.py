"""Config — load simulation parameters from YAML files.

Level size, the tick delta, the animation table, the level layout and
the starting lemmings all live in YAML and are parsed into a typed
dataclass here, keeping the simulation core data-driven.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from lemmyr.animation.frames import WALK_START, FrameTable


def _default_frames() -> dict[str, dict[str, Any]]:
    return {
        WALK_START: {"sprite": "lemming_walk_1", "delay": 80.0, "next": "walk_2"},
        "walk_2": {"sprite": "lemming_walk_2", "delay": 80.0, "next": WALK_START},
    }


def _default_locomotion() -> list[str]:
    return [WALK_START, "walk_2"]


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        level_width: Terrain width in pixels (ignored with ``level_image``).
        level_height: Terrain height in pixels (ignored with ``level_image``).
        level_image: Optional PNG to seed the terrain from.  Relative
            paths in a YAML file resolve against the file's directory.
        tick_delta: Time units fed to animation clocks per tick.
        terrain_gravity: Let unsupported terrain fall one row per tick.
        initial_frame: Animation frame new lemmings start on.
        locomotion_frames: Frame ids that gate walking.
        frames: ``{frame_id: {"sprite", "delay", "next"}}`` table.
        platforms: Rectangles painted onto a blank level, each
            ``{"x", "y", "w", "h", "breakable"}``.
        spawns: Starting lemmings, each
            ``{"x", "y", "direction", "actions"}``.
    """

    level_width: int = 320
    level_height: int = 200
    level_image: str | None = None
    tick_delta: float = 50.0
    terrain_gravity: bool = False
    initial_frame: str = WALK_START
    locomotion_frames: list[str] = field(default_factory=_default_locomotion)
    frames: dict[str, dict[str, Any]] = field(default_factory=_default_frames)
    platforms: list[dict[str, Any]] = field(default_factory=list)
    spawns: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        level_image = data.get("level_image")
        if level_image is not None:
            level_image = str(path.parent / level_image)

        return cls(
            level_width=data.get("level_width", cls.level_width),
            level_height=data.get("level_height", cls.level_height),
            level_image=level_image,
            tick_delta=data.get("tick_delta", cls.tick_delta),
            terrain_gravity=data.get("terrain_gravity", cls.terrain_gravity),
            initial_frame=data.get("initial_frame", cls.initial_frame),
            locomotion_frames=data.get(
                "locomotion_frames",
                _default_locomotion(),
            ),
            frames=data.get("frames", _default_frames()),
            platforms=data.get("platforms", []),
            spawns=data.get("spawns", []),
        )

    def frame_table(self) -> FrameTable:
        """Build the validated animation table described by this config."""
        return FrameTable.from_mapping(
            self.frames,
            locomotion_frames=self.locomotion_frames,
            initial_frame=self.initial_frame,
        )
