"""Entry point for ``python -m lemmyr``.

Loads the default YAML config, builds a simulation engine with its
level and starting lemmings, and opens a Pygame window to watch them.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from lemmyr.simulation.config import SimulationConfig
from lemmyr.simulation.engine import SimulationEngine
from lemmyr.terrain.terrain import TerrainMap
from lemmyr.ui.assets import load_level_image
from lemmyr.ui.pygame_client import PygameRenderer

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def main() -> None:
    """Parse CLI args, create engine, launch renderer."""
    parser = argparse.ArgumentParser(
        prog="lemmyr",
        description="Lemmyr - lemmings on destructible terrain",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=3,
        help="Screen pixels per level pixel (default: 3)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=None,
        help="Simulation ticks per second (default: 1000 / tick_delta)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig.from_yaml(args.config)
    terrain = None
    if config.level_image is not None:
        terrain = TerrainMap.from_pixels(load_level_image(config.level_image))
    engine = SimulationEngine(config=config, terrain=terrain)

    speed = args.speed if args.speed is not None else 1000.0 / config.tick_delta
    renderer = PygameRenderer(
        engine=engine,
        scale=args.scale,
        ticks_per_second=speed,
    )
    renderer.run(fps=args.fps)


if __name__ == "__main__":
    main()
