"""Shared fixtures for the Lemmyr test suite."""

from __future__ import annotations

import pytest

from lemmyr.animation.frames import FrameTable, walk_cycle
from lemmyr.simulation.config import SimulationConfig
from lemmyr.terrain.cell import SOLID_BREAKABLE
from lemmyr.terrain.terrain import TerrainMap

GROUND_ROW = 60


@pytest.fixture
def frames() -> FrameTable:
    """The stock two-frame walk cycle, 80 time units per frame."""
    return walk_cycle(delay=80.0)


@pytest.fixture
def ground() -> TerrainMap:
    """A 200x100 level with breakable ground from row 60 down.

    A lemming standing on it has ``y == 59``.
    """
    terrain = TerrainMap(width=200, height=100)
    terrain.fill_rect(0, GROUND_ROW, 200, 100 - GROUND_ROW, SOLID_BREAKABLE)
    return terrain


@pytest.fixture
def gap_terrain() -> TerrainMap:
    """A 120x40 level with a six-pixel gap at x=51..56 above row 21."""
    terrain = TerrainMap(width=120, height=40)
    terrain.fill_rect(0, 21, 51, 19, SOLID_BREAKABLE)
    terrain.fill_rect(57, 21, 63, 19, SOLID_BREAKABLE)
    return terrain


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed)."""
    return SimulationConfig()
