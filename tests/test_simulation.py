"""Tests for lemmyr.simulation — engine, config loading and snapshots."""

from pathlib import Path

import numpy as np
import pytest

from lemmyr.lemmings.lemming import Action, Direction, Lemming
from lemmyr.simulation.config import SimulationConfig
from lemmyr.simulation.engine import SimulationEngine
from lemmyr.terrain.cell import is_breakable, is_solid
from lemmyr.terrain.terrain import TerrainMap


class TestSimulationConfig:
    """Tests for YAML config loading."""

    def test_defaults(self) -> None:
        cfg = SimulationConfig()
        assert cfg.tick_delta == 50.0
        assert cfg.level_width == 320
        assert cfg.level_height == 200
        assert cfg.level_image is None
        assert set(cfg.locomotion_frames) == {"walk_1", "walk_2"}

    def test_from_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "level.yaml"
        yaml_file.write_text(
            "level_width: 64\n"
            "level_height: 32\n"
            "tick_delta: 20\n"
            "terrain_gravity: true\n"
            "level_image: art/level.png\n"
            "spawns:\n"
            "  - {x: 3, y: 4, direction: left, actions: [dig]}\n",
        )
        cfg = SimulationConfig.from_yaml(yaml_file)
        assert cfg.level_width == 64
        assert cfg.tick_delta == 20
        assert cfg.terrain_gravity is True
        assert cfg.level_image == str(tmp_path / "art" / "level.png")
        assert cfg.spawns[0]["direction"] == "left"
        assert "walk_1" in cfg.frames

    def test_empty_yaml_uses_defaults(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")
        cfg = SimulationConfig.from_yaml(yaml_file)
        assert cfg == SimulationConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            SimulationConfig.from_yaml(tmp_path / "nope.yaml")

    def test_bad_frame_table_is_fatal(self) -> None:
        cfg = SimulationConfig(frames={"a": {"delay": -1, "next": "a"}})
        with pytest.raises(ValueError):
            SimulationEngine(config=cfg)

    def test_shipped_default_config(self) -> None:
        path = Path(__file__).resolve().parent.parent / "config" / "default.yaml"
        cfg = SimulationConfig.from_yaml(path)
        engine = SimulationEngine(config=cfg)
        assert len(engine.lemmings) == len(cfg.spawns)
        engine.run(ticks=100)
        assert engine.tick == 100


class TestSimulationEngine:
    """Tests for the tick loop."""

    def test_engine_initialises(self, default_config: SimulationConfig) -> None:
        engine = SimulationEngine(config=default_config)
        assert engine.tick == 0
        assert engine.lemmings == []
        assert engine.terrain.width == default_config.level_width
        assert engine.terrain.count_solid() == 0

    def test_platforms_painted(self) -> None:
        cfg = SimulationConfig(
            level_width=20,
            level_height=20,
            platforms=[
                {"x": 0, "y": 10, "w": 5, "h": 2},
                {"x": 5, "y": 10, "w": 1, "h": 1, "breakable": False},
            ],
        )
        engine = SimulationEngine(config=cfg)
        assert engine.terrain.count_solid() == 11
        assert is_breakable(engine.terrain.query(0, 10))
        assert is_solid(engine.terrain.query(5, 10))
        assert not is_breakable(engine.terrain.query(5, 10))

    def test_spawns_from_config(self) -> None:
        cfg = SimulationConfig(
            spawns=[
                {
                    "x": 3,
                    "y": 4,
                    "direction": "left",
                    "actions": ["dig", "bridge"],
                },
                {"x": 9, "y": 1},
            ],
        )
        engine = SimulationEngine(config=cfg)
        first, second = engine.lemmings
        assert (first.x, first.y) == (3, 4)
        assert first.direction is Direction.LEFT
        assert first.actions == Action.DIG | Action.BRIDGE
        assert second.direction is Direction.RIGHT
        assert second.actions == Action.WALK

    def test_add_lemming_rejects_unknown_frame(self) -> None:
        cfg = SimulationConfig(
            frames={
                "step": {"delay": 80, "next": "pause"},
                "pause": {"delay": 80, "next": "step"},
            },
            initial_frame="step",
            locomotion_frames=["step"],
        )
        engine = SimulationEngine(config=cfg)
        with pytest.raises(ValueError, match="frame table"):
            engine.add_lemming(Lemming(x=5, y=5))
        assert engine.lemmings == []
        engine.spawn(5, 5)
        engine.step()
        assert engine.lemmings[0].clock.frame_id == "step"

    def test_bad_spawn_entry(self) -> None:
        with pytest.raises(ValueError, match="missing"):
            SimulationEngine(config=SimulationConfig(spawns=[{"x": 1}]))

    def test_injected_terrain(self, gap_terrain: TerrainMap) -> None:
        engine = SimulationEngine(config=SimulationConfig(), terrain=gap_terrain)
        assert engine.terrain is gap_terrain

    def test_step_advances_tick(self, default_config: SimulationConfig) -> None:
        engine = SimulationEngine(config=default_config)
        engine.step()
        assert engine.tick == 1
        assert engine.time == default_config.tick_delta

    def test_run_multiple_ticks(self, default_config: SimulationConfig) -> None:
        engine = SimulationEngine(config=default_config)
        engine.run(ticks=10)
        assert engine.tick == 10

    def test_advance_feeds_clock(self, default_config: SimulationConfig) -> None:
        engine = SimulationEngine(config=default_config)
        lemming = engine.spawn(10, 5)
        engine.advance(80.0)
        assert lemming.clock.frame_id == "walk_2"
        assert lemming.clock.just_transitioned

    def test_terrain_gravity(self) -> None:
        cfg = SimulationConfig(
            level_width=4,
            level_height=8,
            terrain_gravity=True,
            platforms=[{"x": 1, "y": 0, "w": 1, "h": 1}],
        )
        engine = SimulationEngine(config=cfg)
        engine.step()
        assert not is_solid(engine.terrain.query(1, 0))
        assert is_solid(engine.terrain.query(1, 1))

    def test_no_terrain_gravity_by_default(self) -> None:
        cfg = SimulationConfig(
            level_width=4,
            level_height=8,
            platforms=[{"x": 1, "y": 0, "w": 1, "h": 1}],
        )
        engine = SimulationEngine(config=cfg)
        engine.run(ticks=3)
        assert is_solid(engine.terrain.query(1, 0))


class TestTickOrdering:
    """Later lemmings see terrain edited earlier in the same tick."""

    def test_later_lemming_lands_on_fresh_bridge(
        self,
        gap_terrain: TerrainMap,
    ) -> None:
        engine = SimulationEngine(config=SimulationConfig(), terrain=gap_terrain)
        engine.spawn(50, 20, actions=Action.BRIDGE)
        faller = engine.spawn(53, 19, actions=Action.NONE)
        engine.advance(50.0)
        assert faller.y == 19

    def test_earlier_lemming_misses_later_bridge(
        self,
        gap_terrain: TerrainMap,
    ) -> None:
        engine = SimulationEngine(config=SimulationConfig(), terrain=gap_terrain)
        faller = engine.spawn(53, 19, actions=Action.NONE)
        engine.spawn(50, 20, actions=Action.BRIDGE)
        engine.advance(50.0)
        assert faller.y == 20

    def test_later_lemming_falls_into_fresh_hole(self) -> None:
        cfg = SimulationConfig(
            level_width=40,
            level_height=40,
            platforms=[{"x": 0, "y": 20, "w": 40, "h": 20}],
        )
        engine = SimulationEngine(config=cfg)
        engine.spawn(10, 19, actions=Action.DIG)
        walker = engine.spawn(11, 19, actions=Action.NONE)
        engine.advance(50.0)
        assert walker.y == 20

    def test_determinism(self) -> None:
        """Same config must produce identical state after N ticks."""
        cfg = SimulationConfig(
            level_width=120,
            level_height=80,
            platforms=[
                {"x": 0, "y": 50, "w": 50, "h": 30},
                {"x": 70, "y": 50, "w": 50, "h": 30},
                {"x": 40, "y": 30, "w": 4, "h": 20, "breakable": False},
            ],
            spawns=[
                {"x": 10, "y": 10, "actions": ["walk"]},
                {"x": 20, "y": 10, "actions": ["walk", "bridge"]},
                {
                    "x": 80,
                    "y": 10,
                    "direction": "left",
                    "actions": ["walk", "dig"],
                },
            ],
        )
        engine_a = SimulationEngine(config=cfg)
        engine_a.run(ticks=300)
        engine_b = SimulationEngine(config=cfg)
        engine_b.run(ticks=300)

        assert np.array_equal(engine_a.terrain.pixels, engine_b.terrain.pixels)
        for lem_a, lem_b in zip(engine_a.lemmings, engine_b.lemmings, strict=True):
            assert (lem_a.x, lem_a.y) == (lem_b.x, lem_b.y)
            assert lem_a.direction is lem_b.direction
            assert lem_a.clock == lem_b.clock


class TestRenderSnapshot:
    """Tests for the renderer-facing snapshot."""

    def test_snapshot_contents(self, default_config: SimulationConfig) -> None:
        engine = SimulationEngine(config=default_config)
        engine.spawn(10, 5, direction=Direction.LEFT)
        snap = engine.render_snapshot()
        assert snap.tick == 0
        assert (snap.width, snap.height) == (320, 200)
        (view,) = snap.lemmings
        assert (view.x, view.y) == (10, 5)
        assert view.direction is Direction.LEFT
        assert view.frame_id == "walk_1"
        assert view.sprite_id == "lemming_walk_1"

    def test_snapshot_tracks_frames(self, default_config: SimulationConfig) -> None:
        engine = SimulationEngine(config=default_config)
        engine.spawn(10, 5)
        engine.advance(80.0)
        assert engine.render_snapshot().lemmings[0].sprite_id == "lemming_walk_2"

    def test_snapshot_is_a_copy(self, default_config: SimulationConfig) -> None:
        engine = SimulationEngine(config=default_config)
        snap = engine.render_snapshot()
        snap.pixels[0, 0, 0] = 255
        assert not is_solid(engine.terrain.query(0, 0))
