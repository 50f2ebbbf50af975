"""Smoke tests for the UI modules (no display required)."""

from __future__ import annotations

from pathlib import Path

import pygame
import pytest

from lemmyr.ui.assets import load_level_image
from lemmyr.ui.pygame_client import PygameRenderer


def test_pygame_renderer_importable() -> None:
    """PygameRenderer class is importable without initialising pygame."""
    assert PygameRenderer is not None


def test_main_module_importable() -> None:
    """The __main__ module is importable and exposes main()."""
    from lemmyr.__main__ import main

    assert callable(main)


def test_load_level_image(tmp_path: Path) -> None:
    surface = pygame.Surface((4, 3), pygame.SRCALPHA)
    surface.fill((255, 255, 255, 255))
    surface.set_at((1, 2), (0, 0, 0, 255))
    path = tmp_path / "level.png"
    pygame.image.save(surface, str(path))

    pixels = load_level_image(path)
    assert pixels.shape == (3, 4, 4)
    assert tuple(pixels[2, 1]) == (0, 0, 0, 255)
    assert tuple(pixels[0, 0]) == (255, 255, 255, 255)


def test_load_missing_level_image(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_level_image(tmp_path / "missing.png")
