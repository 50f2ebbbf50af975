"""Asset loading — turn level images into terrain pixel arrays."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pygame
from numpy.typing import NDArray


def load_level_image(path: str | Path) -> NDArray[np.uint8]:
    """Load a level PNG as an RGBA array of shape ``(height, width, 4)``.

    Red marks solid pixels and blue marks breakable ones, so a white
    pixel is breakable ground and black is open air.

    Args:
        path: Image file to load.

    Returns:
        A fresh ``uint8`` array the caller may keep and mutate.

    Raises:
        FileNotFoundError: If the image does not exist.
        pygame.error: If pygame cannot decode the file.
    """
    path = Path(path)
    if not path.is_file():
        msg = f"level image not found: {path}"
        raise FileNotFoundError(msg)
    surface = pygame.image.load(str(path))
    width, height = surface.get_size()
    raw = pygame.image.tobytes(surface, "RGBA")
    return np.frombuffer(raw, dtype=np.uint8).reshape(height, width, 4).copy()
