"""AnimationClock — per-lemming timer over the frame table.

The clock only stores the id of its current frame.  Each advance adds
the tick's time delta, then walks the frame graph for as long as the
accumulated time covers the current frame's delay.  The
``just_transitioned`` flag tells the owner whether at least one frame
change happened during the latest advance; walking keys off it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lemmyr.animation.frames import FrameTable


@dataclass
class AnimationClock:
    """Frame timer owned by a single lemming.

    Attributes:
        frame_id: Id of the current frame.
        elapsed: Time accumulated since entering the current frame.
        just_transitioned: True if the last advance entered a new frame.
    """

    frame_id: str
    elapsed: float = 0.0
    just_transitioned: bool = False

    def advance(self, dt: float, frames: FrameTable) -> int:
        """Accumulate ``dt`` and step through every frame it covers.

        Args:
            dt: Time delta for this tick, in the table's time units.
            frames: Table used to resolve delays and next-frame links.

        Returns:
            Number of frame transitions made during this advance.
        """
        self.elapsed += dt
        transitions = 0
        frame = frames[self.frame_id]
        while self.elapsed >= frame.delay:
            self.elapsed -= frame.delay
            self.frame_id = frame.next_frame_id
            frame = frames[self.frame_id]
            transitions += 1
        self.just_transitioned = transitions > 0
        return transitions
