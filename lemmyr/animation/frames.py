"""Animation frames — the id-keyed table every clock resolves against.

Frames link to one another by id through ``next_frame_id``, so a table
usually forms a cycle (a two-frame walk loop, for instance).  Nothing
holds a reference to another frame object; clocks store the current id
and look the next one up each time they advance.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

WALK_START = "walk_1"


@dataclass(frozen=True)
class AnimationFrame:
    """One entry of the animation table.

    Attributes:
        frame_id: Unique key of this frame.
        sprite_id: Sprite the renderer draws while this frame is current.
        delay: Time units the frame stays current before advancing.
        next_frame_id: Frame entered once ``delay`` has elapsed.
    """

    frame_id: str
    sprite_id: str
    delay: float
    next_frame_id: str


@dataclass
class FrameTable:
    """Lookup table of animation frames plus the locomotion subset.

    Attributes:
        frames: Mapping from frame id to frame.
        locomotion_frames: Ids of the frames that gate walking.
        initial_frame: Frame new lemmings start on.
    """

    frames: dict[str, AnimationFrame]
    locomotion_frames: frozenset[str] = field(default_factory=frozenset)
    initial_frame: str = ""

    def __post_init__(self) -> None:
        """Validate links, delays, and the initial frame."""
        if not self.frames:
            msg = "frame table is empty"
            raise ValueError(msg)
        if not self.initial_frame:
            self.initial_frame = next(iter(self.frames))

        for frame_id, frame in self.frames.items():
            if frame.frame_id != frame_id:
                msg = f"frame keyed {frame_id!r} declares id {frame.frame_id!r}"
                raise ValueError(msg)
            if frame.delay <= 0:
                msg = f"frame {frame_id!r} has non-positive delay {frame.delay}"
                raise ValueError(msg)
            if frame.next_frame_id not in self.frames:
                msg = (
                    f"frame {frame_id!r} links to unknown frame "
                    f"{frame.next_frame_id!r}"
                )
                raise ValueError(msg)

        unknown = set(self.locomotion_frames) - self.frames.keys()
        if unknown:
            msg = f"unknown locomotion frames: {sorted(unknown)}"
            raise ValueError(msg)
        if self.initial_frame not in self.frames:
            msg = f"unknown initial frame {self.initial_frame!r}"
            raise ValueError(msg)

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Mapping[str, Any]],
        *,
        locomotion_frames: Iterable[str] = (),
        initial_frame: str = "",
    ) -> FrameTable:
        """Build a table from config data.

        Args:
            data: ``{frame_id: {"sprite": ..., "delay": ..., "next": ...}}``.
            locomotion_frames: Frame ids that gate walking.
            initial_frame: Starting frame (defaults to the first entry).

        Returns:
            A validated FrameTable.

        Raises:
            ValueError: If an entry is missing a key or the table is
                inconsistent.
        """
        frames: dict[str, AnimationFrame] = {}
        for frame_id, entry in data.items():
            try:
                frames[frame_id] = AnimationFrame(
                    frame_id=frame_id,
                    sprite_id=str(entry.get("sprite", frame_id)),
                    delay=float(entry["delay"]),
                    next_frame_id=str(entry.get("next", frame_id)),
                )
            except KeyError as exc:
                msg = f"frame {frame_id!r} is missing {exc.args[0]!r}"
                raise ValueError(msg) from exc
        return cls(
            frames=frames,
            locomotion_frames=frozenset(locomotion_frames),
            initial_frame=initial_frame,
        )

    def __getitem__(self, frame_id: str) -> AnimationFrame:
        return self.frames[frame_id]

    def __contains__(self, frame_id: object) -> bool:
        return frame_id in self.frames

    def is_locomotion(self, frame_id: str) -> bool:
        """Return True if the frame belongs to the walking cycle."""
        return frame_id in self.locomotion_frames

    def sprite_for(self, frame_id: str) -> str:
        """Return the sprite id drawn for a frame."""
        return self.frames[frame_id].sprite_id


def walk_cycle(delay: float = 80.0) -> FrameTable:
    """Return the stock two-frame walk loop, both frames locomotion frames."""
    return FrameTable(
        frames={
            WALK_START: AnimationFrame(WALK_START, "lemming_walk_1", delay, "walk_2"),
            "walk_2": AnimationFrame("walk_2", "lemming_walk_2", delay, WALK_START),
        },
        locomotion_frames=frozenset({WALK_START, "walk_2"}),
        initial_frame=WALK_START,
    )
