"""Pygame 2D visualization for the Lemmyr simulation.

Blits the terrain buffer and draws a marker for every lemming.  The
simulation steps at a configurable tick rate while the display
refreshes at the Pygame frame rate; drawing only ever reads a
``RenderSnapshot``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import pygame

if TYPE_CHECKING:
    from lemmyr.simulation.engine import SimulationEngine
    from lemmyr.simulation.snapshot import LemmingView, RenderSnapshot

from lemmyr.lemmings.lemming import Action, Direction

# Colour palette
_BG = (0, 0, 0)
_PANEL_TEXT = (200, 200, 200)

# Lemming marker colours by sprite
_SPRITE_COLOURS: dict[str, tuple[int, int, int]] = {
    "lemming_walk_1": (80, 220, 80),
    "lemming_walk_2": (60, 180, 255),
}
_DEFAULT_SPRITE_COLOUR = (230, 230, 230)

# Lemming box in level pixels, anchored at (0.5, 0.9) on the feet
_LEMMING_W = 4
_LEMMING_H = 10
_ANCHOR_X = 0.5
_ANCHOR_Y = 0.9

_PICK_RADIUS = 8  # level pixels

_TOOL_KEYS: dict[int, Action] = {
    pygame.K_1: Action.WALK,
    pygame.K_2: Action.DIG,
    pygame.K_3: Action.BRIDGE,
}


class PygameRenderer:
    """Renders a SimulationEngine state into a Pygame window.

    Attributes:
        engine: The simulation engine to visualise.
        scale: Screen pixels per level pixel.
        screen: The Pygame display surface.
        tool: Action toggled on a lemming by a left click.
    """

    # Speed presets: ticks per second
    _SPEED_STEPS: ClassVar[list[float]] = [
        1.0,
        5.0,
        10.0,
        20.0,
        40.0,
        80.0,
        160.0,
    ]

    def __init__(
        self,
        engine: SimulationEngine,
        scale: int = 3,
        ticks_per_second: float = 20.0,
    ) -> None:
        """Initialise the renderer.

        Args:
            engine: The simulation engine to render.
            scale: Screen pixels per level pixel.
            ticks_per_second: Simulation ticks per real-time second.
        """
        self.engine = engine
        self.scale = scale
        self.ticks_per_second = ticks_per_second
        self._speed_index = self._nearest_speed(ticks_per_second)
        self._tick_accumulator = 0.0
        self.tool = Action.DIG

        w = engine.terrain.width * scale
        h = engine.terrain.height * scale
        self._panel_width = 200
        self._win_w = w + self._panel_width
        self._win_h = max(h, 240)

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("Lemmyr")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True
        self.paused = False

    def _nearest_speed(self, tps: float) -> int:
        """Return the index of the closest speed preset."""
        diffs = [abs(s - tps) for s in self._SPEED_STEPS]
        return diffs.index(min(diffs))

    def run(self, fps: int = 30) -> None:
        """Main loop: handle events, step sim, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            dt = self.clock.tick(fps) / 1000.0  # seconds elapsed
            self._handle_events()
            if not self.paused:
                self._tick_accumulator += self.ticks_per_second * dt
                steps = int(self._tick_accumulator)
                self._tick_accumulator -= steps
                for _ in range(steps):
                    self.engine.step()
            self._draw(self.engine.render_snapshot())

        pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.paused = not self.paused
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._speed_index = min(
                        len(self._SPEED_STEPS) - 1,
                        self._speed_index + 1,
                    )
                    self.ticks_per_second = self._SPEED_STEPS[self._speed_index]
                elif event.key == pygame.K_MINUS:
                    self._speed_index = max(0, self._speed_index - 1)
                    self.ticks_per_second = self._SPEED_STEPS[self._speed_index]
                elif event.key in _TOOL_KEYS:
                    self.tool = _TOOL_KEYS[event.key]
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._toggle_tool_at(event.pos)

    def _toggle_tool_at(self, pos: tuple[int, int]) -> None:
        """Toggle the selected action on the lemming nearest a click."""
        lx, ly = pos[0] // self.scale, pos[1] // self.scale
        best = None
        best_dist = _PICK_RADIUS * _PICK_RADIUS
        for lemming in self.engine.lemmings:
            dist = (lemming.x - lx) ** 2 + (lemming.y - ly) ** 2
            if dist <= best_dist:
                best, best_dist = lemming, dist
        if best is not None:
            best.actions ^= self.tool

    def _draw(self, snapshot: RenderSnapshot) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_terrain(snapshot)
        for view in snapshot.lemmings:
            self._draw_lemming(view)
        self._draw_info_panel(snapshot)
        pygame.display.flip()

    def _draw_terrain(self, snapshot: RenderSnapshot) -> None:
        """Blit the terrain buffer scaled to the window."""
        size = (snapshot.width, snapshot.height)
        surface = pygame.image.frombuffer(snapshot.pixels.tobytes(), size, "RGBA")
        scaled = pygame.transform.scale(
            surface,
            (snapshot.width * self.scale, snapshot.height * self.scale),
        )
        self.screen.blit(scaled, (0, 0))

    def _draw_lemming(self, view: LemmingView) -> None:
        """Draw a lemming as a coloured box with a facing tick."""
        s = self.scale
        colour = _SPRITE_COLOURS.get(view.sprite_id, _DEFAULT_SPRITE_COLOUR)
        left = int((view.x - _LEMMING_W * _ANCHOR_X) * s)
        top = int((view.y - _LEMMING_H * _ANCHOR_Y) * s)
        pygame.draw.rect(
            self.screen,
            colour,
            (left, top, _LEMMING_W * s, _LEMMING_H * s),
        )
        reach = _LEMMING_W * s
        if view.direction is Direction.LEFT:
            reach = -reach
        eye_y = top + s * 2
        pygame.draw.line(
            self.screen,
            colour,
            (view.x * s, eye_y),
            (view.x * s + reach, eye_y),
            max(1, s // 2),
        )

    def _draw_info_panel(self, snapshot: RenderSnapshot) -> None:
        """Draw a stats panel on the right side of the window."""
        panel_x = snapshot.width * self.scale + 10
        y = 10

        counts: dict[str, int] = {}
        for lemming in self.engine.lemmings:
            for action in (Action.WALK, Action.DIG, Action.BRIDGE):
                if action in lemming.actions:
                    counts[action.name] = counts.get(action.name, 0) + 1

        lines = [
            f"Tick: {snapshot.tick}",
            f"Speed: {self.ticks_per_second:.1f} t/s",
            f"{'PAUSED' if self.paused else 'RUNNING'}",
            "",
            f"Lemmings: {len(snapshot.lemmings)}",
        ]
        lines += [f"  {name}: {count}" for name, count in sorted(counts.items())]
        lines += [
            "",
            f"Tool: {self.tool.name}",
            "",
            "--- Controls ---",
            "1/2/3: walk/dig/bridge",
            "click: toggle tool",
            "SPACE: pause",
            "+/-: speed",
            "ESC: quit",
        ]

        for line in lines:
            surf = self.font.render(line, True, _PANEL_TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18
