"""
Arcade front-end: keyboard in, GameState drawn out.
The simulation works top-down (y grows downward); arcade is bottom-up, so
every y is flipped at draw time.
"""

from __future__ import annotations

from typing import Optional, Set

import arcade

from . import config as C
from .entities import Controls
from .state import GameState
from .utils import make_rng, to_rgba255

LEFT_KEYS = (arcade.key.LEFT, arcade.key.A)
RIGHT_KEYS = (arcade.key.RIGHT, arcade.key.D)
FIRE_KEY = arcade.key.SPACE
RESTART_KEY = arcade.key.R

N_STARS = 100


class InvadersWindow(arcade.Window):
    """Arcade window that renders a GameState, and drives it when interactive"""

    def __init__(
        self,
        state: GameState,
        width: int,
        height: int,
        title: str = "Space Invaders",
        interactive: bool = True,
        update_rate: float = 1 / 60,
    ):
        # set before the base init: it may fire on_resize
        self.state = state
        self.interactive = interactive
        super().__init__(width, height, title, resizable=interactive, update_rate=update_rate)

        self.background_color = to_rgba255(C.BLACK)

        # Held keys plus edge-triggered presses collected since the last update
        self._held: Set[int] = set()
        self._fire_pressed = False
        self._restart_pressed = False

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if not self.interactive:
            return
        self._held.add(symbol)
        if symbol == FIRE_KEY:
            self._fire_pressed = True
        elif symbol == RESTART_KEY:
            self._restart_pressed = True
        elif symbol == arcade.key.ESCAPE:
            self.close()

    def on_key_release(self, symbol: int, modifiers: int):
        self._held.discard(symbol)

    def on_resize(self, width: int, height: int):
        super().on_resize(width, height)
        if width > 0 and height > 0:
            self.state.resize(width, height)

    def on_update(self, delta_time: float):
        if not self.interactive:
            return

        if self._restart_pressed:
            self.state.restart()

        controls = Controls(
            left=any(k in self._held for k in LEFT_KEYS),
            right=any(k in self._held for k in RIGHT_KEYS),
            fire=self._fire_pressed,
        )
        self._fire_pressed = False
        self._restart_pressed = False

        self.state.advance(delta_time, controls)

    # ----------------------------
    # Drawing
    # ----------------------------

    def _rect(self, x: float, y: float, w: float, h: float, color):
        top = self.state.height - y
        arcade.draw_lrbt_rectangle_filled(x, x + w, top - h, top, to_rgba255(color))

    def _circle(self, x: float, y: float, r: float, color, alpha: Optional[float] = None):
        arcade.draw_circle_filled(x, self.state.height - y, r, to_rgba255(color, alpha))

    def _text(self, text: str, x: float, y: float, size: float, color, centered: bool = False):
        arcade.draw_text(
            text, x, self.state.height - y, to_rgba255(color), size,
            anchor_x="center" if centered else "left",
        )

    def on_draw(self):
        self.clear()
        s = self.state
        w, h = s.width, s.height

        # Static starfield
        for i in range(N_STARS):
            self._circle((i * 71.3) % w, (i * 37.7) % h, 1.0, C.WHITE)

        if not s.game_over:
            p = s.player
            self._rect(p.x, p.y, p.width, p.height, p.color)
            # gun
            self._rect(p.x + p.width / 2.0 - 2.0, p.y - 10.0, 4.0, 10.0, C.WHITE)

        for e in s.enemies:
            if not e.alive:
                continue
            self._rect(e.x, e.y, e.width, e.height, e.color)
            self._circle(e.x + 10.0, e.y + 10.0, 3.0, C.WHITE)
            self._circle(e.x + 30.0, e.y + 10.0, 3.0, C.WHITE)

        for b in s.bullets:
            self._rect(b.x, b.y, b.width, b.height, b.color)

        for pt in s.particles:
            self._circle(pt.x, pt.y, C.PARTICLE_RADIUS, pt.color, alpha=pt.alpha)

        # HUD
        self._text(f"Score: {s.score}", 20, 30, 20, C.YELLOW)
        self._text(f"Lives: {s.lives}", 20, 60, 20, C.GREEN)
        self._text(f"Wave: {s.wave}", 20, 90, 20, C.BLUE)
        self._text("Left/Right or A/D to move, SPACE to fire, R to restart", 20, h - 20, 14, C.WHITE)

        if s.game_over:
            self._text("GAME OVER", w / 2, h / 2 - 50, 48, C.RED, centered=True)
            self._text(f"Final score: {s.score}", w / 2, h / 2, 24, C.WHITE, centered=True)
            self._text("Press R to restart", w / 2, h / 2 + 50, 20, C.GREEN, centered=True)


def play(
    width: int = 800,
    height: int = 600,
    title: str = "Space Invaders",
    update_rate: float = 1 / 60,
    seed: Optional[int] = None,
):
    """Open an interactive window and run until it is closed"""
    state = GameState(width=width, height=height, rng=make_rng(seed))
    window = InvadersWindow(state, width, height, title=title, update_rate=update_rate)
    arcade.run()
    return window.state
