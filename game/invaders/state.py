"""
GameState - the Space Invaders simulation core
----------------------------------------------
- One aggregate root owning the player, enemy formation, bullets and particles
- `advance(dt, controls)` runs the whole per-frame pipeline in a fixed order:
  player -> bullets -> formation + enemy fire -> particles -> collisions -> game state
- No rendering, no input polling: hosts pass `Controls` in and read the state out
- All randomness comes from an injected numpy Generator, so a seed + input
  sequence reproduces a game exactly

Hosts:
    game.invaders.window.InvadersWindow   (arcade, interactive)
    game.invaders.invaders_env.InvadersEnv (gymnasium, agents)
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Tuple

import numpy as np

from . import config as C
from .entities import (
    Bullet,
    Color,
    Controls,
    Enemy,
    Owner,
    Particle,
    Player,
    enemy_type_for_row,
)
from .utils import clamp, jitter_color, make_rng, rects_overlap

logger = logging.getLogger(__name__)


class GameState:
    """Space Invaders game state and per-frame update pipeline"""

    def __init__(
        self,
        width: float = 800,
        height: float = 600,
        rng: Optional[np.random.Generator] = None,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Screen size must be positive, got {width}x{height}")

        # Live screen size; hosts update it through resize()
        self.width = float(width)
        self.height = float(height)

        self.rng = rng if rng is not None else make_rng()

        # World state
        self.player: Player = None  # type: ignore
        self.enemies: List[Enemy] = []
        self.bullets: List[Bullet] = []
        self.particles: List[Particle] = []

        self.score = 0
        self.lives = C.START_LIVES
        self.game_over = False
        self.wave = 1
        self.enemy_direction = 1.0
        self.enemy_shoot_timer = 0.0

        # Per-tick event counters, read by the gym env for reward shaping
        self.events: Dict[str, int] = {}

        self.initialize()

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def initialize(self):
        """Reset to wave 1 with full lives and a fresh formation"""
        pw, ph = C.PLAYER_SIZE
        self.player = Player(
            x=(self.width - pw) / 2.0,
            y=self.height - C.PLAYER_BOTTOM_MARGIN,
            width=pw,
            height=ph,
            speed=C.PLAYER_SPEED,
        )
        self.bullets = []
        self.particles = []
        self.score = 0
        self.lives = C.START_LIVES
        self.game_over = False
        self.wave = 1
        self.enemy_direction = 1.0
        self.enemy_shoot_timer = 0.0
        self._reset_events()

        self.spawn_enemies()

    def restart(self):
        logger.info("Restarting (previous run: score %d, wave %d)", self.score, self.wave)
        self.initialize()

    def resize(self, width: float, height: float):
        if width <= 0 or height <= 0:
            raise ValueError(f"Screen size must be positive, got {width}x{height}")
        self.width = float(width)
        self.height = float(height)

    def spawn_enemies(self):
        """Replace the roster with a full grid, speed scaled by the current wave"""
        ew, eh = C.ENEMY_SIZE
        ox, oy = C.GRID_ORIGIN
        sx, sy = C.GRID_SPACING
        speed = C.ENEMY_BASE_SPEED + self.wave * C.ENEMY_SPEED_PER_WAVE

        self.enemies = [
            Enemy(
                x=ox + col * sx,
                y=oy + row * sy,
                kind=enemy_type_for_row(row),
                width=ew,
                height=eh,
                speed=speed,
                row=row,
                col=col,
            )
            for row in range(C.ENEMY_ROWS)
            for col in range(C.ENEMY_COLS)
        ]

    @property
    def alive_enemies(self) -> List[Enemy]:
        return [e for e in self.enemies if e.alive]

    # ----------------------------
    # Update pipeline
    # ----------------------------

    def advance(self, dt: float, controls: Optional[Controls] = None):
        """Run one frame. Does nothing once the game is over."""
        self._reset_events()
        if self.game_over:
            return

        controls = controls or Controls()

        self._update_player(dt, controls)
        self._update_bullets(dt)
        self._update_enemies(dt)
        self._update_particles(dt)
        self.check_collisions()
        self.check_game_state()

    def _reset_events(self):
        self.events = {"shots": 0, "kills": 0, "lives_lost": 0, "waves_cleared": 0}

    def _update_player(self, dt: float, controls: Controls):
        p = self.player
        if controls.left:
            p.x -= p.speed * dt
        if controls.right:
            p.x += p.speed * dt

        p.x = clamp(p.x, 0.0, self.width - p.width)

        if controls.fire:
            self.player_shoot()

    def player_shoot(self):
        bw, bh = C.BULLET_SIZE
        p = self.player
        self.bullets.append(Bullet(
            x=p.x + p.width / 2.0 - bw / 2.0,
            y=p.y,
            vx=0.0,
            vy=-C.PLAYER_BULLET_SPEED,
            owner=Owner.PLAYER,
            width=bw,
            height=bh,
            color=C.WHITE,
        ))
        self.events["shots"] += 1

    def _update_bullets(self, dt: float):
        for b in self.bullets:
            b.x += b.vx * dt
            b.y += b.vy * dt

        margin = C.BULLET_CULL_MARGIN
        self.bullets = [b for b in self.bullets if -margin < b.y < self.height + margin]

    def _update_enemies(self, dt: float):
        # A zero-length frame must not move the formation, not even a step down
        if dt > 0:
            self._move_formation(dt)

        self.enemy_shoot_timer += dt
        if self.enemy_shoot_timer > C.ENEMY_FIRE_INTERVAL:
            self.enemy_shoot()
            self.enemy_shoot_timer = 0.0

    def _move_formation(self, dt: float):
        move_down = False
        for e in self.enemies:
            if not e.alive:
                continue
            if (e.x <= 0.0 and self.enemy_direction < 0) or \
               (e.x + e.width >= self.width and self.enemy_direction > 0):
                move_down = True
                break

        for e in self.enemies:
            if not e.alive:
                continue
            if move_down:
                e.y += C.ENEMY_STEP_DOWN
            else:
                e.x += e.speed * self.enemy_direction * dt

        if move_down:
            self.enemy_direction *= -1.0

    def enemy_shoot(self):
        alive = self.alive_enemies
        if not alive:
            return

        shooter = alive[int(self.rng.integers(len(alive)))]
        bw, bh = C.BULLET_SIZE
        self.bullets.append(Bullet(
            x=shooter.x + shooter.width / 2.0 - bw / 2.0,
            y=shooter.y + shooter.height,
            vx=0.0,
            vy=C.ENEMY_BULLET_SPEED,
            owner=Owner.ENEMY,
            width=bw,
            height=bh,
            color=C.RED,
        ))

    def _update_particles(self, dt: float):
        # Drag is per tick, so a zero-length frame skips it
        drag = C.PARTICLE_DRAG if dt > 0 else 1.0
        for p in self.particles:
            p.x += p.vx * dt
            p.y += p.vy * dt
            p.lifetime -= dt
            p.vx *= drag
            p.vy *= drag

        self.particles = [p for p in self.particles if p.lifetime > 0.0]

    # ----------------------------
    # Collisions & scoring
    # ----------------------------

    def check_collisions(self):
        bullets_to_remove: List[int] = []
        enemies_hit: List[Tuple[int, Tuple[float, float], Color, int]] = []

        # Player bullets vs enemies; first match wins
        for b_idx, b in enumerate(self.bullets):
            if not b.from_player:
                continue
            for e_idx, e in enumerate(self.enemies):
                if not e.alive:
                    continue
                if rects_overlap(b.x, b.y, b.width, b.height, e.x, e.y, e.width, e.height):
                    bullets_to_remove.append(b_idx)
                    enemies_hit.append((e_idx, e.center, e.color, e.score))
                    break

        # Enemy bullets vs player; at most one life lost per tick
        p = self.player
        for b_idx, b in enumerate(self.bullets):
            if b.from_player:
                continue
            if rects_overlap(b.x, b.y, b.width, b.height, p.x, p.y, p.width, p.height):
                bullets_to_remove.append(b_idx)
                self.lives -= 1
                self.events["lives_lost"] += 1
                logger.debug("Player hit, %d lives left", self.lives)
                self.create_explosion(p.center, C.WHITE)
                break

        # Every recorded hit counts, even two bullets on the same enemy
        for e_idx, pos, color, points in enemies_hit:
            if e_idx < len(self.enemies):
                self.enemies[e_idx].alive = False
                self.score += points
                self.events["kills"] += 1
                self.create_explosion(pos, color)

        for idx in sorted(set(bullets_to_remove), reverse=True):
            if idx < len(self.bullets):
                del self.bullets[idx]

    def create_explosion(self, position: Tuple[float, float], base_color: Color):
        x, y = position
        for _ in range(C.EXPLOSION_PARTICLES):
            angle = float(self.rng.uniform(0.0, 2.0 * math.pi))
            speed = float(self.rng.uniform(*C.PARTICLE_SPEED_RANGE))
            self.particles.append(Particle(
                x=x,
                y=y,
                vx=math.cos(angle) * speed,
                vy=math.sin(angle) * speed,
                color=jitter_color(base_color, self.rng, C.PARTICLE_COLOR_JITTER),
                lifetime=float(self.rng.uniform(*C.PARTICLE_LIFETIME_RANGE)),
                max_lifetime=C.PARTICLE_MAX_LIFETIME,
            ))

    # ----------------------------
    # Wave / lifecycle
    # ----------------------------

    def check_game_state(self):
        if self.lives <= 0:
            if not self.game_over:
                logger.info("Game over: out of lives (score %d, wave %d)", self.score, self.wave)
            self.game_over = True
        elif not any(e.alive for e in self.enemies):
            self.wave += 1
            self.spawn_enemies()
            self.score += C.WAVE_BONUS
            self.events["waves_cleared"] += 1
            logger.info("Wave cleared, starting wave %d (score %d)", self.wave, self.score)

        # Overrun is checked every tick
        player_y = self.player.y
        for e in self.enemies:
            if e.alive and e.bottom >= player_y:
                if not self.game_over:
                    logger.info("Game over: formation reached the player (score %d, wave %d)",
                                self.score, self.wave)
                self.game_over = True
                break
