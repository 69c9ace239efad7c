"""
Game entity dataclasses
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from .config import BLUE, GREEN, RED, WHITE, YELLOW, PARTICLE_MAX_LIFETIME

Color = Tuple[float, float, float, float]


class EnemyType(Enum):
    """Enemy category, fixed at spawn time"""
    BASIC = "basic"
    FAST = "fast"
    STRONG = "strong"


class Owner(Enum):
    """Who fired a bullet; decides what it can hit"""
    PLAYER = "player"
    ENEMY = "enemy"


ENEMY_SCORES: Dict[EnemyType, int] = {
    EnemyType.BASIC: 10,
    EnemyType.FAST: 20,
    EnemyType.STRONG: 30,
}

ENEMY_COLORS: Dict[EnemyType, Color] = {
    EnemyType.BASIC: BLUE,
    EnemyType.FAST: YELLOW,
    EnemyType.STRONG: RED,
}


def enemy_type_for_row(row: int) -> EnemyType:
    """Rows 0-1 are Strong, 2-3 Fast, everything below Basic"""
    if row <= 1:
        return EnemyType.STRONG
    if row <= 3:
        return EnemyType.FAST
    return EnemyType.BASIC


@dataclass
class Player:
    """Player ship. Lives are tracked on the game state, not here."""
    x: float
    y: float
    width: float = 50.0
    height: float = 30.0
    speed: float = 300.0  # px/s
    color: Color = GREEN

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2.0, self.y + self.height / 2.0


@dataclass
class Enemy:
    """Formation member; soft-deleted via `alive` until the next wave"""
    x: float
    y: float
    kind: EnemyType
    width: float = 40.0
    height: float = 30.0
    speed: float = 60.0  # px/s
    alive: bool = True
    row: int = 0
    col: int = 0

    @property
    def color(self) -> Color:
        return ENEMY_COLORS[self.kind]

    @property
    def score(self) -> int:
        return ENEMY_SCORES[self.kind]

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2.0, self.y + self.height / 2.0

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class Bullet:
    """Bullet projectile entity"""
    x: float
    y: float
    vx: float
    vy: float
    owner: Owner
    width: float = 4.0
    height: float = 10.0
    color: Color = WHITE

    @property
    def from_player(self) -> bool:
        return self.owner is Owner.PLAYER


@dataclass
class Particle:
    """Explosion particle"""
    x: float
    y: float
    vx: float
    vy: float
    color: Color
    lifetime: float  # seconds left
    max_lifetime: float = PARTICLE_MAX_LIFETIME

    @property
    def alpha(self) -> float:
        # can exceed 1.0 while lifetime > max_lifetime
        return self.lifetime / self.max_lifetime


@dataclass
class Controls:
    """One frame of host input. `fire` must already be edge-triggered."""
    left: bool = False
    right: bool = False
    fire: bool = False
