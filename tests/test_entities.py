from __future__ import annotations

import math

from game.invaders import config as C
from game.invaders.entities import (
    ENEMY_COLORS,
    ENEMY_SCORES,
    Bullet,
    Enemy,
    EnemyType,
    Owner,
    Particle,
    Player,
    enemy_type_for_row,
)


def test_row_to_category() -> None:
    assert [enemy_type_for_row(r) for r in range(5)] == [
        EnemyType.STRONG,
        EnemyType.STRONG,
        EnemyType.FAST,
        EnemyType.FAST,
        EnemyType.BASIC,
    ]


def test_score_and_color_lookups() -> None:
    assert ENEMY_SCORES == {EnemyType.BASIC: 10, EnemyType.FAST: 20, EnemyType.STRONG: 30}
    assert ENEMY_COLORS[EnemyType.STRONG] == C.RED
    assert ENEMY_COLORS[EnemyType.FAST] == C.YELLOW
    assert ENEMY_COLORS[EnemyType.BASIC] == C.BLUE

    e = Enemy(x=0.0, y=0.0, kind=EnemyType.FAST)
    assert e.score == 20
    assert e.color == C.YELLOW


def test_enemy_geometry() -> None:
    e = Enemy(x=50.0, y=50.0, kind=EnemyType.STRONG, width=40.0, height=30.0)
    assert e.center == (70.0, 65.0)
    assert e.bottom == 80.0


def test_player_center() -> None:
    p = Player(x=375.0, y=550.0, width=50.0, height=30.0)
    assert p.center == (400.0, 565.0)


def test_bullet_owner_flag() -> None:
    assert Bullet(x=0, y=0, vx=0, vy=-500, owner=Owner.PLAYER).from_player
    assert not Bullet(x=0, y=0, vx=0, vy=200, owner=Owner.ENEMY).from_player


def test_particle_alpha_can_exceed_one() -> None:
    p = Particle(x=0, y=0, vx=0, vy=0, color=C.WHITE, lifetime=1.5)
    assert math.isclose(p.alpha, 1.5)
    p.lifetime = 0.25
    assert math.isclose(p.alpha, 0.25)
