from __future__ import annotations

from game.invaders import config as C
from game.invaders.entities import Bullet, Controls, Owner
from game.invaders.state import GameState
from game.invaders.utils import make_rng


def _state(seed: int = 0) -> GameState:
    return GameState(width=800, height=600, rng=make_rng(seed))


def _kill_all(s: GameState) -> None:
    for e in s.enemies:
        e.alive = False


def test_wave_clear_respawns_faster_grid_with_bonus() -> None:
    s = _state()
    old_speed = s.enemies[0].speed
    _kill_all(s)

    s.check_game_state()

    assert s.wave == 2
    assert s.score == 100
    assert not s.game_over
    assert len(s.enemies) == 50
    assert all(e.alive for e in s.enemies)
    assert all(e.speed == 70.0 for e in s.enemies)
    assert s.enemies[0].speed > old_speed
    assert s.events["waves_cleared"] == 1


def test_wave_bonus_applied_once() -> None:
    s = _state()
    _kill_all(s)
    s.check_game_state()
    s.check_game_state()
    assert s.wave == 2
    assert s.score == C.WAVE_BONUS


def test_wave_clear_through_advance() -> None:
    s = _state()
    for e in s.enemies[1:]:
        e.alive = False
    last = s.enemies[0]
    s.bullets = []
    s.advance(0.0, Controls())
    assert s.wave == 1

    # kill the last one with a bullet sitting inside it
    s.bullets = [Bullet(x=last.x + 5, y=last.y + 5, vx=0.0, vy=0.0, owner=Owner.PLAYER)]
    s.advance(0.0, Controls())
    assert s.wave == 2
    assert s.score == 30 + 100
    assert len(s.alive_enemies) == 50


def test_out_of_lives_is_game_over() -> None:
    s = _state()
    s.lives = 0
    s.check_game_state()
    assert s.game_over


def test_out_of_lives_takes_precedence_over_wave_clear() -> None:
    s = _state()
    s.lives = 0
    _kill_all(s)
    s.check_game_state()
    assert s.game_over
    assert s.wave == 1
    assert s.score == 0


def test_overrun_is_game_over() -> None:
    s = _state()
    e = s.enemies[45]
    e.y = s.player.y - e.height  # bottom edge exactly on the player
    s.check_game_state()
    assert s.game_over
    assert s.lives == 3


def test_formation_just_above_player_is_not_overrun() -> None:
    s = _state()
    e = s.enemies[45]
    e.y = s.player.y - e.height - 1.0
    s.check_game_state()
    assert not s.game_over


def test_dead_enemy_below_player_is_ignored() -> None:
    s = _state()
    e = s.enemies[45]
    e.alive = False
    e.y = s.player.y
    s.check_game_state()
    assert not s.game_over


def test_last_life_lost_ends_game_and_sticks() -> None:
    s = _state()
    s.lives = 1
    p = s.player
    s.bullets = [Bullet(x=p.x + 10, y=p.y + 5, vx=0.0, vy=0.0, owner=Owner.ENEMY)]
    s.advance(0.01, Controls())
    assert s.lives == 0
    assert s.game_over

    for _ in range(10):
        s.advance(0.5, Controls(fire=True))
    assert s.game_over
    assert s.lives == 0

    s.initialize()
    assert not s.game_over
    assert s.lives == 3


def test_game_over_matches_loss_conditions_every_tick() -> None:
    s = _state(seed=5)
    inputs = make_rng(11)
    for i in range(3000):
        was_over = s.game_over
        c = Controls(
            left=bool(inputs.integers(2)),
            right=bool(inputs.integers(2)),
            fire=i % 5 == 0,
        )
        s.advance(1 / 30, c)

        assert 0.0 <= s.player.x <= s.width - s.player.width
        if was_over:
            continue
        overrun = any(e.alive and e.bottom >= s.player.y for e in s.enemies)
        assert s.game_over == (s.lives <= 0 or overrun)
