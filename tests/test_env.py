from __future__ import annotations

import math

import numpy as np
import pytest

from game.invaders import config as C
from game.invaders.entities import Bullet, Owner
from game.invaders.invaders_env import InvadersEnv
from game.invaders.utils import to_rgba255

STAY, LEFT, RIGHT = 0, 1, 2


def test_reset_returns_valid_observation() -> None:
    env = InvadersEnv()
    obs, info = env.reset(seed=0)
    assert env.observation_space.contains(obs)
    assert obs.shape == (8 + 2 * env.k_bullets,)
    assert info["score"] == 0
    assert info["lives"] == 3
    assert info["wave"] == 1
    assert info["enemies_alive"] == 50
    assert info["bullets"] == 0
    assert info["particles"] == 0
    assert info["step"] == 0


def test_info_counts_bullets_and_particles() -> None:
    env = InvadersEnv()
    env.reset(seed=0)
    _, _, _, _, info = env.step([STAY, 1])
    assert info["bullets"] == 1

    e = env.state.enemies[0]
    env.state.bullets = [Bullet(x=e.x + 5, y=e.y + 20, vx=0.0, vy=0.0, owner=Owner.PLAYER)]
    _, _, _, _, info = env.step([STAY, 0])
    assert info["bullets"] == 0
    assert info["particles"] == C.EXPLOSION_PARTICLES


def test_observations_stay_in_space() -> None:
    env = InvadersEnv()
    env.reset(seed=1)
    env.action_space.seed(1)
    for _ in range(500):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        assert env.observation_space.contains(obs)
        assert isinstance(reward, float)
        if terminated or truncated:
            break


def test_fire_is_edge_triggered() -> None:
    env = InvadersEnv()
    env.reset(seed=0)
    for _ in range(3):
        *_, info = env.step([STAY, 1])
    assert info["shots"] == 1

    env.step([STAY, 0])
    *_, info = env.step([STAY, 1])
    assert info["shots"] == 2


def test_move_actions() -> None:
    env = InvadersEnv()
    env.reset(seed=0)
    x0 = env.state.player.x
    env.step([LEFT, 0])
    assert env.state.player.x < x0
    x1 = env.state.player.x
    env.step([RIGHT, 0])
    assert math.isclose(env.state.player.x, x0)
    assert env.state.player.x > x1


def test_same_seed_same_trajectory() -> None:
    actions = np.random.default_rng(3).integers([0, 0], [3, 2], size=(300, 2))

    def rollout():
        env = InvadersEnv()
        obs, _ = env.reset(seed=123)
        history = [obs]
        for a in actions:
            obs, reward, terminated, truncated, info = env.step(a)
            history.append(obs)
            if terminated or truncated:
                break
        return np.stack(history), info

    a_obs, a_info = rollout()
    b_obs, b_info = rollout()
    assert np.array_equal(a_obs, b_obs)
    assert a_info == b_info


def test_termination_follows_game_over() -> None:
    env = InvadersEnv()
    env.reset(seed=0)
    s = env.state
    s.lives = 1
    p = s.player
    s.bullets = [Bullet(x=p.x + 10, y=p.y + 5, vx=0.0, vy=0.0, owner=Owner.ENEMY)]

    obs, reward, terminated, truncated, info = env.step([STAY, 0])

    assert terminated
    assert terminated == s.game_over
    assert not truncated
    assert info["lives"] == 0
    assert info["lives_lost"] == 1
    rc = C.REWARD_CONFIG
    expected = -rc["R_LIFE"] - rc["R_TIME"] - rc["R_GAME_OVER"]
    assert math.isclose(reward, expected)


def test_kill_reward() -> None:
    env = InvadersEnv()
    env.reset(seed=0)
    e = env.state.enemies[0]
    env.state.bullets = [Bullet(x=e.x + 5, y=e.y + 5, vx=0.0, vy=0.0, owner=Owner.PLAYER)]
    _, reward, *_, info = env.step([STAY, 0])
    rc = C.REWARD_CONFIG
    assert info["kills"] == 1
    assert math.isclose(reward, rc["R_SCORE"] * 30 - rc["R_TIME"])


def test_truncation_at_max_steps() -> None:
    env = InvadersEnv(max_steps=5)
    env.reset(seed=0)
    for i in range(5):
        obs, reward, terminated, truncated, info = env.step([STAY, 0])
        assert truncated == (i == 4)
    assert not terminated


def test_reward_config_override_merges_defaults() -> None:
    env = InvadersEnv(reward_config={"R_SCORE": 1.0})
    assert env.reward_config["R_SCORE"] == 1.0
    assert env.reward_config["R_LIFE"] == C.REWARD_CONFIG["R_LIFE"]


def test_rgb_array_render() -> None:
    env = InvadersEnv(render_mode="rgb_array", width=320, height=240)
    env.reset(seed=0)
    frame = env.render()
    assert frame.shape == (240, 320, 3)
    assert frame.dtype == np.uint8

    p = env.state.player
    px, py = int(p.x + 5), int(p.y + 5)
    assert tuple(frame[py, px]) == to_rgba255(C.GREEN)[:3]

    e = env.state.enemies[0]
    assert tuple(frame[int(e.y + 5), int(e.x + 5)]) == to_rgba255(C.RED)[:3]
    # background stays black
    assert tuple(frame[0, 0]) == (0, 0, 0)


def test_render_without_mode_returns_none() -> None:
    env = InvadersEnv()
    env.reset(seed=0)
    assert env.render() is None


def test_bad_arguments() -> None:
    with pytest.raises(AssertionError):
        InvadersEnv(render_mode="ascii")
    with pytest.raises(AssertionError):
        InvadersEnv(obs_mode="pixels")
    with pytest.raises(ValueError):
        InvadersEnv(width=0)
