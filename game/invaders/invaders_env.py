"""
InvadersEnv - Space Invaders as a Gymnasium environment
-------------------------------------------------------
- Wraps GameState with a fixed dt per step
- Gymnasium API, seeded through `self.np_random`
- MultiDiscrete action space: [move(3), fire(2)]
  fire is edge-triggered like the keyboard: holding 1 fires only once
- Vector observation: player/formation summary + K nearest enemy bullets
- "human" rendering through the arcade window, "rgb_array" rasterised with numpy

Quick test:
    python -m game.invaders.invaders_env
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from . import config as C
from .entities import Controls, Owner
from .state import GameState
from .utils import clamp, to_rgba255


class InvadersEnv(gym.Env):
    """Space Invaders environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        obs_mode: str = "vector",
        width: int = 800,
        height: int = 600,
        dt: float = 1 / 60,
        max_steps: int = 3600,
        k_bullets: int = 3,
        reward_config: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()

        assert obs_mode in ("vector",), "Only 'vector' observations are implemented."
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unknown render_mode: {render_mode}"
        if width <= 0 or height <= 0:
            raise ValueError(f"Screen size must be positive, got {width}x{height}")

        self.render_mode = render_mode
        self.obs_mode = obs_mode

        self.width = width
        self.height = height
        self.dt = dt
        self.max_steps = max_steps
        self.k_bullets = k_bullets
        self.reward_config = dict(C.REWARD_CONFIG)
        if reward_config:
            self.reward_config.update(reward_config)

        # Action space:
        # move: 0 stay, 1 left, 2 right
        # fire: 0/1 (edge-triggered)
        self.action_space = spaces.MultiDiscrete([3, 2])

        # Observation space (vector)
        # player x(1) lives(1) direction(1) fire timer(1) alive fraction(1)
        # formation bbox: min x, max right, max bottom (3)
        # each enemy bullet: rel pos(2)
        obs_dim = 8 + self.k_bullets * 2
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None

        self.state: GameState = None  # type: ignore
        self._fire_held = False
        self._step_count = 0
        self._episode = {"kills": 0, "lives_lost": 0, "shots": 0}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        self.state = GameState(width=self.width, height=self.height, rng=self.np_random)
        self._fire_held = False
        self._step_count = 0
        self._episode = {"kills": 0, "lives_lost": 0, "shots": 0}

        if self._window is not None:
            self._window.state = self.state

        return self._get_obs(), self._get_info()

    def step(self, action):
        move, fire = int(action[0]), int(action[1])

        pressed = fire == 1 and not self._fire_held
        self._fire_held = fire == 1
        controls = Controls(left=move == 1, right=move == 2, fire=pressed)

        score_before = self.state.score
        self.state.advance(self.dt, controls)

        events = self.state.events
        for key in self._episode:
            self._episode[key] += events.get(key, 0)

        reward = self._compute_reward(self.state.score - score_before, events)

        terminated = self.state.game_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        s = self.state
        p = s.player

        span = max(1e-6, s.width - p.width)
        obs_parts = [
            (p.x / span) * 2 - 1,
            (s.lives / C.START_LIVES) * 2 - 1,
            s.enemy_direction,
            (s.enemy_shoot_timer / C.ENEMY_FIRE_INTERVAL) * 2 - 1,
        ]

        alive = s.alive_enemies
        total = max(1, len(s.enemies))
        obs_parts.append((len(alive) / total) * 2 - 1)

        # Formation bounding box
        if alive:
            min_x = min(e.x for e in alive)
            max_right = max(e.x + e.width for e in alive)
            max_bottom = max(e.bottom for e in alive)
            obs_parts += [
                (min_x / s.width) * 2 - 1,
                (max_right / s.width) * 2 - 1,
                (max_bottom / s.height) * 2 - 1,
            ]
        else:
            obs_parts += [0.0, 0.0, 0.0]

        # Enemy bullets: top-K nearest to the player's gun
        px, py = p.center
        incoming = sorted(
            (b for b in s.bullets if b.owner is Owner.ENEMY),
            key=lambda b: (b.x - px) ** 2 + (b.y - py) ** 2
        )
        for i in range(self.k_bullets):
            if i < len(incoming):
                b = incoming[i]
                obs_parts += [(b.x - px) / s.width, (b.y - py) / s.height]
            else:
                obs_parts += [0.0, 0.0]

        obs = np.array([clamp(v, -1.0, 1.0) for v in obs_parts], dtype=np.float32)
        return obs

    def _compute_reward(self, score_delta: int, events: Dict[str, int]) -> float:
        rc = self.reward_config
        reward = 0.0

        reward += rc["R_SCORE"] * score_delta
        reward -= rc["R_LIFE"] * events.get("lives_lost", 0)
        reward += rc["R_WAVE"] * events.get("waves_cleared", 0)
        reward -= rc["R_SHOT"] * events.get("shots", 0)
        reward -= rc["R_TIME"]

        if self.state.game_over:
            reward -= rc["R_GAME_OVER"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        s = self.state
        return {
            "score": s.score,
            "lives": s.lives,
            "wave": s.wave,
            "enemies_alive": len(s.alive_enemies),
            "bullets": len(s.bullets),
            "particles": len(s.particles),
            "step": self._step_count,
            "kills": self._episode["kills"],
            "lives_lost": self._episode["lives_lost"],
            "shots": self._episode["shots"],
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "human":
            if self._window is None:
                # arcade needs a display; only pull it in for human rendering
                from .window import InvadersWindow
                self._window = InvadersWindow(
                    self.state, self.width, self.height,
                    title="InvadersEnv - Arcade", interactive=False,
                )
            self._window.on_draw()
            return None

        return self._render_rgb_array()

    def _render_rgb_array(self) -> np.ndarray:
        """Rasterise the state into an (H, W, 3) uint8 frame"""
        s = self.state
        frame = np.zeros((int(s.height), int(s.width), 3), dtype=np.uint8)

        if not s.game_over:
            p = s.player
            _fill_rect(frame, p.x, p.y, p.width, p.height, p.color)

        for e in s.enemies:
            if e.alive:
                _fill_rect(frame, e.x, e.y, e.width, e.height, e.color)

        for b in s.bullets:
            _fill_rect(frame, b.x, b.y, b.width, b.height, b.color)

        for pt in s.particles:
            a = clamp(pt.alpha, 0.0, 1.0)
            faded = (pt.color[0] * a, pt.color[1] * a, pt.color[2] * a, 1.0)
            r = C.PARTICLE_RADIUS
            _fill_rect(frame, pt.x - r, pt.y - r, 2 * r, 2 * r, faded)

        return frame

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


def _fill_rect(frame: np.ndarray, x: float, y: float, w: float, h: float, color):
    height, width = frame.shape[:2]
    x0, x1 = max(0, int(x)), min(width, int(x + w))
    y0, y1 = max(0, int(y)), min(height, int(y + h))
    if x0 >= x1 or y0 >= y1:
        return
    frame[y0:y1, x0:x1] = to_rgba255(color)[:3]


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42) -> float:
    """Run a random-agent episode and return its total reward"""
    env = InvadersEnv(render_mode="human" if render else None, **C.ENV_CONFIG)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to stop early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

        if render and env._window:
            env._window.dispatch_events()
            env._window.flip()
            time.sleep(env.dt)

    print(f"Random episode return: {total:.2f} "
          f"(score {info['score']}, wave {info['wave']}, steps {info['step']})")

    env.close()
    return total


def evaluate_random_policy(
    n_episodes: int = 10,
    seed: Optional[int] = None,
    verbose: bool = True,
    **env_kwargs,
) -> Dict[str, Any]:
    """Headless random-policy baseline; returns per-episode returns/scores and their stats"""
    env = InvadersEnv(render_mode=None, **env_kwargs)
    env.action_space.seed(seed)

    returns, lengths, scores, waves = [], [], [], []
    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)
        terminated = truncated = False
        total = 0.0
        while not (terminated or truncated):
            obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
            total += reward

        returns.append(total)
        lengths.append(info["step"])
        scores.append(info["score"])
        waves.append(info["wave"])
        if verbose:
            print(f"Episode {episode + 1}/{n_episodes}: Return = {total:.2f}, "
                  f"Score = {info['score']}, Wave = {info['wave']}, Steps = {info['step']}")

    env.close()

    return {
        "mean_reward": float(np.mean(returns)),
        "std_reward": float(np.std(returns)),
        "mean_length": float(np.mean(lengths)),
        "mean_score": float(np.mean(scores)),
        "max_wave": int(np.max(waves)),
        "episode_rewards": returns,
        "episode_scores": scores,
    }


if __name__ == "__main__":
    run_random_episode(render=True)
