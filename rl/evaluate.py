"""
Evaluation script for trained Space Invaders agents
"""

import time
import argparse
from typing import Optional

import numpy as np

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from game.invaders import InvadersEnv
from game.invaders.invaders_env import evaluate_random_policy
from rl.configs.invaders_config import ENV_CONFIG
from rl.train import MultiDiscreteToDiscreteWrapper

ALGORITHMS = {"ppo": PPO, "dqn": DQN}


def evaluate_model(
    model_path: str,
    algo: str = "ppo",
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
):
    """
    Evaluate a trained model

    Args:
        model_path: Path to the saved model
        algo: Algorithm used ('ppo' or 'dqn')
        n_episodes: Number of episodes to evaluate
        render: Whether to render the environment
        seed: Random seed for evaluation
        vec_normalize_path: Path to VecNormalize stats (for PPO)
    """
    if algo not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm: {algo}")
    model = ALGORITHMS[algo].load(model_path)

    # Keep a handle on the raw env: its window and game state sit below the wrappers
    game_env = InvadersEnv(render_mode="human" if render else None, **ENV_CONFIG)
    policy_env = MultiDiscreteToDiscreteWrapper(game_env) if algo == "dqn" else game_env

    env = DummyVecEnv([lambda: policy_env])
    if seed is not None:
        env.seed(seed)
    if vec_normalize_path:
        env = VecNormalize.load(vec_normalize_path, env)
        env.training = False
        env.norm_reward = False

    rewards, lengths, scores, waves = [], [], [], []

    for episode in range(n_episodes):
        obs = env.reset()
        total_reward = 0.0
        steps = 0
        done = [False]

        while not done[0]:
            action, _ = model.predict(obs, deterministic=True)
            obs, reward, done, infos = env.step(action)
            total_reward += float(reward[0])
            steps += 1

            if render and game_env._window:
                game_env._window.dispatch_events()
                game_env._window.flip()
                time.sleep(game_env.dt)

        # DummyVecEnv auto-resets, but infos still belong to the finished episode
        final = infos[0]
        rewards.append(total_reward)
        lengths.append(steps)
        scores.append(final.get("score", 0))
        waves.append(final.get("wave", 1))

        print(f"Episode {episode + 1}/{n_episodes}: Reward = {total_reward:.2f}, "
              f"Length = {steps}, Score = {scores[-1]}, Wave = {waves[-1]}")

    env.close()

    results = {
        "mean_reward": float(np.mean(rewards)),
        "std_reward": float(np.std(rewards)),
        "mean_length": float(np.mean(lengths)),
        "mean_score": float(np.mean(scores)),
        "max_wave": int(np.max(waves)),
        "episode_rewards": rewards,
        "episode_scores": scores,
    }
    _print_results(f"Evaluation Results ({n_episodes} episodes)", results)
    return results


def _print_results(title: str, results: dict):
    print("\n" + "="*50)
    print(f"{title}:")
    print(f"Mean Reward: {results['mean_reward']:.2f} ± {results['std_reward']:.2f}")
    print(f"Mean Episode Length: {results['mean_length']:.1f}")
    print(f"Mean Score: {results['mean_score']:.1f}  (best wave: {results['max_wave']})")
    print("="*50)


def main():
    parser = argparse.ArgumentParser(description="Evaluate trained Space Invaders agent")
    parser.add_argument("model_path", type=str, help="Path to the trained model")
    parser.add_argument("--algo", type=str, default="ppo", choices=sorted(ALGORITHMS),
                        help="Algorithm used to train the model (default: ppo)")
    parser.add_argument("--n-episodes", type=int, default=10,
                        help="Number of evaluation episodes (default: 10)")
    parser.add_argument("--no-render", action="store_true", help="Disable rendering")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--vec-normalize", type=str, default=None,
                        help="Path to VecNormalize stats file (for PPO)")
    parser.add_argument("--compare-random", action="store_true",
                        help="Also evaluate random policy for comparison")
    args = parser.parse_args()

    results = evaluate_model(
        model_path=args.model_path,
        algo=args.algo,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        vec_normalize_path=args.vec_normalize,
    )

    if args.compare_random:
        print("\nEvaluating random policy baseline...")
        baseline = evaluate_random_policy(args.n_episodes, seed=args.seed, verbose=False, **ENV_CONFIG)
        _print_results(f"Random Policy Results ({args.n_episodes} episodes)", baseline)
        print(f"\nImprovement over random: {results['mean_reward'] - baseline['mean_reward']:.2f}")


if __name__ == "__main__":
    main()
