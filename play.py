"""
Play Space Invaders, or watch a random agent play it.

    python play.py                       # interactive window
    python play.py --random-agent 5      # 5 headless random-agent episodes
    python play.py --random-agent 1 --render
"""

import argparse
import logging

from game.invaders import run_random_episode
from game.invaders.config import ENV_CONFIG, WINDOW_CONFIG
from game.invaders.invaders_env import evaluate_random_policy


def main():
    parser = argparse.ArgumentParser(description="Space Invaders")
    parser.add_argument("--width", type=int, default=WINDOW_CONFIG["width"],
                        help=f"Window width (default: {WINDOW_CONFIG['width']})")
    parser.add_argument("--height", type=int, default=WINDOW_CONFIG["height"],
                        help=f"Window height (default: {WINDOW_CONFIG['height']})")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed (default: unseeded)")
    parser.add_argument("--random-agent", type=int, default=0, metavar="N",
                        help="Run N random-agent episodes instead of playing")
    parser.add_argument("--render", action="store_true",
                        help="Show random-agent episodes in a window")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    args = parser.parse_args()

    if args.width <= 0 or args.height <= 0:
        parser.error("--width and --height must be positive")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.random_agent > 0 and args.render:
        for i in range(args.random_agent):
            run_random_episode(render=True, seed=args.seed + i if args.seed is not None else None)
        return

    if args.random_agent > 0:
        env_kwargs = dict(ENV_CONFIG, width=args.width, height=args.height)
        results = evaluate_random_policy(args.random_agent, seed=args.seed, **env_kwargs)
        print("\n" + "=" * 50)
        print(f"Mean Return: {results['mean_reward']:.2f} ± {results['std_reward']:.2f}")
        print(f"Mean Score: {results['mean_score']:.1f}  (best wave: {results['max_wave']})")
        print("=" * 50)
        return

    # arcade is only needed for the interactive window
    from game.invaders.window import play
    play(
        width=args.width,
        height=args.height,
        title=WINDOW_CONFIG["title"],
        update_rate=WINDOW_CONFIG["update_rate"],
        seed=args.seed,
    )


if __name__ == "__main__":
    main()
