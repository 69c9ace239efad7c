"""
Training configuration for the Space Invaders environment
Reward shaping variants, algorithm hyperparameters and training settings
"""

from game.invaders.config import ENV_CONFIG as GAME_ENV_CONFIG, REWARD_CONFIG

# Environment parameters (rendering during training is far too slow)
ENV_CONFIG = dict(GAME_ENV_CONFIG)

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# Each variant overrides game.invaders.config.REWARD_CONFIG
# ==============================================================================

REWARD_CONFIG_BASELINE = dict(
    REWARD_CONFIG,
    description="Score-driven, moderate penalties",
)

REWARD_CONFIG_SURVIVAL = dict(
    REWARD_CONFIG,
    name="survival",
    description="Dodge first - heavy life/game-over penalties",
    R_SCORE=0.005,
    R_LIFE=3.0,        # MUCH higher life penalty
    R_WAVE=0.5,
    R_TIME=0.0,        # No time penalty - surviving is the point
    R_GAME_OVER=10.0,
)

REWARD_CONFIG_AGGRESSIVE = dict(
    REWARD_CONFIG,
    name="aggressive",
    description="Clear waves fast - higher score reward, free shots",
    R_SCORE=0.02,
    R_LIFE=0.5,
    R_WAVE=3.0,        # MUCH higher wave bonus
    R_SHOT=0.0,        # Shooting is free
    R_TIME=0.001,
    R_GAME_OVER=3.0,
)

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "survival": REWARD_CONFIG_SURVIVAL,
    "aggressive": REWARD_CONFIG_AGGRESSIVE,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 1024,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}


def get_reward_config(name: str) -> dict:
    """Look up a reward shaping config by name"""
    if name not in REWARD_CONFIGS:
        raise ValueError(f"Unknown reward config: {name} (choose from {', '.join(REWARD_CONFIGS)})")
    return REWARD_CONFIGS[name]
