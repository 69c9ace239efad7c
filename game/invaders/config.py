"""
Game configuration for Space Invaders
Gameplay constants are fixed; only the window/env/reward dicts are meant to be tweaked.
"""

# ==============================================================================
# COLOURS (RGBA floats in [0, 1])
# ==============================================================================

RED = (0.90, 0.16, 0.22, 1.0)
YELLOW = (0.99, 0.98, 0.00, 1.0)
BLUE = (0.00, 0.47, 0.95, 1.0)
GREEN = (0.00, 0.89, 0.19, 1.0)
WHITE = (1.0, 1.0, 1.0, 1.0)
BLACK = (0.0, 0.0, 0.0, 1.0)

# ==============================================================================
# PLAYER
# ==============================================================================

PLAYER_SIZE = (50.0, 30.0)
PLAYER_SPEED = 300.0  # px/s
PLAYER_BOTTOM_MARGIN = 50.0  # distance from the bottom of the screen to player.y
START_LIVES = 3

# ==============================================================================
# BULLETS
# ==============================================================================

BULLET_SIZE = (4.0, 10.0)
PLAYER_BULLET_SPEED = 500.0  # upward
ENEMY_BULLET_SPEED = 200.0  # downward
BULLET_CULL_MARGIN = 10.0

# ==============================================================================
# ENEMY FORMATION
# ==============================================================================

ENEMY_ROWS = 5
ENEMY_COLS = 10
ENEMY_SIZE = (40.0, 30.0)
GRID_ORIGIN = (50.0, 50.0)
GRID_SPACING = (70.0, 50.0)
ENEMY_BASE_SPEED = 50.0
ENEMY_SPEED_PER_WAVE = 10.0
ENEMY_STEP_DOWN = 30.0
ENEMY_FIRE_INTERVAL = 2.0  # seconds, compared against an accumulated timer

WAVE_BONUS = 100

# ==============================================================================
# PARTICLES
# ==============================================================================

EXPLOSION_PARTICLES = 10
PARTICLE_SPEED_RANGE = (50.0, 150.0)
PARTICLE_LIFETIME_RANGE = (0.5, 1.5)
PARTICLE_MAX_LIFETIME = 1.0  # reference for fade alpha only
PARTICLE_COLOR_JITTER = 0.2
PARTICLE_DRAG = 0.98  # applied once per tick, not scaled by dt
PARTICLE_RADIUS = 2.0

# ==============================================================================
# HOSTS
# ==============================================================================

WINDOW_CONFIG = {
    "width": 800,
    "height": 600,
    "title": "Space Invaders",
    "update_rate": 1 / 60,
}

ENV_CONFIG = {
    "width": 800,
    "height": 600,
    "dt": 1 / 60,
    "max_steps": 3600,  # 60s at 60 FPS
    "k_bullets": 3,
}

# Default reward shaping for InvadersEnv
REWARD_CONFIG = {
    "name": "baseline",
    "R_SCORE": 0.01,     # per score point (Basic kill = 0.1)
    "R_LIFE": 1.0,       # penalty per life lost
    "R_WAVE": 1.0,       # bonus per cleared wave (on top of the score bonus)
    "R_SHOT": 0.005,     # small cost per shot fired
    "R_TIME": 0.0005,    # per-step time penalty
    "R_GAME_OVER": 5.0,  # terminal penalty
}
