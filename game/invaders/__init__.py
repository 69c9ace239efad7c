"""Space Invaders - simulation core, Gymnasium env (arcade window lives in .window)"""

from .entities import Bullet, Controls, Enemy, EnemyType, Owner, Particle, Player
from .state import GameState
from .invaders_env import InvadersEnv, run_random_episode

__all__ = [
    'GameState', 'InvadersEnv', 'run_random_episode',
    'Player', 'Enemy', 'EnemyType', 'Bullet', 'Owner', 'Particle', 'Controls',
]
