"""
Utility functions for game mechanics
"""

from __future__ import annotations
from typing import Optional, Tuple

import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def rects_overlap(
    x1: float, y1: float, w1: float, h1: float,
    x2: float, y2: float, w2: float, h2: float,
) -> bool:
    """Strict AABB overlap; rectangles are (top-left, size). Touching edges don't count."""
    return (
        x1 < x2 + w2
        and x1 + w1 > x2
        and y1 < y2 + h2
        and y1 + h1 > y2
    )


def jitter_color(
    color: Tuple[float, float, float, float],
    rng: np.random.Generator,
    amount: float,
) -> Tuple[float, float, float, float]:
    """Offset each RGB channel by U[-amount, amount]; alpha forced to 1. No clamping."""
    r, g, b = (c + float(rng.uniform(-amount, amount)) for c in color[:3])
    return (r, g, b, 1.0)


def to_rgba255(
    color: Tuple[float, float, float, float],
    alpha: Optional[float] = None,
) -> Tuple[int, int, int, int]:
    """Float RGBA -> 0..255 ints, clamping out-of-range channels"""
    a = color[3] if alpha is None else alpha
    return tuple(int(round(clamp(c, 0.0, 1.0) * 255)) for c in (*color[:3], a))


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the generator the simulation draws from (seeded for reproducibility)"""
    return np.random.default_rng(seed)
