from __future__ import annotations

import numpy as np

from game.invaders.utils import clamp, jitter_color, make_rng, rects_overlap, to_rgba255


def test_clamp_inside_and_outside_bounds() -> None:
    assert clamp(5.0, 0.0, 10.0) == 5.0
    assert clamp(-1.0, 0.0, 10.0) == 0.0
    assert clamp(11.0, 0.0, 10.0) == 10.0


def test_rects_overlap_requires_strict_overlap() -> None:
    assert rects_overlap(0, 0, 10, 10, 5, 5, 10, 10)
    # touching edges only
    assert not rects_overlap(0, 0, 10, 10, 10, 0, 10, 10)
    assert not rects_overlap(0, 0, 10, 10, 0, 10, 10, 10)
    # separated on one axis is enough
    assert not rects_overlap(0, 0, 10, 10, 5, 20, 10, 10)


def test_rects_overlap_contained_rect() -> None:
    assert rects_overlap(0, 0, 100, 100, 40, 40, 4, 10)
    assert rects_overlap(40, 40, 4, 10, 0, 0, 100, 100)


def test_jitter_color_stays_within_offset_and_forces_alpha() -> None:
    rng = make_rng(0)
    base = (0.5, 0.5, 0.5, 0.3)
    for _ in range(100):
        r, g, b, a = jitter_color(base, rng, 0.2)
        for c in (r, g, b):
            assert 0.3 - 1e-9 <= c <= 0.7 + 1e-9
        assert a == 1.0


def test_jitter_color_is_not_clamped() -> None:
    rng = make_rng(1)
    values = [jitter_color((1.0, 1.0, 1.0, 1.0), rng, 0.2)[0] for _ in range(200)]
    assert max(values) > 1.0


def test_to_rgba255_clamps_and_overrides_alpha() -> None:
    assert to_rgba255((1.2, -0.1, 0.5, 1.0)) == (255, 0, 128, 255)
    assert to_rgba255((0.0, 0.0, 0.0, 1.0), alpha=0.5) == (0, 0, 0, 128)
    assert to_rgba255((0.0, 0.0, 0.0, 1.0), alpha=1.4)[3] == 255


def test_make_rng_is_reproducible() -> None:
    a = make_rng(42).uniform(0, 1, size=5)
    b = make_rng(42).uniform(0, 1, size=5)
    assert np.array_equal(a, b)
