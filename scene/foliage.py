"""
foliage.py — Dual-Mode Particle Cloud
=======================================
Foliage needles and ornaments. Every particle has a cone target
(formed) and a sphere target (chaos), both drawn once; the whole
cloud eases toward the active set in one vectorized step per frame.
"""

import numpy as np

from config import (TREE_HEIGHT, TREE_MAX_RADIUS,
                    FOLIAGE_COUNT, FOLIAGE_CHAOS_RADIUS, FOLIAGE_SPEED_RANGE,
                    ORNAMENT_COUNT, ORNAMENT_CHAOS_RADIUS, ORNAMENT_SPEED_RANGE)
from core.mode_manager import TreeMode


def cone_points(n, rng, height=TREE_HEIGHT, radius=TREE_MAX_RADIUS, surface=False):
    """
    Points in a cone standing on y=0. More points low down, where the
    cone is wide (area-weighted height); surface=True pins them to the skin.
    """
    h = 1.0 - np.sqrt(rng.random(n))
    r_max = radius * (1.0 - h)
    r = r_max if surface else r_max * np.sqrt(rng.random(n))
    theta = rng.random(n) * 2.0 * np.pi
    return np.stack([r * np.cos(theta), h * height, r * np.sin(theta)], axis=-1)


def sphere_points(n, rng, radius, center=(0.0, TREE_HEIGHT / 2, 0.0)):
    """Uniform points inside a sphere."""
    v = rng.normal(size=(n, 3))
    v /= np.linalg.norm(v, axis=1, keepdims=True)
    r = radius * np.cbrt(rng.random(n))
    return v * r[:, None] + np.asarray(center)


class ParticleField:

    def __init__(self, formed, chaos, speeds):
        self.formed = formed
        self.chaos = chaos
        self.speeds = speeds
        self.positions = chaos.copy()

    @classmethod
    def foliage(cls, rng, count=FOLIAGE_COUNT):
        return cls(cone_points(count, rng),
                   sphere_points(count, rng, FOLIAGE_CHAOS_RADIUS),
                   rng.uniform(*FOLIAGE_SPEED_RANGE, size=count))

    @classmethod
    def ornaments(cls, rng, count=ORNAMENT_COUNT):
        return cls(cone_points(count, rng, surface=True),
                   sphere_points(count, rng, ORNAMENT_CHAOS_RADIUS),
                   rng.uniform(*ORNAMENT_SPEED_RANGE, size=count))

    def __len__(self):
        return len(self.positions)

    def update(self, delta, mode):
        target = self.formed if mode is TreeMode.FORMED else self.chaos
        step = np.minimum(max(0.0, delta) * self.speeds, 1.0)[:, None]
        self.positions += (target - self.positions) * step
