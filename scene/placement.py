"""
placement.py — Placard Placement Generator
=============================================
Two target layouts per placard:

    formed — golden-angle spiral on the tree cone (20%–80% of its height)
    chaos  — loose ring scattered in front of the camera

plus a per-placard easing speed. Random draws happen once per
placard at creation; PlacementCache only regenerates when the
source list changes.
"""

import math

import numpy as np

from config import (TREE_HEIGHT, TREE_MAX_RADIUS, PLACARD_RADIUS_OFFSET,
                    GOLDEN_ANGLE, CHAOS_BASE_Y, CHAOS_BASE_Z, CHAOS_DISTANCE,
                    CHAOS_HEIGHT_SPREAD, CHAOS_X_STRETCH, CHAOS_Z_SQUASH,
                    SPEED_RANGE)


class SceneObject:
    """One placard's immutable targets."""

    __slots__ = ("id", "source", "formed_position", "chaos_position", "speed")

    def __init__(self, id, source, formed_position, chaos_position, speed):
        self.id = id
        self.source = source
        self.formed_position = _frozen(formed_position)
        self.chaos_position = _frozen(chaos_position)
        self.speed = speed

    def target(self, formed):
        return self.formed_position if formed else self.chaos_position

    def __repr__(self):
        return f"SceneObject(id={self.id}, source={self.source!r}, speed={self.speed:.2f})"


def _frozen(vec):
    arr = np.array(vec, dtype=np.float64)
    arr.flags.writeable = False
    return arr


def formed_position(i, count):
    """Golden-angle spiral on the cone surface, just outside the foliage."""
    h = 0.2 + (i / count) * 0.6
    r = TREE_MAX_RADIUS * (1.0 - h) + PLACARD_RADIUS_OFFSET
    theta = i * GOLDEN_ANGLE
    return (r * math.cos(theta), h * TREE_HEIGHT, r * math.sin(theta))


def chaos_position(i, count, rng):
    """Even angles, random radius/height; stretched in x, squashed in z."""
    angle = (i / count) * 2.0 * math.pi
    dist = rng.uniform(*CHAOS_DISTANCE)
    dy = (rng.random() - 0.5) * CHAOS_HEIGHT_SPREAD
    return (
        dist * math.cos(angle) * CHAOS_X_STRETCH,
        CHAOS_BASE_Y + dy,
        CHAOS_BASE_Z + dist * math.sin(angle) * CHAOS_Z_SQUASH,
    )


def _as_sources(sources):
    """An int count stands for that many source-less placards."""
    if isinstance(sources, int):
        return [None] * max(0, sources)
    return list(sources)


def generate_placements(sources, rng=None):
    """
    Build one SceneObject per source.

    Args:
        sources: sequence of photo sources, or an int count
        rng:     numpy Generator (fresh one if None)

    Returns:
        list[SceneObject]; empty for zero sources
    """
    sources = _as_sources(sources)
    count = len(sources)
    if count == 0:
        return []

    rng = rng if rng is not None else np.random.default_rng()
    objects = []
    for i, src in enumerate(sources):
        chaos = chaos_position(i, count, rng)
        speed = rng.uniform(*SPEED_RANGE)
        objects.append(SceneObject(i, src, formed_position(i, count), chaos, speed))
    return objects


class PlacementCache:
    """Memoizes generate_placements on the source list."""

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self._key = None
        self._objects = []

    def get(self, sources):
        key = tuple(_as_sources(sources))
        if key != self._key:
            self._key = key
            self._objects = generate_placements(list(key), self.rng)
        return self._objects
