"""
orbit_controller.py — Hand-Driven Orbit Camera
=================================================
Maps the hand signal to a smoothed orbit around the tree.

    x     → azimuth   (horizontal swing, ±1.5π over the full sweep)
    y     → polar     (vertical tilt, clamped between π/4 and π/1.8)
    scale → distance  (wider hand = closer, 30 → 8)

No hand → the camera holds where it is.
"""

import math

import numpy as np

from config import (CAMERA_TARGET_Y, CAMERA_START_DISTANCE, AZIMUTH_RANGE,
                    POLAR_OFFSET, POLAR_SENSITIVITY, MIN_POLAR, MAX_POLAR,
                    MIN_DISTANCE, MAX_DISTANCE, ANGLE_LERP_SPEED,
                    DISTANCE_LERP_SPEED, HAND_SCALE_MIN, HAND_SCALE_MAX)


def clamp(val, lo, hi):
    return max(lo, min(hi, val))


def wrap_angle(angle):
    """Wrap into [-π, π)."""
    return (angle + math.pi) % (2.0 * math.pi) - math.pi


def shortest_angle_diff(current, target):
    """Signed difference target - current along the short way round."""
    return wrap_angle(target - current)


def scale_to_range(scale, lo, hi):
    """Affine map of the clamped hand scale onto [lo, hi]."""
    s = clamp(scale, HAND_SCALE_MIN, HAND_SCALE_MAX)
    return lo + (s - HAND_SCALE_MIN) / (HAND_SCALE_MAX - HAND_SCALE_MIN) * (hi - lo)


def target_distance(scale):
    """Larger hand scale → smaller distance."""
    return scale_to_range(scale, MAX_DISTANCE, MIN_DISTANCE)


def target_azimuth(x):
    return (clamp(x, 0.0, 1.0) - 0.5) * math.pi * AZIMUTH_RANGE


def target_polar(y):
    adjusted = clamp((y - POLAR_OFFSET) * POLAR_SENSITIVITY, 0.0, 1.0)
    return MIN_POLAR + adjusted * (MAX_POLAR - MIN_POLAR)


class CameraOrbitState:
    __slots__ = ("azimuth", "polar", "distance", "target_height")

    def __init__(self, azimuth=0.0, polar=math.pi / 2,
                 distance=CAMERA_START_DISTANCE, target_height=CAMERA_TARGET_Y):
        self.azimuth = azimuth
        self.polar = clamp(polar, MIN_POLAR, MAX_POLAR)
        self.distance = clamp(distance, MIN_DISTANCE, MAX_DISTANCE)
        self.target_height = target_height

    def __repr__(self):
        return (f"CameraOrbitState(az={self.azimuth:.3f}, "
                f"polar={self.polar:.3f}, dist={self.distance:.2f})")


class CameraPose:
    """Camera world position and look-at target."""

    __slots__ = ("position", "target")

    def __init__(self, position, target):
        self.position = position
        self.target = target

    def __repr__(self):
        p, t = self.position, self.target
        return (f"CameraPose(pos=({p[0]:.2f}, {p[1]:.2f}, {p[2]:.2f}), "
                f"target=({t[0]:.2f}, {t[1]:.2f}, {t[2]:.2f}))")


def pose_from_state(state):
    """Spherical (distance, polar, azimuth) around the focal point → pose."""
    d, phi, theta = state.distance, state.polar, state.azimuth
    position = np.array([
        d * math.sin(phi) * math.sin(theta),
        state.target_height + d * math.cos(phi),
        d * math.sin(phi) * math.cos(theta),
    ])
    target = np.array([0.0, state.target_height, 0.0])
    return CameraPose(position, target)


class OrbitCameraController:
    """
    Eases the orbit state toward hand-driven targets once per frame.

    Targets are clamped before easing and the easing step is capped at 1,
    so polar and distance never leave their ranges.
    """

    def __init__(self, state=None,
                 angle_speed=ANGLE_LERP_SPEED, distance_speed=DISTANCE_LERP_SPEED):
        self.state = state or CameraOrbitState()
        self.angle_speed = angle_speed
        self.distance_speed = distance_speed
        self.pose = pose_from_state(self.state)
        self.last_step = 0.0    # azimuth change applied on the last update

    def update(self, delta, sample):
        """
        Advance one frame.

        Args:
            delta:  seconds since the previous frame
            sample: HandSample (x, y, detected, scale)

        Returns:
            CameraPose — the same object as last frame while no hand is seen
        """
        if not sample.detected:
            self.last_step = 0.0
            return self.pose

        delta = max(0.0, delta)
        st = self.state
        t_angle = min(delta * self.angle_speed, 1.0)
        t_dist = min(delta * self.distance_speed, 1.0)

        diff = shortest_angle_diff(st.azimuth, target_azimuth(sample.x))
        self.last_step = diff * t_angle
        st.azimuth = wrap_angle(st.azimuth + self.last_step)

        polar = st.polar + (target_polar(sample.y) - st.polar) * t_angle
        st.polar = clamp(polar, MIN_POLAR, MAX_POLAR)

        dist = st.distance + (target_distance(sample.scale) - st.distance) * t_dist
        st.distance = clamp(dist, MIN_DISTANCE, MAX_DISTANCE)

        self.pose = pose_from_state(st)
        return self.pose

    def get_status(self):
        st = self.state
        return {
            "azimuth": st.azimuth,
            "polar": st.polar,
            "distance": st.distance,
            "position": tuple(float(v) for v in self.pose.position),
        }
