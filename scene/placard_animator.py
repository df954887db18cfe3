"""
placard_animator.py — Per-Placard Transform Animation
========================================================
Each frame, every placard:

    1. eases toward its formed or chaos target at its own speed
    2. turns to face the camera (faster while scattered)
    3. sways (formed) or wobbles (chaos) around that facing
    4. scales with the hand, like the camera zoom

Rendered transforms live here; the SceneObject targets never change.
"""

import math

import numpy as np

from config import (SCENE_OFFSET, FORMED_TURN_SPEED, CHAOS_TURN_SPEED,
                    PHASE_RANGE, PLACARD_SCALE_MIN, PLACARD_SCALE_MAX,
                    SWAY_FREQ, SWAY_AMP, TILT_FREQ, TILT_AMP,
                    WOBBLE_X_FREQ, WOBBLE_X_AMP, WOBBLE_Z_FREQ, WOBBLE_Z_AMP)
from camera.orbit_controller import scale_to_range
from core.mode_manager import TreeMode
from scene.transforms import (identity_quat, look_at_quat, slerp,
                              euler_from_quat, quat_from_euler)


def placard_scale(hand_scale):
    """Same affine map as the camera distance, onto [0.8, 2.0]."""
    return scale_to_range(hand_scale, PLACARD_SCALE_MIN, PLACARD_SCALE_MAX)


def secondary_motion(mode, elapsed, phase):
    """(dx, dz) Euler offsets for the ambient sway / wobble."""
    if mode is TreeMode.FORMED:
        sway = math.sin(elapsed * SWAY_FREQ + phase) * SWAY_AMP
        tilt = math.cos(elapsed * TILT_FREQ + phase) * TILT_AMP
        return tilt, sway
    wobble_x = math.sin(elapsed * WOBBLE_X_FREQ + phase) * WOBBLE_X_AMP
    wobble_z = math.cos(elapsed * WOBBLE_Z_FREQ + phase) * WOBBLE_Z_AMP
    return wobble_x, wobble_z


class PlacardTransform:
    """Rendered transform of one placard (scene-local)."""

    __slots__ = ("obj", "position", "facing", "quaternion", "scale", "phase")

    def __init__(self, obj, phase, position=None):
        self.obj = obj
        self.phase = phase
        self.position = (np.zeros(3) if position is None
                         else np.array(position, dtype=np.float64))
        self.facing = identity_quat()       # billboard orientation, eased
        self.quaternion = identity_quat()   # facing + sway, rendered
        self.scale = 1.0

    def distance_to_target(self, mode):
        target = self.obj.target(mode is TreeMode.FORMED)
        return float(np.linalg.norm(target - self.position))


class PlacardAnimator:

    def __init__(self, transforms, scene_offset=SCENE_OFFSET):
        self.transforms = transforms
        self.scene_offset = np.array(scene_offset, dtype=np.float64)

    @classmethod
    def from_objects(cls, objects, rng=None, previous=None):
        """
        One transform per SceneObject; phases drawn here, once.

        With a previous animator, placards at the same index keep their
        position, facing and phase and ease on to their new targets.
        Only added indices start fresh.
        """
        rng = rng if rng is not None else np.random.default_rng()
        old = previous.transforms if previous is not None else []
        transforms = []
        for i, obj in enumerate(objects):
            if i < len(old):
                tf = PlacardTransform(obj, old[i].phase, position=old[i].position)
                tf.facing = old[i].facing.copy()
                tf.quaternion = old[i].quaternion.copy()
                tf.scale = old[i].scale
            else:
                tf = PlacardTransform(obj, rng.random() * PHASE_RANGE)
            transforms.append(tf)
        return cls(transforms)

    def __len__(self):
        return len(self.transforms)

    def __iter__(self):
        return iter(self.transforms)

    def update(self, delta, elapsed, mode, camera_position, hand_scale):
        """
        Advance every placard one frame.

        Args:
            delta:           seconds since the previous frame
            elapsed:         seconds since start (drives sway phase)
            mode:            TreeMode
            camera_position: camera world position
            hand_scale:      current HandScale
        """
        delta = max(0.0, delta)
        formed = mode is TreeMode.FORMED
        # placards live in the tree group; bring the camera into its frame
        eye = np.asarray(camera_position, dtype=np.float64) - self.scene_offset
        turn = min(delta * (FORMED_TURN_SPEED if formed else CHAOS_TURN_SPEED), 1.0)
        scale = placard_scale(hand_scale)

        for tf in self.transforms:
            target = tf.obj.target(formed)
            step = min(delta * tf.obj.speed, 1.0)
            tf.position = tf.position + (target - tf.position) * step
            tf.scale = scale

            tf.facing = slerp(tf.facing, look_at_quat(tf.position, eye), turn)
            ex, ey, ez = euler_from_quat(tf.facing)
            dx, dz = secondary_motion(mode, elapsed, tf.phase)
            tf.quaternion = quat_from_euler((ex + dx, ey, ez + dz))

    def max_distance_to_target(self, mode):
        if not self.transforms:
            return 0.0
        return max(tf.distance_to_target(mode) for tf in self.transforms)
