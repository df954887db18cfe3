"""
scene.py — Frame-Driven Scene State
=====================================
Everything the renderer reads, advanced once per tick:

    hand frame ─┬─> ModeManager ──────────────┐
                └─> OrbitCameraController ──> camera pose
    photo list ───> PlacementCache ──> PlacardAnimator ──> placard transforms
    mode ─────────> ParticleField (foliage, ornaments)
"""

import numpy as np

from camera.orbit_controller import OrbitCameraController
from core.mode_manager import ModeManager
from gesture.hand_signal import HandSample
from scene.foliage import ParticleField
from scene.placard_animator import PlacardAnimator
from scene.placement import PlacementCache


class TreeScene:

    def __init__(self, seed=None, particles=True, photo_library=None):
        self.rng = np.random.default_rng(seed)
        self.mode_manager = ModeManager()
        self.camera = OrbitCameraController()
        self.hand = HandSample()
        self.placements = PlacementCache(self.rng)
        self.animator = PlacardAnimator([])
        self._objects = []
        self.photos = photo_library
        self.elapsed = 0.0
        self.frames = 0

        self.foliage = ParticleField.foliage(self.rng) if particles else None
        self.ornaments = ParticleField.ornaments(self.rng) if particles else None

    @property
    def mode(self):
        return self.mode_manager.mode

    @property
    def pose(self):
        return self.camera.pose

    def set_sources(self, sources):
        """Rebuild placards only when the source list actually changed."""
        objects = self.placements.get(sources)
        if objects is not self._objects:
            self._objects = objects
            self.animator = PlacardAnimator.from_objects(objects, self.rng,
                                                   previous=self.animator)
        if self.photos is not None:
            self.photos.sync(sources)
        return objects

    def apply_hand_frame(self, frame):
        self.hand = frame.sample
        self.mode_manager.handle_gesture(frame.gesture, frame.confidence)

    def tick(self, delta):
        delta = max(0.0, delta)
        self.elapsed += delta
        self.frames += 1

        pose = self.camera.update(delta, self.hand)
        self.animator.update(delta, self.elapsed, self.mode,
                             pose.position, self.hand.scale)
        if self.foliage is not None:
            self.foliage.update(delta, self.mode)
            self.ornaments.update(delta, self.mode)
        return pose

    def get_status(self):
        return {
            **self.mode_manager.get_status(),
            "hand": "detected" if self.hand.detected else "none",
            "hand_scale": self.hand.scale,
            "placards": len(self.animator),
            "settle": self.animator.max_distance_to_target(self.mode),
            "camera": self.camera.get_status(),
            "frames": self.frames,
        }
