"""
hand_signal.py — Landmarks → Hand Signal
==========================================
Turns 21 MediaPipe hand landmarks into the camera/scene control signal.

Pipeline:
    1. Extract (x, y, z) for each of the 21 landmarks
    2. Palm centre = mean of wrist + four finger MCPs → (x, y)
    3. Hand scale = thumb-index spread / palm size, clamped
    4. EMA smoothing across frames (HandSignalFilter)
"""

import numpy as np

from config import (EMA_ALPHA, HAND_SCALE_GAIN,
                    HAND_SCALE_MIN, HAND_SCALE_MAX, HAND_SCALE_DEFAULT)

WRIST = 0
THUMB_TIP = 4
INDEX_TIP = 8
MIDDLE_MCP = 9
PALM_POINTS = (0, 5, 9, 13, 17)


class HandSample:
    """Instantaneous gesture signal: normalised position, detection flag, scale."""

    __slots__ = ("x", "y", "detected", "scale")

    def __init__(self, x=0.5, y=0.5, detected=False, scale=HAND_SCALE_DEFAULT):
        self.x = x
        self.y = y
        self.detected = detected
        self.scale = scale

    def __repr__(self):
        return (f"HandSample(x={self.x:.2f}, y={self.y:.2f}, "
                f"detected={self.detected}, scale={self.scale:.2f})")


class HandFrame:
    """What the gesture process sends per frame: the signal + stable gesture."""

    __slots__ = ("sample", "gesture", "confidence")

    def __init__(self, sample, gesture, confidence):
        self.sample = sample
        self.gesture = gesture
        self.confidence = confidence


def clamp_scale(scale):
    return max(HAND_SCALE_MIN, min(HAND_SCALE_MAX, float(scale)))


def landmarks_to_array(hand_landmarks):
    """
    Convert landmarks with .x, .y, .z attributes to a (21, 3) float32 array.
    """
    return np.array([[lm.x, lm.y, getattr(lm, "z", 0.0)] for lm in hand_landmarks],
                    dtype=np.float32)


def palm_center(coords):
    """Normalised (x, y) of the palm, clipped to [0, 1]."""
    cx, cy = coords[list(PALM_POINTS), :2].mean(axis=0)
    return float(np.clip(cx, 0.0, 1.0)), float(np.clip(cy, 0.0, 1.0))


def hand_scale(coords):
    """
    Spread of thumb and index tips relative to palm size.
    Wider spread → larger scale → camera zooms in.
    """
    palm = np.linalg.norm(coords[MIDDLE_MCP, :2] - coords[WRIST, :2])
    if palm < 1e-6:
        return HAND_SCALE_DEFAULT
    spread = np.linalg.norm(coords[INDEX_TIP, :2] - coords[THUMB_TIP, :2])
    return clamp_scale(spread / palm * HAND_SCALE_GAIN)


def sample_from_landmarks(hand_landmarks):
    coords = landmarks_to_array(hand_landmarks)
    x, y = palm_center(coords)
    return HandSample(x, y, True, hand_scale(coords))


class HandSignalFilter:
    """
    Exponential moving average over x, y and scale.

    While the hand is lost the last smoothed position is kept and
    reported with detected=False; the next detection restarts the average.
    """

    def __init__(self, alpha=EMA_ALPHA):
        self.alpha = alpha
        self.current = HandSample()
        self._primed = False

    def reset(self):
        self._primed = False
        self.current = HandSample(self.current.x, self.current.y,
                                  False, self.current.scale)

    def update(self, sample):
        if not sample.detected:
            self.reset()
            return self.current

        if not self._primed:
            self.current = HandSample(sample.x, sample.y, True, sample.scale)
            self._primed = True
            return self.current

        a = self.alpha
        prev = self.current
        self.current = HandSample(
            prev.x + a * (sample.x - prev.x),
            prev.y + a * (sample.y - prev.y),
            True,
            prev.scale + a * (sample.scale - prev.scale),
        )
        return self.current
