import os
import sys

import numpy as np
import pytest

# Project root on sys.path, as main.py does for its local packages
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class LM:
    """Stand-in for a MediaPipe NormalizedLandmark."""

    def __init__(self, x, y, z=0.0):
        self.x = x
        self.y = y
        self.z = z


# Finger columns (x) and joint rows (y) for a right hand held upright.
_FINGER_X = {"index": 0.44, "middle": 0.50, "ring": 0.56, "pinky": 0.62}
_FINGER_BASE = {"index": 5, "middle": 9, "ring": 13, "pinky": 17}


def make_hand(extended=("index", "middle", "ring", "pinky"), thumb=True, shift=(0.0, 0.0)):
    """
    21 landmarks: wrist at (0.5, 0.9), MCP row at y=0.7.
    Extended fingers reach up to y=0.45; curled ones fold back to y=0.75.
    """
    dx, dy = shift
    lms = [None] * 21
    lms[0] = LM(0.5, 0.9)
    for name, base in _FINGER_BASE.items():
        x = _FINGER_X[name]
        lms[base] = LM(x, 0.70)
        lms[base + 1] = LM(x, 0.62)
        if name in extended:
            lms[base + 2] = LM(x, 0.54)
            lms[base + 3] = LM(x, 0.45)
        else:
            lms[base + 2] = LM(x, 0.68)
            lms[base + 3] = LM(x, 0.75)
    lms[1] = LM(0.46, 0.84)
    lms[2] = LM(0.42, 0.78)
    lms[3] = LM(0.40, 0.74)
    lms[4] = LM(0.30, 0.70) if thumb else LM(0.49, 0.72)
    return [LM(lm.x + dx, lm.y + dy, lm.z) for lm in lms]


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
