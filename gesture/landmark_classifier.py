"""
landmark_classifier.py — Rule-Based Mode Gesture Classifier
=============================================================
Classifies the two mode gestures directly from MediaPipe hand
landmarks using geometric rules. No training required.

Supported gestures:
    OPEN_PALM — all four fingers extended       → scatter (CHAOS)
    FIST      — no finger extended but thumb    → gather (FORMED)
    NONE      — anything else (pointing, pinching, half-closed)

Pinch spread is left alone: it drives zoom, not mode.

MediaPipe landmark indices:
    0=WRIST
    4=THUMB_TIP, 8=INDEX_TIP, 12=MIDDLE_TIP, 16=RING_TIP, 20=PINKY_TIP
    3=THUMB_IP,  6=INDEX_PIP, 10=MIDDLE_PIP, 14=RING_PIP, 18=PINKY_PIP
    5=INDEX_MCP, 9=MIDDLE_MCP, 13=RING_MCP, 17=PINKY_MCP
"""

import math

from config import GESTURE_OPEN_PALM, GESTURE_FIST, GESTURE_NONE


def _dist(a, b):
    """Euclidean distance between two landmarks."""
    return math.sqrt((a.x - b.x) ** 2 + (a.y - b.y) ** 2)


def _is_finger_extended(lms, tip_idx, pip_idx):
    """
    Extended fingers have the tip further from the wrist than the PIP joint.
    """
    wrist = lms[0]
    return _dist(lms[tip_idx], wrist) > _dist(lms[pip_idx], wrist) * 1.05


def _is_thumb_extended(lms):
    """Thumb tip further from palm center than the IP joint."""
    palm_cx = (lms[0].x + lms[9].x) / 2
    tip_dx = abs(lms[4].x - palm_cx)
    ip_dx = abs(lms[3].x - palm_cx)
    return tip_dx > ip_dx * 1.1


def finger_states(lms):
    """
    Return dict of which fingers are extended.
    """
    return {
        "thumb":  _is_thumb_extended(lms),
        "index":  _is_finger_extended(lms, 8, 6),
        "middle": _is_finger_extended(lms, 12, 10),
        "ring":   _is_finger_extended(lms, 16, 14),
        "pinky":  _is_finger_extended(lms, 20, 18),
    }


def classify(hand_landmarks):
    """
    Classify a mode gesture from 21 MediaPipe NormalizedLandmarks.

    Args:
        hand_landmarks: list of landmarks with .x, .y attributes

    Returns:
        (gesture_label: str, confidence: float)
    """
    fingers = finger_states(hand_landmarks)
    n_fingers = sum(fingers[f] for f in ("index", "middle", "ring", "pinky"))

    # ── OPEN PALM → CHAOS ──
    if n_fingers == 4:
        return (GESTURE_OPEN_PALM, 0.90 if fingers["thumb"] else 0.80)

    # ── CLOSED FIST → FORMED ──
    if n_fingers == 0:
        return (GESTURE_FIST, 0.85 if not fingers["thumb"] else 0.70)

    return (GESTURE_NONE, 0.60)
