import numpy as np
import pytest
from conftest import LM, make_hand

from gesture.hand_signal import (HandSample, HandSignalFilter, hand_scale,
                                 landmarks_to_array, palm_center,
                                 sample_from_landmarks)


def test_landmarks_to_array_shape():
    coords = landmarks_to_array(make_hand())
    assert coords.shape == (21, 3)
    assert coords.dtype == np.float32


def test_palm_center():
    x, y = palm_center(landmarks_to_array(make_hand()))
    assert x == pytest.approx(0.524, abs=1e-6)
    assert y == pytest.approx(0.74, abs=1e-6)


def test_palm_center_clipped_to_unit_square():
    x, y = palm_center(landmarks_to_array(make_hand(shift=(0.7, 0.5))))
    assert x == 1.0 and y == 1.0


def test_spread_hand_scales_up():
    open_hand = hand_scale(landmarks_to_array(make_hand()))
    fist = hand_scale(landmarks_to_array(make_hand(extended=(), thumb=False)))
    assert open_hand > fist
    assert 0.3 <= fist <= 2.5
    assert open_hand == 2.5


def test_collapsed_hand_falls_back_to_default():
    coords = landmarks_to_array([LM(0.5, 0.5)] * 21)
    assert hand_scale(coords) == 1.0


def test_sample_from_landmarks_is_detected():
    s = sample_from_landmarks(make_hand())
    assert s.detected
    assert 0.0 <= s.x <= 1.0 and 0.0 <= s.y <= 1.0


def test_filter_smooths_and_holds_on_loss():
    f = HandSignalFilter(alpha=0.5)
    first = f.update(HandSample(0.2, 0.2, True, 1.0))
    assert (first.x, first.y, first.scale) == (0.2, 0.2, 1.0)

    second = f.update(HandSample(0.6, 0.4, True, 2.0))
    assert second.x == pytest.approx(0.4)
    assert second.y == pytest.approx(0.3)
    assert second.scale == pytest.approx(1.5)

    lost = f.update(HandSample(0.0, 0.0, False, 0.3))
    assert not lost.detected
    assert (lost.x, lost.y, lost.scale) == (second.x, second.y, second.scale)

    # re-detection starts over instead of blending from the stale value
    back = f.update(HandSample(0.9, 0.9, True, 0.5))
    assert (back.x, back.y, back.scale) == (0.9, 0.9, 0.5)
