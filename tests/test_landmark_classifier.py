from conftest import make_hand

from gesture.landmark_classifier import classify, finger_states


def test_open_palm():
    label, conf = classify(make_hand())
    assert label == "OPEN_PALM"
    assert conf >= 0.8


def test_fist():
    label, conf = classify(make_hand(extended=(), thumb=False))
    assert label == "FIST"
    assert conf >= 0.8


def test_pointing_is_not_a_mode_gesture():
    label, _ = classify(make_hand(extended=("index",), thumb=False))
    assert label == "NONE"


def test_finger_states():
    states = finger_states(make_hand(extended=("index", "middle"), thumb=True))
    assert states == {"thumb": True, "index": True, "middle": True,
                      "ring": False, "pinky": False}


def test_position_in_frame_does_not_matter():
    label, _ = classify(make_hand(shift=(0.3, -0.2)))
    assert label == "OPEN_PALM"


def test_three_fingers_is_not_an_open_palm():
    label, _ = classify(make_hand(extended=("index", "middle", "ring"), thumb=True))
    assert label == "NONE"
