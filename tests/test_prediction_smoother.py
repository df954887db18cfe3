import pytest

from gesture.prediction_smoother import PredictionSmoother


def _feed(smoother, label, conf, n, t0, dt=0.05):
    res = None
    for i in range(n):
        res = smoother.update(label, conf, t0 + i * dt)
    return res


def test_majority_becomes_stable():
    s = PredictionSmoother(buffer_size=5, cooldown_seconds=0.0)
    s.reset(timestamp=0.0)
    res = _feed(s, "OPEN_PALM", 0.9, 3, t0=1.0)
    assert res.stable_label == "OPEN_PALM"
    assert res.stable_conf == pytest.approx(0.9)


def test_single_flicker_is_ignored():
    s = PredictionSmoother(buffer_size=5, cooldown_seconds=0.0)
    s.reset(timestamp=0.0)
    _feed(s, "FIST", 0.85, 5, t0=1.0)
    res = s.update("OPEN_PALM", 0.9, 2.0)
    assert res.stable_label == "FIST"
    assert not res.changed


def test_low_confidence_never_wins():
    s = PredictionSmoother(buffer_size=5, confidence_threshold=0.7, cooldown_seconds=0.0)
    s.reset(timestamp=0.0)
    res = _feed(s, "OPEN_PALM", 0.5, 5, t0=1.0)
    assert res.stable_label == "NONE"


def test_cooldown_delays_change():
    s = PredictionSmoother(buffer_size=3, cooldown_seconds=1.0)
    s.reset(timestamp=0.0)
    res = _feed(s, "FIST", 0.9, 3, t0=0.1)
    assert res.stable_label == "NONE"
    res = s.update("FIST", 0.9, 1.2)
    assert res.stable_label == "FIST"
    assert res.changed


def test_split_window_has_no_majority():
    s = PredictionSmoother(buffer_size=4, cooldown_seconds=0.0)
    s.reset(timestamp=0.0)
    for i, label in enumerate(["FIST", "OPEN_PALM", "FIST", "OPEN_PALM"]):
        res = s.update(label, 0.9, 1.0 + i)
    assert res.stable_label == "NONE"


def test_reset_drops_history():
    s = PredictionSmoother(buffer_size=5, cooldown_seconds=0.0)
    s.reset(timestamp=0.0)
    _feed(s, "FIST", 0.85, 5, t0=1.0)
    s.reset(timestamp=2.0)
    assert s.label == "NONE"
    assert len(s.window) == 0
    res = s.update("OPEN_PALM", 0.9, 2.1)
    assert res.stable_label == "OPEN_PALM"
    assert res.changed
