import math

import numpy as np
import pytest

from scene.transforms import (euler_from_quat, identity_quat, look_at_quat,
                              quat_from_euler, rotate, slerp)

Z = np.array([0.0, 0.0, 1.0])


@pytest.mark.parametrize("target", [
    (0.0, 0.0, 5.0),
    (3.0, 1.0, -2.0),
    (-4.0, 8.0, 20.0),
    (0.0, 10.0, 0.0),     # straight above: degenerate up vector
])
def test_look_at_points_local_z_at_target(target):
    pos = np.zeros(3)
    q = look_at_quat(pos, np.array(target))
    assert np.linalg.norm(q) == pytest.approx(1.0)
    want = np.array(target) / np.linalg.norm(target)
    assert np.dot(rotate(q, Z), want) == pytest.approx(1.0, abs=1e-6)


def test_look_at_keeps_upright():
    q = look_at_quat(np.zeros(3), np.array([5.0, 0.0, 5.0]))
    up = rotate(q, np.array([0.0, 1.0, 0.0]))
    np.testing.assert_allclose(up, [0.0, 1.0, 0.0], atol=1e-9)


def test_look_at_same_point_is_finite():
    q = look_at_quat(np.ones(3), np.ones(3))
    assert np.all(np.isfinite(q))


def test_slerp_endpoints_and_midpoint():
    a = identity_quat()
    b = quat_from_euler((0.0, math.pi / 2, 0.0))
    np.testing.assert_allclose(slerp(a, b, 0.0), a)
    np.testing.assert_allclose(slerp(a, b, 1.0), b)
    mid = slerp(a, b, 0.5)
    assert euler_from_quat(mid)[1] == pytest.approx(math.pi / 4)
    # t beyond 1 is clamped
    np.testing.assert_allclose(slerp(a, b, 7.0), b)


def test_slerp_takes_short_arc():
    a = identity_quat()
    b = -quat_from_euler((0.0, 0.5, 0.0))   # same rotation, opposite sign
    assert euler_from_quat(slerp(a, b, 0.5))[1] == pytest.approx(0.25)


def test_euler_offsets_survive_conversion():
    e = np.array([0.3, -0.7, 1.1])
    np.testing.assert_allclose(euler_from_quat(quat_from_euler(e)), e, atol=1e-9)
