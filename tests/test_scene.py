import numpy as np

from core.mode_manager import TreeMode
from core.scene import TreeScene
from gesture.hand_signal import HandFrame, HandSample


def _scene(**kw):
    return TreeScene(seed=11, particles=False, **kw)


def test_same_sources_keep_placards():
    scene = _scene()
    scene.set_sources(["1.jpg", "2.jpg"])
    animator = scene.animator
    scene.tick(0.1)
    scene.set_sources(["1.jpg", "2.jpg"])
    assert scene.animator is animator
    scene.set_sources(["1.jpg"])
    assert scene.animator is not animator
    assert len(scene.animator) == 1


def test_no_sources_renders_nothing():
    scene = _scene()
    scene.set_sources([])
    scene.tick(0.016)
    assert scene.get_status()["placards"] == 0


def test_camera_freezes_without_hand():
    scene = _scene()
    scene.apply_hand_frame(HandFrame(HandSample(0.8, 0.6, True, 2.0), "NONE", 0.0))
    scene.tick(0.05)
    before = scene.pose.position.copy()
    scene.apply_hand_frame(HandFrame(HandSample(0.1, 0.1, False, 0.3), "NONE", 0.0))
    for _ in range(10):
        scene.tick(0.05)
    np.testing.assert_array_equal(scene.pose.position, before)


def test_palm_scatters_and_fist_gathers():
    scene = _scene()
    scene.set_sources([f"{i}.jpg" for i in range(1, 6)])
    scene.apply_hand_frame(HandFrame(HandSample(0.5, 0.5, True, 1.0), "OPEN_PALM", 0.9))
    assert scene.mode is TreeMode.CHAOS
    for _ in range(60 * 20):
        scene.tick(1 / 60)
    assert scene.get_status()["settle"] < 1e-3

    scene.apply_hand_frame(HandFrame(HandSample(0.5, 0.5, True, 1.0), "FIST", 0.9))
    assert scene.mode is TreeMode.FORMED


def test_particles_follow_mode():
    scene = TreeScene(seed=3)
    assert scene.mode is TreeMode.FORMED
    for _ in range(60 * 30):
        scene.tick(1 / 60)
    np.testing.assert_allclose(scene.foliage.positions, scene.foliage.formed, atol=1e-3)


def test_adding_a_photo_keeps_existing_placards_in_place():
    scene = _scene()
    scene.set_sources(["1.jpg", "2.jpg"])
    for _ in range(60 * 20):
        scene.tick(1 / 60)
    settled = [(tf.position.copy(), tf.facing.copy(), tf.phase) for tf in scene.animator]

    scene.set_sources(["1.jpg", "2.jpg", "3.jpg"])
    assert len(scene.animator) == 3
    for tf, (position, facing, phase) in zip(scene.animator, settled):
        np.testing.assert_array_equal(tf.position, position)
        np.testing.assert_array_equal(tf.facing, facing)
        assert tf.phase == phase
    np.testing.assert_array_equal(scene.animator.transforms[2].position, np.zeros(3))

    for _ in range(60 * 20):
        scene.tick(1 / 60)
    assert scene.get_status()["settle"] < 1e-3
