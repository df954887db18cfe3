import numpy as np

from core.mode_manager import TreeMode
from scene.foliage import ParticleField, cone_points, sphere_points


def test_cone_points_inside_cone(rng):
    pts = cone_points(2000, rng, height=9.0, radius=5.0)
    h = pts[:, 1] / 9.0
    r = np.hypot(pts[:, 0], pts[:, 2])
    assert np.all((h >= 0) & (h <= 1))
    assert np.all(r <= 5.0 * (1 - h) + 1e-9)


def test_surface_points_on_cone_skin(rng):
    pts = cone_points(200, rng, height=9.0, radius=5.0, surface=True)
    r = np.hypot(pts[:, 0], pts[:, 2])
    np.testing.assert_allclose(r, 5.0 * (1 - pts[:, 1] / 9.0), atol=1e-9)


def test_sphere_points_inside_radius(rng):
    pts = sphere_points(1000, rng, radius=12.0, center=(0.0, 0.0, 0.0))
    assert np.all(np.linalg.norm(pts, axis=1) <= 12.0 + 1e-9)


def test_field_blends_between_layouts(rng):
    field = ParticleField.ornaments(rng, count=50)
    assert len(field) == 50
    np.testing.assert_array_equal(field.positions, field.chaos)
    for _ in range(60 * 30):
        field.update(1 / 60, TreeMode.FORMED)
    np.testing.assert_allclose(field.positions, field.formed, atol=1e-3)
    for _ in range(60 * 30):
        field.update(1 / 60, TreeMode.CHAOS)
    np.testing.assert_allclose(field.positions, field.chaos, atol=1e-3)
