from __future__ import annotations

import numpy as np
import pytest

pytest.importorskip("numba")

from effects.noise import DEFAULT_W, noise3d, noise4d, simplex3, simplex4  # noqa: E402


@pytest.mark.smoke
def test_noise4d_is_deterministic_and_bounded() -> None:
    pts = np.random.uniform(-1.0, 1.0, size=(500, 3))
    a = noise4d(pts, 7.5)
    b = noise4d(pts, 7.5)
    assert a.shape == (500,)
    assert a.dtype == np.float64
    assert np.array_equal(a, b)
    assert np.all(np.abs(a) <= 1.1)
    # 一様に 0 へ潰れていない
    assert a.std() > 0.05


def test_noise4d_matches_scalar_variant() -> None:
    pts = np.array([[0.1, 0.2, 0.3], [-0.4, 0.5, 0.9]])
    vals = noise4d(pts, 3.0, DEFAULT_W)
    for p, v in zip(pts, vals):
        expected = simplex4(p[0] * 3.0, p[1] * 3.0, p[2] * 3.0, DEFAULT_W)
        assert v == pytest.approx(expected, abs=1e-9)


def test_noise4d_depends_on_w_slice() -> None:
    pts = np.random.uniform(-1.0, 1.0, size=(64, 3))
    assert not np.allclose(noise4d(pts, 5.0, w=10.0), noise4d(pts, 5.0, w=11.3))


def test_noise_is_continuous_for_small_steps() -> None:
    x, y, z, w = 0.31, -0.72, 1.13, 10.0
    eps = 1e-5
    assert abs(simplex4(x + eps, y, z, w) - simplex4(x, y, z, w)) < 1e-3
    assert abs(simplex3(x, y + eps, z) - simplex3(x, y, z)) < 1e-3


def test_noise3d_uses_uv_scale_and_time_scale() -> None:
    uvs = np.array([[0.25, 0.75], [0.5, 0.5]])
    vals = noise3d(uvs, 3.0)
    for (u, v), n in zip(uvs, vals):
        assert n == pytest.approx(simplex3(u * 6.0, v * 6.0, 3.0 * 0.02), abs=1e-9)


def test_noise3d_animates_with_time() -> None:
    uvs = np.random.uniform(0.0, 1.0, size=(32, 2))
    assert not np.allclose(noise3d(uvs, 0.0), noise3d(uvs, 25.0))


def test_noise_rejects_wrong_shapes_and_accepts_empty() -> None:
    with pytest.raises(ValueError):
        noise4d(np.zeros((3, 2)), 1.0)
    with pytest.raises(ValueError):
        noise3d(np.zeros(4), 0.0)
    assert noise4d(np.zeros((0, 3)), 1.0).shape == (0,)
    assert noise3d(np.zeros((0, 2)), 0.0).shape == (0,)
