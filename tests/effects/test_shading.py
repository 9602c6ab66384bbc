from __future__ import annotations

import math

import numpy as np
import pytest

pytest.importorskip("numba")

from effects.noise import noise3d  # noqa: E402
from effects.shading import band, darkness, mix, shade_vertices  # noqa: E402


def test_mix_endpoints() -> None:
    a = (1.0, 0.0, 0.0)
    b = (0.0, 0.0, 1.0)
    out = mix(a, b, np.array([0.0, 1.0, 0.5]))
    assert np.allclose(out[0], a)
    assert np.allclose(out[1], b)
    assert np.allclose(out[2], (0.5, 0.0, 0.5))


def test_darkness_scales_with_spike_length() -> None:
    assert np.allclose(darkness(np.array([0.0, 0.6, -0.3]), 1.5), [1.0, 1.4, 0.8])


@pytest.mark.parametrize("bad", [0.0, -1.0, float("nan"), float("inf")])
def test_darkness_rejects_invalid_length(bad: float) -> None:
    with pytest.raises(ValueError):
        darkness(np.zeros(2), bad)


def test_band_peaks_at_half_u() -> None:
    uvs = np.array([[0.0, 0.3], [0.5, 0.3], [1.0, 0.9]])
    assert np.allclose(band(uvs), [0.4, 1.0, 0.4 + 0.6 * math.sin(math.pi)])


def test_shade_vertices_formula_and_alpha() -> None:
    uvs = np.random.uniform(0.0, 1.0, size=(40, 2))
    un = np.random.uniform(-0.5, 0.5, size=40)
    a = (0.9, 0.2, 0.1)
    b = (0.1, 0.3, 0.8)
    rgba = shade_vertices(uvs, un, 12.0, a, b, 1.25)
    assert rgba.shape == (40, 4)
    assert rgba.dtype == np.float32
    assert np.all(rgba[:, 3] == 1.0)

    n = noise3d(uvs, 12.0) * 0.5 + 0.5
    col = np.asarray(a)[None, :] * (1 - n)[:, None] + np.asarray(b)[None, :] * n[:, None]
    expected = col * ((np.sin(uvs[:, 0] * math.pi) * 0.6 + 0.4) * (un / 1.25 + 1.0))[:, None]
    assert np.allclose(rgba[:, :3], expected, atol=1e-5)
