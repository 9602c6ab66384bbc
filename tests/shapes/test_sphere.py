from __future__ import annotations

import numpy as np
import pytest

from shapes.sphere import sphere_mesh, triangle_count


@pytest.mark.smoke
def test_sphere_counts() -> None:
    m = sphere_mesh(0.8, 16, 8)
    assert m.vertex_count == 17 * 9
    assert m.triangle_count == triangle_count(16, 8) == 16 * 14


def test_sphere_full_resolution_counts() -> None:
    m = sphere_mesh()
    assert m.vertex_count == 257 * 257
    assert m.triangle_count == 256 * 510


def test_sphere_radius_and_unit_normals() -> None:
    m = sphere_mesh(0.8, 12, 6)
    r = np.linalg.norm(m.positions, axis=1)
    assert np.allclose(r, 0.8, atol=1e-6)
    assert np.allclose(np.linalg.norm(m.normals, axis=1), 1.0, atol=1e-6)


def test_sphere_pole_and_uv_layout() -> None:
    ws, hs = 8, 4
    m = sphere_mesh(1.0, ws, hs)
    # 先頭行は北極（+Y）、末尾行は南極
    assert np.allclose(m.positions[0], (0.0, 1.0, 0.0))
    assert np.allclose(m.positions[-1], (0.0, -1.0, 0.0))
    # 極の u は半セルずれる
    assert m.uvs[0, 0] == pytest.approx(0.5 / ws)
    assert m.uvs[-1, 0] == pytest.approx(1.0 - 0.5 / ws)
    assert m.uvs[0, 1] == pytest.approx(1.0)
    assert m.uvs[-1, 1] == pytest.approx(0.0)
    # 赤道上 u=0 の頂点は -X 側
    eq = (hs // 2) * (ws + 1)
    assert np.allclose(m.positions[eq], (-1.0, 0.0, 0.0), atol=1e-6)


def test_sphere_has_no_degenerate_triangles() -> None:
    m = sphere_mesh(0.8, 10, 5)
    p = m.positions.astype(np.float64)
    tri = p[m.indices]
    area = np.linalg.norm(np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0]), axis=1)
    assert np.all(area > 1e-9)


def test_sphere_is_cached_and_shared() -> None:
    assert sphere_mesh(0.8, 20, 10) is sphere_mesh(0.8, 20, 10)


@pytest.mark.parametrize("args", [(0.8, 2, 4), (0.8, 8, 1), (0.0, 8, 4), (-1.0, 8, 4)])
def test_sphere_rejects_bad_arguments(args) -> None:
    with pytest.raises(ValueError):
        sphere_mesh(*args)
