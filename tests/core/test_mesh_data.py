from __future__ import annotations

import numpy as np
import pytest

from engine.core.geometry import MeshData


def _tri() -> dict[str, np.ndarray]:
    return {
        "positions": np.array([[0, 0, 0], [1, 0, 0], [0, 1, 0]], dtype=np.float64),
        "normals": np.array([[0, 0, 1]] * 3, dtype=np.float64),
        "uvs": np.array([[0, 0], [1, 0], [0, 1]], dtype=np.float64),
        "indices": np.array([[0, 1, 2]]),
    }


def test_mesh_data_normalizes_and_freezes() -> None:
    data = _tri()
    m = MeshData(**data)
    assert m.positions.dtype == np.float32
    assert m.indices.dtype == np.uint32
    assert m.vertex_count == 3
    assert m.triangle_count == 1
    with pytest.raises(ValueError):
        m.positions[0, 0] = 5.0
    # 元配列は書き込み可能のまま
    data["positions"][0, 0] = 5.0


def test_mesh_data_rejects_bad_shapes() -> None:
    data = _tri()
    data["uvs"] = np.zeros((2, 2))
    with pytest.raises(ValueError):
        MeshData(**data)
    data = _tri()
    data["indices"] = np.array([[0, 1, 3]])
    with pytest.raises(ValueError):
        MeshData(**data)
    data = _tri()
    data["normals"] = np.zeros((3, 2))
    with pytest.raises(ValueError):
        MeshData(**data)
