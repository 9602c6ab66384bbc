"""
三角形メッシュ型 `MeshData`（プロジェクト中核モジュール）

本モジュールは、球メッシュ生成（shapes）・スパイク変形（effects）・GPU 転送（render）の
三者が共有する唯一のメッシュ表現 `MeshData` を提供する。

データモデル（不変条件）:
- `positions: float32 ndarray (N, 3)`: 物体空間の頂点座標。
- `normals: float32 ndarray (N, 3)`: 頂点法線（単位長）。
- `uvs: float32 ndarray (N, 2)`: テクスチャ座標。
- `indices: uint32 ndarray (M, 3)`: 三角形インデックス（各値 < N）。
- 生成後は全配列が読み取り専用。変形は新しい配列を返す純関数で行い、保持中の頂点は書き換えない。

補足:
- 同じ `MeshData` はメッシュ再生成のたびに共有される（再生成されるのはスパイク情報だけ）。
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


def _frozen(arr: np.ndarray, dtype: type, width: int, name: str) -> np.ndarray:
    a = np.ascontiguousarray(np.asarray(arr, dtype=dtype))
    if a.ndim != 2 or a.shape[1] != width:
        raise ValueError(f"{name} は形状 (N, {width}) の配列である必要があります: shape={a.shape}")
    if a is arr:
        a = a.copy()
    a.flags.writeable = False
    return a


@dataclass(frozen=True, eq=False)
class MeshData:
    """不変の三角形メッシュ。

    フィールド:
    - `positions (N,3) float32`
    - `normals (N,3) float32`
    - `uvs (N,2) float32`
    - `indices (M,3) uint32`
    """

    positions: np.ndarray
    normals: np.ndarray
    uvs: np.ndarray
    indices: np.ndarray

    def __post_init__(self) -> None:
        positions = _frozen(self.positions, np.float32, 3, "positions")
        normals = _frozen(self.normals, np.float32, 3, "normals")
        uvs = _frozen(self.uvs, np.float32, 2, "uvs")
        indices = _frozen(self.indices, np.uint32, 3, "indices")
        n = positions.shape[0]
        if normals.shape[0] != n or uvs.shape[0] != n:
            raise ValueError(
                "positions/normals/uvs の頂点数が一致しません: "
                f"{n}, {normals.shape[0]}, {uvs.shape[0]}"
            )
        if indices.size and int(indices.max()) >= n:
            raise ValueError("indices に頂点数を超える値が含まれています。")
        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "normals", normals)
        object.__setattr__(self, "uvs", uvs)
        object.__setattr__(self, "indices", indices)

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.indices.shape[0])

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"MeshData(vertices={self.vertex_count}, triangles={self.triangle_count})"


__all__ = ["MeshData"]
