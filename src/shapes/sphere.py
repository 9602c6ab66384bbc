from __future__ import annotations

from functools import lru_cache

import numpy as np

from engine.core.geometry import MeshData
from util.constants import SPHERE_RADIUS


@lru_cache(maxsize=8)
def sphere_mesh(
    radius: float = SPHERE_RADIUS,
    width_segments: int = 256,
    height_segments: int = 256,
) -> MeshData:
    """緯度経度分割の UV 球メッシュを生成する。

    引数:
        radius: 半径（メッシュ単位）。
        width_segments: 経度方向の分割数（3 以上）。
        height_segments: 緯度方向の分割数（2 以上）。

    返り値:
        `MeshData`（(ws+1)*(hs+1) 頂点）。極の縮退三角形は含めない。

    頂点は極（+Y）から順に並ぶ。x は `-cos(φ)`、z は `sin(φ)` 側に回り、
    UV の v は北極で 1、南極で 0。極の行は u を半セルずらす。
    """
    ws = int(width_segments)
    hs = int(height_segments)
    if ws < 3:
        raise ValueError(f"width_segments must be >= 3, got {width_segments}")
    if hs < 2:
        raise ValueError(f"height_segments must be >= 2, got {height_segments}")
    r = float(radius)
    if not r > 0.0:
        raise ValueError(f"radius must be > 0, got {radius}")

    u = np.linspace(0.0, 1.0, ws + 1, dtype=np.float64)
    v = np.linspace(0.0, 1.0, hs + 1, dtype=np.float64)
    phi = u * (2.0 * np.pi)
    theta = v * np.pi

    sin_t = np.sin(theta)[:, None]
    cos_t = np.cos(theta)[:, None]
    x = -r * np.cos(phi)[None, :] * sin_t
    y = np.broadcast_to(r * cos_t, x.shape)
    z = r * np.sin(phi)[None, :] * sin_t
    positions = np.stack((x, y, z), axis=-1).reshape(-1, 3)
    # 極では sin(θ)=0 になり x/z に -0.0 が混ざるので明示的に 0 にそろえる
    positions[np.abs(positions) < 1e-12] = 0.0

    normals = positions / r

    # 極の行は u を半セルずらす（北極 +, 南極 -）
    u_offset = np.zeros(hs + 1, dtype=np.float64)
    u_offset[0] = 0.5 / ws
    u_offset[-1] = -0.5 / ws
    uu = u[None, :] + u_offset[:, None]
    vv = np.broadcast_to((1.0 - v)[:, None], uu.shape)
    uvs = np.stack((uu, vv), axis=-1).reshape(-1, 2)

    # グリッド (hs+1, ws+1) の頂点番号から四角形ごとの 2 三角形を組む
    grid = np.arange((hs + 1) * (ws + 1), dtype=np.uint32).reshape(hs + 1, ws + 1)
    a = grid[:-1, 1:]
    b = grid[:-1, :-1]
    c = grid[1:, :-1]
    d = grid[1:, 1:]
    upper = np.stack((a, b, d), axis=-1)[1:]  # 北極の行は縮退
    lower = np.stack((b, c, d), axis=-1)[:-1]  # 南極の行は縮退
    # 行ごとに upper → lower の順で並べる
    tris: list[np.ndarray] = []
    for iy in range(hs):
        if iy != 0:
            tris.append(upper[iy - 1])
        if iy != hs - 1:
            tris.append(lower[iy])
    indices = np.concatenate(tris, axis=0) if tris else np.zeros((0, 3), dtype=np.uint32)

    return MeshData(positions=positions, normals=normals, uvs=uvs, indices=indices)


def triangle_count(width_segments: int, height_segments: int) -> int:
    """`sphere_mesh` が返す三角形数（極の行は 1 三角形/セル）。"""
    ws = int(width_segments)
    hs = int(height_segments)
    return ws * (2 * hs - 2)
