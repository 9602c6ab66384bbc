"""
noise モジュール（シンプレックスノイズ場）

- 3D / 4D のシンプレックス勾配ノイズ（Gustavson 方式）を Numba で実装します。
- いずれも入力座標だけに依存する純関数で、出力はおおむね [-1, 1]。

主な関数:
- noise4d(points, scale, w): 頂点座標を `scale` 倍し、4 番目の座標を固定値 `w` とした 4D 標本。
  スパイク形状の決定に使用（メッシュ生成時に 1 回だけ評価）。
- noise3d(uvs, time): UV を 6 倍し、時間を 0.02 倍した 3D 標本。色の揺らぎに使用（毎フレーム）。

実装メモ:
- 置換表/勾配は `util.constants.NOISE_CONST` を参照し、カーネルへ引数で渡す。
- 置換表は 0..255 を 2 回連結した 512 要素。インデックスは `& 255` で巡回させる。
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit  # type: ignore[attr-defined]

from util.constants import NOISE_CONST

# シンプレックス格子の傾き係数
F3: float = 1.0 / 3.0
G3: float = 1.0 / 6.0
F4: float = (math.sqrt(5.0) - 1.0) / 4.0
G4: float = (5.0 - math.sqrt(5.0)) / 20.0

# 出力を概ね [-1, 1] に揃える正規化係数
SCALE_3D: float = 32.0
SCALE_4D: float = 27.0

# 色ノイズの UV 倍率と時間係数
UV_SCALE: float = 6.0
TIME_SCALE: float = 0.02

# スパイクノイズの 4 番目の座標（固定スライス）
DEFAULT_W: float = 10.0


@njit(fastmath=True, cache=True)
def _dot3(g, x, y, z):
    return g[0] * x + g[1] * y + g[2] * z


@njit(fastmath=True, cache=True)
def _dot4(g, x, y, z, w):
    return g[0] * x + g[1] * y + g[2] * z + g[3] * w


@njit(fastmath=True, cache=True)
def simplex_noise_3d(x, y, z, perm, grad3):
    """3次元シンプレックスノイズ（1 点）。"""
    # 斜交座標でセルを特定
    s = (x + y + z) * F3
    i = int(np.floor(x + s))
    j = int(np.floor(y + s))
    k = int(np.floor(z + s))
    t = (i + j + k) * G3
    x0 = x - (i - t)
    y0 = y - (j - t)
    z0 = z - (k - t)

    # どの四面体に入っているかを判定
    if x0 >= y0:
        if y0 >= z0:
            i1, j1, k1, i2, j2, k2 = 1, 0, 0, 1, 1, 0
        elif x0 >= z0:
            i1, j1, k1, i2, j2, k2 = 1, 0, 0, 1, 0, 1
        else:
            i1, j1, k1, i2, j2, k2 = 0, 0, 1, 1, 0, 1
    else:
        if y0 < z0:
            i1, j1, k1, i2, j2, k2 = 0, 0, 1, 0, 1, 1
        elif x0 < z0:
            i1, j1, k1, i2, j2, k2 = 0, 1, 0, 0, 1, 1
        else:
            i1, j1, k1, i2, j2, k2 = 0, 1, 0, 1, 1, 0

    x1 = x0 - i1 + G3
    y1 = y0 - j1 + G3
    z1 = z0 - k1 + G3
    x2 = x0 - i2 + 2.0 * G3
    y2 = y0 - j2 + 2.0 * G3
    z2 = z0 - k2 + 2.0 * G3
    x3 = x0 - 1.0 + 3.0 * G3
    y3 = y0 - 1.0 + 3.0 * G3
    z3 = z0 - 1.0 + 3.0 * G3

    ii = i & 255
    jj = j & 255
    kk = k & 255
    gi0 = perm[ii + perm[jj + perm[kk]]] % 12
    gi1 = perm[ii + i1 + perm[jj + j1 + perm[kk + k1]]] % 12
    gi2 = perm[ii + i2 + perm[jj + j2 + perm[kk + k2]]] % 12
    gi3 = perm[ii + 1 + perm[jj + 1 + perm[kk + 1]]] % 12

    # 4 頂点の寄与
    total = 0.0
    t0 = 0.6 - x0 * x0 - y0 * y0 - z0 * z0
    if t0 > 0.0:
        t0 *= t0
        total += t0 * t0 * _dot3(grad3[gi0], x0, y0, z0)
    t1 = 0.6 - x1 * x1 - y1 * y1 - z1 * z1
    if t1 > 0.0:
        t1 *= t1
        total += t1 * t1 * _dot3(grad3[gi1], x1, y1, z1)
    t2 = 0.6 - x2 * x2 - y2 * y2 - z2 * z2
    if t2 > 0.0:
        t2 *= t2
        total += t2 * t2 * _dot3(grad3[gi2], x2, y2, z2)
    t3 = 0.6 - x3 * x3 - y3 * y3 - z3 * z3
    if t3 > 0.0:
        t3 *= t3
        total += t3 * t3 * _dot3(grad3[gi3], x3, y3, z3)

    return SCALE_3D * total


@njit(fastmath=True, cache=True)
def simplex_noise_4d(x, y, z, w, perm, grad4):
    """4次元シンプレックスノイズ（1 点）。

    単体の判定は座標成分の大小比較による順位付け（rank）で行う。
    """
    s = (x + y + z + w) * F4
    i = int(np.floor(x + s))
    j = int(np.floor(y + s))
    k = int(np.floor(z + s))
    l = int(np.floor(w + s))  # noqa: E741
    t = (i + j + k + l) * G4
    x0 = x - (i - t)
    y0 = y - (j - t)
    z0 = z - (k - t)
    w0 = w - (l - t)

    rank_x = 0
    rank_y = 0
    rank_z = 0
    rank_w = 0
    if x0 > y0:
        rank_x += 1
    else:
        rank_y += 1
    if x0 > z0:
        rank_x += 1
    else:
        rank_z += 1
    if x0 > w0:
        rank_x += 1
    else:
        rank_w += 1
    if y0 > z0:
        rank_y += 1
    else:
        rank_z += 1
    if y0 > w0:
        rank_y += 1
    else:
        rank_w += 1
    if z0 > w0:
        rank_z += 1
    else:
        rank_w += 1

    i1 = 1 if rank_x >= 3 else 0
    j1 = 1 if rank_y >= 3 else 0
    k1 = 1 if rank_z >= 3 else 0
    l1 = 1 if rank_w >= 3 else 0
    i2 = 1 if rank_x >= 2 else 0
    j2 = 1 if rank_y >= 2 else 0
    k2 = 1 if rank_z >= 2 else 0
    l2 = 1 if rank_w >= 2 else 0
    i3 = 1 if rank_x >= 1 else 0
    j3 = 1 if rank_y >= 1 else 0
    k3 = 1 if rank_z >= 1 else 0
    l3 = 1 if rank_w >= 1 else 0

    x1 = x0 - i1 + G4
    y1 = y0 - j1 + G4
    z1 = z0 - k1 + G4
    w1 = w0 - l1 + G4
    x2 = x0 - i2 + 2.0 * G4
    y2 = y0 - j2 + 2.0 * G4
    z2 = z0 - k2 + 2.0 * G4
    w2 = w0 - l2 + 2.0 * G4
    x3 = x0 - i3 + 3.0 * G4
    y3 = y0 - j3 + 3.0 * G4
    z3 = z0 - k3 + 3.0 * G4
    w3 = w0 - l3 + 3.0 * G4
    x4 = x0 - 1.0 + 4.0 * G4
    y4 = y0 - 1.0 + 4.0 * G4
    z4 = z0 - 1.0 + 4.0 * G4
    w4 = w0 - 1.0 + 4.0 * G4

    ii = i & 255
    jj = j & 255
    kk = k & 255
    ll = l & 255
    gi0 = perm[ii + perm[jj + perm[kk + perm[ll]]]] % 32
    gi1 = perm[ii + i1 + perm[jj + j1 + perm[kk + k1 + perm[ll + l1]]]] % 32
    gi2 = perm[ii + i2 + perm[jj + j2 + perm[kk + k2 + perm[ll + l2]]]] % 32
    gi3 = perm[ii + i3 + perm[jj + j3 + perm[kk + k3 + perm[ll + l3]]]] % 32
    gi4 = perm[ii + 1 + perm[jj + 1 + perm[kk + 1 + perm[ll + 1]]]] % 32

    total = 0.0
    t0 = 0.6 - x0 * x0 - y0 * y0 - z0 * z0 - w0 * w0
    if t0 > 0.0:
        t0 *= t0
        total += t0 * t0 * _dot4(grad4[gi0], x0, y0, z0, w0)
    t1 = 0.6 - x1 * x1 - y1 * y1 - z1 * z1 - w1 * w1
    if t1 > 0.0:
        t1 *= t1
        total += t1 * t1 * _dot4(grad4[gi1], x1, y1, z1, w1)
    t2 = 0.6 - x2 * x2 - y2 * y2 - z2 * z2 - w2 * w2
    if t2 > 0.0:
        t2 *= t2
        total += t2 * t2 * _dot4(grad4[gi2], x2, y2, z2, w2)
    t3 = 0.6 - x3 * x3 - y3 * y3 - z3 * z3 - w3 * w3
    if t3 > 0.0:
        t3 *= t3
        total += t3 * t3 * _dot4(grad4[gi3], x3, y3, z3, w3)
    t4 = 0.6 - x4 * x4 - y4 * y4 - z4 * z4 - w4 * w4
    if t4 > 0.0:
        t4 *= t4
        total += t4 * t4 * _dot4(grad4[gi4], x4, y4, z4, w4)

    return SCALE_4D * total


@njit(fastmath=True, cache=True)
def _noise4d_core(points, scale, w, perm, grad4):
    """頂点配列 (N,3) を `scale` 倍した 4D ノイズ（N,）。"""
    n = points.shape[0]
    out = np.empty(n, dtype=np.float64)
    for idx in range(n):
        out[idx] = simplex_noise_4d(
            points[idx, 0] * scale,
            points[idx, 1] * scale,
            points[idx, 2] * scale,
            w,
            perm,
            grad4,
        )
    return out


@njit(fastmath=True, cache=True)
def _noise3d_core(uvs, uv_scale, z, perm, grad3):
    """UV 配列 (N,2) を `uv_scale` 倍し、第 3 座標を `z` とした 3D ノイズ（N,）。"""
    n = uvs.shape[0]
    out = np.empty(n, dtype=np.float64)
    for idx in range(n):
        out[idx] = simplex_noise_3d(
            uvs[idx, 0] * uv_scale,
            uvs[idx, 1] * uv_scale,
            z,
            perm,
            grad3,
        )
    return out


# 置換表（0-255 を2回連結）と勾配集合
NOISE_PERMUTATION_TABLE = np.array(NOISE_CONST["PERM"], dtype=np.int64)
NOISE_PERMUTATION_TABLE = np.concatenate([NOISE_PERMUTATION_TABLE, NOISE_PERMUTATION_TABLE])
NOISE_GRADIENTS_3D = np.array(NOISE_CONST["GRAD3"], dtype=np.float64)
NOISE_GRADIENTS_4D = np.array(NOISE_CONST["GRAD4"], dtype=np.float64)


def _as_points(arr: np.ndarray, dim: int, name: str) -> np.ndarray:
    a = np.asarray(arr, dtype=np.float64)
    if a.ndim != 2 or a.shape[1] != dim:
        raise ValueError(f"{name} は形状 (N, {dim}) の配列である必要があります: shape={a.shape}")
    return np.ascontiguousarray(a)


def simplex3(x: float, y: float, z: float) -> float:
    """1 点の 3D シンプレックスノイズ（おおむね [-1, 1]）。"""
    return float(
        simplex_noise_3d(
            float(x), float(y), float(z), NOISE_PERMUTATION_TABLE, NOISE_GRADIENTS_3D
        )
    )


def simplex4(x: float, y: float, z: float, w: float) -> float:
    """1 点の 4D シンプレックスノイズ（おおむね [-1, 1]）。"""
    return float(
        simplex_noise_4d(
            float(x),
            float(y),
            float(z),
            float(w),
            NOISE_PERMUTATION_TABLE,
            NOISE_GRADIENTS_4D,
        )
    )


def noise4d(points: np.ndarray, scale: float, w: float = DEFAULT_W) -> np.ndarray:
    """頂点ごとの 4D ノイズ `noise(vec4(p * scale, w))` を返す。

    Parameters
    ----------
    points : np.ndarray
        物体空間の頂点座標 (N, 3)。
    scale : float
        座標倍率（スパイク数）。大きいほど細かいスパイクになる。
    w : float, default 10.0
        4 番目の座標。固定値としてノイズの「断面」を選ぶ。

    Returns
    -------
    np.ndarray
        float64 (N,)。
    """
    pts = _as_points(points, 3, "points")
    if pts.shape[0] == 0:
        return np.zeros(0, dtype=np.float64)
    return _noise4d_core(pts, float(scale), float(w), NOISE_PERMUTATION_TABLE, NOISE_GRADIENTS_4D)


def noise3d(uvs: np.ndarray, time: float) -> np.ndarray:
    """頂点ごとの色ノイズ `noise(vec3(uv * 6.0, time * 0.02))` を返す（float64 (N,)）。"""
    pts = _as_points(uvs, 2, "uvs")
    if pts.shape[0] == 0:
        return np.zeros(0, dtype=np.float64)
    return _noise3d_core(
        pts,
        UV_SCALE,
        float(time) * TIME_SCALE,
        NOISE_PERMUTATION_TABLE,
        NOISE_GRADIENTS_3D,
    )


__all__ = [
    "simplex3",
    "simplex4",
    "noise3d",
    "noise4d",
    "DEFAULT_W",
    "UV_SCALE",
    "TIME_SCALE",
]
