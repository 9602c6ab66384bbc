"""
shading エフェクト（パレット 2 色の混合 + 帯状の明暗 + 押し出し量による明るさ）

- 色: 時間で流れる 3D ノイズ n∈[0,1] で colorA→colorB を線形補間。
- 明暗: `sin(u * π)` による経度方向の帯と、`uvNoise / spikeLength + 1` の押し出し係数を乗算。
- 出力は RGBA（float32, アルファは常に 1）。頂点ごとに評価し、ラスタライザで補間される。
"""

from __future__ import annotations

import math

import numpy as np

from common.types import RGB

from .noise import noise3d

BAND_GAIN: float = 0.6
BAND_FLOOR: float = 0.4


def mix(color_a: RGB, color_b: RGB, t: np.ndarray) -> np.ndarray:
    """GLSL の `mix` 相当（t は (N,)、戻り値は (N,3)）。"""
    a = np.asarray(color_a, dtype=np.float64).reshape(1, 3)
    b = np.asarray(color_b, dtype=np.float64).reshape(1, 3)
    tt = np.asarray(t, dtype=np.float64)[:, None]
    return a * (1.0 - tt) + b * tt


def darkness(uv_noise: np.ndarray, spike_length: float) -> np.ndarray:
    """押し出し量に応じた明るさ係数 `uvNoise / spikeLength + 1`。"""
    length = float(spike_length)
    if not math.isfinite(length) or length <= 0.0:
        raise ValueError(f"spike_length must be a positive finite number, got {spike_length!r}")
    return np.asarray(uv_noise, dtype=np.float64) / length + 1.0


def band(uvs: np.ndarray) -> np.ndarray:
    """経度方向の帯 `sin(u * π) * 0.6 + 0.4`。"""
    u = np.asarray(uvs, dtype=np.float64)[:, 0]
    return np.sin(u * math.pi) * BAND_GAIN + BAND_FLOOR


def shade_vertices(
    uvs: np.ndarray,
    uv_noise: np.ndarray,
    time: float,
    color_a: RGB,
    color_b: RGB,
    spike_length: float,
) -> np.ndarray:
    """頂点色 RGBA (N,4) float32 を返す。

    Parameters
    ----------
    uvs : np.ndarray
        (N,2) のテクスチャ座標。
    uv_noise : np.ndarray
        (N,) のスパイクノイズ（`effects.spikes.spike_noise` の結果）。
    time : float
        経過時間 [sec]。色ノイズの第 3 座標を `time * 0.02` で進める。
    color_a, color_b : RGB
        混合の両端色（0–1）。
    spike_length : float
        スパイク長（> 0）。
    """
    n = noise3d(uvs, time) * 0.5 + 0.5
    col = mix(color_a, color_b, n)
    col *= (band(uvs) * darkness(uv_noise, spike_length))[:, None]
    rgba = np.empty((col.shape[0], 4), dtype=np.float32)
    rgba[:, :3] = col
    rgba[:, 3] = 1.0
    return rgba


__all__ = ["mix", "darkness", "band", "shade_vertices"]
