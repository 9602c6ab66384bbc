"""
spikes エフェクト（スパイク押し出し + 慣性スワール）

- 4D ノイズで各頂点の押し出し量を決め、法線方向へ押し出して球を「トゲトゲ」にします。
- 突き出た頂点（uvNoise > 0）だけを、ドラッグの慣性ベクトルに応じて水平→垂直の順に回転させます。

主なパラメータ:
- spike_detail: ノイズの空間倍率（スパイク数）。1–50。
- spike_length: スパイク長。1.0–1.5。大きいほど押し出しの下限と振幅がともに上がる。
- impulse: 慣性ベクトル (x, y)。x は水平回転、y は垂直回転を駆動する。
- scene_rotation_y: シーン全体の Y 回転。垂直回転の角度を求める前に差し引き、
  シーンの自転とスワールがずれないようにする。

実装メモ:
- `bake_spikes` はメッシュ生成時に 1 回だけ呼ぶ（uvNoise と押し出し後座標を確定）。
- `swirl` は毎フレーム呼ぶ純関数。入力配列は書き換えない。
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from common.types import Vec2
from engine.core.geometry import MeshData

from .noise import DEFAULT_W, noise4d

# ノイズ単位 → メッシュ単位の押し出し係数
EXTRUSION_SCALE: float = 0.39
# 押し出し量 → 回転の効き具合
SWIRL_INTENSITY: float = 5.0


def spike_noise(noise: np.ndarray, spike_length: float) -> np.ndarray:
    """ノイズ値をスパイク長でシフト/スケールした `uvNoise` を返す。

    `uvNoise = noise * L + (L - 1)`。L=1.0 のとき生ノイズそのもの。
    """
    length = float(spike_length)
    return np.asarray(noise, dtype=np.float64) * length + (length - 1.0)


def extrude(mesh: MeshData, uv_noise: np.ndarray) -> np.ndarray:
    """`position + normal * uvNoise * 0.39` を返す（float64 (N,3)）。"""
    un = np.asarray(uv_noise, dtype=np.float64)
    if un.shape != (mesh.vertex_count,):
        raise ValueError(
            f"uv_noise の形状が頂点数と一致しません: {un.shape} != ({mesh.vertex_count},)"
        )
    pos = mesh.positions.astype(np.float64)
    nrm = mesh.normals.astype(np.float64)
    return pos + nrm * (un * EXTRUSION_SCALE)[:, None]


@dataclass(frozen=True, eq=False)
class SpikeField:
    """メッシュ生成時に確定するスパイク情報（読み取り専用配列）。"""

    uv_noise: np.ndarray  # (N,)
    extruded: np.ndarray  # (N,3)
    spike_mask: np.ndarray  # (N,) bool: uvNoise > 0

    @property
    def spike_count(self) -> int:
        return int(np.count_nonzero(self.spike_mask))


def bake_spikes(mesh: MeshData, spike_detail: float, spike_length: float) -> SpikeField:
    """4D ノイズからスパイク情報を計算する。

    `noise = noise4d(position * spike_detail, 10.0)` を評価し、
    `spike_noise` と `extrude` を適用した結果をまとめて返す。
    """
    raw = noise4d(mesh.positions, float(spike_detail), DEFAULT_W)
    uv_noise = spike_noise(raw, spike_length)
    extruded = extrude(mesh, uv_noise)
    mask = uv_noise > 0.0
    for arr in (uv_noise, extruded, mask):
        arr.flags.writeable = False
    return SpikeField(uv_noise=uv_noise, extruded=extruded, spike_mask=mask)


def swirl(
    extruded: np.ndarray,
    uv_noise: np.ndarray,
    impulse: Vec2,
    scene_rotation_y: float,
) -> np.ndarray:
    """突き出た頂点だけを慣性ベクトルで回転させた座標を返す。

    手順（uvNoise > 0 の頂点のみ）:
    1. intensity = uvNoise * 5
    2. 水平: angleH = atan2(z, x) を impulse.x * intensity だけ回し、x/z を再計算
    3. 垂直: 回した角度からシーンの Y 回転を引いた奥行き z2 を作り、
       angleV = atan2(z2, y) - impulse.y * intensity から y を再計算
    4. 出力は (x', y', z')。z は水平回転後の値をそのまま使う（z2 は角度計算専用）。

    uvNoise <= 0 の頂点は入力をそのまま返す。
    """
    src = np.asarray(extruded, dtype=np.float64)
    un = np.asarray(uv_noise, dtype=np.float64)
    out = src.copy()
    mask = un > 0.0
    if not np.any(mask):
        return out

    ix = float(impulse[0])
    iy = float(impulse[1])
    intensity = un[mask] * SWIRL_INTENSITY
    px = src[mask, 0]
    py = src[mask, 1]
    pz = src[mask, 2]

    # horizontal
    angle_h = np.arctan2(pz, px) + ix * intensity
    h_length = np.hypot(px, pz)
    x_rot = np.cos(angle_h) * h_length
    z_rot = np.sin(angle_h) * h_length

    # vertical（シーンの Y 回転を差し引いた奥行きで角度を求める）
    z_corrected = np.sin(angle_h - float(scene_rotation_y)) * h_length
    angle_v = np.arctan2(z_corrected, py) - iy * intensity
    v_length = np.hypot(py, z_corrected)
    y_rot = np.cos(angle_v) * v_length

    out[mask, 0] = x_rot
    out[mask, 1] = y_rot
    out[mask, 2] = z_rot
    return out


def displace_vertices(
    mesh: MeshData,
    spike_detail: float,
    spike_length: float,
    impulse: Vec2 = (0.0, 0.0),
    scene_rotation_y: float = 0.0,
) -> tuple[np.ndarray, np.ndarray]:
    """押し出し + スワールを一括で計算する（座標 (N,3), uvNoise (N,)）。"""
    field = bake_spikes(mesh, spike_detail, spike_length)
    return swirl(field.extruded, field.uv_noise, impulse, scene_rotation_y), field.uv_noise


__all__ = [
    "EXTRUSION_SCALE",
    "SWIRL_INTENSITY",
    "SpikeField",
    "spike_noise",
    "extrude",
    "bake_spikes",
    "swirl",
    "displace_vertices",
]
