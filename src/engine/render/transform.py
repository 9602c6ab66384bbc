"""
どこで: `engine.render` の姿勢変換。
何を: シーン全体の回転（X→Y→Z 内因性の Euler XYZ）をモデル行列にする。
なぜ: 球を GPU に送る前の最後の剛体変換で、スワール計算（CPU）とは独立に扱うため。
"""

from __future__ import annotations

import math

import numpy as np


def _rot_x(a: float) -> np.ndarray:
    c, s = math.cos(a), math.sin(a)
    return np.array([[1, 0, 0], [0, c, -s], [0, s, c]], dtype=np.float64)


def _rot_y(a: float) -> np.ndarray:
    c, s = math.cos(a), math.sin(a)
    return np.array([[c, 0, s], [0, 1, 0], [-s, 0, c]], dtype=np.float64)


def _rot_z(a: float) -> np.ndarray:
    c, s = math.cos(a), math.sin(a)
    return np.array([[c, -s, 0], [s, c, 0], [0, 0, 1]], dtype=np.float64)


def scene_rotation_matrix(rotation_x: float, rotation_y: float, rotation_z: float = 0.0) -> np.ndarray:
    """Euler XYZ 順の 4x4 回転行列（行優先, float32）。`R = Rx @ Ry @ Rz`。

    角度は丸めずに受け取る（累積し続けても三角関数に渡すだけなので問題ない）。
    """
    m = np.identity(4, dtype=np.float64)
    m[:3, :3] = _rot_x(float(rotation_x)) @ _rot_y(float(rotation_y)) @ _rot_z(float(rotation_z))
    return m.astype("f4")


def model_view_projection(
    projection: np.ndarray, view: np.ndarray, model: np.ndarray
) -> np.ndarray:
    """`P @ V @ M`（行優先, float32）。"""
    return (
        np.asarray(projection, dtype=np.float64)
        @ np.asarray(view, dtype=np.float64)
        @ np.asarray(model, dtype=np.float64)
    ).astype("f4")


__all__ = ["scene_rotation_matrix", "model_view_projection"]
