"""
どこで: `engine.render` のカメラ。
何を: アスペクト比で倍率を切り替える正射影カメラ（投影行列/ビュー行列）。
なぜ: ウィンドウの縦横比が変わっても球が画面に収まるよう、リサイズ時に一度だけ境界を再計算するため。

補足:
- 行列は行優先（数式どおり）の float32 で返す。ModernGL へ書き込む際は `gl_bytes()` で転置する。
- near/far は負の near を許す（原点を挟んだ前後 100 単位を描画範囲にする）。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from common.types import Vec3
from util.constants import CAMERA_FAR, CAMERA_NEAR

logger = logging.getLogger(__name__)

# aspect < 1（縦長）のときの倍率と、それ以外の倍率
PORTRAIT_ZOOM: float = 2.5
LANDSCAPE_ZOOM: float = 1.5


def zoom_for_aspect(aspect: float) -> float:
    """アスペクト比から倍率を返す（縦長 2.5 / 横長・正方 1.5）。"""
    return PORTRAIT_ZOOM if aspect < 1.0 else LANDSCAPE_ZOOM


@dataclass(frozen=True)
class OrthoBounds:
    left: float
    right: float
    top: float
    bottom: float

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.left, self.right, self.top, self.bottom)


def ortho_projection(
    left: float, right: float, top: float, bottom: float, near: float, far: float
) -> np.ndarray:
    """正射影行列（行優先, float32）。"""
    w = right - left
    h = top - bottom
    p = far - near
    if w == 0.0 or h == 0.0 or p == 0.0:
        raise ValueError(f"degenerate ortho volume: {(left, right, top, bottom, near, far)}")
    return np.array(
        [
            [2.0 / w, 0.0, 0.0, -(right + left) / w],
            [0.0, 2.0 / h, 0.0, -(top + bottom) / h],
            [0.0, 0.0, -2.0 / p, -(far + near) / p],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype="f4",
    )


def look_at(eye: Vec3, target: Vec3 = (0.0, 0.0, 0.0), up: Vec3 = (0.0, 1.0, 0.0)) -> np.ndarray:
    """`eye` から `target` を見るビュー行列（行優先, float32）。"""
    e = np.asarray(eye, dtype=np.float64)
    f = np.asarray(target, dtype=np.float64) - e
    norm = np.linalg.norm(f)
    if norm == 0.0:
        raise ValueError("eye and target must differ")
    f /= norm
    s = np.cross(f, np.asarray(up, dtype=np.float64))
    s /= np.linalg.norm(s)
    u = np.cross(s, f)
    view = np.identity(4, dtype=np.float64)
    view[0, :3] = s
    view[1, :3] = u
    view[2, :3] = -f
    view[:3, 3] = -view[:3, :3] @ e
    return view.astype("f4")


def gl_bytes(matrix: np.ndarray) -> bytes:
    """行優先行列を ModernGL（列優先）向けのバイト列にする。"""
    return np.ascontiguousarray(np.asarray(matrix, dtype="f4").T).tobytes()


class OrthoCamera:
    """原点を正面から見る正射影カメラ。`resize()` で境界と位置を更新する。"""

    def __init__(self, near: float = CAMERA_NEAR, far: float = CAMERA_FAR) -> None:
        self.near = float(near)
        self.far = float(far)
        self.pixel_ratio: float = 1.0
        self.viewport: tuple[int, int] = (1, 1)
        self.aspect: float = 1.0
        self.zoom: float = zoom_for_aspect(1.0)
        self.bounds = self._bounds_for(self.zoom, self.aspect)
        self.position: Vec3 = (0.0, 0.0, self.zoom)

    @staticmethod
    def _bounds_for(zoom: float, aspect: float) -> OrthoBounds:
        return OrthoBounds(left=-zoom * aspect, right=zoom * aspect, top=zoom, bottom=-zoom)

    def resize(self, pixel_ratio: float, width: float, height: float) -> None:
        """ビューポート寸法（論理ピクセル）から倍率/境界/位置を再計算する。"""
        w = float(width)
        h = float(height)
        pr = float(pixel_ratio)
        if not (math.isfinite(w) and math.isfinite(h)) or w <= 0.0 or h <= 0.0:
            raise ValueError(f"viewport size must be positive, got {(width, height)}")
        if not math.isfinite(pr) or pr <= 0.0:
            raise ValueError(f"pixel_ratio must be positive, got {pixel_ratio!r}")
        self.pixel_ratio = pr
        self.viewport = (max(1, int(round(w * pr))), max(1, int(round(h * pr))))
        self.aspect = w / h
        self.zoom = zoom_for_aspect(self.aspect)
        self.bounds = self._bounds_for(self.zoom, self.aspect)
        self.position = (0.0, 0.0, self.zoom)
        logger.debug(
            "camera resized: viewport=%s aspect=%.4f zoom=%.2f", self.viewport, self.aspect, self.zoom
        )

    @property
    def projection_matrix(self) -> np.ndarray:
        b = self.bounds
        return ortho_projection(b.left, b.right, b.top, b.bottom, self.near, self.far)

    @property
    def view_matrix(self) -> np.ndarray:
        return look_at(self.position)


__all__ = [
    "PORTRAIT_ZOOM",
    "LANDSCAPE_ZOOM",
    "OrthoBounds",
    "OrthoCamera",
    "gl_bytes",
    "look_at",
    "ortho_projection",
    "zoom_for_aspect",
]
