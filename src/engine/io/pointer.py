"""
ポインタ入力 → 慣性ベクトル（IO モジュール）

本モジュールは、マウス/タッチのドラッグ量を減衰する 2D 慣性ベクトル（impulse）に変換する。
描画や幾何処理には依存せず、ウィンドウ層から座標とビューポート寸法を受け取るだけで動く。

状態遷移:
- Idle → Dragging: `press()`。現在位置をアンカーとして記録し、それ以前の履歴は捨てる。
- Dragging → Dragging: `drag()`。前回位置との差分を impulse に加算し、アンカーを更新。
- Dragging → Idle: `release()`。impulse 自体は触らない（収束は毎フレームの減衰に任せる）。

座標:
- クライアント座標（左上原点, y 下向き）を [-1, 1] に正規化し、y は上向きを正にする。

向きの反転:
- シーンが X 軸まわりに上下逆さまを越えて回ると、水平ドラッグの向きを反転する。
  判定式 `((rx + π/2) / π) % 2 > 1` はそのまま保持する。剰余は被除数の符号を保つ（`math.fmod`）。
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass

from common.types import Vec2

logger = logging.getLogger(__name__)

DRAG_GAIN: float = 0.5
DECAY: float = 0.9


class DragState(enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass
class Impulse:
    """減衰する 2D 慣性ベクトル（プロセス内で 1 つだけ共有される可変状態）。"""

    x: float = 0.0
    y: float = 0.0

    def decay(self, factor: float = DECAY) -> None:
        """1 フレーム分の減衰（乗算）。0 には漸近するだけで明示的にリセットしない。"""
        self.x *= factor
        self.y *= factor

    def as_tuple(self) -> Vec2:
        return (self.x, self.y)


def normalize_pointer(client_x: float, client_y: float, width: float, height: float) -> Vec2:
    """クライアント座標を [-1, 1] に正規化する（y は上向きが正）。"""
    w = float(width)
    h = float(height)
    if w <= 0.0 or h <= 0.0:
        raise ValueError(f"viewport size must be positive, got {(width, height)}")
    x = (float(client_x) / w) * 2.0 - 1.0
    y = -(float(client_y) / h) * 2.0 + 1.0
    return (x, y)


def drag_direction(rotation_x: float) -> int:
    """シーンの X 回転から水平ドラッグの向き（+1 / -1）を返す。"""
    phase = math.fmod((float(rotation_x) + math.pi / 2.0) / math.pi, 2.0)
    return -1 if phase > 1.0 else 1


class ImpulseTracker:
    """ドラッグ入力を `Impulse` に積算する 2 状態の状態機械。"""

    def __init__(self, impulse: Impulse | None = None) -> None:
        self.impulse = impulse if impulse is not None else Impulse()
        self._state = DragState.IDLE
        self._last: Vec2 | None = None

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def is_dragging(self) -> bool:
        return self._state is DragState.DRAGGING

    @property
    def anchor(self) -> Vec2 | None:
        """直前のポインタ位置（正規化済み）。Idle 直後の初回 press 前は None。"""
        return self._last

    def press(self, client_x: float, client_y: float, width: float, height: float) -> None:
        """ドラッグ開始。アンカーを現在位置にリセットする。"""
        self._last = normalize_pointer(client_x, client_y, width, height)
        self._state = DragState.DRAGGING

    def drag(
        self,
        client_x: float,
        client_y: float,
        width: float,
        height: float,
        scene_rotation_x: float = 0.0,
    ) -> Vec2:
        """ドラッグ移動を impulse に加算し、加算量 (dx, dy) を返す（Idle 中は (0, 0)）。"""
        if self._state is not DragState.DRAGGING:
            return (0.0, 0.0)
        x, y = normalize_pointer(client_x, client_y, width, height)
        last_x, last_y = self._last if self._last is not None else (x, y)
        direction = drag_direction(scene_rotation_x)
        dx = direction * (x - last_x) * DRAG_GAIN
        dy = -(y - last_y) * DRAG_GAIN
        self.impulse.x += dx
        self.impulse.y += dy
        self._last = (x, y)
        return (dx, dy)

    def release(self) -> None:
        """ドラッグ終了。impulse は減衰に任せる。"""
        self._state = DragState.IDLE

    def decay(self) -> None:
        self.impulse.decay()


__all__ = [
    "DRAG_GAIN",
    "DECAY",
    "DragState",
    "Impulse",
    "ImpulseTracker",
    "drag_direction",
    "normalize_pointer",
]
