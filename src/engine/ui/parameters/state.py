"""
どこで: `engine.ui.parameters` の状態管理層。
何を: スパイク設定（detail/length/palette）と再生成要求フラグを 1 つの共有レコードで管理する。
    RangeHint/ParameterDescriptor でデバッグパネルの表示レンジも提供する。
なぜ: パネル・再生成トリガ・フレームコールバックが参照する単一の真実源として、
    変更点（setter と要求フラグ）を明示的にするため。

補足:
- 値の setter はレンジ外をクランプする（警告ログ）。非数値/非有限値は `ValueError`。
  `1 / spike_length` が常に定義されることをここで保証する。
- 要求フラグは「次のフレームで 1 回だけ」消費される（`consume_requests()`）。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from threading import RLock
from typing import Any, Callable, Iterable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RangeHint:
    """UI 表示用の範囲ヒント（実レンジ）。"""

    min_value: float
    max_value: float
    step: float | None = None

    def clamp(self, value: float) -> float:
        if value < self.min_value:
            return float(self.min_value)
        if value > self.max_value:
            return float(self.max_value)
        return float(value)


@dataclass(frozen=True)
class ParameterDescriptor:
    """GUI に表示するパラメータのメタ情報。"""

    id: str
    label: str
    value_type: str
    default_value: Any
    range_hint: RangeHint | None = None
    help_text: str | None = None

    def snap(self, value: Any) -> float:
        """スライダー値を step に丸めてレンジ内に収める。"""
        v = _coerce_finite(self.id, value)
        hint = self.range_hint
        if hint is None:
            return v
        if hint.step:
            v = hint.min_value + round((v - hint.min_value) / hint.step) * hint.step
        return hint.clamp(round(v, 6))


SPIKE_DETAIL = ParameterDescriptor(
    id="spike_detail",
    label="Detail",
    value_type="float",
    default_value=1.0,
    range_hint=RangeHint(1.0, 50.0, 0.01),
    help_text="ノイズの空間倍率（スパイク数）",
)
SPIKE_LENGTH = ParameterDescriptor(
    id="spike_length",
    label="Size",
    value_type="float",
    default_value=1.0,
    range_hint=RangeHint(1.0, 1.5, 0.01),
    help_text="スパイク長",
)
REGENERATE = ParameterDescriptor(
    id="regenerate",
    label="Regenerate",
    value_type="action",
    default_value=None,
    help_text="形状と配色をプリセットから引き直す",
)

DESCRIPTORS: tuple[ParameterDescriptor, ...] = (SPIKE_DETAIL, SPIKE_LENGTH, REGENERATE)


@dataclass(frozen=True)
class RebuildRequest:
    """1 フレーム分の再生成要求。`reset` は `update` を包含する。"""

    update: bool = False
    reset: bool = False

    @property
    def pending(self) -> bool:
        return self.update or self.reset


@dataclass(frozen=True)
class ParameterWindowConfig:
    """パネルウィンドウの寸法/タイトル。"""

    width: int = 280
    height: int = 140
    title: str = "Spikes"


Subscriber = Callable[[Iterable[str]], None]


def _coerce_finite(name: str, value: Any) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a number, got {value!r}") from e
    if not math.isfinite(v):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return v


class SpikeSettings:
    """スパイク設定の共有レコード。

    - `spike_detail` ∈ [1, 50], `spike_length` ∈ [1.0, 1.5]
    - `palette`: 選択中パレット（Hex 文字列のタプル）と `palette_index`
    - `request_update()` / `request_reset()`: 次フレームでの再生成を予約
    """

    def __init__(
        self,
        spike_detail: float = SPIKE_DETAIL.default_value,
        spike_length: float = SPIKE_LENGTH.default_value,
        palette: tuple[str, ...] = (),
        palette_index: int = -1,
    ) -> None:
        self._lock = RLock()
        self._listeners: list[Subscriber] = []
        self._spike_detail = self._validated(SPIKE_DETAIL, spike_detail)
        self._spike_length = self._validated(SPIKE_LENGTH, spike_length)
        self._palette: tuple[str, ...] = tuple(palette)
        self._palette_index = int(palette_index)
        self._update_requested = False
        self._reset_requested = False

    # --- 値 ---
    @property
    def spike_detail(self) -> float:
        with self._lock:
            return self._spike_detail

    @property
    def spike_length(self) -> float:
        with self._lock:
            return self._spike_length

    @property
    def palette(self) -> tuple[str, ...]:
        with self._lock:
            return self._palette

    @property
    def palette_index(self) -> int:
        with self._lock:
            return self._palette_index

    def set_spike_detail(self, value: Any) -> float:
        """spike_detail を更新する（クランプ後の値を返す）。"""
        v = self._validated(SPIKE_DETAIL, value)
        with self._lock:
            changed = v != self._spike_detail
            self._spike_detail = v
        if changed:
            self._notify({SPIKE_DETAIL.id})
        return v

    def set_spike_length(self, value: Any) -> float:
        """spike_length を更新する（クランプ後の値を返す）。"""
        v = self._validated(SPIKE_LENGTH, value)
        with self._lock:
            changed = v != self._spike_length
            self._spike_length = v
        if changed:
            self._notify({SPIKE_LENGTH.id})
        return v

    def apply_generated(
        self,
        spike_detail: float,
        spike_length: float,
        palette: tuple[str, ...],
        palette_index: int,
    ) -> None:
        """生成器の結果をまとめて反映する（購読者へは 1 回だけ通知）。"""
        detail = self._validated(SPIKE_DETAIL, spike_detail)
        length = self._validated(SPIKE_LENGTH, spike_length)
        with self._lock:
            self._spike_detail = detail
            self._spike_length = length
            self._palette = tuple(palette)
            self._palette_index = int(palette_index)
        self._notify({SPIKE_DETAIL.id, SPIKE_LENGTH.id, "palette"})

    # --- 再生成要求 ---
    def request_update(self) -> None:
        """現在値でのメッシュ再生成を次フレームに予約する。"""
        with self._lock:
            self._update_requested = True

    def request_reset(self) -> None:
        """パラメータ生成からやり直す再生成を次フレームに予約する。"""
        with self._lock:
            self._reset_requested = True

    def consume_requests(self) -> RebuildRequest:
        """保留中の要求を取り出してフラグを下ろす。"""
        with self._lock:
            req = RebuildRequest(update=self._update_requested, reset=self._reset_requested)
            self._update_requested = False
            self._reset_requested = False
        return req

    # --- リスナー ---
    def subscribe(self, listener: Subscriber) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Subscriber) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def _notify(self, param_ids: Iterable[str]) -> None:
        ids = sorted(param_ids)
        if not ids:
            return
        for listener in list(self._listeners):
            try:
                listener(ids)
            except Exception:
                logger.exception("settings listener failed: %r", listener)

    # --- internal ---
    @staticmethod
    def _validated(desc: ParameterDescriptor, value: Any) -> float:
        v = _coerce_finite(desc.id, value)
        hint = desc.range_hint
        if hint is None:
            return v
        clamped = hint.clamp(v)
        if clamped != v:
            logger.warning(
                "%s=%r is outside [%s, %s]; clamped to %s",
                desc.id,
                value,
                hint.min_value,
                hint.max_value,
                clamped,
            )
        return clamped

    def snapshot(self) -> dict[str, Any]:
        """デバッグ/ログ用の現在値。"""
        with self._lock:
            return {
                SPIKE_DETAIL.id: self._spike_detail,
                SPIKE_LENGTH.id: self._spike_length,
                "palette_index": self._palette_index,
                "palette": self._palette,
            }


__all__ = [
    "RangeHint",
    "ParameterDescriptor",
    "ParameterWindowConfig",
    "RebuildRequest",
    "SpikeSettings",
    "SPIKE_DETAIL",
    "SPIKE_LENGTH",
    "REGENERATE",
    "DESCRIPTORS",
]
