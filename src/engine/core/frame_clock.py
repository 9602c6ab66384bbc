"""
どこで: `engine.core` の簡易フレームドライバ。
何を: `Tickable`（`tick(dt)` を持つもの）の列をシーン → レンダラの固定順序で呼び出し、
    経過時間とフレーム数を数える。
なぜ: pyglet の schedule_interval から呼ぶだけで、状態更新と GPU 転送の順序を統一するため。
"""

from __future__ import annotations

import time
from typing import Protocol, Sequence


class Tickable(Protocol):
    """1 フレーム分の更新を受け取る側（シーン/レンダラ）。"""

    def tick(self, dt: float) -> None: ...


class FrameClock:
    """登録順に `tick(dt)` を配る。`stop()` 後は何もしない。"""

    def __init__(self, tickables: Sequence[Tickable]):
        self._tickables = tuple(tickables)
        self._last_time = time.perf_counter()
        self.elapsed: float = 0.0
        self.frames: int = 0
        self._stopped = False

    def tick(self, dt: float | None = None) -> None:
        if self._stopped:
            return
        now = time.perf_counter()
        if dt is None:
            dt = now - self._last_time
        self._last_time = now

        self.elapsed += dt
        self.frames += 1
        for t in self._tickables:
            t.tick(dt)

    def stop(self) -> None:
        self._stopped = True

    @property
    def stopped(self) -> bool:
        return self._stopped


__all__ = ["FrameClock", "Tickable"]
