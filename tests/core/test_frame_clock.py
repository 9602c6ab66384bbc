from __future__ import annotations

from engine.core.frame_clock import FrameClock


class _Recorder:
    def __init__(self, name: str, log: list[tuple[str, float]]) -> None:
        self.name = name
        self.log = log

    def tick(self, dt: float) -> None:
        self.log.append((self.name, dt))


def test_ticks_in_registration_order() -> None:
    log: list[tuple[str, float]] = []
    clock = FrameClock([_Recorder("scene", log), _Recorder("renderer", log)])
    clock.tick(0.5)
    clock.tick(0.25)
    assert [n for n, _ in log] == ["scene", "renderer", "scene", "renderer"]
    assert clock.frames == 2
    assert clock.elapsed == 0.75


def test_stop_is_final() -> None:
    log: list[tuple[str, float]] = []
    clock = FrameClock([_Recorder("scene", log)])
    clock.stop()
    clock.tick(1.0)
    assert clock.stopped
    assert log == []
    assert clock.frames == 0


def test_measures_dt_when_missing() -> None:
    log: list[tuple[str, float]] = []
    clock = FrameClock([_Recorder("scene", log)])
    clock.tick()
    assert log[0][1] >= 0.0
