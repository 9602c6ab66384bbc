from __future__ import annotations

import math

import pytest

from engine.io.pointer import (
    DECAY,
    DragState,
    Impulse,
    ImpulseTracker,
    drag_direction,
    normalize_pointer,
)


def test_normalize_pointer_corners_and_center() -> None:
    assert normalize_pointer(0, 0, 200, 100) == (-1.0, 1.0)
    assert normalize_pointer(200, 100, 200, 100) == (1.0, -1.0)
    assert normalize_pointer(100, 50, 200, 100) == (0.0, 0.0)


@pytest.mark.parametrize("w,h", [(0, 100), (100, 0), (-1, 10)])
def test_normalize_pointer_rejects_empty_viewport(w: float, h: float) -> None:
    with pytest.raises(ValueError):
        normalize_pointer(1, 1, w, h)


def test_drag_direction_boundaries() -> None:
    assert drag_direction(0.0) == 1
    # (π/2 + π/2) / π = 1.0 → "> 1" ではない
    assert drag_direction(math.pi / 2) == 1
    # 上下逆さま（(π + π/2) / π = 1.5）
    assert drag_direction(math.pi) == -1
    assert drag_direction(math.pi / 2 + 1e-9) == -1
    # 一周すると元に戻る
    assert drag_direction(2 * math.pi) == 1
    # 負の回転は剰余が負になり反転しない
    assert drag_direction(-math.pi) == 1


@pytest.mark.smoke
def test_single_drag_end_to_end() -> None:
    tracker = ImpulseTracker()
    # 200x200 のビューポートで (100,100) → 正規化 (0,0), (110,100) → (0.1,0)
    tracker.press(100, 100, 200, 200)
    tracker.drag(110, 100, 200, 200, scene_rotation_x=0.0)
    assert tracker.impulse.x == pytest.approx(0.05)
    assert tracker.impulse.y == 0.0


def test_vertical_drag_subtracts() -> None:
    tracker = ImpulseTracker()
    tracker.press(100, 100, 200, 200)
    # 上へ 20px → 正規化 y は +0.2 → impulse.y -= 0.1
    dx, dy = tracker.drag(100, 80, 200, 200)
    assert dx == 0.0
    assert dy == pytest.approx(-0.1)
    assert tracker.impulse.y == pytest.approx(-0.1)


def test_drag_flips_when_upside_down() -> None:
    tracker = ImpulseTracker()
    tracker.press(100, 100, 200, 200)
    tracker.drag(110, 100, 200, 200, scene_rotation_x=math.pi)
    assert tracker.impulse.x == pytest.approx(-0.05)


def test_drag_accumulates_and_moves_anchor() -> None:
    tracker = ImpulseTracker()
    tracker.press(100, 100, 200, 200)
    tracker.drag(110, 100, 200, 200)
    tracker.drag(120, 100, 200, 200)
    assert tracker.impulse.x == pytest.approx(0.1)
    assert tracker.anchor == pytest.approx((0.2, 0.0))


def test_press_discards_previous_history() -> None:
    tracker = ImpulseTracker()
    tracker.press(0, 0, 200, 200)
    tracker.release()
    tracker.press(100, 100, 200, 200)
    tracker.drag(100, 100, 200, 200)
    assert tracker.impulse.as_tuple() == (0.0, 0.0)


def test_idle_drag_is_ignored() -> None:
    tracker = ImpulseTracker()
    assert tracker.state is DragState.IDLE
    assert tracker.drag(150, 50, 200, 200) == (0.0, 0.0)
    assert tracker.impulse.as_tuple() == (0.0, 0.0)


def test_release_keeps_impulse() -> None:
    tracker = ImpulseTracker()
    tracker.press(100, 100, 200, 200)
    tracker.drag(140, 100, 200, 200)
    before = tracker.impulse.as_tuple()
    tracker.release()
    assert not tracker.is_dragging
    assert tracker.impulse.as_tuple() == before


def test_decay_is_geometric_and_never_exact_zero() -> None:
    imp = Impulse(0.4, -0.2)
    for _ in range(25):
        imp.decay()
    assert imp.x == pytest.approx(0.4 * DECAY**25)
    assert imp.y == pytest.approx(-0.2 * DECAY**25)
    assert imp.x != 0.0 and imp.y != 0.0


def test_shared_impulse_instance() -> None:
    shared = Impulse()
    tracker = ImpulseTracker(shared)
    tracker.press(0, 0, 10, 10)
    tracker.drag(5, 0, 10, 10)
    assert shared.x == pytest.approx(0.5)
