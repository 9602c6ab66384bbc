from __future__ import annotations

import math

import numpy as np
import pytest

pytest.importorskip("hypothesis")
pytest.importorskip("numba")
from hypothesis import given, settings  # noqa: E402
from hypothesis import strategies as st  # noqa: E402

from effects.spikes import swirl  # noqa: E402
from engine.io.pointer import DECAY, Impulse, drag_direction  # noqa: E402

finite = st.floats(min_value=-10.0, max_value=10.0, allow_nan=False, allow_infinity=False)
coord = st.floats(min_value=-2.0, max_value=2.0, allow_nan=False, allow_infinity=False)


@given(x=finite, y=finite, n=st.integers(min_value=0, max_value=200))
def test_decay_is_geometric(x: float, y: float, n: int) -> None:
    imp = Impulse(x, y)
    for _ in range(n):
        imp.decay()
    assert imp.x == pytest.approx(x * DECAY**n, abs=1e-12)
    assert imp.y == pytest.approx(y * DECAY**n, abs=1e-12)


@given(r=st.floats(min_value=-1e4, max_value=1e4, allow_nan=False))
def test_direction_is_unit_sign(r: float) -> None:
    assert drag_direction(r) in (1, -1)


@given(r=st.floats(min_value=0.0, max_value=math.pi / 2, exclude_max=True))
def test_direction_positive_in_first_quarter(r: float) -> None:
    assert drag_direction(r) == 1


@settings(max_examples=60, deadline=None)
@given(
    pts=st.lists(st.tuples(coord, coord, coord), min_size=1, max_size=16),
    noise=st.lists(st.floats(min_value=-0.5, max_value=0.5, allow_nan=False), min_size=16, max_size=16),
    ix=finite,
    iy=finite,
    ry=finite,
)
def test_swirl_invariants(pts, noise, ix: float, iy: float, ry: float) -> None:
    src = np.asarray(pts, dtype=np.float64)
    un = np.asarray(noise[: len(pts)], dtype=np.float64)
    out = swirl(src, un, (ix, iy), ry)

    assert out.shape == src.shape
    flat = un <= 0.0
    assert np.array_equal(out[flat], src[flat])
    # 水平回転は XZ 平面の長さを保つ
    moved = ~flat
    assert np.allclose(
        np.hypot(out[moved, 0], out[moved, 2]), np.hypot(src[moved, 0], src[moved, 2]), atol=1e-9
    )


@settings(max_examples=40, deadline=None)
@given(pts=st.lists(st.tuples(coord, coord, coord), min_size=1, max_size=8), ry=finite)
def test_swirl_zero_impulse_is_identity(pts, ry: float) -> None:
    src = np.asarray(pts, dtype=np.float64)
    out = swirl(src, np.full(len(pts), 0.3), (0.0, 0.0), ry)
    assert np.allclose(out, src, atol=1e-9)
