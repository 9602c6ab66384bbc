from __future__ import annotations

import pytest

pytest.importorskip("numba")

from api import build_scene, run_sketch  # noqa: E402
from engine.core.scene import FluffyScene  # noqa: E402
from engine.ui.parameters.state import SpikeSettings  # noqa: E402


@pytest.mark.smoke
def test_init_only_returns_scene_without_window() -> None:
    scene = run_sketch(segments=12, seed=3, init_only=True, use_panel=False, log_level="WARNING")
    assert isinstance(scene, FluffyScene)
    assert scene.base_mesh.vertex_count == 13 * 13
    frame = scene.on_frame(0.0)
    assert frame.positions.shape == (169, 3)


def test_build_scene_is_seed_reproducible() -> None:
    a = build_scene(segments=8, seed=11, cfg={}, settings=SpikeSettings())
    b = build_scene(segments=8, seed=11, cfg={}, settings=SpikeSettings())
    assert a.settings.snapshot() == b.settings.snapshot()
    assert a.mesh.palette == b.mesh.palette
