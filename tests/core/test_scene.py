from __future__ import annotations

import numpy as np
import pytest

pytest.importorskip("numba")

from effects.spikes import bake_spikes  # noqa: E402
from engine.core.scene import BASE_SPIN, FluffyScene, ScenePose, build_spike_mesh  # noqa: E402
from engine.io.pointer import DECAY  # noqa: E402
from palette.library import PALETTES  # noqa: E402


def _scene(small_sphere, settings, **kw) -> FluffyScene:
    return FluffyScene(
        settings, base_mesh=small_sphere, rng=np.random.default_rng(7), **kw
    )


@pytest.mark.smoke
def test_startup_generates_curated_params(small_sphere, settings) -> None:
    scene = _scene(small_sphere, settings)
    assert 1.35 <= settings.spike_detail < 40.0
    assert 1.0 <= settings.spike_length < 1.4
    assert settings.palette in PALETTES
    mesh = scene.mesh
    assert mesh.spike_detail == settings.spike_detail
    assert mesh.palette == settings.palette
    assert mesh.base is small_sphere


def test_frame_shapes_and_dtypes(small_sphere, settings) -> None:
    scene = _scene(small_sphere, settings)
    scene.on_resize(1.0, 800, 600)
    frame = scene.on_frame(0.5)
    n = small_sphere.vertex_count
    assert frame.positions.shape == (n, 3) and frame.positions.dtype == np.float32
    assert frame.colors.shape == (n, 4) and frame.colors.dtype == np.float32
    assert frame.indices is small_sphere.indices
    assert frame.mvp.shape == (4, 4)
    assert scene.latest_frame is frame


def test_idle_frames_decay_and_spin(small_sphere, settings) -> None:
    scene = _scene(small_sphere, settings)
    scene.tracker.impulse.x = 0.2
    scene.tracker.impulse.y = -0.1
    frame = scene.on_frame(0.0)
    # 減衰後の値で姿勢を進める
    assert frame.impulse == pytest.approx((0.2 * DECAY, -0.1 * DECAY))
    assert scene.pose.rotation_y == pytest.approx(BASE_SPIN + 0.2 * DECAY)
    assert scene.pose.rotation_x == pytest.approx(-0.1 * DECAY)
    for _ in range(9):
        scene.on_frame(0.0)
    assert scene.tracker.impulse.x == pytest.approx(0.2 * DECAY**10)


def test_zero_impulse_frame_is_plain_extrusion(small_sphere, settings) -> None:
    scene = _scene(small_sphere, settings)
    frame = scene.on_frame(1.0)
    expected = scene.mesh.field.extruded.astype(np.float32)
    assert np.allclose(frame.positions, expected, atol=1e-6)


def test_update_request_rebuilds_by_swap(small_sphere, settings) -> None:
    scene = _scene(small_sphere, settings)
    old = scene.mesh
    old_uv = old.field.uv_noise.copy()
    settings.set_spike_length(1.45)
    settings.request_update()
    scene.on_frame(0.0)
    new = scene.mesh
    assert new is not old
    assert new.spike_length == pytest.approx(1.45)
    assert new.generation == old.generation + 1
    # 旧インスタンスは変更されない
    assert np.array_equal(old.field.uv_noise, old_uv)
    assert old.spike_length != pytest.approx(1.45)
    # 要求は 1 回だけ消費される
    scene.on_frame(0.0)
    assert scene.mesh is new


def test_reset_request_regenerates_params(small_sphere, settings) -> None:
    scene = _scene(small_sphere, settings)
    settings.set_spike_detail(49.0)
    settings.request_reset()
    scene.on_frame(0.0)
    assert scene.mesh.spike_detail < 40.0
    assert scene.mesh.spike_detail == settings.spike_detail


def test_pointer_drag_through_scene(small_sphere, settings) -> None:
    scene = _scene(small_sphere, settings)
    scene.on_pointer_down(100, 100, 200, 200)
    scene.on_pointer_move(110, 100, 200, 200)
    assert scene.tracker.impulse.x == pytest.approx(0.05)
    scene.on_pointer_up()
    assert not scene.tracker.is_dragging


def test_teardown_releases_once(small_sphere, settings, fake_renderer) -> None:
    scene = _scene(small_sphere, settings)
    scene.attach_renderer(fake_renderer)
    scene.on_teardown()
    scene.on_teardown()
    assert fake_renderer.released == 1
    assert scene.is_torn_down
    # teardown 後の tick は何もしない
    scene.latest_frame = None
    scene.tick(1 / 60)
    assert scene.latest_frame is None


def test_tick_accumulates_time(small_sphere, settings) -> None:
    scene = _scene(small_sphere, settings)
    scene.tick(0.25)
    scene.tick(0.25)
    assert scene.latest_frame is not None
    assert scene.latest_frame.time == pytest.approx(0.5)
    assert scene.latest_frame.index == 1


def test_build_spike_mesh_uses_palette_endpoints(small_sphere) -> None:
    mesh = build_spike_mesh(small_sphere, 5.0, 1.2, PALETTES[2], palette_index=2)
    assert mesh.color_a == pytest.approx((0xEC / 255, 0xD0 / 255, 0x78 / 255))
    assert mesh.color_b == pytest.approx((0x54 / 255, 0x24 / 255, 0x37 / 255))
    field = bake_spikes(small_sphere, 5.0, 1.2)
    assert np.array_equal(mesh.field.uv_noise, field.uv_noise)


def test_scene_pose_accumulates_without_wrapping() -> None:
    pose = ScenePose()
    for _ in range(1000):
        pose.advance((0.01, 0.0))
    assert pose.rotation_y == pytest.approx(1000 * (BASE_SPIN + 0.01))
