"""
どこで: `engine.core` のシーン層（フレームコールバックの本体）。
何を: 共有設定・慣性トラッカ・姿勢・カメラ・現在のメッシュを保持し、
    1 フレーム分の頂点座標/頂点色/行列を `FrameData` として組み立てる。
なぜ: ウィンドウや GPU から独立した「描画ホスト契約」（resize / frame / teardown）を
    1 か所に置き、ヘッドレスでも状態遷移を検証できるようにするため。

フレームの手順（`on_frame`）:
1. 保留中の再生成要求を 1 回だけ消費する（reset はパラメータ生成を含む）。
   新しい `SpikeMesh` を完成させてから参照を差し替える。旧インスタンスには触れない。
2. 慣性ベクトルを減衰させる。
3. 姿勢を進める（`y += 0.003 + impulse.x`, `x += impulse.y`）。
4. 減衰後の慣性と更新後の Y 回転でスワールを計算し、時刻で頂点色を決める。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, Sequence

import numpy as np

from common.settings import DEFAULT_SPHERE_SEGMENTS
from common.types import RGB, Vec2
from effects.shading import shade_vertices
from effects.spikes import SpikeField, bake_spikes, swirl
from engine.io.pointer import ImpulseTracker
from engine.render.camera import OrthoCamera
from engine.render.transform import model_view_projection, scene_rotation_matrix
from engine.ui.parameters.state import SpikeSettings
from palette.generator import generate_params
from palette.library import PALETTES, shading_colors
from shapes.sphere import sphere_mesh
from util.constants import SPHERE_RADIUS

from .geometry import MeshData

logger = logging.getLogger(__name__)

# 毎フレーム Y 軸に加える基本自転量 [rad]
BASE_SPIN: float = 0.003


class Releasable(Protocol):
    def release(self) -> None: ...


@dataclass
class ScenePose:
    """シーン全体の累積回転（丸めない）。"""

    rotation_x: float = 0.0
    rotation_y: float = 0.0

    def advance(self, impulse: Vec2) -> None:
        self.rotation_y += BASE_SPIN + float(impulse[0])
        self.rotation_x += float(impulse[1])


@dataclass(frozen=True, eq=False)
class SpikeMesh:
    """1 回の再生成で確定する描画対象。生成後は不変で、更新は作り直しで行う。"""

    base: MeshData
    field: SpikeField
    spike_detail: float
    spike_length: float
    palette: tuple[str, ...]
    palette_index: int
    color_a: RGB
    color_b: RGB
    generation: int = 0

    @property
    def vertex_count(self) -> int:
        return self.base.vertex_count


def build_spike_mesh(
    base: MeshData,
    spike_detail: float,
    spike_length: float,
    palette: Sequence[str],
    *,
    palette_index: int = -1,
    generation: int = 0,
) -> SpikeMesh:
    """共有の球メッシュからスパイク付きメッシュを作る（球メッシュ自体は変更しない）。"""
    pal = tuple(palette)
    color_a, color_b = shading_colors(pal)
    spike_field = bake_spikes(base, spike_detail, spike_length)
    return SpikeMesh(
        base=base,
        field=spike_field,
        spike_detail=float(spike_detail),
        spike_length=float(spike_length),
        palette=pal,
        palette_index=int(palette_index),
        color_a=color_a,
        color_b=color_b,
        generation=int(generation),
    )


@dataclass(frozen=True, eq=False)
class FrameData:
    """1 フレーム分の描画入力。`indices` はメッシュ間で共有される読み取り専用配列。"""

    index: int
    time: float
    positions: np.ndarray  # (N,3) float32
    colors: np.ndarray  # (N,4) float32
    indices: np.ndarray  # (M,3) uint32
    model: np.ndarray
    view: np.ndarray
    projection: np.ndarray
    mvp: np.ndarray
    impulse: Vec2
    rotation: Vec2
    generation: int = 0


class FluffyScene:
    """描画ホスト契約（`on_resize` / `on_frame` / `on_teardown`）の実装。

    - `settings`: パネル/再生成ボタンと共有する設定レコード。
    - `tracker`: ポインタ入力の慣性トラッカ（未指定なら新規）。
    - `base_mesh`: 共有の球メッシュ（未指定なら `sphere_mesh(radius, segments, segments)`）。
    - `rng`: 再生成時のシード選択に使う乱数（テストで固定したい場合に渡す）。
    - `regenerate_on_start`: True なら起動時にパラメータ生成を 1 回行う。
    """

    def __init__(
        self,
        settings: SpikeSettings,
        *,
        tracker: ImpulseTracker | None = None,
        camera: OrthoCamera | None = None,
        base_mesh: MeshData | None = None,
        segments: int | None = None,
        radius: float = SPHERE_RADIUS,
        rng: np.random.Generator | None = None,
        regenerate_on_start: bool = True,
    ) -> None:
        self.settings = settings
        self.tracker = tracker if tracker is not None else ImpulseTracker()
        self.camera = camera if camera is not None else OrthoCamera()
        self.pose = ScenePose()
        if base_mesh is None:
            seg = int(segments) if segments is not None else DEFAULT_SPHERE_SEGMENTS
            base_mesh = sphere_mesh(float(radius), seg, seg)
        self._base = base_mesh
        self._rng = rng
        self._generation = 0
        self._frame_index = 0
        self._elapsed = 0.0
        self._renderer: Releasable | None = None
        self._torn_down = False
        self.latest_frame: FrameData | None = None

        if regenerate_on_start:
            self.regenerate()
        self._mesh = self._build_from_settings()

    # ---- 参照 ----
    @property
    def mesh(self) -> SpikeMesh:
        return self._mesh

    @property
    def base_mesh(self) -> MeshData:
        return self._base

    @property
    def is_torn_down(self) -> bool:
        return self._torn_down

    def attach_renderer(self, renderer: Releasable) -> None:
        self._renderer = renderer

    # ---- 再生成 ----
    def regenerate(self) -> None:
        """厳選パラメータを引き直して共有設定へ反映する（メッシュは作らない）。"""
        params = generate_params(self._rng)
        self.settings.apply_generated(
            params.spike_detail, params.spike_length, params.palette, params.palette_index
        )

    def _build_from_settings(self) -> SpikeMesh:
        palette = self.settings.palette
        palette_index = self.settings.palette_index
        if not palette:
            palette, palette_index = PALETTES[0], 0
        mesh = build_spike_mesh(
            self._base,
            self.settings.spike_detail,
            self.settings.spike_length,
            palette,
            palette_index=palette_index,
            generation=self._generation,
        )
        self._generation += 1
        logger.info(
            "spike mesh built: detail=%.3f length=%.3f palette=%d spikes=%d/%d",
            mesh.spike_detail,
            mesh.spike_length,
            mesh.palette_index,
            mesh.field.spike_count,
            mesh.vertex_count,
        )
        return mesh

    def rebuild(self, *, reset: bool = False) -> SpikeMesh:
        """新しいメッシュを完成させてから参照を差し替える。"""
        if reset:
            self.regenerate()
        mesh = self._build_from_settings()
        self._mesh = mesh
        return mesh

    # ---- 入力 ----
    def on_pointer_down(self, client_x: float, client_y: float, width: float, height: float) -> None:
        self.tracker.press(client_x, client_y, width, height)

    def on_pointer_move(self, client_x: float, client_y: float, width: float, height: float) -> None:
        self.tracker.drag(client_x, client_y, width, height, self.pose.rotation_x)

    def on_pointer_up(self) -> None:
        self.tracker.release()

    # ---- 描画ホスト契約 ----
    def on_resize(self, pixel_ratio: float, width: float, height: float) -> None:
        self.camera.resize(pixel_ratio, width, height)

    def on_frame(self, time: float) -> FrameData:
        """1 フレーム進めて描画入力を返す。"""
        request = self.settings.consume_requests()
        if request.pending:
            self.rebuild(reset=request.reset)

        self.tracker.decay()
        impulse = self.tracker.impulse.as_tuple()
        self.pose.advance(impulse)

        mesh = self._mesh
        positions = swirl(mesh.field.extruded, mesh.field.uv_noise, impulse, self.pose.rotation_y)
        colors = shade_vertices(
            mesh.base.uvs,
            mesh.field.uv_noise,
            float(time),
            mesh.color_a,
            mesh.color_b,
            mesh.spike_length,
        )
        model = scene_rotation_matrix(self.pose.rotation_x, self.pose.rotation_y)
        view = self.camera.view_matrix
        projection = self.camera.projection_matrix
        frame = FrameData(
            index=self._frame_index,
            time=float(time),
            positions=positions.astype(np.float32),
            colors=colors,
            indices=mesh.base.indices,
            model=model,
            view=view,
            projection=projection,
            mvp=model_view_projection(projection, view, model),
            impulse=impulse,
            rotation=(self.pose.rotation_x, self.pose.rotation_y),
            generation=mesh.generation,
        )
        self._frame_index += 1
        self.latest_frame = frame
        return frame

    # Tickable
    def tick(self, dt: float) -> None:
        if self._torn_down:
            return
        self._elapsed += float(dt)
        self.on_frame(self._elapsed)

    def on_teardown(self) -> None:
        """レンダラを 1 度だけ解放する（2 回目以降は何もしない）。"""
        if self._torn_down:
            return
        self._torn_down = True
        renderer = self._renderer
        self._renderer = None
        if renderer is not None:
            renderer.release()
        logger.debug("scene torn down after %d frames", self._frame_index)


__all__ = [
    "BASE_SPIN",
    "FluffyScene",
    "FrameData",
    "ScenePose",
    "SpikeMesh",
    "build_spike_mesh",
]
