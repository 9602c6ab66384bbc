"""
どこで: `engine.render` の高レベル描画。
何を: シーンが組み立てた `FrameData` を頂点/インデックスとして ModernGL に転送し、三角形を描画。
なぜ: 毎フレームのアップロード/描画/リソース寿命を一箇所に集約し、描画処理を単純化するため。
"""

from __future__ import annotations

import logging
from typing import Any

import moderngl as mgl
import numpy as np

from engine.core.scene import FluffyScene, FrameData

from ..core.frame_clock import Tickable
from .camera import gl_bytes


class SpikeRenderer(Tickable):
    """
    シーンの最新フレームを取得し、毎フレームGPUに送り込む作業を管理。
    IBO は球の位相が変わったときだけ、位置/色の VBO は毎フレーム書き換える。
    """

    def __init__(self, mgl_context: Any, scene: FluffyScene):
        self.ctx = mgl_context
        self.scene = scene
        self._logger = logging.getLogger(__name__)

        # 遅延 import（moderngl コンテキストがある時だけ必要）
        from .mesh_buffer import SpikeMeshBuffer  # local import
        from .shader import Shader  # local import

        self.program = Shader.create_shader(mgl_context)
        self.gpu = SpikeMeshBuffer(ctx=mgl_context, program=self.program)
        # 直近アップロードしたインデックス配列（同一オブジェクトなら IBO を再利用）
        self._indices_ref: np.ndarray | None = None
        self._last_frame_index: int = -1
        self._ibo_uploads: int = 0
        self._released = False

    # --------------------------------------------------------------------- #
    # Tickable                                                               #
    # --------------------------------------------------------------------- #
    def tick(self, dt: float) -> None:
        """
        毎フレーム呼ばれ、シーンに新しいフレームがあればGPUへ転送。
        """
        frame = self.scene.latest_frame
        if frame is None or frame.index == self._last_frame_index:
            return
        self.upload(frame)

    # --------------------------------------------------------------------- #
    # Public drawing API                                                    #
    # --------------------------------------------------------------------- #
    def upload(self, frame: FrameData) -> None:
        if self._released:
            return
        if frame.indices is not self._indices_ref:
            self.gpu.upload_indices(flatten_indices(frame.indices))
            self._indices_ref = frame.indices
            self._ibo_uploads += 1
        self.gpu.update_vertices(frame.positions, frame.colors)
        self.program["mvp"].write(gl_bytes(frame.mvp))
        self._last_frame_index = frame.index
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(
                "frame %d uploaded: verts=%d gen=%d", frame.index, self.gpu.vertex_count, frame.generation
            )

    def draw(self) -> None:
        """GPUに送ったデータを画面に描画"""
        if self._released:
            return
        self.ctx.enable(mgl.DEPTH_TEST)
        self.gpu.render(mgl.TRIANGLES)

    def release(self) -> None:
        """GPU リソースを解放。"""
        if self._released:
            return
        self._released = True
        self.gpu.release()
        self.program.release()

    # HUD/デバッグ用
    def get_upload_stats(self) -> dict[str, int]:
        return {
            "ibo_uploads": int(self._ibo_uploads),
            "last_frame": int(self._last_frame_index),
            "vertices": int(self.gpu.vertex_count),
            "indices": int(self.gpu.index_count),
        }


# ---------- utility -------------------------------------------------------- #
def flatten_indices(indices: np.ndarray) -> np.ndarray:
    """(M,3) の三角形インデックスを連続した uint32 の 1 次元配列にする。"""
    arr = np.asarray(indices)
    if arr.ndim == 2 and arr.shape[1] != 3:
        raise ValueError(f"indices must have shape (M, 3), got {arr.shape}")
    if arr.ndim not in (1, 2):
        raise ValueError(f"indices must be 1-D or (M, 3), got {arr.shape}")
    return np.ascontiguousarray(arr.reshape(-1), dtype=np.uint32)


__all__ = ["SpikeRenderer", "flatten_indices"]
