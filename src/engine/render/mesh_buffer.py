"""
どこで: `engine.render` の低レベルメッシュ層。
何を: 位置/色の VBO と IBO、VAO の確保・更新・解放を担当し、描画可能な SpikeMeshBuffer を管理。
なぜ: GPU 転送の詳細を Renderer から切り離し、再確保や VAO の張り直しを一元化するため。
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)


class SpikeMeshBuffer:
    """
    GPUに頂点位置・頂点色・インデックスを送り込む作業を管理
    """

    def __init__(
        self,
        ctx: Any,
        program: Any,
        # 256x256 球（約 6.6 万頂点）が再確保なしで収まる量
        initial_reserve: int = 2 * 1024 * 1024,
    ):
        """
        ctx: moderngl コンテキスト
        program: 頂点色メッシュ用のシェーダープログラム
        position VBO: 毎フレーム書き換える頂点座標（float32 x3）
        color VBO: 毎フレーム書き換える頂点色（float32 x4）
        IBO: 三角形のインデックス（uint32）。球の位相が変わったときだけ書き換える
        """
        self.ctx = ctx
        self.program = program
        self.initial_reserve = initial_reserve

        self.position_vbo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.color_vbo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.ibo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.vao = self._build_vao()

        self.index_count: int = 0
        self.vertex_count: int = 0

    def _build_vao(self) -> Any:
        return self.ctx.vertex_array(
            self.program,
            [
                (self.position_vbo, "3f", "in_position"),
                (self.color_vbo, "4f", "in_color"),
            ],
            index_buffer=self.ibo,
            index_element_size=4,
        )

    # ---------- バッファ操作 ----------
    def _grow(self, buf: Any, size: int) -> tuple[Any, bool]:
        if size <= buf.size:
            return buf, False
        buf.release()
        return self.ctx.buffer(reserve=max(size, self.initial_reserve), dynamic=True), True

    def _ensure_capacity(self, pos_size: int, col_size: int, ibo_size: int) -> None:
        """データが大きくなったらGPUのバッファを再確保"""
        self.position_vbo, a = self._grow(self.position_vbo, pos_size)
        self.color_vbo, b = self._grow(self.color_vbo, col_size)
        self.ibo, c = self._grow(self.ibo, ibo_size)
        if a or b or c:
            # VAO はバッファが差し替わるたびに張り直す
            self.vao.release()
            self.vao = self._build_vao()

    def upload_indices(self, indices: np.ndarray) -> None:
        """IBO を書き換える（位相が変わったときのみ）。"""
        inds = np.ascontiguousarray(indices, dtype=np.uint32)
        self._ensure_capacity(0, 0, inds.nbytes)
        self.ibo.orphan()
        self.ibo.write(inds.tobytes())
        self.index_count = int(inds.shape[0])
        logger.debug("IBO uploaded: %d indices (%.1f KB)", self.index_count, inds.nbytes / 1024.0)

    def update_vertices(self, positions: np.ndarray, colors: np.ndarray) -> None:
        """IBO を変更せず、位置/色の VBO だけを更新する毎フレームの経路。"""
        pos = np.ascontiguousarray(positions, dtype=np.float32)
        col = np.ascontiguousarray(colors, dtype=np.float32)
        if pos.shape[0] != col.shape[0]:
            raise ValueError(f"positions/colors length mismatch: {pos.shape[0]} != {col.shape[0]}")
        self._ensure_capacity(pos.nbytes, col.nbytes, 0)
        self.position_vbo.orphan()
        self.position_vbo.write(pos.tobytes())
        self.color_vbo.orphan()
        self.color_vbo.write(col.tobytes())
        self.vertex_count = int(pos.shape[0])

    def render(self, mode: int) -> None:
        if self.index_count > 0 and self.vertex_count > 0:
            self.vao.render(mode, self.index_count)

    def release(self) -> None:
        """GPUのメモリを解放する（終了時に使う）"""
        self.position_vbo.release()
        self.color_vbo.release()
        self.ibo.release()
        self.vao.release()


__all__ = ["SpikeMeshBuffer"]
