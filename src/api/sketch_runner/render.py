"""
どこで: `api.sketch_runner.render`
何を: RenderWindow/ModernGL/SpikeRenderer の初期化と、シーンへの入力/リサイズ配線。
なぜ: `api.sketch` を薄くし、描画初期化の責務を分離するため。
"""

from __future__ import annotations

import logging

import moderngl

from engine.core.scene import FluffyScene

logger = logging.getLogger(__name__)


def create_window_and_renderer(
    window_width: int,
    window_height: int,
    *,
    background: tuple[float, float, float, float],
    scene: FluffyScene,
):
    """ウィンドウ/ModernGL/SpikeRenderer を生成し、シーンと結線して返す。

    Returns
    -------
    (rendering_window, mgl_ctx, spike_renderer)
    """

    from engine.core.render_window import RenderWindow
    from engine.render.renderer import SpikeRenderer

    rendering_window = RenderWindow(window_width, window_height, bg_color=background)  # type: ignore[abstract]

    # ModernGL コンテキスト（pyglet が作った GL コンテキストを共有）
    mgl_ctx: moderngl.Context = moderngl.create_context()
    mgl_ctx.enable(moderngl.DEPTH_TEST)
    logger.debug("moderngl context: %s", mgl_ctx.info.get("GL_VERSION", "?"))

    spike_renderer = SpikeRenderer(mgl_context=mgl_ctx, scene=scene)
    scene.attach_renderer(spike_renderer)

    rendering_window.set_pointer_handler(scene)
    rendering_window.add_resize_callback(scene.on_resize)
    rendering_window.add_draw_callback(spike_renderer.draw)

    return rendering_window, mgl_ctx, spike_renderer


__all__ = ["create_window_and_renderer"]
