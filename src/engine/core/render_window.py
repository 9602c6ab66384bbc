"""
どこで: `engine.core` の描画ウィンドウ薄ラッパ。
何を: Pyglet Window（MSAA/背景クリア）と描画/リサイズのコールバック登録、
    マウスドラッグをポインタハンドラへ中継する処理を提供。
なぜ: シーン/レンダラ層から GUI 依存を切り離し、最小インターフェイスで統一するため。

使用例:
    win = RenderWindow(800, 800, bg_color=(0.95, 0.95, 0.95, 1))
    win.set_pointer_handler(scene)
    win.add_resize_callback(scene.on_resize)
    win.add_draw_callback(renderer.draw)
    pyglet.app.run()
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

import pyglet
from pyglet.gl import Config, glClearColor
from pyglet.window import mouse

logger = logging.getLogger(__name__)


class PointerHandler(Protocol):
    """左上原点のクライアント座標でポインタを受け取る側。"""

    def on_pointer_down(self, client_x: float, client_y: float, width: float, height: float) -> None: ...

    def on_pointer_move(self, client_x: float, client_y: float, width: float, height: float) -> None: ...

    def on_pointer_up(self) -> None: ...


ResizeCallback = Callable[[float, int, int], None]


class RenderWindow(pyglet.window.Window):
    def __init__(
        self,
        width: int,
        height: int,
        *,
        bg_color: tuple[float, float, float, float] = (0.95, 0.95, 0.95, 1.0),
        caption: str = "Fluffy",
    ):
        """ウィンドウを生成する。

        引数:
            width: ウィンドウ幅（ピクセル）。
            height: ウィンドウ高さ（ピクセル）。
            bg_color: 背景色 RGBA（0.0〜1.0）。
            caption: タイトルバーの文字列。
        """
        # スパイクの輪郭を滑らかにするために MSAA を有効化
        config = Config(
            double_buffer=True, sample_buffers=1, samples=4, depth_size=24, vsync=True
        )
        super().__init__(
            width=width, height=height, caption=caption, config=config, resizable=True
        )
        self._bg_color = bg_color
        self._draw_callbacks: list[Callable[[], None]] = []
        self._resize_callbacks: list[ResizeCallback] = []
        self._pointer: PointerHandler | None = None

    def add_draw_callback(self, func: Callable[[], None]) -> None:
        """
        `on_draw` 中に呼び出す描画関数を登録する。

        - 関数は引数を取らず、副作用で描画を行うこと。
        - 登録順に呼び出される。
        """
        self._draw_callbacks.append(func)

    def add_resize_callback(self, func: ResizeCallback) -> None:
        """`(pixel_ratio, width, height)` を受け取るリサイズ関数を登録し、現在の寸法で 1 回呼ぶ。"""
        self._resize_callbacks.append(func)
        func(self.pixel_ratio, self.width, self.height)

    def set_pointer_handler(self, handler: PointerHandler | None) -> None:
        self._pointer = handler

    @property
    def pixel_ratio(self) -> float:
        fb_w, _fb_h = self.get_framebuffer_size()
        return float(fb_w) / float(self.width) if self.width > 0 else 1.0

    def on_draw(self):  # Pyglet 既定のイベント名
        """ウィンドウ描画イベントハンドラ。登録された描画コールバックを呼び出す。"""
        r, g, b, a = self._bg_color
        glClearColor(r, g, b, a)
        self.clear()
        for cb in self._draw_callbacks:
            cb()

    def on_resize(self, width, height):  # noqa: ANN001
        super().on_resize(width, height)
        if width <= 0 or height <= 0:
            # 最小化中は寸法 0 が来るので無視
            return
        for cb in self._resize_callbacks:
            cb(self.pixel_ratio, width, height)

    # ---- pointer ----
    # pyglet は左下原点なので、左上原点のクライアント座標へ変換して渡す
    def on_mouse_press(self, x, y, button, modifiers):  # noqa: ANN001
        if self._pointer is not None and button == mouse.LEFT:
            self._pointer.on_pointer_down(x, self.height - y, self.width, self.height)

    def on_mouse_drag(self, x, y, dx, dy, buttons, modifiers):  # noqa: ANN001
        if self._pointer is not None and buttons & mouse.LEFT:
            self._pointer.on_pointer_move(x, self.height - y, self.width, self.height)

    def on_mouse_release(self, x, y, button, modifiers):  # noqa: ANN001
        if self._pointer is not None and button == mouse.LEFT:
            self._pointer.on_pointer_up()
