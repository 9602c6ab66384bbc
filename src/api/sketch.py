"""
どこで: `api.sketch`（実行ランナー）。
何を: 設定解決・共有設定・シーン・ウィンドウ/GL・デバッグパネル・フレームクロックを結線して
    トゲトゲの球をリアルタイム描画する。
なぜ: 1 回の呼び出しで対話的な描画を始められるようにするため（パネルは任意で自動フォールバック）。

api.sketch: スパイク球の実行・描画ランナー

主エントリポイント:
- `run_sketch(*, fps=None, window_size=None, segments=None, ...)`:
  - `FluffyScene` が 1 フレームごとに頂点座標/頂点色/行列を組み立て、
    `SpikeRenderer` がそれを ModernGL で三角形として描画する。
  - ウィンドウは `pyglet`、パネルは `dearpygui`（任意）。

実行フロー（概要）:
1) 設定解決: 引数 > 環境変数（`common.settings`）> 設定ファイル（`util.utils.load_config()`）> 既定値。
2) 共有設定: `SpikeSettings` を生成し、シーン/パネルで同じインスタンスを参照する。
3) シーン: 共有の球メッシュを作り、起動時に厳選パラメータを 1 回引いてメッシュを構築する。
4) ウィンドウ/GL: `RenderWindow` と `ModernGL` を生成し、ポインタ/リサイズをシーンへ結線する。
5) パネル: 有効時のみ Dear PyGui のパネルを起動（失敗時は警告して続行）。
6) フレーム駆動: `FrameClock([scene, renderer])` を `pyglet.clock` で駆動する。
   `ESC` またはウィンドウを閉じると、クロック停止・パネル終了・GL リソース解放を 1 回だけ行う。

引数の意味（要点）:
- `fps`: 描画更新レート。`None` で設定ファイルから解決、未設定時は 60。
- `window_size`: `"WxH"` または `(width, height)` [px]。
- `segments`: 球の緯度/経度の分割数（既定 256）。
- `background`: RGBA (0–1) または Hex。既定は `hsl(0,0%,95%)`。
- `use_panel`: デバッグパネルの有効/無効。`None` で環境変数 `FLUFFY_DEBUG_PANEL`。
- `seed`: 再生成のシード選択を固定したいときの整数。
- `init_only`: True でウィンドウを作らず、シーン構築までを行ってシーンを返す。

注意/制限:
- ヘッドレス/仮想環境では `pyglet`/`ModernGL` の初期化に失敗する場合がある（例外はそのまま伝播）。
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from common.logging import setup_default_logging
from engine.core.scene import FluffyScene
from engine.core.frame_clock import FrameClock, Tickable
from engine.ui.parameters.state import SpikeSettings
from util.utils import load_config

from .sketch_runner.utils import (
    resolve_background,
    resolve_fps,
    resolve_log_level,
    resolve_radius,
    resolve_segments,
    resolve_use_panel,
    resolve_window_size,
)

logger = logging.getLogger(__name__)


def build_scene(
    *,
    segments: int | None = None,
    seed: int | None = None,
    cfg: dict[str, Any] | None = None,
    settings: SpikeSettings | None = None,
) -> FluffyScene:
    """ウィンドウなしでシーンを構築する（設定解決込み）。"""
    config = cfg if cfg is not None else load_config()
    seg = resolve_segments(segments, config)
    radius = resolve_radius(config)
    rng = np.random.default_rng(seed) if seed is not None else None
    return FluffyScene(
        settings if settings is not None else SpikeSettings(),
        segments=seg,
        radius=radius,
        rng=rng,
    )


def run_sketch(
    *,
    fps: int | None = None,
    window_size: str | tuple[int, int] | None = None,
    segments: int | None = None,
    background: str | tuple[float, ...] | None = None,
    use_panel: bool | None = None,
    log_level: str | None = None,
    seed: int | None = None,
    init_only: bool = False,
) -> FluffyScene | None:
    """スパイク球を描画するウィンドウを開き、閉じられるまでイベントループを回す。

    Parameters
    ----------
    fps : int | None
        描画更新レート。None で設定ファイルから解決。最終的に 1 以上にクランプ。
    window_size : str | tuple[int, int] | None
        `"WxH"` または `(width, height)`。None で設定ファイル/既定 800x800。
    segments : int | None
        球の分割数（3 以上）。None で環境変数/設定ファイル/既定 256。
    background : str | tuple | None
        背景色（RGBA 0–1 または #RRGGBB）。None で設定/既定を適用。
    use_panel : bool | None
        デバッグパネルの有効/無効。None で環境変数（既定 True）。
    log_level : str | None
        ロギングレベル名。None で環境変数 `FLUFFY_LOG_LEVEL`（既定 INFO）。
    seed : int | None
        再生成時のシード選択を固定する整数。None で非決定的。
    init_only : bool
        True でウィンドウを作らずシーンだけ構築して返す。

    Returns
    -------
    FluffyScene | None
        `init_only=True` のとき構築したシーン。それ以外は None。
    """
    setup_default_logging(resolve_log_level(log_level))

    # ---- ① 設定解決 --------------------------------------------------
    cfg = load_config()
    fps = resolve_fps(fps, cfg)
    window_width, window_height = resolve_window_size(window_size, cfg)
    bg_rgba = resolve_background(background, cfg)
    panel_enabled = resolve_use_panel(use_panel)

    # ---- ② 共有設定 + シーン ---------------------------------------
    settings = SpikeSettings()
    scene = build_scene(segments=segments, seed=seed, cfg=cfg, settings=settings)
    logger.info(
        "fluffy: %dx%d @ %d fps, %d vertices, panel=%s",
        window_width,
        window_height,
        fps,
        scene.base_mesh.vertex_count,
        panel_enabled,
    )

    if init_only:
        return scene

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import pyglet
    from pyglet.window import key

    from .sketch_runner.panel import setup_panel
    from .sketch_runner.render import create_window_and_renderer

    # ---- ③ Window & ModernGL ---------------------------------------
    rendering_window, _mgl_ctx, spike_renderer = create_window_and_renderer(
        window_width,
        window_height,
        background=bg_rgba,
        scene=scene,
    )

    # ---- ④ パネル -------------------------------------------------
    panel = setup_panel(settings, panel_enabled)

    # ---- ⑤ FrameClock ---------------------------------------------
    tickables: list[Tickable] = [scene, spike_renderer]
    frame_clock = FrameClock(tickables)
    pyglet.clock.schedule_interval(frame_clock.tick, 1 / fps)

    # ---- ⑥ pyglet イベント ------------------------------------------
    @rendering_window.event
    def on_key_press(sym, mods):  # noqa: ANN001
        if sym == key.ESCAPE:
            # on_close 経由で閉じ、後始末を 1 か所に集約する
            rendering_window.dispatch_event("on_close")
            return pyglet.event.EVENT_HANDLED
        return None

    @rendering_window.event
    def on_close():  # noqa: ANN001
        # 冪等なクリーンアップ
        if getattr(on_close, "_closed", False):
            return
        setattr(on_close, "_closed", True)
        frame_clock.stop()
        pyglet.clock.unschedule(frame_clock.tick)
        if panel is not None:
            try:
                panel.shutdown()
            except Exception:
                logger.debug("panel shutdown failed", exc_info=True)
        scene.on_teardown()
        logger.info("fluffy closed after %d frames (%.1fs)", frame_clock.frames, frame_clock.elapsed)
        pyglet.app.exit()

    pyglet.app.run()
    return None


__all__ = ["build_scene", "run_sketch"]
