"""
どこで: `engine.ui.parameters` の Dear PyGui 実装。
何を: SpikeSettings に結び付いた 3 つのコントロール（Detail/Size スライダーと Regenerate ボタン）を表示する。
なぜ: ウィンドウ寿命管理と DPG ドライバ制御だけを担い、値の検証/再生成要求は SpikeSettings に委ねるため。
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

import dearpygui.dearpygui as dpg  # type: ignore
import pyglet

from .state import (
    REGENERATE,
    SPIKE_DETAIL,
    SPIKE_LENGTH,
    ParameterDescriptor,
    ParameterWindowConfig,
    SpikeSettings,
)

# タグ定数
ROOT_TAG = "__fluffy_param_root__"
TAG_PREFIX = "__fluffy_param__"

# パネル描画の間隔 [s]
DRIVER_INTERVAL: float = 1.0 / 60.0

logger = logging.getLogger("engine.ui.parameters.dpg")


def widget_tag(desc: ParameterDescriptor) -> str:
    return f"{TAG_PREFIX}{desc.id}"


class ParameterWindow:
    """Dear PyGui によるパラメータウィンドウ実装。"""

    def __init__(
        self,
        *,
        settings: SpikeSettings,
        config: ParameterWindowConfig | None = None,
        auto_show: bool = True,
    ) -> None:
        self._settings = settings
        self._config = config or ParameterWindowConfig()
        self._visible = False
        self._driver: Callable[[float], None] | None = None
        self._closing: bool = False

        dpg.create_context()
        self._viewport = dpg.create_viewport(
            title=self._config.title,
            width=self._config.width,
            height=self._config.height,
        )
        dpg.setup_dearpygui()
        self._build_root_window()

        def _on_settings_change(ids: Iterable[str]) -> None:
            # 再生成で値が変わったらスライダー表示を追従させる
            try:
                self.sync_from_settings(ids)
            except Exception:
                logger.exception("settings change handling failed")

        self._settings_listener = _on_settings_change
        self._settings.subscribe(self._settings_listener)

        if auto_show:
            dpg.show_viewport()
            self._visible = True
            self._start_driver()

    # ---- layout ----
    def _build_root_window(self) -> None:
        with dpg.window(tag=ROOT_TAG, label=self._config.title, no_close=True):
            for desc, current in (
                (SPIKE_DETAIL, self._settings.spike_detail),
                (SPIKE_LENGTH, self._settings.spike_length),
            ):
                hint = desc.range_hint
                assert hint is not None
                dpg.add_slider_float(
                    tag=widget_tag(desc),
                    label=desc.label,
                    default_value=float(current),
                    min_value=float(hint.min_value),
                    max_value=float(hint.max_value),
                    format="%.2f",
                    callback=self._on_slider,
                    user_data=desc.id,
                )
            dpg.add_button(
                tag=widget_tag(REGENERATE),
                label=REGENERATE.label,
                callback=self._on_regenerate,
            )
        dpg.set_primary_window(ROOT_TAG, True)

    # ---- callbacks ----
    def _on_slider(self, _sender: Any, app_data: Any, user_data: Any) -> None:
        try:
            if user_data == SPIKE_DETAIL.id:
                self._settings.set_spike_detail(SPIKE_DETAIL.snap(app_data))
            elif user_data == SPIKE_LENGTH.id:
                self._settings.set_spike_length(SPIKE_LENGTH.snap(app_data))
            else:
                return
        except ValueError:
            logger.warning("ignored invalid slider value %r for %s", app_data, user_data)
            return
        self._settings.request_update()

    def _on_regenerate(self, *_args: Any) -> None:
        self._settings.request_reset()

    def sync_from_settings(self, ids: Iterable[str]) -> None:
        """設定値をスライダーへ反映する。"""
        wanted = set(ids)
        if SPIKE_DETAIL.id in wanted:
            dpg.set_value(widget_tag(SPIKE_DETAIL), float(self._settings.spike_detail))
        if SPIKE_LENGTH.id in wanted:
            dpg.set_value(widget_tag(SPIKE_LENGTH), float(self._settings.spike_length))

    # ---- lifecycle ----
    def set_visible(self, visible: bool) -> None:
        if visible and not self._visible:
            dpg.show_viewport()
            self._visible = True
            self._start_driver()
        elif not visible and self._visible:
            self._visible = False
            self._stop_driver()

    def close(self) -> None:
        # 閉鎖フラグを最初に立て、以降の _tick を無害化
        self._closing = True
        self._settings.unsubscribe(self._settings_listener)
        # ドライバ停止 → コンテキスト破棄（順序厳守）
        self._stop_driver()
        try:
            dpg.stop_dearpygui()
        except Exception:
            logger.debug("stop_dearpygui failed", exc_info=True)
        try:
            dpg.destroy_context()
        except Exception:
            logger.debug("destroy_context failed", exc_info=True)

    # ---- internal: drivers ----
    def _tick(self, _dt: float) -> None:  # noqa: ANN001
        if self._closing:
            return
        if not dpg.is_dearpygui_running():
            self._closing = True
            self._stop_driver()
            return
        try:
            dpg.render_dearpygui_frame()
        except Exception:
            logger.exception("render_dearpygui_frame failed")

    def _start_driver(self) -> None:
        # DPG のフレームはメインスレッドの pyglet clock で回す
        if self._driver is not None:
            return
        pyglet.clock.schedule_interval(self._tick, DRIVER_INTERVAL)
        self._driver = self._tick
        logger.debug("ParameterWindow: pyglet driver started")

    def _stop_driver(self) -> None:
        drv, self._driver = self._driver, None
        if drv is not None:
            pyglet.clock.unschedule(drv)


__all__ = ["ParameterWindow", "widget_tag"]
