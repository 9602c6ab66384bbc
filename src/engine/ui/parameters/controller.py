"""
どこで: `engine.ui.parameters` のパネル寿命管理。
何を: Dear PyGui の ParameterWindow を必要になった時点で生成し、表示切替と終了処理を仲介する。
なぜ: dearpygui の import とビューポート生成を `start()` まで遅らせ、
    パネルを使わない実行（`--no-panel`、テスト）では GUI 依存に触れないようにするため。
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .state import ParameterWindowConfig, SpikeSettings

if TYPE_CHECKING:
    from .dpg_window import ParameterWindow

logger = logging.getLogger(__name__)


class ParameterWindowController:
    """SpikeSettings を共有するデバッグパネルの開閉を受け持つ。"""

    def __init__(
        self,
        settings: SpikeSettings,
        *,
        window_cfg: ParameterWindowConfig | None = None,
    ) -> None:
        self._settings = settings
        self._window_cfg = window_cfg or ParameterWindowConfig()
        self._window: ParameterWindow | None = None
        self._visible = True

    @property
    def window(self) -> ParameterWindow | None:
        return self._window

    @property
    def is_running(self) -> bool:
        return self._window is not None

    def start(self) -> None:
        """表示指定があり未生成ならウィンドウを作る（生成失敗は例外で呼び出し側へ）。"""
        if self._window is not None or not self._visible:
            return
        from .dpg_window import ParameterWindow

        self._window = ParameterWindow(settings=self._settings, config=self._window_cfg)
        logger.debug("debug panel started: %s", self._window_cfg)

    def set_visibility(self, visible: bool) -> None:
        self._visible = bool(visible)
        if self._visible:
            self.start()
        if self._window is not None:
            self._window.set_visible(self._visible)

    def shutdown(self) -> None:
        """ウィンドウを閉じる。2 回目以降は何もしない。"""
        window, self._window = self._window, None
        if window is None:
            return
        window.close()
        logger.debug("debug panel closed")


__all__ = ["ParameterWindowController"]
