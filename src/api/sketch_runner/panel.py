"""
どこで: `api.sketch_runner.panel`
何を: デバッグパネル（Dear PyGui）の初期化。起動できない環境では警告を出して None を返す。
なぜ: `api.sketch` から初期化責務を分離し、パネルが無くても描画ループを続けられるようにするため。
"""

from __future__ import annotations

import logging

from engine.ui.parameters.controller import ParameterWindowController
from engine.ui.parameters.state import ParameterWindowConfig, SpikeSettings

logger = logging.getLogger(__name__)


def setup_panel(
    settings: SpikeSettings,
    use_panel: bool,
    *,
    window_cfg: ParameterWindowConfig | None = None,
) -> ParameterWindowController | None:
    """パネルを起動してコントローラを返す。

    - `use_panel` が False の場合は None。
    - Dear PyGui の import/ビューポート生成に失敗した場合も None（警告ログ）。
    """
    if not use_panel:
        return None
    controller = ParameterWindowController(settings, window_cfg=window_cfg)
    try:
        controller.start()
    except Exception as e:  # ImportError / ビューポート生成失敗など
        logger.warning("debug panel unavailable; continuing without it: %s", e)
        return None
    return controller


__all__ = ["setup_panel"]
