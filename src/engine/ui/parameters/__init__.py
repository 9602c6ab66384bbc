"""
どこで: `engine.ui.parameters` パッケージの公開入口。
何を: SpikeSettings/RangeHint/ParameterDescriptor とパネル制御の主要型を再輸出。
なぜ: 外部から薄いファサードを提供し、Dear PyGui 依存をコントローラの遅延 import に閉じ込めるため。
"""

from .controller import ParameterWindowController
from .state import (
    DESCRIPTORS,
    REGENERATE,
    SPIKE_DETAIL,
    SPIKE_LENGTH,
    ParameterDescriptor,
    ParameterWindowConfig,
    RangeHint,
    RebuildRequest,
    SpikeSettings,
)

__all__ = [
    "ParameterWindowController",
    "ParameterDescriptor",
    "ParameterWindowConfig",
    "RangeHint",
    "RebuildRequest",
    "SpikeSettings",
    "SPIKE_DETAIL",
    "SPIKE_LENGTH",
    "REGENERATE",
    "DESCRIPTORS",
]
