"""
どこで: `engine.io` サブパッケージ（ポインタ入力）。
何を: マウス/タッチのドラッグを減衰する慣性ベクトルへ変換する入力トラッカ。
なぜ: 入力デバイス依存を隔離し、ランタイム/ウィンドウから統一 API で参照できるようにするため。
"""

from .pointer import Impulse, ImpulseTracker, drag_direction, normalize_pointer

__all__ = ["Impulse", "ImpulseTracker", "drag_direction", "normalize_pointer"]
