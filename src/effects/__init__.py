"""
どこで: `effects` パッケージ（関数ベース）。
何を: ノイズ場・スパイク変形・シェーディングの純関数を提供する。
なぜ: 生成（shapes）/加工（effects）/描画（engine.render）の責務を分離し、
    数値処理をウィンドウや GPU から切り離してテスト可能に保つため。
"""

from .noise import noise3d, noise4d, simplex3, simplex4
from .shading import shade_vertices
from .spikes import SpikeField, bake_spikes, displace_vertices, spike_noise, swirl

__all__ = [
    "noise3d",
    "noise4d",
    "simplex3",
    "simplex4",
    "shade_vertices",
    "SpikeField",
    "bake_spikes",
    "displace_vertices",
    "spike_noise",
    "swirl",
]
