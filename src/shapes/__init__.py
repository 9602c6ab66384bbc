"""
どこで: `shapes` パッケージ。
何を: ベースとなる球メッシュの生成関数を提供する。
なぜ: メッシュ形状を変形/描画から独立させ、再生成のたびに同じ形状を共有するため。
"""

from .sphere import sphere_mesh

__all__ = ["sphere_mesh"]
