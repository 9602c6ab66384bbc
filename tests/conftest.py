"""共通フィクスチャ。

- 乱数シード固定
- 小さな球メッシュ（256 分割は重いので 24x12 で代用）
- 共有設定レコード
"""

from __future__ import annotations

import numpy as np
import pytest

from engine.core.geometry import MeshData
from engine.ui.parameters.state import SpikeSettings
from shapes.sphere import sphere_mesh


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def small_sphere() -> MeshData:
    return sphere_mesh(0.8, 24, 12)


@pytest.fixture()
def settings() -> SpikeSettings:
    return SpikeSettings()


class FakeRenderer:
    """release 回数だけを数えるレンダラ代役。"""

    def __init__(self) -> None:
        self.released = 0

    def release(self) -> None:
        self.released += 1


@pytest.fixture()
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()
