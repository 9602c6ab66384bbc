"""
どこで: `palette.generator`。
何を: 固定のシードプールから (spike_detail, spike_length, palette) を決定的に選ぶ「厳選ランダム」。
なぜ: 再生成のたびに見栄えの確認済みな候補だけに着地させ、真の一様乱数で崩れた形/配色を避けるため。

設計メモ:
- `pick_params(detail_seed, length_seed, palette_seed)` は純関数。3 つの値はそれぞれ独立した
  `numpy.random.Generator` から引く（共有/グローバルな乱数状態を持たない）。
- `generate_params(rng)` は各プールからシードを 1 つずつ引いて `pick_params` に渡すだけ。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .library import PALETTES

logger = logging.getLogger(__name__)

DETAIL_SEEDS: tuple[int, ...] = (614884, 383036, 191802, 967721, 384540, 111465)
LENGTH_SEEDS: tuple[int, ...] = (533299, 122798)
PALETTE_SEEDS: tuple[int, ...] = (
    495948,
    234144,
    382666,
    946739,
    253862,
    729250,
    12290,
    958027,
    277064,
    339463,
)

DETAIL_RANGE: tuple[float, float] = (1.35, 40.0)
LENGTH_RANGE: tuple[float, float] = (1.0, 1.4)


@dataclass(frozen=True)
class CuratedParams:
    """再生成 1 回分のパラメータ組。"""

    spike_detail: float
    spike_length: float
    palette_index: int
    palette: tuple[str, ...]


def _uniform(seed: int, lo: float, hi: float) -> float:
    rng = np.random.default_rng(int(seed))
    return float(rng.uniform(lo, hi))


def _pick_index(seed: int, count: int) -> int:
    rng = np.random.default_rng(int(seed))
    return int(rng.integers(0, count))


def pick_params(
    detail_seed: int,
    length_seed: int,
    palette_seed: int,
    palettes: Sequence[tuple[str, ...]] = PALETTES,
) -> CuratedParams:
    """3 つのシードからパラメータ組を決定的に計算する。

    Parameters
    ----------
    detail_seed : int
        `spike_detail ~ U[1.35, 40)` 用のシード。
    length_seed : int
        `spike_length ~ U[1.0, 1.4)` 用のシード。
    palette_seed : int
        パレット選択（一様）用のシード。
    palettes : Sequence[tuple[str, ...]]
        選択対象のパレットライブラリ（既定は `palette.library.PALETTES`）。
    """
    if not palettes:
        raise ValueError("palettes must not be empty")
    detail = _uniform(detail_seed, *DETAIL_RANGE)
    length = _uniform(length_seed, *LENGTH_RANGE)
    index = _pick_index(palette_seed, len(palettes))
    return CuratedParams(
        spike_detail=detail,
        spike_length=length,
        palette_index=index,
        palette=tuple(palettes[index]),
    )


def pick_seeds(rng: np.random.Generator | None = None) -> tuple[int, int, int]:
    """各プールからシードを 1 つずつ選ぶ（rng 未指定時は非決定的）。"""
    gen = rng if rng is not None else np.random.default_rng()
    return (
        int(gen.choice(DETAIL_SEEDS)),
        int(gen.choice(LENGTH_SEEDS)),
        int(gen.choice(PALETTE_SEEDS)),
    )


def generate_params(rng: np.random.Generator | None = None) -> CuratedParams:
    """プールからシードを選び、厳選パラメータを生成する。"""
    seeds = pick_seeds(rng)
    params = pick_params(*seeds)
    logger.debug("curated params from seeds=%s: %s", seeds, params)
    return params


__all__ = [
    "DETAIL_SEEDS",
    "LENGTH_SEEDS",
    "PALETTE_SEEDS",
    "DETAIL_RANGE",
    "LENGTH_RANGE",
    "CuratedParams",
    "pick_params",
    "pick_seeds",
    "generate_params",
]
