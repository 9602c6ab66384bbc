from __future__ import annotations

import numpy as np
import pytest

from palette.generator import (
    DETAIL_RANGE,
    DETAIL_SEEDS,
    LENGTH_RANGE,
    LENGTH_SEEDS,
    PALETTE_SEEDS,
    generate_params,
    pick_params,
    pick_seeds,
)
from palette.library import PALETTES, get_palette, palette_count, shading_colors


@pytest.mark.smoke
def test_pick_params_is_pure() -> None:
    a = pick_params(614884, 533299, 495948)
    b = pick_params(614884, 533299, 495948)
    assert a == b


def test_draws_are_independent_per_seed() -> None:
    base = pick_params(614884, 533299, 495948)
    other_palette = pick_params(614884, 533299, 234144)
    # detail/length は palette 用シードの影響を受けない
    assert other_palette.spike_detail == base.spike_detail
    assert other_palette.spike_length == base.spike_length
    other_length = pick_params(614884, 122798, 495948)
    assert other_length.spike_detail == base.spike_detail
    assert other_length.palette_index == base.palette_index


def test_every_pool_combination_is_in_range() -> None:
    for d in DETAIL_SEEDS:
        for s in LENGTH_SEEDS:
            for p in PALETTE_SEEDS:
                params = pick_params(d, s, p)
                assert DETAIL_RANGE[0] <= params.spike_detail < DETAIL_RANGE[1]
                assert LENGTH_RANGE[0] <= params.spike_length < LENGTH_RANGE[1]
                assert 0 <= params.palette_index < len(PALETTES)
                assert params.palette == PALETTES[params.palette_index]


def test_pick_seeds_draws_from_pools() -> None:
    rng = np.random.default_rng(3)
    for _ in range(20):
        d, s, p = pick_seeds(rng)
        assert d in DETAIL_SEEDS
        assert s in LENGTH_SEEDS
        assert p in PALETTE_SEEDS


def test_generate_params_reproducible_with_rng() -> None:
    a = generate_params(np.random.default_rng(42))
    b = generate_params(np.random.default_rng(42))
    assert a == b


def test_custom_palette_library() -> None:
    lib = [("#000000", "#111111", "#222222", "#333333", "#444444")]
    params = pick_params(1, 2, 3, palettes=lib)
    assert params.palette_index == 0
    assert params.palette == lib[0]
    with pytest.raises(ValueError):
        pick_params(1, 2, 3, palettes=[])


def test_library_access_and_shading_colors() -> None:
    assert palette_count() == len(PALETTES)
    pal = get_palette(0)
    a, b = shading_colors(pal)
    assert a == pytest.approx((0x69 / 255, 0xD2 / 255, 0xE7 / 255))
    assert b == pytest.approx((0xF3 / 255, 0x86 / 255, 0x30 / 255))
    with pytest.raises(IndexError):
        get_palette(len(PALETTES))
    with pytest.raises(ValueError):
        shading_colors(("#ffffff", "#000000"))
