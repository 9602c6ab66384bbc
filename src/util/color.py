"""
どこで: `util.color`
何を: 背景色/パレット色の受理形式（Hex 文字列, 0–1 または 0–255 の RGB(A) 列）を RGBA(0–1) にそろえる。
なぜ: 設定ファイル・CLI・パレットライブラリで同じ解釈とエラーメッセージを使うため。
"""

from __future__ import annotations

import re
from typing import Any

from common.types import RGB, RGBA

_HEX = re.compile(r"^(?:#|0x)?([0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE)


def parse_hex_color_str(s: str) -> RGBA:
    """`#RRGGBB[AA]` / `0xRRGGBB[AA]` / `RRGGBB[AA]` を RGBA(0–1) にする。"""
    m = _HEX.match(s.strip())
    if m is None:
        raise ValueError(f"invalid hex color: {s!r} (expected #RRGGBB or #RRGGBBAA)")
    digits = m.group(1)
    if len(digits) == 6:
        digits += "ff"
    r, g, b, a = (int(digits[i : i + 2], 16) / 255.0 for i in range(0, 8, 2))
    return (r, g, b, a)


def hex_to_rgb(s: str) -> RGB:
    r, g, b, _a = parse_hex_color_str(s)
    return (r, g, b)


def normalize_color(value: Any) -> RGBA:
    """色指定を RGBA(0–1) に正規化する。

    - 文字列は Hex として解釈する。
    - 3/4 要素の列は、全要素が 0–1 ならそのまま、そうでなければ 0–255 とみなす。
      アルファ省略時は不透明。
    """
    if isinstance(value, str):
        return parse_hex_color_str(value)
    if not isinstance(value, (tuple, list)) or len(value) not in (3, 4):
        raise ValueError(f"color must be a hex string or 3/4 numbers, got {value!r}")
    try:
        comps = [float(c) for c in value]
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid color components: {value!r}") from e
    if all(0.0 <= c <= 1.0 for c in comps):
        if len(comps) == 3:
            comps.append(1.0)
        r, g, b, a = comps
        return (r, g, b, a)
    if len(comps) == 3:
        comps.append(255.0)
    r, g, b, a = (min(255, max(0, round(c))) / 255.0 for c in comps)
    return (r, g, b, a)


__all__ = ["hex_to_rgb", "normalize_color", "parse_hex_color_str"]
