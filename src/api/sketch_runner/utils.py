"""
どこで: `api.sketch_runner.utils`（純粋関数/小ヘルパ）。
何を: FPS/ウィンドウ寸法/球の分割数/背景色を「引数 > 環境変数 > 設定ファイル > 既定値」の順に解決する。
なぜ: `api.sketch` を薄く保ち、設定の優先順位をテスト容易な純関数へ閉じ込めるため。
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from common.settings import DEFAULT_SPHERE_SEGMENTS, MIN_SPHERE_SEGMENTS
from common.settings import get as get_settings
from util.color import normalize_color
from util.constants import DEFAULT_BACKGROUND, DEFAULT_WINDOW_SIZE, SPHERE_RADIUS
from util.utils import config_section

logger = logging.getLogger(__name__)

RGBA = tuple[float, float, float, float]


def resolve_fps(
    requested_fps: int | None, cfg: Mapping[str, Any] | None = None, *, default: int = 60
) -> int:
    """FPS を解決して 1 以上の int を返す。

    - 明示指定があればそれを優先（数値化できない/<=0 は既定へ）。
    - それ以外は設定ファイルの `window.fps` を読み取り、失敗時は既定値。
    """
    if requested_fps is not None:
        try:
            v = int(requested_fps)
            return max(1, v)
        except (TypeError, ValueError):
            return max(1, int(default))
    window = config_section(dict(cfg or {}), "window")
    try:
        v = int(window.get("fps", default))
        return max(1, v)
    except (TypeError, ValueError):
        return max(1, int(default))


def parse_window_size(text: str) -> tuple[int, int]:
    """`"800x600"` 形式を `(800, 600)` にする（正の整数のみ）。"""
    parts = str(text).lower().replace(" ", "").split("x")
    if len(parts) != 2:
        raise ValueError(f"invalid window size: {text!r}; expected WIDTHxHEIGHT")
    try:
        w, h = int(parts[0]), int(parts[1])
    except ValueError as e:
        raise ValueError(f"invalid window size: {text!r}; expected WIDTHxHEIGHT") from e
    if w <= 0 or h <= 0:
        raise ValueError(f"window size must be positive, got: {(w, h)}")
    return w, h


def resolve_window_size(
    window_size: str | tuple[int, int] | None, cfg: Mapping[str, Any] | None = None
) -> tuple[int, int]:
    """ウィンドウ寸法 [px] を解決する。

    - 文字列: `"WxH"`
    - タプル: `(width, height)` をそのまま（正であることを検証）
    - None: 設定ファイルの `window.width/height`、なければ既定値
    """
    if isinstance(window_size, str):
        return parse_window_size(window_size)
    if window_size is not None:
        try:
            w, h = int(window_size[0]), int(window_size[1])
        except (TypeError, ValueError, IndexError) as e:
            raise ValueError(f"invalid window_size tuple: {window_size}") from e
        if w <= 0 or h <= 0:
            raise ValueError(f"window_size must be positive, got: {(w, h)}")
        return w, h
    window = config_section(dict(cfg or {}), "window")
    dw, dh = DEFAULT_WINDOW_SIZE
    try:
        w = int(window.get("width", dw))
        h = int(window.get("height", dh))
    except (TypeError, ValueError):
        logger.warning("invalid window size in config: %r; using default", window)
        return dw, dh
    if w <= 0 or h <= 0:
        logger.warning("non-positive window size in config: %r; using default", (w, h))
        return dw, dh
    return w, h


def resolve_segments(requested: int | None, cfg: Mapping[str, Any] | None = None) -> int:
    """球の分割数（緯度/経度共通）を解決する。引数/環境変数の不正値は `ValueError`。"""
    if requested is not None:
        seg = int(requested)
        if seg < MIN_SPHERE_SEGMENTS:
            raise ValueError(f"segments must be >= {MIN_SPHERE_SEGMENTS}, got {requested}")
        return seg
    env_seg = get_settings().SPHERE_SEGMENTS
    if env_seg is not None:
        return int(env_seg)
    sphere = config_section(dict(cfg or {}), "sphere")
    try:
        seg = int(sphere.get("segments", DEFAULT_SPHERE_SEGMENTS))
    except (TypeError, ValueError):
        logger.warning("invalid sphere.segments in config: %r", sphere.get("segments"))
        return DEFAULT_SPHERE_SEGMENTS
    return max(MIN_SPHERE_SEGMENTS, seg)


def resolve_radius(cfg: Mapping[str, Any] | None = None) -> float:
    sphere = config_section(dict(cfg or {}), "sphere")
    try:
        r = float(sphere.get("radius", SPHERE_RADIUS))
    except (TypeError, ValueError):
        return SPHERE_RADIUS
    return r if r > 0.0 else SPHERE_RADIUS


def resolve_background(background: Any, cfg: Mapping[str, Any] | None = None) -> RGBA:
    """背景色 RGBA(0–1) を解決する（引数 > `window.background_color` > 既定）。"""
    if background is not None:
        return normalize_color(background)
    window = config_section(dict(cfg or {}), "window")
    src = window.get("background_color")
    if src is None:
        return DEFAULT_BACKGROUND
    try:
        return normalize_color(src)
    except ValueError:
        logger.warning("invalid window.background_color in config: %r", src)
        return DEFAULT_BACKGROUND


def resolve_use_panel(requested: bool | None) -> bool:
    if requested is not None:
        return bool(requested)
    return bool(get_settings().DEBUG_PANEL)


def resolve_log_level(requested: str | None) -> str:
    if requested:
        return str(requested).upper()
    return get_settings().LOG_LEVEL


__all__ = [
    "parse_window_size",
    "resolve_background",
    "resolve_fps",
    "resolve_log_level",
    "resolve_radius",
    "resolve_segments",
    "resolve_use_panel",
    "resolve_window_size",
]
