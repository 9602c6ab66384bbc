"""
どこで: `common.env`
何を: `FLUFFY_*` 環境変数を型付きで読むヘルパ。未設定/不正値は既定値に落とす。
なぜ: 起動設定（`common.settings`）の読み込みを 1 か所の規則にそろえるため。
"""

from __future__ import annotations

import logging
import os

_TRUE = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSE = frozenset({"0", "false", "f", "no", "n", "off"})
_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _raw(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def env_int(name: str, default: int | None = None, *, min_value: int | None = None) -> int | None:
    """整数として読む。数値でなければ `default`、`min_value` 未満は下限に丸める。"""
    raw = _raw(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if min_value is not None:
        value = max(value, min_value)
    return value


def env_bool(name: str, default: bool = False) -> bool:
    """真偽として読む。整数は非 0 を真、`yes/no`, `on/off` なども受理する。"""
    raw = _raw(name)
    if raw is None:
        return bool(default)
    word = raw.lower()
    if word in _TRUE:
        return True
    if word in _FALSE:
        return False
    try:
        return int(word) != 0
    except ValueError:
        return bool(default)


def env_str(name: str, default: str) -> str:
    raw = _raw(name)
    return default if raw is None else raw


def env_log_level(name: str, default: str = "INFO") -> str:
    """ロギングレベル名として読む（大文字化し、未知の名前は `default`）。"""
    level = env_str(name, default).upper()
    if level not in _LEVELS:
        logging.getLogger(__name__).warning("%s=%r is not a log level; using %s", name, level, default)
        return default
    return level


__all__ = ["env_bool", "env_int", "env_log_level", "env_str"]
