"""
どこで: `common.logging`
何を: 実行ランナー/CLI から 1 度だけ呼ぶロギング初期化。
なぜ: 各モジュールは `logging.getLogger(__name__)` を使うだけにして、
    出力先と書式はアプリ起動時の 1 か所で決めるため。

補足:
- ルートロガーにハンドラが既にあれば（pytest の caplog など）何もしない。
- DEBUG 指定時でも numba のコンパイルログは WARNING に抑える。
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# DEBUG でも出力を絞るサードパーティ
_QUIET_LOGGERS = ("numba", "PIL")


def _as_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_default_logging(level: int | str = "INFO") -> None:
    """ルートロガーが未設定のときだけ `basicConfig` を適用する。"""
    lvl = _as_level(level)
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(level=lvl, format=LOG_FORMAT)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(lvl, logging.WARNING))


__all__ = ["LOG_FORMAT", "setup_default_logging"]
