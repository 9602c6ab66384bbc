"""
どこで: `api` 入口（高レベル公開 API）。
何を: 実行ランナー `run_sketch`（別名 `run`）とヘッドレス用の `build_scene` を再輸出。
なぜ: 利用者が単一名前空間から起動まで完結できるようにするため。

Usage:
    from api import run

    run(fps=60, window_size="800x800")
"""

from .sketch import build_scene
from .sketch import run_sketch as run
from .sketch import run_sketch as run_sketch

__all__ = [
    "run_sketch",  # 実行（詳細指定）
    "run",  # 実行（エイリアス、簡易）
    "build_scene",  # ウィンドウなしのシーン構築
]

# バージョン情報
__version__ = "2026.10"
