"""
どこで: `common` パッケージ。
何を: 環境変数/設定/ロギング/型エイリアスなど、全層から参照する軽量ユーティリティ。
なぜ: effects/engine/api が互いに依存せず共通基盤だけを共有できるようにするため。
"""

from .logging import setup_default_logging

__all__ = [
    "setup_default_logging",
]
