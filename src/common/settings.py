"""
どこで: `common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int, env_log_level

# 球メッシュの既定分割数（緯度/経度とも）
DEFAULT_SPHERE_SEGMENTS = 256
MIN_SPHERE_SEGMENTS = 3


@dataclass
class _Settings:
    # Logging
    LOG_LEVEL: str = "INFO"

    # Mesh（None は未指定: 設定ファイル → 既定値の順に解決）
    SPHERE_SEGMENTS: int | None = None

    # UI
    DEBUG_PANEL: bool = True


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - bool は `env_bool`、int は `env_int`、ログレベルは `env_log_level` を使用。
    - 分割数は下限丸めを適用。
    """
    _settings.LOG_LEVEL = env_log_level("FLUFFY_LOG_LEVEL", "INFO")
    _settings.SPHERE_SEGMENTS = env_int(
        "FLUFFY_SPHERE_SEGMENTS", None, min_value=MIN_SPHERE_SEGMENTS
    )
    _settings.DEBUG_PANEL = env_bool("FLUFFY_DEBUG_PANEL", True)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = [
    "get",
    "reload_from_env",
    "_Settings",
    "DEFAULT_SPHERE_SEGMENTS",
    "MIN_SPHERE_SEGMENTS",
]
