"""
どこで: `util.utils`
何を: YAML 設定（`configs/default.yaml` とルートの `config.yaml`）の読み込みとセクション参照。
なぜ: ウィンドウ寸法/FPS/背景色/球の分割数などの既定値をコード外で差し替えられるようにするため。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path("configs") / "default.yaml"
USER_CONFIG = Path("config.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    """YAML を辞書として読む。存在しない/壊れている/辞書でない場合は空辞書。"""
    if not path.is_file():
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("ignoring unreadable config %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: top level must be a mapping", path)
        return {}
    return data


def project_root(start: Path | None = None) -> Path:
    """`pyproject.toml` か `configs/` を持つ最も近い祖先ディレクトリ。"""
    here = (start or Path(__file__).parent).resolve()
    for candidate in (here, *here.parents):
        if (candidate / "pyproject.toml").exists() or (candidate / "configs").is_dir():
            return candidate
    # <repo>/src/util/utils.py -> <repo>
    return Path(__file__).resolve().parents[2]


def load_config(root: Path | None = None) -> dict[str, Any]:
    """既定設定にルートの `config.yaml` を重ねた辞書を返す。

    セクション（`window`, `sphere` など）単位でキーを上書きする。
    どちらも無ければ空辞書。
    """
    base_dir = root if root is not None else project_root()
    merged = _read_yaml(base_dir / DEFAULT_CONFIG)
    for key, value in _read_yaml(base_dir / USER_CONFIG).items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = {**current, **value}
        else:
            merged[key] = value
    return merged


def config_section(cfg: Mapping[str, Any] | None, name: str) -> dict[str, Any]:
    """`cfg[name]` が辞書ならそれを、そうでなければ空辞書を返す。"""
    section = cfg.get(name) if isinstance(cfg, Mapping) else None
    return dict(section) if isinstance(section, dict) else {}


__all__ = ["config_section", "load_config", "project_root"]
