from __future__ import annotations

import argparse
from typing import Sequence

from api import run


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="トゲトゲの球をドラッグで揺らすデモ。")
    p.add_argument("--fps", type=int, default=None, help="描画更新レート（既定: 設定ファイル/60）")
    p.add_argument("--size", default=None, metavar="WxH", help="ウィンドウ寸法 例: 800x800")
    p.add_argument("--segments", type=int, default=None, help="球の分割数（3 以上, 既定 256）")
    p.add_argument("--seed", type=int, default=None, help="再生成のシード選択を固定する")
    p.add_argument("--no-panel", action="store_true", help="デバッグパネルを表示しない")
    p.add_argument("--log-level", default=None, help="DEBUG/INFO/WARNING など")
    p.add_argument(
        "--init-only", action="store_true", help="ウィンドウを開かずシーン構築だけ行って終了"
    )
    return p


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    run(
        fps=args.fps,
        window_size=args.size,
        segments=args.segments,
        use_panel=False if args.no_panel else None,
        log_level=args.log_level,
        seed=args.seed,
        init_only=args.init_only,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
