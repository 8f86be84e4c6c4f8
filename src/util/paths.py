"""
どこで: `util.paths`。
何を: スクリーンショット/連番フレームの保存先ディレクトリの生成と解決ユーティリティを提供する。
なぜ: ランタイムから簡潔に保存先を扱え、並行呼び出しでも安全に作成できるようにするため。
"""

from __future__ import annotations

from pathlib import Path

from .utils import _find_project_root


def ensure_screenshots_dir() -> Path:
    """スクリーンショット出力先 `data/screenshot/` を作成して返す。

    - プロジェクトルート直下の `data/screenshot/` に作成する。
    - 既存の場合もそのまま Path を返す。
    """
    root = _find_project_root(Path(__file__).parent)
    out = root / "data" / "screenshot"
    out.mkdir(parents=True, exist_ok=True)
    return out


def ensure_frames_dir(out: Path | None = None) -> Path:
    """連番 PNG の出力先（既定 `data/frames/`）を作成して返す。"""
    if out is None:
        root = _find_project_root(Path(__file__).parent)
        out = root / "data" / "frames"
    out.mkdir(parents=True, exist_ok=True)
    return out
