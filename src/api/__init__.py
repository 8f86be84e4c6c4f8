"""
どこで: `api` 入口（高レベル公開 API）。
何を: 実行関数 `run`・設定 `MorphConfig`・形状ペア `MorphPair`・装飾子 `shape` を再輸出。
なぜ: 利用者が単一名前空間から形状登録→設定→実行まで完結できるようにするため。

Usage:
    from api import MorphConfig, run

    run(MorphConfig(fps=30, rotation_mode="table"))
"""

from engine.core.config import MorphConfig
from engine.core.morph_state import MorphState, MorphTiming
from shapes.pair import MorphPair
from shapes.registry import shape as shape

from .morph import build_loop, run_headless
from .morph import run_morph as run
from .morph import run_morph as run_morph

__all__ = [
    "run",
    "run_morph",
    "run_headless",
    "build_loop",
    "shape",
    "MorphConfig",
    "MorphTiming",
    "MorphState",
    "MorphPair",
]

__version__ = "2026.10"
