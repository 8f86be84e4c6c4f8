"""
内部ヘルパ群（API 非公開）。

どこで: `api.morph_runner`
何を: `api.morph` の補助（設定解決/ウィンドウ初期化/スクリーンショット）を分離し、
      `run_morph` 本体を薄く保つための内部モジュール群。
なぜ: シンプルさと可読性を維持しつつ、責務を小分割するため。
"""

from __future__ import annotations

__all__: list[str] = []
