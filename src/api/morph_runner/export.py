"""
どこで: `api.morph_runner.export`
何を: 現在のフレームバッファを PNG 保存するハンドラ。
なぜ: `api.morph` からエクスポート関連の責務を分離し、API 層を薄く保つため。
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from engine.core.loop import MorphLoop
from engine.export.image import save_screenshot

logger = logging.getLogger(__name__)


def save_current_frame(loop: MorphLoop, *, upscale: bool = True) -> Path | None:
    """直近に提示されたフレームを `data/screenshot/` に保存する。失敗はログのみ。"""
    name_prefix = Path(sys.argv[0]).stem if sys.argv and sys.argv[0] else None
    scale = loop.config.scale if upscale else 1
    try:
        path = save_screenshot(loop.buffer.to_rgba8(), scale=scale, name_prefix=name_prefix)
    except (OSError, ValueError) as e:
        logger.error("PNG 保存失敗: %s", e)
        return None
    logger.info("Saved PNG: %s", path)
    return path


__all__ = ["save_current_frame"]
