"""
どこで: `engine.core.surface`。
何を: 完成したフレームバッファを受け取る表示面の Protocol と、ウィンドウ無しの実装。
なぜ: ループドライバを pyglet/ModernGL から切り離し、ヘッドレス実行とテストを可能にするため。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import numpy as np

logger = logging.getLogger(__name__)


class DisplaySurface(Protocol):
    """1 フレームに 1 回、完成した `(H, W, 4)` RGBA バッファを受け取って提示する。"""

    def present(self, pixels: np.ndarray) -> None: ...

    def should_close(self) -> bool: ...


class NullSurface:
    """何も表示しない表示面。`max_frames` 提示後に終了を要求する。"""

    def __init__(self, max_frames: int | None = None):
        self.max_frames = max_frames
        self.presented = 0
        self.last: np.ndarray | None = None

    def present(self, pixels: np.ndarray) -> None:
        self.presented += 1
        self.last = pixels

    def should_close(self) -> bool:
        return self.max_frames is not None and self.presented >= self.max_frames


class PngSequenceSurface(NullSurface):
    """提示された各フレームを `frame_00000.png` 形式で保存する表示面。"""

    def __init__(self, out_dir: Path, max_frames: int | None = None, *, prefix: str = "frame"):
        super().__init__(max_frames)
        self.out_dir = Path(out_dir)
        self.prefix = prefix

    def present(self, pixels: np.ndarray) -> None:
        from engine.export.image import save_pixels_png

        path = self.out_dir / f"{self.prefix}_{self.presented:05d}.png"
        save_pixels_png(pixels, path)
        logger.debug("saved frame %s", path)
        super().present(pixels)


__all__ = ["DisplaySurface", "NullSurface", "PngSequenceSurface"]
