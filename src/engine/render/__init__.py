"""
どこで: `engine.render`。
何を: フレームバッファを GPU テクスチャとして表示する `PixelBlitter` を提供。
なぜ: ウィンドウ層とテクスチャ転送の責務を分けるため。
"""

from .pixel_blitter import PixelBlitter

__all__ = ["PixelBlitter"]
