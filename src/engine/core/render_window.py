"""
どこで: `engine.core` の描画ウィンドウ薄ラッパ。
何を: Pyglet Window（背景クリア/整数拡大表示）と、フレームバッファ提示（DisplaySurface 実装）を提供。
なぜ: ループドライバから GUI 依存を切り離し、`present`/`should_close` の最小インターフェイスで統一するため。

使用例:
    win = RenderWindow(240, 240, scale=4, caption="Sphere")
    win.attach_blitter(PixelBlitter(moderngl.create_context(), 240, 240))
    loop = MorphLoop(cfg, pair, win)
    pyglet.clock.schedule_interval(FrameClock([loop]).tick, 1 / 60)
    pyglet.app.run()
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import pyglet
from pyglet.gl import Config, glClearColor

logger = logging.getLogger(__name__)


class RenderWindow(pyglet.window.Window):
    def __init__(
        self,
        width: int,
        height: int,
        *,
        scale: int = 4,
        caption: str = "Sphere",
        bg_color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0),
    ):
        """ウィンドウを生成する。

        引数:
            width: ラスタ幅（ピクセル）。ウィンドウ幅は `width * scale`。
            height: ラスタ高さ（ピクセル）。ウィンドウ高さは `height * scale`。
            scale: 整数拡大率。
            caption: タイトル。
            bg_color: 背景色 RGBA（0.0〜1.0）。
        """
        config = Config(double_buffer=True, vsync=True)
        super().__init__(
            width=int(width) * int(scale),
            height=int(height) * int(scale),
            caption=caption,
            config=config,
        )
        self.raster_size = (int(width), int(height))
        self.scale = int(scale)
        self._bg_color = bg_color
        self._blitter: Any | None = None
        self._closed = False

    def attach_blitter(self, blitter: Any) -> None:
        """テクスチャ転送/描画を担う `PixelBlitter` を接続する。"""
        self._blitter = blitter

    # ---- DisplaySurface ----
    def present(self, pixels: np.ndarray) -> None:
        """完成したバッファをテクスチャへ転送する。描画は次の `on_draw` で行われる。"""
        if self._blitter is not None:
            self._blitter.upload(pixels)

    def should_close(self) -> bool:
        return self._closed

    # ---- pyglet events ----
    def on_draw(self):  # Pyglet 既定のイベント名
        r, g, b, a = self._bg_color
        glClearColor(r, g, b, a)
        self.clear()
        if self._blitter is not None:
            fb_w, fb_h = self.get_framebuffer_size()
            self._blitter.draw(fb_w, fb_h)

    def close(self):
        """ESC/閉じるボタンのどちらからも呼ばれる。GPU リソースを解放してから閉じる。"""
        self._closed = True
        if self._blitter is not None:
            self._blitter.release()
            self._blitter = None
        super().close()
