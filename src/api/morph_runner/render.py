"""
どこで: `api.morph_runner.render`
何を: RenderWindow/ModernGL/PixelBlitter の初期化。
なぜ: `api.morph` を薄くし、描画初期化の責務を分離するため。
"""

from __future__ import annotations

import moderngl

from engine.core.config import MorphConfig


def create_window_and_blitter(config: MorphConfig):
    """ウィンドウ/ModernGL/PixelBlitter を生成して返す。

    Returns
    -------
    (rendering_window, mgl_ctx, blitter)
    """
    from engine.core.render_window import RenderWindow
    from engine.render.pixel_blitter import PixelBlitter

    rendering_window = RenderWindow(
        config.width,
        config.height,
        scale=config.scale,
        caption=config.caption,
        bg_color=config.background,
    )

    # ModernGL コンテキスト（ウィンドウの GL コンテキストを共有）
    mgl_ctx: moderngl.Context = moderngl.create_context()
    blitter = PixelBlitter(mgl_ctx, config.width, config.height)
    rendering_window.attach_blitter(blitter)
    return rendering_window, mgl_ctx, blitter


__all__ = ["create_window_and_blitter"]
