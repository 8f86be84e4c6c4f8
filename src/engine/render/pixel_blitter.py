"""
どこで: `engine.render` の低レベルテクスチャ層。
何を: RGBA(float32) ラスタを ModernGL テクスチャへ転送し、全画面クアッドで最近傍拡大表示する。
なぜ: ピクセル単位の点群を、拡大率に関わらずぼかさず表示するため。
"""

from __future__ import annotations

from typing import Any

import moderngl
import numpy as np

_VERTEX_SHADER = """
#version 330
in vec2 in_pos;
out vec2 v_uv;
void main() {
    // ラスタ行 0 が上端になるよう V を反転
    v_uv = vec2((in_pos.x + 1.0) * 0.5, 1.0 - (in_pos.y + 1.0) * 0.5);
    gl_Position = vec4(in_pos, 0.0, 1.0);
}
"""

_FRAGMENT_SHADER = """
#version 330
uniform sampler2D u_pixels;
in vec2 v_uv;
out vec4 f_color;
void main() {
    f_color = texture(u_pixels, v_uv);
}
"""


class PixelBlitter:
    """
    CPU 側の FrameBuffer を GPU テクスチャへ送り込み、ウィンドウ全体へ描く。
    """

    def __init__(self, ctx: Any, width: int, height: int):
        """
        ctx: ModernGL コンテキスト（ウィンドウ生成後に作成したもの）
        width/height: ラスタ寸法（テクスチャサイズ）
        """
        self.ctx = ctx
        self.size = (int(width), int(height))
        self.texture = ctx.texture(self.size, 4, dtype="f4")
        self.texture.filter = (moderngl.NEAREST, moderngl.NEAREST)
        self.program = ctx.program(
            vertex_shader=_VERTEX_SHADER, fragment_shader=_FRAGMENT_SHADER
        )
        self.program["u_pixels"].value = 0
        quad = np.array([-1.0, -1.0, 1.0, -1.0, -1.0, 1.0, 1.0, 1.0], dtype="f4")
        self.vbo = ctx.buffer(quad.tobytes())
        self.vao = ctx.simple_vertex_array(self.program, self.vbo, "in_pos")
        self.uploads = 0
        self._released = False

    def upload(self, pixels: np.ndarray) -> None:
        """`(H, W, 4)` float32 のラスタをテクスチャへ書き込む。"""
        arr = np.ascontiguousarray(pixels, dtype=np.float32)
        if arr.shape != (self.size[1], self.size[0], 4):
            raise ValueError(
                f"pixel buffer shape {arr.shape} does not match texture {self.size[1], self.size[0], 4}"
            )
        self.texture.write(arr.tobytes())
        self.uploads += 1

    def draw(self, viewport_width: int, viewport_height: int) -> None:
        self.ctx.viewport = (0, 0, int(viewport_width), int(viewport_height))
        self.texture.use(location=0)
        self.vao.render(moderngl.TRIANGLE_STRIP)

    def release(self) -> None:
        """GPU リソースを解放（冪等）。"""
        if self._released:
            return
        for res in (self.vao, self.vbo, self.program, self.texture):
            res.release()
        self._released = True
