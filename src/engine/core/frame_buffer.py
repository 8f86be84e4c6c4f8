"""
どこで: `engine.core.frame_buffer`。
何を: 固定サイズの RGBA(float32) ピクセルグリッド。毎フレーム背景色でクリアし、点を書き込む。
なぜ: 表示面（ウィンドウ/PNG 出力）へ渡す 1 フレーム分のラスタを一箇所で所有するため。

データモデル:
- `data: float32 ndarray (H, W, 4)`。行優先。行 0 が画面上端。
- 範囲外の座標は `write` が書かずに捨てる。
"""

from __future__ import annotations

import logging

import numpy as np
from numba import njit

from common.types import RGBA
from util.color import normalize_color

logger = logging.getLogger(__name__)


@njit(cache=True)
def _write_points(data: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: np.ndarray) -> None:
    """頂点順に 1 点ずつ書き込む（後の index が同じ画素を上書きする）。"""
    for k in range(xs.shape[0]):
        y = ys[k]
        x = xs[k]
        for c in range(4):
            data[y, x, c] = color[c]


class FrameBuffer:
    """width × height の RGBA ピクセルバッファ。"""

    def __init__(self, width: int, height: int, background: object = (0.0, 0.0, 0.0, 1.0)):
        """バッファを確保する。

        引数:
            width: 幅（ピクセル, 1 以上）。
            height: 高さ（ピクセル, 1 以上）。
            background: クリア色（`util.color.normalize_color` が受理する形式）。
        """
        width, height = int(width), int(height)
        if width < 1 or height < 1:
            raise ValueError(f"frame buffer size must be positive, got {(width, height)}")
        self.width = width
        self.height = height
        self.background: RGBA = normalize_color(background)
        self._background_arr = np.asarray(self.background, dtype=np.float32)
        self.data = np.empty((height, width, 4), dtype=np.float32)
        self.clear()

    @property
    def shape(self) -> tuple[int, int]:
        """`(width, height)`。"""
        return (self.width, self.height)

    def clear(self) -> None:
        """全画素を背景色で埋める。"""
        self.data[:, :] = self._background_arr

    def write(self, xs: np.ndarray, ys: np.ndarray, color: RGBA, *, use_numba: bool = True) -> int:
        """画素座標列に同一色を書き込み、実際に書いた点数を返す。

        `[0, width) × [0, height)` の外の座標は書かずに捨てる（例外にしない）。
        """
        xs = np.ascontiguousarray(xs, dtype=np.int64)
        ys = np.ascontiguousarray(ys, dtype=np.int64)
        if xs.shape != ys.shape:
            raise ValueError(f"xs/ys shape mismatch: {xs.shape} vs {ys.shape}")
        inside = (xs >= 0) & (xs < self.width) & (ys >= 0) & (ys < self.height)
        if not np.all(inside):
            xs = np.ascontiguousarray(xs[inside])
            ys = np.ascontiguousarray(ys[inside])
        if xs.size == 0:
            return 0
        col = np.asarray(color, dtype=np.float32)
        if use_numba:
            _write_points(self.data, xs, ys, col)
        else:
            self.data[ys, xs] = col
        return int(xs.size)

    def pixels(self) -> np.ndarray:
        """表示面向けの読み取り専用ビュー（`(H, W, 4)` float32）。"""
        view = self.data.view()
        view.setflags(write=False)
        return view

    def pixel(self, x: int, y: int) -> RGBA:
        r, g, b, a = (float(c) for c in self.data[int(y), int(x)])
        return (r, g, b, a)

    def to_rgba8(self) -> np.ndarray:
        """PNG 保存用の `(H, W, 4)` uint8 コピー。"""
        from engine.export.image import to_rgba8

        return to_rgba8(self.data)

    def count_lit(self) -> int:
        """背景色と異なる画素数。"""
        diff = np.any(self.data != self._background_arr, axis=2)
        return int(np.count_nonzero(diff))

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"FrameBuffer({self.width}x{self.height}, bg={self.background})"


__all__ = ["FrameBuffer"]
