"""
どこで: `engine.core.projector`。
何を: 2 形状の線形補間 → 回転 → 簡易透視除算 → 画面座標化（範囲外は破棄）を行う。
なぜ: 1 フレーム分の投影を頂点配列まとめて計算し、描画ループを薄く保つため。

投影式（非物理的な近似。符号も含めてこの通りに計算する）:

    p       = lerp(source[i], target[i], t)
    q       = R @ p
    divisor = perspective - q.z
    screen  = (q.x, q.y) / divisor * center + center

- `divisor <= 0`、非有限値、`trunc(screen)` が `[0, W) × [0, H)` の外 → 破棄（例外にしない）。
- lerp は `(1 - t) * a + t * b` で計算し、t=0/1 で端点に厳密一致させる。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from common.types import RGBA, Vec2

from .rotation import rotate_points


def lerp(a: np.ndarray | Sequence[float], b: np.ndarray | Sequence[float], t: float) -> np.ndarray:
    """成分ごとの線形補間。t=0 で a、t=1 で b に厳密一致する。"""
    a_arr = np.asarray(a, dtype=np.float64)
    b_arr = np.asarray(b, dtype=np.float64)
    t = float(t)
    return (1.0 - t) * a_arr + t * b_arr


def lerp_color(a: RGBA, b: RGBA, t: float) -> RGBA:
    """RGBA の 4 成分補間。"""
    r, g, bl, al = (float(c) for c in lerp(a, b, t))
    return (r, g, bl, al)


@dataclass(frozen=True)
class ProjectedPoints:
    """1 フレーム分の投影結果。

    - `xs`, `ys`: 書き込み対象（範囲内）の画素座標（int64）。頂点 index 昇順。
    - `indices`: 上記に対応する元の頂点 index。
    - `color`: このフレームの補間色。
    - `discarded`: 破棄された頂点数。
    """

    xs: np.ndarray
    ys: np.ndarray
    indices: np.ndarray
    color: RGBA
    discarded: int

    def __len__(self) -> int:
        return int(self.xs.shape[0])


class Projector:
    """画面中心・透視定数・ラスタ寸法を保持する投影器。"""

    def __init__(self, width: int, height: int, perspective: float = 200.0, center: Vec2 | None = None):
        self.width = int(width)
        self.height = int(height)
        self.perspective = float(perspective)
        if center is None:
            center = (float(self.width // 2), float(self.height // 2))
        self.center = (float(center[0]), float(center[1]))
        self._center_arr = np.asarray(self.center, dtype=np.float64)

    def _to_pixels(self, rotated: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """回転済み点群から (xs, ys, 有効マスク) を返す。呼び出し側の errstate 内で使う。"""
        divisor = self.perspective - rotated[:, 2]
        screen = rotated[:, :2] / divisor[:, None] * self._center_arr + self._center_arr
        screen = np.trunc(screen)
        valid = (divisor > 0.0) & np.all(np.isfinite(screen), axis=1)
        valid &= (screen[:, 0] >= 0.0) & (screen[:, 0] < self.width)
        valid &= (screen[:, 1] >= 0.0) & (screen[:, 1] < self.height)

        xs = np.zeros(screen.shape[0], dtype=np.int64)
        ys = np.zeros(screen.shape[0], dtype=np.int64)
        xs[valid] = screen[valid, 0].astype(np.int64)
        ys[valid] = screen[valid, 1].astype(np.int64)
        return xs, ys, valid

    def _pixels_of(
        self, source: np.ndarray, target: np.ndarray, morph_factor: float, rotation: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """補間 → 回転 → 画素化。非有限値の浮動小数警告はここで抑止する。"""
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            points = lerp(source, target, morph_factor)
            rotated = rotate_points(points.reshape(-1, 3), rotation)
            return self._to_pixels(rotated)

    def project(
        self,
        source: np.ndarray,
        target: np.ndarray,
        morph_factor: float,
        rotation: np.ndarray,
        source_color: RGBA,
        target_color: RGBA,
    ) -> ProjectedPoints:
        """全頂点を投影し、範囲内に残った画素座標と補間色を返す。"""
        xs, ys, valid = self._pixels_of(source, target, morph_factor, rotation)
        indices = np.flatnonzero(valid)
        return ProjectedPoints(
            xs=xs[indices],
            ys=ys[indices],
            indices=indices,
            color=lerp_color(source_color, target_color, morph_factor),
            discarded=int(valid.shape[0] - indices.shape[0]),
        )

    def project_point(
        self,
        source_vertex: Sequence[float],
        target_vertex: Sequence[float],
        morph_factor: float,
        rotation: np.ndarray,
    ) -> tuple[int, int] | None:
        """1 頂点版。破棄される場合は None。"""
        xs, ys, valid = self._pixels_of(source_vertex, target_vertex, morph_factor, rotation)
        if not valid[0]:
            return None
        return (int(xs[0]), int(ys[0]))


__all__ = ["lerp", "lerp_color", "ProjectedPoints", "Projector"]
