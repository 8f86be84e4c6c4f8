"""
どこで: `engine.core.rotation`。
何を: ヨー/ピッチ/ロールからの単位四元数・3x3 回転行列、整数ステップ引きの回転テーブル、
      およびフレーム毎の回転を決める 2 つの方式（経過時間 / 離散テーブル）。
なぜ: 1 フレームに 1 回だけ回転を合成し、全頂点へ同じ行列を適用するため。

規約:
- 四元数は `(x, y, z, w)`。ヨーは Y 軸、ピッチは X 軸、ロールは Z 軸回り。
- 合成順はロール → ピッチ → ヨー（点に先に効く順）。
- 行列は列ベクトル規約で `R @ v`。点群 `(N, 3)` には `pts @ R.T` で適用する。
"""

from __future__ import annotations

import math
from typing import Protocol

import numpy as np

from .morph_state import TAU, MorphState

Quaternion = tuple[float, float, float, float]


def quaternion_from_yaw_pitch_roll(yaw: float, pitch: float, roll: float) -> Quaternion:
    """ヨー/ピッチ/ロール [rad] から単位四元数 `(x, y, z, w)` を作る。"""
    sr, cr = math.sin(roll * 0.5), math.cos(roll * 0.5)
    sp, cp = math.sin(pitch * 0.5), math.cos(pitch * 0.5)
    sy, cy = math.sin(yaw * 0.5), math.cos(yaw * 0.5)

    x = cy * sp * cr + sy * cp * sr
    y = sy * cp * cr - cy * sp * sr
    z = cy * cp * sr - sy * sp * cr
    w = cy * cp * cr + sy * sp * sr
    return (x, y, z, w)


def quaternion_to_matrix(q: Quaternion) -> np.ndarray:
    """四元数を 3x3 回転行列（float64）へ変換する。

    正規化してから変換する。ゼロ四元数は `ValueError`。
    """
    x, y, z, w = (float(c) for c in q)
    n = math.sqrt(x * x + y * y + z * z + w * w)
    if n == 0.0 or not math.isfinite(n):
        raise ValueError(f"cannot build rotation from quaternion {q!r}")
    if n != 1.0:
        x, y, z, w = x / n, y / n, z / n, w / n

    xx, yy, zz = x * x, y * y, z * z
    xy, xz, yz = x * y, x * z, y * z
    wx, wy, wz = w * x, w * y, w * z
    return np.array(
        [
            [1.0 - 2.0 * (yy + zz), 2.0 * (xy - wz), 2.0 * (xz + wy)],
            [2.0 * (xy + wz), 1.0 - 2.0 * (xx + zz), 2.0 * (yz - wx)],
            [2.0 * (xz - wy), 2.0 * (yz + wx), 1.0 - 2.0 * (xx + yy)],
        ],
        dtype=np.float64,
    )


def rotation_matrix(phase: float) -> np.ndarray:
    """位相 `phase` をヨー/ピッチ/ロール共通の角度とした回転行列。"""
    return quaternion_to_matrix(quaternion_from_yaw_pitch_roll(phase, phase, phase))


def rotate_points(points: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """`(N, 3)` の点群に回転行列を適用する（新しい配列を返す）。"""
    return np.asarray(points, dtype=np.float64) @ np.asarray(matrix, dtype=np.float64).T


class RotationTable:
    """[0, 2π) を `size` 等分した位相の回転行列を前計算して保持する。

    キーは整数ステップ（`size` で折り返し）。浮動小数キーは受け付けない。
    """

    def __init__(self, size: int):
        size = int(size)
        if size < 1:
            raise ValueError(f"rotation table size must be >= 1, got {size}")
        self._size = size
        mats = np.empty((size, 3, 3), dtype=np.float64)
        for k in range(size):
            mats[k] = rotation_matrix(TAU * k / size)
        mats.setflags(write=False)
        self._matrices = mats

    @property
    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, step: int) -> np.ndarray:
        if not isinstance(step, (int, np.integer)) or isinstance(step, bool):
            raise TypeError(f"rotation table is keyed by integer steps, got {type(step).__name__}")
        return self._matrices[int(step) % self._size]


class RotationSource(Protocol):
    """フレーム毎の回転を決める方式。状態の回転位相を更新し、行列を返す。"""

    def advance(self, state: MorphState, elapsed: float) -> np.ndarray: ...


class ClockRotation:
    """経過時間から毎フレーム直接計算する方式（ドリフトしない）。"""

    def __init__(self, speed: float = 1.0):
        self.speed = float(speed)

    def advance(self, state: MorphState, elapsed: float) -> np.ndarray:
        phase = state.set_rotation_time(elapsed, self.speed)
        return rotation_matrix(phase)


class TableRotation:
    """整数ステップを 1 フレームに 1 つ進め、前計算テーブルを引く方式。"""

    def __init__(self, size: int):
        self.table = RotationTable(size)

    def advance(self, state: MorphState, elapsed: float) -> np.ndarray:
        step = state.advance_rotation_step(self.table.size)
        return self.table[step]


def make_rotation_source(mode: str, *, speed: float = 1.0, table_size: int = 360) -> RotationSource:
    """設定値 `rotation_mode` から回転方式を生成する。"""
    key = str(mode).strip().lower()
    if key == "clock":
        return ClockRotation(speed)
    if key == "table":
        return TableRotation(table_size)
    raise ValueError(f"unknown rotation mode: {mode!r} (expected 'clock' or 'table')")


__all__ = [
    "Quaternion",
    "quaternion_from_yaw_pitch_roll",
    "quaternion_to_matrix",
    "rotation_matrix",
    "rotate_points",
    "RotationTable",
    "RotationSource",
    "ClockRotation",
    "TableRotation",
    "make_rotation_source",
]
