from __future__ import annotations

from functools import lru_cache

import numpy as np

from .registry import shape


@lru_cache(maxsize=32)
def _torus_grid(
    ring_radius: float, tube_radius: float, horizontal_samples: int, vertical_samples: int
) -> np.ndarray:
    """トーラス表面の点群を生成（float64, 読み取り専用）。並びは球と同じ行優先。"""
    if horizontal_samples < 1 or vertical_samples < 1:
        empty = np.empty((0, 3), dtype=np.float64)
        empty.setflags(write=False)
        return empty

    phi = np.arange(vertical_samples, dtype=np.float64) * (2.0 * np.pi / vertical_samples)
    theta = np.arange(horizontal_samples, dtype=np.float64) * (2.0 * np.pi / horizontal_samples)
    phi_g, theta_g = np.meshgrid(phi, theta, indexing="ij")

    r = ring_radius + tube_radius * np.cos(phi_g)
    vertices = np.empty((vertical_samples * horizontal_samples, 3), dtype=np.float64)
    vertices[:, 0] = (r * np.cos(theta_g)).ravel()
    vertices[:, 1] = (r * np.sin(theta_g)).ravel()
    vertices[:, 2] = (tube_radius * np.sin(phi_g)).ravel()
    vertices.setflags(write=False)
    return vertices


@shape
def torus(
    *,
    ring_radius: float = 70.0,
    tube_radius: float = 30.0,
    horizontal_samples: int = 40,
    vertical_samples: int = 20,
) -> np.ndarray:
    """トーラス表面の点群を生成します。

    phi（管の周方向）と theta（リングの周方向）はともに [0, 2π) を等分する。
    同じサンプル数の `sphere` と index 単位で対応する。
    """
    return _torus_grid(
        float(ring_radius), float(tube_radius), int(horizontal_samples), int(vertical_samples)
    )
