from __future__ import annotations

from functools import lru_cache

import numpy as np

from .registry import shape


def _freeze(vertices: np.ndarray) -> np.ndarray:
    vertices.setflags(write=False)
    return vertices


@lru_cache(maxsize=32)
def _sphere_grid(radius: float, horizontal_samples: int, vertical_samples: int) -> np.ndarray:
    """緯度経度グリッド上の球面点群を生成（float64, 読み取り専用）。

    並びは「縦（phi）外側・横（theta）内側」の行優先。
    index = i * horizontal_samples + j が phi_i, theta_j に対応する。
    """
    if horizontal_samples < 1 or vertical_samples < 1:
        return _freeze(np.empty((0, 3), dtype=np.float64))

    phi = np.arange(vertical_samples, dtype=np.float64) * (np.pi / vertical_samples)
    theta = np.arange(horizontal_samples, dtype=np.float64) * (2.0 * np.pi / horizontal_samples)
    phi_g, theta_g = np.meshgrid(phi, theta, indexing="ij")

    vertices = np.empty((vertical_samples * horizontal_samples, 3), dtype=np.float64)
    vertices[:, 0] = (radius * np.cos(theta_g) * np.sin(phi_g)).ravel()
    vertices[:, 1] = (radius * np.sin(theta_g) * np.sin(phi_g)).ravel()
    vertices[:, 2] = (radius * np.cos(phi_g)).ravel()
    return _freeze(vertices)


@shape
def sphere(
    *,
    radius: float = 100.0,
    horizontal_samples: int = 40,
    vertical_samples: int = 20,
) -> np.ndarray:
    """球面上の点群を生成します。

    phi は [0, π) を `vertical_samples` 等分、theta は [0, 2π) を
    `horizontal_samples` 等分する（両端の極のうち南極は含まない）。

    Parameters
    ----------
    radius : float, default 100.0
        半径。
    horizontal_samples : int, default 40
        経度方向（theta）のサンプル数。
    vertical_samples : int, default 20
        緯度方向（phi）のサンプル数。

    Returns
    -------
    np.ndarray
        形状 `(horizontal_samples * vertical_samples, 3)` の float64 配列（読み取り専用）。
        サンプル数が 1 未満なら `(0, 3)`。
    """
    return _sphere_grid(float(radius), int(horizontal_samples), int(vertical_samples))
