"""
どこで: `engine.export.image`。
何を: フレームバッファ（RGBA float 0–1）を PNG として保存するラッパ（最小実装）。
なぜ: ワンアクションのスクリーンショットと、ヘッドレス実行時の連番フレーム出力を同じ経路で行うため。
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import imageio.v3 as iio
import numpy as np

from util.paths import ensure_screenshots_dir


def to_rgba8(pixels: np.ndarray) -> np.ndarray:
    """RGBA ラスタ（float 0–1 または uint8）を `(H, W, 4)` uint8 に変換する。"""
    arr = np.asarray(pixels)
    if arr.ndim != 3 or arr.shape[2] != 4:
        raise ValueError(f"pixels must have shape (H, W, 4), got {arr.shape}")
    if arr.dtype == np.uint8:
        return arr
    return np.round(np.clip(arr, 0.0, 1.0) * 255.0).astype(np.uint8)


def _unique_path(p: Path) -> Path:
    if not p.exists():
        return p
    i = 1
    while True:
        candidate = p.with_name(f"{p.stem}-{i}{p.suffix}")
        if not candidate.exists():
            return candidate
        i += 1


def save_pixels_png(pixels: np.ndarray, path: Path, *, scale: int = 1) -> Path:
    """`(H, W, 4)` のラスタを PNG として保存する。

    Parameters
    ----------
    pixels : np.ndarray
        float（0–1）または uint8 の RGBA ラスタ。行 0 が画像上端。
    path : Path
        出力先。親ディレクトリは作成される。
    scale : int, default 1
        最近傍での整数拡大率（表示時の拡大と同じ見た目にする）。

    Returns
    -------
    Path
        保存先のファイルパス。
    """
    if int(scale) < 1:
        raise ValueError(f"scale must be >= 1, got {scale}")
    img = to_rgba8(pixels)
    if int(scale) > 1:
        img = np.repeat(np.repeat(img, int(scale), axis=0), int(scale), axis=1)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    iio.imwrite(path, img)
    return path


def save_screenshot(pixels: np.ndarray, *, scale: int = 1, name_prefix: str | None = None) -> Path:
    """既定の `data/screenshot/` にタイムスタンプ名で保存する。"""
    out_dir = ensure_screenshots_dir()
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    h, w = int(pixels.shape[0]) * int(scale), int(pixels.shape[1]) * int(scale)
    stem = f"{name_prefix}_{ts}" if name_prefix else ts
    return save_pixels_png(pixels, _unique_path(out_dir / f"{stem}_{w}x{h}.png"), scale=scale)


__all__ = ["to_rgba8", "save_pixels_png", "save_screenshot"]
