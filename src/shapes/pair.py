"""
どこで: `shapes.pair`。
何を: モーフ元/先の頂点列と色を 1 組にまとめる `MorphPair` と、その検証付きファクトリ。
なぜ: 「頂点数が等しく index 同士が対応する」前提を、ループ開始前に検査済みの不変条件にするため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import numpy as np

from common.types import RGBA
from util.color import normalize_color

from .registry import generate_shape


def _as_vertices(name: str, vertices: Any) -> np.ndarray:
    arr = np.asarray(vertices, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"{name} vertices must have shape (N, 3), got {arr.shape}")
    if arr.flags.writeable:
        arr = arr.copy()
        arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class MorphPair:
    """モーフ対象の 2 形状（同数・同順の頂点列 + RGBA 色）。

    直接の生成ではなく `from_shapes` / `from_specs` を使うこと。
    """

    source: np.ndarray
    target: np.ndarray
    source_color: RGBA
    target_color: RGBA

    @classmethod
    def from_shapes(
        cls,
        source: Any,
        target: Any,
        source_color: object = "darkgreen",
        target_color: object = "maroon",
    ) -> "MorphPair":
        """頂点列と色からペアを構築する。

        Raises
        ------
        ValueError
            形状が `(N, 3)` でない、または頂点数が一致しない場合。色が解釈できない場合。
        """
        src = _as_vertices("source", source)
        dst = _as_vertices("target", target)
        if src.shape[0] != dst.shape[0]:
            raise ValueError(
                f"vertex count mismatch: source has {src.shape[0]}, target has {dst.shape[0]}"
            )
        return cls(src, dst, normalize_color(source_color), normalize_color(target_color))

    @classmethod
    def from_specs(cls, source: Mapping[str, Any], target: Mapping[str, Any]) -> "MorphPair":
        """`{"name": ..., "params": {...}, "color": ...}` 形式の指定から構築する。"""
        src = generate_shape(str(source["name"]), source.get("params"))
        dst = generate_shape(str(target["name"]), target.get("params"))
        return cls.from_shapes(
            src,
            dst,
            source.get("color", "darkgreen"),
            target.get("color", "maroon"),
        )

    def __len__(self) -> int:
        return int(self.source.shape[0])


__all__ = ["MorphPair"]
