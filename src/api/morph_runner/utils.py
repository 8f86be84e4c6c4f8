"""
どこで: `api.morph_runner.utils`（純粋関数/小ヘルパ）。
何を: FPS の解決と、YAML 設定 + 明示引数から `MorphConfig` を組み立てる。
なぜ: `api.morph` を薄く保ち、テスト容易性と再利用性を上げるため。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from engine.core.config import MorphConfig

logger = logging.getLogger(__name__)


def resolve_fps(requested_fps: int | None, *, default: int = 60) -> int:
    """FPS を解決して 1 以上の int を返す。

    - 明示指定があればそれを優先（数値化できない/<=0 は既定へ）。
    """
    if requested_fps is None:
        return max(1, int(default))
    try:
        return max(1, int(requested_fps))
    except (TypeError, ValueError):
        logger.warning("invalid fps %r; using %d", requested_fps, default)
        return max(1, int(default))


def morph_section(cfg: Mapping[str, Any] | None) -> Mapping[str, Any]:
    """設定辞書から `morph:` セクションを取り出す（無ければ空）。"""
    if not isinstance(cfg, Mapping):
        return {}
    section = cfg.get("morph", {})
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ValueError(f"'morph' section must be a mapping, got {type(section).__name__}")
    return section


def resolve_config(
    config: MorphConfig | None = None,
    *,
    config_path: Path | str | None = None,
    fps: int | None = None,
    scale: int | None = None,
    rotation_mode: str | None = None,
) -> MorphConfig:
    """`MorphConfig` を解決する。

    優先順位: 明示引数 > `config` 引数 > YAML（`config_path` > `config.yaml` > `configs/default.yaml`）。
    """
    if config is None:
        from util.utils import load_config

        config = MorphConfig.from_mapping(morph_section(load_config(config_path)))
    return config.with_overrides(
        fps=resolve_fps(fps, default=config.fps) if fps is not None else None,
        scale=scale,
        rotation_mode=rotation_mode,
    )


__all__ = ["resolve_fps", "morph_section", "resolve_config"]
