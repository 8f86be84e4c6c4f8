from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from api import run
from common.logging import setup_default_logging

logger = logging.getLogger("main")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="rotating sphere/torus point-cloud morph")
    p.add_argument("--config", type=Path, default=None, help="extra YAML with a `morph:` section")
    p.add_argument("--fps", type=int, default=None, help="target frames per second")
    p.add_argument("--scale", type=int, default=None, help="integer window upscale factor")
    p.add_argument("--rotation", choices=("clock", "table"), default=None, help="rotation mode")
    p.add_argument("--headless", action="store_true", help="render without a window")
    p.add_argument("--frames", type=int, default=None, help="frame count for --headless")
    p.add_argument("--out", type=Path, default=None, help="write headless frames as PNG here")
    p.add_argument("--log-level", default=None, help="DEBUG/INFO/WARNING (default: PXM_LOG_LEVEL)")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_default_logging(args.log_level)

    frames = args.frames
    if frames is None:
        from common.settings import get as _get_settings

        frames = _get_settings().HEADLESS_FRAMES or 120

    # 捕捉するのは設定解決と形状検証の失敗のみ
    try:
        if frames < 0:
            raise ValueError(f"--frames must be >= 0, got {frames}")
        loop = run(
            config_path=args.config,
            fps=args.fps,
            scale=args.scale,
            rotation_mode=args.rotation,
            init_only=True,
        )
    except (ValueError, KeyError) as e:
        logger.error("invalid configuration: %s", e)
        return 2

    run(loop.config, headless=args.headless, frames=frames, out_dir=args.out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
