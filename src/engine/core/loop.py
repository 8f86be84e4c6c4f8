"""
どこで: `engine.core.loop`（ループドライバ）。
何を: クリア → 状態更新 → 回転計算 → 全頂点の投影と書き込み → 表示面へ提示、を 1 フレームとして実行。
なぜ: 単一スレッド・フレーム単位の協調ループとして、FrameBuffer と MorphState を排他的に所有するため。

使用例:
    cfg = MorphConfig()
    pair = MorphPair.from_specs(cfg.source, cfg.target)
    loop = MorphLoop(cfg, pair, NullSurface(max_frames=120))
    loop.run(PacedClock(cfg.fps))
"""

from __future__ import annotations

import logging

import numpy as np

from shapes.pair import MorphPair

from .config import MorphConfig
from .frame_buffer import FrameBuffer
from .frame_clock import PacedClock
from .morph_state import MorphState
from .projector import ProjectedPoints, Projector
from .rotation import RotationSource, make_rotation_source
from .surface import DisplaySurface

logger = logging.getLogger(__name__)


class MorphLoop:
    """モーフ表示のフレームループ（`Tickable`）。"""

    def __init__(
        self,
        config: MorphConfig,
        pair: MorphPair,
        surface: DisplaySurface,
        *,
        state: MorphState | None = None,
        rotation: RotationSource | None = None,
        use_numba: bool | None = None,
    ):
        self.config = config
        self.pair = pair
        self.surface = surface
        self.state = state if state is not None else MorphState()
        self.rotation = (
            rotation
            if rotation is not None
            else make_rotation_source(
                config.rotation_mode,
                speed=config.rotation_speed,
                table_size=config.rotation_table_size,
            )
        )
        self.buffer = FrameBuffer(config.width, config.height, config.background)
        self.projector = Projector(
            config.width, config.height, perspective=config.perspective, center=config.center
        )
        if use_numba is None:
            from common.settings import get as _get_settings

            use_numba = bool(_get_settings().USE_NUMBA)
        self._use_numba = use_numba
        self.elapsed = 0.0
        self.frame_index = 0
        self.last_projection: ProjectedPoints | None = None

    # Tickable
    def tick(self, dt: float) -> None:
        """pyglet のスケジューラから呼ばれる。`dt` を積算して 1 フレーム描く。

        表示面が終了を要求していれば何もしない。
        """
        if self.surface.should_close():
            return
        self.elapsed += float(dt)
        self.render_frame(self.elapsed)

    def render_frame(self, elapsed: float) -> FrameBuffer:
        """1 フレーム分の処理を行い、提示済みのバッファを返す。"""
        self.buffer.clear()

        flipped = self.state.tick(self.config.timing)
        if flipped:
            logger.debug(
                "frame %d: morph direction -> %s",
                self.frame_index,
                "forward" if self.state.morphing_forward else "backward",
            )

        matrix: np.ndarray = self.rotation.advance(self.state, elapsed)

        projected = self.projector.project(
            self.pair.source,
            self.pair.target,
            self.state.morph_factor,
            matrix,
            self.pair.source_color,
            self.pair.target_color,
        )
        self.buffer.write(projected.xs, projected.ys, projected.color, use_numba=self._use_numba)
        if projected.discarded:
            logger.debug("frame %d: discarded %d point(s)", self.frame_index, projected.discarded)
        self.last_projection = projected

        self.surface.present(self.buffer.pixels())
        self.frame_index += 1
        return self.buffer

    def run(self, clock: PacedClock, max_frames: int | None = None) -> int:
        """ブロッキングの固定レートループ。描いたフレーム数を返す。

        終了条件（フレーム境界で判定）:
        - `surface.should_close()` が True
        - `max_frames` に到達
        """
        frames = 0
        while not self.surface.should_close():
            if max_frames is not None and frames >= max_frames:
                break
            self.render_frame(clock.elapsed())
            frames += 1
            clock.wait_next()
        logger.info("morph loop stopped after %d frame(s)", frames)
        return frames


__all__ = ["MorphLoop"]
