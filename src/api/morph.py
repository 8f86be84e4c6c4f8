"""
どこで: `api.morph`（実行ランナー）。
何を: 球⇄トーラスの点群モーフを構築し、pyglet ウィンドウ（または画面無し）で固定レート実行する。
なぜ: 設定解決・形状生成・ループ駆動・表示面の結線を 1 関数にまとめ、少ない記述で起動できるようにするため。

実行フロー（概要）:
1) 設定解決: `MorphConfig`（YAML `morph:` セクション + 明示引数）。
2) 形状生成: `MorphPair.from_specs` で頂点数一致を検査（不一致はループ開始前に `ValueError`）。
3) 表示面: `headless=True` なら `NullSurface`/`PngSequenceSurface`、それ以外は `RenderWindow`。
4) フレーム駆動:
   - ウィンドウ: `FrameClock([loop])` を `pyglet.clock.schedule_interval(…, 1/fps)` で駆動。
     `ESC` で終了、`P` で現在フレームを PNG 保存。
   - ヘッドレス: `MorphLoop.run(PacedClock(fps))` のブロッキングループ。

例:
    from api import run
    run(fps=60, scale=4)
"""

from __future__ import annotations

import logging
from pathlib import Path

from engine.core.config import MorphConfig
from engine.core.frame_clock import PacedClock
from engine.core.loop import MorphLoop
from engine.core.surface import DisplaySurface, NullSurface, PngSequenceSurface
from shapes.pair import MorphPair

from .morph_runner.utils import resolve_config

logger = logging.getLogger(__name__)


def build_loop(config: MorphConfig, surface: DisplaySurface) -> MorphLoop:
    """設定から形状ペアを生成し、ループドライバを構築する。"""
    pair = MorphPair.from_specs(config.source, config.target)
    logger.info("morph config: %s", config.summary())
    logger.info(
        "morph pair: %s -> %s (%d vertices)", config.source["name"], config.target["name"], len(pair)
    )
    return MorphLoop(config, pair, surface)


def run_headless(
    config: MorphConfig,
    *,
    frames: int,
    out_dir: Path | None = None,
    paced: bool = False,
) -> MorphLoop:
    """ウィンドウ無しで `frames` フレーム描画する。`out_dir` 指定時は連番 PNG を保存。

    `paced=False` では待機せずに全速で回す（経過時間は fps から仮想的に進める）。
    """
    if frames < 0:
        raise ValueError(f"frames must be >= 0, got {frames}")
    if out_dir is not None:
        from util.paths import ensure_frames_dir

        surface: NullSurface = PngSequenceSurface(ensure_frames_dir(Path(out_dir)), frames)
    else:
        surface = NullSurface(frames)
    loop = build_loop(config, surface)

    if paced:
        clock = PacedClock(config.fps)
    else:
        virtual = {"t": 0.0}

        def _now() -> float:
            return virtual["t"]

        def _sleep(sec: float) -> None:
            virtual["t"] += sec

        clock = PacedClock(config.fps, now=_now, sleep=_sleep)
    loop.run(clock, max_frames=frames)
    return loop


def run_morph(
    config: MorphConfig | None = None,
    *,
    config_path: Path | str | None = None,
    fps: int | None = None,
    scale: int | None = None,
    rotation_mode: str | None = None,
    headless: bool = False,
    frames: int = 0,
    out_dir: Path | None = None,
    init_only: bool = False,
) -> MorphLoop | None:
    """モーフ表示を実行する。

    Parameters
    ----------
    config : MorphConfig | None
        明示設定。None で YAML から解決。
    config_path : Path | str | None
        追加で読み込む YAML（`morph:` セクション）。
    fps, scale, rotation_mode : optional
        設定の上書き。
    headless : bool, default False
        True でウィンドウを作らず `frames` フレームだけ描画する。
    frames : int, default 0
        ヘッドレス時のフレーム数。
    out_dir : Path | None
        ヘッドレス時に連番 PNG を保存するディレクトリ。
    init_only : bool, default False
        True で設定解決と形状検証だけ行い、ループを構築して返す（表示/駆動はしない）。

    Returns
    -------
    MorphLoop | None
        ヘッドレス/`init_only` 時は構築したループ。ウィンドウ実行時は None。

    Raises
    ------
    ValueError
        設定不正、または形状ペアの頂点数不一致。
    KeyError
        未登録の形状名。
    """
    cfg = resolve_config(
        config, config_path=config_path, fps=fps, scale=scale, rotation_mode=rotation_mode
    )

    if init_only:
        return build_loop(cfg, NullSurface(0))

    if headless:
        return run_headless(cfg, frames=int(frames), out_dir=out_dir)

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import pyglet
    from pyglet.window import key

    from engine.core.frame_clock import FrameClock

    from .morph_runner.export import save_current_frame
    from .morph_runner.render import create_window_and_blitter

    rendering_window, _mgl_ctx, _blitter = create_window_and_blitter(cfg)
    loop = build_loop(cfg, rendering_window)

    frame_clock = FrameClock([loop])
    pyglet.clock.schedule_interval(frame_clock.tick, 1 / cfg.fps)

    @rendering_window.event
    def on_key_press(sym, mods):  # noqa: ANN001
        if sym == key.ESCAPE:
            rendering_window.close()
        if sym == key.P:
            save_current_frame(loop)

    pyglet.app.run()
    pyglet.clock.unschedule(frame_clock.tick)
    logger.info("window closed after %d frame(s)", loop.frame_index)
    return None


__all__ = ["build_loop", "run_headless", "run_morph"]
