"""
どこで: `engine.core` の簡易フレームドライバ。
何を: `Tickable` の列を固定順序で呼び出す FrameClock と、単調時計で固定レートに合わせる PacedClock。
なぜ: GUI ループ（pyglet）とヘッドレスのブロッキングループで同じ更新順と時間基準を使うため。
"""

from __future__ import annotations

import time
from typing import Callable, Sequence

from .tickable import Tickable


class FrameClock:
    """登録された Tickable を固定順序で実行するだけの極小クラス。"""

    def __init__(self, tickables: Sequence[Tickable]):
        self._tickables = tuple(tickables)
        self._last_time = time.perf_counter()

    # GUI フレームワークから schedule_interval で呼ばせる
    def tick(self, dt: float | None = None) -> None:
        if dt is None:  # pyglet は dt を渡してくれる
            now = time.perf_counter()  # 他フレームワーク用
            dt = now - self._last_time
            self._last_time = now

        for t in self._tickables:
            t.tick(dt)


class PacedClock:
    """起動からの経過秒と、固定レートでの次フレーム待ちを提供する。

    `now`/`sleep` は差し替え可能（テストでは仮想時計を渡す）。
    期限を過ぎていれば待たずに戻り、遅れは次フレーム以降へ持ち越さない。
    """

    def __init__(
        self,
        fps: int = 60,
        *,
        now: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if fps < 1:
            raise ValueError(f"fps must be >= 1, got {fps}")
        self.fps = int(fps)
        self.interval = 1.0 / self.fps
        self._now = now
        self._sleep = sleep
        self._start = now()
        self._deadline = self._start + self.interval
        self.frames = 0

    def elapsed(self) -> float:
        """起動からの経過秒（単調）。"""
        return self._now() - self._start

    def wait_next(self) -> float:
        """次のフレーム時刻までブロックし、実際に待った秒数を返す。"""
        self.frames += 1
        remaining = self._deadline - self._now()
        if remaining > 0.0:
            self._sleep(remaining)
            self._deadline += self.interval
            return remaining
        # 遅延時は現在時刻から刻み直す
        self._deadline = self._now() + self.interval
        return 0.0


__all__ = ["FrameClock", "PacedClock"]
