"""
どこで: `engine.core.morph_state`。
何を: モーフ係数・ホールドタイマ・進行方向・回転位相を持つ 1 フレーム単位の状態機械。
なぜ: 描画ループから時間発展の規則を切り離し、ウィンドウ無しで検証できるようにするため。

状態遷移（数値フィールドに暗黙的に埋め込まれている）:

    holding_source → morphing_forward → holding_target → morphing_backward → ...

- 毎フレーム `morph_factor` を ±`morph_speed` 進め、[0, 1] にクランプする。
- 端点（0 または 1）にある間は `hold_timer` を `hold_increment` ずつ加算し、
  `hold_duration` 以上になったら方向だけを反転して `hold_timer` を 0 に戻す。
- 反転時に `morph_factor` は書き換えない（既に端点にあり、次フレームの増分で離れる）。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

TAU = 2.0 * math.pi

HOLDING_SOURCE = "holding_source"
MORPHING_FORWARD = "morphing_forward"
HOLDING_TARGET = "holding_target"
MORPHING_BACKWARD = "morphing_backward"


@dataclass(frozen=True)
class MorphTiming:
    """1 フレームあたりの増分とホールド長。

    Parameters
    ----------
    morph_speed : float
        1 フレームあたりの `morph_factor` の変化量。
    hold_increment : float
        端点で 1 フレームごとに `hold_timer` へ加算する量。
    hold_duration : float
        方向反転までに必要な `hold_timer` の累積量。
    """

    morph_speed: float = 0.005
    hold_increment: float = 0.01
    hold_duration: float = 2.0

    def __post_init__(self) -> None:
        if not self.morph_speed > 0.0:
            raise ValueError(f"morph_speed must be > 0, got {self.morph_speed}")
        if not self.hold_increment > 0.0:
            raise ValueError(f"hold_increment must be > 0, got {self.hold_increment}")
        if self.hold_duration < 0.0:
            raise ValueError(f"hold_duration must be >= 0, got {self.hold_duration}")

    @property
    def hold_frames(self) -> int:
        """反転までに端点で過ごすフレーム数（浮動小数誤差で ±1 し得る目安値）。"""
        return max(1, math.ceil(self.hold_duration / self.hold_increment))


@dataclass
class MorphState:
    """モーフと回転の進行状態。ループドライバが 1 フレームに 1 回だけ更新する。"""

    rotation_phase: float = 0.0
    morph_factor: float = 0.0
    hold_timer: float = 0.0
    morphing_forward: bool = False
    rotation_step: int = 0

    @property
    def is_holding(self) -> bool:
        return self.morph_factor == 0.0 or self.morph_factor == 1.0

    @property
    def phase(self) -> str:
        """現在の暗黙状態名。"""
        if self.is_holding:
            # 端点到達後、反転するまでは到達した側のホールド
            at_target = self.morph_factor == 1.0
            return HOLDING_TARGET if at_target else HOLDING_SOURCE
        return MORPHING_FORWARD if self.morphing_forward else MORPHING_BACKWARD

    def tick(self, timing: MorphTiming) -> bool:
        """モーフ状態を 1 フレーム進める。

        Returns
        -------
        bool
            このフレームで進行方向が反転した場合 True。
        """
        step = timing.morph_speed if self.morphing_forward else -timing.morph_speed
        self.morph_factor = min(1.0, max(0.0, self.morph_factor + step))

        if not self.is_holding:
            return False

        self.hold_timer += timing.hold_increment
        if self.hold_timer >= timing.hold_duration:
            self.morphing_forward = not self.morphing_forward
            self.hold_timer = 0.0
            return True
        return False

    def set_rotation_time(self, elapsed: float, rotation_speed: float) -> float:
        """経過時間から回転位相を再計算する（[0, 2π) に折り返し）。"""
        self.rotation_phase = math.fmod(elapsed * rotation_speed, TAU)
        if self.rotation_phase < 0.0:
            self.rotation_phase += TAU
        return self.rotation_phase

    def advance_rotation_step(self, table_size: int) -> int:
        """離散ステップを 1 進めて `table_size` で折り返し、位相も更新する。"""
        self.rotation_step = (self.rotation_step + 1) % table_size
        self.rotation_phase = TAU * self.rotation_step / table_size
        return self.rotation_step


__all__ = [
    "MorphTiming",
    "MorphState",
    "HOLDING_SOURCE",
    "MORPHING_FORWARD",
    "HOLDING_TARGET",
    "MORPHING_BACKWARD",
]
