from __future__ import annotations

import math

import pytest

from engine.core.morph_state import (
    HOLDING_SOURCE,
    HOLDING_TARGET,
    MORPHING_BACKWARD,
    MORPHING_FORWARD,
    MorphState,
    MorphTiming,
)

# 2 進で正確に表せる刻み（端点到達/反転フレームが厳密に決まる）
EXACT = MorphTiming(morph_speed=0.25, hold_increment=0.25, hold_duration=1.0)


def test_initial_state_holds_at_source() -> None:
    s = MorphState()
    assert s.morph_factor == 0.0
    assert s.morphing_forward is False
    assert s.phase == HOLDING_SOURCE


def test_first_ticks_accumulate_hold_without_moving() -> None:
    s = MorphState()
    s.tick(EXACT)
    assert s.morph_factor == 0.0
    assert s.hold_timer == 0.25


def test_exact_cycle_sequence() -> None:
    s = MorphState()
    factors = []
    flips = []
    for frame in range(1, 19):
        if s.tick(EXACT):
            flips.append(frame)
        factors.append(s.morph_factor)
    assert flips == [4, 11, 18]
    assert factors[:11] == [0.0, 0.0, 0.0, 0.0, 0.25, 0.5, 0.75, 1.0, 1.0, 1.0, 1.0]
    assert factors[11:] == [0.75, 0.5, 0.25, 0.0, 0.0, 0.0, 0.0]


def test_flip_does_not_reset_or_jump_morph_factor() -> None:
    s = MorphState()
    prev = s.morph_factor
    for _ in range(200):
        s.tick(EXACT)
        assert abs(s.morph_factor - prev) <= EXACT.morph_speed
        prev = s.morph_factor


def test_flip_requires_full_hold_while_pinned() -> None:
    s = MorphState()
    for _ in range(4):
        s.tick(EXACT)
    assert s.morphing_forward is True
    # 補間中はホールドタイマが進まない
    for _ in range(3):
        s.tick(EXACT)
        assert s.hold_timer == 0.0
        assert s.phase == MORPHING_FORWARD
    s.tick(EXACT)
    assert s.morph_factor == 1.0
    assert s.phase == HOLDING_TARGET
    assert s.morphing_forward is True
    assert s.hold_timer == 0.25


def test_phase_names_backward() -> None:
    s = MorphState(morph_factor=0.5, morphing_forward=False)
    assert s.phase == MORPHING_BACKWARD


def test_default_timing_flips_once_per_hold_window() -> None:
    timing = MorphTiming()
    s = MorphState()
    toggles = 0
    last_dir = s.morphing_forward
    # 既定値ではホールドは約 200 フレーム（浮動小数の累積誤差で ±1）
    for _ in range(timing.hold_frames + 1):
        s.tick(timing)
        if s.morphing_forward != last_dir:
            toggles += 1
            last_dir = s.morphing_forward
    assert toggles == 1
    assert s.morph_factor <= 2 * timing.morph_speed


def test_default_timing_factor_stays_in_unit_interval() -> None:
    timing = MorphTiming()
    s = MorphState()
    for _ in range(2000):
        s.tick(timing)
        assert 0.0 <= s.morph_factor <= 1.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"morph_speed": 0.0},
        {"hold_increment": -0.1},
        {"hold_duration": -1.0},
    ],
)
def test_invalid_timing_raises(kwargs) -> None:
    with pytest.raises(ValueError):
        MorphTiming(**kwargs)


def test_rotation_time_wraps_into_tau() -> None:
    s = MorphState()
    phase = s.set_rotation_time(10.0, 1.0)
    assert phase == pytest.approx(10.0 - 2 * math.pi)
    assert 0.0 <= s.set_rotation_time(-1.0, 1.0) < 2 * math.pi


def test_rotation_step_wraps_to_zero() -> None:
    s = MorphState()
    steps = [s.advance_rotation_step(4) for _ in range(5)]
    assert steps == [1, 2, 3, 0, 1]
    assert s.rotation_phase == pytest.approx(math.pi / 2)
