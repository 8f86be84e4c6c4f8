from __future__ import annotations

import pytest

from engine.core.frame_clock import FrameClock, PacedClock


class _Recorder:
    def __init__(self, name: str, log: list):
        self.name = name
        self.log = log

    def tick(self, dt: float) -> None:
        self.log.append((self.name, dt))


class _FakeTime:
    def __init__(self) -> None:
        self.t = 0.0
        self.slept: list[float] = []

    def now(self) -> float:
        return self.t

    def sleep(self, sec: float) -> None:
        self.slept.append(sec)
        self.t += sec


def test_frame_clock_calls_tickables_in_order() -> None:
    log: list = []
    clock = FrameClock([_Recorder("a", log), _Recorder("b", log)])
    clock.tick(0.5)
    assert log == [("a", 0.5), ("b", 0.5)]


def test_frame_clock_measures_dt_when_not_given() -> None:
    log: list = []
    FrameClock([_Recorder("a", log)]).tick()
    assert log[0][1] >= 0.0


def test_paced_clock_sleeps_until_next_deadline() -> None:
    ft = _FakeTime()
    clock = PacedClock(10, now=ft.now, sleep=ft.sleep)
    assert clock.wait_next() == pytest.approx(0.1)
    ft.t += 0.03
    assert clock.wait_next() == pytest.approx(0.07)
    assert ft.t == pytest.approx(0.2)
    assert clock.elapsed() == pytest.approx(0.2)
    assert clock.frames == 2


def test_paced_clock_does_not_accumulate_lateness() -> None:
    ft = _FakeTime()
    clock = PacedClock(10, now=ft.now, sleep=ft.sleep)
    ft.t = 1.0
    assert clock.wait_next() == 0.0
    assert ft.slept == []
    assert clock.wait_next() == pytest.approx(0.1)
    assert ft.t == pytest.approx(1.1)


def test_paced_clock_rejects_non_positive_fps() -> None:
    with pytest.raises(ValueError):
        PacedClock(0)
