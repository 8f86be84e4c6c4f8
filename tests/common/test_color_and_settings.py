from __future__ import annotations

import logging

import pytest

from common import settings
from common.env import env_bool, env_int, env_str
from common.logging import setup_default_logging
from util.color import normalize_color, parse_hex_color_str


def test_named_colors() -> None:
    assert normalize_color("darkgreen") == (0.0, 117 / 255, 44 / 255, 1.0)
    assert normalize_color("Dark Green") == normalize_color("darkgreen")
    assert normalize_color("maroon") == (190 / 255, 33 / 255, 55 / 255, 1.0)


def test_hex_colors() -> None:
    assert parse_hex_color_str("#FF000080") == (1.0, 0.0, 0.0, 128 / 255)
    assert normalize_color("0x00ff00") == (0.0, 1.0, 0.0, 1.0)


def test_tuple_colors() -> None:
    assert normalize_color((0.0, 0.5, 1.0)) == (0.0, 0.5, 1.0, 1.0)
    assert normalize_color([0, 117, 44, 255]) == normalize_color("darkgreen")
    assert normalize_color((255, 0, 0)) == (1.0, 0.0, 0.0, 1.0)


@pytest.mark.parametrize("bad", ["#12", "#zzzzzz", (1, 2), 3.0, None])
def test_invalid_colors(bad) -> None:
    with pytest.raises(ValueError):
        normalize_color(bad)


def test_env_helpers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PXM_TEST_INT", "-4")
    monkeypatch.setenv("PXM_TEST_BOOL", "off")
    monkeypatch.setenv("PXM_TEST_STR", "  ")
    assert env_int("PXM_TEST_INT", 1, min_value=0) == 0
    assert env_bool("PXM_TEST_BOOL", True) is False
    assert env_str("PXM_TEST_STR", "dflt") == "dflt"
    assert env_int("PXM_TEST_MISSING", 7) == 7


def test_settings_reload_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PXM_USE_NUMBA", "0")
    monkeypatch.setenv("PXM_LOG_LEVEL", "debug")
    monkeypatch.setenv("PXM_HEADLESS_FRAMES", "30")
    try:
        settings.reload_from_env()
        s = settings.get()
        assert s.USE_NUMBA is False
        assert s.LOG_LEVEL == "DEBUG"
        assert s.HEADLESS_FRAMES == 30
    finally:
        monkeypatch.undo()
        settings.reload_from_env()
    assert settings.get().USE_NUMBA is True


def test_setup_default_logging_is_noop_with_handlers() -> None:
    root = logging.getLogger()
    before = list(root.handlers)
    handler = logging.NullHandler()
    root.addHandler(handler)
    try:
        setup_default_logging("DEBUG")
        assert root.handlers == before + [handler]
    finally:
        root.removeHandler(handler)
