from __future__ import annotations

from pathlib import Path

from api.morph_runner.utils import morph_section
from engine.core.config import MorphConfig
from util.utils import load_config


def test_default_yaml_is_loaded() -> None:
    cfg = load_config()
    assert cfg.get("test_marker") is True
    assert "morph" in cfg


def test_default_yaml_matches_builtin_defaults() -> None:
    assert MorphConfig.from_mapping(morph_section(load_config())) == MorphConfig()


def test_explicit_path_overrides_top_level_keys(tmp_path: Path) -> None:
    p = tmp_path / "extra.yaml"
    p.write_text("test_marker: false\nextra: 1\n", encoding="utf-8")
    cfg = load_config(p)
    assert cfg["test_marker"] is False
    assert cfg["extra"] == 1
    assert "morph" in cfg


def test_missing_or_broken_files_are_ignored(tmp_path: Path) -> None:
    assert load_config(tmp_path / "nope.yaml").get("test_marker") is True
    broken = tmp_path / "broken.yaml"
    broken.write_text("morph: [unclosed\n", encoding="utf-8")
    assert load_config(broken).get("test_marker") is True
