"""
どこで: `engine.core.config`。
何を: 画面寸法・タイミング定数・透視定数・回転方式・モーフ対象をまとめた `MorphConfig`。
なぜ: 定数をモジュール変数に散らさず、ループドライバへ構築時に渡して単体テストを容易にするため。
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Mapping

from common.types import RGBA
from util.color import normalize_color

from .morph_state import MorphTiming

ROTATION_MODES = ("clock", "table")


def _default_source() -> dict[str, Any]:
    return {
        "name": "sphere",
        "params": {"radius": 100.0, "horizontal_samples": 40, "vertical_samples": 20},
        "color": "darkgreen",
    }


def _default_target() -> dict[str, Any]:
    return {
        "name": "torus",
        "params": {
            "ring_radius": 70.0,
            "tube_radius": 30.0,
            "horizontal_samples": 40,
            "vertical_samples": 20,
        },
        "color": "maroon",
    }


def _shape_spec(value: Any, label: str) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{label} must be a mapping with 'name', got {value!r}")
    if "name" not in value:
        raise ValueError(f"{label} requires 'name'")
    params = value.get("params") or {}
    if not isinstance(params, Mapping):
        raise ValueError(f"{label}.params must be a mapping, got {params!r}")
    spec: dict[str, Any] = {"name": str(value["name"]), "params": dict(params)}
    if "color" in value:
        spec["color"] = value["color"]
    return spec


@dataclass(frozen=True)
class MorphConfig:
    """モーフ表示の設定。

    Parameters
    ----------
    width, height : int
        ラスタ（FrameBuffer）の寸法 [px]。
    scale : int
        表示時の整数拡大率（ウィンドウは `width*scale × height*scale`）。
    fps : int
        目標フレームレート。
    perspective : float
        透視除算の定数（`perspective - z` が除数）。
    rotation_speed : float
        `clock` 方式での角速度 [rad/s]。
    rotation_mode : str
        `"clock"`（経過時間から毎フレーム計算）または `"table"`（整数ステップの前計算表）。
    rotation_table_size : int
        `table` 方式のテーブル長（1 周あたりのフレーム数）。
    timing : MorphTiming
        モーフ/ホールドの増分。
    background : RGBA
        クリア色。
    caption : str
        ウィンドウタイトル。
    source, target : dict
        `{"name", "params", "color"}` 形式のモーフ元/先。
    """

    width: int = 240
    height: int = 240
    scale: int = 4
    fps: int = 60
    perspective: float = 200.0
    rotation_speed: float = 1.0
    rotation_mode: str = "clock"
    rotation_table_size: int = 360
    timing: MorphTiming = field(default_factory=MorphTiming)
    background: RGBA = (0.0, 0.0, 0.0, 1.0)
    caption: str = "Sphere"
    source: dict[str, Any] = field(default_factory=_default_source)
    target: dict[str, Any] = field(default_factory=_default_target)

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"width/height must be >= 1, got {(self.width, self.height)}")
        if self.scale < 1:
            raise ValueError(f"scale must be >= 1, got {self.scale}")
        if self.fps < 1:
            raise ValueError(f"fps must be >= 1, got {self.fps}")
        if self.rotation_mode not in ROTATION_MODES:
            raise ValueError(
                f"rotation_mode must be one of {ROTATION_MODES}, got {self.rotation_mode!r}"
            )
        if self.rotation_table_size < 1:
            raise ValueError(f"rotation_table_size must be >= 1, got {self.rotation_table_size}")

    @property
    def window_size(self) -> tuple[int, int]:
        return (self.width * self.scale, self.height * self.scale)

    @property
    def center(self) -> tuple[float, float]:
        """画面中心（整数除算。ラスタ寸法が奇数でも画素格子に揃う）。"""
        return (float(self.width // 2), float(self.height // 2))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "MorphConfig":
        """YAML 由来の辞書から構築する（未知キーは `ValueError`）。"""
        if not data:
            return cls()
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"unknown morph config key(s): {', '.join(unknown)}")

        kwargs: dict[str, Any] = {}
        try:
            for key in ("width", "height", "scale", "fps", "rotation_table_size"):
                if key in data:
                    kwargs[key] = int(data[key])
            for key in ("perspective", "rotation_speed"):
                if key in data:
                    kwargs[key] = float(data[key])
        except (TypeError, ValueError) as e:
            raise ValueError(f"invalid numeric morph config value: {e}") from e
        if "rotation_mode" in data:
            kwargs["rotation_mode"] = str(data["rotation_mode"]).strip().lower()
        if "caption" in data:
            kwargs["caption"] = str(data["caption"])
        if "background" in data:
            kwargs["background"] = normalize_color(data["background"])
        if "timing" in data:
            timing = data["timing"] or {}
            if not isinstance(timing, Mapping):
                raise ValueError(f"timing must be a mapping, got {timing!r}")
            try:
                kwargs["timing"] = MorphTiming(**{k: float(v) for k, v in timing.items()})
            except TypeError as e:
                raise ValueError(f"invalid timing config: {e}") from e
        if "source" in data:
            kwargs["source"] = _shape_spec(data["source"], "source")
        if "target" in data:
            kwargs["target"] = _shape_spec(data["target"], "target")
        return cls(**kwargs)

    def with_overrides(self, **overrides: Any) -> "MorphConfig":
        """None 以外の値だけを上書きした新しい設定を返す。"""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def summary(self) -> dict[str, Any]:
        d = asdict(self)
        d["window_size"] = self.window_size
        return d


__all__ = ["MorphConfig", "ROTATION_MODES"]
