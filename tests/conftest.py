"""共通フィクスチャ。

- 乱数シード固定
- 既定設定と形状ペア
- 提示フレームを記録するダミー表示面
"""

from __future__ import annotations

import numpy as np
import pytest

from engine.core.config import MorphConfig
from shapes.pair import MorphPair


class RecordingSurface:
    """提示されたフレームのコピーを保持するダミー表示面。"""

    def __init__(self, max_frames: int | None = None):
        self.max_frames = max_frames
        self.frames: list[np.ndarray] = []

    def present(self, pixels: np.ndarray) -> None:
        self.frames.append(np.array(pixels, copy=True))

    def should_close(self) -> bool:
        return self.max_frames is not None and len(self.frames) >= self.max_frames


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def default_config() -> MorphConfig:
    return MorphConfig()


@pytest.fixture()
def default_pair(default_config: MorphConfig) -> MorphPair:
    return MorphPair.from_specs(default_config.source, default_config.target)


@pytest.fixture()
def recording_surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture()
def make_surface():
    """`RecordingSurface` を任意の `max_frames` で作るファクトリ。"""
    return RecordingSurface
