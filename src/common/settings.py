"""
どこで: `common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int, env_str


@dataclass
class _Settings:
    # Logging
    LOG_LEVEL: str = "INFO"

    # Rasterize
    USE_NUMBA: bool = True

    # Runner
    HEADLESS_FRAMES: int = 0


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - bool は `env_bool`、int は `env_int` を使用。
    - フレーム数は下限 0 に丸める。
    """
    _settings.LOG_LEVEL = env_str("PXM_LOG_LEVEL", "INFO").upper()
    _settings.USE_NUMBA = env_bool("PXM_USE_NUMBA", True)
    _settings.HEADLESS_FRAMES = env_int("PXM_HEADLESS_FRAMES", 0, min_value=0) or 0


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
