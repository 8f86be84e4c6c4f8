"""
どこで: `shapes` のレジストリ層（関数専用）。
何を: `@shape` デコレータで頂点生成関数を登録し、取得/一覧/検査を提供。
なぜ: 設定ファイルの形状名（"sphere"/"torus" など）から生成関数を一貫 API で解決するため。

概要:
- 登録対象は「関数」のみ（`(N, 3)` の頂点配列を返す）。
- デコレータは名前省略可（`@shape` / `@shape()`）と明示名指定をサポート。
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Mapping

import numpy as np

from common.base_registry import BaseRegistry

ShapeFn = Callable[..., np.ndarray]

_shape_registry = BaseRegistry()


def shape(arg: Any | None = None, /, name: str | None = None):
    """シェイプ関数をレジストリに登録するデコレータ。

    使用例:
    - `@shape` / `@shape()`                      → 関数名から自動推論。
    - `@shape("custom")` / `@shape(name="custom")` → 明示名で登録。

    例外:
    - TypeError: 関数以外を登録しようとした場合。
    """

    def _register_checked(obj: Any, resolved_name: str | None = None):
        if not inspect.isfunction(obj):
            raise TypeError(f"@shape は関数のみ登録可能です: got {obj!r}")
        return _shape_registry.register(resolved_name)(obj)

    # 直付け (@shape)
    if inspect.isfunction(arg) and name is None:
        return _register_checked(arg, None)

    # 位置引数で名前を渡した (@shape("name"))
    if isinstance(arg, str) and name is None:

        def _decorator_named(obj: Any):
            return _register_checked(obj, arg)

        return _decorator_named

    def _decorator_generic(obj: Any):
        return _register_checked(obj, name)

    return _decorator_generic


def get_shape(name: str) -> ShapeFn:
    """登録されたシェイプ関数を取得。

    例外:
        KeyError: シェイプが登録されていない場合
    """
    return _shape_registry.get(name)


def generate_shape(name: str, params: Mapping[str, Any] | None = None) -> np.ndarray:
    """名前とキーワード引数から頂点列を生成する。

    未知のパラメータ名は `TypeError` ではなく `ValueError` として報告する
    （設定ファイル由来の誤りを構築時に検出するため）。
    """
    fn = get_shape(name)
    kwargs = dict(params or {})
    accepted = set(inspect.signature(fn).parameters)
    unknown = sorted(set(kwargs) - accepted)
    if unknown:
        raise ValueError(f"unknown parameter(s) for shape '{name}': {', '.join(unknown)}")
    return fn(**kwargs)


def list_shapes() -> list[str]:
    """登録されているシェイプ名の一覧（ソート済み）。"""
    return sorted(_shape_registry.list_all())


def is_shape_registered(name: str) -> bool:
    """シェイプが登録されているかチェック。"""
    return _shape_registry.is_registered(name)


def unregister(name: str) -> None:
    """名前を指定して登録を解除（存在しない場合は無視）。"""
    _shape_registry.unregister(name)


__all__ = [
    "shape",
    "get_shape",
    "generate_shape",
    "list_shapes",
    "is_shape_registered",
    "unregister",
]
