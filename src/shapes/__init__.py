"""
どこで: `shapes` パッケージ（関数登録）。
何を: ビルトイン shape（sphere/torus）を import 副作用で登録し、名前から解決できるようにする。
なぜ: 点群生成の拡張点を一箇所に集約し、設定ファイルからモーフ対象を選べるようにするため。
"""

from . import sphere as _register_sphere  # noqa: F401
from . import torus as _register_torus  # noqa: F401
from .pair import MorphPair
from .registry import generate_shape, get_shape, is_shape_registered, list_shapes, shape

__all__ = [
    "shape",
    "get_shape",
    "generate_shape",
    "list_shapes",
    "is_shape_registered",
    "MorphPair",
]
