"""
どこで: `util.color`。
何を: 色指定の正規化/変換（色名, Hex, RGBA 0–1, RGBA 0–255）を一元化。
なぜ: 設定ファイル/CLI/シェイプ色で同一の受理仕様とエラーメッセージを提供するため。
"""

from __future__ import annotations

from typing import Sequence

# 0–255 の RGBA。既定のモーフ色（球: darkgreen, トーラス: maroon）を含む。
NAMED_COLORS: dict[str, tuple[int, int, int, int]] = {
    "black": (0, 0, 0, 255),
    "white": (255, 255, 255, 255),
    "darkgreen": (0, 117, 44, 255),
    "maroon": (190, 33, 55, 255),
    "skyblue": (102, 191, 255, 255),
    "gold": (255, 203, 0, 255),
}


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else float(x)


def parse_hex_color_str(s: str) -> tuple[float, float, float, float]:
    """Hex 文字列から RGBA(0–1) を返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "0xRRGGBBAA", "RRGGBB", "RRGGBBAA"。
    大文字/小文字は不問。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        r = int(t[0:2], 16)
        g = int(t[2:4], 16)
        b = int(t[4:6], 16)
        a = int(t[6:8], 16) if len(t) == 8 else 255
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)


def _parse_color_str(s: str) -> tuple[float, float, float, float]:
    key = s.strip().lower().replace("_", "").replace(" ", "")
    if key in NAMED_COLORS:
        r, g, b, a = NAMED_COLORS[key]
        return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)
    return parse_hex_color_str(s)


def normalize_color(value: object) -> tuple[float, float, float, float]:
    """色を RGBA(0–1) へ正規化する。

    - 受理: 色名（`NAMED_COLORS`）, Hex 文字列, (r,g,b[,a]) （0–1 または 0–255）
    - 返値: (r,g,b,a) （0–1）
    """
    if isinstance(value, str):
        return _parse_color_str(value)
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"unsupported color type: {type(value)!r}")
    seq: Sequence[float | int] = value
    if len(seq) not in (3, 4):
        raise ValueError("color tuple/list must be length 3 or 4")
    try:
        fseq = [float(x) for x in seq]
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid color tuple/list: {value!r}") from e
    if len(fseq) == 3:
        fseq.append(1.0)
    # 全要素が 0..1 ならそのまま
    if all(0.0 <= x <= 1.0 for x in fseq):
        r, g, b, a = fseq
        return (_clamp01(r), _clamp01(g), _clamp01(b), _clamp01(a))
    # 次に 0–255 とみなし、整数丸め → 0–1 へスケール（アルファ省略時は 255）
    if len(seq) == 3:
        fseq[3] = 255.0
    r8, g8, b8, a8 = (max(0, min(255, int(round(x)))) for x in fseq)
    return (r8 / 255.0, g8 / 255.0, b8 / 255.0, a8 / 255.0)


__all__ = [
    "NAMED_COLORS",
    "parse_hex_color_str",
    "normalize_color",
]
