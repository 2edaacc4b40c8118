"""Color helpers for RGB-packed ints (0xRRGGBB).

All shading in the rigs goes through brighten/darken so a single base color
per entity is enough to derive hair, skin, armor and border tones.
"""
from __future__ import annotations

from typing import Optional, Union

ColorLike = Union[int, str, tuple]


def split_rgb(color: int) -> tuple[int, int, int]:
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def pack_rgb(r: int, g: int, b: int) -> int:
    return (r << 16) | (g << 8) | b


def hex_to_rgb(h: str) -> tuple[int, int, int]:
    h = h.lstrip("#")
    return tuple(int(h[i:i+2], 16) for i in (0, 2, 4))


def brighten(color: Optional[int], percent: float) -> int:
    """Raise each channel by `percent` of itself, capped at 255. None -> white."""
    if color is None:
        return 0xFFFFFF
    r, g, b = split_rgb(color)
    return pack_rgb(*(min(255, c + int(c * percent / 100)) for c in (r, g, b)))


def darken(color: Optional[int], percent: float) -> int:
    """Lower each channel by `percent` of itself, floored at 0. None -> black."""
    if color is None:
        return 0x000000
    r, g, b = split_rgb(color)
    return pack_rgb(*(max(0, c - int(c * percent / 100)) for c in (r, g, b)))


def to_rgba(color: int, alpha: float = 1.0) -> tuple[int, int, int, int]:
    a = max(0, min(255, int(round(alpha * 255))))
    return split_rgb(color) + (a,)


def parse_color(value: ColorLike) -> int:
    """Accept 0xRRGGBB ints, '#rrggbb' / '0xrrggbb' strings or RGB tuples."""
    if isinstance(value, bool):
        raise TypeError("bool is not a color")
    if isinstance(value, int):
        if not 0 <= value <= 0xFFFFFF:
            raise ValueError(f"color out of range: {value:#x}")
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text.startswith("0x"):
            return parse_color(int(text, 16))
        if len(text.lstrip("#")) != 6:
            raise ValueError(f"bad color string: {value!r}")
        return pack_rgb(*hex_to_rgb(text))
    if isinstance(value, (tuple, list)) and len(value) >= 3:
        return pack_rgb(*(max(0, min(255, int(c))) for c in value[:3]))
    raise TypeError(f"unsupported color value: {value!r}")
