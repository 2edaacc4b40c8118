"""Item icons: potion, weapon, armor, gold coin, chest."""
from __future__ import annotations

import math

from engine.features import ItemFeatures
from engine.types import DrawSpec
from render.colors import brighten, darken
from render.host import Surface
from render.primitives import border, circle, ellipse, fill_rect, limb, rounded_rect, triangle

WOOD = 0x8B4513
GOLD = 0xFFD700


def _features(spec: DrawSpec) -> ItemFeatures:
    return spec.features if isinstance(spec.features, ItemFeatures) else ItemFeatures()


def _potion(surface: Surface, spec: DrawSpec) -> None:
    w, h = spec.width, spec.height
    rounded_rect(surface, w * 0.2, h * 0.38, w * 0.6, h * 0.55, w * 0.22, spec.color, spec.alpha)
    fill_rect(surface, w * 0.38, h * 0.2, w * 0.24, h * 0.2, 0xCCCCDD, spec.alpha * 0.8)
    fill_rect(surface, w * 0.36, h * 0.08, w * 0.28, h * 0.14, WOOD, spec.alpha)
    ellipse(surface, w * 0.36, h * 0.55, w * 0.07, h * 0.1, 0xFFFFFF, spec.alpha * 0.6)


def _weapon(surface: Surface, spec: DrawSpec) -> None:
    w, h = spec.width, spec.height
    kind = _features(spec).weapon_type
    steel = spec.color
    if kind == "sword":
        angle = math.pi * 0.75
        limb(surface, w * 0.3, h * 0.72, h * 0.62, max(1.0, w * 0.12), angle, steel, spec.alpha, rounded=False)
        surface.draw_line(w * 0.15, h * 0.6, w * 0.42, h * 0.87, GOLD, spec.alpha, 1)
        limb(surface, w * 0.28, h * 0.74, h * 0.18, max(1.0, w * 0.1), -math.pi * 0.25, WOOD, spec.alpha)
    elif kind == "axe":
        limb(surface, w * 0.25, h * 0.9, h * 0.8, max(1.0, w * 0.1), math.pi * 0.8, WOOD, spec.alpha, rounded=False)
        surface.draw_polygon([(w * 0.5, h * 0.15), (w * 0.9, h * 0.1), (w * 0.85, h * 0.5), (w * 0.55, h * 0.4)],
                             steel, spec.alpha)
    elif kind == "bow":
        pts = [(w * 0.3 + math.sin(t / 8 * math.pi) * w * 0.45, h * 0.08 + h * 0.84 * t / 8) for t in range(9)]
        for (x1, y1), (x2, y2) in zip(pts, pts[1:]):
            surface.draw_line(x1, y1, x2, y2, WOOD, spec.alpha, 1)
        surface.draw_line(w * 0.3, h * 0.08, w * 0.3, h * 0.92, 0xEEEEEE, spec.alpha)
    elif kind == "staff":
        surface.draw_line(w * 0.2, h * 0.95, w * 0.7, h * 0.25, WOOD, spec.alpha, max(1.0, w * 0.1))
        circle(surface, w * 0.72, h * 0.22, w * 0.16, _features(spec).accent_color, spec.alpha)
    else:
        fill_rect(surface, w * 0.2, h * 0.2, w * 0.6, h * 0.6, steel, spec.alpha)


def _armor(surface: Surface, spec: DrawSpec) -> None:
    w, h = spec.width, spec.height
    surface.draw_polygon([(w * 0.15, h * 0.2), (w * 0.38, h * 0.12), (w * 0.5, h * 0.24), (w * 0.62, h * 0.12),
                          (w * 0.85, h * 0.2), (w * 0.78, h * 0.9), (w * 0.22, h * 0.9)], spec.color, spec.alpha)
    surface.draw_line(w * 0.5, h * 0.26, w * 0.5, h * 0.88, darken(spec.color, 30), spec.alpha)
    fill_rect(surface, w * 0.3, h * 0.35, w * 0.12, h * 0.08, brighten(spec.color, 30), spec.alpha)


def _gold(surface: Surface, spec: DrawSpec) -> None:
    w, h = spec.width, spec.height
    circle(surface, w / 2, h / 2, w * 0.42, darken(spec.color, 25), spec.alpha)
    circle(surface, w / 2, h / 2, w * 0.34, spec.color, spec.alpha)
    fill_rect(surface, w * 0.45, h * 0.3, w * 0.1, h * 0.4, darken(spec.color, 25), spec.alpha)
    circle(surface, w * 0.38, h * 0.35, w * 0.06, 0xFFFFFF, spec.alpha * 0.7)


def _chest(surface: Surface, spec: DrawSpec) -> None:
    """Base at (8,16,16,12) in a 32px tile; closed lid with clasp or open lid with sparkles."""
    sx, sy = spec.width / 32, spec.height / 32
    f = _features(spec)
    lid = darken(spec.color, 20)
    fill_rect(surface, 8 * sx, 16 * sy, 16 * sx, 12 * sy, spec.color, spec.alpha)
    fill_rect(surface, 8 * sx, 21 * sy, 16 * sx, 1 * sy, darken(spec.color, 40), spec.alpha)
    if f.is_open:
        fill_rect(surface, 8 * sx, 8 * sy, 16 * sx, 4 * sy, lid, spec.alpha)
        fill_rect(surface, 9 * sx, 12 * sy, 14 * sx, 4 * sy, darken(spec.color, 55), spec.alpha)
        for px, py in ((12, 13), (17, 11), (21, 14)):
            triangle(surface, (px * sx - 1, py * sy), (px * sx + 1, py * sy), (px * sx, py * sy - 2.5),
                     f.accent_color, spec.alpha)
    else:
        fill_rect(surface, 8 * sx, 12 * sy, 16 * sx, 4 * sy, lid, spec.alpha)
        fill_rect(surface, 14 * sx, 14 * sy, 4 * sx, 2 * sy, f.accent_color, spec.alpha)


ITEM_SHAPES = {
    "potion": _potion,
    "weapon": _weapon,
    "armor": _armor,
    "gold": _gold,
    "chest": _chest,
}


def draw_item(surface: Surface, spec: DrawSpec) -> None:
    shape = ITEM_SHAPES.get(spec.subtype)
    with surface.layer("body"):
        if shape is None:
            # unknown items: framed swatch
            fill_rect(surface, 1, 1, spec.width - 2, spec.height - 2, spec.color, spec.alpha)
            border(surface, darken(spec.color, 30), spec.alpha)
        else:
            shape(surface, spec)
