"""UI chrome: panels, buttons, bars, slots, cursor and menu pieces."""
from __future__ import annotations

import math

from engine.features import UIFeatures
from engine.types import DrawSpec
from render.colors import brighten, darken
from render.host import Surface
from render.primitives import (
    arc_points, circle, ellipse, fill_rect, polyline, rounded_rect, star_points, stroke_rect, triangle,
)


def _features(spec: DrawSpec) -> UIFeatures:
    return spec.features if isinstance(spec.features, UIFeatures) else UIFeatures()


def _panel(surface: Surface, spec: DrawSpec) -> None:
    w, h = spec.width, spec.height
    rounded_rect(surface, 0, 0, w, h, 8, spec.color, spec.alpha * 0.9)
    rounded_rect(surface, 3, 3, w - 6, h - 6, 6, brighten(spec.color, 15), spec.alpha * 0.9)
    stroke_rect(surface, 3, 3, w - 6, h - 6, darken(spec.color, 40), spec.alpha)


def _button(surface: Surface, spec: DrawSpec) -> None:
    w, h = spec.width, spec.height
    color = brighten(spec.color, 25) if _features(spec).hover else spec.color
    rounded_rect(surface, 0, 0, w, h, min(6, h / 3), darken(color, 35), spec.alpha)
    rounded_rect(surface, 1, 1, w - 2, h - 3, min(5, h / 3), color, spec.alpha)
    fill_rect(surface, 4, 2, w - 8, max(1, h * 0.15), brighten(color, 30), spec.alpha * 0.6)


def _skill_icon(surface: Surface, spec: DrawSpec) -> None:
    w, h = spec.width, spec.height
    rounded_rect(surface, 0, 0, w, h, 5, darken(spec.color, 30), spec.alpha)
    rounded_rect(surface, 2, 2, w - 4, h - 4, 4, spec.color, spec.alpha)
    pts = [(w / 2 + math.cos(t * 0.5) * t * w * 0.022, h / 2 + math.sin(t * 0.5) * t * h * 0.022)
           for t in range(0, 18)]
    polyline(surface, pts, 0xFFFFFF, spec.alpha, width=2)


def _bar(surface: Surface, spec: DrawSpec) -> None:
    w, h = spec.width, spec.height
    fill = max(0.0, min(1.0, _features(spec).fill_ratio))
    rounded_rect(surface, 0, 0, w, h, h / 2, 0x222222, spec.alpha)
    if fill > 0:
        rounded_rect(surface, 2, 2, (w - 4) * fill, h - 4, (h - 4) / 2, spec.color, spec.alpha)
        fill_rect(surface, 4, 3, max(0, (w - 8) * fill), max(1, h * 0.15), brighten(spec.color, 35), spec.alpha * 0.7)


def _inventory_slot(surface: Surface, spec: DrawSpec) -> None:
    w, h = spec.width, spec.height
    fill_rect(surface, 0, 0, w, h, spec.color, spec.alpha)
    stroke_rect(surface, 0, 0, w, h, brighten(spec.color, 40), spec.alpha, width=2)
    stroke_rect(surface, 2, 2, w - 4, h - 4, darken(spec.color, 40), spec.alpha)


def _cursor(surface: Surface, spec: DrawSpec) -> None:
    w, h = spec.width, spec.height
    triangle(surface, (1, 1), (1, h * 0.85), (w * 0.7, h * 0.6), 0x000000, spec.alpha)
    triangle(surface, (2, 3), (2, h * 0.75), (w * 0.6, h * 0.58), spec.color, spec.alpha)


def _checkbox(surface: Surface, spec: DrawSpec) -> None:
    w, h = spec.width, spec.height
    rounded_rect(surface, 0, 0, w, h, 4, spec.color, spec.alpha)
    stroke_rect(surface, 2, 2, w - 4, h - 4, brighten(spec.color, 50), spec.alpha)
    if _features(spec).checked:
        polyline(surface, [(w * 0.25, h * 0.5), (w * 0.45, h * 0.72), (w * 0.78, h * 0.28)],
                 _features(spec).accent_color, spec.alpha, width=2)


def _slider_track(surface: Surface, spec: DrawSpec) -> None:
    rounded_rect(surface, 0, 0, spec.width, spec.height, spec.height / 2, spec.color, spec.alpha)
    fill_rect(surface, spec.height / 2, spec.height / 2 - 0.5, spec.width - spec.height, 1,
              darken(spec.color, 40), spec.alpha)


def _slider_thumb(surface: Surface, spec: DrawSpec) -> None:
    r = min(spec.width, spec.height) / 2
    circle(surface, spec.width / 2, spec.height / 2, r, darken(spec.color, 30), spec.alpha)
    circle(surface, spec.width / 2, spec.height / 2, r - 2, spec.color, spec.alpha)


def _background(surface: Surface, spec: DrawSpec) -> None:
    w, h = spec.width, spec.height
    bands = 12
    for i in range(bands):
        fill_rect(surface, 0, h * i / bands, w, h / bands + 1, brighten(spec.color, i * 4), spec.alpha)
    # fixed star field so the background stays deterministic
    for i in range(40):
        x = (i * 197) % w
        y = (i * 89) % max(1, h // 2)
        fill_rect(surface, x, y, 2, 2, 0xFFFFFF, spec.alpha * (0.3 + (i % 4) * 0.15))


def _logo(surface: Surface, spec: DrawSpec) -> None:
    w, h = spec.width, spec.height
    ellipse(surface, w / 2, h / 2, w * 0.48, h * 0.45, darken(spec.color, 60), spec.alpha * 0.6)
    surface.draw_polygon(star_points(w / 2, h / 2, h * 0.4, h * 0.18, 5), spec.color, spec.alpha)
    polyline(surface, arc_points(w / 2, h / 2, h * 0.44, 0, 2 * math.pi, 24), brighten(spec.color, 30),
             spec.alpha, width=3)


def _menu_button(surface: Surface, spec: DrawSpec) -> None:
    _button(surface, spec)
    triangle(surface, (12, spec.height * 0.35), (12, spec.height * 0.65), (20, spec.height / 2),
             0xFFFFFF, spec.alpha)


UI_SHAPES = {
    "panel": _panel,
    "button": _button,
    "button_hover": _button,
    "skill_icon": _skill_icon,
    "health_bar": _bar,
    "mana_bar": _bar,
    "inventory_slot": _inventory_slot,
    "cursor": _cursor,
    "checkbox": _checkbox,
    "slider_track": _slider_track,
    "slider_thumb": _slider_thumb,
    "background": _background,
    "logo": _logo,
    "menu_button": _menu_button,
}


def draw_ui(surface: Surface, spec: DrawSpec) -> None:
    shape = UI_SHAPES.get(spec.name, _panel)
    with surface.layer("ui"):
        shape(surface, spec)
