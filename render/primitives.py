"""Parametric shape routines composed from the four host primitives."""
from __future__ import annotations

import math
from typing import Sequence

from render.host import Point, Surface


def fill_rect(surface: Surface, x, y, w, h, color: int, alpha: float = 1.0) -> None:
    surface.draw_rect(x, y, w, h, color, alpha)


def stroke_rect(surface: Surface, x, y, w, h, color: int, alpha: float = 1.0, width: int = 1) -> None:
    """Outline drawn as four strips so corners are not blended twice."""
    surface.draw_rect(x, y, w, width, color, alpha)
    surface.draw_rect(x, y + h - width, w, width, color, alpha)
    surface.draw_rect(x, y + width, width, h - 2 * width, color, alpha)
    surface.draw_rect(x + w - width, y + width, width, h - 2 * width, color, alpha)


def border(surface: Surface, color: int, alpha: float = 1.0, width: int = 1) -> None:
    stroke_rect(surface, 0, 0, surface.width, surface.height, color, alpha, width)


def circle(surface: Surface, cx, cy, r, color: int, alpha: float = 1.0) -> None:
    surface.draw_ellipse(cx, cy, r, r, color, alpha)


def ellipse(surface: Surface, cx, cy, rx, ry, color: int, alpha: float = 1.0) -> None:
    surface.draw_ellipse(cx, cy, rx, ry, color, alpha)


def triangle(surface: Surface, a: Point, b: Point, c: Point, color: int, alpha: float = 1.0) -> None:
    surface.draw_polygon([a, b, c], color, alpha)


def arc_points(cx, cy, r, start: float, end: float, steps: int = 8) -> list[Point]:
    steps = max(1, steps)
    return [
        (cx + math.cos(start + (end - start) * i / steps) * r,
         cy + math.sin(start + (end - start) * i / steps) * r)
        for i in range(steps + 1)
    ]


def rounded_rect_points(x, y, w, h, radius, corner_steps: int = 3) -> list[Point]:
    r = max(0.0, min(radius, w / 2, h / 2))
    if r == 0:
        return [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]
    pts: list[Point] = []
    corners = [
        (x + w - r, y + r, -math.pi / 2, 0.0),
        (x + w - r, y + h - r, 0.0, math.pi / 2),
        (x + r, y + h - r, math.pi / 2, math.pi),
        (x + r, y + r, math.pi, 1.5 * math.pi),
    ]
    for cx, cy, a0, a1 in corners:
        pts.extend(arc_points(cx, cy, r, a0, a1, corner_steps))
    return pts


def rounded_rect(surface: Surface, x, y, w, h, radius, color: int, alpha: float = 1.0) -> None:
    surface.draw_polygon(rounded_rect_points(x, y, w, h, radius), color, alpha)


def regular_polygon_points(cx, cy, r, sides: int, rotation: float = 0.0) -> list[Point]:
    return [
        (cx + math.cos(rotation + 2 * math.pi * i / sides) * r,
         cy + math.sin(rotation + 2 * math.pi * i / sides) * r)
        for i in range(sides)
    ]


def star_points(cx, cy, outer, inner, spikes: int, rotation: float = -math.pi / 2) -> list[Point]:
    pts: list[Point] = []
    for i in range(spikes * 2):
        r = outer if i % 2 == 0 else inner
        a = rotation + math.pi * i / spikes
        pts.append((cx + math.cos(a) * r, cy + math.sin(a) * r))
    return pts


def polyline(surface: Surface, points: Sequence[Point], color: int,
             alpha: float = 1.0, width: float = 1) -> None:
    for (x1, y1), (x2, y2) in zip(points, points[1:]):
        surface.draw_line(x1, y1, x2, y2, color, alpha, width)


def arc(surface: Surface, cx, cy, r, start: float, end: float, color: int,
        alpha: float = 1.0, width: float = 1, steps: int = 8) -> None:
    polyline(surface, arc_points(cx, cy, r, start, end, steps), color, alpha, width)


def limb(surface: Surface, x, y, length, thickness, angle: float, color: int,
         alpha: float = 1.0, rounded: bool = True) -> Point:
    """Draw a rotated limb segment hanging from (x, y).

    angle 0 points straight down; positive angles swing toward +x.
    Returns the far end so hands, feet and held items can attach to it.
    """
    dx, dy = math.sin(angle), math.cos(angle)
    # perpendicular half-thickness
    px, py = -dy * thickness / 2, dx * thickness / 2
    ex, ey = x + dx * length, y + dy * length
    surface.draw_polygon(
        [(x + px, y + py), (ex + px, ey + py), (ex - px, ey - py), (x - px, y - py)],
        color, alpha,
    )
    if rounded:
        surface.draw_ellipse(ex, ey, thickness / 2, thickness / 2, color, alpha)
    return ex, ey
