"""Flat placeholders: colored rect and the arrow-marked directional character."""
from __future__ import annotations

from engine.types import DrawSpec
from render.colors import darken
from render.host import Surface
from render.primitives import border, fill_rect, triangle


def draw_rect(surface: Surface, spec: DrawSpec) -> None:
    """Fill plus 1px border darkened 30%."""
    with surface.layer("body"):
        fill_rect(surface, 0, 0, spec.width, spec.height, spec.color, spec.alpha)
        border(surface, darken(spec.color, 30), spec.alpha)


def draw_directional(surface: Surface, spec: DrawSpec) -> None:
    """Colored block with a white arrow toward the facing and two eyes."""
    w, h = spec.width, spec.height
    pose = spec.pose
    dy = pose.body_offset_y if pose else 0.0
    dx = pose.body_offset_x if pose else 0.0

    with surface.layer("body"):
        fill_rect(surface, 2 + dx, 2 + dy, w - 4, h - 4, spec.color, spec.alpha)
        border(surface, darken(spec.color, 30), spec.alpha)

    cx, cy = w / 2 + dx, h / 2 + dy
    s = min(w, h) * 0.2
    arrows = {
        "down": ((cx - s, cy + s * 0.5), (cx + s, cy + s * 0.5), (cx, cy + s * 1.6)),
        "up": ((cx - s, cy - s * 0.5), (cx + s, cy - s * 0.5), (cx, cy - s * 1.6)),
        "left": ((cx - s * 0.5, cy - s), (cx - s * 0.5, cy + s), (cx - s * 1.6, cy)),
        "right": ((cx + s * 0.5, cy - s), (cx + s * 0.5, cy + s), (cx + s * 1.6, cy)),
    }
    with surface.layer("accessories"):
        triangle(surface, *arrows[spec.direction], 0xFFFFFF, spec.alpha)

    if spec.faces_away:
        return
    eye_y = cy - s
    r = max(1.0, s * 0.3)
    with surface.layer("face"):
        if spec.direction == "down":
            surface.draw_ellipse(cx - s * 0.8, eye_y, r, r, 0x000000, spec.alpha)
            surface.draw_ellipse(cx + s * 0.8, eye_y, r, r, 0x000000, spec.alpha)
        else:
            surface.draw_ellipse(cx + spec.flip * s * 0.8, eye_y, r, r, 0x000000, spec.alpha)
