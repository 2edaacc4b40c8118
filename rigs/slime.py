"""Slime-family rig: normal, metal, elemental, king."""
from __future__ import annotations

import math
import random

from anim.poses import REST_POSE
from engine.features import SlimeFeatures
from engine.types import DrawSpec
from render.colors import brighten, darken
from render.host import Surface
from render.primitives import arc, circle, ellipse, fill_rect, polyline, triangle

SIZE_MODIFIERS = {"king": 1.2, "metal": 0.9}
EYE_SCALES = {"king": 1.3, "elemental": 1.2}
GOLD = 0xFFD700
RUBY = 0xFF0000


def draw_slime(surface: Surface, spec: DrawSpec) -> None:
    pose = spec.pose or REST_POSE
    f = spec.features if isinstance(spec.features, SlimeFeatures) else SlimeFeatures()
    rng = random.Random(spec.seed)
    w, h = spec.width, spec.height
    m = SIZE_MODIFIERS.get(spec.variant, 1.0) * pose.body_scale
    bw, bh = w * 0.5 * m, h * 0.4 * m

    squish_y = pose.squash * bh
    rx = bw / 2 + squish_y * 0.5
    ry = max(1.0, bh / 2 - squish_y)
    cx = w / 2 + pose.body_offset_x
    cy = h - 3 - ry + pose.body_offset_y * 0.5
    alpha = f.transparency * spec.alpha * (1 - pose.fade * 0.5)

    with surface.layer("shadow"):
        ellipse(surface, cx, h - 2.5, rx * 0.9, max(0.8, ry * 0.2), 0x000000, 0.25 * spec.alpha)

    if spec.variant == "elemental":
        with surface.layer("aura"):
            ellipse(surface, cx, cy, rx * 1.3, ry * 1.3, brighten(spec.color, 40), alpha * 0.25)

    with surface.layer("body"):
        ellipse(surface, cx, cy, rx, ry, spec.color, alpha)
        ellipse(surface, cx, cy + ry * 0.15, rx * 0.65, ry * 0.6, f.inner_color, alpha * 0.6)
        for _ in range(max(0, f.bubble_count)):
            bx = cx + rng.uniform(-rx * 0.6, rx * 0.6)
            by = cy + rng.uniform(-ry * 0.3, ry * 0.6)
            circle(surface, bx, by, max(0.5, rng.uniform(0.04, 0.09) * w), brighten(spec.color, 50), alpha * 0.7)
        ellipse(surface, cx - rx * 0.4, cy - ry * 0.45, rx * 0.2, ry * 0.12, 0xFFFFFF, 0.6 * spec.alpha)

    if f.metallic:
        with surface.layer("metal"):
            surface.draw_line(cx - rx * 0.5, cy - ry * 0.2, cx - rx * 0.2, cy - ry * 0.6, 0xFFFFFF, 0.8 * spec.alpha)
            surface.draw_line(cx + rx * 0.3, cy - ry * 0.5, cx + rx * 0.5, cy - ry * 0.1, 0xFFFFFF, 0.6 * spec.alpha)
            outline = [(cx + math.cos(a) * rx, cy + math.sin(a) * ry)
                       for a in (2 * math.pi * i / 16 for i in range(17))]
            polyline(surface, outline, darken(spec.color, 40), spec.alpha)

    if spec.variant == "elemental":
        with surface.layer("vortex"):
            spin = pose.frame_index * math.pi / 4
            for arm in range(3):
                base = spin + arm * 2 * math.pi / 3
                pts = [(cx + math.cos(base + t * 0.5) * rx * 0.12 * t, cy + math.sin(base + t * 0.5) * ry * 0.12 * t)
                       for t in range(7)]
                polyline(surface, pts, brighten(spec.color, 60), alpha)
            circle(surface, cx, cy, max(0.8, rx * 0.15), brighten(spec.color, 80), spec.alpha)

    if not spec.faces_away:
        with surface.layer("face"):
            _face(surface, spec, f, cx, cy, rx, ry)

    if f.has_crown:
        with surface.layer("crown"):
            _crown(surface, cx, cy - ry, rx, spec.alpha)


def _face(surface: Surface, spec: DrawSpec, f: SlimeFeatures, cx, cy, rx, ry) -> None:
    scale = EYE_SCALES.get(spec.variant, 1.0)
    er = max(0.8, rx * 0.14 * scale)
    eye_y = cy - ry * 0.1
    if spec.direction == "down":
        xs = [cx - rx * 0.35, cx + rx * 0.35]
    else:
        xs = [cx + spec.flip * rx * 0.45]
    for ex in xs:
        circle(surface, ex, eye_y, er, 0xFFFFFF, spec.alpha)
        circle(surface, ex + (spec.flip * er * 0.3 if spec.is_side_view else 0), eye_y, er * 0.55, 0x000000, spec.alpha)
        if f.facial_expression == "angry":
            # brows slope down toward the middle of the face
            tilt = er * 0.3 if ex <= cx else -er * 0.3
            surface.draw_line(ex - er * 1.2, eye_y - er * 1.5 - tilt,
                              ex + er * 1.2, eye_y - er * 1.5 + tilt, 0x000000, spec.alpha)

    if spec.direction != "down":
        return
    mouth_y = cy + ry * 0.3
    if f.facial_expression == "happy":
        arc(surface, cx, mouth_y - rx * 0.15, rx * 0.25, 0.2 * math.pi, 0.8 * math.pi, 0x000000, spec.alpha, steps=5)
    elif f.facial_expression == "angry":
        arc(surface, cx, mouth_y + rx * 0.15, rx * 0.2, 1.2 * math.pi, 1.8 * math.pi, 0x000000, spec.alpha, steps=5)
    elif f.facial_expression == "neutral":
        surface.draw_line(cx - rx * 0.2, mouth_y, cx + rx * 0.2, mouth_y, 0x000000, spec.alpha)


def _crown(surface: Surface, cx: float, top: float, rx: float, alpha: float) -> None:
    cw = rx * 0.9
    ch = rx * 0.3
    base_y = top - ch * 0.2
    fill_rect(surface, cx - cw / 2, base_y - ch, cw, ch, GOLD, alpha)
    for i in range(3):
        sx = cx - cw / 2 + cw * (i + 0.5) / 3
        triangle(surface, (sx - cw / 6, base_y - ch), (sx + cw / 6, base_y - ch), (sx, base_y - ch * 2.2), GOLD, alpha)
    circle(surface, cx, base_y - ch / 2, max(0.6, ch * 0.3), RUBY, alpha)
