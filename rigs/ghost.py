"""Ghost-family rig: normal, wisp, phantom, shadow.

All variants share one silhouette (round head over a wavy hem). Variants add
an orb, afterimages or a dark aura around it. No face and no arms are drawn
when facing up.
"""
from __future__ import annotations

import math
import random

from anim.poses import REST_POSE
from engine.features import GhostFeatures
from engine.types import DrawSpec
from render.colors import brighten, darken
from render.host import Point, Surface
from render.primitives import circle, ellipse, limb, triangle

HEM_WAVES = 5


def _silhouette(cx: float, cy: float, bw: float, bh: float, phase: float) -> list[Point]:
    """Head dome plus body ending in a hem with HEM_WAVES scallops."""
    top = cy - bh * 0.25
    bottom = cy + bh / 2
    r = bw / 2
    pts: list[Point] = [
        (cx + math.cos(a) * r, top + math.sin(a) * r)
        for a in (math.pi + math.pi * i / 8 for i in range(9))
    ]
    pts.append((cx + r, bottom))
    steps = HEM_WAVES * 2
    for i in range(steps, -1, -1):
        x = cx - r + bw * i / steps
        y = bottom + math.sin(i * math.pi / 2 + phase) * bh * 0.08
        pts.append((x, y))
    pts.append((cx - r, bottom))
    return pts


def _body(surface: Surface, cx, cy, bw, bh, color, alpha, phase) -> None:
    surface.draw_polygon(_silhouette(cx, cy, bw, bh, phase), color, alpha)


def _face(surface: Surface, spec: DrawSpec, f: GhostFeatures, cx, cy, bw, bh, alpha) -> None:
    eye_y = cy - bh * 0.3
    spread = bw * 0.2
    eye_color = 0xFF0000 if spec.variant == "shadow" else 0x000000
    xs = [cx - spread, cx + spread] if spec.direction == "down" else [cx + spec.flip * spread]
    er = max(0.8, bw * 0.08)
    for ex in xs:
        if f.face_type == "scary":
            triangle(surface, (ex - er * 1.3, eye_y - er), (ex + er * 1.3, eye_y - er * 0.2),
                     (ex, eye_y + er), eye_color, alpha)
        elif f.face_type == "cute":
            circle(surface, ex, eye_y, er * 1.3, 0x000000, alpha)
            circle(surface, ex - er * 0.4, eye_y - er * 0.4, er * 0.45, 0xFFFFFF, alpha)
        else:
            ellipse(surface, ex, eye_y, er, er * 1.3, eye_color, alpha)

    mouth_x = cx if spec.direction == "down" else cx + spec.flip * spread
    mouth_y = cy - bh * 0.05
    if f.face_type == "scary":
        ellipse(surface, mouth_x, mouth_y, bw * 0.15, bh * 0.08, 0x000000, alpha)
        if spec.variant == "shadow" and spec.details:
            tooth = bw * 0.05
            for tx in (mouth_x - bw * 0.07, mouth_x + bw * 0.07):
                triangle(surface, (tx - tooth, mouth_y - bh * 0.06), (tx + tooth, mouth_y - bh * 0.06),
                         (tx, mouth_y + bh * 0.02), 0xFFFFFF, alpha)
    elif f.face_type == "cute":
        surface.draw_line(mouth_x - bw * 0.06, mouth_y, mouth_x + bw * 0.06, mouth_y, 0x000000, alpha)
    else:
        circle(surface, mouth_x, mouth_y, max(0.6, bw * 0.06), 0x000000, alpha)


def _arms(surface: Surface, spec: DrawSpec, color, cx, cy, bw, bh, alpha, pose) -> None:
    thickness = max(1.0, bw * 0.15)
    length = bh * 0.35
    if spec.is_side_view:
        limb(surface, cx, cy, length, thickness, spec.flip * (0.9 + pose.right_arm_angle * 0.5), color, alpha)
        return
    limb(surface, cx - bw / 2 + 1, cy, length, thickness, -(0.9 + pose.left_arm_angle * 0.5), color, alpha)
    limb(surface, cx + bw / 2 - 1, cy, length, thickness, 0.9 + pose.right_arm_angle * 0.5, color, alpha)


def _trail_offset(spec: DrawSpec, step: float) -> Point:
    # afterimages trail behind the direction of travel
    return {
        "down": (0.0, -step),
        "up": (0.0, step),
        "left": (step, 0.0),
        "right": (-step, 0.0),
    }[spec.direction]


def draw_ghost(surface: Surface, spec: DrawSpec) -> None:
    pose = spec.pose or REST_POSE
    f = spec.features if isinstance(spec.features, GhostFeatures) else GhostFeatures()
    rng = random.Random(spec.seed)
    w, h = spec.width, spec.height
    bw = w * 0.4 * pose.body_scale
    bh = h * 0.4 * pose.body_scale
    cx = w / 2 + pose.body_offset_x
    cy = h / 2 + pose.body_offset_y
    alpha = f.transparency * spec.alpha * (1 - pose.fade * 0.5)
    phase = pose.frame_index * math.pi / 2
    color = darken(spec.color, 50) if spec.variant == "shadow" else spec.color
    show_front = not spec.faces_away

    if spec.variant == "wisp":
        with surface.layer("trail"):
            if f.has_trail:
                for i in range(1, f.trail_count + 2):
                    tx, ty = _trail_offset(spec, bw * 0.35 * i)
                    circle(surface, cx + tx, cy + ty, bw * 0.3 / (i + 0.5), f.glow_color, alpha / (i + 1))
        with surface.layer("body"):
            circle(surface, cx, cy, bw * 0.6, f.glow_color, alpha * 0.3)
            circle(surface, cx, cy, bw * 0.35, color, alpha)
            circle(surface, cx - bw * 0.1, cy - bw * 0.1, bw * 0.12, brighten(color, 50), alpha)
        with surface.layer("particles"):
            for _ in range(4):
                a = rng.uniform(0, 2 * math.pi)
                d = rng.uniform(bw * 0.4, bw * 0.8)
                circle(surface, cx + math.cos(a) * d, cy + math.sin(a) * d, max(0.5, bw * 0.05), f.glow_color, alpha)
        if show_front:
            with surface.layer("face"):
                for ex in ((cx - bw * 0.1, cx + bw * 0.1) if spec.direction == "down" else (cx + spec.flip * bw * 0.12,)):
                    circle(surface, ex, cy - bw * 0.05, max(0.5, bw * 0.05), 0x000000, alpha)
        return

    with surface.layer("aura"):
        if spec.variant == "shadow":
            ellipse(surface, cx, cy, bw * 0.8, bh * 0.75, 0x000000, alpha * 0.35)
        elif spec.variant == "phantom":
            for i in range(f.trail_count, 0, -1):
                tx, ty = _trail_offset(spec, bw * 0.25 * i)
                _body(surface, cx + tx, cy + ty, bw, bh, color, alpha / (i + 2), phase - i)
        else:
            ellipse(surface, cx, h - 3, bw * 0.4, bh * 0.08, 0x000000, 0.2 * spec.alpha)

    with surface.layer("body"):
        _body(surface, cx, cy, bw, bh, color, alpha, phase)

    if show_front and f.has_arms:
        with surface.layer("arms"):
            _arms(surface, spec, color, cx, cy, bw, bh, alpha, pose)

    if show_front:
        with surface.layer("face"):
            _face(surface, spec, f, cx, cy, bw, bh, min(1.0, alpha + 0.2))

    if spec.variant == "phantom":
        with surface.layer("glow"):
            ellipse(surface, cx, cy, bw * 0.65, bh * 0.65, f.glow_color, alpha * 0.2)
