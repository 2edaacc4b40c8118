"""Monster rig: spider and beast (quadruped) body plans, plus a horned blob
for anything else. Eyes and fangs are front-only details."""
from __future__ import annotations

import math

from anim.poses import REST_POSE, Pose
from engine.features import MonsterFeatures
from engine.types import DrawSpec
from render.colors import brighten, darken
from render.host import Surface
from render.primitives import circle, ellipse, limb, polyline, triangle


def _eyes(surface: Surface, spec: DrawSpec, f: MonsterFeatures, cx, cy, spread, r) -> None:
    count = max(1, f.eye_count)
    if spec.is_side_view:
        # one side of the face: half the eyes, stacked toward the snout
        for i in range((count + 1) // 2):
            circle(surface, cx + spec.flip * spread, cy - r * 1.6 * i, r, f.eye_color, spec.alpha)
        return
    per_row = 2
    for i in range(count):
        row, col = divmod(i, per_row)
        x = cx + (-spread if col == 0 else spread) * (1 - 0.35 * row)
        circle(surface, x, cy - r * 2.2 * row, r, f.eye_color, spec.alpha)


def _spider(surface: Surface, spec: DrawSpec, f: MonsterFeatures, pose: Pose) -> None:
    w, h = spec.width, spec.height
    color = spec.color
    cx = w / 2 + pose.body_offset_x
    cy = h * 0.58 + pose.body_offset_y * 0.5
    s = pose.body_scale
    abdomen_r = w * 0.2 * s
    head_r = w * 0.12 * s
    back = -spec.flip if spec.is_side_view else 0
    # abdomen sits behind the head relative to the viewer
    if spec.direction == "down":
        ax, ay, hx, hy = cx, cy - abdomen_r * 0.6, cx, cy + head_r * 0.6
    elif spec.faces_away:
        ax, ay, hx, hy = cx, cy + abdomen_r * 0.3, cx, cy - abdomen_r * 0.9
    else:
        ax, ay, hx, hy = cx + back * abdomen_r * 0.8, cy, cx - back * head_r * 1.2, cy + head_r * 0.2

    legs = max(0, f.leg_count)
    leg_len = w * 0.22
    swing = pose.left_leg_angle
    with surface.layer("legs"):
        for i in range(legs):
            side = -1 if i % 2 == 0 else 1
            pair = i // 2
            spread = (pair - (legs / 4 - 0.5)) * 0.35
            phase = swing * (1 if pair % 2 == 0 else -1)
            base = math.pi / 2 * side + spread * side + phase
            knee = (hx + math.sin(base) * leg_len * 0.6, hy - leg_len * 0.45 + math.cos(base) * 2)
            foot = (knee[0] + side * leg_len * 0.35, hy + leg_len * 0.55 - spread * 4)
            polyline(surface, [(hx, hy), knee, foot], darken(color, 30), spec.alpha, width=max(1.0, w * 0.03))

    with surface.layer("body"):
        ellipse(surface, ax, ay, abdomen_r, abdomen_r * 0.9, color, spec.alpha)
        if spec.details:
            ellipse(surface, ax, ay - abdomen_r * 0.2, abdomen_r * 0.35, abdomen_r * 0.5,
                    brighten(color, 35), spec.alpha * 0.6)
        circle(surface, hx, hy, head_r, darken(color, 15), spec.alpha)

    if spec.faces_away:
        return
    with surface.layer("face"):
        _eyes(surface, spec, f, hx, hy - head_r * 0.1, head_r * 0.4, max(0.6, head_r * 0.18))
        if f.has_fangs:
            fy = hy + head_r * 0.7
            for fx in ((hx - head_r * 0.3, hx + head_r * 0.3) if spec.direction == "down"
                       else (hx + spec.flip * head_r * 0.6,)):
                triangle(surface, (fx - 0.8, fy), (fx + 0.8, fy), (fx, fy + head_r * 0.6), 0xFFFFFF, spec.alpha)


def _beast(surface: Surface, spec: DrawSpec, f: MonsterFeatures, pose: Pose) -> None:
    w, h = spec.width, spec.height
    color = spec.color
    dark = darken(color, 30)
    s = pose.body_scale
    cx = w / 2 + pose.body_offset_x
    ground = h - 2
    leg_len = h * 0.2
    lw = max(1.0, w * 0.08)

    if spec.is_side_view:
        fl = spec.flip
        body_y = ground - leg_len - h * 0.1 + pose.body_offset_y * 0.5
        bw, bh = w * 0.3 * s, h * 0.14 * s
        with surface.layer("tail"):
            if f.has_tail:
                limb(surface, cx - fl * bw, body_y - bh * 0.3, w * 0.2, lw, -fl * 2.2, dark, spec.alpha)
        with surface.layer("legs"):
            hips = (cx - fl * bw * 0.6, cx + fl * bw * 0.6)
            angles = (fl * pose.left_leg_angle, fl * pose.right_leg_angle)
            for i, (hx, a) in enumerate(zip(hips, angles)):
                limb(surface, hx, body_y + bh * 0.5, leg_len, lw, a if i == 0 else -a, dark, spec.alpha)
        with surface.layer("body"):
            ellipse(surface, cx, body_y, bw, bh, color, spec.alpha)
        head_x, head_y = cx + fl * bw * 1.05, body_y - bh * 1.1
        with surface.layer("head"):
            circle(surface, head_x, head_y, h * 0.11 * s, color, spec.alpha)
            ellipse(surface, head_x + fl * h * 0.1, head_y + h * 0.03, h * 0.07, h * 0.045, brighten(color, 15), spec.alpha)
            triangle(surface, (head_x - fl * h * 0.02, head_y - h * 0.07), (head_x - fl * h * 0.09, head_y - h * 0.06),
                     (head_x - fl * h * 0.05, head_y - h * 0.17), dark, spec.alpha)
        with surface.layer("face"):
            _eyes(surface, spec, f, head_x, head_y - h * 0.02, h * 0.04, max(0.6, w * 0.025))
            circle(surface, head_x + fl * h * 0.16, head_y + h * 0.02, max(0.6, w * 0.02), 0x000000, spec.alpha)
        return

    # front and back views: sitting silhouette
    body_y = ground - leg_len * 0.6 - h * 0.15 + pose.body_offset_y * 0.5
    bw, bh = w * 0.2 * s, h * 0.2 * s
    head_y = body_y - bh - h * 0.06 + pose.head_offset_y
    hr = h * 0.13 * s
    with surface.layer("legs"):
        for side, a in ((-1, pose.left_leg_angle), (1, pose.right_leg_angle)):
            limb(surface, cx + side * bw * 0.5, body_y + bh * 0.4, leg_len, lw, side * 0.1 + a * 0.3, dark, spec.alpha)
    with surface.layer("body"):
        ellipse(surface, cx, body_y, bw, bh, color, spec.alpha)
    with surface.layer("head"):
        circle(surface, cx, head_y, hr, color, spec.alpha)
        for side in (-1, 1):
            triangle(surface, (cx + side * hr * 0.3, head_y - hr * 0.6), (cx + side * hr, head_y - hr * 0.4),
                     (cx + side * hr * 0.75, head_y - hr * 1.5), dark, spec.alpha)
    if spec.faces_away:
        with surface.layer("tail"):
            if f.has_tail:
                limb(surface, cx, body_y + bh * 0.3, w * 0.2, lw, 0.5, dark, spec.alpha)
        return
    with surface.layer("face"):
        ellipse(surface, cx, head_y + hr * 0.45, hr * 0.5, hr * 0.35, brighten(color, 20), spec.alpha)
        circle(surface, cx, head_y + hr * 0.3, max(0.6, hr * 0.15), 0x000000, spec.alpha)
        _eyes(surface, spec, f, cx, head_y - hr * 0.15, hr * 0.4, max(0.6, hr * 0.16))


def _blob(surface: Surface, spec: DrawSpec, f: MonsterFeatures, pose: Pose) -> None:
    w, h = spec.width, spec.height
    cx = w / 2 + pose.body_offset_x
    cy = h * 0.6 + pose.body_offset_y
    rx, ry = w * 0.3 * pose.body_scale, h * 0.28 * pose.body_scale
    with surface.layer("body"):
        ellipse(surface, cx, cy, rx, ry, spec.color, spec.alpha)
        for side in (-1, 1):
            triangle(surface, (cx + side * rx * 0.3, cy - ry * 0.8), (cx + side * rx * 0.7, cy - ry * 0.6),
                     (cx + side * rx * 0.8, cy - ry * 1.4), darken(spec.color, 40), spec.alpha)
    if spec.faces_away:
        return
    with surface.layer("face"):
        _eyes(surface, spec, f, cx, cy - ry * 0.2, rx * 0.35, max(0.8, rx * 0.12))
        if f.has_fangs:
            for side in ((-1, 1) if spec.direction == "down" else (spec.flip,)):
                fx = cx + side * rx * 0.25
                triangle(surface, (fx - 1, cy + ry * 0.3), (fx + 1, cy + ry * 0.3), (fx, cy + ry * 0.6), 0xFFFFFF, spec.alpha)


_BODY_PLANS = {
    "spider": _spider,
    "beast": _beast,
}


def draw_monster(surface: Surface, spec: DrawSpec) -> None:
    pose = spec.pose or REST_POSE
    f = spec.features if isinstance(spec.features, MonsterFeatures) else MonsterFeatures()
    _BODY_PLANS.get(spec.variant, _blob)(surface, spec, f, pose)
