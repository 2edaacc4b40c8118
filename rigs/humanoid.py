"""Humanoid rig.

The figure is assembled from named layers in a per-direction z-order.
Variants (armored, robed, hooded) never redraw the figure: they add layers
on top of the base ones, or replace a single layer (the hood replaces hair).
Facing "up" drops the face and held items entirely.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from anim.poses import REST_POSE, Pose
from engine.features import HumanoidFeatures
from engine.types import DrawSpec
from render.colors import brighten, darken
from render.host import Point, Surface
from render.primitives import arc, circle, ellipse, fill_rect, limb, rounded_rect, triangle

WOOD = 0x8B4513
STEEL = 0xC0C0C0


@dataclass
class _Rig:
    """Resolved geometry for one frame."""
    spec: DrawSpec
    f: HumanoidFeatures
    pose: Pose
    alpha: float
    cx: float
    head_cx: float
    head_cy: float
    head_r: float
    head_sx: float
    body_top: float
    body_h: float
    body_w: float
    limb_w: float
    arm_len: float
    leg_len: float
    hip_y: float
    feet_y: float
    shoulders: list[Point]
    arm_angles: list[float]
    hips: list[Point]
    leg_angles: list[float]

    def end(self, origin: Point, length: float, angle: float) -> Point:
        return origin[0] + math.sin(angle) * length, origin[1] + math.cos(angle) * length

    @property
    def hands(self) -> list[Point]:
        return [self.end(s, self.arm_len, a) for s, a in zip(self.shoulders, self.arm_angles)]

    @property
    def weapon_hand(self) -> tuple[Point, float]:
        # right hand in front view; the single near hand in side views
        return self.hands[-1], self.arm_angles[-1]


def _layout(spec: DrawSpec) -> _Rig:
    pose = spec.pose or REST_POSE
    f = spec.features if isinstance(spec.features, HumanoidFeatures) else HumanoidFeatures()
    w, h = spec.width, spec.height
    side = spec.is_side_view
    flip = spec.flip

    head_r = w * 0.15
    body_w = w * 0.4 * (0.9 if side else 1.0)
    body_h = h * 0.3 * pose.body_scale
    limb_w = max(1.0, w * 0.08)
    arm_len = h * 0.25
    leg_len = h * 0.2
    feet_y = h - 2
    hip_y = feet_y - leg_len

    shift = {"armored": 1, "robed": -2}.get(spec.variant, 0)
    cx = w / 2 + pose.body_offset_x
    body_bottom = min(hip_y + 1 + pose.body_offset_y + shift, h - 1)
    body_top = body_bottom - body_h
    head_cy = body_top - head_r * 0.8 + pose.head_offset_y

    if side:
        shoulders = [(cx, body_top + 1.5)]
        arm_angles = [flip * (0.1 + pose.right_arm_angle)]
        hips = [(cx - flip, hip_y), (cx + flip, hip_y)]
        leg_angles = [flip * pose.left_leg_angle, flip * pose.right_leg_angle]
    else:
        inset = limb_w / 2
        shoulders = [(cx - body_w / 2 + inset, body_top + 1.5),
                     (cx + body_w / 2 - inset, body_top + 1.5)]
        arm_angles = [-(0.15 + pose.left_arm_angle), 0.15 + pose.right_arm_angle]
        hips = [(cx - body_w * 0.22, hip_y), (cx + body_w * 0.22, hip_y)]
        leg_angles = [-pose.left_leg_angle * 0.5, pose.right_leg_angle * 0.5]

    return _Rig(
        spec=spec, f=f, pose=pose, alpha=spec.alpha,
        cx=cx, head_cx=cx, head_cy=head_cy, head_r=head_r,
        head_sx=0.8 if side else 1.0,
        body_top=body_top, body_h=body_h, body_w=body_w, limb_w=limb_w,
        arm_len=arm_len, leg_len=leg_len, hip_y=hip_y, feet_y=feet_y,
        shoulders=shoulders, arm_angles=arm_angles, hips=hips, leg_angles=leg_angles,
    )


# ── Base layers ───────────────────────────────────────────────────────────────

def _legs(surface: Surface, r: _Rig) -> None:
    color = darken(r.f.cloth_color, 20)
    boot = darken(r.f.cloth_color, 50)
    for hip, angle in zip(r.hips, r.leg_angles):
        ex, ey = limb(surface, hip[0], hip[1], r.leg_len, r.limb_w, angle, color, r.alpha, rounded=False)
        fill_rect(surface, ex - r.limb_w / 2 - 0.5, ey - 1.5, r.limb_w + 1, 2, boot, r.alpha)


def _body(surface: Surface, r: _Rig) -> None:
    x = r.cx - r.body_w / 2
    rounded_rect(surface, x, r.body_top, r.body_w, r.body_h, min(2.0, r.body_w / 4), r.f.cloth_color, r.alpha)
    fill_rect(surface, x + 1, r.body_top, r.body_w - 2, 1, brighten(r.f.cloth_color, 15), r.alpha)


def _arm(surface: Surface, r: _Rig, shoulder: Point, angle: float) -> None:
    hx, hy = limb(surface, shoulder[0], shoulder[1], r.arm_len, r.limb_w, angle,
                  r.f.cloth_color, r.alpha)
    circle(surface, hx, hy, r.limb_w * 0.6, r.f.skin_color, r.alpha)


def _arms(surface: Surface, r: _Rig) -> None:
    for shoulder, angle in zip(r.shoulders, r.arm_angles):
        _arm(surface, r, shoulder, angle)


def _head(surface: Surface, r: _Rig) -> None:
    ellipse(surface, r.head_cx, r.head_cy, r.head_r * r.head_sx, r.head_r, r.f.skin_color, r.alpha)


def _face(surface: Surface, r: _Rig) -> None:
    spec, f = r.spec, r.f
    hx, hy, hr = r.head_cx, r.head_cy, r.head_r
    eye_y = hy + hr * 0.05
    if spec.direction == "down":
        eyes = [hx - hr * 0.4, hx + hr * 0.4]
    else:
        eyes = [hx + spec.flip * hr * 0.45]
    for ex in eyes:
        if spec.details:
            circle(surface, ex, eye_y, max(0.8, hr * 0.22), 0xFFFFFF, r.alpha)
        circle(surface, ex, eye_y, max(0.5, hr * 0.12), f.eye_color, r.alpha)

    mouth = darken(f.skin_color, 40)
    my = hy + hr * 0.5
    if spec.direction == "down":
        surface.draw_line(hx - hr * 0.25, my, hx + hr * 0.25, my, mouth, r.alpha)
    elif spec.details:
        surface.draw_line(hx + spec.flip * hr * 0.3, my, hx + spec.flip * hr * 0.7, my, mouth, r.alpha)

    if f.has_beard:
        if spec.direction == "down":
            pts = [(hx - hr * 0.6, hy + hr * 0.3), (hx + hr * 0.6, hy + hr * 0.3), (hx, hy + hr * 1.4)]
        else:
            fl = spec.flip
            pts = [(hx, hy + hr * 0.3), (hx + fl * hr * 0.8, hy + hr * 0.3), (hx + fl * hr * 0.4, hy + hr * 1.3)]
        triangle(surface, *pts, f.hair_color, r.alpha)


def _hair(surface: Surface, r: _Rig) -> None:
    style = _HAIR_STYLES.get(r.f.hair_style)
    if style is not None:
        style(surface, r)


def _hair_cap(surface: Surface, r: _Rig) -> None:
    hx, hy, hr = r.head_cx, r.head_cy, r.head_r
    if r.spec.faces_away:
        ellipse(surface, hx, hy - hr * 0.1, hr * r.head_sx, hr * 0.95, r.f.hair_color, r.alpha)
    else:
        ellipse(surface, hx, hy - hr * 0.45, hr * r.head_sx * 1.02, hr * 0.6, r.f.hair_color, r.alpha)


def _hair_long(surface: Surface, r: _Rig) -> None:
    _hair_cap(surface, r)
    hx, hy, hr = r.head_cx, r.head_cy, r.head_r
    c = r.f.hair_color
    if r.spec.faces_away:
        fill_rect(surface, hx - hr, hy, hr * 2, hr * 1.3, c, r.alpha)
    elif r.spec.is_side_view:
        fill_rect(surface, hx - r.spec.flip * hr * 0.6 - hr * 0.3, hy - hr * 0.3, hr * 0.6, hr * 1.6, c, r.alpha)
    else:
        strand = hr * 0.35
        fill_rect(surface, hx - hr - strand * 0.3, hy - hr * 0.3, strand, hr * 1.6, c, r.alpha)
        fill_rect(surface, hx + hr - strand * 0.7, hy - hr * 0.3, strand, hr * 1.6, c, r.alpha)


def _hair_ponytail(surface: Surface, r: _Rig) -> None:
    _hair_cap(surface, r)
    hx, hy, hr = r.head_cx, r.head_cy, r.head_r
    c = darken(r.f.hair_color, 10)
    if r.spec.faces_away:
        fill_rect(surface, hx - hr * 0.25, hy, hr * 0.5, hr * 1.4, c, r.alpha)
    elif r.spec.is_side_view:
        back = hx - r.spec.flip * hr * 0.9
        triangle(surface, (back, hy - hr * 0.5), (back, hy + hr * 0.1),
                 (back - r.spec.flip * hr * 0.8, hy + hr * 1.2), c, r.alpha)
    else:
        circle(surface, hx, hy - hr * 1.05, hr * 0.35, c, r.alpha)


_HAIR_STYLES: dict[str, Callable[[Surface, _Rig], None]] = {
    "short": _hair_cap,
    "long": _hair_long,
    "ponytail": _hair_ponytail,
    "bald": lambda surface, r: None,
}


def _accessories(surface: Surface, r: _Rig) -> None:
    f = r.f
    if f.has_helmet:
        _helmet(surface, r)
    elif f.has_hat:
        _hat(surface, r)
    if r.spec.faces_away:
        return
    with surface.layer("held_item"):
        if f.has_shield and not r.spec.is_side_view:
            _shield(surface, r)
        if f.has_weapon:
            weapon = _WEAPONS.get(f.weapon_type)
            if weapon is not None:
                (hx, hy), angle = r.weapon_hand
                weapon(surface, r, hx, hy, angle)


def _helmet(surface: Surface, r: _Rig) -> None:
    hx, hy, hr, sx = r.head_cx, r.head_cy, r.head_r, r.head_sx
    armor = r.f.armor_color
    ellipse(surface, hx, hy - hr * 0.35, hr * sx * 1.15, hr * 0.75, armor, r.alpha)
    fill_rect(surface, hx - hr * 1.15 * sx, hy - hr * 0.15, hr * 2.3 * sx, hr * 0.3, darken(armor, 20), r.alpha)
    if r.spec.direction == "down":
        fill_rect(surface, hx - 0.5, hy - hr * 0.1, 1, hr * 0.5, darken(armor, 30), r.alpha)


def _hat(surface: Surface, r: _Rig) -> None:
    hx, hy, hr, sx = r.head_cx, r.head_cy, r.head_r, r.head_sx
    if r.spec.variant == "robed":
        # wizard hat
        color = darken(r.f.cloth_color, 20)
        tip_x = hx + r.spec.flip * hr * 0.4
        triangle(surface, (hx - hr * 1.1 * sx, hy - hr * 0.6), (hx + hr * 1.1 * sx, hy - hr * 0.6),
                 (tip_x, hy - hr * 2.4), color, r.alpha)
        ellipse(surface, hx, hy - hr * 0.6, hr * 1.4 * sx, hr * 0.3, color, r.alpha)
        fill_rect(surface, hx - hr * 0.9 * sx, hy - hr * 0.95, hr * 1.8 * sx, hr * 0.25, r.f.accessory_color, r.alpha)
    else:
        color = darken(r.f.accessory_color, 45)
        fill_rect(surface, hx - hr * 1.3 * sx, hy - hr * 0.75, hr * 2.6 * sx, hr * 0.3, color, r.alpha)
        fill_rect(surface, hx - hr * 0.75 * sx, hy - hr * 1.45, hr * 1.5 * sx, hr * 0.75, color, r.alpha)


def _shield(surface: Surface, r: _Rig) -> None:
    (sx, sy) = r.hands[0]
    w, h = r.spec.width * 0.22, r.spec.height * 0.28
    rounded_rect(surface, sx - w / 2, sy - h / 2, w, h, w * 0.3, r.f.armor_color, r.alpha)
    circle(surface, sx, sy, w * 0.2, r.f.accessory_color, r.alpha)


# ── Weapons ───────────────────────────────────────────────────────────────────

def _sword(surface: Surface, r: _Rig, hx: float, hy: float, angle: float) -> None:
    h = r.spec.height
    limb(surface, hx, hy, h * 0.3, max(1.5, r.spec.width * 0.06), angle, STEEL, r.alpha, rounded=False)
    px, py = math.cos(angle) * h * 0.06, -math.sin(angle) * h * 0.06
    surface.draw_line(hx - px, hy - py, hx + px, hy + py, r.f.accessory_color, r.alpha)


def _axe(surface: Surface, r: _Rig, hx: float, hy: float, angle: float) -> None:
    h = r.spec.height
    ex, ey = limb(surface, hx, hy, h * 0.3, max(1.0, r.limb_w * 0.6), angle, WOOD, r.alpha, rounded=False)
    # blade sits on the outer side of the shaft end
    px, py = math.cos(angle) * r.spec.flip, -math.sin(angle) * r.spec.flip
    bx, by = ex - math.sin(angle) * h * 0.08, ey - math.cos(angle) * h * 0.08
    blade = h * 0.12
    surface.draw_polygon([(ex, ey), (bx, by), (bx + px * blade, by + py * blade),
                          (ex + px * blade, ey + py * blade)], STEEL, r.alpha)


def _staff(surface: Surface, r: _Rig, hx: float, hy: float, angle: float) -> None:
    h = r.spec.height
    top = (hx - math.sin(angle) * h * 0.35, hy - math.cos(angle) * h * 0.35)
    surface.draw_line(hx + math.sin(angle) * h * 0.1, hy + math.cos(angle) * h * 0.1,
                      top[0], top[1], WOOD, r.alpha, max(1.0, r.limb_w * 0.6))
    circle(surface, top[0], top[1], h * 0.07, r.f.accessory_color, r.alpha * 0.4)
    circle(surface, top[0], top[1], h * 0.045, brighten(r.f.accessory_color, 30), r.alpha)


def _bow(surface: Surface, r: _Rig, hx: float, hy: float, angle: float) -> None:
    radius = r.spec.height * 0.22
    facing = 0.0 if r.spec.flip > 0 else math.pi
    arc(surface, hx - r.spec.flip * radius * 0.6, hy, radius, facing - math.pi / 2.5,
        facing + math.pi / 2.5, WOOD, r.alpha, width=1.5, steps=6)
    top_y = hy - math.sin(math.pi / 2.5) * radius
    bottom_y = hy + math.sin(math.pi / 2.5) * radius
    string_x = hx - r.spec.flip * radius * 0.6 + math.cos(facing + math.pi / 2.5) * radius
    surface.draw_line(string_x, top_y, string_x, bottom_y, 0xEEEEEE, r.alpha)


_WEAPONS = {
    "sword": _sword,
    "axe": _axe,
    "staff": _staff,
    "bow": _bow,
}


# ── Variant layers ────────────────────────────────────────────────────────────

def _armor_plates(surface: Surface, r: _Rig) -> None:
    armor = r.f.armor_color
    x = r.cx - r.body_w * 0.4
    w = r.body_w * 0.8
    rounded_rect(surface, x, r.body_top + 1, w, r.body_h * 0.6, 1.5, armor, r.alpha)
    fill_rect(surface, x, r.body_top + 1 + r.body_h * 0.3, w, 1, darken(armor, 25), r.alpha)


def _shoulder_pads(surface: Surface, r: _Rig) -> None:
    for sx, sy in r.shoulders:
        ellipse(surface, sx, sy - 0.5, r.limb_w * 1.1, r.limb_w * 0.8, brighten(r.f.armor_color, 10), r.alpha)


def _leg_armor(surface: Surface, r: _Rig) -> None:
    for hip, angle in zip(r.hips, r.leg_angles):
        kx, ky = r.end(hip, r.leg_len * 0.45, angle)
        fill_rect(surface, kx - r.limb_w / 2 - 0.3, ky - 1, r.limb_w + 0.6, r.leg_len * 0.35, r.f.armor_color, r.alpha)


def _robe(surface: Surface, r: _Rig) -> None:
    cloth = r.f.cloth_color
    top = r.body_top + 1
    half = r.body_w / 2
    surface.draw_polygon([(r.cx - half, top), (r.cx + half, top),
                          (r.cx + half * 1.5, r.feet_y), (r.cx - half * 1.5, r.feet_y)], cloth, r.alpha)
    surface.draw_line(r.cx - half * 1.5, r.feet_y - 0.5, r.cx + half * 1.5, r.feet_y - 0.5,
                      darken(cloth, 20), r.alpha)
    belt_y = r.body_top + r.body_h * 0.55
    fill_rect(surface, r.cx - half, belt_y, r.body_w, 1.5, darken(cloth, 30), r.alpha)
    if not r.spec.faces_away:
        fill_rect(surface, r.cx - 1, belt_y, 2, 1.5, r.f.accessory_color, r.alpha)
    if r.spec.direction == "down":
        triangle(surface, (r.cx - half * 0.4, r.body_top), (r.cx + half * 0.4, r.body_top),
                 (r.cx, r.body_top + r.body_h * 0.3), r.f.accessory_color, r.alpha)


def _hood(surface: Surface, r: _Rig) -> None:
    hx, hy, hr, sx = r.head_cx, r.head_cy, r.head_r, r.head_sx
    color = darken(r.f.cloth_color, 15)
    if r.spec.faces_away:
        ellipse(surface, hx, hy, hr * 1.25, hr * 1.15, color, r.alpha)
        surface.draw_polygon([(hx - hr * 1.1, hy), (hx + hr * 1.1, hy),
                              (hx + hr * 0.8, hy + hr * 1.6), (hx - hr * 0.8, hy + hr * 1.6)], color, r.alpha)
        return
    ellipse(surface, hx, hy - hr * 0.8, hr * 1.25 * sx, hr * 0.55, color, r.alpha)
    if r.spec.is_side_view:
        back = hx - r.spec.flip * hr * 0.9
        surface.draw_polygon([(back - hr * 0.35, hy - hr * 0.9), (back + hr * 0.35, hy - hr * 0.9),
                              (back + hr * 0.35, hy + hr * 1.1), (back - hr * 0.35, hy + hr * 1.1)],
                             color, r.alpha)
    else:
        flap = hr * 0.4
        fill_rect(surface, hx - hr * 1.25, hy - hr * 0.8, flap, hr * 1.9, color, r.alpha)
        fill_rect(surface, hx + hr * 1.25 - flap, hy - hr * 0.8, flap, hr * 1.9, color, r.alpha)


# ── Composition ───────────────────────────────────────────────────────────────

_BASE_LAYERS: dict[str, Callable[[Surface, _Rig], None]] = {
    "legs": _legs,
    "body": _body,
    "arms": _arms,
    "near_arm": _arms,
    "head": _head,
    "face": _face,
    "hair": _hair,
    "accessories": _accessories,
}

_SIDE_ORDER = ("legs", "body", "head", "face", "hair", "near_arm", "accessories")
DRAW_ORDER: dict[str, tuple[str, ...]] = {
    "down": ("legs", "body", "arms", "head", "face", "hair", "accessories"),
    "up": ("legs", "arms", "body", "head", "hair", "accessories"),
    "left": _SIDE_ORDER,
    "right": _SIDE_ORDER,
}

_VARIANT_LAYERS: dict[str, dict[str, tuple[Callable[[Surface, _Rig], None], ...]]] = {
    "armored": {
        "legs": (_leg_armor,),
        "body": (_armor_plates,),
        "arms": (_shoulder_pads,),
        "near_arm": (_shoulder_pads,),
    },
    "robed": {"body": (_robe,)},
    "hooded": {"hair": (_hood,)},
}

_VARIANT_REPLACES: dict[str, frozenset] = {
    "hooded": frozenset({"hair"}),
}


def draw_humanoid(surface: Surface, spec: DrawSpec) -> None:
    rig = _layout(spec)
    extras = _VARIANT_LAYERS.get(spec.variant, {})
    replaced = _VARIANT_REPLACES.get(spec.variant, frozenset())
    for name in DRAW_ORDER[spec.direction]:
        with surface.layer(name):
            if name not in replaced:
                _BASE_LAYERS[name](surface, rig)
            for extra in extras.get(name, ()):
                extra(surface, rig)
