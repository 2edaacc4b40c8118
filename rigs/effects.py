"""Combat effects (attack, heal, magic) and fading particles."""
from __future__ import annotations

import math
import random

from engine.features import EffectFeatures
from engine.types import DrawSpec
from render.colors import brighten
from render.host import Surface
from render.primitives import circle, fill_rect, regular_polygon_points, triangle


def _features(spec: DrawSpec) -> EffectFeatures:
    return spec.features if isinstance(spec.features, EffectFeatures) else EffectFeatures()


def _attack(surface: Surface, spec: DrawSpec, rng: random.Random) -> None:
    cx, cy = spec.width / 2, spec.height / 2
    r = min(cx, cy)
    alpha = spec.alpha * _features(spec).fade
    for i in range(8):
        a = i * math.pi / 4
        tip = (cx + math.cos(a) * r * 0.95, cy + math.sin(a) * r * 0.95)
        left = (cx + math.cos(a - 0.2) * r * 0.3, cy + math.sin(a - 0.2) * r * 0.3)
        right = (cx + math.cos(a + 0.2) * r * 0.3, cy + math.sin(a + 0.2) * r * 0.3)
        triangle(surface, left, right, tip, spec.color, alpha)
    circle(surface, cx, cy, r * 0.3, brighten(spec.color, 50), alpha)


def _scatter(surface: Surface, spec: DrawSpec, rng: random.Random, color: int) -> None:
    f = _features(spec)
    cx, cy = spec.width / 2, spec.height / 2
    for _ in range(max(0, f.particle_count)):
        a = rng.uniform(0, 2 * math.pi)
        d = rng.uniform(0.35, 0.9) * min(cx, cy)
        circle(surface, cx + math.cos(a) * d, cy + math.sin(a) * d, rng.uniform(1, 2.5), color,
               spec.alpha * f.fade * rng.uniform(0.5, 1.0))


def _heal(surface: Surface, spec: DrawSpec, rng: random.Random) -> None:
    w, h = spec.width, spec.height
    alpha = spec.alpha * _features(spec).fade
    arm = w * 0.14
    fill_rect(surface, w / 2 - arm / 2, h * 0.25, arm, h * 0.5, spec.color, alpha)
    fill_rect(surface, w * 0.25, h / 2 - arm / 2, w * 0.5, arm, spec.color, alpha)
    _scatter(surface, spec, rng, brighten(spec.color, 40))


def _magic(surface: Surface, spec: DrawSpec, rng: random.Random) -> None:
    cx, cy = spec.width / 2, spec.height / 2
    r = min(cx, cy) * 0.75
    alpha = spec.alpha * _features(spec).fade
    # hexagram: two overlapping triangles
    surface.draw_polygon(regular_polygon_points(cx, cy, r, 3, -math.pi / 2), spec.color, alpha * 0.8)
    surface.draw_polygon(regular_polygon_points(cx, cy, r, 3, math.pi / 2), spec.color, alpha * 0.8)
    circle(surface, cx, cy, r * 0.3, brighten(spec.color, 60), alpha)
    _scatter(surface, spec, rng, brighten(spec.color, 30))


EFFECT_SHAPES = {
    "attack": _attack,
    "heal": _heal,
    "magic": _magic,
}


def draw_effect(surface: Surface, spec: DrawSpec) -> None:
    rng = random.Random(spec.seed)
    shape = EFFECT_SHAPES.get(spec.subtype, _attack)
    with surface.layer("effect"):
        shape(surface, spec, rng)


def draw_particle(surface: Surface, spec: DrawSpec) -> None:
    """particle_1 .. particle_4 fade out in quarter steps."""
    try:
        step = max(1, int(spec.subtype))
    except ValueError:
        step = 1
    alpha = spec.alpha * max(0.0, 1 - (step - 1) * 0.25)
    r = min(spec.width, spec.height) / 2
    with surface.layer("effect"):
        circle(surface, spec.width / 2, spec.height / 2, r, spec.color, alpha * 0.5)
        circle(surface, spec.width / 2, spec.height / 2, r * 0.55, spec.color, alpha)
