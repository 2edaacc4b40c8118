"""Terrain: tile patterns, wall types and obstacles.

Tile patterns are fully deterministic. Wall types add decorative noise
(cracks, knots, rivets) drawn from the draw seed.
"""
from __future__ import annotations

import math
import random
from typing import Callable

from engine.features import TerrainFeatures
from engine.types import DrawSpec
from render.colors import brighten, darken
from render.host import Surface
from render.primitives import border, circle, ellipse, fill_rect, polyline, rounded_rect, triangle

Pattern = Callable[[Surface, DrawSpec], None]


def _terrain(spec: DrawSpec) -> TerrainFeatures:
    return spec.features if isinstance(spec.features, TerrainFeatures) else TerrainFeatures()


# ===================================================================
# TILE PATTERNS
# ===================================================================

def _grass(surface: Surface, spec: DrawSpec) -> None:
    blade = brighten(spec.color, 20)
    for row in range(5):
        y = 4 + row * 6
        for x in range(2 + (row % 2) * 4, spec.width, 8):
            surface.draw_line(x, y, x, y + 2 + row % 2, blade, spec.alpha)


def _dirt(surface: Surface, spec: DrawSpec) -> None:
    line = darken(spec.color, 15)
    for p in range(8, spec.width, 8):
        surface.draw_line(p, 0, p, spec.height, line, spec.alpha * 0.6)
    for p in range(8, spec.height, 8):
        surface.draw_line(0, p, spec.width, p, line, spec.alpha * 0.6)


def _stone(surface: Surface, spec: DrawSpec) -> None:
    w, h = spec.width, spec.height
    line = darken(spec.color, 20)
    surface.draw_line(0, 0, w, h, line, spec.alpha)
    surface.draw_line(w, 0, 0, h, line, spec.alpha)
    surface.draw_line(w / 2, 0, w / 2, h, line, spec.alpha)
    surface.draw_line(0, h / 2, w, h / 2, line, spec.alpha)


def _water(surface: Surface, spec: DrawSpec) -> None:
    crest = brighten(spec.color, 30)
    for y in range(6, spec.height, 8):
        pts = [(x, y + (2 if (x // 4) % 2 else 0)) for x in range(0, spec.width + 1, 4)]
        polyline(surface, pts, crest, spec.alpha)


def _snow(surface: Surface, spec: DrawSpec) -> None:
    flake = darken(spec.color, 8)
    for fx, fy in ((6, 6), (20, 10), (10, 20), (26, 24), (16, 15)):
        fx, fy = fx * spec.width / 32, fy * spec.height / 32
        fill_rect(surface, fx - 1, fy, 3, 1, flake, spec.alpha)
        fill_rect(surface, fx, fy - 1, 1, 3, flake, spec.alpha)


def _sand(surface: Surface, spec: DrawSpec) -> None:
    ripple = darken(spec.color, 10)
    for y in range(8, spec.height, 10):
        pts = [(x, y + math.sin(x * math.pi / 8) * 1.5) for x in range(0, spec.width + 1, 2)]
        polyline(surface, pts, ripple, spec.alpha)


def _lava(surface: Surface, spec: DrawSpec) -> None:
    hot = brighten(spec.color, 30)
    for y in range(5, spec.height, 9):
        pts = [(x, y + math.sin(x * math.pi / 6) * 2) for x in range(0, spec.width + 1, 2)]
        polyline(surface, pts, hot, spec.alpha)
    bubble = brighten(spec.color, 60)
    for bx, by, r in ((8, 10, 2), (22, 18, 1.5), (14, 26, 1.5)):
        circle(surface, bx * spec.width / 32, by * spec.height / 32, r, bubble, spec.alpha)


def _brick_lines(surface: Surface, spec: DrawSpec) -> None:
    mortar = darken(spec.color, 25)
    course = 8
    for row, y in enumerate(range(0, spec.height, course)):
        surface.draw_line(0, y, spec.width, y, mortar, spec.alpha)
        offset = (row % 2) * course
        for x in range(offset, spec.width, course * 2):
            surface.draw_line(x, y, x, y + course, mortar, spec.alpha)


TILE_PATTERNS: dict[str, Pattern] = {
    "grass": _grass,
    "dirt": _dirt,
    "stone": _stone,
    "water": _water,
    "snow": _snow,
    "sand": _sand,
    "lava": _lava,
    "wall": _brick_lines,
}


def draw_tile(surface: Surface, spec: DrawSpec) -> None:
    f = _terrain(spec)
    with surface.layer("base"):
        fill_rect(surface, 0, 0, spec.width, spec.height, spec.color, spec.alpha)
    pattern = TILE_PATTERNS.get(f.pattern or spec.subtype)
    if pattern is not None:
        with surface.layer("pattern"):
            pattern(surface, spec)
    with surface.layer("border"):
        border(surface, darken(spec.color, f.border_percent), spec.alpha)


# ===================================================================
# WALL TYPES (decorative noise)
# ===================================================================

def _wall_brick(surface: Surface, spec: DrawSpec, rng: random.Random) -> None:
    _brick_lines(surface, spec)
    for _ in range(6):
        x, y = rng.randint(1, spec.width - 3), rng.randint(1, spec.height - 3)
        fill_rect(surface, x, y, 2, 1, brighten(spec.color, 20), spec.alpha)


def _wall_wood(surface: Surface, spec: DrawSpec, rng: random.Random) -> None:
    w, h = spec.width, spec.height
    seam = darken(spec.color, 30)
    for x in range(6, w, 6):
        surface.draw_line(x, 0, x, h, seam, spec.alpha)
    # knots and grain stay clear of the 3px beams
    for _ in range(3):
        kx, ky = rng.uniform(2, w - 2), rng.uniform(5, h - 5)
        ellipse(surface, kx, ky, 1.5, 1, darken(spec.color, 40), spec.alpha)
    for _ in range(5):
        gx = rng.randint(1, w - 2)
        gy = rng.uniform(4, max(4, h - 8))
        surface.draw_line(gx, gy, gx, gy + rng.randint(2, 5), darken(spec.color, 15), spec.alpha * 0.7)
    beam = darken(spec.color, 45)
    fill_rect(surface, 0, 0, w, 3, beam, spec.alpha)
    fill_rect(surface, 0, h - 3, w, 3, beam, spec.alpha)


def _wall_ice(surface: Surface, spec: DrawSpec, rng: random.Random) -> None:
    w, h = spec.width, spec.height
    crack = darken(spec.color, 25)
    pts = [(w / 2 + math.sin(y * 0.6) * 3 + rng.uniform(-1, 1), y) for y in range(0, h + 1, 4)]
    polyline(surface, pts, crack, spec.alpha)
    for _ in range(4):
        x, y = rng.uniform(2, w - 2), rng.uniform(2, h - 2)
        surface.draw_line(x, y, x + rng.uniform(-4, 4), y + rng.uniform(-4, 4), crack, spec.alpha * 0.7)
    for _ in range(5):
        x, y = rng.uniform(2, w - 2), rng.uniform(2, h - 2)
        fill_rect(surface, x, y, 1, 1, 0xFFFFFF, spec.alpha)


def _wall_metal(surface: Surface, spec: DrawSpec, rng: random.Random) -> None:
    w, h = spec.width, spec.height
    seam = darken(spec.color, 30)
    for p in range(8, w, 8):
        surface.draw_line(p, 0, p, h, seam, spec.alpha)
    for p in range(8, h, 8):
        surface.draw_line(0, p, w, p, seam, spec.alpha)
    rivet = brighten(spec.color, 40)
    for x in range(4, w, 8):
        for y in range(4, h, 8):
            if rng.random() < 0.7:
                circle(surface, x, y, 0.8, rivet, spec.alpha)
    for _ in range(3):
        x, y = rng.uniform(2, w - 6), rng.uniform(2, h - 6)
        surface.draw_line(x, y, x + rng.uniform(2, 5), y + rng.uniform(1, 3), brighten(spec.color, 25), spec.alpha * 0.6)


def _wall_stone(surface: Surface, spec: DrawSpec, rng: random.Random) -> None:
    w, h = spec.width, spec.height
    mortar = darken(spec.color, 30)
    y = 0
    while y < h:
        block_h = rng.choice([6, 8, 10, 12])
        x = -rng.choice([0, 3, 5])
        while x < w:
            block_w = rng.choice([6, 8, 10, 12])
            surface.draw_line(x, y, x, y + block_h, mortar, spec.alpha)
            # lower-right shading triangle gives each block some depth
            triangle(surface, (x + block_w, y + 1), (x + block_w, y + block_h),
                     (x + 1, y + block_h), darken(spec.color, 10), spec.alpha * 0.5)
            x += block_w
        surface.draw_line(0, y, w, y, mortar, spec.alpha)
        y += block_h
    for _ in range(6):
        fill_rect(surface, rng.randint(1, w - 2), rng.randint(1, h - 2), 1, 1, darken(spec.color, 20), spec.alpha)


WALL_PATTERNS: dict[str, Callable[[Surface, DrawSpec, random.Random], None]] = {
    "brick": _wall_brick,
    "wood": _wall_wood,
    "ice": _wall_ice,
    "metal": _wall_metal,
    "stone": _wall_stone,
}


def draw_wall(surface: Surface, spec: DrawSpec) -> None:
    f = _terrain(spec)
    rng = random.Random(spec.seed)
    with surface.layer("base"):
        fill_rect(surface, 0, 0, spec.width, spec.height, spec.color, spec.alpha)
    pattern = WALL_PATTERNS.get(f.pattern or spec.subtype)
    # noise placement needs room for at least one 8px block
    if pattern is not None and min(spec.width, spec.height) >= 8:
        with surface.layer("pattern"):
            pattern(surface, spec, rng)
    with surface.layer("border"):
        border(surface, darken(spec.color, f.border_percent), spec.alpha)


# ===================================================================
# OBSTACLES
# ===================================================================

def _tree(surface: Surface, spec: DrawSpec) -> None:
    w, h = spec.width, spec.height
    fill_rect(surface, w * 0.42, h * 0.6, w * 0.16, h * 0.35, 0x8B4513, spec.alpha)
    for i, (half, top) in enumerate(((0.4, 0.25), (0.33, 0.1), (0.25, 0.0))):
        c = spec.color if i != 1 else brighten(spec.color, 10)
        triangle(surface, (w * (0.5 - half), h * (top + 0.45)), (w * (0.5 + half), h * (top + 0.45)),
                 (w * 0.5, h * top), c, spec.alpha)


def _rock(surface: Surface, spec: DrawSpec) -> None:
    w, h = spec.width, spec.height
    rounded_rect(surface, w * 0.15, h * 0.35, w * 0.7, h * 0.55, w * 0.18, spec.color, spec.alpha)
    ellipse(surface, w * 0.38, h * 0.48, w * 0.12, h * 0.06, brighten(spec.color, 25), spec.alpha)


def _bush(surface: Surface, spec: DrawSpec) -> None:
    w, h = spec.width, spec.height
    for bx, by, r in ((0.32, 0.62, 0.22), (0.68, 0.62, 0.22), (0.5, 0.45, 0.25)):
        circle(surface, w * bx, h * by, w * r, spec.color, spec.alpha)
    circle(surface, w * 0.45, h * 0.4, w * 0.06, brighten(spec.color, 30), spec.alpha)


def _crate(surface: Surface, spec: DrawSpec) -> None:
    w, h = spec.width, spec.height
    x, y, s = w * 0.15, h * 0.15, w * 0.7
    fill_rect(surface, x, y, s, s, spec.color, spec.alpha)
    plank = darken(spec.color, 30)
    surface.draw_line(x, y, x + s, y + s, plank, spec.alpha)
    surface.draw_line(x + s, y, x, y + s, plank, spec.alpha)
    surface.draw_line(x, y + s / 2, x + s, y + s / 2, plank, spec.alpha)


OBSTACLES: dict[str, Pattern] = {
    "tree": _tree,
    "rock": _rock,
    "bush": _bush,
    "crate": _crate,
}


def draw_obstacle(surface: Surface, spec: DrawSpec) -> None:
    shape = OBSTACLES.get(_terrain(spec).pattern or spec.subtype, _crate)
    with surface.layer("shadow"):
        ellipse(surface, spec.width / 2, spec.height * 0.92, spec.width * 0.35, spec.height * 0.06, 0x000000, 0.2)
    with surface.layer("body"):
        shape(surface, spec)
