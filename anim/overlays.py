"""Pose-driven action effects drawn over a finished frame."""
from __future__ import annotations

import math
import random

from anim.poses import Action
from render.colors import brighten
from render.host import Surface
from render.primitives import arc, circle

SLASH_START = 0.5
SOUL_START = 0.5
CAST_START = 0.3

# slash arcs centered on the facing, as (start, end) angles
_SLASH_ARCS = {
    "right": (-math.pi / 3, math.pi / 3),
    "left": (math.pi * 2 / 3, math.pi * 4 / 3),
    "up": (-math.pi * 5 / 6, -math.pi / 6),
    "down": (math.pi / 6, math.pi * 5 / 6),
}


def draw_action_overlay(surface: Surface, spec) -> None:
    """Attack slash, hurt flash, death shade + soul particles, cast glow."""
    pose = spec.pose
    if pose is None:
        return
    w, h = spec.width, spec.height
    cx, cy = w / 2 + pose.body_offset_x, h / 2 + pose.body_offset_y

    with surface.layer("overlay"):
        if pose.action == Action.ATTACK.value and pose.progress > SLASH_START:
            start, end = _SLASH_ARCS[spec.direction]
            intensity = (pose.progress - SLASH_START) / (1 - SLASH_START)
            arc(surface, cx, cy, min(w, h) * 0.42, start, end, 0xFFFFFF,
                spec.alpha * (0.5 + 0.4 * intensity), width=2, steps=8)

        elif pose.action == Action.HURT.value and pose.tint is not None and pose.tint_alpha > 0:
            surface.draw_rect(0, 0, w, h, pose.tint, spec.alpha * pose.tint_alpha * 0.5)

        elif pose.action == Action.DEATH.value:
            if pose.fade > 0:
                surface.draw_rect(0, 0, w, h, 0x000000, spec.alpha * pose.fade * 0.4)
            if pose.progress > SOUL_START:
                rng = random.Random(spec.seed)
                rise = (pose.progress - SOUL_START) / (1 - SOUL_START)
                for i in range(3):
                    sx = w / 2 + rng.uniform(-w * 0.15, w * 0.15)
                    sy = h * 0.6 - rise * h * 0.4 - i * h * 0.1
                    circle(surface, sx, sy, max(0.8, w * 0.04), 0xE0F0FF, spec.alpha * (1 - rise * 0.5))

        elif pose.action == Action.CAST.value and pose.progress > CAST_START:
            glow = brighten(spec.color, 50)
            circle(surface, cx, cy, min(w, h) * 0.35, glow, spec.alpha * 0.25)
            orbit = min(w, h) * 0.38
            for i in range(8):
                a = i * math.pi / 4 + pose.progress * math.pi
                circle(surface, cx + math.cos(a) * orbit, cy + math.sin(a) * orbit,
                       max(0.6, w * 0.03), glow, spec.alpha * 0.8)
