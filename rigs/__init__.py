"""Archetype drawers.

Each drawer is a plain function ``draw(surface, spec) -> None``. Engines
receive the archetype -> drawer table at construction; pass a different
table to swap or stub individual rigs.
"""
from typing import Callable

from engine.types import Archetype, DrawSpec
from render.host import Surface
from rigs.basic import draw_directional, draw_rect
from rigs.effects import draw_effect, draw_particle
from rigs.ghost import draw_ghost
from rigs.humanoid import draw_humanoid
from rigs.items import draw_item
from rigs.monster import draw_monster
from rigs.slime import draw_slime
from rigs.terrain import draw_obstacle, draw_tile, draw_wall
from rigs.ui import draw_ui

Drawer = Callable[[Surface, DrawSpec], None]


def default_drawers() -> dict[Archetype, Drawer]:
    return {
        Archetype.HUMANOID: draw_humanoid,
        Archetype.GHOST: draw_ghost,
        Archetype.SLIME: draw_slime,
        Archetype.MONSTER: draw_monster,
        Archetype.TILE: draw_tile,
        Archetype.WALL: draw_wall,
        Archetype.OBSTACLE: draw_obstacle,
        Archetype.ITEM: draw_item,
        Archetype.UI: draw_ui,
        Archetype.EFFECT: draw_effect,
        Archetype.PARTICLE: draw_particle,
        Archetype.DIRECTIONAL: draw_directional,
        Archetype.RECT: draw_rect,
    }


__all__ = ["Drawer", "default_drawers"]
