"""Core value types: AssetKey, DrawSpec, Archetype, Direction."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import config
from anim.poses import Pose
from engine.features import FeatureSet


class Archetype(str, Enum):
    HUMANOID = "humanoid"
    GHOST = "ghost"
    SLIME = "slime"
    MONSTER = "monster"
    TILE = "tile"
    WALL = "wall"
    OBSTACLE = "obstacle"
    ITEM = "item"
    UI = "ui"
    EFFECT = "effect"
    PARTICLE = "particle"
    DIRECTIONAL = "directional"
    RECT = "rect"


class Direction(str, Enum):
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"


DIRECTIONS: tuple[str, ...] = tuple(d.value for d in Direction)

# Archetypes that have a body and respond to poses
CREATURE_ARCHETYPES = frozenset({
    Archetype.HUMANOID, Archetype.GHOST, Archetype.SLIME,
    Archetype.MONSTER, Archetype.DIRECTIONAL,
})


@dataclass(frozen=True)
class AssetKey:
    category: str
    subtype: str
    action: Optional[str] = None
    direction: Optional[str] = None
    variant: Optional[str] = None
    frame_index: Optional[int] = None
    sheet: bool = False

    def to_string(self) -> str:
        """Canonical key text per the key grammar.

        Every field that changes the rendered pixels shows up in the text,
        so the text can serve as the cache key. An action without a
        direction faces the default direction; frame 0 is left implicit.
        """
        sep = config.KEY_SEPARATOR
        if self.category == "generic":
            return self.subtype
        parts = [self.category]
        if self.subtype and self.subtype != self.category:
            parts.append(self.subtype)
        if self.variant:
            parts.append(self.variant)
        if self.action:
            parts += [self.action, self.direction or config.DEFAULT_DIRECTION]
        elif self.direction:
            parts.append(self.direction)
        if self.frame_index:
            parts.append(f"f{self.frame_index}")
        if self.sheet:
            parts.append("sheet")
        return sep.join(parts)


@dataclass(frozen=True)
class DrawSpec:
    key: AssetKey
    archetype: Archetype
    category: str
    subtype: str
    variant: str
    color: int
    width: int
    height: int
    direction: str
    action: str
    features: FeatureSet
    frame_index: int = 0
    frame_count: int = 1
    sheet: bool = False
    details: bool = True
    alpha: float = 1.0
    seed: int = 0
    pose: Optional[Pose] = None

    @property
    def name(self) -> str:
        """Subtype plus variant, e.g. 'health_bar' or 'potion_mana'."""
        if self.variant and self.variant != "normal":
            return f"{self.subtype}_{self.variant}"
        return self.subtype

    @property
    def flip(self) -> int:
        return -1 if self.direction == Direction.LEFT.value else 1

    @property
    def is_side_view(self) -> bool:
        return self.direction in (Direction.LEFT.value, Direction.RIGHT.value)

    @property
    def faces_away(self) -> bool:
        return self.direction == Direction.UP.value
