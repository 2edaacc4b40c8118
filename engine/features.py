"""Typed feature sets with per-archetype defaults.

Caller overrides are merged over the defaults at resolve time. Names may be
given in snake_case or camelCase (``hasWeapon``). Unknown names are kept in
``extensions`` for drawers that understand them; values of the wrong type
are dropped with a warning and the default stays.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Optional

from render.colors import brighten, darken, parse_color

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeatureSet:
    extensions: dict = field(default_factory=dict)


@dataclass(frozen=True)
class HumanoidFeatures(FeatureSet):
    hair_color: int = 0x000000
    skin_color: int = 0xFFFFFF
    cloth_color: int = 0xFFFFFF
    armor_color: int = 0x808080
    eye_color: int = 0x000000
    accessory_color: int = 0xFFD700
    has_weapon: bool = False
    weapon_type: str = "sword"      # sword | axe | staff | bow
    has_shield: bool = False
    hair_style: str = "short"       # short | long | ponytail | bald
    has_beard: bool = False
    has_helmet: bool = False
    has_hat: bool = False


@dataclass(frozen=True)
class GhostFeatures(FeatureSet):
    transparency: float = 0.7
    glow_color: int = 0xFFFFFF
    has_trail: bool = True
    has_arms: bool = True
    face_type: str = "normal"       # normal | scary | cute
    trail_count: int = 1


@dataclass(frozen=True)
class SlimeFeatures(FeatureSet):
    transparency: float = 0.8
    inner_color: int = 0xFFFFFF
    bubble_count: int = 4
    has_crown: bool = False
    metallic: bool = False
    facial_expression: str = "happy"  # happy | angry | neutral


@dataclass(frozen=True)
class MonsterFeatures(FeatureSet):
    eye_color: int = 0xFF0000
    eye_count: int = 2
    leg_count: int = 4
    has_fangs: bool = True
    has_tail: bool = False


@dataclass(frozen=True)
class TerrainFeatures(FeatureSet):
    pattern: str = ""
    border_percent: int = 10


@dataclass(frozen=True)
class ItemFeatures(FeatureSet):
    is_open: bool = False
    weapon_type: str = "sword"
    accent_color: int = 0xFFD700


@dataclass(frozen=True)
class UIFeatures(FeatureSet):
    fill_ratio: float = 0.8
    hover: bool = False
    checked: bool = False
    accent_color: int = 0xFFFFFF


@dataclass(frozen=True)
class EffectFeatures(FeatureSet):
    particle_count: int = 8
    fade: float = 1.0


# ── Defaults ──────────────────────────────────────────────────────────────────

def default_features(archetype: str, color: int, variant: str, subtype: str = "") -> FeatureSet:
    """Defaults for one archetype; some derive from the base color or variant."""
    if archetype == "humanoid":
        return HumanoidFeatures(
            hair_color=darken(color, 20),
            skin_color=brighten(color, 30),
            cloth_color=color,
            armor_color=darken(color, 10),
        )
    if archetype == "ghost":
        return GhostFeatures(
            glow_color=brighten(color, 30),
            has_arms=variant != "wisp",
            face_type="scary" if variant == "shadow" else "normal",
            trail_count=3 if variant == "phantom" else 1,
        )
    if archetype == "slime":
        return SlimeFeatures(
            transparency=0.8 if variant in ("", "normal") else 0.9,
            inner_color=brighten(color, 20),
            bubble_count=8 if variant == "elemental" else 4,
            has_crown=variant == "king",
            metallic=variant == "metal",
        )
    if archetype == "monster":
        if variant == "spider":
            return MonsterFeatures(eye_color=0xFF2020, eye_count=4, leg_count=8)
        if variant == "beast":
            return MonsterFeatures(eye_color=0xFFFF00, leg_count=4, has_tail=True)
        return MonsterFeatures()
    if archetype == "tile":
        return TerrainFeatures(pattern=subtype, border_percent=10)
    if archetype == "wall":
        return TerrainFeatures(pattern=subtype or "stone", border_percent=30)
    if archetype == "obstacle":
        return TerrainFeatures(pattern=subtype, border_percent=30)
    if archetype == "item":
        return ItemFeatures(is_open=variant == "open",
                            weapon_type=variant if subtype == "weapon" and variant else "sword")
    if archetype == "ui":
        return UIFeatures(hover=variant == "hover")
    if archetype == "effect":
        return EffectFeatures()
    return FeatureSet()


# ── Merging ───────────────────────────────────────────────────────────────────

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(name: str) -> str:
    return _CAMEL.sub("_", name).lower()


def _coerce(name: str, current: Any, value: Any) -> Any:
    if name.endswith("_color"):
        return parse_color(value)
    if isinstance(current, bool):
        if not isinstance(value, bool):
            raise TypeError("expected bool")
        return value
    if isinstance(current, int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("expected int")
        return value
    if isinstance(current, float):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError("expected number")
        return float(value)
    if isinstance(current, str):
        if not isinstance(value, str):
            raise TypeError("expected str")
        return value
    return value


def merge_features(base: FeatureSet, overrides: Optional[Mapping[str, Any]]) -> FeatureSet:
    """Return `base` with `overrides` applied; never raises on bad input."""
    if not overrides:
        return base
    known = {f.name for f in fields(base)} - {"extensions"}
    changes: dict[str, Any] = {}
    extensions = dict(base.extensions)
    for raw_name, value in overrides.items():
        name = _snake(str(raw_name))
        if name not in known:
            extensions[name] = value
            continue
        try:
            changes[name] = _coerce(name, getattr(base, name), value)
        except (TypeError, ValueError) as e:
            logger.warning(f"Feature '{name}': ignoring {value!r} ({e})")
    return replace(base, extensions=extensions, **changes)
