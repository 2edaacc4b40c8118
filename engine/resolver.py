"""Asset key resolution: key text -> AssetKey -> DrawSpec.

Key grammar: ``<category>_<subtype>[_<modifiers>][_<action>_<direction>][_f<frame>][_sheet]``.
Anything that does not parse resolves to the generic category; resolution
never raises and has no side effects.
"""
from __future__ import annotations

import logging
import re
from pathlib import PurePath
from typing import Any, Mapping, Optional, Union

import config
from anim.poses import ACTIONS, frame_count_for
from engine import palette
from engine.features import default_features, merge_features
from engine.types import DIRECTIONS, Archetype, AssetKey, DrawSpec
from render.colors import parse_color

logger = logging.getLogger(__name__)

_FRAME_TOKEN = re.compile(r"f([0-9]+)")


def generic_key(text: str) -> AssetKey:
    return AssetKey(category="generic", subtype=text)


def parse_key(text: Any) -> AssetKey:
    """Split key text into structured fields. Never raises."""
    if not isinstance(text, str):
        text = "" if text is None else str(text)
    tokens = text.strip().lower().split(config.KEY_SEPARATOR)
    if len(tokens) < 2 or any(not t for t in tokens):
        return generic_key(text)

    sheet = False
    if tokens[-1] == "sheet" and len(tokens) > 2:
        sheet = True
        tokens = tokens[:-1]

    frame_index: Optional[int] = None
    frame = _FRAME_TOKEN.fullmatch(tokens[-1])
    if frame and len(tokens) > 2:
        frame_index = int(frame.group(1))
        tokens = tokens[:-1]

    action: Optional[str] = None
    direction: Optional[str] = None
    if len(tokens) >= 3 and tokens[-1] in DIRECTIONS and tokens[-2] in ACTIONS:
        action, direction = tokens[-2], tokens[-1]
        tokens = tokens[:-2]
    elif len(tokens) >= 3 and tokens[-1] in DIRECTIONS:
        direction = tokens[-1]
        tokens = tokens[:-1]

    if len(tokens) == 1:
        # "hero_walk_left_sheet": the lone token names both category and subtype
        return AssetKey(tokens[0], tokens[0], action, direction, None, frame_index, sheet)

    variant = config.KEY_SEPARATOR.join(tokens[2:]) or None
    return AssetKey(tokens[0], tokens[1], action, direction, variant, frame_index, sheet)


def archetype_for(category: str, subtype: str, requested: Optional[str] = None) -> Archetype:
    if requested:
        try:
            return Archetype(requested)
        except ValueError:
            logger.warning(f"Unknown archetype '{requested}', resolving from key instead")
    if category in palette.CATEGORY_ARCHETYPES:
        return Archetype(palette.CATEGORY_ARCHETYPES[category])
    return Archetype(palette.CREATURE_ARCHETYPES.get(subtype, palette.DEFAULT_ARCHETYPE))


def _positive_int(value: Any, default: int, label: str) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 1:
        logger.warning(f"Ignoring invalid {label} {value!r}")
        return default
    return int(value)


def _color(value: Any, default: int) -> int:
    if value is None:
        return default
    try:
        return parse_color(value)
    except (TypeError, ValueError) as e:
        logger.warning(f"Ignoring invalid color {value!r}: {e}")
        return default


def resolve(key: Union[str, AssetKey], params: Optional[Mapping[str, Any]] = None,
            seed: int = 0) -> DrawSpec:
    """Build the DrawSpec for `key`.

    `params` may carry color, width, height, variant, direction, action,
    frame_index, features, archetype, alpha, details, and the
    fallback_width / fallback_height / fallback_color used when no table
    has an entry for the key.
    """
    asset_key = key if isinstance(key, AssetKey) else parse_key(key)
    params = dict(params or {})
    category, subtype = asset_key.category, asset_key.subtype

    archetype = archetype_for(category, subtype, params.get("archetype"))
    preset = palette.preset_for(category, subtype)

    variant = params.get("variant") or asset_key.variant or preset.get("variant") or ""
    if not variant and archetype.value in palette.VARIANTS:
        variant = "normal"

    direction = params.get("direction") or asset_key.direction or config.DEFAULT_DIRECTION
    if direction not in DIRECTIONS:
        logger.warning(f"Unknown direction '{direction}', using {config.DEFAULT_DIRECTION}")
        direction = config.DEFAULT_DIRECTION
    action = params.get("action") or asset_key.action or config.DEFAULT_ACTION

    name = subtype if variant in ("", "normal") else f"{subtype}_{variant}"
    fallback_size = (
        _positive_int(params.get("fallback_width"), 32, "fallback width"),
        _positive_int(params.get("fallback_height"), 32, "fallback height"),
    )
    fallback_color = _color(params.get("fallback_color"), config.DEFAULT_FALLBACK_COLOR)

    default_w, default_h = palette.default_size(archetype.value, category, name, fallback_size)
    width = _positive_int(params.get("width"), default_w, "width")
    height = _positive_int(params.get("height"), default_h, "height")
    color = _color(
        params.get("color"),
        palette.base_color(archetype.value, category, subtype, name, fallback_color),
    )

    features = default_features(archetype.value, color, variant, subtype)
    features = merge_features(features, preset.get("features"))
    features = merge_features(features, params.get("features"))

    frame_index = params.get("frame_index", asset_key.frame_index) or 0
    if not isinstance(frame_index, int) or frame_index < 0:
        logger.warning(f"Ignoring invalid frame index {frame_index!r}")
        frame_index = 0

    alpha = params.get("alpha", 1.0)
    if isinstance(alpha, bool) or not isinstance(alpha, (int, float)):
        alpha = 1.0
    alpha = max(0.0, min(1.0, float(alpha)))

    return DrawSpec(
        key=asset_key,
        archetype=archetype,
        category=category,
        subtype=subtype,
        variant=variant,
        color=color,
        width=width,
        height=height,
        direction=direction,
        action=action,
        features=features,
        frame_index=frame_index,
        frame_count=frame_count_for(action) if asset_key.sheet else 1,
        sheet=asset_key.sheet,
        details=bool(params.get("details", True)),
        alpha=alpha,
        seed=seed,
    )


# ── File-name inference ───────────────────────────────────────────────────────

_FILE_HINTS: tuple[tuple[str, str], ...] = (
    ("background", "ui_background"),
    ("logo", "ui_logo"),
    ("slider_track", "ui_slider_track"),
    ("slider_thumb", "ui_slider_thumb"),
    ("checkbox", "ui_checkbox"),
    ("button", "ui_menu_button"),
)


def infer_placeholder(filename: str) -> Optional[str]:
    """Map an image file name to the UI placeholder that stands in for it."""
    stem = PurePath(filename).stem.lower()
    for hint, key in _FILE_HINTS:
        if hint in stem:
            return key
    return None
