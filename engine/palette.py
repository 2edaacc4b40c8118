"""Static tables: category and creature archetypes, palettes, sizes,
per-subtype presets and category fallback keys."""
from __future__ import annotations

import config
from render.colors import brighten

# ── Archetype tables ──────────────────────────────────────────────────────────

# Categories whose archetype is fixed regardless of subtype
CATEGORY_ARCHETYPES: dict[str, str] = {
    "tile": "tile",
    "wall": "wall",
    "obstacle": "obstacle",
    "item": "item",
    "ui": "ui",
    "effect": "effect",
    "particle": "particle",
    "generic": "rect",
}

# Entity categories pick their archetype from the creature subtype
ENTITY_CATEGORIES = frozenset({"player", "companion", "enemy", "npc", "character", "monster"})

CREATURE_ARCHETYPES: dict[str, str] = {
    "skeleton": "humanoid",
    "zombie": "humanoid",
    "boss": "humanoid",
    "ghost": "ghost",
    "spider": "monster",
    "wolf": "monster",
    "slime": "slime",
    "placeholder": "directional",
}

DEFAULT_ARCHETYPE = "humanoid"

VARIANTS: dict[str, tuple[str, ...]] = {
    "humanoid": ("normal", "armored", "robed", "hooded"),
    "ghost": ("normal", "wisp", "phantom", "shadow"),
    "slime": ("normal", "metal", "elemental", "king"),
    "monster": ("normal", "spider", "beast"),
}

# ── Palettes ──────────────────────────────────────────────────────────────────

PLAYER_COLORS: dict[str, int] = {
    "warrior": 0x8B0000,
    "rogue": 0x006400,
    "sorcerer": 0x00008B,
}

COMPANION_COLORS: dict[str, int] = {k: brighten(v, 30) for k, v in PLAYER_COLORS.items()}

ENEMY_COLORS: dict[str, int] = {
    "skeleton": 0xBDBDBD,
    "zombie": 0x556B2F,
    "ghost": 0xE6E6FA,
    "spider": 0x800080,
    "slime": 0x00FF7F,
    "wolf": 0x8B4513,
    "boss": 0xFF0000,
}

NPC_COLORS: dict[str, int] = {
    "villager": 0xFFD700,
    "guard": 0x4682B4,
    "blacksmith": 0xB22222,
    "merchant": 0x9370DB,
    "alchemist": 0x32CD32,
}

ENTITY_PALETTES: dict[str, dict[str, int]] = {
    "player": PLAYER_COLORS,
    "companion": COMPANION_COLORS,
    "enemy": ENEMY_COLORS,
    "npc": NPC_COLORS,
}

CATEGORY_COLORS: dict[str, int] = {
    "player": 0x00FF00,
    "enemy": 0xFF0000,
    "npc": 0x0000FF,
}

TILE_COLORS: dict[str, int] = {
    "water": 0x1E90FF,
    "grass": 0x3CB371,
    "dirt": 0x8B4513,
    "sand": 0xF4A460,
    "stone": 0x708090,
    "snow": 0xFFFAFA,
    "lava": 0xFF4500,
    "wall": 0x808080,
}
DEFAULT_TILE_COLOR = 0x888888

WALL_COLORS: dict[str, int] = {
    "stone": 0x808080,
    "brick": 0xB22222,
    "wood": 0x8B4513,
    "ice": 0xADD8E6,
    "metal": 0x696969,
}

OBSTACLE_COLORS: dict[str, int] = {
    "tree": 0x228B22,
    "rock": 0x696969,
    "bush": 0x32CD32,
    "crate": 0xCD853F,
}
DEFAULT_OBSTACLE_COLOR = 0x8B4513

ITEM_COLORS: dict[str, int] = {
    "potion_health": 0xDC143C,
    "potion_mana": 0x1E50FF,
    "potion": 0xDC143C,
    "weapon": 0xC0C0C0,
    "armor": 0x708090,
    "gold": 0xFFD700,
    "chest": 0x8B4513,
}

UI_COLORS: dict[str, int] = {
    "panel": 0x2F2F3F,
    "button": 0x4A6FA5,
    "menu_button": 0x4A6FA5,
    "skill_icon": 0x6A5ACD,
    "health_bar": 0xCC2222,
    "mana_bar": 0x2255DD,
    "inventory_slot": 0x444444,
    "cursor": 0xFFFFFF,
    "checkbox": 0x555566,
    "slider_track": 0x666677,
    "slider_thumb": 0xDDDDDD,
    "background": 0x1A1A2E,
    "logo": 0xFFD700,
}

EFFECT_COLORS: dict[str, int] = {
    "attack": 0xFF6347,
    "heal": 0x00FF7F,
    "magic": 0x9370DB,
}

PARTICLE_COLOR = 0xFFFFFF

# ── Sizes ─────────────────────────────────────────────────────────────────────

UI_SIZES: dict[str, tuple[int, int]] = {
    "panel": (200, 150),
    "button": (100, 30),
    "skill_icon": (40, 40),
    "health_bar": (200, 20),
    "mana_bar": (200, 20),
    "inventory_slot": (40, 40),
    "cursor": (20, 20),
    "checkbox": (24, 24),
    "slider_track": (200, 10),
    "slider_thumb": (20, 20),
    "menu_button": (250, 60),
    "background": (800, 600),
    "logo": (400, 200),
}

# ── Presets ───────────────────────────────────────────────────────────────────

# (category, subtype) -> default variant and feature overrides.
# Companions share the player presets.
SUBTYPE_PRESETS: dict[tuple[str, str], dict] = {
    ("player", "warrior"): {"variant": "armored", "features": {
        "has_weapon": True, "weapon_type": "sword", "has_shield": True}},
    ("player", "rogue"): {"variant": "hooded", "features": {
        "has_weapon": True, "weapon_type": "bow"}},
    ("player", "sorcerer"): {"variant": "robed", "features": {
        "has_weapon": True, "weapon_type": "staff", "has_hat": True, "hair_style": "long"}},
    ("enemy", "skeleton"): {"features": {
        "has_weapon": True, "weapon_type": "sword", "hair_style": "bald",
        "skin_color": 0xF0F0E0, "eye_color": 0x400000}},
    ("enemy", "zombie"): {"features": {
        "hair_style": "long", "skin_color": 0x7A9A5A}},
    ("enemy", "boss"): {"variant": "armored", "features": {
        "has_weapon": True, "weapon_type": "axe", "has_helmet": True, "has_shield": True}},
    ("enemy", "ghost"): {"variant": "normal"},
    ("enemy", "spider"): {"variant": "spider"},
    ("enemy", "wolf"): {"variant": "beast"},
    ("enemy", "slime"): {"variant": "normal"},
    ("npc", "villager"): {"features": {"hair_style": "ponytail"}},
    ("npc", "guard"): {"variant": "armored", "features": {
        "has_weapon": True, "weapon_type": "sword", "has_shield": True, "has_helmet": True}},
    ("npc", "blacksmith"): {"features": {"has_beard": True, "has_weapon": True, "weapon_type": "axe"}},
    ("npc", "merchant"): {"features": {"has_hat": True}},
    ("npc", "alchemist"): {"variant": "robed", "features": {"has_hat": True, "has_beard": True}},
}

# ── Fallbacks ─────────────────────────────────────────────────────────────────

FALLBACK_KEYS: dict[str, str] = {
    "character": "character_placeholder",
    "player": "player_warrior",
    "companion": "companion_warrior",
    "enemy": "enemy_skeleton",
    "npc": "npc_villager",
    "tile": "tile_grass",
    "item": "item_chest",
    "ui": "ui_panel",
    "effect": "effect_attack",
    "wall": "wall_stone",
    "obstacle": "obstacle_rock",
    "particle": "particle_1",
}
DEFAULT_FALLBACK_KEY = "tile_grass"

REQUIRED_TILES = tuple(f"tile_{name}" for name in TILE_COLORS)
REQUIRED_WALLS = tuple(f"wall_{name}" for name in WALL_COLORS)
REQUIRED_KEYS: tuple[str, ...] = REQUIRED_TILES + ("item_chest",) + REQUIRED_WALLS

DEFAULT_PACK: tuple[str, ...] = (
    ("character_placeholder",)
    + tuple(f"player_{name}" for name in PLAYER_COLORS)
    + tuple(f"companion_{name}" for name in COMPANION_COLORS)
    + tuple(f"enemy_{name}" for name in ENEMY_COLORS)
    + ("enemy_ghost_wisp", "enemy_ghost_phantom", "enemy_ghost_shadow",
       "enemy_slime_metal", "enemy_slime_elemental", "enemy_slime_king")
    + tuple(f"npc_{name}" for name in NPC_COLORS)
    + tuple(f"obstacle_{name}" for name in OBSTACLE_COLORS)
    + ("item_potion_health", "item_potion_mana", "item_weapon_sword", "item_weapon_axe",
       "item_weapon_bow", "item_weapon_staff", "item_armor", "item_gold_coin",
       "item_chest_open", "item_placeholder")
    + tuple(f"ui_{name}" for name in UI_SIZES)
    + ("ui_button_hover",)
    + tuple(f"effect_{name}" for name in EFFECT_COLORS)
    + tuple(f"particle_{n}" for n in range(1, 5))
)


def entity_color(category: str, subtype: str, fallback: int) -> int:
    palette = ENTITY_PALETTES.get(category)
    if palette is not None:
        return palette.get(subtype, CATEGORY_COLORS.get(category, fallback))
    # other categories borrow by creature kind, e.g. character_ghost
    for table in (ENEMY_COLORS, NPC_COLORS, PLAYER_COLORS):
        if subtype in table:
            return table[subtype]
    return fallback


def preset_for(category: str, subtype: str) -> dict:
    if category == "companion":
        category = "player"
    return SUBTYPE_PRESETS.get((category, subtype), {})


def default_size(archetype: str, category: str, name: str,
                 fallback: tuple[int, int]) -> tuple[int, int]:
    if archetype in ("humanoid", "ghost", "slime", "monster", "directional"):
        return config.FRAME_WIDTH, config.FRAME_HEIGHT
    if archetype in ("tile", "wall", "obstacle"):
        return config.TILE_SIZE, config.TILE_SIZE
    if archetype == "item":
        if name.startswith("chest"):
            return config.TILE_SIZE, config.TILE_SIZE
        return config.ITEM_SIZE, config.ITEM_SIZE
    if archetype == "ui":
        return UI_SIZES.get(_ui_base(name), fallback)
    if archetype == "effect":
        return config.EFFECT_SIZE, config.EFFECT_SIZE
    if archetype == "particle":
        return config.PARTICLE_SIZE, config.PARTICLE_SIZE
    return fallback


def _ui_base(name: str) -> str:
    return name[:-len("_hover")] if name.endswith("_hover") else name


def base_color(archetype: str, category: str, subtype: str, name: str, fallback: int) -> int:
    if category in ENTITY_CATEGORIES or archetype in ("humanoid", "ghost", "slime", "monster"):
        return entity_color(category, subtype, fallback)
    if archetype == "tile":
        return TILE_COLORS.get(subtype, DEFAULT_TILE_COLOR)
    if archetype == "wall":
        return WALL_COLORS.get(subtype, WALL_COLORS["stone"])
    if archetype == "obstacle":
        return OBSTACLE_COLORS.get(subtype, DEFAULT_OBSTACLE_COLOR)
    if archetype == "item":
        return ITEM_COLORS.get(name, ITEM_COLORS.get(subtype, fallback))
    if archetype == "ui":
        return UI_COLORS.get(_ui_base(name), fallback)
    if archetype == "effect":
        return EFFECT_COLORS.get(subtype, fallback)
    if archetype == "particle":
        return PARTICLE_COLOR
    return fallback
