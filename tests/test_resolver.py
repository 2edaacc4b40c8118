#!/usr/bin/env python3

from __future__ import annotations

import unittest

import config
from engine.features import HumanoidFeatures, UIFeatures
from engine.resolver import archetype_for, infer_placeholder, parse_key, resolve
from engine.types import Archetype, AssetKey

GARBAGE_KEYS = ["", "x", "a__b", "_", "tile_", "   ", "42"]


class ParseKeyTests(unittest.TestCase):
    def test_full_sheet_key(self) -> None:
        key = parse_key("enemy_skeleton_walk_left_sheet")
        self.assertEqual(key, AssetKey("enemy", "skeleton", "walk", "left", None, None, True))
        self.assertEqual(key.to_string(), "enemy_skeleton_walk_left_sheet")

    def test_category_and_subtype(self) -> None:
        key = parse_key("player_warrior")
        self.assertEqual((key.category, key.subtype), ("player", "warrior"))
        self.assertIsNone(key.direction)
        self.assertFalse(key.sheet)

    def test_extra_tokens_become_variant(self) -> None:
        key = parse_key("item_potion_health")
        self.assertEqual((key.subtype, key.variant), ("potion", "health"))
        self.assertEqual(parse_key("ui_slider_track").variant, "track")

    def test_direction_without_action(self) -> None:
        key = parse_key("npc_guard_left")
        self.assertEqual(key.direction, "left")
        self.assertIsNone(key.action)

    def test_lone_token_names_category_and_subtype(self) -> None:
        key = parse_key("hero_walk_left_sheet")
        self.assertEqual((key.category, key.subtype), ("hero", "hero"))
        self.assertEqual((key.action, key.direction), ("walk", "left"))
        self.assertTrue(key.sheet)

    def test_frame_token(self) -> None:
        key = parse_key("enemy_skeleton_death_down_f4")
        self.assertEqual(key, AssetKey("enemy", "skeleton", "death", "down", None, 4))
        self.assertEqual(key.to_string(), "enemy_skeleton_death_down_f4")
        self.assertEqual(resolve(key).frame_index, 4)
        # two tokens stay category + subtype
        self.assertEqual(parse_key("tile_f2").subtype, "f2")

    def test_to_string_keeps_every_drawn_field(self) -> None:
        self.assertEqual(AssetKey("enemy", "skeleton", action="walk").to_string(),
                         f"enemy_skeleton_walk_{config.DEFAULT_DIRECTION}")
        self.assertEqual(AssetKey("enemy", "skeleton", frame_index=0).to_string(), "enemy_skeleton")
        texts = {
            AssetKey("enemy", "skeleton", "death", "down", None, i).to_string() for i in range(5)
        }
        self.assertEqual(len(texts), 5)
        for text in texts:
            with self.subTest(text=text):
                self.assertEqual(parse_key(text).to_string(), text)

    def test_garbage_resolves_to_generic(self) -> None:
        for text in GARBAGE_KEYS + [None, 42, ["list"]]:
            with self.subTest(text=text):
                self.assertEqual(parse_key(text).category, "generic")

    def test_parse_is_deterministic(self) -> None:
        for text in ("enemy_ghost_wisp_idle_up_sheet", "tile_grass", "???"):
            self.assertEqual(parse_key(text), parse_key(text))


class ArchetypeTests(unittest.TestCase):
    def test_category_wins_over_subtype(self) -> None:
        self.assertEqual(archetype_for("tile", "ghost"), Archetype.TILE)
        self.assertEqual(archetype_for("generic", "anything"), Archetype.RECT)

    def test_creature_subtypes(self) -> None:
        self.assertEqual(archetype_for("enemy", "spider"), Archetype.MONSTER)
        self.assertEqual(archetype_for("enemy", "slime"), Archetype.SLIME)
        self.assertEqual(archetype_for("character", "placeholder"), Archetype.DIRECTIONAL)
        self.assertEqual(archetype_for("npc", "villager"), Archetype.HUMANOID)

    def test_requested_archetype(self) -> None:
        self.assertEqual(archetype_for("npc", "villager", "ghost"), Archetype.GHOST)
        with self.assertLogs("engine.resolver", level="WARNING"):
            self.assertEqual(archetype_for("npc", "villager", "dragon"), Archetype.HUMANOID)


class ResolveTests(unittest.TestCase):
    def test_resolve_is_pure(self) -> None:
        for text in ("player_warrior", "enemy_slime_king_walk_down_sheet", "ui_health_bar", "%%%"):
            with self.subTest(text=text):
                self.assertEqual(resolve(text, seed=7), resolve(text, seed=7))

    def test_garbage_uses_fallback_size_and_color(self) -> None:
        spec = resolve("???", {"fallback_width": 10, "fallback_height": 12, "fallback_color": 0x123456})
        self.assertEqual(spec.archetype, Archetype.RECT)
        self.assertEqual((spec.width, spec.height, spec.color), (10, 12, 0x123456))

    def test_every_garbage_key_resolves(self) -> None:
        for text in GARBAGE_KEYS:
            with self.subTest(text=text):
                spec = resolve(text)
                self.assertGreater(spec.width, 0)
                self.assertGreater(spec.height, 0)

    def test_table_sizes(self) -> None:
        self.assertEqual(resolve("tile_grass").width, config.TILE_SIZE)
        self.assertEqual(resolve("item_potion_health").width, config.ITEM_SIZE)
        self.assertEqual(resolve("item_chest").width, config.TILE_SIZE)
        self.assertEqual(resolve("effect_magic").width, config.EFFECT_SIZE)
        spec = resolve("ui_health_bar")
        self.assertEqual((spec.width, spec.height), (200, 20))
        self.assertEqual(spec.name, "health_bar")

    def test_hover_variant_keeps_base_size(self) -> None:
        spec = resolve("ui_button_hover")
        self.assertEqual((spec.width, spec.height), (100, 30))
        self.assertIsInstance(spec.features, UIFeatures)
        self.assertTrue(spec.features.hover)

    def test_sheet_frame_counts(self) -> None:
        self.assertEqual(resolve("enemy_skeleton_death_down_sheet").frame_count, 5)
        self.assertEqual(resolve("enemy_skeleton_attack_down_sheet").frame_count, 3)
        self.assertEqual(resolve("enemy_skeleton_attack_down").frame_count, 1)

    def test_params_override_and_invalid_params_fall_back(self) -> None:
        spec = resolve("player_warrior", {"color": "#ff0000", "width": 48})
        self.assertEqual((spec.color, spec.width), (0xFF0000, 48))
        with self.assertLogs("engine.resolver", level="WARNING"):
            spec = resolve("player_warrior", {"width": -5, "direction": "sideways", "color": "nope"})
        self.assertEqual(spec.width, config.FRAME_WIDTH)
        self.assertEqual(spec.direction, config.DEFAULT_DIRECTION)
        self.assertEqual(spec.color, resolve("player_warrior").color)

    def test_presets_apply(self) -> None:
        spec = resolve("player_warrior")
        self.assertEqual(spec.variant, "armored")
        self.assertTrue(spec.features.has_shield)
        self.assertEqual(spec.features.weapon_type, "sword")

    def test_feature_overrides_merge(self) -> None:
        with self.assertLogs("engine.features", level="WARNING"):
            spec = resolve("npc_villager", {"features": {
                "hasWeapon": True, "weaponType": "axe", "glitter": 3, "has_shield": "yes"}})
        f = spec.features
        self.assertIsInstance(f, HumanoidFeatures)
        self.assertTrue(f.has_weapon)
        self.assertEqual(f.weapon_type, "axe")
        self.assertFalse(f.has_shield)
        self.assertEqual(f.extensions, {"glitter": 3})

    def test_creature_default_variant(self) -> None:
        self.assertEqual(resolve("enemy_ghost").variant, "normal")
        self.assertEqual(resolve("enemy_ghost_wisp").variant, "wisp")


class InferPlaceholderTests(unittest.TestCase):
    def test_ui_file_names(self) -> None:
        self.assertEqual(infer_placeholder("assets/ui/Main_Background.png"), "ui_background")
        self.assertEqual(infer_placeholder("start_button.png"), "ui_menu_button")
        self.assertEqual(infer_placeholder("slider_thumb.png"), "ui_slider_thumb")

    def test_unknown_file(self) -> None:
        self.assertIsNone(infer_placeholder("hero.png"))


if __name__ == "__main__":
    unittest.main()
