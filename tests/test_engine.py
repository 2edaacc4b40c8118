#!/usr/bin/env python3

from __future__ import annotations

import unittest

import config
from engine import palette
from engine.asset_engine import AssetEngine
from engine.types import Archetype, AssetKey
from rigs import default_drawers
from tests.fakes import CountingDrawer, RecordingHost, failing_drawer

GARBAGE_KEYS = ["???", "x", "a__b", "_", "tile_", "éè_中", "   ", "🙂_🙂_🙂"]


def _first_x(call) -> float:
    kind, _, args = call
    return args[0][0][0] if kind == "polygon" else args[0]


class EngineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.host = RecordingHost()
        self.engine = AssetEngine(self.host, seed=1)

    def test_every_key_resolves_to_existing_texture(self) -> None:
        for text in GARBAGE_KEYS + ["player_warrior", "enemy_slime_king_walk_left_sheet"]:
            with self.subTest(text=text):
                key = self.engine.get_or_create(text)
                self.assertIsNotNone(key)
                self.assertTrue(self.host.texture_exists(key))

    def test_empty_key_serves_grass(self) -> None:
        self.assertEqual(self.engine.get_or_create(""), "tile_grass")
        self.assertEqual(self.engine.get_texture(None), "tile_grass")

    def test_cache_hit_does_not_redraw(self) -> None:
        counter = CountingDrawer()
        drawers = default_drawers()
        drawers[Archetype.HUMANOID] = counter
        engine = AssetEngine(self.host, drawers=drawers, seed=1)
        first = engine.get_or_create("player_warrior")
        second = engine.get_or_create("player_warrior")
        self.assertEqual(first, "player_warrior")
        self.assertEqual(first, second)
        self.assertEqual(counter.calls, 1)
        self.assertEqual(self.host.created, 1)

    def test_structured_frames_get_their_own_textures(self) -> None:
        first = self.engine.get_or_create(AssetKey("enemy", "skeleton", "death", "down", None, 0))
        fifth = self.engine.get_or_create(AssetKey("enemy", "skeleton", "death", "down", None, 4))
        self.assertEqual(first, "enemy_skeleton_death_down")
        self.assertEqual(fifth, "enemy_skeleton_death_down_f4")
        self.assertEqual(self.host.created, 2)
        self.assertNotEqual(self.host.textures[first][0].calls, self.host.textures[fifth][0].calls)

    def test_structured_action_without_direction_is_not_the_idle_key(self) -> None:
        walk = self.engine.get_or_create(AssetKey("enemy", "skeleton", action="walk"))
        idle = self.engine.get_or_create("enemy_skeleton")
        self.assertEqual(walk, "enemy_skeleton_walk_down")
        self.assertEqual(idle, "enemy_skeleton")
        self.assertEqual(self.host.created, 2)

    def test_structured_key_shares_cache_with_its_text(self) -> None:
        pairs = [
            (AssetKey("enemy", "skeleton"), "enemy_skeleton"),
            (AssetKey("enemy", "skeleton", "death", "left", None, 3), "enemy_skeleton_death_left_f3"),
            (AssetKey("player", "warrior", "walk", "up", sheet=True), "player_warrior_walk_up_sheet"),
        ]
        for structured, text in pairs:
            with self.subTest(text=text):
                self.assertEqual(self.engine.get_or_create(structured), text)
                self.assertEqual(self.engine.get_or_create(text), text)
        self.assertEqual(self.host.created, 3)

    def test_sheet_dimensions_and_metadata(self) -> None:
        key = self.engine.get_or_create("enemy_skeleton_walk_left_sheet")
        self.assertEqual(key, "enemy_skeleton_walk_left_sheet")
        self.assertEqual(self.host.size_of(key), (128, 32))
        entry = self.engine.registry.get(key)
        self.assertEqual(entry.kind, "character_sheet")
        self.assertEqual((entry.width, entry.height), (128, 32))
        self.assertEqual(entry.meta["frame_count"], 4)
        self.assertEqual(entry.meta["frame_width"], 32)
        self.assertEqual(entry.meta["frame_rate"], config.FRAME_RATE)
        self.assertEqual((entry.meta["action"], entry.meta["direction"]), ("walk", "left"))

        created = self.host.created
        self.engine.get_or_create("enemy_skeleton_walk_left_sheet")
        self.assertEqual(self.host.created, created)

    def test_sheet_frames_are_drawn_side_by_side(self) -> None:
        key = self.engine.get_or_create("npc_guard_idle_down_sheet")
        surface, width, _ = self.host.textures[key]
        xs = [_first_x(call) for call in surface.calls]
        self.assertTrue(any(x >= width - 32 for x in xs))
        self.assertTrue(any(x < 32 for x in xs))

    def test_missing_drawer_falls_back_to_category_default(self) -> None:
        counter = CountingDrawer()
        engine = AssetEngine(self.host, drawers={Archetype.TILE: counter}, seed=1)
        with self.assertLogs("engine", level="WARNING"):
            key = engine.get_or_create("foo_bar")
        self.assertEqual(key, palette.DEFAULT_FALLBACK_KEY)
        self.assertFalse(self.host.texture_exists("foo_bar"))
        self.assertEqual(counter.calls, 1)

    def test_ladder_terminates_with_emergency_asset(self) -> None:
        drawers = {archetype: failing_drawer for archetype in Archetype}
        engine = AssetEngine(self.host, drawers=drawers, seed=1)
        with self.assertLogs("engine", level="WARNING") as logs:
            key = engine.get_or_create("enemy_zombie")
        self.assertTrue(key.startswith("emergency_enemy_"))
        self.assertEqual(self.host.size_of(key), (config.EMERGENCY_SIZE, config.EMERGENCY_SIZE))
        surface, _, _ = self.host.textures[key]
        self.assertEqual(len(surface.calls), 1)
        self.assertEqual(surface.calls[0][2][4], config.EMERGENCY_COLOR)
        self.assertEqual(engine.registry.get(key).kind, "emergency")
        # requested, category default, then emergency
        self.assertEqual(sum("failed at" in line for line in logs.output), 2)
        self.assertFalse(self.host.texture_exists("enemy_skeleton"))

    def test_emergency_keys_do_not_collide(self) -> None:
        drawers = {archetype: failing_drawer for archetype in Archetype}
        engine = AssetEngine(self.host, drawers=drawers, seed=1)
        with self.assertLogs("engine", level="WARNING"):
            keys = {engine.get_or_create(f"enemy_{name}") for name in ("a", "b", "c")}
        self.assertEqual(len(keys), 3)
        for key in keys:
            self.assertTrue(self.host.texture_exists(key))

    def test_cyclic_request_gets_emergency_asset(self) -> None:
        inner = []

        def reentrant(surface, spec):
            inner.append(engine.get_or_create("npc_villager"))
            surface.draw_rect(0, 0, spec.width, spec.height, spec.color)

        drawers = default_drawers()
        drawers[Archetype.HUMANOID] = reentrant
        engine = AssetEngine(self.host, drawers=drawers, seed=1)
        with self.assertLogs("engine.asset_engine", level="ERROR"):
            key = engine.get_or_create("npc_villager")
        self.assertEqual(key, "npc_villager")
        self.assertEqual(len(inner), 1)
        self.assertTrue(inner[0].startswith("emergency_npc_"))

    def test_no_host_returns_none(self) -> None:
        engine = AssetEngine(seed=1)
        with self.assertLogs("engine.asset_engine", level="ERROR"):
            self.assertIsNone(engine.get_or_create("tile_grass"))
            self.assertIsNone(engine.get_texture("tile_grass"))
            self.assertIsNone(engine.get_fallback_texture("enemy"))
            self.assertIsNone(engine.create_character_animation_set("enemy_skeleton"))
            self.assertEqual(engine.ensure_required_placeholders(), [])
        self.assertEqual(len(engine.registry), 0)

    def test_detach_host_clears_registry(self) -> None:
        self.engine.get_or_create("tile_grass")
        self.engine.detach_host()
        self.assertEqual(len(self.engine.registry), 0)
        self.assertFalse(self.engine.host_available)
        with self.assertLogs("engine.asset_engine", level="ERROR"):
            self.assertIsNone(self.engine.get_or_create("tile_grass"))
        self.engine.attach_host(self.host)
        self.assertEqual(self.engine.get_or_create("tile_grass"), "tile_grass")

    def test_get_texture_uses_fallback_size(self) -> None:
        key = self.engine.get_texture("???", fallback_width=10, fallback_height=20, fallback_color=0x00FF00)
        self.assertEqual(key, "???")
        self.assertEqual(self.host.size_of(key), (10, 20))
        self.assertEqual(self.engine.registry.get(key).meta["color"], 0x00FF00)

    def test_fallback_texture_per_category(self) -> None:
        self.assertEqual(self.engine.get_fallback_texture("enemy"), "enemy_skeleton")
        self.assertEqual(self.engine.get_fallback_texture("wall"), "wall_stone")
        self.assertEqual(self.engine.get_fallback_texture("nonsense"), palette.DEFAULT_FALLBACK_KEY)

    def test_animation_set(self) -> None:
        sets = self.engine.create_character_animation_set(
            "enemy_skeleton", actions=("idle", "attack"), directions=("down", "up"),
            options={"frame_width": 16, "frame_height": 24})
        self.assertEqual(set(sets), {"idle", "attack"})
        self.assertEqual(sets["attack"]["up"], "enemy_skeleton_attack_up_sheet")
        self.assertEqual(self.host.size_of(sets["attack"]["up"]), (48, 24))
        self.assertEqual(self.host.size_of(sets["idle"]["down"]), (64, 24))
        for by_direction in sets.values():
            for key in by_direction.values():
                self.assertTrue(self.host.texture_exists(key))

    def test_animation_set_pins_action_and_direction(self) -> None:
        sets = self.engine.create_character_animation_set("hero", actions=("death",), directions=("left",))
        entry = self.engine.registry.get(sets["death"]["left"])
        self.assertEqual(entry.meta["frame_count"], 5)
        self.assertEqual(entry.meta["direction"], "left")

    def test_enhanced_character(self) -> None:
        key = self.engine.create_enhanced_character(
            "hero", 0x3366FF, "ghost", {"variant": "phantom", "custom_features": {"faceType": "cute"}})
        self.assertEqual(key, "hero")
        entry = self.engine.registry.get(key)
        self.assertEqual(entry.kind, "ghost")
        self.assertEqual(entry.meta["variant"], "phantom")
        self.assertEqual(entry.meta["color"], 0x3366FF)

    def test_placeholder_for_file(self) -> None:
        self.assertEqual(self.engine.placeholder_for_file("assets/ui/background.png"), "ui_background")
        self.assertEqual(self.host.size_of("ui_background"), (800, 600))
        self.assertEqual(self.engine.placeholder_for_file("sprites/hero.png"), "hero")

    def test_required_placeholders_degrade_to_flat_rects(self) -> None:
        drawers = default_drawers()
        drawers[Archetype.TILE] = failing_drawer
        engine = AssetEngine(self.host, drawers=drawers, seed=1)
        with self.assertLogs("engine", level="WARNING"):
            created = engine.ensure_required_placeholders()
        self.assertEqual(created, list(palette.REQUIRED_KEYS))
        self.assertEqual(engine.registry.get("tile_grass").kind, "rect")
        self.assertEqual(engine.registry.get("wall_brick").kind, "wall")
        self.assertEqual(engine.ensure_required_placeholders(), [])

    def test_initialize_builds_default_pack(self) -> None:
        keys = self.engine.initialize()
        for key in palette.REQUIRED_KEYS + palette.DEFAULT_PACK:
            with self.subTest(key=key):
                self.assertTrue(self.host.texture_exists(key))
                self.assertIn(key, keys)
        self.assertFalse(any(k.startswith("emergency_") for k in self.host.texture_keys()))

    def test_pinned_seed_is_reproducible(self) -> None:
        other_host = RecordingHost()
        other = AssetEngine(other_host, seed=1)
        for key in ("enemy_ghost_wisp", "wall_brick", "effect_magic", "enemy_skeleton_death_down_sheet"):
            with self.subTest(key=key):
                self.engine.get_or_create(key)
                other.get_or_create(key)
                self.assertEqual(self.host.textures[key][0].calls, other_host.textures[key][0].calls)

    def test_reset_clears_host_and_registry(self) -> None:
        self.engine.get_or_create("tile_grass")
        with self.assertLogs("engine.registry", level="INFO"):
            self.engine.reset()
        self.assertEqual(self.host.texture_keys(), [])
        self.assertEqual(len(self.engine.registry), 0)


if __name__ == "__main__":
    unittest.main()
