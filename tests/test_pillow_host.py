#!/usr/bin/env python3

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

import config
from engine.asset_engine import AssetEngine
from engine.types import Archetype
from render.colors import split_rgb
from render.pillow_host import PillowSurface, PillowTextureHost, png_filename
from tests.fakes import RecordingSurface, failing_drawer


class PillowSurfaceTests(unittest.TestCase):
    def test_rect_fills_exact_pixels(self) -> None:
        surface = PillowSurface(8, 8)
        surface.draw_rect(2, 2, 3, 3, 0xFF0000)
        self.assertEqual(surface.image.getpixel((2, 2)), (255, 0, 0, 255))
        self.assertEqual(surface.image.getpixel((4, 4)), (255, 0, 0, 255))
        self.assertEqual(surface.image.getpixel((5, 5)), (0, 0, 0, 0))

    def test_translated_rect(self) -> None:
        surface = PillowSurface(16, 8)
        with surface.translated(8, 0):
            surface.draw_rect(0, 0, 1, 1, 0x00FF00)
        self.assertEqual(surface.image.getpixel((8, 0)), (0, 255, 0, 255))
        self.assertEqual(surface.image.getpixel((0, 0)), (0, 0, 0, 0))


class PillowHostTests(unittest.TestCase):
    def test_sheet_image_size(self) -> None:
        host = PillowTextureHost()
        engine = AssetEngine(host, seed=3)
        key = engine.get_or_create("enemy_skeleton_walk_left_sheet")
        self.assertEqual(host.get_image(key).size, (128, 32))

    def test_pinned_seed_gives_identical_pixels(self) -> None:
        keys = ("enemy_ghost_wisp", "enemy_slime_elemental_idle_down_sheet", "wall_ice", "effect_heal")
        images = []
        for _ in range(2):
            host = PillowTextureHost()
            engine = AssetEngine(host, seed=3)
            images.append([host.get_image(engine.get_or_create(key)).tobytes() for key in keys])
        self.assertEqual(images[0], images[1])

    def test_emergency_asset_is_magenta(self) -> None:
        host = PillowTextureHost()
        engine = AssetEngine(host, drawers={a: failing_drawer for a in Archetype}, seed=3)
        with self.assertLogs("engine", level="WARNING"):
            key = engine.get_or_create("enemy_zombie")
        image = host.get_image(key)
        self.assertEqual(image.size, (config.EMERGENCY_SIZE, config.EMERGENCY_SIZE))
        self.assertEqual(image.getpixel((0, 0)), split_rgb(config.EMERGENCY_COLOR) + (255,))
        self.assertEqual(image.getpixel((31, 31)), split_rgb(config.EMERGENCY_COLOR) + (255,))

    def test_rejects_foreign_surfaces(self) -> None:
        with self.assertRaises(TypeError):
            PillowTextureHost().register_texture("k", RecordingSurface(4, 4), 4, 4)

    def test_to_png(self) -> None:
        host = PillowTextureHost()
        AssetEngine(host, seed=3).get_or_create("tile_grass")
        self.assertTrue(host.to_png("tile_grass").startswith(b"\x89PNG"))
        self.assertIsNone(host.to_png("missing"))

    def test_save_all_sanitizes_names(self) -> None:
        host = PillowTextureHost()
        engine = AssetEngine(host, seed=3)
        engine.get_or_create("tile_grass")
        engine.get_or_create("../??")
        with tempfile.TemporaryDirectory() as td:
            with self.assertLogs("render.pillow_host", level="INFO"):
                count = host.save_all(Path(td))
            self.assertEqual(count, 2)
            self.assertEqual(sorted(p.name for p in Path(td).iterdir()), ["..---.png", "tile_grass.png"])

    def test_save_all_writes_only_requested_keys(self) -> None:
        host = PillowTextureHost()
        engine = AssetEngine(host, seed=3)
        engine.get_or_create("tile_grass")
        engine.get_or_create("item_potion")
        with tempfile.TemporaryDirectory() as td:
            target = Path(td) / "item"
            with self.assertLogs("render.pillow_host", level="INFO"):
                count = host.save_all(target, ["item_potion", "item_missing"])
            self.assertEqual(count, 1)
            self.assertEqual([p.name for p in target.iterdir()], ["item_potion.png"])

    def test_png_filename(self) -> None:
        self.assertEqual(png_filename("enemy_skeleton_walk_left_sheet"), "enemy_skeleton_walk_left_sheet.png")
        self.assertEqual(png_filename("a/b c"), "a-b-c.png")
        self.assertEqual(png_filename(""), "unnamed.png")


if __name__ == "__main__":
    unittest.main()
