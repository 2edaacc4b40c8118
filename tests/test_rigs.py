#!/usr/bin/env python3

from __future__ import annotations

import math
import unittest
from dataclasses import replace

from anim.poses import ACTIONS, synthesize_frame
from engine import palette
from engine.resolver import resolve
from engine.types import DIRECTIONS
from rigs import default_drawers
from tests.fakes import RecordingSurface

DRAWERS = default_drawers()

CREATURE_KEYS = (
    "npc_villager", "player_warrior", "enemy_ghost", "enemy_ghost_wisp", "enemy_ghost_phantom",
    "enemy_ghost_shadow", "enemy_slime", "enemy_slime_king", "enemy_spider", "enemy_wolf",
    "character_placeholder",
)


def draw(key: str, params=None, frame: int = 0) -> RecordingSurface:
    spec = resolve(key, params, seed=3)
    spec = replace(spec, pose=synthesize_frame(spec, frame))
    surface = RecordingSurface(spec.width, spec.height)
    DRAWERS[spec.archetype](surface, spec)
    return surface


def _alphas(surface: RecordingSurface) -> list[float]:
    return [call[2][-1] if call[0] != "line" else call[2][-2] for call in surface.calls]


class FacingTests(unittest.TestCase):
    def test_no_face_when_facing_up(self) -> None:
        for key in CREATURE_KEYS:
            with self.subTest(key=key):
                surface = draw(key, {"direction": "up"})
                self.assertTrue(surface.calls)
                self.assertNotIn("face", surface.layers())

    def test_face_when_facing_down(self) -> None:
        for key in CREATURE_KEYS:
            with self.subTest(key=key):
                self.assertIn("face", draw(key, {"direction": "down"}).layers())

    def test_held_items_hidden_from_behind(self) -> None:
        self.assertIn("held_item", draw("player_warrior", {"direction": "down"}).layers())
        self.assertNotIn("held_item", draw("player_warrior", {"direction": "up"}).layers())

    def test_side_view_draws_single_near_arm(self) -> None:
        layers = draw("npc_villager", {"direction": "left"}).layers()
        self.assertIn("near_arm", layers)
        self.assertNotIn("arms", layers)

    def test_back_view_arms_under_body(self) -> None:
        surface = draw("npc_villager", {"direction": "up"})
        order = [layer for _, layer, _ in surface.calls]
        self.assertLess(order.index("arms"), order.index("body"))
        front = [layer for _, layer, _ in draw("npc_villager", {"direction": "down"}).calls]
        self.assertLess(front.index("body"), front.index("arms"))


class VariantTests(unittest.TestCase):
    def test_every_variant_direction_and_action_draws(self) -> None:
        for archetype, variants in palette.VARIANTS.items():
            for variant in variants:
                for direction in DIRECTIONS:
                    for action in ACTIONS:
                        with self.subTest(archetype=archetype, variant=variant, direction=direction, action=action):
                            surface = draw("npc_villager", {
                                "archetype": archetype, "variant": variant,
                                "direction": direction, "action": action,
                            }, frame=1)
                            self.assertTrue(surface.calls)

    def test_armored_adds_layers_without_redrawing(self) -> None:
        plain = draw("npc_villager")
        armored = draw("npc_villager", {"variant": "armored"})
        self.assertGreater(len(armored.calls_in("body")), len(plain.calls_in("body")))
        self.assertEqual(len(armored.calls_in("head")), len(plain.calls_in("head")))

    def test_unknown_weapon_is_skipped(self) -> None:
        sword = draw("npc_villager", {"features": {"has_weapon": True, "weapon_type": "sword"}})
        flail = draw("npc_villager", {"features": {"has_weapon": True, "weapon_type": "flail"}})
        self.assertTrue(sword.calls_in("held_item"))
        self.assertEqual(flail.calls_in("held_item"), [])

    def test_king_slime_wears_crown(self) -> None:
        self.assertIn("crown", draw("enemy_slime_king").layers())
        self.assertNotIn("crown", draw("enemy_slime").layers())

    def test_alpha_stays_in_range(self) -> None:
        for key in CREATURE_KEYS:
            with self.subTest(key=key):
                for alpha in _alphas(draw(key, {"alpha": 0.5})):
                    self.assertGreaterEqual(alpha, 0.0)
                    self.assertLessEqual(alpha, 1.0)


class StaticDrawerTests(unittest.TestCase):
    def test_tiles_ignore_seed(self) -> None:
        for key in ("tile_grass", "tile_water", "tile_lava", "tile_snow"):
            with self.subTest(key=key):
                a = resolve(key, seed=1)
                b = resolve(key, seed=2)
                sa, sb = RecordingSurface(a.width, a.height), RecordingSurface(b.width, b.height)
                DRAWERS[a.archetype](sa, a)
                DRAWERS[b.archetype](sb, b)
                self.assertEqual(sa.calls, sb.calls)

    def test_small_wall_skips_pattern(self) -> None:
        self.assertIn("pattern", draw("wall_brick").layers())
        self.assertNotIn("pattern", draw("wall_brick", {"width": 6, "height": 6}).layers())

    def test_particles_fade_in_quarter_steps(self) -> None:
        self.assertEqual(max(_alphas(draw("particle_1"))), 1.0)
        self.assertEqual(max(_alphas(draw("particle_4"))), 0.25)

    def test_open_and_closed_chest_differ(self) -> None:
        self.assertNotEqual(draw("item_chest").calls, draw("item_chest_open").calls)

    def test_unknown_item_and_ui_still_draw(self) -> None:
        self.assertTrue(draw("item_widget").calls)
        self.assertTrue(draw("ui_gizmo").calls)


class SurfaceTests(unittest.TestCase):
    def test_translation_offsets_calls(self) -> None:
        surface = RecordingSurface(64, 32)
        with surface.translated(32, 0):
            surface.draw_rect(1, 2, 3, 4, 0xFFFFFF)
        surface.draw_rect(1, 2, 3, 4, 0xFFFFFF)
        self.assertEqual(surface.calls[0][2][:2], (33, 2))
        self.assertEqual(surface.calls[1][2][:2], (1, 2))

    def test_degenerate_calls_are_skipped(self) -> None:
        surface = RecordingSurface(8, 8)
        surface.draw_rect(0, 0, 0, 5, 0xFFFFFF)
        surface.draw_ellipse(4, 4, 2, 2, 0xFFFFFF, alpha=0.0)
        surface.draw_polygon([(0, 0), (1, 1)], 0xFFFFFF)
        self.assertEqual(surface.calls, [])

    def test_non_finite_geometry_rejected(self) -> None:
        surface = RecordingSurface(8, 8)
        with self.assertRaises(ValueError):
            surface.draw_rect(math.nan, 0, 1, 1, 0xFFFFFF)
        with self.assertRaises(ValueError):
            surface.draw_line(0, 0, math.inf, 1, 0xFFFFFF)

    def test_layers_nest(self) -> None:
        surface = RecordingSurface(8, 8)
        with surface.layer("accessories"):
            with surface.layer("held_item"):
                surface.draw_rect(0, 0, 1, 1, 0)
            surface.draw_rect(0, 0, 1, 1, 0)
        self.assertEqual([c[1] for c in surface.calls], ["held_item", "accessories"])
        self.assertEqual(surface.current_layer, "")

    def test_zero_size_surface_rejected(self) -> None:
        with self.assertRaises(ValueError):
            RecordingSurface(0, 8)


if __name__ == "__main__":
    unittest.main()
