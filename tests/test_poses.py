#!/usr/bin/env python3

from __future__ import annotations

import unittest

from anim.poses import ACTION_FRAMES, DEFAULT_FRAME_COUNT, frame_count_for, synthesize_frame, synthesize_sheet
from engine.resolver import resolve


class PoseTests(unittest.TestCase):
    def test_frame_counts_per_action(self) -> None:
        self.assertEqual(ACTION_FRAMES, {"idle": 4, "walk": 4, "attack": 3, "hurt": 2, "death": 5, "cast": 4})
        self.assertEqual(frame_count_for("dance"), DEFAULT_FRAME_COUNT)
        self.assertEqual(frame_count_for(None), DEFAULT_FRAME_COUNT)

    def test_sheet_length_and_progress(self) -> None:
        for action, count in ACTION_FRAMES.items():
            with self.subTest(action=action):
                spec = resolve(f"enemy_skeleton_{action}_down_sheet")
                poses = synthesize_sheet(spec)
                self.assertEqual(len(poses), count)
                self.assertEqual(poses[0].progress, 0.0)
                self.assertEqual(poses[-1].progress, 1.0)
                self.assertEqual([p.frame_index for p in poses], list(range(count)))

    def test_death_ends_fully_fallen(self) -> None:
        spec = resolve("enemy_skeleton_death_down_sheet")
        last = synthesize_sheet(spec)[-1]
        self.assertAlmostEqual(last.body_offset_y, 8.0)
        self.assertAlmostEqual(last.body_scale, 0.7)
        self.assertGreater(last.fade, 0.0)

    def test_single_frame_progress_is_complete(self) -> None:
        spec = resolve("enemy_skeleton_death_down")
        pose = synthesize_frame(spec, 0, 1)
        self.assertEqual(pose.progress, 1.0)

    def test_frame_index_is_clamped(self) -> None:
        spec = resolve("player_warrior_walk_down")
        self.assertEqual(synthesize_frame(spec, 99).frame_index, 3)
        self.assertEqual(synthesize_frame(spec, -3).frame_index, 0)

    def test_hurt_tints_red_and_fades(self) -> None:
        spec = resolve("npc_guard_hurt_left_sheet")
        first, second = synthesize_sheet(spec)
        self.assertEqual(first.tint, 0xFF0000)
        self.assertGreater(first.tint_alpha, second.tint_alpha)
        # recoil is away from the facing
        self.assertGreater(first.body_offset_x, 0)

    def test_walk_swings_legs_in_opposition(self) -> None:
        spec = resolve("player_rogue_walk_right_sheet")
        pose = synthesize_sheet(spec)[1]
        self.assertAlmostEqual(pose.left_leg_angle, -pose.right_leg_angle)
        self.assertNotEqual(pose.left_leg_angle, 0.0)

    def test_unknown_action_holds_rest(self) -> None:
        spec = resolve("npc_villager", {"action": "dance"})
        pose = synthesize_frame(spec, 2)
        self.assertEqual(pose.action, "dance")
        self.assertEqual(pose.left_arm_angle, 0.0)

    def test_synthesis_is_deterministic(self) -> None:
        spec = resolve("enemy_ghost_cast_up_sheet")
        self.assertEqual(synthesize_sheet(spec), synthesize_sheet(spec))

    def test_empty_sheet_rejected(self) -> None:
        spec = resolve("enemy_skeleton_walk_down_sheet")
        with self.assertRaises(ValueError):
            synthesize_sheet(spec, 0)


if __name__ == "__main__":
    unittest.main()
