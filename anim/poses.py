"""Pose synthesis: per-frame body and limb transforms for each action.

All values are deterministic trig functions of the frame index. Angles are
radians of rotation away from the rest position, positive meaning outward
(front/back views) or forward (side views). The synthesizer never draws.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Action(str, Enum):
    IDLE = "idle"
    WALK = "walk"
    ATTACK = "attack"
    HURT = "hurt"
    DEATH = "death"
    CAST = "cast"


ACTION_FRAMES: dict[str, int] = {
    Action.IDLE.value: 4,
    Action.WALK.value: 4,
    Action.ATTACK.value: 3,
    Action.HURT.value: 2,
    Action.DEATH.value: 5,
    Action.CAST.value: 4,
}
DEFAULT_FRAME_COUNT = 4

ACTIONS: tuple[str, ...] = tuple(ACTION_FRAMES)


def frame_count_for(action: Optional[str]) -> int:
    return ACTION_FRAMES.get(action or "", DEFAULT_FRAME_COUNT)


@dataclass(frozen=True)
class Pose:
    action: str
    frame_index: int
    frame_count: int
    progress: float
    body_offset_x: float = 0.0
    body_offset_y: float = 0.0
    body_scale: float = 1.0
    head_offset_y: float = 0.0
    # swing amplitude; arm and leg angles already include it
    limb_scale: float = 1.0
    left_arm_angle: float = 0.0
    right_arm_angle: float = 0.0
    left_leg_angle: float = 0.0
    right_leg_angle: float = 0.0
    # >0 flattens, <0 stretches (slimes and other soft bodies)
    squash: float = 0.0
    tint: Optional[int] = None
    tint_alpha: float = 0.0
    fade: float = 0.0


REST_POSE = Pose(action=Action.IDLE.value, frame_index=0, frame_count=1, progress=0.0)


def _progress(index: int, count: int) -> float:
    if count <= 1:
        return 1.0
    return index / (count - 1)


def synthesize_frame(spec, frame_index: int, frame_count: Optional[int] = None) -> Pose:
    """Compute the pose of one frame of `spec.action` facing `spec.direction`."""
    action = spec.action
    count = frame_count or frame_count_for(action)
    f = max(0, min(int(frame_index), count - 1))
    progress = _progress(f, count)
    flip = -1 if spec.direction == "left" else 1
    walk_cycle = math.sin(f * math.pi / 2)

    if action == Action.IDLE.value:
        breathe = math.sin(f * 0.7)
        limbs = 0.3
        return Pose(
            action, f, count, progress,
            body_offset_y=breathe * 1.5,
            limb_scale=limbs,
            left_arm_angle=breathe * 0.1 * limbs,
            right_arm_angle=breathe * 0.1 * limbs,
            squash=walk_cycle * 0.1,
        )

    if action == Action.WALK.value:
        limbs = 1.0
        return Pose(
            action, f, count, progress,
            body_offset_y=abs(walk_cycle) * 2,
            limb_scale=limbs,
            left_arm_angle=walk_cycle * 0.5 * limbs,
            right_arm_angle=-walk_cycle * 0.5 * limbs,
            left_leg_angle=-walk_cycle * 0.4 * limbs,
            right_leg_angle=walk_cycle * 0.4 * limbs,
            squash=abs(walk_cycle) * 0.15,
        )

    if action == Action.ATTACK.value:
        step = f % 3
        limbs = 1.5
        # wind up overhead, chop down and forward
        swing = math.pi * 0.9 - progress * math.pi * 0.8
        return Pose(
            action, f, count, progress,
            body_offset_x=flip * step * 2,
            body_scale=0.9 + step * 0.1,
            limb_scale=limbs,
            left_arm_angle=0.2 * limbs,
            right_arm_angle=swing,
            left_leg_angle=-0.15,
            right_leg_angle=0.25,
            squash=-0.1 + 0.2 * progress,
        )

    if action == Action.HURT.value:
        return Pose(
            action, f, count, progress,
            body_offset_x=-flip * 3,
            body_offset_y=2,
            body_scale=0.8,
            left_arm_angle=0.6,
            right_arm_angle=0.6,
            left_leg_angle=0.1,
            right_leg_angle=0.1,
            squash=0.15,
            tint=0xFF0000,
            tint_alpha=max(0.0, 0.7 - f * 0.3),
        )

    if action == Action.DEATH.value:
        return Pose(
            action, f, count, progress,
            body_offset_y=8 * progress,
            body_scale=1 - 0.3 * progress,
            head_offset_y=2 * progress,
            limb_scale=1 - 0.5 * progress,
            left_arm_angle=1.2 * progress,
            right_arm_angle=1.2 * progress,
            left_leg_angle=0.6 * progress,
            right_leg_angle=0.6 * progress,
            squash=0.5 * progress,
            fade=0.6 * progress,
        )

    if action == Action.CAST.value:
        limbs = 0.7 + math.sin(f * math.pi / 2) * 0.3
        raised = math.pi * 0.75 * limbs
        return Pose(
            action, f, count, progress,
            body_offset_y=-math.sin(f * 0.5) * 2,
            limb_scale=limbs,
            left_arm_angle=raised,
            right_arm_angle=raised,
            squash=-math.sin(f * 0.5) * 0.1,
        )

    # unknown actions hold the rest pose for their frames
    return Pose(action, f, count, progress)


def synthesize_sheet(spec, frame_count: Optional[int] = None) -> list[Pose]:
    count = frame_count if frame_count is not None else frame_count_for(spec.action)
    if count < 1:
        raise ValueError(f"frame count must be >= 1, got {count}")
    return [synthesize_frame(spec, i, count) for i in range(count)]
