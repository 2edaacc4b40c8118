from anim.overlays import draw_action_overlay
from anim.poses import (
    ACTION_FRAMES, ACTIONS, Action, Pose, REST_POSE,
    frame_count_for, synthesize_frame, synthesize_sheet,
)

__all__ = [
    "ACTION_FRAMES", "ACTIONS", "Action", "Pose", "REST_POSE",
    "draw_action_overlay", "frame_count_for", "synthesize_frame", "synthesize_sheet",
]
