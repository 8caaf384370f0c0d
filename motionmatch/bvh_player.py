"""Time-based playback of a BVH clip onto joint transforms."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .bvh import Bvh
from .geometry import EulerOrder, Quat, Vec3


def _fmod(value: float, divisor: float) -> float:
    """Float remainder with the dividend's sign; NaN when dividing by zero."""
    if divisor == 0.0 or math.isnan(divisor) or math.isnan(value):
        return math.nan
    return math.fmod(value, divisor)


def _to_index(value: float) -> int:
    """Saturating float to index conversion: NaN and negatives become 0."""
    if math.isnan(value) or value <= 0.0:
        return 0
    return int(value)


@dataclass
class BvhPlayer:
    """Playback clock of the selected clip."""

    is_playing: bool = False
    current_time: float = 0.0
    duration: float = 0.0

    def advance(self, delta_secs: float) -> float:
        """Advance the clock while playing, wrapping at the duration."""
        if self.is_playing:
            self.current_time = _fmod(self.current_time + delta_secs, self.duration)
        return self.current_time


def get_pose(local_time: float, bvh: Bvh) -> tuple[int, float]:
    """Frame index and interpolation factor towards the next frame at a time."""
    frame_time = bvh.frame_time
    # Two frames make one segment.
    duration = frame_time * max(0, bvh.num_frames() - 1)
    time = _fmod(local_time, duration)

    frame_index = _to_index(time / frame_time)
    interp_factor = _fmod(time, frame_time) / frame_time
    return frame_index, interp_factor


def quat_to_euler_degrees(rotation: Quat) -> Vec3:
    """XYZ Euler angles of a rotation, in degrees."""
    a, b, c = rotation.to_euler(EulerOrder.XYZ)
    return Vec3(math.degrees(a), math.degrees(b), math.degrees(c))


def sample_joint_transforms(bvh: Bvh, local_time: float) -> dict[str, tuple[Vec3, Quat]]:
    """Local translation and rotation of every joint, by name, at a time."""
    if not bvh.frames:
        return {}
    current_index, factor = get_pose(local_time, bvh)
    next_index = min(max(current_index + 1, 0), len(bvh.frames) - 1)
    if current_index >= len(bvh.frames):
        return {}
    current_frame = bvh.frames[current_index]
    next_frame = bvh.frames[next_index]

    result: dict[str, tuple[Vec3, Quat]] = {}
    for joint in bvh.joints:
        if len(joint.channels) == 3:
            curr_pos = next_pos = joint.offset
            curr_rot = current_frame.get_rot(joint)
            next_rot = next_frame.get_rot(joint)
        else:
            # Position channels replace the rest offset.
            curr_pos, curr_rot = current_frame.get_pos_rot(joint)
            next_pos, next_rot = next_frame.get_pos_rot(joint)
        result[joint.name] = (curr_pos.lerp(next_pos, factor), curr_rot.slerp(next_rot, factor))
    return result