"""Sampled trajectory arrows and armature segments along a whole BVH clip."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .bvh import Bvh, ChannelType
from .draw_axes import Color, ColorPalette
from .geometry import Mat4, Quat, Vec2, Vec3
from .joint_matrices import JointMatrices
from .pose_data import Pose
from .settings import BVH_SCALE_RATIO


@dataclass(frozen=True)
class TrailArrow:
    """Forward arrow of the root's ground velocity at one sample."""

    matrix: Mat4
    size: float
    color: Color


@dataclass
class BvhTrail:
    """Trajectory arrows, per-sample armature segments and the mean velocity."""

    arrows: list[TrailArrow] = field(default_factory=list)
    armatures: list[list[tuple[Vec3, Vec3]]] = field(default_factory=list)
    average_velocity: Vec2 = Vec2()


def armature_segments(joint_matrices: JointMatrices) -> list[tuple[Vec3, Vec3]]:
    """Scaled (parent, child) world positions for every joint with a parent."""
    translations = [m.to_scale_rotation_translation()[2] for m in joint_matrices.world_matrices]
    return [
        (translations[joint.parent_index] * BVH_SCALE_RATIO, translations[i] * BVH_SCALE_RATIO)
        for i, joint in enumerate(joint_matrices.joints)
        if joint.parent_index is not None
    ]


def compute_bvh_trail(
    bvh: Bvh, interval: float, run_speed: float, palette: ColorPalette
) -> BvhTrail:
    """Sample the clip every ``interval`` seconds from its start."""
    if not interval > 0.0:
        raise ValueError("Trail interval must be greater than 0!")
    root_joint = bvh.root_joint()
    if root_joint is None:
        raise ValueError("A root joint should be present in the Bvh.")

    joint_matrices = JointMatrices(bvh.joints)
    frame_time = bvh.frame_time
    total_duration = frame_time * bvh.num_frames()
    trail = BvhTrail()
    cumulative = Vec2()
    count = 0

    time = 0.0
    while time < total_duration:
        index = int(time / frame_time)
        if index + 1 >= len(bvh.frames):
            break
        curr_frame = bvh.frames[index]
        next_frame = bvh.frames[index + 1]

        factor = (time - frame_time * index) / frame_time
        pose = Pose.from_frame(curr_frame).lerp(Pose.from_frame(next_frame), factor)
        joint_matrices.apply_frame(pose)

        curr = [0.0, 0.0]
        nxt = [0.0, 0.0]
        for channel in root_joint.channels:
            curr_val = curr_frame.get(channel)
            next_val = next_frame.get(channel)
            if curr_val is None or next_val is None:
                continue
            if channel.channel_type is ChannelType.POSITION_X:
                curr[0], nxt[0] = curr_val, next_val
            elif channel.channel_type is ChannelType.POSITION_Z:
                curr[1], nxt[1] = curr_val, next_val

        velocity = (Vec2(*nxt) * BVH_SCALE_RATIO - Vec2(*curr) * BVH_SCALE_RATIO) / frame_time
        cumulative = cumulative + velocity
        count += 1

        angle = math.atan2(velocity.x, velocity.y)
        magnitude = velocity.length()
        root_translation = joint_matrices.root_joint_matrix().to_scale_rotation_translation()[2]
        translation = root_translation * BVH_SCALE_RATIO
        translation = Vec3(translation.x, 0.0, translation.z)

        trail.arrows.append(
            TrailArrow(
                Mat4.from_rotation_translation(Quat.from_rotation_y(angle), translation),
                magnitude * 0.1,
                palette.purple.mix(palette.orange, magnitude / run_speed),
            )
        )
        trail.armatures.append(armature_segments(joint_matrices))

        time += interval

    trail.average_velocity = cumulative / count if count > 0 else Vec2()
    return trail