"""Playback of poses from motion data, blending between two trajectory poses."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Iterator, Optional, Sequence

from .geometry import Mat4, Quat, Vec2, Vec3
from .joint_info import JointInfo
from .pose_data import Pose, PoseData
from .settings import BVH_SCALE_RATIO, LARGE_EPSILON

log = logging.getLogger(__name__)

_FORWARD = Vec3(0.0, 0.0, 1.0)


class MotionPlayerSet(Enum):
    """Stages of motion playback, in execution order."""

    JUMP_TO_POSE = auto()
    APPLY_POSE = auto()
    APPLY_JOINT_TRANSFORM = auto()
    APPLY_ROOT_TRANSFORM = auto()
    INTERPOLATE = auto()


@dataclass(frozen=True)
class PlanarTransform:
    """Position on the ground plane and heading angle around the Y axis."""

    translation: Vec2 = Vec2()
    angle: float = 0.0


@dataclass
class MotionPose:
    """A point in time inside one chunk of pose data."""

    chunk_index: int
    time: float

    def get_pose(self, pose_data: PoseData) -> Optional[Pose]:
        """Interpolated pose at this time, or None if the chunk does not exist."""
        interval = pose_data.interval_time
        poses = pose_data.get_chunk(self.chunk_index)
        if poses is None:
            return None

        # Two poses make one segment.
        duration = interval * max(0, len(poses) - 1)
        time = min(self.time, duration - LARGE_EPSILON)

        start = max(0, int(time / interval))
        factor = (time - start * interval) / interval
        return poses[start].lerp(poses[start + 1], factor)


@dataclass
class TrajectoryPose:
    """A pose being played, anchored where its trajectory started."""

    motion_pose: MotionPose
    traj_root_matrix: Mat4
    entity_root_transform2d: PlanarTransform
    pose: Pose
    elapsed_time: float = 0.0

    def try_apply_pose(self, pose_data: PoseData) -> bool:
        """Resample the pose at the current motion time; False if impossible."""
        pose = self.motion_pose.get_pose(pose_data)
        if pose is None:
            return False
        self.pose = pose
        return True

    def update_time(self, delta_secs: float) -> None:
        self.elapsed_time += delta_secs
        self.motion_pose.time += delta_secs


@dataclass
class TrajectoryPosePair:
    """Two trajectory pose slots that playback blends between."""

    entries: list[Optional[TrajectoryPose]] = field(default_factory=lambda: [None, None])

    def __getitem__(self, index: int) -> Optional[TrajectoryPose]:
        return self.entries[index]

    def __setitem__(self, index: int, value: Optional[TrajectoryPose]) -> None:
        self.entries[index] = value

    def __iter__(self) -> Iterator[Optional[TrajectoryPose]]:
        return iter(self.entries)

    def get_interpolated_pose(self, factor: float) -> Optional[Pose]:
        pose0 = self.entries[0].pose if self.entries[0] is not None else None
        pose1 = self.entries[1].pose if self.entries[1] is not None else None

        if pose0 is not None and (pose1 is None or factor == 0.0):
            return Pose(list(pose0.values))
        if pose1 is not None and (pose0 is None or factor == 1.0):
            return Pose(list(pose1.values))
        if pose0 is not None and pose1 is not None:
            return pose0.lerp(pose1, factor)
        return None


@dataclass
class MotionPlayer:
    """Blend state between the two slots of a TrajectoryPosePair."""

    interp_factor: float = 0.0
    target_pair_index: int = 0

    def switch_target_index(self) -> None:
        self.target_pair_index = (self.target_pair_index + 1) % 2

    def update_interp_factor(self, delta_factor: float) -> None:
        """Move the blend factor towards the target slot, clamped to [0, 1]."""
        if self.target_pair_index == 0:
            self.interp_factor = max(0.0, self.interp_factor - delta_factor)
        elif self.target_pair_index == 1:
            self.interp_factor = min(1.0, self.interp_factor + delta_factor)
        else:
            log.error(
                "Target frame index of MotionPlayer is neither 0 nor 1! It's %s...",
                self.target_pair_index,
            )


@dataclass(frozen=True)
class MotionPlayerConfig:
    """Seconds the blend factor takes to travel between 0 and 1."""

    interp_duration: float = 0.3333

    def __post_init__(self) -> None:
        if not self.interp_duration > 0.0:
            raise ValueError("Interpolation duration cannot be 0 or below!")


def _heading(v: Vec3) -> float:
    flat = v.xz().normalize()
    return math.atan2(flat.x, flat.y)


def _y_angle(q: Quat) -> float:
    return q.to_scaled_axis().y


@dataclass(frozen=True)
class RootConfig:
    """World placement of the entity and local height and tilt of the root joint."""

    world_transform2d: PlanarTransform
    local_y_pos: float
    local_xz_rot: Quat

    def lerp(self, other: RootConfig, t: float) -> RootConfig:
        a, b = self.world_transform2d, other.world_transform2d
        angle = _y_angle(Quat.from_rotation_y(a.angle).slerp(Quat.from_rotation_y(b.angle), t))
        return RootConfig(
            world_transform2d=PlanarTransform(a.translation.lerp(b.translation, t), angle),
            local_y_pos=self.local_y_pos + (other.local_y_pos - self.local_y_pos) * t,
            local_xz_rot=self.local_xz_rot.slerp(other.local_xz_rot, t),
        )


def _root_config(traj_pose: TrajectoryPose, root_joint: JointInfo) -> RootConfig:
    root = traj_pose.entity_root_transform2d
    traj_inv = traj_pose.traj_root_matrix.inverse()

    pose_matrix = traj_pose.pose.get_matrix(root_joint)
    _, pose_rot, pose_pos = pose_matrix.to_scale_rotation_translation()

    # Offset from the trajectory root to the current pose.
    _, offset_rot, offset_pos = (traj_inv @ pose_matrix).to_scale_rotation_translation()
    offset_pos = offset_pos * BVH_SCALE_RATIO

    pose_forward_angle = _heading(pose_matrix.transform_vector3(_FORWARD))
    offset_forward_angle = _heading(offset_rot.mul_vec3(_FORWARD))

    offset_pos = Quat.from_rotation_y(root.angle).mul_vec3(offset_pos)
    translation = root.translation + offset_pos.xz()
    angle = _y_angle(Quat.from_rotation_y(root.angle + offset_forward_angle))

    local_xz_rot = (Quat.from_rotation_y(pose_forward_angle).inverse() * pose_rot).normalize()
    return RootConfig(PlanarTransform(translation, angle), pose_pos.y, local_xz_rot)


def jump_to_pose(
    player: MotionPlayer,
    pair: TrajectoryPosePair,
    motion_pose: MotionPose,
    pose_data: PoseData,
    root_joint: JointInfo,
    transform: PlanarTransform,
) -> bool:
    """Start playing motion_pose in the other slot; False if its chunk is invalid."""
    player.switch_target_index()
    pose = motion_pose.get_pose(pose_data)
    if pose is None:
        return False
    pair[player.target_pair_index] = TrajectoryPose(
        motion_pose=replace(motion_pose),
        traj_root_matrix=pose.get_matrix(root_joint),
        entity_root_transform2d=transform,
        pose=pose,
        elapsed_time=0.0,
    )
    return True


def loop_trajectory_pose_time(
    pair: TrajectoryPosePair,
    player: MotionPlayer,
    transform: PlanarTransform,
    pose_data: PoseData,
    root_joint: JointInfo,
) -> None:
    """Wrap the target pose's time in a loopable chunk, re-anchoring its trajectory."""
    traj_pose = pair[player.target_pair_index]
    if traj_pose is None:
        return

    chunk_index = traj_pose.motion_pose.chunk_index
    if pose_data.is_chunk_loopable(chunk_index) is not True:
        return

    poses = pose_data.chunk(chunk_index)
    duration = pose_data.interval_time * max(0, len(poses) - 1)
    if traj_pose.motion_pose.time < duration:
        return

    traj_pose.motion_pose.time = math.fmod(traj_pose.motion_pose.time, duration)
    pose = traj_pose.motion_pose.get_pose(pose_data)
    if pose is not None:
        traj_pose.traj_root_matrix = pose.get_matrix(root_joint)
        traj_pose.entity_root_transform2d = transform
        traj_pose.pose = pose


def compute_root_config(
    pair: TrajectoryPosePair, player: MotionPlayer, root_joint: JointInfo
) -> Optional[RootConfig]:
    """Blended root placement for the pair, or None when both slots are empty."""
    configs = [_root_config(tp, root_joint) if tp is not None else None for tp in pair]
    first, second = configs
    factor = player.interp_factor

    if first is not None and (second is None or factor == 0.0):
        return first
    if second is not None and (first is None or factor == 1.0):
        return second
    if first is not None and second is not None:
        return first.lerp(second, factor)
    return None


def pose_to_joint_transforms(
    pair: TrajectoryPosePair, player: MotionPlayer, joints: Sequence[JointInfo]
) -> dict[str, tuple[Vec3, Quat]]:
    """Local translation and rotation of every joint except the root, by name."""
    pose = pair.get_interpolated_pose(player.interp_factor)
    if pose is None:
        return {}
    result: dict[str, tuple[Vec3, Quat]] = {}
    for joint in joints[1:]:
        pos, rot = pose.get_pos_rot(joint)
        result[joint.name] = (joint.offset + pos, rot)
    return result