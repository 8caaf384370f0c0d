"""Poses and chunked storage of poses."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterator, Sequence

from .bvh import Bvh, ChannelType
from .chunk import ChunkOffsets, Chunked
from .geometry import EulerOrder, Mat4, Quat, Vec3
from .joint_info import JointInfo

_ROTATIONS = {ChannelType.ROTATION_X: 0, ChannelType.ROTATION_Y: 1, ChannelType.ROTATION_Z: 2}
_POSITIONS = {ChannelType.POSITION_X: 0, ChannelType.POSITION_Y: 1, ChannelType.POSITION_Z: 2}


@dataclass
class Pose:
    """Flat list of motion values for one frame."""

    values: list[float] = field(default_factory=list)

    def __getitem__(self, index: int) -> float:
        return self.values[index]

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[float]:
        return iter(self.values)

    @staticmethod
    def from_frame(frame: Sequence[float]) -> Pose:
        return Pose(list(frame))

    def _pos_euler(self, joint_info: JointInfo) -> tuple[Vec3, Vec3]:
        pos = [0.0, 0.0, 0.0]
        euler = [0.0, 0.0, 0.0]
        for ref in joint_info.pose_refs:
            value = self[ref.motion_index]
            kind = ref.channel_type
            if kind in _ROTATIONS:
                euler[_ROTATIONS[kind]] = math.radians(value)
            else:
                pos[_POSITIONS[kind]] = value
        return Vec3(*pos), Vec3(*euler)

    def get_pos_rot(self, joint_info: JointInfo) -> tuple[Vec3, Quat]:
        pos, e = self._pos_euler(joint_info)
        return pos, Quat.from_euler(EulerOrder.XYZ, e.x, e.y, e.z)

    def get_pos_euler(self, joint_info: JointInfo) -> tuple[Vec3, Vec3]:
        """Position and Euler angles in radians."""
        return self._pos_euler(joint_info)

    def get_pos(self, joint_info: JointInfo) -> Vec3:
        return self._pos_euler(joint_info)[0]

    def get_rot(self, joint_info: JointInfo) -> Quat:
        e = self._pos_euler(joint_info)[1]
        return Quat.from_euler(EulerOrder.XYZ, e.x, e.y, e.z)

    def get_euler(self, joint_info: JointInfo) -> Vec3:
        return self._pos_euler(joint_info)[1]

    def get_matrix(self, joint_info: JointInfo) -> Mat4:
        pos, rot = self.get_pos_rot(joint_info)
        return Mat4.from_rotation_translation(rot, pos)

    def lerp(self, other: Pose, factor: float) -> Pose:
        if len(other) < len(self):
            raise IndexError("pose to interpolate towards has fewer values")
        return Pose([a + (b - a) * factor for a, b in zip(self.values, other.values)])


class PoseData(Chunked[Pose]):
    """Chunks of poses sampled at a fixed interval."""

    def __init__(self, interval_time: float) -> None:
        if not interval_time > 0.0:
            raise ValueError("Interval time between poses must be greater than 0!")
        self.interval_time = interval_time
        self.poses: list[Pose] = []
        self._offsets = ChunkOffsets()
        self.loopables: list[bool] = []

    @property
    def offsets(self) -> ChunkOffsets:
        return self._offsets

    @property
    def items(self) -> Sequence[Pose]:
        return self.poses

    def append_frames(self, bvh: Bvh) -> None:
        self._offsets.push_chunk(len(bvh.frames))
        self.poses.extend(Pose.from_frame(f) for f in bvh.frames)
        self.loopables.append(bvh.loopable)

    def is_chunk_loopable(self, chunk_index: int) -> bool | None:
        if 0 <= chunk_index < len(self.loopables):
            return self.loopables[chunk_index]
        return None

    def time_from_chunk_offset(self, chunk_offset: int) -> float:
        return chunk_offset * self.interval_time

    def chunk_offset_from_time(self, time: float) -> int:
        """Floored offset inside a chunk for a time value."""
        return max(0, int(time / self.interval_time))

    def to_dict(self) -> dict[str, Any]:
        return {
            "poses": [list(p.values) for p in self.poses],
            "offsets": list(self._offsets.values),
            "loopables": list(self.loopables),
            "interval_time": self.interval_time,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> PoseData:
        result = PoseData(float(data["interval_time"]))
        result.poses = [Pose([float(v) for v in p]) for p in data["poses"]]
        result._offsets = ChunkOffsets(int(v) for v in data["offsets"])
        result.loopables = [bool(v) for v in data["loopables"]]
        return result