"""Serializable joint description with references into pose data."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .bvh import Channel, ChannelType, JointData
from .geometry import Vec3


class PoseDataType(Enum):
    """Degrees of freedom along which a joint may be manipulated."""

    ROTATION_X = "RotationX"
    ROTATION_Y = "RotationY"
    ROTATION_Z = "RotationZ"
    POSITION_X = "PositionX"
    POSITION_Y = "PositionY"
    POSITION_Z = "PositionZ"

    @classmethod
    def from_channel_type(cls, channel_type: ChannelType) -> PoseDataType:
        return cls[channel_type.name]

    @property
    def channel_type(self) -> ChannelType:
        return ChannelType[self.name]


@dataclass(frozen=True)
class PoseRef:
    """Index of a value inside a pose and the kind of value it is."""

    pose_index: int
    data_type: PoseDataType

    @staticmethod
    def from_channel(channel: Channel) -> PoseRef:
        return PoseRef(channel.motion_index, PoseDataType.from_channel_type(channel.channel_type))

    @property
    def channel_type(self) -> ChannelType:
        return self.data_type.channel_type

    @property
    def motion_index(self) -> int:
        return self.pose_index


@dataclass(frozen=True)
class JointInfo:
    """Joint with the minimal data needed to sample poses."""

    name: str
    offset: Vec3
    parent_index: Optional[int]
    pose_refs: tuple[PoseRef, ...]

    @property
    def channels(self) -> tuple[PoseRef, ...]:
        return self.pose_refs

    @staticmethod
    def from_joint_data(joint_data: JointData) -> JointInfo:
        return JointInfo(
            name=joint_data.name,
            offset=Vec3(*joint_data.offset),
            parent_index=joint_data.parent_index,
            pose_refs=tuple(PoseRef.from_channel(c) for c in joint_data.channels),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "offset": list(self.offset),
            "parent_index": self.parent_index,
            "pose_refs": [
                {"pose_index": r.pose_index, "data_type": r.data_type.value}
                for r in self.pose_refs
            ],
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> JointInfo:
        return JointInfo(
            name=str(data["name"]),
            offset=Vec3(*(float(v) for v in data["offset"])),
            parent_index=data["parent_index"],
            pose_refs=tuple(
                PoseRef(int(r["pose_index"]), PoseDataType(r["data_type"]))
                for r in data["pose_refs"]
            ),
        )