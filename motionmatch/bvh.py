"""In-memory BVH motion data and frame sampling helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional, Protocol, Sequence

from .geometry import EulerOrder, Quat, Vec3


class ChannelType(Enum):
    ROTATION_X = "Xrotation"
    ROTATION_Y = "Yrotation"
    ROTATION_Z = "Zrotation"
    POSITION_X = "Xposition"
    POSITION_Y = "Yposition"
    POSITION_Z = "Zposition"


class JointChannel(Protocol):
    channel_type: ChannelType
    motion_index: int


class Joint(Protocol):
    """Anything that describes a joint's channels, offset and parent."""

    offset: Vec3
    parent_index: Optional[int]

    @property
    def channels(self) -> Iterable[JointChannel]: ...


@dataclass(frozen=True)
class Channel:
    channel_type: ChannelType
    motion_index: int


@dataclass(frozen=True)
class JointData:
    name: str
    offset: Vec3 = Vec3()
    channels: tuple[Channel, ...] = ()
    parent_index: Optional[int] = None
    index: int = 0


def _decompose(values: Iterable[tuple[ChannelType, float]]) -> tuple[Vec3, Vec3]:
    pos = [0.0, 0.0, 0.0]
    euler = [0.0, 0.0, 0.0]
    slots = {
        ChannelType.ROTATION_X: (euler, 0), ChannelType.ROTATION_Y: (euler, 1),
        ChannelType.ROTATION_Z: (euler, 2), ChannelType.POSITION_X: (pos, 0),
        ChannelType.POSITION_Y: (pos, 1), ChannelType.POSITION_Z: (pos, 2),
    }
    for kind, value in values:
        target, i = slots[kind]
        target[i] = math.radians(value) if target is euler else value
    return Vec3(*pos), Vec3(*euler)


@dataclass(frozen=True)
class Frame(Sequence[float]):
    """One frame of motion values, indexed by channel motion index."""

    values: tuple[float, ...]

    def __getitem__(self, index):  # type: ignore[override]
        return self.values[index]

    def __len__(self) -> int:
        return len(self.values)

    def get(self, channel: JointChannel) -> Optional[float]:
        i = channel.motion_index
        return self.values[i] if 0 <= i < len(self.values) else None

    def _channel_values(self, joint: Joint) -> Iterator[tuple[ChannelType, float]]:
        for channel in joint.channels:
            value = self.get(channel)
            if value is not None:
                yield channel.channel_type, value

    def get_pos_rot(self, joint: Joint) -> tuple[Vec3, Quat]:
        pos, e = _decompose(self._channel_values(joint))
        return pos, Quat.from_euler(EulerOrder.XYZ, e.x, e.y, e.z)

    def get_pos(self, joint: Joint) -> Vec3:
        return _decompose(self._channel_values(joint))[0]

    def get_rot(self, joint: Joint) -> Quat:
        e = _decompose(self._channel_values(joint))[1]
        return Quat.from_euler(EulerOrder.XYZ, e.x, e.y, e.z)


@dataclass(frozen=True)
class BvhAssetSettings:
    loopable: bool = False


@dataclass
class Bvh:
    """A skeleton with its motion frames."""

    joints: list[JointData]
    frames: list[Frame]
    frame_time: float
    loopable: bool = False
    name: str = ""
    extra: dict = field(default_factory=dict)

    def root_joint(self) -> Optional[JointData]:
        return self.joints[0] if self.joints else None

    def num_frames(self) -> int:
        return len(self.frames)