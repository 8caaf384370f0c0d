"""World and local matrices of a joint hierarchy."""

from __future__ import annotations

import math
from typing import Generic, Iterator, Sequence, TypeVar

from .bvh import ChannelType, Joint
from .geometry import EulerOrder, Mat4, Quat, Vec3

J = TypeVar("J", bound=Joint)


class JointMatrices(Generic[J]):
    """Holds world and local matrices for each joint; parents precede children."""

    def __init__(self, joints: Sequence[J]) -> None:
        self.joints: list[J] = list(joints)
        self.world_matrices: list[Mat4] = [Mat4.identity()] * len(self.joints)
        self.local_matrices: list[Mat4] = [Mat4.identity()] * len(self.joints)
        self.reset_joints()

    def _store(self, i: int, joint: J, local: Mat4) -> None:
        self.local_matrices[i] = local
        parent = joint.parent_index
        self.world_matrices[i] = local if parent is None else self.world_matrices[parent] @ local

    def reset_joints(self) -> None:
        """Reset joints to their rest offsets."""
        for i, joint in enumerate(self.joints):
            self._store(i, joint, Mat4.from_rotation_translation(Quat.identity(), joint.offset))

    def apply_frame(self, frame: Sequence[float]) -> None:
        """Apply one frame of motion values to every joint."""
        for i, joint in enumerate(self.joints):
            euler = [0.0, 0.0, 0.0]
            pos = list(joint.offset)
            for channel in joint.channels:
                data = frame[channel.motion_index]
                kind = channel.channel_type
                if kind is ChannelType.ROTATION_X:
                    euler[0] = math.radians(data)
                elif kind is ChannelType.ROTATION_Y:
                    euler[1] = math.radians(data)
                elif kind is ChannelType.ROTATION_Z:
                    euler[2] = math.radians(data)
                elif kind is ChannelType.POSITION_X:
                    pos[0] = data
                elif kind is ChannelType.POSITION_Y:
                    pos[1] = data
                else:
                    pos[2] = data
            rotation = Quat.from_euler(EulerOrder.XYZ, *euler)
            self._store(i, joint, Mat4.from_rotation_translation(rotation, Vec3(*pos)))

    def root_joint_matrix(self) -> Mat4:
        return self.world_matrices[0]

    def world_local_matrices(self) -> Iterator[tuple[Mat4, Mat4]]:
        return zip(self.world_matrices, self.local_matrices)