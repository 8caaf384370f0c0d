"""Motion asset built from BVH clips: joints, trajectories and poses."""

from __future__ import annotations

import json
import logging
import math
import os
from typing import Any, Iterable, Optional

from .bvh import Bvh
from .geometry import Mat4
from .joint_info import JointInfo
from .pose_data import PoseData
from .settings import LARGE_EPSILON
from .trajectory_data import TrajectoryData, TrajectoryDataConfig, TrajectoryDataPoint

log = logging.getLogger(__name__)


class MotionAssetLoadError(Exception):
    """Raised when a motion asset file cannot be read or decoded."""


class MotionAsset:
    """Joint info plus chunks of trajectory and pose data."""

    def __init__(
        self,
        joints: list[JointInfo],
        trajectory_data: TrajectoryData,
        pose_data: PoseData,
        animation_file: Optional[list[str]] = None,
    ) -> None:
        self.joints = joints
        self.trajectory_data = trajectory_data
        self.pose_data = pose_data
        self.animation_file: list[str] = list(animation_file or [])

    @staticmethod
    def from_bvh(bvh: Bvh, config: TrajectoryDataConfig) -> MotionAsset:
        return MotionAsset(
            joints=[JointInfo.from_joint_data(j) for j in bvh.joints],
            trajectory_data=TrajectoryData(config),
            pose_data=PoseData(bvh.frame_time),
        )

    def append_bvhs(self, bvhs: Iterable[Bvh]) -> None:
        traj_config = self.trajectory_data.config
        pose_interval = self.pose_data.interval_time
        trajectory_chunk: list[TrajectoryDataPoint] = []

        for bvh in bvhs:
            name = bvh.name
            log.info("Building %s...", name)
            if len(name) < 4:
                raise ValueError(f"clip name too short to strip its extension: {name!r}")
            formatted_name = name[:-4]

            frame_time = bvh.frame_time
            root_joint = bvh.root_joint()
            if root_joint is None:
                raise ValueError("A root joint should be present in the Bvh.")

            if frame_time != pose_interval:
                log.warning(
                    "Frame time (%s) does not match pose interval (%s). Skipping...",
                    frame_time, pose_interval,
                )
                continue

            # Two frames make one segment.
            bvh_duration = max(0, bvh.num_frames() - 1) * frame_time
            num_points = int(bvh_duration / traj_config.interval_time) + 1

            if not bvh.loopable and num_points < traj_config.num_points:
                log.warning(
                    "Does not meet the minimum required trajectory point length: >=%s. "
                    "Skipping... (Set it to loopable if it's loopable to avoid this warning.)",
                    traj_config.num_points,
                )
                continue
            self.animation_file.append(formatted_name)

            frames = bvh.frames
            first_pos = frames[0].get_pos(root_joint)
            prev_time = 0.0
            prev_pos = first_pos
            prev_world_pos = first_pos

            for p in range(max(num_points, traj_config.num_points)):
                target_time = traj_config.interval_time * p
                if bvh.loopable:
                    target_time = math.fmod(target_time, bvh_duration)
                time = min(target_time, bvh_duration - LARGE_EPSILON)

                start = int(time / frame_time)
                factor = (time - start * frame_time) / frame_time

                start_pos, start_rot = frames[start].get_pos_rot(root_joint)
                end_pos, end_rot = frames[start + 1].get_pos_rot(root_joint)

                pos = start_pos.lerp(end_pos, factor)
                rot = start_rot.slerp(end_rot, factor)
                velocity = ((end_pos - start_pos) / frame_time).xz()

                if time < prev_time:
                    # Looped over: previous to last frame, then first frame to now.
                    last_pos = frames[-1].get_pos(root_joint)
                    pos_offset = (last_pos - prev_pos) + (pos - first_pos)
                else:
                    pos_offset = pos - prev_pos

                world_pos = prev_world_pos + pos_offset
                trajectory_chunk.append(
                    TrajectoryDataPoint(Mat4.from_rotation_translation(rot, world_pos), velocity)
                )

                prev_time = time
                prev_pos = pos
                prev_world_pos = world_pos

            self.trajectory_data.append_trajectory_chunk(trajectory_chunk)
            self.pose_data.append_frames(bvh)

        log.info("Bvh file names: %s", self.animation_file)
        log.info("Bvh file count: %d", len(self.animation_file))

    def get_joint(self, index: int) -> Optional[JointInfo]:
        if 0 <= index < len(self.joints):
            return self.joints[index]
        return None

    def _to_dict(self) -> dict[str, Any]:
        return {
            "joints": [j.to_dict() for j in self.joints],
            "trajectory_data": self.trajectory_data.to_dict(),
            "pose_data": self.pose_data.to_dict(),
            "animation_file": list(self.animation_file),
        }

    def to_json(self) -> str:
        return json.dumps(self._to_dict())

    @staticmethod
    def from_json(text: str | bytes) -> MotionAsset:
        try:
            data = json.loads(text)
            return MotionAsset(
                joints=[JointInfo.from_dict(j) for j in data["joints"]],
                trajectory_data=TrajectoryData.from_dict(data["trajectory_data"]),
                pose_data=PoseData.from_dict(data["pose_data"]),
                animation_file=[str(n) for n in data["animation_file"]],
            )
        except (ValueError, KeyError, TypeError) as exc:
            raise MotionAssetLoadError(f"Could not deserialize motion asset: {exc}") from exc

    @staticmethod
    def load(path: str | os.PathLike[str]) -> MotionAsset:
        try:
            with open(path, "rb") as fh:
                raw = fh.read()
        except OSError as exc:
            raise MotionAssetLoadError(f"Could not load json file: {exc}") from exc
        return MotionAsset.from_json(raw)