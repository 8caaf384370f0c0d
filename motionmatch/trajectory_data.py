"""Chunked storage of trajectory points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from .chunk import ChunkOffsets, Chunked
from .geometry import Mat4, Vec2


@dataclass(frozen=True)
class TrajectoryDataPoint:
    matrix: Mat4
    velocity: Vec2


@dataclass(frozen=True)
class TrajectoryDataConfig:
    interval_time: float
    num_points: int


def _matrix_to_list(m: Mat4) -> list[float]:
    return [m.rows[r][c] for c in range(4) for r in range(4)]


def _matrix_from_list(values: Sequence[float]) -> Mat4:
    if len(values) != 16:
        raise ValueError("a matrix needs 16 values")
    return Mat4(tuple(tuple(float(values[c * 4 + r]) for c in range(4)) for r in range(4)))


class TrajectoryData(Chunked[TrajectoryDataPoint]):
    """Chunks of trajectory points sampled at a fixed interval."""

    def __init__(self, config: TrajectoryDataConfig) -> None:
        if not config.interval_time > 0.0:
            raise ValueError("Interval time between trajectories must be greater than 0!")
        self.config = config
        self.points: list[TrajectoryDataPoint] = []
        self._offsets = ChunkOffsets()

    @property
    def offsets(self) -> ChunkOffsets:
        return self._offsets

    @property
    def items(self) -> Sequence[TrajectoryDataPoint]:
        return self.points

    def append_trajectory_chunk(self, trajectory: list[TrajectoryDataPoint]) -> None:
        """Append the points as one chunk, emptying the given list."""
        if len(trajectory) < self.config.num_points:
            raise ValueError(
                f"A trajectory must have at least the configured length: >={self.config.num_points}"
            )
        self._offsets.push_chunk(len(trajectory))
        self.points.extend(trajectory)
        trajectory.clear()

    def time_from_chunk_offset(self, chunk_offset: int) -> float:
        return chunk_offset * self.config.interval_time

    def chunk_offset_from_time(self, time: float) -> int:
        """Floored offset inside a chunk for a time value."""
        return max(0, int(time / self.config.interval_time))

    def to_dict(self) -> dict[str, Any]:
        return {
            "points": [
                {"matrix": _matrix_to_list(p.matrix), "velocity": list(p.velocity)}
                for p in self.points
            ],
            "offsets": list(self._offsets.values),
            "config": {
                "interval_time": self.config.interval_time,
                "num_points": self.config.num_points,
            },
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> TrajectoryData:
        cfg = data["config"]
        result = TrajectoryData(
            TrajectoryDataConfig(float(cfg["interval_time"]), int(cfg["num_points"]))
        )
        result.points = [
            TrajectoryDataPoint(
                _matrix_from_list(p["matrix"]), Vec2(*(float(v) for v in p["velocity"]))
            )
            for p in data["points"]
        ]
        result._offsets = ChunkOffsets(int(v) for v in data["offsets"])
        return result