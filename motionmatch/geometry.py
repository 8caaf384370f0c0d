"""Small vector, quaternion and matrix types for skeletal animation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class EulerOrder(Enum):
    """Order in which intrinsic Euler rotations are applied."""

    XYZ = "XYZ"
    XZY = "XZY"
    YXZ = "YXZ"
    YZX = "YZX"
    ZXY = "ZXY"
    ZYX = "ZYX"


@dataclass(frozen=True)
class Vec2:
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, s: float) -> Vec2:
        return Vec2(self.x * s, self.y * s)

    __rmul__ = __mul__

    def __truediv__(self, s: float) -> Vec2:
        return Vec2(self.x / s, self.y / s)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalize(self) -> Vec2:
        n = self.length()
        if n == 0.0:
            return Vec2(math.nan, math.nan)
        return self / n

    def lerp(self, other: Vec2, t: float) -> Vec2:
        return self + (other - self) * t


@dataclass(frozen=True)
class Vec3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, s: float) -> Vec3:
        return Vec3(self.x * s, self.y * s, self.z * s)

    __rmul__ = __mul__

    def __truediv__(self, s: float) -> Vec3:
        return Vec3(self.x / s, self.y / s, self.z / s)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> Vec3:
        n = self.length()
        if n == 0.0:
            return Vec3(math.nan, math.nan, math.nan)
        return self / n

    def lerp(self, other: Vec3, t: float) -> Vec3:
        return self + (other - self) * t

    def xz(self) -> Vec2:
        return Vec2(self.x, self.z)


def _axis_quat(axis: str, angle: float) -> Quat:
    s, c = math.sin(angle * 0.5), math.cos(angle * 0.5)
    if axis == "X":
        return Quat(s, 0.0, 0.0, c)
    if axis == "Y":
        return Quat(0.0, s, 0.0, c)
    return Quat(0.0, 0.0, s, c)


@dataclass(frozen=True)
class Quat:
    """Rotation quaternion stored as (x, y, z, w)."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    @staticmethod
    def identity() -> Quat:
        return Quat(0.0, 0.0, 0.0, 1.0)

    @staticmethod
    def from_euler(order: EulerOrder, a: float, b: float, c: float) -> Quat:
        first, second, third = order.value
        return _axis_quat(first, a) * _axis_quat(second, b) * _axis_quat(third, c)

    @staticmethod
    def from_rotation_y(angle: float) -> Quat:
        return _axis_quat("Y", angle)

    @staticmethod
    def from_matrix3(m: list[list[float]]) -> Quat:
        """Build a quaternion from a 3x3 row-major rotation matrix."""
        trace = m[0][0] + m[1][1] + m[2][2]
        if trace > 0.0:
            s = math.sqrt(trace + 1.0) * 2.0
            q = Quat((m[2][1] - m[1][2]) / s, (m[0][2] - m[2][0]) / s,
                     (m[1][0] - m[0][1]) / s, 0.25 * s)
        elif m[0][0] > m[1][1] and m[0][0] > m[2][2]:
            s = math.sqrt(1.0 + m[0][0] - m[1][1] - m[2][2]) * 2.0
            q = Quat(0.25 * s, (m[0][1] + m[1][0]) / s,
                     (m[0][2] + m[2][0]) / s, (m[2][1] - m[1][2]) / s)
        elif m[1][1] > m[2][2]:
            s = math.sqrt(1.0 + m[1][1] - m[0][0] - m[2][2]) * 2.0
            q = Quat((m[0][1] + m[1][0]) / s, 0.25 * s,
                     (m[1][2] + m[2][1]) / s, (m[0][2] - m[2][0]) / s)
        else:
            s = math.sqrt(1.0 + m[2][2] - m[0][0] - m[1][1]) * 2.0
            q = Quat((m[0][2] + m[2][0]) / s, (m[1][2] + m[2][1]) / s,
                     0.25 * s, (m[1][0] - m[0][1]) / s)
        return q.normalize()

    def __mul__(self, o: Quat) -> Quat:
        return Quat(
            self.w * o.x + self.x * o.w + self.y * o.z - self.z * o.y,
            self.w * o.y - self.x * o.z + self.y * o.w + self.z * o.x,
            self.w * o.z + self.x * o.y - self.y * o.x + self.z * o.w,
            self.w * o.w - self.x * o.x - self.y * o.y - self.z * o.z,
        )

    def __iter__(self) -> Iterator[float]:
        yield from (self.x, self.y, self.z, self.w)

    def dot(self, o: Quat) -> float:
        return self.x * o.x + self.y * o.y + self.z * o.z + self.w * o.w

    def inverse(self) -> Quat:
        n = self.dot(self)
        return Quat(-self.x / n, -self.y / n, -self.z / n, self.w / n)

    def normalize(self) -> Quat:
        n = math.sqrt(self.dot(self))
        return Quat(self.x / n, self.y / n, self.z / n, self.w / n)

    def mul_vec3(self, v: Vec3) -> Vec3:
        r = self * Quat(v.x, v.y, v.z, 0.0) * Quat(-self.x, -self.y, -self.z, self.w)
        return Vec3(r.x, r.y, r.z)

    def slerp(self, other: Quat, t: float) -> Quat:
        end = other
        d = self.dot(other)
        if d < 0.0:
            end = Quat(-other.x, -other.y, -other.z, -other.w)
            d = -d
        if d > 0.9995:
            return Quat(*(a + (b - a) * t for a, b in zip(self, end))).normalize()
        theta = math.acos(min(1.0, d))
        s = math.sin(theta)
        wa = math.sin((1.0 - t) * theta) / s
        wb = math.sin(t * theta) / s
        return Quat(*(a * wa + b * wb for a, b in zip(self, end)))

    def to_matrix3(self) -> list[list[float]]:
        x, y, z, w = self
        return [
            [1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w)],
            [2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w)],
            [2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y)],
        ]

    def to_euler(self, order: EulerOrder) -> tuple[float, float, float]:
        """Decompose into angles such that from_euler(order, *angles) == self."""
        m = self.to_matrix3()
        idx = {"X": 0, "Y": 1, "Z": 2}
        i, j, k = (idx[c] for c in order.value)
        # Sign of the permutation decides the signs of the extraction.
        sign = 1.0 if (j - i) % 3 == 1 else -1.0
        b = math.asin(max(-1.0, min(1.0, sign * m[i][k])))
        a = math.atan2(-sign * m[j][k], m[k][k])
        c = math.atan2(-sign * m[i][j], m[i][i])
        return a, b, c

    def to_scaled_axis(self) -> Vec3:
        q = self.normalize()
        w = max(-1.0, min(1.0, q.w))
        angle = 2.0 * math.acos(w)
        s = math.sqrt(max(0.0, 1.0 - w * w))
        if s < 1e-7:
            return Vec3(angle, 0.0, 0.0)
        return Vec3(q.x / s, q.y / s, q.z / s) * angle


def quaternion_difference(q1: Quat, q2: Quat) -> Quat:
    """Rotation that takes q1 to q2, so that q1 * result == q2."""
    return q1.inverse() * q2


@dataclass(frozen=True)
class Mat4:
    """4x4 affine matrix stored row-major; vectors are columns."""

    rows: tuple[tuple[float, ...], ...]

    @staticmethod
    def identity() -> Mat4:
        return Mat4(tuple(tuple(1.0 if r == c else 0.0 for c in range(4)) for r in range(4)))

    @staticmethod
    def from_rotation_translation(rotation: Quat, translation: Vec3) -> Mat4:
        m = rotation.to_matrix3()
        t = tuple(translation)
        rows = tuple((*m[r], t[r]) for r in range(3)) + ((0.0, 0.0, 0.0, 1.0),)
        return Mat4(rows)

    def __matmul__(self, other: Mat4) -> Mat4:
        cols = list(zip(*other.rows))
        return Mat4(tuple(
            tuple(sum(a * b for a, b in zip(row, col)) for col in cols) for row in self.rows
        ))

    def mul_scalar(self, s: float) -> Mat4:
        return Mat4(tuple(tuple(v * s for v in row) for row in self.rows))

    def inverse(self) -> Mat4:
        aug = [list(row) + [1.0 if r == c else 0.0 for c in range(4)]
               for r, row in enumerate(self.rows)]
        for col in range(4):
            pivot = max(range(col, 4), key=lambda r: abs(aug[r][col]))
            if abs(aug[pivot][col]) < 1e-12:
                raise ValueError("matrix is singular")
            aug[col], aug[pivot] = aug[pivot], aug[col]
            p = aug[col][col]
            aug[col] = [v / p for v in aug[col]]
            for r in range(4):
                if r != col and aug[r][col] != 0.0:
                    f = aug[r][col]
                    aug[r] = [a - f * b for a, b in zip(aug[r], aug[col])]
        return Mat4(tuple(tuple(row[4:]) for row in aug))

    def _apply(self, v: Vec3, w: float) -> Vec3:
        vec = (v.x, v.y, v.z, w)
        x, y, z = (sum(a * b for a, b in zip(row, vec)) for row in self.rows[:3])
        return Vec3(x, y, z)

    def transform_point3(self, v: Vec3) -> Vec3:
        return self._apply(v, 1.0)

    def transform_vector3(self, v: Vec3) -> Vec3:
        return self._apply(v, 0.0)

    def to_scale_rotation_translation(self) -> tuple[Vec3, Quat, Vec3]:
        m = self.rows
        cols = [Vec3(m[0][c], m[1][c], m[2][c]) for c in range(3)]
        det = (cols[0].x * (cols[1].y * cols[2].z - cols[2].y * cols[1].z)
               - cols[1].x * (cols[0].y * cols[2].z - cols[2].y * cols[0].z)
               + cols[2].x * (cols[0].y * cols[1].z - cols[1].y * cols[0].z))
        sign = -1.0 if det < 0.0 else 1.0
        scale = Vec3(cols[0].length() * sign, cols[1].length(), cols[2].length())
        units = [cols[0] / scale.x, cols[1] / scale.y, cols[2] / scale.z]
        rot = [[units[c].x, units[c].y, units[c].z][r] for r in range(3) for c in range(3)]
        rot3 = [rot[0:3], rot[3:6], rot[6:9]]
        translation = Vec3(m[0][3], m[1][3], m[2][3])
        return scale, Quat.from_matrix3(rot3), translation