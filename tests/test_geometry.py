import math

import pytest

from motionmatch.geometry import (
    EulerOrder, Mat4, Quat, Vec2, Vec3, quaternion_difference,
)


def test_difference_reconstructs_second():
    q1 = Quat.from_euler(EulerOrder.XYZ, 0.0, 0.5, 0.0)
    q2 = Quat.from_euler(EulerOrder.XYZ, 0.0, 1.0, 0.0)
    diff = quaternion_difference(q1, q2)
    assert abs((q1 * diff).dot(q2)) == pytest.approx(1.0, abs=1e-6)
    assert abs(diff.dot(Quat.from_rotation_y(0.5))) == pytest.approx(1.0, abs=1e-6)


def test_identity_rotation_keeps_vector():
    v = Vec3(1.0, 2.0, 3.0)
    assert list(Quat.identity().mul_vec3(v)) == pytest.approx([1.0, 2.0, 3.0], abs=1e-6)


def test_rotation_y_quarter_turn_maps_z_to_x():
    q = Quat.from_rotation_y(math.pi / 2)
    assert list(q.mul_vec3(Vec3(0, 0, 1))) == pytest.approx([1.0, 0.0, 0.0], abs=1e-6)


@pytest.mark.parametrize("order", list(EulerOrder))
def test_euler_round_trip(order):
    angles = (0.3, -0.4, 0.7)
    q = Quat.from_euler(order, *angles)
    back = q.to_euler(order)
    assert list(back) == pytest.approx(list(angles), abs=1e-6)


def test_slerp_endpoints():
    a = Quat.from_rotation_y(0.2)
    b = Quat.from_rotation_y(1.4)
    assert abs(a.slerp(b, 0.0).dot(a)) == pytest.approx(1.0, abs=1e-6)
    assert abs(a.slerp(b, 1.0).dot(b)) == pytest.approx(1.0, abs=1e-6)
    assert abs(a.slerp(b, 0.5).dot(Quat.from_rotation_y(0.8))) == pytest.approx(1.0, abs=1e-6)


def test_scaled_axis_of_y_rotation():
    axis = Quat.from_rotation_y(0.6).to_scaled_axis()
    assert list(axis) == pytest.approx([0.0, 0.6, 0.0], abs=1e-6)


def test_matrix_inverse_round_trip():
    m = Mat4.from_rotation_translation(
        Quat.from_euler(EulerOrder.XYZ, 0.1, 0.2, 0.3), Vec3(1, 2, 3))
    prod = m @ m.inverse()
    for row, expected in zip(prod.rows, Mat4.identity().rows):
        assert list(row) == pytest.approx(list(expected), abs=1e-6)


def test_singular_matrix_raises():
    with pytest.raises(ValueError):
        Mat4.identity().mul_scalar(0.0).inverse()


def test_decompose_round_trip():
    rot = Quat.from_euler(EulerOrder.YXZ, 0.5, -0.2, 0.1)
    m = Mat4.from_rotation_translation(rot, Vec3(4, 5, 6))
    scale, r, t = m.to_scale_rotation_translation()
    assert list(scale) == pytest.approx([1.0, 1.0, 1.0], abs=1e-6)
    assert abs(r.dot(rot)) == pytest.approx(1.0, abs=1e-6)
    assert list(t) == pytest.approx([4.0, 5.0, 6.0], abs=1e-6)


def test_point_vs_vector_transform():
    m = Mat4.from_rotation_translation(Quat.identity(), Vec3(1, 0, 0))
    assert list(m.transform_point3(Vec3(0, 0, 0))) == pytest.approx([1.0, 0.0, 0.0], abs=1e-6)
    assert list(m.transform_vector3(Vec3(0, 0, 1))) == pytest.approx([0.0, 0.0, 1.0], abs=1e-6)


def test_vector_helpers():
    assert Vec3(1, 2, 3).xz() == Vec2(1, 3)
    assert math.isclose(Vec2(3, 4).normalize().length(), 1.0)
    assert Vec3(0, 0, 0).lerp(Vec3(2, 4, 6), 0.5) == Vec3(1, 2, 3)