import math

import pytest

from motionmatch.bvh import Bvh, Channel, ChannelType, Frame, JointData
from motionmatch.geometry import EulerOrder, Quat, Vec3
from motionmatch.joint_info import JointInfo
from motionmatch.pose_data import Pose, PoseData


def _joint():
    return JointInfo.from_joint_data(
        JointData(
            name="Hips",
            channels=(
                Channel(ChannelType.POSITION_X, 0),
                Channel(ChannelType.POSITION_Y, 1),
                Channel(ChannelType.POSITION_Z, 2),
                Channel(ChannelType.ROTATION_X, 3),
                Channel(ChannelType.ROTATION_Y, 4),
                Channel(ChannelType.ROTATION_Z, 5),
            ),
        )
    )


POSE = Pose([1.0, 2.0, 3.0, 90.0, 45.0, 30.0])


def _bvh(frames, loopable=False):
    return Bvh(
        joints=[JointData(name="Hips")],
        frames=[Frame(tuple(f)) for f in frames],
        frame_time=0.5,
        loopable=loopable,
        name="a.bvh",
    )


def test_from_frame_copies_values():
    frame = Frame((1.0, 2.0, 3.0))
    assert Pose.from_frame(frame).values == [1.0, 2.0, 3.0]


def test_get_pos():
    assert POSE.get_pos(_joint()) == Vec3(1.0, 2.0, 3.0)


def test_get_euler_in_radians():
    e = POSE.get_euler(_joint())
    assert e.x == pytest.approx(math.pi / 2)
    assert (e.y, e.z) == (math.radians(45.0), math.radians(30.0))


def test_get_rot_matches_euler():
    rot = POSE.get_rot(_joint())
    expected = Quat.from_euler(
        EulerOrder.XYZ, math.radians(90.0), math.radians(45.0), math.radians(30.0))
    assert list(rot) == pytest.approx(list(expected), abs=1e-9)


def test_get_pos_rot_and_pos_euler_agree():
    pos, rot = POSE.get_pos_rot(_joint())
    pos2, euler = POSE.get_pos_euler(_joint())
    assert pos == pos2 == POSE.get_pos(_joint())
    assert euler == POSE.get_euler(_joint())
    assert list(rot) == pytest.approx(list(POSE.get_rot(_joint())), abs=1e-9)


def test_get_matrix_translation_and_rotation():
    m = POSE.get_matrix(_joint())
    _, rot, translation = m.to_scale_rotation_translation()
    assert list(translation) == pytest.approx([1.0, 2.0, 3.0])
    r = POSE.get_rot(_joint())
    assert abs(rot.dot(r)) == pytest.approx(1.0)


def test_missing_value_raises():
    with pytest.raises(IndexError):
        Pose([1.0]).get_pos(_joint())


def test_lerp_endpoints_and_midpoint():
    a = Pose([0.0, 2.0])
    b = Pose([10.0, 2.0])
    assert a.lerp(b, 0.0) == a
    assert a.lerp(b, 1.0) == b
    assert a.lerp(b, 0.5).values == [5.0, 2.0]


def test_lerp_shorter_other_raises():
    with pytest.raises(IndexError):
        Pose([0.0, 1.0]).lerp(Pose([0.0]), 0.5)


@pytest.mark.parametrize("interval", [0.0, -1.0])
def test_non_positive_interval_rejected(interval):
    with pytest.raises(ValueError):
        PoseData(interval)


def test_append_frames_builds_chunks():
    data = PoseData(0.5)
    data.append_frames(_bvh([[1.0], [2.0], [3.0]]))
    data.append_frames(_bvh([[4.0], [5.0]], loopable=True))
    assert data.offsets.values == [0, 3, 5]
    assert [p.values for p in data.chunk(1)] == [[4.0], [5.0]]
    assert data.is_chunk_loopable(0) is False
    assert data.is_chunk_loopable(1) is True
    assert data.is_chunk_loopable(2) is None
    assert data.get_chunk(2) is None
    assert sum(len(c) for c in data.iter_chunk()) == len(data.poses)


def test_time_offset_round_trip():
    data = PoseData(0.5)
    for n in range(10):
        assert data.chunk_offset_from_time(data.time_from_chunk_offset(n)) == n


def test_chunk_offset_is_floored():
    data = PoseData(0.5)
    assert data.chunk_offset_from_time(0.74) == data.chunk_offset_from_time(0.5)


def test_dict_round_trip():
    data = PoseData(0.5)
    data.append_frames(_bvh([[1.0, 2.0], [3.0, 4.0]], loopable=True))
    restored = PoseData.from_dict(data.to_dict())
    assert restored.to_dict() == data.to_dict()
    assert restored.poses == data.poses