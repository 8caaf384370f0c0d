import math

import pytest

from motionmatch.bvh import Bvh, Channel, ChannelType, Frame, JointData
from motionmatch.bvh_player import (
    BvhPlayer,
    get_pose,
    quat_to_euler_degrees,
    sample_joint_transforms,
)
from motionmatch.geometry import EulerOrder, Quat, Vec3

FRAME_TIME = 0.1


def make_bvh():
    root = JointData(
        "Hips",
        Vec3(1.0, 2.0, 3.0),
        (
            Channel(ChannelType.POSITION_X, 0),
            Channel(ChannelType.POSITION_Y, 1),
            Channel(ChannelType.POSITION_Z, 2),
            Channel(ChannelType.ROTATION_Y, 3),
        ),
        None,
        0,
    )
    spine = JointData(
        "Spine",
        Vec3(0.0, 10.0, 0.0),
        (
            Channel(ChannelType.ROTATION_X, 4),
            Channel(ChannelType.ROTATION_Y, 5),
            Channel(ChannelType.ROTATION_Z, 6),
        ),
        0,
        1,
    )
    frames = [
        Frame((0.0, 5.0, 0.0, 0.0, 10.0, 0.0, 0.0)),
        Frame((0.0, 5.0, 10.0, 0.0, 20.0, 0.0, 0.0)),
        Frame((0.0, 5.0, 20.0, 0.0, 30.0, 0.0, 0.0)),
    ]
    return Bvh(joints=[root, spine], frames=frames, frame_time=FRAME_TIME, name="walk.bvh")


def assert_quat_close(a, b):
    sign = 1.0 if a.dot(b) >= 0.0 else -1.0
    assert tuple(a) == pytest.approx(tuple(v * sign for v in b), abs=1e-9)


def test_get_pose_at_start():
    index, factor = get_pose(0.0, make_bvh())
    assert index == 0
    assert factor == pytest.approx(0.0)


def test_get_pose_between_frames():
    index, factor = get_pose(1.5 * FRAME_TIME, make_bvh())
    assert index == 1
    assert factor == pytest.approx(0.5)


def test_get_pose_wraps_around_duration():
    bvh = make_bvh()
    duration = FRAME_TIME * (bvh.num_frames() - 1)
    wrapped = get_pose(duration + 0.5 * FRAME_TIME, bvh)
    direct = get_pose(0.5 * FRAME_TIME, bvh)
    assert wrapped[0] == direct[0]
    assert wrapped[1] == pytest.approx(direct[1])


def test_player_does_not_advance_when_paused():
    player = BvhPlayer(is_playing=False, current_time=0.4, duration=1.0)
    assert player.advance(0.3) == 0.4
    assert player.current_time == 0.4


def test_player_advances_and_wraps():
    player = BvhPlayer(is_playing=True, current_time=0.9, duration=1.0)
    assert player.advance(0.3) == pytest.approx(0.2)
    assert player.current_time == pytest.approx(0.2)


def test_quat_to_euler_degrees_round_trip():
    q = Quat.from_euler(EulerOrder.XYZ, math.radians(10), math.radians(20), math.radians(30))
    assert tuple(quat_to_euler_degrees(q)) == pytest.approx((10.0, 20.0, 30.0))


def test_sample_at_start_uses_frame_positions_for_root():
    bvh = make_bvh()
    result = sample_joint_transforms(bvh, 0.0)
    hips_pos, hips_rot = result["Hips"]
    assert tuple(hips_pos) == pytest.approx(tuple(bvh.frames[0].get_pos(bvh.joints[0])))
    assert_quat_close(hips_rot, bvh.frames[0].get_rot(bvh.joints[0]))


def test_sample_rotation_only_joint_keeps_offset():
    bvh = make_bvh()
    spine_pos, spine_rot = sample_joint_transforms(bvh, 0.0)["Spine"]
    assert spine_pos == bvh.joints[1].offset
    assert_quat_close(spine_rot, bvh.frames[0].get_rot(bvh.joints[1]))


def test_sample_interpolates_between_frames():
    bvh = make_bvh()
    hips_pos, _ = sample_joint_transforms(bvh, 0.5 * FRAME_TIME)["Hips"]
    start = bvh.frames[0].get_pos(bvh.joints[0])
    end = bvh.frames[1].get_pos(bvh.joints[0])
    assert tuple(hips_pos) == pytest.approx(tuple(start.lerp(end, 0.5)))


def test_sample_without_frames_is_empty():
    bvh = make_bvh()
    bvh.frames = []
    assert sample_joint_transforms(bvh, 0.0) == {}