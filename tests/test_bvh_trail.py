import pytest

from motionmatch.bvh import Bvh, Channel, ChannelType, Frame, JointData
from motionmatch.bvh_trail import armature_segments, compute_bvh_trail
from motionmatch.draw_axes import ColorPalette
from motionmatch.geometry import Vec3
from motionmatch.joint_matrices import JointMatrices
from motionmatch.settings import BVH_SCALE_RATIO


def make_bvh(frames=None):
    root = JointData(
        "Hips",
        Vec3(),
        (
            Channel(ChannelType.POSITION_X, 0),
            Channel(ChannelType.POSITION_Y, 1),
            Channel(ChannelType.POSITION_Z, 2),
        ),
        None,
        0,
    )
    spine = JointData("Spine", Vec3(0.0, 10.0, 0.0), (Channel(ChannelType.ROTATION_Y, 3),), 0, 1)
    if frames is None:
        frames = [
            Frame((0.0, 0.0, 0.0, 0.0)),
            Frame((0.0, 0.0, 10.0, 0.0)),
            Frame((0.0, 0.0, 20.0, 0.0)),
        ]
    return Bvh(joints=[root, spine], frames=frames, frame_time=0.1, name="walk.bvh")


def test_trail_has_one_arrow_per_segment_sample():
    trail = compute_bvh_trail(make_bvh(), 0.1, 2.0, ColorPalette())
    assert len(trail.arrows) == 2
    assert len(trail.armatures) == len(trail.arrows)


def test_average_velocity_matches_constant_motion():
    bvh = make_bvh()
    trail = compute_bvh_trail(bvh, 0.1, 2.0, ColorPalette())
    expected_z = (20.0 - 10.0) * BVH_SCALE_RATIO / bvh.frame_time
    assert tuple(trail.average_velocity) == pytest.approx((0.0, expected_z))


def test_arrow_color_mixes_by_speed_ratio():
    palette = ColorPalette()
    bvh = make_bvh()
    speed = 10.0 * BVH_SCALE_RATIO / bvh.frame_time
    trail = compute_bvh_trail(bvh, 0.1, 2.0 * speed, palette)
    expected = palette.purple.mix(palette.orange, 0.5)
    for arrow in trail.arrows:
        assert tuple(vars(arrow.color).values()) == pytest.approx(tuple(vars(expected).values()))
        assert arrow.size == pytest.approx(speed * 0.1)


def test_arrows_sit_on_ground_at_root_position():
    trail = compute_bvh_trail(make_bvh(), 0.1, 2.0, ColorPalette())
    origins = [a.matrix.transform_point3(Vec3()) for a in trail.arrows]
    assert tuple(origins[0]) == pytest.approx((0.0, 0.0, 0.0))
    assert tuple(origins[1]) == pytest.approx((0.0, 0.0, 10.0 * BVH_SCALE_RATIO))


def test_non_positive_interval_raises():
    with pytest.raises(ValueError):
        compute_bvh_trail(make_bvh(), 0.0, 2.0, ColorPalette())


def test_missing_root_joint_raises():
    bvh = Bvh(joints=[], frames=[], frame_time=0.1)
    with pytest.raises(ValueError):
        compute_bvh_trail(bvh, 0.1, 2.0, ColorPalette())


def test_clip_without_frames_gives_empty_trail():
    trail = compute_bvh_trail(make_bvh(frames=[]), 0.1, 2.0, ColorPalette())
    assert trail.arrows == []
    assert tuple(trail.average_velocity) == (0.0, 0.0)


def test_armature_segments_link_parent_and_child():
    bvh = make_bvh()
    matrices = JointMatrices(bvh.joints)
    segments = armature_segments(matrices)
    assert len(segments) == 1
    parent, child = segments[0]
    assert tuple(parent) == pytest.approx((0.0, 0.0, 0.0))
    assert tuple(child) == pytest.approx(tuple(bvh.joints[1].offset * BVH_SCALE_RATIO))