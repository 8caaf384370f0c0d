# motionmatch

Building blocks for motion-matching character animation, in plain Python with
no third-party dependencies.

## Modules

- `motionmatch.geometry`: `Vec2`, `Vec3`, `Quat` and `Mat4`. Quaternions
  support Euler construction and decomposition (`EulerOrder`), `slerp`,
  `inverse`, `mul_vec3` and `to_scaled_axis`; matrices support `@`,
  `inverse`, `transform_point3`, `transform_vector3`, `mul_scalar` and
  `to_scale_rotation_translation`. `quaternion_difference(q1, q2)` returns the
  rotation `d` with `q1 * d == q2`.
- `motionmatch.bvh`: in-memory skeletons and motion (`Bvh`, `JointData`,
  `Channel`, `ChannelType`, `Frame`, `BvhAssetSettings`). `Frame.get_pos`,
  `get_rot` and `get_pos_rot` read a joint's position and XYZ Euler rotation
  (stored in degrees) from a frame.
- `motionmatch.joint_matrices`: `JointMatrices` computes local and world
  matrices of every joint at rest (`reset_joints`) or for a frame
  (`apply_frame`). Parents must come before their children.
- `motionmatch.chunk`: `ChunkOffsets` and the `Chunked` mix-in for flat lists
  split into consecutive chunks (`iter_chunk`, `get_chunk` returning `None`
  when out of range, `chunk` raising `IndexError`).
- `motionmatch.joint_info`: `JointInfo`, `PoseRef`, `PoseDataType`, a
  serialisable joint description.
- `motionmatch.pose_data`: `Pose` (flat frame values with sampling helpers
  and `lerp`) and `PoseData` (chunks of poses with a loopable flag per chunk).
- `motionmatch.trajectory_data`: `TrajectoryData`, `TrajectoryDataPoint`,
  `TrajectoryDataConfig`; chunks of root trajectory matrices and ground
  velocities.
- `motionmatch.motion_asset`: `MotionAsset` builds trajectory and pose chunks
  from clips (`from_bvh`, `append_bvhs`) and saves to or loads from JSON
  (`to_json`, `from_json`, `load`). Loading failures raise
  `MotionAssetLoadError`.
- `motionmatch.motion_player`: blending between two trajectory poses
  (`MotionPlayer`, `TrajectoryPosePair`, `TrajectoryPose`, `MotionPose`,
  `MotionPlayerConfig`, `RootConfig`, `PlanarTransform`) and the per-frame
  steps `jump_to_pose`, `loop_trajectory_pose_time`, `compute_root_config` and
  `pose_to_joint_transforms`.
- `motionmatch.camera`: `pan_orbit_camera` applies one frame of input
  (`FrameInput`, `ScrollEvent`, `ScrollUnit`) to a `PanOrbitState` and
  `CameraTransform`, with optional following of a `CameraFocus`.
  Keys and buttons are plain strings; the defaults in `PanOrbitSettings` are
  `"middle"` (pan), `"alt_left"` (orbit), `"shift_left"` (zoom), `"key_f"`
  (focus), and `"left"` is the left mouse button.
- `motionmatch.draw_axes`: `Color` (hex parsing, `with_alpha`, `mix`),
  `ColorPalette`, and `DrawAxes`, which queues axes and turns them into
  `Arrow` segments.
- `motionmatch.bvh_player`: `BvhPlayer` playback clock, `get_pose`,
  `quat_to_euler_degrees` and `sample_joint_transforms`.
- `motionmatch.bvh_library`: `BvhLibrary` and `load_bvh_library`, which
  register clip paths found under `bvh/` and the first file under `bvh_map/`
  of an asset directory.
- `motionmatch.bvh_trail`: `compute_bvh_trail` samples a whole clip into
  velocity arrows and armature segments (`BvhTrail`, `TrailArrow`,
  `armature_segments`).
- `motionmatch.settings`: `BVH_SCALE_RATIO`, `LARGE_EPSILON` and the
  `GameMode`, `MainSet` and `Method` enumerations.

## Install

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Examples

Quaternion difference:

```python
from motionmatch.geometry import EulerOrder, Quat, quaternion_difference

q1 = Quat.from_euler(EulerOrder.XYZ, 0.0, 0.5, 0.0)
q2 = Quat.from_euler(EulerOrder.XYZ, 0.0, 1.0, 0.0)
diff = quaternion_difference(q1, q2)
print(q1 * diff)  # reconstructs q2
```

Build a motion asset from a clip and store it as JSON:

```python
from motionmatch.bvh import Bvh, Channel, ChannelType, Frame, JointData
from motionmatch.motion_asset import MotionAsset
from motionmatch.trajectory_data import TrajectoryDataConfig

root = JointData("Hips", channels=(
    Channel(ChannelType.POSITION_X, 0),
    Channel(ChannelType.POSITION_Y, 1),
    Channel(ChannelType.POSITION_Z, 2),
    Channel(ChannelType.ROTATION_Z, 3),
    Channel(ChannelType.ROTATION_X, 4),
    Channel(ChannelType.ROTATION_Y, 5),
))
frames = [Frame((0.0, 90.0, float(i), 0.0, 0.0, 0.0)) for i in range(31)]
clip = Bvh([root], frames, frame_time=1 / 30, name="walk.bvh")

config = TrajectoryDataConfig(interval_time=0.1, num_points=5)
asset = MotionAsset.from_bvh(clip, config)
asset.append_bvhs([clip])
same = MotionAsset.from_json(asset.to_json())
print(same.animation_file)  # ['walk']
```

Clip names are expected to end in a four-character extension such as
`.bvh`, which `append_bvhs` strips; clips whose frame time differs from the
asset's pose interval are skipped with a warning.

## What it does not do

- It does not read or write BVH text files: `Bvh` objects are built in code.
  `bvh_library` only records the paths of files it finds.
- It does not render anything or open a window. The camera, axis, trail and
  playback modules compute transforms, arrows and segments for a renderer to
  draw.
- It does not read input devices; callers fill `FrameInput` themselves.
- It does not search for the best matching pose; it stores and plays back
  pose and trajectory data.
- It has no command-line program.