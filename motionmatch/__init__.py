"""Motion matching building blocks: skeletons, poses, trajectories, playback, camera and debug drawing."""

__version__ = "0.1.0"