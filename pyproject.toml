[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "motionmatch"
version = "0.1.0"
description = "Motion matching building blocks: in-memory BVH skeletons, pose and trajectory data, motion playback, camera and debug-drawing math."
requires-python = ">=3.10"
dependencies = []
keywords = ["motion matching", "animation", "bvh", "skeleton", "trajectory", "quaternion"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["motionmatch"]

[tool.pytest.ini_options]
addopts = "-ra"
