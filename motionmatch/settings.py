"""Application-wide constants and mode enumerations."""

from enum import Enum, auto

BVH_SCALE_RATIO = 0.01
LARGE_EPSILON = 0.0001


class GameMode(Enum):
    NONE = auto()
    CONFIG = auto()
    PLAY = auto()


class MainSet(Enum):
    """Per-frame update stages, in execution order."""

    ACTION = auto()
    RECORD = auto()
    TRAJECTORY = auto()
    MOTION_MATCHING = auto()
    ANIMATION = auto()


class Method(Enum):
    BRUTE_FORCE_KNN = auto()
    KD_TREE = auto()
    K_MEANS = auto()