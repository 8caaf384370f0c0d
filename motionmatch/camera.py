"""Pan-orbit camera controller driven by per-frame mouse and keyboard input."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Hashable, Optional

from .geometry import EulerOrder, Quat, Vec2, Vec3


class ScrollUnit(Enum):
    """Unit of a scroll event: notched wheel lines or smooth pixels."""

    LINE = "line"
    PIXEL = "pixel"


@dataclass(frozen=True)
class ScrollEvent:
    unit: ScrollUnit
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class FrameInput:
    """Input gathered during one frame.

    Mouse motion deltas are in window coordinates (Y down).
    """

    motion: tuple[Vec2, ...] = ()
    scroll: tuple[ScrollEvent, ...] = ()
    keys_pressed: frozenset[str] = frozenset()
    keys_just_pressed: frozenset[str] = frozenset()
    buttons_pressed: frozenset[str] = frozenset()
    mouse_in_ui: bool = False


@dataclass
class PanOrbitState:
    """Internal state of the pan-orbit controller."""

    center: Vec3 = Vec3()
    # Offset from the center.
    offset: Vec3 = Vec3(0.0, 1.0, 0.0)
    radius: float = 1.0
    upside_down: bool = False
    pitch: float = 0.0
    yaw: float = 0.0

    @staticmethod
    def initial() -> PanOrbitState:
        """State of the camera as it is first spawned."""
        return PanOrbitState(radius=5.0, pitch=math.radians(-15.0), yaw=math.radians(30.0))


@dataclass(frozen=True)
class PanOrbitSettings:
    """Configuration of the pan-orbit controller."""

    # World units per pixel of mouse motion.
    pan_sensitivity: float = 0.001
    # Radians per pixel of mouse motion.
    orbit_sensitivity: float = math.radians(0.2)
    # Exponent per pixel of mouse motion.
    zoom_sensitivity: float = 0.01
    pan_key: Optional[str] = "middle"
    orbit_key: Optional[str] = "alt_left"
    zoom_key: Optional[str] = "shift_left"
    focus_key: Optional[str] = "key_f"
    # One line of a notched wheel counts as this many pixels.
    scroll_line_sensitivity: float = 16.0
    scroll_pixel_sensitivity: float = 1.0


@dataclass
class CameraFocus:
    """Entity the camera follows, if any."""

    entity: Optional[Hashable] = None

    def set(self, entity: Hashable) -> None:
        self.entity = entity

    def clear(self) -> None:
        self.entity = None


@dataclass
class CameraTransform:
    translation: Vec3 = Vec3()
    rotation: Quat = field(default_factory=Quat.identity)

    def right(self) -> Vec3:
        return self.rotation.mul_vec3(Vec3(1.0, 0.0, 0.0))

    def up(self) -> Vec3:
        return self.rotation.mul_vec3(Vec3(0.0, 1.0, 0.0))

    def back(self) -> Vec3:
        return self.rotation.mul_vec3(Vec3(0.0, 0.0, 1.0))


def _wrap(angle: float) -> float:
    if angle > math.pi:
        angle -= math.tau
    if angle < -math.pi:
        angle += math.tau
    return angle


def pan_orbit_camera(
    settings: PanOrbitSettings,
    state: PanOrbitState,
    transform: CameraTransform,
    frame_input: FrameInput,
    focus: CameraFocus,
    main_scene: Optional[Hashable],
    focus_translation: Optional[Vec3],
    first_run: bool = False,
) -> bool:
    """Apply one frame of input to the camera.

    ``main_scene`` is the entity the focus key focuses on; ``focus_translation``
    is the world position of the focused entity, or None if it has none.
    Returns True when the transform was recomputed.
    """
    total_motion = sum(frame_input.motion, Vec2())
    # Window coordinates are Y-down, world space is Y-up.
    total_motion = Vec2(total_motion.x, -total_motion.y)

    scroll_lines = Vec2()
    scroll_pixels = Vec2()
    if not frame_input.mouse_in_ui:
        for ev in frame_input.scroll:
            delta = Vec2(ev.x, -ev.y)
            if ev.unit is ScrollUnit.LINE:
                scroll_lines = scroll_lines + delta
            else:
                scroll_pixels = scroll_pixels + delta

    keys = frame_input.keys_pressed
    just = frame_input.keys_just_pressed
    buttons = frame_input.buttons_pressed
    left_clicked = "left" in buttons
    is_focus = focus.entity is not None

    if settings.focus_key is not None and settings.focus_key in just:
        if is_focus:
            focus.clear()
        elif main_scene is not None:
            focus.set(main_scene)

    total_pan = Vec2()
    if settings.pan_key is not None and settings.pan_key in buttons:
        total_pan = total_pan - total_motion * settings.pan_sensitivity

    total_orbit = Vec2()
    orbit_held = settings.orbit_key is not None and settings.orbit_key in keys
    if (orbit_held and left_clicked) or is_focus:
        total_orbit = total_orbit - total_motion * settings.orbit_sensitivity

    total_zoom = Vec2()
    if settings.zoom_key is not None and settings.zoom_key in keys and left_clicked:
        total_zoom = total_zoom - total_motion * settings.zoom_sensitivity
    total_zoom = total_zoom - scroll_lines * (
        settings.scroll_line_sensitivity * settings.zoom_sensitivity
    )
    total_zoom = total_zoom - scroll_pixels * (
        settings.scroll_pixel_sensitivity * settings.zoom_sensitivity
    )

    # A new orbit maneuver checks whether it starts upside down.
    if settings.orbit_key is not None and settings.orbit_key in just and left_clicked:
        state.upside_down = state.pitch < -math.pi / 2 or state.pitch > math.pi / 2

    if state.upside_down:
        total_orbit = Vec2(-total_orbit.x, total_orbit.y)

    changed = False

    if total_zoom != Vec2():
        changed = True
        state.radius *= math.exp(-total_zoom.y)

    if total_orbit != Vec2():
        changed = True
        state.yaw = _wrap(state.yaw + total_orbit.x)
        state.pitch = _wrap(state.pitch - total_orbit.y)

    pan_offset = Vec3()
    if total_pan != Vec2():
        changed = True
        radius = state.radius
        pan_offset = (
            pan_offset
            + transform.right() * (total_pan.x * radius)
            + transform.up() * (total_pan.y * radius)
        )

    if focus.entity is not None:
        changed = True
        if focus_translation is not None:
            state.offset = state.offset + pan_offset
            state.center = focus_translation
    else:
        state.center = state.center + pan_offset

    if changed or first_run:
        transform.rotation = Quat.from_euler(EulerOrder.YXZ, state.yaw, state.pitch, 0.0)
        transform.translation = state.center + state.offset + transform.back() * state.radius
        return True
    return False