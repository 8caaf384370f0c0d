"""Colours and the per-frame list of coordinate axes to draw."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterator, Optional

from .geometry import Mat4, Vec3


@dataclass(frozen=True)
class Color:
    """sRGB colour with alpha, components in [0, 1]."""

    r: float
    g: float
    b: float
    a: float = 1.0

    @staticmethod
    def from_hex(text: str) -> Color:
        """Parse #RGB, #RGBA, #RRGGBB or #RRGGBBAA (leading # optional)."""
        digits = text[1:] if text.startswith("#") else text
        if len(digits) in (3, 4):
            digits = "".join(ch * 2 for ch in digits)
        if len(digits) not in (6, 8):
            raise ValueError(f"invalid hex colour: {text!r}")
        try:
            values = [int(digits[i:i + 2], 16) / 255.0 for i in range(0, len(digits), 2)]
        except ValueError as exc:
            raise ValueError(f"invalid hex colour: {text!r}") from exc
        return Color(*values)

    def with_alpha(self, alpha: float) -> Color:
        return replace(self, a=alpha)

    def mix(self, other: Color, factor: float) -> Color:
        """Linear blend of every component, alpha included."""
        return Color(
            self.r + (other.r - self.r) * factor,
            self.g + (other.g - self.g) * factor,
            self.b + (other.b - self.b) * factor,
            self.a + (other.a - self.a) * factor,
        )


def _hex(text: str):
    return field(default_factory=lambda: Color.from_hex(text))


@dataclass(frozen=True)
class ColorPalette:
    red: Color = _hex("#FF6188")
    orange: Color = _hex("#FC9867")
    yellow: Color = _hex("#FFD866")
    green: Color = _hex("#A9DC76")
    blue: Color = _hex("#78DCE8")
    purple: Color = _hex("#AB9DF2")
    base0: Color = _hex("#19181A")
    base1: Color = _hex("#221F22")
    base2: Color = _hex("#2D2A2E")
    base3: Color = _hex("#403E41")
    base4: Color = _hex("#5B595C")
    base5: Color = _hex("#727072")
    base6: Color = _hex("#939293")
    base7: Color = _hex("#C1C0C0")
    base8: Color = _hex("#FCFCFA")


@dataclass(frozen=True)
class DrawAxis:
    """Matrix and size of one axis set to draw."""

    mat: Mat4 = field(default_factory=Mat4.identity)
    size: float = 0.0
    color: Optional[Color] = None
    forward_only: bool = False


@dataclass(frozen=True)
class Arrow:
    start: Vec3
    end: Vec3
    color: Color


class DrawAxes:
    """Axes queued for drawing; cleared every frame."""

    def __init__(self) -> None:
        self.axes: list[DrawAxis] = []

    def __iter__(self) -> Iterator[DrawAxis]:
        return iter(self.axes)

    def __len__(self) -> int:
        return len(self.axes)

    def clear(self) -> None:
        self.axes.clear()

    def draw(self, mat: Mat4, size: float) -> None:
        self.axes.append(DrawAxis(mat, size, None, False))

    def draw_with_color(self, mat: Mat4, size: float, color: Color) -> None:
        self.axes.append(DrawAxis(mat, size, color, False))

    def draw_forward(self, mat: Mat4, size: float, color: Color) -> None:
        self.axes.append(DrawAxis(mat, size, color, True))

    def arrows(self, palette: ColorPalette) -> list[Arrow]:
        """Arrows for every queued axis: Z first, then X and Y unless forward only."""
        result: list[Arrow] = []
        for axis in self.axes:
            start = axis.mat.transform_point3(Vec3())
            directions = [(Vec3(0.0, 0.0, 1.0), palette.blue)]
            if not axis.forward_only:
                directions += [
                    (Vec3(1.0, 0.0, 0.0), palette.red),
                    (Vec3(0.0, 1.0, 0.0), palette.green),
                ]
            for direction, default in directions:
                end = start + axis.mat.transform_vector3(direction) * axis.size
                color = axis.color if axis.color is not None else default
                result.append(Arrow(start, end, color))
        return result