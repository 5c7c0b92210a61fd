"""Abstract 2D drawing surface consumed by the scene renderer."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

import numpy as np

from orbit_conic.core.model import ScreenPoint


Color = tuple[int, int, int] | tuple[int, int, int, int]


@dataclass(frozen=True)
class Pen:
    color: Color
    width: float = 1.0


class DrawingSurface(Protocol):
    """Primitive operations a rendering backend must provide.

    Coordinates are CSS pixels with the origin top-left. Arc angles follow
    the screen convention (clockwise, since y points down) and run from
    ``start`` to ``end``.
    """

    @property
    def size(self) -> tuple[float, float]: ...

    def clear(self, color: Color) -> None: ...

    def stroke_path(self, points: Sequence[ScreenPoint], pen: Pen) -> None: ...

    def fill_path(self, points: Sequence[ScreenPoint], color: Color) -> None: ...

    def circle(
        self,
        center: ScreenPoint,
        radius: float,
        *,
        fill: Optional[Color] = None,
        pen: Optional[Pen] = None,
    ) -> None: ...

    def line(self, start: ScreenPoint, end: ScreenPoint, pen: Pen) -> None: ...

    def arc(
        self,
        center: ScreenPoint,
        radius: float,
        start_angle: float,
        end_angle: float,
        pen: Pen,
    ) -> None: ...

    def set_dash(self, pattern: Optional[Sequence[float]]) -> None: ...

    def text(
        self,
        text: str,
        position: ScreenPoint,
        color: Color,
        *,
        size: int,
        bold: bool = False,
    ) -> None: ...


def arc_points(
    center: ScreenPoint,
    radius: float,
    start_angle: float,
    end_angle: float,
    *,
    max_step: float = math.radians(3.0),
) -> list[ScreenPoint]:
    """Polyline approximation of a clockwise screen-space arc."""

    sweep = (end_angle - start_angle) % (2.0 * math.pi)
    steps = max(2, int(math.ceil(sweep / max_step)) + 1)
    angles = start_angle + np.linspace(0.0, sweep, steps)
    xs = center.x + radius * np.cos(angles)
    ys = center.y + radius * np.sin(angles)
    return [ScreenPoint(float(x), float(y)) for x, y in zip(xs, ys)]


def dash_polyline(
    points: Sequence[ScreenPoint], pattern: Sequence[float]
) -> list[list[ScreenPoint]]:
    """Split a polyline into the visible pieces of a dash pattern."""

    if len(points) < 2 or not pattern or min(pattern) <= 0.0:
        return [list(points)]
    dashes: list[list[ScreenPoint]] = []
    index = 0
    remaining = pattern[0]
    drawing = True
    current: list[ScreenPoint] = [points[0]]
    for a, b in zip(points, points[1:]):
        seg_len = math.hypot(b.x - a.x, b.y - a.y)
        pos = 0.0
        while seg_len - pos > remaining:
            pos += remaining
            t = pos / seg_len
            cut = ScreenPoint(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)
            if drawing:
                current.append(cut)
                dashes.append(current)
                current = []
            else:
                current = [cut]
            drawing = not drawing
            index = (index + 1) % len(pattern)
            remaining = pattern[index]
        remaining -= seg_len - pos
        if drawing:
            current.append(b)
    if drawing and len(current) >= 2:
        dashes.append(current)
    return dashes


__all__ = ["Color", "DrawingSurface", "Pen", "arc_points", "dash_polyline"]
