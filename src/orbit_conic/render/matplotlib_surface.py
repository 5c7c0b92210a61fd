"""Headless drawing surface that renders scenes into matplotlib figures."""
from __future__ import annotations

import math
from pathlib import Path
from typing import Optional, Sequence

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import Circle

from orbit_conic.core.model import ScreenPoint

from .surface import Color, Pen, arc_points, dash_polyline


def _mpl_color(color: Color) -> tuple[float, ...]:
    return tuple(channel / 255.0 for channel in color)


class MatplotlibSurface:
    """Draws in CSS pixels onto an Agg figure of the same size.

    The axes span the whole figure with y pointing down, so one data unit
    is one CSS pixel. ``pixel_ratio`` only raises the output resolution.
    """

    def __init__(
        self,
        size: tuple[float, float],
        *,
        dpi: float = 100.0,
        pixel_ratio: float = 1.0,
    ) -> None:
        width, height = float(size[0]), float(size[1])
        if width <= 0.0 or height <= 0.0:
            raise ValueError("Surface size must be positive")
        self._size = (width, height)
        self._dpi = dpi
        self._pixel_ratio = pixel_ratio if pixel_ratio > 0.0 else 1.0
        self._figure = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        FigureCanvasAgg(self._figure)
        self._ax = self._figure.add_axes((0.0, 0.0, 1.0, 1.0))
        self._dash: Optional[tuple[float, ...]] = None
        self._background: Color = (255, 255, 255)
        self._reset_axes()

    @property
    def figure(self) -> Figure:
        return self._figure

    @property
    def size(self) -> tuple[float, float]:
        return self._size

    def _reset_axes(self) -> None:
        ax = self._ax
        ax.cla()
        width, height = self._size
        ax.set_xlim(0.0, width)
        ax.set_ylim(height, 0.0)
        ax.set_axis_off()
        ax.set_facecolor(_mpl_color(self._background))
        self._figure.patch.set_facecolor(_mpl_color(self._background))

    def _points(self, px: float) -> float:
        return px * 72.0 / self._dpi

    def clear(self, color: Color) -> None:
        self._background = color
        self._reset_axes()

    def stroke_path(self, points: Sequence[ScreenPoint], pen: Pen) -> None:
        finite = [point for point in points if point.is_finite]
        if len(finite) < 2:
            return
        pieces = dash_polyline(finite, self._dash) if self._dash else [finite]
        for piece in pieces:
            if len(piece) < 2:
                continue
            self._ax.plot(
                [point.x for point in piece],
                [point.y for point in piece],
                color=_mpl_color(pen.color),
                linewidth=self._points(pen.width),
                solid_capstyle="round",
            )

    def fill_path(self, points: Sequence[ScreenPoint], color: Color) -> None:
        if len(points) < 3 or not all(point.is_finite for point in points):
            return
        self._ax.fill(
            [point.x for point in points],
            [point.y for point in points],
            color=_mpl_color(color),
            linewidth=0.0,
        )

    def circle(
        self,
        center: ScreenPoint,
        radius: float,
        *,
        fill: Optional[Color] = None,
        pen: Optional[Pen] = None,
    ) -> None:
        if not center.is_finite or not (math.isfinite(radius) and radius > 0.0):
            return
        patch = Circle(
            (center.x, center.y),
            radius,
            facecolor=_mpl_color(fill) if fill is not None else "none",
            edgecolor=_mpl_color(pen.color) if pen is not None else "none",
            linewidth=self._points(pen.width) if pen is not None else 0.0,
        )
        self._ax.add_patch(patch)

    def line(self, start: ScreenPoint, end: ScreenPoint, pen: Pen) -> None:
        self.stroke_path((start, end), pen)

    def arc(
        self,
        center: ScreenPoint,
        radius: float,
        start_angle: float,
        end_angle: float,
        pen: Pen,
    ) -> None:
        if not center.is_finite or not (math.isfinite(radius) and radius > 0.0):
            return
        self.stroke_path(arc_points(center, radius, start_angle, end_angle), pen)

    def set_dash(self, pattern: Optional[Sequence[float]]) -> None:
        self._dash = tuple(pattern) if pattern else None

    def text(
        self,
        text: str,
        position: ScreenPoint,
        color: Color,
        *,
        size: int,
        bold: bool = False,
    ) -> None:
        if not text or not position.is_finite:
            return
        self._ax.text(
            position.x,
            position.y,
            text,
            color=_mpl_color(color),
            fontsize=self._points(size),
            fontweight="bold" if bold else "normal",
            ha="center",
            va="center",
            clip_on=True,
        )

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._figure.savefig(
            path,
            dpi=self._dpi * self._pixel_ratio,
            facecolor=self._figure.get_facecolor(),
        )
        return path


__all__ = ["MatplotlibSurface"]
