from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional, Sequence

import pygame

from orbit_conic.core.config import RENDER_CFG
from orbit_conic.core.model import ScreenPoint

from .assets import FontLibrary
from .surface import Color, Pen, arc_points, dash_polyline

if TYPE_CHECKING:  # pragma: no cover
    from orbit_conic.core.config import RenderCfg

# pygame coordinates are C ints; far off-screen points are pinned here.
_COORD_LIMIT = 100_000.0


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


class PygameSurface:
    """:class:`~orbit_conic.render.surface.DrawingSurface` backed by pygame.

    ``pixel_ratio`` scales CSS pixels to physical pixels for high density
    displays; scene coordinates are never altered by it.
    """

    def __init__(
        self,
        surface: pygame.Surface,
        *,
        pixel_ratio: float = 1.0,
        render_cfg: RenderCfg = RENDER_CFG,
        fonts: FontLibrary | None = None,
    ) -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        self._surface = surface
        self._ratio = pixel_ratio if pixel_ratio > 0.0 else 1.0
        self._fonts = fonts or FontLibrary(render_cfg.font_names)
        self._dash: Optional[tuple[float, ...]] = None

    @property
    def surface(self) -> pygame.Surface:
        return self._surface

    @property
    def size(self) -> tuple[float, float]:
        width, height = self._surface.get_size()
        return width / self._ratio, height / self._ratio

    def _px(self, point: ScreenPoint) -> tuple[int, int]:
        return (
            int(round(_clamp(point.x * self._ratio, -_COORD_LIMIT, _COORD_LIMIT))),
            int(round(_clamp(point.y * self._ratio, -_COORD_LIMIT, _COORD_LIMIT))),
        )

    def _width(self, pen: Pen) -> int:
        return max(1, int(round(pen.width * self._ratio)))

    def clear(self, color: Color) -> None:
        self._surface.fill(color)

    def stroke_path(self, points: Sequence[ScreenPoint], pen: Pen) -> None:
        finite = [point for point in points if point.is_finite]
        if len(finite) < 2:
            return
        pieces = dash_polyline(finite, self._dash) if self._dash else [finite]
        width = self._width(pen)
        for piece in pieces:
            if len(piece) < 2:
                continue
            pixels = [self._px(point) for point in piece]
            if width <= 1:
                pygame.draw.aalines(self._surface, pen.color, False, pixels)
            else:
                pygame.draw.lines(self._surface, pen.color, False, pixels, width)
                pygame.draw.aalines(self._surface, pen.color, False, pixels)

    def fill_path(self, points: Sequence[ScreenPoint], color: Color) -> None:
        if len(points) < 3 or not all(point.is_finite for point in points):
            return
        pygame.draw.polygon(self._surface, color, [self._px(point) for point in points])

    def circle(
        self,
        center: ScreenPoint,
        radius: float,
        *,
        fill: Optional[Color] = None,
        pen: Optional[Pen] = None,
    ) -> None:
        if not center.is_finite or not math.isfinite(radius):
            return
        radius_px = int(round(radius * self._ratio))
        if radius_px <= 0:
            return
        position = self._px(center)
        if fill is not None:
            pygame.draw.circle(self._surface, fill, position, radius_px)
        if pen is not None:
            pygame.draw.circle(self._surface, pen.color, position, radius_px, self._width(pen))

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
        rendered = self._fonts.render(text, color, size=max(1, int(round(size * self._ratio))), bold=bold)
        rect = rendered.get_rect(center=self._px(position))
        self._surface.blit(rendered, rect)


__all__ = ["PygameSurface"]
