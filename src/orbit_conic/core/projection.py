"""World-to-screen mapping for a responsive viewport."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from .config import VIEWPORT_CFG, ViewportCfg
from .model import ScreenPoint


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def _usable(value: Optional[float], minimum: float) -> float:
    if value is None:
        return minimum
    try:
        value = float(value)
    except (TypeError, ValueError):
        return minimum
    if not math.isfinite(value):
        return minimum
    return max(minimum, value)


@dataclass(frozen=True)
class Viewport:
    """Viewport size in device-independent (CSS) pixels."""

    width: float
    height: float

    @classmethod
    def resolve(
        cls,
        size: Optional[Sequence[Optional[float]]],
        cfg: ViewportCfg = VIEWPORT_CFG,
    ) -> "Viewport":
        """Build a viewport, falling back to the minimum usable size."""

        if size is None or len(size) < 2:
            return cls(cfg.min_width, cfg.min_height)
        return cls(_usable(size[0], cfg.min_width), _usable(size[1], cfg.min_height))

    @property
    def size(self) -> tuple[float, float]:
        return self.width, self.height

    @property
    def min_dimension(self) -> float:
        return min(self.width, self.height)


@dataclass(frozen=True)
class ViewportProjector:
    """Maps focus-centred world kilometres to screen pixels.

    Device pixel density belongs to the drawing backend; everything here is
    in CSS pixels.
    """

    viewport: Viewport
    focus_range_km: float
    cfg: ViewportCfg = VIEWPORT_CFG

    @classmethod
    def for_size(
        cls,
        size: Optional[Sequence[Optional[float]]],
        focus_range_km: float,
        cfg: ViewportCfg = VIEWPORT_CFG,
    ) -> "ViewportProjector":
        return cls(Viewport.resolve(size, cfg), focus_range_km, cfg)

    @property
    def size(self) -> tuple[float, float]:
        return self.viewport.size

    @property
    def is_narrow(self) -> bool:
        return self.viewport.width < self.cfg.narrow_breakpoint_px

    @property
    def effective_focus_range_km(self) -> float:
        if self.is_narrow:
            return max(
                self.cfg.narrow_focus_min_km,
                self.focus_range_km * self.cfg.narrow_focus_factor,
            )
        return self.focus_range_km

    @property
    def scale(self) -> float:
        """Pixels per kilometre."""

        focus = max(self.effective_focus_range_km, 1e-9)
        return self.viewport.min_dimension / (2.0 * focus)

    @property
    def origin(self) -> ScreenPoint:
        return ScreenPoint(self.viewport.width / 2.0, self.viewport.height / 2.0)

    @property
    def max_gap_px(self) -> float:
        return max(self.cfg.gap_min_px, self.viewport.min_dimension * self.cfg.gap_fraction)

    def km_to_px(self, length_km: float) -> float:
        return length_km * self.scale

    def world_to_screen(self, x: float, y: float) -> ScreenPoint:
        scale = self.scale
        return ScreenPoint(
            self.viewport.width / 2.0 + x * scale,
            self.viewport.height / 2.0 - y * scale,
        )

    def screen_to_world(self, sx: float, sy: float) -> tuple[float, float]:
        scale = self.scale
        x = (sx - self.viewport.width / 2.0) / scale
        y = (self.viewport.height / 2.0 - sy) / scale
        return x, y

    def view_rect(self) -> tuple[float, float, float, float]:
        scale = self.scale
        half_width_world = self.viewport.width / (2.0 * scale)
        half_height_world = self.viewport.height / (2.0 * scale)
        return (
            -half_width_world,
            -half_height_world,
            half_width_world,
            half_height_world,
        )

    def contains(self, point: ScreenPoint, margin: float = 0.0) -> bool:
        return (
            _clamp(point.x, -margin, self.viewport.width + margin) == point.x
            and _clamp(point.y, -margin, self.viewport.height + margin) == point.y
        )


__all__ = ["Viewport", "ViewportProjector"]
