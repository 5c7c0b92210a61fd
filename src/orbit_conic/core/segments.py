"""Split projected trajectory samples into continuous polylines."""
from __future__ import annotations

import math
from typing import Iterable

from .model import ScreenPoint, Segment


def build_segments(points: Iterable[ScreenPoint], max_gap_px: float) -> list[Segment]:
    """Group consecutive points, breaking wherever the screen gap is too wide.

    Non-finite points are skipped. A gap equal to ``max_gap_px`` still joins.
    """

    segments: list[Segment] = []
    current: list[ScreenPoint] = []
    prev: ScreenPoint | None = None
    for point in points:
        if not point.is_finite:
            continue
        if prev is not None and math.hypot(point.x - prev.x, point.y - prev.y) > max_gap_px:
            segments.append(Segment(tuple(current)))
            current = []
        current.append(point)
        prev = point
    if current:
        segments.append(Segment(tuple(current)))
    return segments


def max_segment_gap(segment: Segment) -> float:
    """Largest distance between neighbouring points of *segment*."""

    gap = 0.0
    pts = segment.points
    for a, b in zip(pts, pts[1:]):
        gap = max(gap, math.hypot(b.x - a.x, b.y - a.y))
    return gap


__all__ = ["build_segments", "max_segment_gap"]
