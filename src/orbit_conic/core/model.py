"""Data models for orbital parameters and the drawable scene."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Iterator, NamedTuple, Union

from .config import GEOMETRY_CFG

if TYPE_CHECKING:  # pragma: no cover
    from .projection import ViewportProjector


logger = logging.getLogger(__name__)

EDITABLE_RANGES: dict[str, tuple[float, float]] = {
    "eccentricity": (0.1, 3.0),
    "semi_latus_rectum": (1_000.0, 50_000.0),
    "argument_of_periapsis": (-180.0, 180.0),
    "start_anomaly": (-179.9, 179.9),
    "end_anomaly": (-179.9, 179.9),
    "focus_range_km": (5_000.0, 50_000.0),
}


def wrap_degrees(angle: float) -> float:
    """Wrap *angle* into ``[-180, 180]``, keeping ``+180`` as given."""

    wrapped = (angle + 180.0) % 360.0 - 180.0
    if wrapped == -180.0 and angle > 0.0:
        return 180.0
    return wrapped


@dataclass(frozen=True)
class OrbitalParameters:
    """Conic trajectory parameters; angles are in degrees."""

    eccentricity: float
    semi_latus_rectum: float
    argument_of_periapsis: float
    start_anomaly: float
    end_anomaly: float
    sample_count: int = GEOMETRY_CFG.default_sample_count
    focus_range_km: float = GEOMETRY_CFG.default_focus_range_km

    @property
    def omega_wrapped(self) -> float:
        return wrap_degrees(self.argument_of_periapsis)

    @property
    def omega_rad(self) -> float:
        return math.radians(self.argument_of_periapsis)

    @property
    def start_anomaly_rad(self) -> float:
        return math.radians(self.start_anomaly)

    @property
    def end_anomaly_rad(self) -> float:
        return math.radians(self.end_anomaly)

    def replace(self, **changes: float) -> "OrbitalParameters":
        return replace(self, **changes)

    def normalized(self) -> "OrbitalParameters":
        """Return a copy that is safe to feed through the geometry pipeline.

        Eccentricity and semi-latus rectum are left untouched; degenerate
        values there are handled by the finiteness checks downstream.
        """

        changes: dict[str, float | int] = {}
        try:
            count = int(self.sample_count)
        except (TypeError, ValueError, OverflowError):
            count = GEOMETRY_CFG.default_sample_count
        count = max(GEOMETRY_CFG.min_sample_count, count)
        if count != self.sample_count:
            changes["sample_count"] = count
        focus = self.focus_range_km
        if not (math.isfinite(focus) and focus > 0.0):
            changes["focus_range_km"] = GEOMETRY_CFG.default_focus_range_km
        for name in ("argument_of_periapsis", "start_anomaly", "end_anomaly"):
            if not math.isfinite(getattr(self, name)):
                changes[name] = 0.0
        if not changes:
            return self
        logger.warning("Normalising orbital parameters: %s", changes)
        return replace(self, **changes)

    def clamped_to_editable_ranges(self, *names: str) -> "OrbitalParameters":
        """Clamp *names* (default: every editable field) to the editor ranges."""

        changes = {}
        for name in names or tuple(EDITABLE_RANGES):
            lo, hi = EDITABLE_RANGES[name]
            value = getattr(self, name)
            clamped = max(lo, min(hi, value))
            if clamped != value:
                changes[name] = clamped
        return replace(self, **changes) if changes else self

    def as_dict(self) -> dict[str, float]:
        return {
            "eccentricity": self.eccentricity,
            "semi_latus_rectum": self.semi_latus_rectum,
            "argument_of_periapsis": self.argument_of_periapsis,
            "start_anomaly": self.start_anomaly,
            "end_anomaly": self.end_anomaly,
            "sample_count": self.sample_count,
            "focus_range_km": self.focus_range_km,
        }


@dataclass(frozen=True)
class PolarPoint:
    """Focus-centred polar position: radius in km, heading in radians."""

    radius: float
    heading: float

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.radius) and math.isfinite(self.heading)

    def to_world(self) -> tuple[float, float]:
        return (
            self.radius * math.cos(self.heading),
            self.radius * math.sin(self.heading),
        )


class ScreenPoint(NamedTuple):
    x: float
    y: float

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


@dataclass(frozen=True)
class Segment:
    """One continuous visible arc of the trajectory."""

    points: tuple[ScreenPoint, ...]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[ScreenPoint]:
        return iter(self.points)


@dataclass(frozen=True)
class Marker:
    name: str
    style: str
    center: ScreenPoint
    radius_px: float
    filled: bool = True
    valid: bool = True


@dataclass(frozen=True)
class Vector:
    name: str
    style: str
    tail: ScreenPoint
    tip: ScreenPoint
    head: tuple[ScreenPoint, ScreenPoint, ScreenPoint]
    valid: bool = True


@dataclass(frozen=True)
class Line:
    name: str
    style: str
    start: ScreenPoint
    end: ScreenPoint
    dashed: bool = False
    valid: bool = True


@dataclass(frozen=True)
class Arc:
    """Circular arc; angles use screen convention and run clockwise."""

    name: str
    style: str
    center: ScreenPoint
    radius_px: float
    start_angle: float
    end_angle: float
    valid: bool = True

    @property
    def sweep(self) -> float:
        return (self.end_angle - self.start_angle) % (2.0 * math.pi)


@dataclass(frozen=True)
class Label:
    name: str
    style: str
    text: str
    position: ScreenPoint
    valid: bool = True


Feature = Union[Marker, Vector, Line, Arc, Label]


@dataclass(frozen=True)
class Scene:
    """Everything needed to draw one frame."""

    segments: tuple[Segment, ...]
    features: tuple[Feature, ...]
    projector: "ViewportProjector"
    r_clip: float
    sweep_angle_deg: float
    params: OrbitalParameters

    @property
    def size(self) -> tuple[float, float]:
        return self.projector.size

    def feature(self, name: str) -> Feature:
        for item in self.features:
            if item.name == name:
                return item
        raise KeyError(name)

    def valid_features(self) -> tuple[Feature, ...]:
        return tuple(item for item in self.features if item.valid)

    def iter_points(self) -> Iterator[ScreenPoint]:
        for segment in self.segments:
            yield from segment.points


__all__ = [
    "EDITABLE_RANGES",
    "Arc",
    "Feature",
    "Label",
    "Line",
    "Marker",
    "OrbitalParameters",
    "PolarPoint",
    "Scene",
    "ScreenPoint",
    "Segment",
    "Vector",
    "wrap_degrees",
]
