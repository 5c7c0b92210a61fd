"""Polar conic geometry helpers."""
from __future__ import annotations

import logging
import math
from typing import Iterator

import numpy as np

from .config import GEOMETRY_CFG, GeometryCfg
from .model import OrbitalParameters, PolarPoint


logger = logging.getLogger(__name__)


def evaluate_polar(e: float, p: float, omega: float, nu: float) -> PolarPoint:
    """Evaluate the conic polar equation at true anomaly ``nu`` (radians).

    Past the asymptotic anomaly of a hyperbola ``1 + e cos(nu)`` turns
    non-positive; the point is then reflected through ``pi`` onto the
    opposite branch. A singular denominator yields an infinite or NaN
    radius rather than raising.
    """

    denom = 1.0 + e * math.cos(nu)
    if denom > 0.0:
        return PolarPoint(p / denom, nu + omega)
    if denom == 0.0:
        radius = math.inf if p != 0.0 else math.nan
    else:
        radius = abs(p / denom)
    return PolarPoint(radius, nu + omega + math.pi)


def evaluate_polar_array(
    e: float, p: float, omega: float, nu: np.ndarray
) -> tuple[np.ndarray, np.ndarray]:
    """Vectorised :func:`evaluate_polar` returning ``(radius, heading)`` arrays."""

    nu = np.asarray(nu, dtype=float)
    denom = 1.0 + e * np.cos(nu)
    with np.errstate(divide="ignore", invalid="ignore"):
        radius = p / denom
    direct = denom > 0.0
    radius = np.where(direct, radius, np.abs(radius))
    heading = nu + omega + np.where(direct, 0.0, np.pi)
    return radius, heading


def clip_radius(params: OrbitalParameters, cfg: GeometryCfg = GEOMETRY_CFG) -> float:
    """Largest world radius (km) still considered worth drawing."""

    candidates = [cfg.clip_min_km]
    for value in (
        params.focus_range_km * cfg.clip_focus_factor,
        params.semi_latus_rectum * cfg.clip_p_factor,
    ):
        if math.isfinite(value):
            candidates.append(value)
    return max(candidates)


def is_drawable(point: PolarPoint, r_clip: float) -> bool:
    return point.is_finite and point.radius <= r_clip


def sample_anomalies(count: int, cfg: GeometryCfg = GEOMETRY_CFG) -> np.ndarray:
    """True anomalies (radians) covering the fixed sampling domain."""

    count = max(1, int(count))
    return np.radians(np.linspace(cfg.anomaly_min_deg, cfg.anomaly_max_deg, count))


def sample_trajectory(
    params: OrbitalParameters, cfg: GeometryCfg = GEOMETRY_CFG
) -> Iterator[PolarPoint]:
    """Yield drawable points of the full conic in increasing anomaly order.

    The domain is fixed and independent of the start/end anomalies so the
    whole orbit shape is always available as background.
    """

    r_clip = clip_radius(params, cfg)
    radius, heading = evaluate_polar_array(
        params.eccentricity,
        params.semi_latus_rectum,
        params.omega_rad,
        sample_anomalies(params.sample_count, cfg),
    )
    keep = np.isfinite(radius) & np.isfinite(heading) & (radius <= r_clip)
    dropped = int(radius.size - np.count_nonzero(keep))
    for r, h in zip(radius[keep], heading[keep]):
        yield PolarPoint(float(r), float(h))
    logger.debug(
        "Sampled %d anomalies, dropped %d beyond r_clip=%.0f km",
        params.sample_count,
        dropped,
        r_clip,
    )


def perigee_radius(e: float, p: float) -> float:
    denom = 1.0 + e
    if denom == 0.0:
        return math.inf
    return p / denom


__all__ = [
    "clip_radius",
    "evaluate_polar",
    "evaluate_polar_array",
    "is_drawable",
    "perigee_radius",
    "sample_anomalies",
    "sample_trajectory",
]
