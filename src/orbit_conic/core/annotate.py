"""Derived display features: anomaly markers, vectors, perigee, apse line, arcs."""
from __future__ import annotations

import math
from typing import NamedTuple

from .config import ANNOTATION_CFG, AnnotationCfg
from .geometry import evaluate_polar, is_drawable, perigee_radius
from .model import (
    Arc,
    Feature,
    Label,
    Line,
    Marker,
    OrbitalParameters,
    PolarPoint,
    ScreenPoint,
    Vector,
)
from .projection import ViewportProjector


class AnomalyPoint(NamedTuple):
    polar: PolarPoint
    screen: ScreenPoint
    valid: bool


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def heading_sweep_deg(theta0: float, thetaf: float) -> float:
    """Counter-clockwise angle from heading *theta0* to *thetaf*, in degrees."""

    return math.degrees((thetaf - theta0) % (2.0 * math.pi)) % 360.0


def sweep_angle_deg(params: OrbitalParameters) -> float:
    """Angle spanned by the sweep arc, in ``[0, 360)``.

    Measured between the headings of the two anomaly points, so a point
    reflected onto the opposite branch shifts the result by 180 degrees.
    """

    e, p, omega = params.eccentricity, params.semi_latus_rectum, params.omega_rad
    start = evaluate_polar(e, p, omega, math.radians(params.start_anomaly))
    end = evaluate_polar(e, p, omega, math.radians(params.end_anomaly))
    return heading_sweep_deg(start.heading, end.heading)


def _offset(point: ScreenPoint, offset: tuple[float, float]) -> ScreenPoint:
    return ScreenPoint(point.x + offset[0], point.y + offset[1])


def arrow_head(
    tail: ScreenPoint, tip: ScreenPoint, length_px: float, angle_deg: float
) -> tuple[ScreenPoint, ScreenPoint, ScreenPoint]:
    """Triangle at *tip* pointing away from *tail*."""

    angle = math.atan2(tail.y - tip.y, tip.x - tail.x)
    spread = math.radians(angle_deg)
    left = ScreenPoint(
        tip.x - length_px * math.cos(angle - spread),
        tip.y + length_px * math.sin(angle - spread),
    )
    right = ScreenPoint(
        tip.x - length_px * math.cos(angle + spread),
        tip.y + length_px * math.sin(angle + spread),
    )
    return tip, left, right


def locate_anomaly(
    params: OrbitalParameters,
    anomaly_deg: float,
    projector: ViewportProjector,
    r_clip: float,
) -> AnomalyPoint:
    polar = evaluate_polar(
        params.eccentricity,
        params.semi_latus_rectum,
        params.omega_rad,
        math.radians(anomaly_deg),
    )
    if polar.is_finite:
        screen = projector.world_to_screen(*polar.to_world())
    else:
        screen = ScreenPoint(math.nan, math.nan)
    return AnomalyPoint(polar, screen, is_drawable(polar, r_clip) and screen.is_finite)


def _anomaly_features(
    prefix: str,
    point: AnomalyPoint,
    origin: ScreenPoint,
    position_text: str,
    velocity_text: str,
    cfg: AnnotationCfg,
) -> list[Feature]:
    valid = point.valid
    screen = point.screen
    position_head = arrow_head(origin, screen, cfg.position_head_px, cfg.arrow_head_angle_deg)

    # Direction only; the length is illustrative.
    angle = point.polar.heading + math.pi / 2.0
    tip = ScreenPoint(
        screen.x + cfg.velocity_vector_px * math.cos(angle),
        screen.y - cfg.velocity_vector_px * math.sin(angle),
    )
    velocity_head = arrow_head(screen, tip, cfg.velocity_head_px, cfg.arrow_head_angle_deg)
    return [
        Marker(f"{prefix}_marker", "anomaly_marker", screen, cfg.anomaly_marker_px, valid=valid),
        Vector(f"{prefix}_position_vector", "position_vector", origin, screen, position_head, valid=valid),
        Label(
            f"{prefix}_position_label",
            "position_label",
            position_text,
            _offset(screen, cfg.position_label_offset),
            valid=valid,
        ),
        Vector(f"{prefix}_velocity_vector", "velocity_vector", screen, tip, velocity_head, valid=valid),
        Label(
            f"{prefix}_velocity_label",
            "velocity_label",
            velocity_text,
            _offset(tip, cfg.velocity_label_offset),
            valid=valid,
        ),
    ]


def _perigee_features(
    params: OrbitalParameters,
    projector: ViewportProjector,
    origin: ScreenPoint,
    r_clip: float,
    cfg: AnnotationCfg,
) -> list[Feature]:
    radius = perigee_radius(params.eccentricity, params.semi_latus_rectum)
    valid = math.isfinite(radius) and 0.0 < radius <= r_clip
    omega = params.omega_rad
    if valid:
        point = projector.world_to_screen(radius * math.cos(omega), radius * math.sin(omega))
    else:
        point = ScreenPoint(math.nan, math.nan)
    return [
        Line("perigee_line", "perigee", origin, point, valid=valid),
        Marker("perigee_marker", "perigee", point, cfg.perigee_marker_px, valid=valid),
        Label("perigee_label", "perigee_label", "Perigee", _offset(point, cfg.perigee_label_offset), valid=valid),
    ]


def _apse_features(
    params: OrbitalParameters,
    projector: ViewportProjector,
    origin: ScreenPoint,
    cfg: AnnotationCfg,
) -> list[Feature]:
    omega = params.omega_rad
    length = cfg.apse_line_length_km
    end = projector.world_to_screen(length * math.cos(omega), length * math.sin(omega))
    valid = end.is_finite
    return [
        Line("apse_line", "apse_line", origin, end, dashed=True, valid=valid),
        Label("apse_label", "apse_label", "Apse line", _offset(end, cfg.apse_label_offset), valid=valid),
    ]


def _omega_arc_features(
    params: OrbitalParameters,
    projector: ViewportProjector,
    origin: ScreenPoint,
    cfg: AnnotationCfg,
) -> list[Feature]:
    omega_deg = params.omega_wrapped
    omega = math.radians(omega_deg)
    radius_px = abs(projector.km_to_px(cfg.omega_arc_radius_km))
    # Screen angles run clockwise, so world angle w sits at -w.
    if omega >= 0.0:
        start, end = -omega, 0.0
    else:
        start, end = 0.0, -omega
    valid = math.isfinite(radius_px) and radius_px > 1e-6
    label_at = ScreenPoint(
        origin.x + radius_px * math.cos(omega / 2.0),
        origin.y - radius_px * math.sin(omega / 2.0),
    )
    return [
        Arc("omega_arc", "omega_arc", origin, radius_px, start, end, valid=valid),
        Label("omega_label", "arc_label", f"{round_half_up(omega_deg)}°", label_at, valid=valid),
    ]


def _sweep_arc_features(
    projector: ViewportProjector,
    origin: ScreenPoint,
    start: AnomalyPoint,
    end: AnomalyPoint,
    cfg: AnnotationCfg,
) -> list[Feature]:
    radius_km = max(abs(start.polar.radius), abs(end.polar.radius)) * cfg.sweep_arc_factor
    radius_px = projector.km_to_px(radius_km)
    valid = start.valid and end.valid and math.isfinite(radius_px) and radius_px > 1e-6
    theta0 = start.polar.heading
    thetaf = end.polar.heading
    mid = theta0 + ((thetaf - theta0) % (2.0 * math.pi)) / 2.0
    label_radius = radius_km * cfg.sweep_label_factor
    if valid:
        label_at = projector.world_to_screen(label_radius * math.cos(mid), label_radius * math.sin(mid))
    else:
        label_at = ScreenPoint(math.nan, math.nan)
    if cfg.legacy_sweep_label:
        text = cfg.legacy_sweep_text
    else:
        text = f"{round_half_up(heading_sweep_deg(theta0, thetaf)) % 360}°"
    return [
        Arc("sweep_arc", "sweep_arc", origin, radius_px, -thetaf, -theta0, valid=valid),
        Label("sweep_label", "arc_label", text, label_at, valid=valid),
    ]


def _frame_features(
    projector: ViewportProjector, origin: ScreenPoint, cfg: AnnotationCfg
) -> tuple[list[Feature], list[Feature]]:
    reference_px = projector.km_to_px(cfg.reference_circle_km)
    body_px = projector.km_to_px(cfg.body_radius_km)
    background: list[Feature] = [
        Marker("reference_circle", "reference_circle", origin, reference_px, filled=False,
               valid=reference_px > 0.0),
        Marker("body", "body", origin, body_px, valid=body_px > 0.0),
        Label("body_label", "body_label", cfg.body_name, origin),
    ]
    axis_px = projector.km_to_px(projector.effective_focus_range_km * cfg.axis_length_factor)
    x_end = ScreenPoint(origin.x + axis_px, origin.y)
    y_end = ScreenPoint(origin.x, origin.y - axis_px)
    gap = cfg.axis_label_offset_px
    axes: list[Feature] = [
        Line("x_axis", "axis", origin, x_end),
        Line("y_axis", "axis", origin, y_end),
        Label("x_axis_label", "axis_label", "x", ScreenPoint(x_end.x + gap, x_end.y)),
        Label("y_axis_label", "axis_label", "y", ScreenPoint(y_end.x, y_end.y - gap)),
    ]
    return background, axes


def annotate(
    params: OrbitalParameters,
    projector: ViewportProjector,
    r_clip: float,
    cfg: AnnotationCfg = ANNOTATION_CFG,
) -> tuple[Feature, ...]:
    """Compute every named feature of the scene in draw order.

    Each feature carries its own validity flag; nothing here raises on
    degenerate input.
    """

    origin = projector.origin
    start = locate_anomaly(params, params.start_anomaly, projector, r_clip)
    end = locate_anomaly(params, params.end_anomaly, projector, r_clip)

    background, axes = _frame_features(projector, origin, cfg)
    features: list[Feature] = list(background)
    features += _anomaly_features("start", start, origin, "r₀", "v₀", cfg)
    features += _anomaly_features("end", end, origin, "r", "v", cfg)
    features += _perigee_features(params, projector, origin, r_clip, cfg)
    features += _apse_features(params, projector, origin, cfg)
    features += _omega_arc_features(params, projector, origin, cfg)
    features += _sweep_arc_features(projector, origin, start, end, cfg)
    features += axes
    return tuple(features)


__all__ = [
    "AnomalyPoint",
    "annotate",
    "arrow_head",
    "heading_sweep_deg",
    "locate_anomaly",
    "round_half_up",
    "sweep_angle_deg",
]
