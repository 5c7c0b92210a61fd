"""Assemble a full drawable scene from parameters and viewport size."""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from .annotate import annotate, sweep_angle_deg
from .config import (
    ANNOTATION_CFG,
    GEOMETRY_CFG,
    VIEWPORT_CFG,
    AnnotationCfg,
    GeometryCfg,
    ViewportCfg,
)
from .geometry import clip_radius, sample_trajectory
from .model import OrbitalParameters, Scene
from .projection import ViewportProjector
from .segments import build_segments


logger = logging.getLogger(__name__)


def build_scene(
    params: OrbitalParameters,
    size: Optional[Sequence[Optional[float]]],
    *,
    geometry_cfg: GeometryCfg = GEOMETRY_CFG,
    viewport_cfg: ViewportCfg = VIEWPORT_CFG,
    annotation_cfg: AnnotationCfg = ANNOTATION_CFG,
) -> Scene:
    """Recompute the scene; a pure function of ``(params, size)``."""

    params = params.normalized()
    projector = ViewportProjector.for_size(size, params.focus_range_km, viewport_cfg)
    r_clip = clip_radius(params, geometry_cfg)

    projected = (
        projector.world_to_screen(*point.to_world())
        for point in sample_trajectory(params, geometry_cfg)
    )
    segments = build_segments(projected, projector.max_gap_px)
    features = annotate(params, projector, r_clip, annotation_cfg)
    logger.debug(
        "Scene %gx%g: %d segments, %d/%d features valid",
        projector.viewport.width,
        projector.viewport.height,
        len(segments),
        sum(1 for item in features if item.valid),
        len(features),
    )
    return Scene(
        segments=tuple(segments),
        features=features,
        projector=projector,
        r_clip=r_clip,
        sweep_angle_deg=sweep_angle_deg(params),
        params=params,
    )


__all__ = ["build_scene"]
