"""Configuration dataclasses for the conic trajectory viewer."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeometryCfg:
    anomaly_min_deg: float = -179.9
    anomaly_max_deg: float = 179.9
    default_sample_count: int = 1000
    min_sample_count: int = 2
    default_focus_range_km: float = 15_000.0
    clip_focus_factor: float = 3.0
    clip_p_factor: float = 3.0
    clip_min_km: float = 1e6


@dataclass(frozen=True)
class ViewportCfg:
    min_width: float = 200.0
    min_height: float = 200.0
    narrow_breakpoint_px: float = 480.0
    narrow_focus_factor: float = 0.25
    narrow_focus_min_km: float = 3_000.0
    gap_fraction: float = 0.06
    gap_min_px: float = 20.0


@dataclass(frozen=True)
class AnnotationCfg:
    """Display constants for the annotated features.

    None of these are physically derived; they only size the illustration.
    """

    apse_line_length_km: float = 1.2 * 15_000.0
    omega_arc_radius_km: float = 3_500.0
    sweep_arc_factor: float = 1.15
    sweep_label_factor: float = 1.15
    velocity_vector_px: float = 60.0
    velocity_head_px: float = 10.0
    position_head_px: float = 12.0
    arrow_head_angle_deg: float = 30.0
    anomaly_marker_px: float = 5.0
    perigee_marker_px: float = 4.0
    reference_circle_km: float = 12_000.0
    body_radius_km: float = 6_378.1
    body_name: str = "Earth"
    axis_length_factor: float = 0.9
    axis_label_offset_px: float = 10.0
    position_label_offset: tuple[float, float] = (15.0, -10.0)
    velocity_label_offset: tuple[float, float] = (10.0, 10.0)
    perigee_label_offset: tuple[float, float] = (10.0, 0.0)
    apse_label_offset: tuple[float, float] = (-50.0, -20.0)
    legacy_sweep_label: bool = False
    legacy_sweep_text: str = "120°"


@dataclass(frozen=True)
class RenderCfg:
    windowed_default_size: tuple[int, int] = (1000, 700)
    fps: int = 60
    background_color: tuple[int, int, int] = (255, 255, 255)
    text_color: tuple[int, int, int] = (0, 0, 0)
    hud_text_color: tuple[int, int, int] = (40, 48, 64)
    hud_background_color: tuple[int, int, int, int] = (240, 244, 250, 220)
    trajectory_color: tuple[int, int, int] = (33, 150, 243)
    trajectory_width: float = 2.5
    reference_circle_color: tuple[int, int, int] = (76, 175, 80)
    reference_circle_width: float = 2.0
    body_fill_color: tuple[int, int, int] = (64, 224, 208)
    body_outline_color: tuple[int, int, int] = (0, 0, 0)
    body_outline_width: float = 1.2
    marker_fill_color: tuple[int, int, int] = (255, 255, 255)
    marker_outline_color: tuple[int, int, int] = (0, 0, 0)
    marker_outline_width: float = 1.2
    position_vector_color: tuple[int, int, int] = (255, 0, 0)
    velocity_vector_color: tuple[int, int, int] = (33, 150, 243)
    vector_width: float = 2.0
    perigee_color: tuple[int, int, int] = (0, 0, 0)
    perigee_line_width: float = 1.0
    apse_line_color: tuple[int, int, int] = (128, 128, 128)
    apse_line_width: float = 1.0
    dash_pattern: tuple[float, float] = (5.0, 3.0)
    omega_arc_color: tuple[int, int, int] = (255, 152, 0)
    omega_arc_width: float = 1.5
    sweep_arc_color: tuple[int, int, int] = (156, 39, 176)
    sweep_arc_width: float = 2.0
    axis_color: tuple[int, int, int] = (102, 102, 102)
    axis_width: float = 1.0
    font_names: tuple[str, ...] = ("arial", "dejavusans", "liberationsans")
    label_font_size: int = 12
    bold_font_size: int = 13
    body_font_size: int = 14
    hud_font_size: int = 14


GEOMETRY_CFG = GeometryCfg()
VIEWPORT_CFG = ViewportCfg()
ANNOTATION_CFG = AnnotationCfg()
RENDER_CFG = RenderCfg()


__all__ = [
    "ANNOTATION_CFG",
    "GEOMETRY_CFG",
    "RENDER_CFG",
    "VIEWPORT_CFG",
    "AnnotationCfg",
    "GeometryCfg",
    "RenderCfg",
    "ViewportCfg",
]
