"""Walks a :class:`Scene` and issues primitive draw calls."""
from __future__ import annotations

from typing import TYPE_CHECKING

from orbit_conic.core.config import RENDER_CFG
from orbit_conic.core.model import Arc, Feature, Label, Line, Marker, Scene, Vector

from .surface import Color, DrawingSurface, Pen

if TYPE_CHECKING:  # pragma: no cover
    from orbit_conic.core.config import RenderCfg


class SceneRenderer:
    """Draws scenes onto any :class:`DrawingSurface`; no geometry happens here."""

    def __init__(self, render_cfg: RenderCfg = RENDER_CFG) -> None:
        self._cfg = render_cfg
        cfg = render_cfg
        self._pens: dict[str, Pen] = {
            "trajectory": Pen(cfg.trajectory_color, cfg.trajectory_width),
            "reference_circle": Pen(cfg.reference_circle_color, cfg.reference_circle_width),
            "body": Pen(cfg.body_outline_color, cfg.body_outline_width),
            "anomaly_marker": Pen(cfg.marker_outline_color, cfg.marker_outline_width),
            "position_vector": Pen(cfg.position_vector_color, cfg.vector_width),
            "velocity_vector": Pen(cfg.velocity_vector_color, cfg.vector_width),
            "perigee": Pen(cfg.perigee_color, cfg.perigee_line_width),
            "apse_line": Pen(cfg.apse_line_color, cfg.apse_line_width),
            "omega_arc": Pen(cfg.omega_arc_color, cfg.omega_arc_width),
            "sweep_arc": Pen(cfg.sweep_arc_color, cfg.sweep_arc_width),
            "axis": Pen(cfg.axis_color, cfg.axis_width),
        }
        self._fills: dict[str, Color] = {
            "body": cfg.body_fill_color,
            "anomaly_marker": cfg.marker_fill_color,
            "perigee": cfg.perigee_color,
        }
        self._text: dict[str, tuple[Color, int, bool]] = {
            "body_label": (cfg.text_color, cfg.body_font_size, True),
            "position_label": (cfg.position_vector_color, cfg.bold_font_size, True),
            "velocity_label": (cfg.velocity_vector_color, cfg.label_font_size, True),
            "perigee_label": (cfg.text_color, cfg.label_font_size, False),
            "apse_label": (cfg.text_color, cfg.label_font_size, False),
            "arc_label": (cfg.text_color, cfg.label_font_size, False),
            "axis_label": (cfg.text_color, cfg.label_font_size, False),
        }

    def pen(self, style: str) -> Pen:
        return self._pens.get(style, Pen(self._cfg.text_color))

    def render(self, scene: Scene, surface: DrawingSurface) -> int:
        """Draw *scene* and return the number of features drawn."""

        surface.clear(self._cfg.background_color)
        trajectory_pen = self._pens["trajectory"]
        for segment in scene.segments:
            if len(segment) >= 2:
                surface.stroke_path(segment.points, trajectory_pen)
        drawn = 0
        for feature in scene.features:
            if not feature.valid:
                continue
            self._draw_feature(feature, surface)
            drawn += 1
        return drawn

    def _draw_feature(self, feature: Feature, surface: DrawingSurface) -> None:
        if isinstance(feature, Marker):
            pen = self._pens.get(feature.style)
            fill = self._fills.get(feature.style) if feature.filled else None
            surface.circle(feature.center, feature.radius_px, fill=fill, pen=pen)
        elif isinstance(feature, Vector):
            pen = self.pen(feature.style)
            surface.line(feature.tail, feature.tip, pen)
            surface.fill_path(feature.head, pen.color)
        elif isinstance(feature, Line):
            if feature.dashed:
                surface.set_dash(self._cfg.dash_pattern)
            surface.line(feature.start, feature.end, self.pen(feature.style))
            if feature.dashed:
                surface.set_dash(None)
        elif isinstance(feature, Arc):
            surface.arc(
                feature.center,
                feature.radius_px,
                feature.start_angle,
                feature.end_angle,
                self.pen(feature.style),
            )
        elif isinstance(feature, Label):
            color, size, bold = self._text.get(
                feature.style, (self._cfg.text_color, self._cfg.label_font_size, False)
            )
            surface.text(feature.text, feature.position, color, size=size, bold=bold)
        else:
            raise TypeError(f"Unsupported scene feature: {feature!r}")


__all__ = ["SceneRenderer"]
