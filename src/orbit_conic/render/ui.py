from __future__ import annotations

import pygame

from orbit_conic.core.config import RENDER_CFG, RenderCfg
from orbit_conic.core.model import Scene

from .assets import FontLibrary

# (label, value format, key hint) per editable parameter
_PARAMETER_ROWS = (
    ("e", "{p.eccentricity:.4f}", "Q/A"),
    ("p", "{p.semi_latus_rectum:,.1f} km", "W/S"),
    ("ω", "{p.argument_of_periapsis:.2f}°", "E/D"),
    ("ν₀", "{p.start_anomaly:.2f}°", "R/F"),
    ("νf", "{p.end_anomaly:.2f}°", "T/G"),
    ("focus", "{p.focus_range_km:,.0f} km", "Y/H"),
)


def scene_summary_lines(scene: Scene, *, preset_name: str | None = None) -> list[str]:
    params = scene.params
    lines = [preset_name] if preset_name else []
    for label, fmt, keys in _PARAMETER_ROWS:
        lines.append(f"{label:<6}{fmt.format(p=params):>14}  [{keys}]")
    lines.append(f"{'sweep':<6}{scene.sweep_angle_deg:>13.2f}°")
    lines.append(f"{'segs':<6}{len(scene.segments):>14d}")
    lines.append("N preset  Backspace reset  I panel  Esc quit")
    return lines


def build_hud_panel(
    fonts: FontLibrary,
    lines: list[str],
    render_cfg: RenderCfg = RENDER_CFG,
    *,
    padding: int = 12,
) -> pygame.Surface:
    """Translucent rounded panel with one text row per entry in *lines*."""

    if not lines:
        raise ValueError("HUD panel needs at least one line")
    size = render_cfg.hud_font_size
    rows = [fonts.render(text, render_cfg.hud_text_color, size=size) for text in lines]
    row_height = fonts.get(size).get_linesize()
    width = max(row.get_width() for row in rows) + 2 * padding
    height = row_height * len(rows) + 2 * padding
    panel = pygame.Surface((width, height), pygame.SRCALPHA)
    pygame.draw.rect(panel, render_cfg.hud_background_color, panel.get_rect(), border_radius=10)
    y = padding
    for row in rows:
        panel.blit(row, (padding, y))
        y += row_height
    return panel


__all__ = ["build_hud_panel", "scene_summary_lines"]
