"""Rendering helpers for the conic trajectory viewer."""

from .surface import (
    Color,
    DrawingSurface,
    Pen,
    arc_points,
    dash_polyline,
)
from .renderer import SceneRenderer
from .assets import FontLibrary, load_font
from .pygame_surface import PygameSurface
from .matplotlib_surface import MatplotlibSurface

__all__ = [
    "Color",
    "DrawingSurface",
    "FontLibrary",
    "MatplotlibSurface",
    "Pen",
    "PygameSurface",
    "SceneRenderer",
    "arc_points",
    "dash_polyline",
    "load_font",
]
