"""Preset orbital parameter sets for the viewer."""
from __future__ import annotations

from dataclasses import dataclass

from orbit_conic.core.model import OrbitalParameters


@dataclass(frozen=True)
class Preset:
    key: str
    name: str
    params: OrbitalParameters
    description: str


PRESET_DEFINITIONS: tuple[Preset, ...] = (
    Preset(
        key="hyperbolic",
        name="Hyperbolic flyby",
        params=OrbitalParameters(
            eccentricity=1.0558,
            semi_latus_rectum=14_247.47,
            argument_of_periapsis=31.62,
            start_anomaly=-71.39,
            end_anomaly=48.61,
            sample_count=500,
            focus_range_km=15_000.0,
        ),
        description="Documented default: mildly hyperbolic, 120° between anomalies.",
    ),
    Preset(
        key="circular",
        name="Circular",
        params=OrbitalParameters(
            eccentricity=0.0,
            semi_latus_rectum=10_000.0,
            argument_of_periapsis=0.0,
            start_anomaly=0.0,
            end_anomaly=90.0,
        ),
        description="e = 0, radius 10 000 km; perigee coincides with the start point.",
    ),
    Preset(
        key="elliptical",
        name="Elliptical",
        params=OrbitalParameters(
            eccentricity=0.5,
            semi_latus_rectum=9_000.0,
            argument_of_periapsis=-40.0,
            start_anomaly=-60.0,
            end_anomaly=75.0,
        ),
        description="Moderate ellipse with a rotated apse line.",
    ),
    Preset(
        key="parabolic",
        name="Near-parabolic",
        params=OrbitalParameters(
            eccentricity=1.0,
            semi_latus_rectum=12_000.0,
            argument_of_periapsis=90.0,
            start_anomaly=-100.0,
            end_anomaly=100.0,
        ),
        description="e = 1; the far end of the sweep escapes past the clip radius.",
    ),
    Preset(
        key="extreme",
        name="Extreme hyperbola",
        params=OrbitalParameters(
            eccentricity=3.0,
            semi_latus_rectum=1_000.0,
            argument_of_periapsis=0.0,
            start_anomaly=-60.0,
            end_anomaly=60.0,
        ),
        description="e = 3: most samples near the asymptotes are clipped.",
    ),
)

PRESETS: dict[str, Preset] = {preset.key: preset for preset in PRESET_DEFINITIONS}
PRESET_DISPLAY_ORDER: list[str] = [preset.key for preset in PRESET_DEFINITIONS]
DEFAULT_PRESET_KEY = PRESET_DISPLAY_ORDER[0]
DEFAULT_PARAMS = PRESETS[DEFAULT_PRESET_KEY].params


def get_preset(key: str) -> Preset:
    return PRESETS[key.strip().lower()]


__all__ = [
    "DEFAULT_PARAMS",
    "DEFAULT_PRESET_KEY",
    "PRESET_DEFINITIONS",
    "PRESET_DISPLAY_ORDER",
    "PRESETS",
    "Preset",
    "get_preset",
]
