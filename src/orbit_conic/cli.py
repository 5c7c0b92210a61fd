"""Command line entry point: open the viewer or export a scene image."""
from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from orbit_conic.core.config import ANNOTATION_CFG, RENDER_CFG
from orbit_conic.core.logging_utils import SceneLogger
from orbit_conic.core.model import OrbitalParameters, Scene
from orbit_conic.core.scene import build_scene
from orbit_conic.data.presets import DEFAULT_PRESET_KEY, PRESET_DISPLAY_ORDER, get_preset


logger = logging.getLogger(__name__)

PARAMETER_OPTIONS = {
    "eccentricity": "eccentricity",
    "semi_latus_rectum": "semi_latus_rectum",
    "omega": "argument_of_periapsis",
    "nu0": "start_anomaly",
    "nuf": "end_anomaly",
    "samples": "sample_count",
    "focus_range": "focus_range_km",
}


def parse_size(text: str) -> tuple[int, int]:
    try:
        width_text, height_text = text.lower().split("x", 1)
        width, height = int(width_text), int(height_text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {text!r}") from exc
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError(f"size must be positive, got {text!r}")
    return width, height


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orbit-conic",
        description="Draw a Keplerian conic trajectory from its orbital parameters.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive viewer with the default hyperbola
  orbit-conic

  # Export an ellipse to a PNG without opening a window
  orbit-conic --preset elliptical --export figures/ellipse.png

  # Record the computed scene data while exploring
  orbit-conic --record data/scenes
        """,
    )
    parser.add_argument(
        "--preset",
        default=DEFAULT_PRESET_KEY,
        help=f"Starting parameter set ({', '.join(PRESET_DISPLAY_ORDER)})",
    )
    parser.add_argument("-e", "--eccentricity", type=float, help="Eccentricity e")
    parser.add_argument("-p", "--semi-latus-rectum", type=float, help="Semi-latus rectum p (km)")
    parser.add_argument("--omega", type=float, help="Argument of periapsis (deg)")
    parser.add_argument("--nu0", type=float, help="Start true anomaly (deg)")
    parser.add_argument("--nuf", type=float, help="End true anomaly (deg)")
    parser.add_argument("--samples", type=int, help="Number of trajectory samples")
    parser.add_argument("--focus-range", type=float, help="World half-extent used for scaling (km)")
    parser.add_argument(
        "--size",
        type=parse_size,
        help="Viewport size as WIDTHxHEIGHT in CSS pixels",
    )
    parser.add_argument("--export", type=Path, help="Write the scene to an image file and exit")
    parser.add_argument("--dpi", type=float, default=100.0, help="Export resolution (default: 100)")
    parser.add_argument(
        "--pixel-ratio",
        type=float,
        default=1.0,
        help="Device pixel ratio for exported images (default: 1)",
    )
    parser.add_argument("--record", type=Path, help="Directory to record computed scenes into")
    parser.add_argument(
        "--legacy-sweep-label",
        action="store_true",
        help="Label the anomaly sweep arc with the fixed legacy text",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    return parser


def params_from_args(args: argparse.Namespace) -> OrbitalParameters:
    params = get_preset(args.preset).params
    changes = {
        field: getattr(args, option)
        for option, field in PARAMETER_OPTIONS.items()
        if getattr(args, option) is not None
    }
    return params.replace(**changes) if changes else params


def export_scene(
    scene: Scene,
    path: Path,
    *,
    dpi: float = 100.0,
    pixel_ratio: float = 1.0,
) -> Path:
    from orbit_conic.render import MatplotlibSurface, SceneRenderer

    surface = MatplotlibSurface(scene.size, dpi=dpi, pixel_ratio=pixel_ratio)
    SceneRenderer(RENDER_CFG).render(scene, surface)
    return surface.save(path)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        params = params_from_args(args)
    except KeyError:
        parser.error(f"unknown preset {args.preset!r}; choose from {', '.join(PRESET_DISPLAY_ORDER)}")

    annotation_cfg = ANNOTATION_CFG
    if args.legacy_sweep_label:
        annotation_cfg = replace(ANNOTATION_CFG, legacy_sweep_label=True)

    recorder = SceneLogger(args.record) if args.record else None
    try:
        if args.export:
            size = args.size or RENDER_CFG.windowed_default_size
            scene = build_scene(params, size, annotation_cfg=annotation_cfg)
            if recorder is not None:
                recorder.log_scene(scene)
            path = export_scene(scene, args.export, dpi=args.dpi, pixel_ratio=args.pixel_ratio)
            logger.info("Wrote %s", path)
            print(f"Scene written to {path}")
            return 0

        from orbit_conic.app import run_viewer

        run_viewer(
            params,
            size=args.size,
            preset_key=args.preset.strip().lower(),
            annotation_cfg=annotation_cfg,
            recorder=recorder,
        )
        return 0
    finally:
        if recorder is not None:
            recorder.close()


__all__ = ["build_parser", "export_scene", "main", "params_from_args", "parse_size"]
