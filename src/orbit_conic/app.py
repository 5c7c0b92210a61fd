"""Interactive pygame viewer for conic trajectories."""
from __future__ import annotations

import logging
from functools import partial
from typing import Optional, Sequence

import pygame

from orbit_conic.core.config import ANNOTATION_CFG, RENDER_CFG, AnnotationCfg, RenderCfg
from orbit_conic.core.logging_utils import SceneLogger
from orbit_conic.core.model import OrbitalParameters, Scene
from orbit_conic.core.scene import build_scene
from orbit_conic.core.scheduler import RedrawScheduler
from orbit_conic.data.presets import PRESET_DISPLAY_ORDER, PRESETS
from orbit_conic.render import FontLibrary, PygameSurface, SceneRenderer
from orbit_conic.render.ui import build_hud_panel, scene_summary_lines


logger = logging.getLogger(__name__)

# key -> (parameter, step); Shift multiplies the step by ten
PARAMETER_KEYS: dict[int, tuple[str, float]] = {
    pygame.K_q: ("eccentricity", 0.01),
    pygame.K_a: ("eccentricity", -0.01),
    pygame.K_w: ("semi_latus_rectum", 100.0),
    pygame.K_s: ("semi_latus_rectum", -100.0),
    pygame.K_e: ("argument_of_periapsis", 1.0),
    pygame.K_d: ("argument_of_periapsis", -1.0),
    pygame.K_r: ("start_anomaly", 1.0),
    pygame.K_f: ("start_anomaly", -1.0),
    pygame.K_t: ("end_anomaly", 1.0),
    pygame.K_g: ("end_anomaly", -1.0),
    pygame.K_y: ("focus_range_km", 500.0),
    pygame.K_h: ("focus_range_km", -500.0),
}


def nudge_parameter(
    params: OrbitalParameters, name: str, step: float
) -> OrbitalParameters:
    """Shift one parameter by *step*, clamped to its editable range."""

    moved = params.replace(**{name: getattr(params, name) + step})
    return moved.clamped_to_editable_ranges(name)


def _set_display_mode_with_vsync(size: tuple[int, int], flags: int = 0) -> pygame.Surface:
    """Create the display surface with double buffering and vsync when available."""
    flags |= pygame.DOUBLEBUF
    try:
        return pygame.display.set_mode(size, flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode(size, flags)
    except pygame.error as err:
        try:
            return pygame.display.set_mode(size, flags)
        except pygame.error:
            raise err


def run_viewer(
    params: OrbitalParameters,
    *,
    size: Optional[Sequence[int]] = None,
    preset_key: Optional[str] = None,
    render_cfg: RenderCfg = RENDER_CFG,
    annotation_cfg: AnnotationCfg = ANNOTATION_CFG,
    recorder: Optional[SceneLogger] = None,
) -> None:
    pygame.init()
    pygame.display.set_caption("Conic trajectory viewer")
    window_size = tuple(size) if size else render_cfg.windowed_default_size
    _set_display_mode_with_vsync((int(window_size[0]), int(window_size[1])), pygame.RESIZABLE)

    renderer = SceneRenderer(render_cfg)
    fonts = FontLibrary(render_cfg.font_names)
    show_hud = True
    initial_params = params
    preset_index = (
        PRESET_DISPLAY_ORDER.index(preset_key) if preset_key in PRESET_DISPLAY_ORDER else -1
    )
    preset_name = PRESETS[preset_key].name if preset_key in PRESETS else None

    def draw(scene: Scene) -> None:
        screen = pygame.display.get_surface()
        renderer.render(scene, PygameSurface(screen, render_cfg=render_cfg, fonts=fonts))
        if show_hud:
            lines = scene_summary_lines(scene, preset_name=preset_name)
            panel = build_hud_panel(fonts, lines, render_cfg)
            screen.blit(panel, (12, 12))
        if recorder is not None:
            recorder.log_scene(scene)
        pygame.display.flip()

    scheduler = RedrawScheduler(
        params,
        pygame.display.get_surface().get_size(),
        render=draw,
        builder=partial(build_scene, annotation_cfg=annotation_cfg),
    )
    scheduler.request()
    clock = pygame.time.Clock()
    running = True
    logger.info("Viewer started at %dx%d", *pygame.display.get_surface().get_size())
    try:
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    scheduler.notify_resize(event.size)
                elif event.type == pygame.WINDOWSIZECHANGED:
                    scheduler.notify_resize((event.x, event.y))
                elif event.type == pygame.WINDOWEXPOSED:
                    scheduler.request()
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in PARAMETER_KEYS:
                        name, step = PARAMETER_KEYS[event.key]
                        if event.mod & pygame.KMOD_SHIFT:
                            step *= 10.0
                        scheduler.notify_params(nudge_parameter(scheduler.params, name, step))
                    elif event.key == pygame.K_n:
                        preset_index = (preset_index + 1) % len(PRESET_DISPLAY_ORDER)
                        preset = PRESETS[PRESET_DISPLAY_ORDER[preset_index]]
                        preset_name = preset.name
                        scheduler.notify_params(preset.params)
                    elif event.key == pygame.K_BACKSPACE:
                        scheduler.notify_params(initial_params)
                    elif event.key == pygame.K_i:
                        show_hud = not show_hud
                        scheduler.request()
            # At most one recompute-and-render per frame.
            scheduler.flush()
            clock.tick(render_cfg.fps)
    finally:
        logger.info("Viewer closed after %d redraws (%d requests)", scheduler.redraws, scheduler.requests)
        pygame.quit()


__all__ = ["PARAMETER_KEYS", "nudge_parameter", "run_viewer"]
