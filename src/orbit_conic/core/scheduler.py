"""Coalescing redraw scheduling for parameter and viewport changes."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from .model import OrbitalParameters, Scene
from .scene import build_scene


logger = logging.getLogger(__name__)

SceneBuilder = Callable[[OrbitalParameters, Optional[Sequence[float]]], Scene]
SceneConsumer = Callable[[Scene], None]


@dataclass
class FrameTimer:
    """High resolution timer based on :func:`time.perf_counter`."""

    last_time: float = field(default_factory=time.perf_counter)

    def tick(self) -> float:
        now = time.perf_counter()
        dt = now - self.last_time
        self.last_time = now
        return dt


class RedrawScheduler:
    """Collapses bursts of change notifications into one redraw per frame.

    Notifications only record the latest ``(params, size)`` pair and raise
    the pending flag; :meth:`flush` is called once per display refresh and
    runs at most one recompute-and-render cycle.
    """

    def __init__(
        self,
        params: OrbitalParameters,
        size: Optional[Sequence[float]] = None,
        *,
        render: SceneConsumer,
        builder: SceneBuilder = build_scene,
    ) -> None:
        self._params = params
        self._size: Optional[tuple[float, float]] = None
        if size is not None:
            self._size = (size[0], size[1])
        self._render = render
        self._builder = builder
        self._pending = False
        self.requests = 0
        self.redraws = 0
        self.last_scene: Scene | None = None

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def params(self) -> OrbitalParameters:
        return self._params

    @property
    def size(self) -> Optional[tuple[float, float]]:
        return self._size

    def request(self) -> bool:
        """Schedule a redraw; returns ``False`` if one was already pending."""

        self.requests += 1
        if self._pending:
            return False
        self._pending = True
        return True

    def notify_params(self, params: OrbitalParameters) -> bool:
        self._params = params
        return self.request()

    def notify_resize(self, size: Sequence[float]) -> bool:
        self._size = (size[0], size[1])
        return self.request()

    def cancel(self) -> None:
        self._pending = False

    def flush(self) -> Scene | None:
        """Run the pending redraw, if any, and return the scene drawn."""

        if not self._pending:
            return None
        self._pending = False
        timer = FrameTimer()
        scene = self._builder(self._params, self._size)
        build_dt = timer.tick()
        self._render(scene)
        render_dt = timer.tick()
        self.redraws += 1
        self.last_scene = scene
        logger.debug(
            "Redraw %d (%d requests): build %.2f ms, render %.2f ms",
            self.redraws,
            self.requests,
            build_dt * 1000.0,
            render_dt * 1000.0,
        )
        return scene


__all__ = ["FrameTimer", "RedrawScheduler"]
