"""Recording helpers that dump computed scenes to disk for inspection."""
from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from .model import Arc, Feature, Label, Line, Marker, Scene, Vector
from .segments import max_segment_gap


logger = logging.getLogger(__name__)


class SceneLogger:
    """Buffered writer that stores scene samples and features as CSV files.

    Per-scene summaries are appended to ``scenes.jsonl`` as they arrive, so
    nothing accumulates in memory; ``meta.json`` holds the run header.
    """

    SAMPLES_HEADER = ["scene", "segment", "index", "sx", "sy", "x", "y", "visible"]
    FEATURES_HEADER = ["scene", "name", "kind", "style", "valid", "details"]

    def __init__(
        self,
        root_dir: str | Path = "data/scenes",
        run_id: Optional[str] = None,
        *,
        samples_flush_threshold: int = 500,
        features_flush_threshold: int = 50,
        scenes_flush_threshold: int = 1,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        def make_candidate(suffix: Optional[int] = None) -> str:
            base = run_id or f"{timestamp}_scene"
            if suffix is None:
                return base
            if run_id:
                return f"{run_id}_{suffix}"
            return f"{base}_{suffix:02d}"

        candidate_id = make_candidate()
        suffix = 1
        while (self.root_dir / candidate_id).exists():
            candidate_id = make_candidate(suffix)
            suffix += 1

        self.run_id = candidate_id
        self.run_dir = self.root_dir / self.run_id
        self.run_dir.mkdir(parents=True, exist_ok=False)

        self.samples_path = self.run_dir / "samples.csv"
        self.features_path = self.run_dir / "features.csv"
        self.scenes_path = self.run_dir / "scenes.jsonl"
        self.meta_path = self.run_dir / "meta.json"

        self._samples_file = self.samples_path.open("w", newline="", encoding="utf-8")
        self._samples_file.write(",".join(self.SAMPLES_HEADER) + "\n")
        self._features_file = self.features_path.open("w", newline="", encoding="utf-8")
        self._features_file.write(",".join(self.FEATURES_HEADER) + "\n")
        self._scenes_file = self.scenes_path.open("w", encoding="utf-8")

        self._samples_buffer: list[str] = []
        self._features_buffer: list[str] = []
        self._samples_threshold = max(1, samples_flush_threshold)
        self._features_threshold = max(1, features_flush_threshold)
        self._scenes_buffer: list[str] = []
        self._scenes_threshold = max(1, scenes_flush_threshold)
        self._scene_count = 0
        self.write_meta()

        last_scene_marker = self.root_dir / "last_scene.txt"
        last_scene_marker.write_text(self.run_id, encoding="utf-8")
        logger.info("Recording scenes to %s", self.run_dir)

    @property
    def scene_count(self) -> int:
        return self._scene_count

    def log_scene(self, scene: Scene) -> None:
        index = self._scene_count
        projector = scene.projector
        for seg_idx, segment in enumerate(scene.segments):
            for pt_idx, point in enumerate(segment.points):
                x, y = projector.screen_to_world(point.x, point.y)
                self._log_sample(
                    [index, seg_idx, pt_idx, point.x, point.y, x, y, int(projector.contains(point))]
                )
        for feature in scene.features:
            self._log_feature(
                [index, feature.name, type(feature).__name__, feature.style, int(feature.valid),
                 self._describe(feature)]
            )
        width, height = scene.size
        self._log_scene_meta(
            {
                "scene": index,
                "params": scene.params.as_dict(),
                "viewport": {"width": width, "height": height},
                "scale_px_per_km": projector.scale,
                "effective_focus_range_km": projector.effective_focus_range_km,
                "max_gap_px": projector.max_gap_px,
                "r_clip_km": scene.r_clip,
                "sweep_angle_deg": scene.sweep_angle_deg,
                "segments": [len(segment) for segment in scene.segments],
                "max_in_segment_gap_px": max(
                    (max_segment_gap(segment) for segment in scene.segments), default=0.0
                ),
            }
        )
        self._scene_count += 1

    def write_meta(self, extra: dict | None = None) -> None:
        meta = {
            "run_id": self.run_id,
            "scene_count": self._scene_count,
            "files": {
                "samples": self.samples_path.name,
                "features": self.features_path.name,
                "scenes": self.scenes_path.name,
            },
        }
        if extra:
            meta.update(extra)
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True)

    def close(self) -> None:
        self._flush_samples()
        self._flush_features()
        self._flush_scenes()
        self.write_meta()
        self._samples_file.close()
        self._features_file.close()
        self._scenes_file.close()

    def _log_sample(self, values: Sequence[float]) -> None:
        self._samples_buffer.append(",".join(self._format_value(v) for v in values))
        if len(self._samples_buffer) >= self._samples_threshold:
            self._flush_samples()

    def _log_feature(self, values: Sequence[object]) -> None:
        self._features_buffer.append(",".join(self._format_feature_value(v) for v in values))
        if len(self._features_buffer) >= self._features_threshold:
            self._flush_features()

    def _log_scene_meta(self, meta: dict) -> None:
        self._scenes_buffer.append(json.dumps(meta, sort_keys=True))
        if len(self._scenes_buffer) >= self._scenes_threshold:
            self._flush_scenes()

    def _flush_samples(self) -> None:
        if self._samples_buffer:
            self._samples_file.write("\n".join(self._samples_buffer) + "\n")
            self._samples_file.flush()
            self._samples_buffer.clear()

    def _flush_features(self) -> None:
        if self._features_buffer:
            self._features_file.write("\n".join(self._features_buffer) + "\n")
            self._features_file.flush()
            self._features_buffer.clear()

    def _flush_scenes(self) -> None:
        if self._scenes_buffer:
            self._scenes_file.write("\n".join(self._scenes_buffer) + "\n")
            self._scenes_file.flush()
            self._scenes_buffer.clear()

    @staticmethod
    def _describe(feature: Feature) -> str:
        if isinstance(feature, Marker):
            details = {"center": list(feature.center), "radius_px": feature.radius_px}
        elif isinstance(feature, Vector):
            details = {"tail": list(feature.tail), "tip": list(feature.tip)}
        elif isinstance(feature, Line):
            details = {"start": list(feature.start), "end": list(feature.end), "dashed": feature.dashed}
        elif isinstance(feature, Arc):
            details = {
                "center": list(feature.center),
                "radius_px": feature.radius_px,
                "start_angle": feature.start_angle,
                "end_angle": feature.end_angle,
            }
        elif isinstance(feature, Label):
            details = {"text": feature.text, "position": list(feature.position)}
        else:
            details = {}
        return json.dumps(details, ensure_ascii=False)

    @staticmethod
    def _format_value(value: float) -> str:
        return f"{value:.10g}"

    @staticmethod
    def _format_feature_value(value: object) -> str:
        if isinstance(value, (int, float)):
            return f"{value:.10g}"
        text = str(value)
        if "," in text or '"' in text:
            return '"' + text.replace('"', '""') + '"'
        return text

    def __enter__(self) -> "SceneLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = ["SceneLogger"]
