"""Tests for the scene recorder."""
import csv
import json
import tempfile
import unittest
from pathlib import Path

from orbit_conic.core.logging_utils import SceneLogger
from orbit_conic.core.scene import build_scene
from orbit_conic.data.presets import DEFAULT_PARAMS, get_preset


def read_scenes(path):
    with path.open(encoding="utf-8") as fh:
        return [json.loads(line) for line in fh if line.strip()]


class TestSceneLogger(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_writes_samples_features_and_meta(self):
        scene = build_scene(get_preset("circular").params, (800, 600))
        with SceneLogger(self.root, run_id="demo", samples_flush_threshold=64) as recorder:
            recorder.log_scene(scene)
            self.assertEqual(recorder.scene_count, 1)

        run_dir = self.root / "demo"
        with (run_dir / "samples.csv").open(newline="", encoding="utf-8") as fh:
            rows = list(csv.DictReader(fh))
        self.assertEqual(len(rows), sum(len(segment) for segment in scene.segments))
        self.assertEqual(rows[0]["scene"], "0")
        self.assertAlmostEqual(float(rows[0]["x"]) ** 2 + float(rows[0]["y"]) ** 2, 1e8, delta=1.0)

        with (run_dir / "features.csv").open(newline="", encoding="utf-8") as fh:
            features = list(csv.DictReader(fh))
        self.assertEqual([row["name"] for row in features], [f.name for f in scene.features])
        label = next(row for row in features if row["name"] == "perigee_label")
        self.assertEqual(json.loads(label["details"])["text"], "Perigee")

        meta = json.loads((run_dir / "meta.json").read_text(encoding="utf-8"))
        self.assertEqual(meta["run_id"], "demo")
        self.assertEqual(meta["scene_count"], 1)
        scenes = read_scenes(run_dir / "scenes.jsonl")
        self.assertEqual(len(scenes), 1)
        self.assertEqual(scenes[0]["segments"], [1000])
        self.assertEqual((self.root / "last_scene.txt").read_text(encoding="utf-8"), "demo")

    def test_existing_run_id_gets_suffix(self):
        SceneLogger(self.root, run_id="demo").close()
        second = SceneLogger(self.root, run_id="demo")
        second.close()
        self.assertEqual(second.run_id, "demo_1")

    def test_records_multiple_scenes(self):
        recorder = SceneLogger(self.root, run_id="many")
        recorder.log_scene(build_scene(DEFAULT_PARAMS, (800, 600)))
        recorder.log_scene(build_scene(DEFAULT_PARAMS, (400, 600)))
        recorder.close()
        scenes = read_scenes(recorder.scenes_path)
        self.assertEqual([entry["scene"] for entry in scenes], [0, 1])
        self.assertEqual([entry["viewport"]["width"] for entry in scenes], [800.0, 400.0])
        self.assertEqual(scenes[1]["effective_focus_range_km"], 3750.0)

    def test_scene_summaries_reach_disk_before_close(self):
        recorder = SceneLogger(self.root, run_id="live")
        try:
            self.assertTrue(recorder.meta_path.exists())
            for _ in range(3):
                recorder.log_scene(build_scene(DEFAULT_PARAMS, (800, 600)))
            self.assertEqual(len(read_scenes(recorder.scenes_path)), 3)
            self.assertEqual(recorder.scene_count, 3)
        finally:
            recorder.close()
        meta = json.loads(recorder.meta_path.read_text(encoding="utf-8"))
        self.assertEqual(meta["scene_count"], 3)


if __name__ == "__main__":
    unittest.main()
