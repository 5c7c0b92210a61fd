"""Tests for argument parsing and headless export."""
import argparse
import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

from orbit_conic.cli import build_parser, main, params_from_args, parse_size
from orbit_conic.data.presets import DEFAULT_PARAMS, get_preset


class TestParseSize(unittest.TestCase):

    def test_valid_size(self):
        self.assertEqual(parse_size("1024x768"), (1024, 768))
        self.assertEqual(parse_size("400X300"), (400, 300))

    def test_invalid_size(self):
        for text in ("1024", "axb", "0x300", "-5x10"):
            with self.assertRaises(argparse.ArgumentTypeError):
                parse_size(text)


class TestParamsFromArgs(unittest.TestCase):

    def test_defaults_to_documented_preset(self):
        args = build_parser().parse_args([])
        self.assertEqual(params_from_args(args), DEFAULT_PARAMS)

    def test_overrides_apply_on_top_of_preset(self):
        args = build_parser().parse_args(
            ["--preset", "Elliptical", "-e", "0.7", "--nuf", "120", "--samples", "64"]
        )
        params = params_from_args(args)
        base = get_preset("elliptical").params
        self.assertEqual(params.eccentricity, 0.7)
        self.assertEqual(params.end_anomaly, 120.0)
        self.assertEqual(params.sample_count, 64)
        self.assertEqual(params.semi_latus_rectum, base.semi_latus_rectum)

    def test_unknown_preset_is_a_usage_error(self):
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main(["--preset", "lunar", "--export", "unused.png"])
        self.assertEqual(ctx.exception.code, 2)


class TestExport(unittest.TestCase):

    def test_export_writes_image(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "scene.png"
            with contextlib.redirect_stdout(io.StringIO()) as out:
                code = main(["--export", str(path), "--size", "400x300"])
            self.assertEqual(code, 0)
            self.assertTrue(path.exists())
            self.assertIn("scene.png", out.getvalue())

    def test_export_with_recording(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            with contextlib.redirect_stdout(io.StringIO()):
                code = main(
                    [
                        "--preset", "extreme",
                        "--export", str(root / "extreme.png"),
                        "--record", str(root / "runs"),
                        "--legacy-sweep-label",
                    ]
                )
            self.assertEqual(code, 0)
            run_id = (root / "runs" / "last_scene.txt").read_text(encoding="utf-8")
            lines = (root / "runs" / run_id / "scenes.jsonl").read_text(encoding="utf-8").splitlines()
            scene = json.loads(lines[0])
            self.assertEqual(scene["params"]["eccentricity"], 3.0)
            self.assertEqual(scene["viewport"], {"width": 1000.0, "height": 700.0})


if __name__ == "__main__":
    unittest.main()
