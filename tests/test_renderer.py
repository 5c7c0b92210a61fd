"""Tests for the scene renderer against a recording surface."""
import unittest

from orbit_conic.core.config import RENDER_CFG
from orbit_conic.core.model import Label, Scene, ScreenPoint
from orbit_conic.core.scene import build_scene
from orbit_conic.data.presets import DEFAULT_PARAMS, get_preset
from orbit_conic.render import SceneRenderer, arc_points, dash_polyline

from recording_surface import RecordingSurface


class TestSceneRenderer(unittest.TestCase):

    def setUp(self):
        self.renderer = SceneRenderer(RENDER_CFG)
        self.scene = build_scene(DEFAULT_PARAMS, (800, 600))

    def test_clears_before_drawing(self):
        surface = RecordingSurface()
        self.renderer.render(self.scene, surface)
        self.assertEqual(surface.calls[0], ("clear", RENDER_CFG.background_color))

    def test_draws_every_valid_feature(self):
        surface = RecordingSurface()
        drawn = self.renderer.render(self.scene, surface)
        self.assertEqual(drawn, len(self.scene.valid_features()))

    def test_labels_are_drawn(self):
        surface = RecordingSurface()
        self.renderer.render(self.scene, surface)
        texts = surface.texts()
        for text in ("Perigee", "Apse line", "r₀", "v₀", "r", "v", "Earth", "32°", "120°"):
            self.assertIn(text, texts)

    def test_trajectory_strokes_only_multi_point_segments(self):
        surface = RecordingSurface()
        self.renderer.render(self.scene, surface)
        trajectory = [
            call for call in surface.named("stroke_path")
            if call[2].color == RENDER_CFG.trajectory_color
        ]
        expected = [segment for segment in self.scene.segments if len(segment) >= 2]
        self.assertEqual(len(trajectory), len(expected))

    def test_apse_line_is_dashed(self):
        surface = RecordingSurface()
        self.renderer.render(self.scene, surface)
        dash_index = surface.calls.index(("set_dash", (5.0, 3.0)))
        self.assertEqual(surface.calls[dash_index + 1][0], "line")
        self.assertEqual(surface.calls[dash_index + 2], ("set_dash", None))

    def test_invalid_features_are_skipped(self):
        params = get_preset("parabolic").params.replace(start_anomaly=180.0, end_anomaly=0.0)
        scene = build_scene(params, (800, 600))
        surface = RecordingSurface()
        drawn = self.renderer.render(scene, surface)
        texts = surface.texts()
        self.assertNotIn("r₀", texts)
        self.assertNotIn("v₀", texts)
        self.assertIn("r", texts)
        self.assertLess(drawn, len(scene.features))

    def test_unknown_feature_raises(self):
        shim = type("Shim", (), {"valid": True, "name": "shim", "style": "x"})()
        scene = Scene(
            segments=(),
            features=(shim,),
            projector=self.scene.projector,
            r_clip=self.scene.r_clip,
            sweep_angle_deg=0.0,
            params=self.scene.params,
        )
        with self.assertRaises(TypeError):
            self.renderer.render(scene, RecordingSurface())

    def test_label_style_falls_back_to_plain_text(self):
        label = Label("custom", "unknown_style", "hello", ScreenPoint(10.0, 10.0))
        scene = Scene(
            segments=(),
            features=(label,),
            projector=self.scene.projector,
            r_clip=self.scene.r_clip,
            sweep_angle_deg=0.0,
            params=self.scene.params,
        )
        surface = RecordingSurface()
        self.renderer.render(scene, surface)
        call = surface.named("text")[0]
        self.assertEqual(call[1:], ("hello", ScreenPoint(10.0, 10.0), RENDER_CFG.text_color,
                                    RENDER_CFG.label_font_size, False))


class TestSurfaceHelpers(unittest.TestCase):

    def test_arc_points_span_the_sweep(self):
        center = ScreenPoint(0.0, 0.0)
        points = arc_points(center, 10.0, 0.0, 1.5707963267948966)
        self.assertAlmostEqual(points[0].x, 10.0)
        self.assertAlmostEqual(points[0].y, 0.0)
        self.assertAlmostEqual(points[-1].x, 0.0)
        self.assertAlmostEqual(points[-1].y, 10.0)

    def test_dash_polyline_splits_into_dashes(self):
        line = [ScreenPoint(0.0, 0.0), ScreenPoint(16.0, 0.0)]
        dashes = dash_polyline(line, (5.0, 3.0))
        self.assertEqual(len(dashes), 2)
        self.assertAlmostEqual(dashes[0][-1].x, 5.0)
        self.assertAlmostEqual(dashes[1][0].x, 8.0)
        self.assertAlmostEqual(dashes[1][-1].x, 13.0)

    def test_dash_polyline_without_pattern_keeps_line(self):
        line = [ScreenPoint(0.0, 0.0), ScreenPoint(16.0, 0.0)]
        self.assertEqual(dash_polyline(line, ()), [line])

    def test_dash_polyline_with_zero_length_entry_draws_solid(self):
        line = [ScreenPoint(0.0, 0.0), ScreenPoint(16.0, 0.0)]
        self.assertEqual(dash_polyline(line, (5.0, 0.0)), [line])
        self.assertEqual(dash_polyline(line, (0.0, 3.0)), [line])


if __name__ == "__main__":
    unittest.main()
