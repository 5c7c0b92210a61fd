"""Tests for viewport resolution and world-to-screen projection."""
import math
import unittest

from orbit_conic.core.model import ScreenPoint
from orbit_conic.core.projection import Viewport, ViewportProjector


class TestViewport(unittest.TestCase):

    def test_missing_size_falls_back_to_minimum(self):
        self.assertEqual(Viewport.resolve(None).size, (200.0, 200.0))
        self.assertEqual(Viewport.resolve(()).size, (200.0, 200.0))

    def test_degenerate_dimensions_are_clamped(self):
        self.assertEqual(Viewport.resolve((0, 0)).size, (200.0, 200.0))
        self.assertEqual(Viewport.resolve((-5, 900)).size, (200.0, 900.0))
        self.assertEqual(Viewport.resolve((math.nan, 500)).size, (200.0, 500.0))
        self.assertEqual(Viewport.resolve((None, 500)).size, (200.0, 500.0))

    def test_regular_size_is_kept(self):
        self.assertEqual(Viewport.resolve((800, 600)).size, (800.0, 600.0))


class TestViewportProjector(unittest.TestCase):

    def setUp(self):
        self.projector = ViewportProjector.for_size((800, 600), 15_000.0)

    def test_scale_uses_smaller_dimension(self):
        self.assertAlmostEqual(self.projector.scale, 600.0 / 30_000.0)

    def test_origin_maps_to_centre(self):
        self.assertEqual(self.projector.world_to_screen(0.0, 0.0), ScreenPoint(400.0, 300.0))

    def test_y_axis_is_inverted(self):
        point = self.projector.world_to_screen(1_000.0, 1_000.0)
        self.assertAlmostEqual(point.x, 420.0)
        self.assertAlmostEqual(point.y, 280.0)

    def test_screen_to_world_inverts_projection(self):
        point = self.projector.world_to_screen(-4_321.0, 987.0)
        x, y = self.projector.screen_to_world(point.x, point.y)
        self.assertAlmostEqual(x, -4_321.0)
        self.assertAlmostEqual(y, 987.0)

    def test_view_rect_covers_viewport(self):
        left, bottom, right, top = self.projector.view_rect()
        self.assertAlmostEqual(right - left, 800.0 / self.projector.scale)
        self.assertAlmostEqual(top - bottom, 600.0 / self.projector.scale)

    def test_max_gap(self):
        self.assertAlmostEqual(self.projector.max_gap_px, 36.0)
        small = ViewportProjector.for_size((200, 200), 15_000.0)
        self.assertAlmostEqual(small.max_gap_px, 20.0)

    def test_wide_viewport_keeps_focus_range(self):
        self.assertFalse(self.projector.is_narrow)
        self.assertEqual(self.projector.effective_focus_range_km, 15_000.0)

    def test_narrow_viewport_shrinks_focus_range(self):
        narrow = ViewportProjector.for_size((400, 600), 15_000.0)
        self.assertTrue(narrow.is_narrow)
        self.assertAlmostEqual(narrow.effective_focus_range_km, 3_750.0)
        self.assertAlmostEqual(narrow.scale, 400.0 / 7_500.0)

    def test_narrow_focus_has_a_floor(self):
        narrow = ViewportProjector.for_size((300, 300), 5_000.0)
        self.assertAlmostEqual(narrow.effective_focus_range_km, 3_000.0)

    def test_contains(self):
        self.assertTrue(self.projector.contains(ScreenPoint(10.0, 10.0)))
        self.assertFalse(self.projector.contains(ScreenPoint(-1.0, 10.0)))
        self.assertTrue(self.projector.contains(ScreenPoint(-1.0, 10.0), margin=2.0))


if __name__ == "__main__":
    unittest.main()
