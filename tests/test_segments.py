"""Tests for splitting projected samples into continuous segments."""
import math
import unittest

from orbit_conic.core.model import ScreenPoint
from orbit_conic.core.segments import build_segments, max_segment_gap


def pts(*coords):
    return [ScreenPoint(x, y) for x, y in coords]


class TestBuildSegments(unittest.TestCase):

    def test_empty_input_gives_no_segments(self):
        self.assertEqual(build_segments([], 20.0), [])

    def test_single_point_gives_single_segment(self):
        segments = build_segments(pts((5.0, 5.0)), 20.0)
        self.assertEqual(len(segments), 1)
        self.assertEqual(len(segments[0]), 1)

    def test_close_points_stay_together(self):
        segments = build_segments(pts(*[(float(i), 0.0) for i in range(50)]), 20.0)
        self.assertEqual(len(segments), 1)
        self.assertEqual(len(segments[0]), 50)

    def test_gap_starts_new_segment(self):
        segments = build_segments(pts((0, 0), (1, 0), (100, 0), (101, 0)), 20.0)
        self.assertEqual([len(s) for s in segments], [2, 2])
        self.assertEqual(segments[1].points[0], ScreenPoint(100, 0))

    def test_gap_exactly_at_threshold_is_joined(self):
        segments = build_segments(pts((0, 0), (3, 4)), 5.0)
        self.assertEqual(len(segments), 1)

    def test_two_distant_points_give_two_singletons(self):
        segments = build_segments(pts((0, 0), (500, 500)), 20.0)
        self.assertEqual([len(s) for s in segments], [1, 1])

    def test_non_finite_points_are_skipped(self):
        segments = build_segments(pts((0, 0), (math.nan, 1), (1, 0)), 20.0)
        self.assertEqual(len(segments), 1)
        self.assertEqual(segments[0].points, (ScreenPoint(0, 0), ScreenPoint(1, 0)))

    def test_accepts_generators(self):
        segments = build_segments((ScreenPoint(float(i), 0.0) for i in range(3)), 20.0)
        self.assertEqual(len(segments), 1)

    def test_gap_invariant(self):
        raw = pts(*[(i * 7.0 if i < 10 else i * 50.0, 0.0) for i in range(20)])
        max_gap = 20.0
        segments = build_segments(raw, max_gap)
        for segment in segments:
            self.assertLessEqual(max_segment_gap(segment), max_gap)
        flattened = [point for segment in segments for point in segment]
        self.assertEqual(flattened, raw)
        starts = {segment.points[0] for segment in segments}
        for a, b in zip(raw, raw[1:]):
            if math.hypot(b.x - a.x, b.y - a.y) > max_gap:
                self.assertIn(b, starts)


if __name__ == "__main__":
    unittest.main()
