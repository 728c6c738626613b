"""Tests for candidate via-point generation."""
import unittest
from unittest.mock import patch
from shapely.errors import GEOSException
from saferoute.domain.geo_point import GeoPoint
from saferoute.domain.hazard import HazardZone
from saferoute.geometry.geodesy import bearing, haversine_km, midpoint
from saferoute.planning.candidate_generator import (
    CANDIDATE_COUNT_EXPLOSION,
    deduplicate,
    generate_candidate_waypoints,
    perimeter_candidates,
)


class TestCandidateGenerator(unittest.TestCase):
    """Test candidate generation."""

    def setUp(self):
        """Set up a start/end pair about 7 km apart."""
        self.start = GeoPoint(50.45, 30.33)
        self.end = GeoPoint(50.40, 30.40)
        self.mid = midpoint(self.start, self.end)

    def test_no_hazards_gives_bisector_candidates(self):
        candidates = generate_candidate_waypoints(self.start, self.end, [])

        self.assertEqual(len(candidates), 7)
        self.assertEqual(candidates[0], self.mid)
        for candidate in candidates:
            self.assertLessEqual(haversine_km(self.mid, candidate), 3.0 + 1e-9)

    def test_bisector_offsets_are_perpendicular(self):
        candidates = generate_candidate_waypoints(self.start, self.end, [])
        direct = bearing(self.start, self.end)

        expected_km = [1.0, 2.0, 3.0, 1.0, 2.0, 3.0]
        expected_bearing = [direct + 90] * 3 + [direct - 90] * 3
        for candidate, km, heading in zip(candidates[1:], expected_km, expected_bearing):
            self.assertAlmostEqual(haversine_km(self.mid, candidate), km, places=6)
            diff = (bearing(self.mid, candidate) - heading + 180) % 360 - 180
            self.assertAlmostEqual(diff, 0.0, places=6)

    def test_hazard_off_path_adds_no_candidates(self):
        far_hazard = HazardZone("far", GeoPoint(50.60, 30.60), 100.0)
        candidates = generate_candidate_waypoints(self.start, self.end, [far_hazard])
        self.assertEqual(len(candidates), 7)

    def test_hazard_on_path_adds_perimeter_candidates(self):
        hazard = HazardZone("blast", self.mid, 500.0)
        candidates = generate_candidate_waypoints(self.start, self.end, [hazard])

        self.assertEqual(len(candidates), 7 + CANDIDATE_COUNT_EXPLOSION)
        self.assertEqual(candidates[7:], perimeter_candidates(hazard))

    def test_only_crossing_hazards_are_sampled(self):
        crossing = HazardZone("crossing", self.mid, 200.0)
        far_hazard = HazardZone("far", GeoPoint(50.60, 30.60), 100.0)
        candidates = generate_candidate_waypoints(self.start, self.end, [far_hazard, crossing])

        self.assertEqual(len(candidates), 17)
        self.assertEqual(candidates[7:], perimeter_candidates(crossing))

    def test_perimeter_candidates_evenly_spaced(self):
        hazard = HazardZone("blast", GeoPoint(50.42, 30.36), 300.0)
        points = perimeter_candidates(hazard)

        self.assertEqual(len(points), 10)
        for i, point in enumerate(points):
            self.assertAlmostEqual(haversine_km(hazard.center, point), hazard.effective_radius_km(), places=6)
            diff = (bearing(hazard.center, point) - i * 36.0 + 180) % 360 - 180
            self.assertAlmostEqual(diff, 0.0, places=6)

    def test_deduplicate_keeps_earliest(self):
        first = GeoPoint(50.0, 30.0)
        near = GeoPoint(50.00005, 30.00009)
        distinct = GeoPoint(50.0002, 30.0)
        one_axis_close = GeoPoint(50.00001, 30.0005)

        unique = deduplicate([first, near, distinct, one_axis_close])

        self.assertEqual(unique, [first, distinct, one_axis_close])
        self.assertIs(unique[0], first)

    @patch("saferoute.planning.candidate_generator.buffered_circle",
           side_effect=GEOSException("IllegalArgumentException: Invalid number of points"))
    def test_unbuildable_hazard_buffer_is_skipped(self, mock_circle):
        hazard = HazardZone("blast", self.mid, 500.0)
        with self.assertLogs("saferoute.planning.candidate_generator", level="WARNING"):
            candidates = generate_candidate_waypoints(self.start, self.end, [hazard])
        self.assertEqual(len(candidates), 7)

    def test_start_equals_end_does_not_raise(self):
        hazard = HazardZone("blast", self.start, 100.0)
        candidates = generate_candidate_waypoints(self.start, self.start, [hazard])

        self.assertEqual(candidates[0], self.start)
        self.assertEqual(len(candidates), 17)


if __name__ == '__main__':
    unittest.main()
