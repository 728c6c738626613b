"""Tests for GeoJSON export."""
import json
import os
import tempfile
import unittest
from saferoute.domain.geo_point import GeoPoint
from saferoute.domain.hazard import HazardZone
from saferoute.domain.route import ResolvedRoute
from saferoute.export.geojson_exporter import GeoJSONExporter


class TestGeoJSONExporter(unittest.TestCase):
    """Test FeatureCollection export."""

    def setUp(self):
        self.routes = [
            ResolvedRoute(id="r1", coordinates=[GeoPoint(50.45, 30.33), GeoPoint(50.40, 30.40)],
                          is_safe=False, duration_seconds=600.0, distance_meters=7000.0, color="#FF5733"),
            ResolvedRoute(id="r2", coordinates=[]),
        ]
        self.hazards = [HazardZone("h1", GeoPoint(50.425, 30.365), 500.0, title="Blast")]

    def test_feature_collection(self):
        collection = GeoJSONExporter.routes_to_feature_collection(self.routes, self.hazards)

        self.assertEqual(collection["type"], "FeatureCollection")
        features = collection["features"]
        self.assertEqual(len(features), 3)

        route_feature = features[0]
        self.assertEqual(route_feature["geometry"]["type"], "LineString")
        self.assertEqual([list(c) for c in route_feature["geometry"]["coordinates"]],
                         [[30.33, 50.45], [30.40, 50.40]])
        self.assertFalse(route_feature["properties"]["isSafe"])
        self.assertNotIn("is_safe", route_feature["properties"])
        self.assertEqual(route_feature["properties"]["color"], "#FF5733")

        self.assertIsNone(features[1]["geometry"])

        hazard_feature = features[2]
        self.assertEqual(hazard_feature["geometry"]["type"], "Polygon")
        self.assertEqual(hazard_feature["properties"]["title"], "Blast")
        self.assertAlmostEqual(hazard_feature["properties"]["effective_radius_km"], 1.19)

    def test_export_writes_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "routes.geojson")
            GeoJSONExporter.export_routes(self.routes, path, self.hazards)

            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)

        self.assertEqual(len(data["features"]), 3)
        self.assertEqual(data["features"][0]["properties"]["id"], "r1")


if __name__ == '__main__':
    unittest.main()
