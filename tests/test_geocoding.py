"""Tests for the Nominatim location search provider."""
import unittest
from unittest.mock import MagicMock, patch
import requests
from saferoute.domain.geo_point import GeoPoint
from saferoute.geocoding.nominatim_provider import NominatimProvider

PLACES = [
    {"place_id": 101, "display_name": "Kyiv, Ukraine", "lat": "50.4500336", "lon": "30.5241361"},
    {"place_id": 102, "display_name": "Kyivska oblast, Ukraine", "lat": "50.0529506", "lon": "30.7667134"},
]


def mock_response(payload):
    response = MagicMock()
    response.json.return_value = payload
    return response


@patch("saferoute.geocoding.nominatim_provider.requests.get")
class TestNominatimProvider(unittest.TestCase):
    """Test search and geocoding with a mocked HTTP layer."""

    def setUp(self):
        self.provider = NominatimProvider(base_url="http://nominatim.test", timeout=2, user_agent="tests")

    def test_short_query_skips_request(self, mock_get):
        self.assertEqual(self.provider.search_locations("Ky"), [])
        self.assertEqual(self.provider.search_locations("  a "), [])
        mock_get.assert_not_called()

    def test_search_parses_results(self, mock_get):
        mock_get.return_value = mock_response(PLACES)

        results = self.provider.search_locations("Kyiv")

        self.assertEqual(len(results), 2)
        self.assertEqual(results[0].id, "101")
        self.assertEqual(results[0].name, "Kyiv, Ukraine")
        self.assertAlmostEqual(results[0].lat, 50.4500336)
        self.assertAlmostEqual(results[0].lng, 30.5241361)
        self.assertEqual(results[0].to_point(), GeoPoint(50.4500336, 30.5241361))

        args, kwargs = mock_get.call_args
        self.assertEqual(args[0], "http://nominatim.test/search")
        self.assertEqual(kwargs["params"], {"format": "json", "q": "Kyiv", "limit": 5})
        self.assertEqual(kwargs["headers"]["User-Agent"], "tests")

    def test_search_caps_results(self, mock_get):
        mock_get.return_value = mock_response(PLACES * 4)
        self.assertEqual(len(self.provider.search_locations("Kyiv")), 5)

    def test_search_failure_returns_empty(self, mock_get):
        mock_get.side_effect = requests.Timeout("slow")
        with self.assertLogs("saferoute.geocoding.nominatim_provider", level="ERROR"):
            self.assertEqual(self.provider.search_locations("Kyiv"), [])

    def test_geocode_returns_first_match(self, mock_get):
        mock_get.return_value = mock_response(PLACES)
        self.assertEqual(self.provider.geocode_location("Kyiv"), GeoPoint(50.4500336, 30.5241361))

    def test_geocode_without_match(self, mock_get):
        mock_get.return_value = mock_response([])
        self.assertIsNone(self.provider.geocode_location("Nowhere at all"))

    def test_geocode_failure_returns_none(self, mock_get):
        response = mock_response(None)
        response.raise_for_status.side_effect = requests.HTTPError("503")
        mock_get.return_value = response
        with self.assertLogs("saferoute.geocoding.nominatim_provider", level="ERROR"):
            self.assertIsNone(self.provider.geocode_location("Kyiv"))


if __name__ == '__main__':
    unittest.main()
