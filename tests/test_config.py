"""Tests for environment configuration."""
import os
import unittest
from unittest.mock import patch
from saferoute.config import get_settings


class TestSettings(unittest.TestCase):
    """Test settings resolution."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = get_settings()
        self.assertEqual(settings.osrm_base_url, "https://router.project-osrm.org")
        self.assertEqual(settings.osrm_profile, "driving")
        self.assertEqual(settings.max_workers, 1)

    def test_environment_overrides(self):
        env = {
            "OSRM_BASE_URL": "http://localhost:5000/",
            "SAFEROUTE_MAX_WORKERS": "4",
            "SAFEROUTE_HTTP_TIMEOUT": "2.5",
            "SAFEROUTE_LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = get_settings()
        self.assertEqual(settings.osrm_base_url, "http://localhost:5000")
        self.assertEqual(settings.max_workers, 4)
        self.assertEqual(settings.http_timeout, 2.5)
        self.assertEqual(settings.log_level, "DEBUG")


if __name__ == '__main__':
    unittest.main()
