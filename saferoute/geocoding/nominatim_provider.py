"""Location search provider using the Nominatim API."""
from dataclasses import dataclass
from typing import List, Optional
import logging
import requests
from saferoute.config import get_settings
from saferoute.domain.geo_point import GeoPoint

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3
MAX_RESULTS = 5


@dataclass
class SearchResult:
    """A geocoded place returned by a location search."""
    id: str
    name: str
    lat: float
    lng: float

    def to_point(self) -> GeoPoint:
        """Coordinate of the result."""
        return GeoPoint(lat=self.lat, lng=self.lng)

    def to_dict(self) -> dict:
        """Convert result to dictionary."""
        return {"id": self.id, "name": self.name, "lat": self.lat, "lng": self.lng}


class NominatimProvider:
    """Provider for free-text location search."""

    def __init__(self, base_url: Optional[str] = None,
                 timeout: Optional[float] = None,
                 user_agent: Optional[str] = None):
        """Initialize provider.

        Args:
            base_url: Nominatim root URL (default from settings)
            timeout: Request timeout in seconds
            user_agent: User-Agent header, required by the Nominatim usage policy
        """
        settings = get_settings()
        self.base_url = (base_url or settings.nominatim_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self.headers = {
            "User-Agent": user_agent or settings.user_agent,
            "Accept": "application/json"
        }

    def _search(self, query: str, limit: Optional[int] = None) -> list:
        params = {"format": "json", "q": query}
        if limit is not None:
            params["limit"] = limit
        response = requests.get(
            f"{self.base_url}/search",
            params=params,
            headers=self.headers,
            timeout=self.timeout
        )
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, list):
            raise ValueError("Unexpected search response payload")
        return data

    def search_locations(self, query: str) -> List[SearchResult]:
        """Search for places matching a free-text query.

        Queries shorter than three characters return no results without
        contacting the service.

        Returns:
            Up to five results, or an empty list if the request fails
        """
        if not query or len(query.strip()) < MIN_QUERY_LENGTH:
            return []

        try:
            items = self._search(query.strip(), limit=MAX_RESULTS)
            return [
                SearchResult(
                    id=str(item["place_id"]),
                    name=item["display_name"],
                    lat=float(item["lat"]),
                    lng=float(item["lon"])
                )
                for item in items[:MAX_RESULTS]
            ]
        except (requests.RequestException, KeyError, TypeError, ValueError) as e:
            logger.error(f"Error searching locations: {e}")
            return []

    def geocode_location(self, query: str) -> Optional[GeoPoint]:
        """Resolve a query to the coordinate of its best match, or None."""
        if not query or not query.strip():
            return None

        try:
            items = self._search(query.strip())
            if not items:
                return None
            first = items[0]
            return GeoPoint(lat=float(first["lat"]), lng=float(first["lon"]))
        except (requests.RequestException, KeyError, TypeError, ValueError) as e:
            logger.error(f"Geocoding error: {e}")
            return None
