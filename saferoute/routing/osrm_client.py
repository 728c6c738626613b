"""Routing backend client for the OSRM HTTP API."""
from typing import List, Optional, Sequence
import logging
import threading
import requests
from saferoute.config import get_settings
from saferoute.domain.geo_point import GeoPoint

logger = logging.getLogger(__name__)


class RoutingBackendError(Exception):
    """Raised when the routing backend cannot produce a route."""
    pass


class OSRMClient:
    """Client for an OSRM-compatible routing service.

    Only talks HTTP and validates the envelope of the response; turning
    routes into domain objects is left to the resolver.
    """

    def __init__(self, base_url: Optional[str] = None,
                 profile: Optional[str] = None,
                 timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        """Initialize client.

        Args:
            base_url: Service root, e.g. https://router.project-osrm.org
            profile: Transport profile (driving, walking, cycling)
            timeout: Request timeout in seconds
            session: requests session shared by all callers (optional). When
                omitted each thread gets its own session, created on first use.
        """
        settings = get_settings()
        self.base_url = (base_url or settings.osrm_base_url).rstrip("/")
        self.profile = profile or settings.osrm_profile
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self.user_agent = settings.user_agent
        self._shared_session = session
        if session is not None:
            self._prepare(session)
        self._local = threading.local()
        self._sessions: List[requests.Session] = []
        self._lock = threading.Lock()

    def _prepare(self, session: requests.Session) -> requests.Session:
        session.headers["Accept"] = "application/json"
        session.headers["User-Agent"] = self.user_agent
        return session

    @property
    def session(self) -> requests.Session:
        """Session for the calling thread."""
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._prepare(requests.Session())
            self._local.session = session
            with self._lock:
                self._sessions.append(session)
        return session

    def close(self):
        """Close the sessions this client created."""
        with self._lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
        self._local = threading.local()
        logger.info(f"Closed {len(sessions)} routing session(s)")

    @staticmethod
    def format_coordinates(points: Sequence[GeoPoint]) -> str:
        """Convert points to OSRM format 'lng,lat;lng,lat;...'."""
        return ";".join(f"{point.lng},{point.lat}" for point in points)

    def route_url(self, points: Sequence[GeoPoint]) -> str:
        """Build the /route URL for the given waypoints."""
        return f"{self.base_url}/route/v1/{self.profile}/{self.format_coordinates(points)}"

    def fetch_routes(self, points: Sequence[GeoPoint]) -> List[dict]:
        """Request route alternatives passing through points in order.

        Geometry is requested as full-detail GeoJSON with per-step breakdown.

        Args:
            points: At least two waypoints

        Returns:
            Raw OSRM route objects (legs, steps, distance, duration)

        Raises:
            ValueError: if fewer than two points are given
            RoutingBackendError: on network failure, HTTP error or empty result
        """
        if len(points) < 2:
            raise ValueError("At least two coordinates are required to compute a route.")

        params = {
            "alternatives": "true",
            "geometries": "geojson",
            "overview": "full",
            "steps": "true",
        }

        try:
            response = self.session.get(self.route_url(points), params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise RoutingBackendError(f"Routing request failed: {e}") from e

        if not response.ok:
            message = None
            try:
                message = response.json().get("message")
            except ValueError:
                pass
            raise RoutingBackendError(message or f"HTTP error! status: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise RoutingBackendError(f"Routing backend returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise RoutingBackendError("Routing backend returned an unexpected payload")
        if data.get("code", "Ok") != "Ok":
            raise RoutingBackendError(f"OSRM error: {data.get('message', data.get('code'))}")

        routes = data.get("routes")
        if not routes:
            raise RoutingBackendError("No routes found")

        logger.debug(f"OSRM returned {len(routes)} alternative(s) for {len(points)} waypoints")
        return routes
