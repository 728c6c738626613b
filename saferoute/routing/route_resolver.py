"""Resolves candidate via points into stitched routes."""
from typing import List, Optional, Sequence
import hashlib
import logging
from saferoute.domain.geo_point import GeoPoint
from saferoute.domain.route import ResolvedRoute
from saferoute.routing.osrm_client import OSRMClient, RoutingBackendError

logger = logging.getLogger(__name__)


def stitch_steps(step_geometries: Sequence[Sequence[Sequence[float]]]) -> List[GeoPoint]:
    """Concatenate step coordinate lists into one continuous path.

    Steps share their junction point with the previous step; when the last
    accumulated point equals a step's first point exactly, that point is
    appended only once.

    Args:
        step_geometries: Per-step lists of [lng, lat] pairs, in path order

    Returns:
        Ordered list of points
    """
    path: List[GeoPoint] = []
    for coords in step_geometries:
        points = [GeoPoint(lat=lat, lng=lng) for lng, lat, *_ in coords]
        if not points:
            continue
        if path and path[-1] == points[0]:
            points = points[1:]
        path.extend(points)
    return path


def route_id(candidate: GeoPoint, alternative_index: int) -> str:
    """Deterministic id for the route of one candidate/alternative pair."""
    digest = hashlib.sha1(
        f"{candidate.lat!r},{candidate.lng!r},{alternative_index}".encode("utf-8")
    ).hexdigest()[:10]
    return f"route-{candidate.lat:.4f}-{candidate.lng:.4f}-{alternative_index}-{digest}"


class RouteResolver:
    """Asks the routing backend for routes through a single via point."""

    def __init__(self, client: Optional[OSRMClient] = None):
        """Initialize resolver.

        Args:
            client: Routing backend client (creates default OSRMClient if None)
        """
        self.client = client or OSRMClient()

    def resolve(self, start: GeoPoint, candidate: GeoPoint, end: GeoPoint) -> List[ResolvedRoute]:
        """Fetch and stitch all alternatives for start -> candidate -> end.

        Backend failures are logged and produce an empty list.

        Returns:
            List of ResolvedRoute with is_safe left as placeholder True
        """
        try:
            raw_routes = self.client.fetch_routes([start, candidate, end])
        except RoutingBackendError as e:
            logger.warning(
                f"Error fetching route with candidate midpoint "
                f"({candidate.lat:.5f}, {candidate.lng:.5f}): {e}"
            )
            return []

        try:
            routes = [
                self._build_route(raw, candidate, index)
                for index, raw in enumerate(raw_routes)
            ]
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(
                f"Malformed routing response for candidate "
                f"({candidate.lat:.5f}, {candidate.lng:.5f}): {e}"
            )
            return []

        empty = [route.alternative_index for route in routes if not route.coordinates]
        if empty:
            logger.warning(
                f"Dropping alternative(s) {empty} without geometry for candidate "
                f"({candidate.lat:.5f}, {candidate.lng:.5f})"
            )
            routes = [route for route in routes if route.coordinates]

        logger.debug(f"Resolved {len(routes)} route(s) via ({candidate.lat:.5f}, {candidate.lng:.5f})")
        return routes

    def close(self):
        """Release the routing client's connections."""
        self.client.close()

    def _build_route(self, raw: dict, candidate: GeoPoint, index: int) -> ResolvedRoute:
        """Turn one OSRM route object into a ResolvedRoute."""
        step_geometries = [
            step["geometry"]["coordinates"]
            for leg in raw["legs"]
            for step in leg["steps"]
        ]
        return ResolvedRoute(
            id=route_id(candidate, index),
            coordinates=stitch_steps(step_geometries),
            is_safe=True,
            duration_seconds=raw.get("duration"),
            distance_meters=raw.get("distance"),
            candidate=candidate,
            alternative_index=index
        )
