"""Hazard safety checker for resolved routes."""
from typing import List, Dict, Sequence
import logging
from shapely.errors import GEOSException
from saferoute.domain.geo_point import GeoPoint
from saferoute.domain.hazard import HazardZone
from saferoute.domain.route import ResolvedRoute
from saferoute.geometry.geodesy import buffered_circle, path_geometry

logger = logging.getLogger(__name__)


class SafetyChecker:
    """Checks route paths against buffered hazard zones."""

    def check_route(self, route: ResolvedRoute, hazards: Sequence[HazardZone]) -> List[Dict]:
        """Check if a route intersects any hazard buffer.

        Args:
            route: Route to check
            hazards: Hazard zones

        Returns:
            List of violation dictionaries
        """
        return self._violations(route.coordinates, hazards)

    def is_route_safe(self, coordinates: Sequence[GeoPoint], hazards: Sequence[HazardZone]) -> bool:
        """A path is safe iff it touches no hazard's buffered circle."""
        return not self._violations(coordinates, hazards, stop_at_first=True)

    def validate(self, route: ResolvedRoute, hazards: Sequence[HazardZone]) -> ResolvedRoute:
        """Stamp route.is_safe and return the route."""
        route.is_safe = self.is_route_safe(route.coordinates, hazards)
        return route

    def _violations(self, coordinates: Sequence[GeoPoint], hazards: Sequence[HazardZone],
                    stop_at_first: bool = False) -> List[Dict]:
        violations = []
        line = path_geometry(coordinates)
        if line is None:
            # Nothing to test against the buffers, so the path cannot be shown safe
            violations.append({
                "hazard_id": None,
                "message": "Route has no geometry"
            })
            return violations

        for hazard in hazards:
            name = hazard.title or hazard.id
            try:
                buffer = buffered_circle(hazard.center, hazard.effective_radius_km())
                hit = buffer.intersects(line)
            except (ValueError, GEOSException) as e:
                # Fail closed: an unbuildable buffer counts as a violation
                logger.warning(f"Could not build safety buffer for hazard {hazard.id}: {e}")
                violations.append({
                    "hazard_id": hazard.id,
                    "message": f"Safety buffer for hazard {name} could not be built"
                })
            else:
                if not hit:
                    continue
                violations.append({
                    "hazard_id": hazard.id,
                    "message": f"Route intersects buffered hazard zone: {name}"
                })
            if stop_at_first:
                break

        return violations
