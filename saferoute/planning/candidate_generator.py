"""Candidate via-point generation for hazard-avoiding routes."""
from typing import List, Sequence
import logging
from shapely.errors import GEOSException
from saferoute.domain.geo_point import GeoPoint
from saferoute.domain.hazard import HazardZone
from saferoute.geometry.geodesy import (
    bearing, buffered_circle, destination, midpoint, path_geometry
)

logger = logging.getLogger(__name__)

# Offsets (km) along the perpendicular bisector of the start-end segment
BISECTOR_OFFSETS_KM = (0.0, 1.0, 2.0, 3.0, -1.0, -2.0, -3.0)

# Number of via points sampled around a hazard that blocks the direct line
CANDIDATE_COUNT_EXPLOSION = 10

# Two candidates closer than this in both axes are the same (~11 m)
DEDUP_TOLERANCE_DEG = 0.0001


def bisector_candidates(start: GeoPoint, end: GeoPoint) -> List[GeoPoint]:
    """Points on the perpendicular bisector of start-end, one per offset."""
    base_mid = midpoint(start, end)
    direct_bearing = bearing(start, end)

    candidates = []
    for offset in BISECTOR_OFFSETS_KM:
        if offset == 0:
            candidates.append(base_mid)
            continue
        perp_bearing = direct_bearing + 90 if offset > 0 else direct_bearing - 90
        candidates.append(destination(base_mid, abs(offset), perp_bearing))
    return candidates


def perimeter_candidates(hazard: HazardZone,
                         count: int = CANDIDATE_COUNT_EXPLOSION) -> List[GeoPoint]:
    """Points evenly spaced on the hazard's effective-radius perimeter."""
    radius_km = hazard.effective_radius_km()
    step = 360.0 / count
    return [destination(hazard.center, radius_km, i * step) for i in range(count)]


def deduplicate(points: Sequence[GeoPoint],
                tolerance: float = DEDUP_TOLERANCE_DEG) -> List[GeoPoint]:
    """Drop points within tolerance of an earlier one, keeping order."""
    unique: List[GeoPoint] = []
    for point in points:
        if not any(
            abs(kept.lat - point.lat) < tolerance and abs(kept.lng - point.lng) < tolerance
            for kept in unique
        ):
            unique.append(point)
    return unique


def generate_candidate_waypoints(start: GeoPoint, end: GeoPoint,
                                 hazards: Sequence[HazardZone]) -> List[GeoPoint]:
    """Generate via points likely to coax the router around hazards.

    Produces the bisector candidates first, then perimeter samples for every
    hazard whose buffered circle crosses the straight start-end line.

    Args:
        start: Route start
        end: Route end
        hazards: Hazard zones to avoid

    Returns:
        Deduplicated list of candidate via points in generation order
    """
    candidates = bisector_candidates(start, end)

    direct_line = path_geometry([start, end])
    for hazard in hazards:
        try:
            circle = buffered_circle(hazard.center, hazard.effective_radius_km())
            crosses = circle.intersects(direct_line)
        except (ValueError, GEOSException) as e:
            logger.warning(f"Skipping perimeter sampling for hazard {hazard.id}: {e}")
            continue
        if crosses:
            logger.debug(f"Hazard {hazard.id} crosses the direct path; sampling its perimeter")
            candidates.extend(perimeter_candidates(hazard))

    unique = deduplicate(candidates)
    logger.debug(f"Generated {len(unique)} candidate via points ({len(candidates)} before dedup)")
    return unique
