"""Spherical-earth helpers and shapely geometry builders.

All functions take and return ``GeoPoint`` values; shapely geometries are
built in (lng, lat) axis order.
"""
from math import radians, degrees, sin, cos, asin, atan2, sqrt, isfinite
from typing import Optional, Sequence
from shapely.geometry import LineString, Point, Polygon
from shapely.geometry.base import BaseGeometry
from saferoute.domain.geo_point import GeoPoint

EARTH_RADIUS_KM = 6371.0088  # mean earth radius
CIRCLE_STEPS = 64  # sides of the polygon approximating a hazard buffer


def midpoint(start: GeoPoint, end: GeoPoint) -> GeoPoint:
    """Arithmetic mean of two points (not a great-circle midpoint)."""
    return GeoPoint(lat=(start.lat + end.lat) / 2, lng=(start.lng + end.lng) / 2)


def bearing(start: GeoPoint, end: GeoPoint) -> float:
    """Initial great-circle bearing from start to end, in degrees (-180..180)."""
    lat1 = radians(start.lat)
    lat2 = radians(end.lat)
    dlon = radians(end.lng - start.lng)

    y = sin(dlon) * cos(lat2)
    x = cos(lat1) * sin(lat2) - sin(lat1) * cos(lat2) * cos(dlon)
    return degrees(atan2(y, x))


def destination(origin: GeoPoint, distance_km: float, bearing_deg: float) -> GeoPoint:
    """Point reached by travelling distance_km from origin on bearing_deg."""
    lat1 = radians(origin.lat)
    lon1 = radians(origin.lng)
    heading = radians(bearing_deg)
    angular = distance_km / EARTH_RADIUS_KM

    lat2 = asin(sin(lat1) * cos(angular) + cos(lat1) * sin(angular) * cos(heading))
    lon2 = lon1 + atan2(
        sin(heading) * sin(angular) * cos(lat1),
        cos(angular) - sin(lat1) * sin(lat2)
    )
    lng = (degrees(lon2) + 540) % 360 - 180
    return GeoPoint(lat=degrees(lat2), lng=lng)


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points in kilometers."""
    lat1 = radians(a.lat)
    lat2 = radians(b.lat)
    delta_lat = radians(b.lat - a.lat)
    delta_lon = radians(b.lng - a.lng)

    h = sin(delta_lat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(delta_lon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * atan2(sqrt(h), sqrt(1 - h))


def buffered_circle(center: GeoPoint, radius_km: float, steps: int = CIRCLE_STEPS) -> Polygon:
    """Polygon approximating a circle of radius_km around center.

    Raises:
        ValueError: if the radius is negative or not finite, or steps < 3
    """
    if not isfinite(radius_km) or radius_km < 0:
        raise ValueError(f"Circle radius must be a finite non-negative number, got {radius_km}")
    if steps < 3:
        raise ValueError(f"A circle needs at least 3 steps, got {steps}")

    ring = [
        destination(center, radius_km, i * -360.0 / steps).to_lng_lat()
        for i in range(steps)
    ]
    return Polygon(ring)


def path_geometry(points: Sequence[GeoPoint]) -> Optional[BaseGeometry]:
    """Shapely geometry for an ordered path.

    Returns a LineString, a Point when every vertex coincides, or None for
    an empty path.
    """
    coords = [point.to_lng_lat() for point in points]
    if not coords:
        return None
    if len(set(coords)) == 1:
        return Point(coords[0])
    return LineString(coords)
