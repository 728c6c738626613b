"""GeoJSON exporter for resolved routes and hazard buffers."""
import json
from typing import Sequence
from shapely.geometry import mapping
from saferoute.domain.hazard import HazardZone
from saferoute.domain.route import ResolvedRoute
from saferoute.geometry.geodesy import buffered_circle, path_geometry


class GeoJSONExporter:
    """Exports routes and hazards as GeoJSON feature collections."""

    @staticmethod
    def route_feature(route: ResolvedRoute) -> dict:
        """GeoJSON feature for one route (null geometry for an empty path)."""
        geometry = path_geometry(route.coordinates)
        return {
            "type": "Feature",
            "geometry": mapping(geometry) if geometry is not None else None,
            "properties": {
                "id": route.id,
                "isSafe": route.is_safe,
                "color": route.color,
                "duration": route.duration_seconds,
                "distance": route.distance_meters
            }
        }

    @staticmethod
    def hazard_feature(hazard: HazardZone) -> dict:
        """GeoJSON feature for a hazard's buffered safety circle."""
        buffer = buffered_circle(hazard.center, hazard.effective_radius_km())
        return {
            "type": "Feature",
            "geometry": mapping(buffer),
            "properties": {
                "id": hazard.id,
                "title": hazard.title,
                "radius": hazard.radius_meters,
                "effective_radius_km": hazard.effective_radius_km()
            }
        }

    @classmethod
    def routes_to_feature_collection(cls, routes: Sequence[ResolvedRoute],
                                     hazards: Sequence[HazardZone] = ()) -> dict:
        """Build a FeatureCollection of routes followed by hazard buffers."""
        features = [cls.route_feature(route) for route in routes]
        features.extend(cls.hazard_feature(hazard) for hazard in hazards)
        return {"type": "FeatureCollection", "features": features}

    @classmethod
    def export_routes(cls, routes: Sequence[ResolvedRoute], file_path: str,
                      hazards: Sequence[HazardZone] = ()):
        """Export routes (and hazard buffers) to a GeoJSON file.

        Args:
            routes: Routes to export
            file_path: Output file path
            hazards: Hazards whose buffers are included
        """
        with open(file_path, 'w', encoding='utf-8') as f:
            json.dump(cls.routes_to_feature_collection(routes, hazards), f, indent=2, ensure_ascii=False)
