"""Route computation API endpoints."""
import threading
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from saferoute.domain.geo_point import GeoPoint
from saferoute.domain.hazard import HazardZone
from saferoute.export.geojson_exporter import GeoJSONExporter
from saferoute.orchestrator.route_orchestrator import RouteOrchestrator

router = APIRouter(prefix="/api/routes", tags=["routes"])


class PointDTO(BaseModel):
    lat: float
    lng: float


class HazardDTO(BaseModel):
    id: str
    lat: float
    lng: float
    radius: float = Field(ge=0, description="Hazard radius in meters")
    title: Optional[str] = None


class RouteRequest(BaseModel):
    start: Optional[PointDTO] = None
    end: Optional[PointDTO] = None
    hazards: List[HazardDTO] = []
    sort_by: Optional[Literal["duration", "distance"]] = None


_orchestrator: Optional[RouteOrchestrator] = None
_orchestrator_lock = threading.Lock()


def get_orchestrator() -> RouteOrchestrator:
    """Orchestrator shared by the endpoints, created on first use."""
    global _orchestrator
    with _orchestrator_lock:
        if _orchestrator is None:
            _orchestrator = RouteOrchestrator()
        return _orchestrator


def close_orchestrator():
    """Close the shared orchestrator's routing connections."""
    global _orchestrator
    with _orchestrator_lock:
        if _orchestrator is not None:
            _orchestrator.close()
            _orchestrator = None


def _to_domain(request: RouteRequest) -> tuple[GeoPoint, GeoPoint, List[HazardZone]]:
    if request.start is None or request.end is None:
        raise HTTPException(status_code=400, detail="Both start and end points are required")
    try:
        start = GeoPoint(lat=request.start.lat, lng=request.start.lng)
        end = GeoPoint(lat=request.end.lat, lng=request.end.lng)
        hazards = [
            HazardZone(
                id=hazard.id,
                center=GeoPoint(lat=hazard.lat, lng=hazard.lng),
                radius_meters=hazard.radius,
                title=hazard.title
            )
            for hazard in request.hazards
        ]
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return start, end, hazards


@router.post("", response_model=dict)
def compute_routes(request: RouteRequest,
                   orchestrator: RouteOrchestrator = Depends(get_orchestrator)):
    """Compute candidate routes around the given hazards."""
    start, end, hazards = _to_domain(request)
    routes = orchestrator.compute_candidate_routes(start, end, hazards, sort_by=request.sort_by)

    return {
        "routes": [route.to_dict() for route in routes],
        "count": len(routes),
        "safe_count": sum(1 for route in routes if route.is_safe)
    }


@router.post("/geojson", response_model=dict)
def compute_routes_geojson(request: RouteRequest,
                           orchestrator: RouteOrchestrator = Depends(get_orchestrator)):
    """Compute candidate routes and return them as a GeoJSON FeatureCollection."""
    start, end, hazards = _to_domain(request)
    routes = orchestrator.compute_candidate_routes(start, end, hazards, sort_by=request.sort_by)
    return GeoJSONExporter.routes_to_feature_collection(routes, hazards)
