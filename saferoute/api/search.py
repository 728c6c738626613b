"""Location search API endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List
from saferoute.geocoding.nominatim_provider import NominatimProvider

router = APIRouter(prefix="/api", tags=["search"])


def get_geocoder() -> NominatimProvider:
    """Geocoding provider used by the endpoints."""
    return NominatimProvider()


@router.get("/search", response_model=List[dict])
def search_locations(q: str = Query("", description="Free-text place query"),
                     geocoder: NominatimProvider = Depends(get_geocoder)):
    """Search places; queries under three characters return an empty list."""
    return [result.to_dict() for result in geocoder.search_locations(q)]


@router.get("/geocode", response_model=dict)
def geocode(q: str = Query(..., min_length=1),
            geocoder: NominatimProvider = Depends(get_geocoder)):
    """Geocode a query to a single coordinate."""
    point = geocoder.geocode_location(q)
    if point is None:
        raise HTTPException(status_code=404, detail="Location not found")
    return point.to_dict()
