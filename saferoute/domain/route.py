"""Resolved route domain model."""
from dataclasses import dataclass, field
from typing import List, Optional
from .geo_point import GeoPoint


@dataclass
class ResolvedRoute:
    """A stitched path returned by the routing backend for one via point.

    ``is_safe`` starts as a placeholder and is set by the safety checker;
    ``color`` is assigned by the aggregator.
    """
    id: str
    coordinates: List[GeoPoint] = field(default_factory=list)
    is_safe: bool = True
    duration_seconds: Optional[float] = None
    distance_meters: Optional[float] = None
    color: Optional[str] = None
    candidate: Optional[GeoPoint] = None
    alternative_index: int = 0

    def to_dict(self) -> dict:
        """Convert route to dictionary.

        Coordinates are rendered as ``[lat, lng]`` pairs.
        """
        return {
            "id": self.id,
            "coordinates": [[point.lat, point.lng] for point in self.coordinates],
            "isSafe": self.is_safe,
            "duration": self.duration_seconds,
            "distance": self.distance_meters,
            "color": self.color,
            "candidate": self.candidate.to_dict() if self.candidate else None
        }
