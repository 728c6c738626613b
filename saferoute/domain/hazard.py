"""Hazard zone domain model."""
from dataclasses import dataclass
from math import isfinite
from typing import Optional
from .geo_point import GeoPoint

# Additional safe distance (km) kept outside every hazard radius.
SAFE_MARGIN_KM = 0.69


@dataclass(frozen=True)
class HazardZone:
    """Represents a circular danger zone."""
    id: str
    center: GeoPoint
    radius_meters: float
    title: Optional[str] = None

    def __post_init__(self):
        """Validate radius."""
        if not isfinite(self.radius_meters) or self.radius_meters < 0:
            raise ValueError(f"Radius must be a finite non-negative number, got {self.radius_meters}")

    def effective_radius_km(self) -> float:
        """Radius used for safety checks: raw radius plus the safe margin."""
        return self.radius_meters / 1000 + SAFE_MARGIN_KM

    def to_dict(self) -> dict:
        """Convert hazard to dictionary."""
        return {
            "id": self.id,
            "center": self.center.to_dict(),
            "radius": self.radius_meters,
            "title": self.title
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HazardZone":
        """Create hazard from dictionary.

        Accepts either a nested ``center`` or flat ``lat``/``lng`` keys.
        """
        if "center" in data:
            center = GeoPoint.from_dict(data["center"])
        else:
            center = GeoPoint(lat=data["lat"], lng=data["lng"])
        return cls(
            id=str(data["id"]),
            center=center,
            radius_meters=data["radius"],
            title=data.get("title")
        )
