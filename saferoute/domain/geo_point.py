"""Geographic point domain model."""
from dataclasses import dataclass
from numbers import Real


@dataclass(frozen=True)
class GeoPoint:
    """A WGS84 coordinate in degrees."""
    lat: float
    lng: float

    def __post_init__(self):
        """Validate coordinates."""
        for name in ("lat", "lng"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise TypeError(f"{name} must be a number, got {value!r}")
        if not -90 <= self.lat <= 90:
            raise ValueError(f"Latitude must be between -90 and 90, got {self.lat}")
        if not -180 <= self.lng <= 180:
            raise ValueError(f"Longitude must be between -180 and 180, got {self.lng}")

    def to_dict(self) -> dict:
        """Convert point to dictionary."""
        return {"lat": self.lat, "lng": self.lng}

    def to_lng_lat(self) -> tuple[float, float]:
        """Return (lng, lat), the axis order used by GeoJSON and OSRM."""
        return (self.lng, self.lat)

    @classmethod
    def from_dict(cls, data: dict) -> "GeoPoint":
        """Create point from dictionary."""
        return cls(lat=data["lat"], lng=data["lng"])
