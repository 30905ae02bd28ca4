"""Foraging location and weather snapshot models."""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class ForagingLocation(BaseModel):
    """A candidate foraging site with its habitat attributes."""

    id: str
    name: str
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    elevation_m: Optional[float] = None
    forest_type: Optional[str] = None
    tree_species: List[str] = Field(default_factory=list)
    accessibility: Optional[Literal["easy", "moderate", "difficult"]] = None
    parking_available: bool = False
    description: Optional[str] = None
    municipality: Optional[str] = None
    canton: Optional[str] = None


class LocationCollection(BaseModel):
    """Wrapper around a list of foraging locations."""

    locations: List[ForagingLocation] = Field(default_factory=list)

    def __iter__(self):  # pragma: no cover - simple delegation
        return iter(self.locations)

    def __len__(self) -> int:
        return len(self.locations)

    def get(self, location_id: str) -> ForagingLocation:
        for location in self.locations:
            if location.id == location_id:
                return location
        raise KeyError(f"Location '{location_id}' not found.")


class WeatherSnapshot(BaseModel):
    """Already-resolved weather reading for one scoring call.

    Every field is optional; a missing reading degrades only the factor that
    depends on it.
    """

    location_id: Optional[str] = None
    observed_at: Optional[datetime] = None
    temperature_c: Optional[float] = None
    humidity_pct: Optional[float] = None
    soil_temperature_c: Optional[float] = None
    precipitation_mm: Optional[float] = None
    wind_speed_kmh: Optional[float] = None
    pressure_hpa: Optional[float] = None
    last_rainfall_days: Optional[int] = Field(default=None, ge=0)


class WeatherSnapshotCollection(BaseModel):
    """Wrapper around stored weather snapshots for many locations."""

    snapshots: List[WeatherSnapshot] = Field(default_factory=list)

    def __iter__(self):  # pragma: no cover - simple delegation
        return iter(self.snapshots)

    def __len__(self) -> int:
        return len(self.snapshots)

    def latest_for(self, location_id: str) -> Optional[WeatherSnapshot]:
        """Most recent snapshot for a location; undated snapshots sort oldest."""
        matching = [snap for snap in self.snapshots if snap.location_id == location_id]
        if not matching:
            return None
        return max(
            matching,
            key=lambda snap: snap.observed_at.timestamp() if snap.observed_at else float("-inf"),
        )
