"""Domain models for the foraging suitability service."""

from .environment import (
    ForagingLocation,
    LocationCollection,
    WeatherSnapshot,
    WeatherSnapshotCollection,
)
from .species import ElevationRange, MushroomSpecies, SpeciesCatalog

__all__ = [
    "ElevationRange",
    "MushroomSpecies",
    "SpeciesCatalog",
    "ForagingLocation",
    "LocationCollection",
    "WeatherSnapshot",
    "WeatherSnapshotCollection",
]
