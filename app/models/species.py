"""Species domain models."""
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator


class ElevationRange(BaseModel):
    """Fruiting elevation band in metres. A missing bound is open-ended."""

    minimum: Optional[float] = None
    maximum: Optional[float] = None

    @property
    def is_known(self) -> bool:
        return self.minimum is not None or self.maximum is not None

    def contains(self, value: float) -> bool:
        if self.minimum is not None and value < self.minimum:
            return False
        if self.maximum is not None and value > self.maximum:
            return False
        return True

    def distance_to(self, value: float) -> float:
        """Distance in metres to the nearer bound, 0 when inside the band."""
        if self.contains(value):
            return 0.0
        if self.minimum is not None and value < self.minimum:
            return self.minimum - value
        return value - self.maximum


class MushroomSpecies(BaseModel):
    """Ecological profile of a foraged mushroom species."""

    id: str = Field(..., description="Stable identifier used in APIs.")
    name: str
    scientific_name: str
    description: Optional[str] = None
    season: str = Field(
        ...,
        description="Season label: 'Fall', compound 'Summer, Fall', or 'All Year'.",
    )
    optimal_temp_c: Optional[float] = None
    optimal_humidity_pct: Optional[float] = None
    soil_temp_min_c: Optional[float] = None
    tree_associations: List[str] = Field(default_factory=list)
    forest_types: List[str] = Field(default_factory=list)
    elevation_m: Optional[ElevationRange] = None
    edible: bool = True
    difficulty: Literal["beginner", "intermediate", "expert"]
    image_url: Optional[str] = None
    safety_notes: Optional[str] = None


class SpeciesCatalog(BaseModel):
    """Collection wrapper for the known species."""

    species: List[MushroomSpecies] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_scientific_names(self) -> "SpeciesCatalog":
        seen = set()
        for profile in self.species:
            key = profile.scientific_name.strip().lower()
            if key in seen:
                raise ValueError(f"Duplicate scientific name '{profile.scientific_name}' in catalog.")
            seen.add(key)
        return self

    def __iter__(self):  # pragma: no cover - simple delegation
        return iter(self.species)

    def __len__(self) -> int:
        return len(self.species)

    def get(self, species_id: str) -> MushroomSpecies:
        for profile in self.species:
            if profile.id == species_id:
                return profile
        raise KeyError(f"Species '{species_id}' not found.")

    def get_by_scientific_name(self, scientific_name: str) -> Optional[MushroomSpecies]:
        key = scientific_name.strip().lower()
        for profile in self.species:
            if profile.scientific_name.strip().lower() == key:
                return profile
        return None

    def list_ids(self) -> List[str]:
        return [profile.id for profile in self.species]
