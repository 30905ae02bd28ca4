"""Application configuration settings."""
from functools import lru_cache
from pathlib import Path
from typing import Tuple

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the foraging suitability service."""

    data_dir: Path = Path("data")

    # Location aggregation
    suitable_species_threshold: int = 35
    top_species_count: int = 5
    aggregation_weights: Tuple[float, float, float] = (0.4, 0.35, 0.25)
    ranking_workers: int = 1

    # Nearby search radius in km
    nearby_radius_km: float = 10.0
    max_nearby_radius_km: float = 50.0

    model_config = SettingsConfigDict(env_prefix="MUSHROOM_", env_file=".env", env_file_encoding="utf-8")

    @property
    def species_catalog_path(self) -> Path:
        return self.data_dir / "species_catalog.json"

    @property
    def locations_path(self) -> Path:
        return self.data_dir / "locations.json"

    @property
    def data_processed_dir(self) -> Path:
        return self.data_dir / "processed"

    @property
    def processed_weather_path(self) -> Path:
        return self.data_processed_dir / "weather_snapshots.json"

    @property
    def freshness_path(self) -> Path:
        return self.data_dir / "freshness.json"

    @property
    def seed_data_dir(self) -> Path:
        return self.data_dir / "seeds"

    @property
    def species_import_path(self) -> Path:
        return self.data_dir / "raw" / "species_records.json"

    @property
    def rankings_path(self) -> Path:
        return self.data_processed_dir / "location_rankings.parquet"


@lru_cache(1)
def get_settings() -> Settings:
    return Settings()
