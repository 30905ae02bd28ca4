"""Data loading utilities for the species catalog, locations and weather."""
from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path

from app.config import get_settings
from app.models import LocationCollection, SpeciesCatalog, WeatherSnapshotCollection
from app.services import data_cache

logger = logging.getLogger(__name__)


def _load_json(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"Required data file missing: {path}")
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


@lru_cache(1)
def load_species_catalog() -> SpeciesCatalog:
    settings = get_settings()
    payload = _load_json(settings.species_catalog_path)
    return SpeciesCatalog.model_validate(payload)


@lru_cache(1)
def load_locations() -> LocationCollection:
    settings = get_settings()
    payload = _load_json(settings.locations_path)
    return LocationCollection.model_validate(payload)


def load_weather() -> WeatherSnapshotCollection:
    cached = data_cache.load_processed_weather()
    if cached:
        return cached

    settings = get_settings()
    seed_path = settings.seed_data_dir / "local_weather_seed.json"
    if not seed_path.exists():
        logger.warning("No weather cache or seed at %s; scoring without weather", seed_path)
        return WeatherSnapshotCollection()
    return WeatherSnapshotCollection.model_validate(_load_json(seed_path))


def clear_caches() -> None:
    load_species_catalog.cache_clear()
    load_locations.cache_clear()
