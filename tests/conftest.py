import shutil
from pathlib import Path

import pytest

from app.config import get_settings
from app.models import ElevationRange, ForagingLocation, MushroomSpecies, WeatherSnapshot
from app.services import data_loader

REPO_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def make_species(**overrides) -> MushroomSpecies:
    fields = {
        "id": "porcini",
        "name": "Porcini",
        "scientific_name": "Boletus edulis",
        "season": "Fall",
        "optimal_temp_c": 18,
        "optimal_humidity_pct": 80,
        "soil_temp_min_c": 6,
        "tree_associations": ["Spruce", "Pine", "Fir", "Beech", "Oak", "Birch"],
        "forest_types": ["Conifer", "Mixed"],
        "elevation_m": ElevationRange(minimum=400, maximum=1500),
        "difficulty": "intermediate",
    }
    fields.update(overrides)
    return MushroomSpecies(**fields)


def bare_species(**overrides) -> MushroomSpecies:
    fields = {
        "id": "unknown",
        "name": "Unknown",
        "scientific_name": "Incognita ignota",
        "season": "Fall",
        "difficulty": "expert",
    }
    fields.update(overrides)
    return MushroomSpecies(**fields)


def make_location(**overrides) -> ForagingLocation:
    fields = {
        "id": "albis-pass",
        "name": "Albis Pass Forest",
        "latitude": 47.2894,
        "longitude": 8.5158,
        "elevation_m": 790,
        "forest_type": "Conifer",
        "tree_species": ["Spruce", "Fir", "Pine"],
    }
    fields.update(overrides)
    return ForagingLocation(**fields)


def make_weather(**overrides) -> WeatherSnapshot:
    fields = {
        "temperature_c": 18,
        "humidity_pct": 80,
        "soil_temperature_c": 14,
        "last_rainfall_days": 1,
    }
    fields.update(overrides)
    return WeatherSnapshot(**fields)


@pytest.fixture
def species():
    return make_species()


@pytest.fixture
def location():
    return make_location()


@pytest.fixture
def weather():
    return make_weather()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Copy of the bundled data directory wired into settings and loaders."""
    target = tmp_path / "data"
    shutil.copytree(REPO_DATA_DIR, target)
    monkeypatch.setenv("MUSHROOM_DATA_DIR", str(target))
    get_settings.cache_clear()
    data_loader.clear_caches()
    yield target
    get_settings.cache_clear()
    data_loader.clear_caches()
