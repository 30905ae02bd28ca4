"""Helpers to read the processed weather snapshot cache."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from app.config import get_settings
from app.models import WeatherSnapshotCollection


def _read_json(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"Processed cache missing: {path}")
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def load_processed_weather() -> Optional[WeatherSnapshotCollection]:
    """Return weather snapshots if an ingestion pipeline produced them."""

    settings = get_settings()
    processed_path = settings.processed_weather_path
    if not processed_path.exists():
        return None

    payload = _read_json(processed_path)
    return WeatherSnapshotCollection.model_validate(payload)
