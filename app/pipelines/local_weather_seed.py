"""Local pipeline: load already-resolved weather snapshots into the processed cache."""
from __future__ import annotations

import argparse
import json
from datetime import datetime, timezone
from pathlib import Path

from app.config import get_settings
from app.models import WeatherSnapshotCollection
from app.pipelines.base import IngestionResult, update_freshness, write_collection


def load_seed_snapshots(seed_path: Path) -> WeatherSnapshotCollection:
    with seed_path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    return WeatherSnapshotCollection.model_validate(payload)


def run(seed_override: Path | None = None) -> IngestionResult:
    settings = get_settings()
    seed_path = seed_override or (settings.seed_data_dir / "local_weather_seed.json")
    collection = load_seed_snapshots(seed_path)
    if not collection.snapshots:
        raise RuntimeError(f"Seed file {seed_path} holds no weather snapshots.")
    rows = write_collection(collection, settings.processed_weather_path)
    result = IngestionResult(
        source_id="local_weather_seed",
        output_path=settings.processed_weather_path,
        rows_written=rows,
        last_ingested=datetime.now(timezone.utc),
    )
    update_freshness(result, settings.freshness_path)
    return result


def main() -> None:
    parser = argparse.ArgumentParser(description="Load local seed weather snapshots into processed cache")
    parser.add_argument("--seed", type=Path, default=None, help="Optional override path for the seed JSON")
    args = parser.parse_args()
    result = run(seed_override=args.seed)
    print(f"Wrote {result.rows_written} weather snapshots to {result.output_path}")


if __name__ == "__main__":
    main()
