"""Batch pipeline: rank every foraging location and write a parquet snapshot.

Stages:
  1. Load species catalog, locations and the latest weather per location.
  2. Rank each location through the shared aggregator.
  3. Write parquet (snappy) read back by GET /api/rankings.

Run:
    python3 -m app.pipelines.location_ranking [--month 9]
"""
from __future__ import annotations

import argparse
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from app.config import get_settings
from app.models import LocationCollection, SpeciesCatalog, WeatherSnapshotCollection
from app.pipelines.base import IngestionResult, update_freshness
from app.services import data_loader
from app.services.ranking import LocationRanker, ranker_from_settings

logger = logging.getLogger(__name__)

PARQUET_COMPRESSION = "snappy"

RANKING_COLUMNS = [
    "location_id",
    "name",
    "latitude",
    "longitude",
    "overall_probability",
    "suitable_species",
    "top_species_ids",
    "month",
]


def build_rankings(
    locations: LocationCollection,
    catalog: SpeciesCatalog,
    weather: WeatherSnapshotCollection,
    ranker: LocationRanker,
    month: int,
) -> pd.DataFrame:
    rows = []
    for location in locations:
        snapshot = weather.latest_for(location.id)
        if snapshot is None:
            logger.info("No weather for %s; ranking with defaults", location.id)
        ranking = ranker.rank(location, catalog.species, snapshot, month)
        rows.append({
            "location_id": location.id,
            "name": location.name,
            "latitude": location.latitude,
            "longitude": location.longitude,
            "overall_probability": ranking.overall_probability,
            "suitable_species": "|".join(ranking.suitable_species),
            "top_species_ids": "|".join(s.id for s in ranking.top_species),
            "month": month,
        })

    df = pd.DataFrame(rows, columns=RANKING_COLUMNS)
    if len(df):
        df = df.sort_values("overall_probability", ascending=False, kind="stable").reset_index(drop=True)
    return df


def _write_parquet(df: pd.DataFrame, output_path: Path) -> int:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    table = pa.Table.from_pandas(df, preserve_index=False)
    pq.write_table(table, str(output_path), compression=PARQUET_COMPRESSION)
    print(f"Wrote {len(df):,} rows → {output_path}", flush=True)
    return len(df)


def run(month: Optional[int] = None) -> IngestionResult:
    settings = get_settings()
    month = month or date.today().month

    catalog = data_loader.load_species_catalog()
    locations = data_loader.load_locations()
    weather = data_loader.load_weather()
    if not len(locations):
        raise RuntimeError("No foraging locations to rank")

    ranker = ranker_from_settings(settings)
    print(f"Ranking {len(locations)} locations against {len(catalog)} species (month={month})...", flush=True)
    df = build_rankings(locations, catalog, weather, ranker, month)
    rows = _write_parquet(df, settings.rankings_path)

    result = IngestionResult(
        source_id="location_ranking",
        output_path=settings.rankings_path,
        rows_written=rows,
        last_ingested=datetime.now(timezone.utc),
    )
    update_freshness(result, settings.freshness_path)
    return result


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s %(asctime)s %(message)s",
        datefmt="%H:%M:%S",
    )
    parser = argparse.ArgumentParser(description="Rank all foraging locations into a parquet snapshot")
    parser.add_argument("--month", type=int, choices=range(1, 13), default=None, help="Month to score (1-12)")
    args = parser.parse_args()
    result = run(month=args.month)
    print(f"\nComplete: {result.rows_written} locations written to {result.output_path}", flush=True)


if __name__ == "__main__":
    main()
