"""Ingestion pipeline: merge externally sourced species records into the catalog.

Input records are already extracted (scientific name, fruiting months,
substrates, habitats, elevation range, frequency, conservation status). This
stage only maps them onto the catalog's species schema; new scientific names
are added and existing ones are left untouched.

Run:
    python3 -m app.pipelines.species_import --records data/raw/species_records.json
"""
from __future__ import annotations

import argparse
import json
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Literal, Optional, Set

from pydantic import BaseModel, Field, ValidationError

from app.config import get_settings
from app.models import ElevationRange, MushroomSpecies, SpeciesCatalog
from app.pipelines.base import IngestionResult, update_freshness, write_collection
from app.services.seasons import season_label_for_months

logger = logging.getLogger(__name__)

# substrate keyword -> tree association
SUBSTRATE_TREES: Dict[str, str] = {
    "oak": "Oak",
    "beech": "Beech",
    "pine": "Pine",
    "spruce": "Spruce",
    "fir": "Fir",
    "birch": "Birch",
    "maple": "Maple",
    "ash": "Ash",
    "elm": "Elm",
}

EDIBLE_GENERA = (
    "boletus", "cantharellus", "morchella", "pleurotus",
    "agaricus", "lactarius", "russula", "leccinum",
    "suillus", "hydnum", "craterellus",
)

DEFAULT_MIN_ELEVATION_M = 500
DEFAULT_OPTIMAL_HUMIDITY = 80.0


class SpeciesRecord(BaseModel):
    """One externally sourced species record."""

    scientific_name: str
    common_name: Optional[str] = None
    family: Optional[str] = None
    phenology_months: List[int] = Field(default_factory=list)
    substrates: List[str] = Field(default_factory=list)
    habitats: List[str] = Field(default_factory=list)
    elevation_min_m: Optional[float] = None
    elevation_max_m: Optional[float] = None
    frequency: Optional[Literal["common", "occasional", "rare"]] = None
    red_list_status: Optional[str] = None
    conservation_status: Optional[str] = None


@dataclass
class ImportReport:
    total_records: int = 0
    existing_species: int = 0
    new_species_added: int = 0
    errors: List[dict] = field(default_factory=list)


def _genus(record: SpeciesRecord) -> str:
    return record.scientific_name.strip().lower().split(" ")[0]


def _is_endangered(record: SpeciesRecord) -> bool:
    return bool(record.red_list_status) and "endangered" in record.red_list_status.lower()


def species_id_for(scientific_name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", scientific_name.strip().lower()).strip("-")


def _unique_id(base: str, taken: Set[str]) -> str:
    suffix = 2
    while f"{base}-{suffix}" in taken:
        suffix += 1
    return f"{base}-{suffix}"


def tree_associations_from(substrates: List[str]) -> List[str]:
    associations: List[str] = []
    for substrate in substrates:
        text = substrate.lower()
        for keyword, tree in SUBSTRATE_TREES.items():
            if keyword in text and tree not in associations:
                associations.append(tree)
    return associations


def forest_types_from(habitats: List[str]) -> List[str]:
    forest_types: List[str] = []
    for habitat in habitats:
        text = habitat.lower()
        if "deciduous" in text or "hardwood" in text:
            forest_types.append("Hardwood")
        if "coniferous" in text or "softwood" in text:
            forest_types.append("Conifer")
        if "mixed" in text:
            forest_types.append("Mixed")
    return list(dict.fromkeys(forest_types))


def difficulty_for(record: SpeciesRecord) -> str:
    genus = _genus(record)
    if genus in ("pleurotus", "cantharellus"):
        return "beginner"
    if genus in ("amanita", "cortinarius", "morchella") or record.frequency == "rare":
        return "expert"
    return "intermediate"


def safety_notes_for(record: SpeciesRecord) -> str:
    genus = _genus(record)
    if genus == "amanita":
        return "EXTREMELY DANGEROUS - Many Amanita species are deadly poisonous. Only for expert identification."
    if genus == "cortinarius":
        return "WARNING - Some Cortinarius species are highly toxic. Expert identification required."
    if _is_endangered(record):
        return "Protected species - Do not harvest. Observation only."
    return "Always verify identification with multiple sources before consumption."


def description_for(record: SpeciesRecord) -> str:
    text = record.scientific_name
    if record.family:
        text += f" belongs to the {record.family} family"
    if record.habitats:
        text += f" and is typically found in {', '.join(record.habitats)} habitats"
    if record.substrates:
        text += f" growing on {', '.join(record.substrates)}"
    text += "."
    if record.conservation_status:
        text += f" Conservation status: {record.conservation_status}."
    return text


def to_species(record: SpeciesRecord) -> MushroomSpecies:
    """Map an external record onto the catalog schema.

    Temperatures are estimated from the lowest fruiting elevation with a rough
    lapse rate; humidity defaults to a uniformly high value.
    """
    min_elevation = record.elevation_min_m or DEFAULT_MIN_ELEVATION_M
    elevation = None
    if record.elevation_min_m is not None or record.elevation_max_m is not None:
        elevation = ElevationRange(minimum=record.elevation_min_m, maximum=record.elevation_max_m)

    genus = _genus(record)
    return MushroomSpecies(
        id=species_id_for(record.scientific_name),
        name=record.common_name or " ".join(record.scientific_name.split(" ")[1:]) or record.scientific_name,
        scientific_name=record.scientific_name,
        description=description_for(record),
        season=season_label_for_months(record.phenology_months),
        optimal_temp_c=max(5.0, min(25.0, 20 - min_elevation / 200)),
        optimal_humidity_pct=DEFAULT_OPTIMAL_HUMIDITY,
        soil_temp_min_c=max(2.0, 15 - min_elevation / 300),
        tree_associations=tree_associations_from(record.substrates),
        forest_types=forest_types_from(record.habitats),
        elevation_m=elevation,
        edible=genus in EDIBLE_GENERA,
        difficulty=difficulty_for(record),
        safety_notes=safety_notes_for(record),
    )


def merge_records(catalog: SpeciesCatalog, raw_records: List[dict]) -> tuple[SpeciesCatalog, ImportReport]:
    """Add records whose scientific name is not yet in the catalog."""
    report = ImportReport(total_records=len(raw_records))
    merged = list(catalog.species)
    known = {s.scientific_name.strip().lower() for s in merged}
    taken_ids = set(catalog.list_ids())

    for raw in raw_records:
        name = raw.get("scientific_name", "<unknown>") if isinstance(raw, dict) else "<invalid>"
        try:
            record = SpeciesRecord.model_validate(raw)
            key = record.scientific_name.strip().lower()
            if key in known:
                report.existing_species += 1
                continue
            species = to_species(record)
            if species.id in taken_ids:
                species = species.model_copy(update={"id": _unique_id(species.id, taken_ids)})
            merged.append(species)
            taken_ids.add(species.id)
            known.add(key)
            report.new_species_added += 1
            logger.info("Added new species: %s", record.scientific_name)
        except ValidationError as exc:
            logger.warning("Skipping species record %s: %s", name, exc)
            report.errors.append({"species": name, "error": str(exc)})

    return SpeciesCatalog(species=merged), report


def run(records_path: Path | None = None) -> tuple[IngestionResult, ImportReport]:
    settings = get_settings()
    records_path = records_path or settings.species_import_path

    with records_path.open(encoding="utf-8") as fh:
        raw_records = json.load(fh)
    if isinstance(raw_records, dict):
        raw_records = raw_records.get("records", [])

    with settings.species_catalog_path.open(encoding="utf-8") as fh:
        catalog = SpeciesCatalog.model_validate(json.load(fh))

    merged, report = merge_records(catalog, raw_records)
    if len(merged) == 0:
        raise RuntimeError("Species import produced an empty catalog; refusing to write it.")

    rows = write_collection(merged, settings.species_catalog_path)
    result = IngestionResult(
        source_id="species_import",
        output_path=settings.species_catalog_path,
        rows_written=rows,
        last_ingested=datetime.now(timezone.utc),
    )
    update_freshness(result, settings.freshness_path)
    return result, report


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    parser = argparse.ArgumentParser(description="Merge external species records into the catalog")
    parser.add_argument("--records", type=Path, default=None, help="Path to the species records JSON")
    args = parser.parse_args()
    result, report = run(records_path=args.records)
    print(f"Processed {report.total_records} records: "
          f"{report.new_species_added} added, {report.existing_species} already known, "
          f"{len(report.errors)} failed")
    print(f"Catalog now holds {result.rows_written} species ({result.output_path})")


if __name__ == "__main__":
    main()
