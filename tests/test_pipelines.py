import json

import pyarrow.parquet as pq

from app.config import get_settings
from app.models import SpeciesCatalog
from app.pipelines import local_weather_seed, location_ranking, species_import
from app.pipelines.species_import import SpeciesRecord, merge_records, to_species
from app.services import data_cache, data_loader
from tests.conftest import make_species


def test_to_species_maps_external_record():
    record = SpeciesRecord(
        scientific_name="Lactarius deliciosus",
        common_name="Saffron Milk Cap",
        phenology_months=[8, 9, 10, 11],
        substrates=["soil under pine", "soil under spruce"],
        habitats=["coniferous forest"],
        elevation_min_m=300,
        elevation_max_m=1600,
        frequency="common",
    )

    species = to_species(record)

    assert species.id == "lactarius-deliciosus"
    assert species.season == "Summer, Fall"
    assert species.tree_associations == ["Pine", "Spruce"]
    assert species.forest_types == ["Conifer"]
    assert species.optimal_temp_c == 18.5
    assert species.soil_temp_min_c == 14.0
    assert species.optimal_humidity_pct == 80.0
    assert species.elevation_m.minimum == 300 and species.elevation_m.maximum == 1600
    assert species.edible is True
    assert species.difficulty == "intermediate"


def test_to_species_flags_dangerous_genera():
    species = to_species(SpeciesRecord(scientific_name="Amanita phalloides", phenology_months=[7, 8, 9]))
    assert species.edible is False
    assert species.difficulty == "expert"
    assert species.safety_notes.startswith("EXTREMELY DANGEROUS")
    assert species.name == "phalloides"
    assert species.elevation_m is None
    # unknown minimum elevation falls back to 500 m
    assert species.optimal_temp_c == 17.5


def test_merge_records_adds_only_missing():
    catalog = SpeciesCatalog(species=[make_species()])
    records = [
        {"scientific_name": "boletus edulis", "phenology_months": [9]},
        {"scientific_name": "Hydnum repandum", "phenology_months": [8, 9, 10], "substrates": ["beech"]},
        {"common_name": "nameless"},
    ]

    merged, report = merge_records(catalog, records)

    assert [s.scientific_name for s in merged.species] == ["Boletus edulis", "Hydnum repandum"]
    assert merged.species[0] == catalog.species[0]
    assert (report.total_records, report.existing_species, report.new_species_added) == (3, 1, 1)
    assert len(report.errors) == 1


def test_merge_records_keeps_species_ids_unique():
    catalog = SpeciesCatalog(species=[
        make_species(),
        make_species(id="hydnum-repandum", name="Hedgehog", scientific_name="Hydnum rufescens"),
    ])

    merged, report = merge_records(catalog, [{"scientific_name": "Hydnum repandum", "phenology_months": [9]}])

    assert report.new_species_added == 1
    assert merged.list_ids() == ["porcini", "hydnum-repandum", "hydnum-repandum-2"]
    assert merged.get("hydnum-repandum").scientific_name == "Hydnum rufescens"


def test_species_import_run_writes_catalog(data_dir):
    result, report = species_import.run()

    assert report.new_species_added == 3
    assert report.existing_species == 1
    assert result.rows_written == 8
    data_loader.clear_caches()
    assert data_loader.load_species_catalog().get_by_scientific_name("Amanita phalloides") is not None
    freshness = json.loads(get_settings().freshness_path.read_text())
    assert freshness["species_import"]["rows_written"] == 8


def test_local_weather_seed_populates_cache(data_dir):
    assert data_cache.load_processed_weather() is None

    result = local_weather_seed.run()

    assert result.rows_written == 4
    cached = data_cache.load_processed_weather()
    assert cached.latest_for("albis-pass").last_rainfall_days == 0


def test_location_ranking_writes_parquet(data_dir):
    result = location_ranking.run(month=10)

    table = pq.read_table(str(result.output_path))
    assert table.num_rows == 4
    df = table.to_pandas()
    assert list(df["overall_probability"]) == sorted(df["overall_probability"], reverse=True)
    assert set(df["month"]) == {10}
