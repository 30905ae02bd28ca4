"""API routes for the foraging suitability service."""
from datetime import date, datetime
from typing import List, Optional

import pyarrow.parquet as pq
from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from app.config import get_settings
from app.models import ForagingLocation, MushroomSpecies, SpeciesCatalog, WeatherSnapshot
from app.services import data_loader
from app.services.geo import nearby_locations
from app.services.ranking import LocationRanking, ranker_from_settings
from app.services.scoring import SpeciesScore, explain, score_species

router = APIRouter(prefix="/api", tags=["foraging"])


class PreviewRequest(BaseModel):
    location: ForagingLocation
    weather: Optional[WeatherSnapshot] = None
    month: Optional[int] = Field(default=None, ge=1, le=12)


def _get_species_catalog() -> SpeciesCatalog:
    return data_loader.load_species_catalog()


def _get_location(location_id: str) -> ForagingLocation:
    try:
        return data_loader.load_locations().get(location_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def _get_species(species_id: str) -> MushroomSpecies:
    try:
        return _get_species_catalog().get(species_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def _rank(location: ForagingLocation, weather: Optional[WeatherSnapshot], month: int) -> LocationRanking:
    ranker = ranker_from_settings(get_settings())
    return ranker.rank(location, _get_species_catalog().species, weather, month)


def _score_payload(sc: SpeciesScore) -> dict:
    return {
        "species_id": sc.species.id,
        "name": sc.species.name,
        "probability": sc.probability,
        "breakdown": sc.breakdown.as_dict(),
    }


def _ranking_payload(ranking: LocationRanking) -> dict:
    return {
        "probability": ranking.overall_probability,
        "suitable_species": ranking.suitable_species,
        "top_species": [
            {"id": s.id, "name": s.name, "scientific_name": s.scientific_name}
            for s in ranking.top_species
        ],
        "species_scores": [_score_payload(sc) for sc in ranking.scores],
    }


def _location_payload(
    location: ForagingLocation,
    weather: Optional[WeatherSnapshot],
    month: int,
    distance: Optional[float] = None,
) -> dict:
    payload = location.model_dump()
    payload.update(_ranking_payload(_rank(location, weather, month)))
    payload["current_conditions"] = weather.model_dump() if weather else None
    if distance is not None:
        payload["distance_km"] = round(distance, 2)
    return payload


@router.get("/health", summary="Health check")
def health() -> dict:
    return {"status": "ok", "timestamp": datetime.utcnow()}


@router.get("/species", summary="List known species")
def list_species() -> dict:
    catalog = _get_species_catalog()
    return {"species": [profile.model_dump() for profile in catalog.species]}


@router.get("/species/{species_id}", summary="Get one species profile")
def get_species(species_id: str) -> dict:
    return _get_species(species_id).model_dump()


@router.get("/species/{species_id}/score", summary="Score a species at a location")
def score_species_at_location(
    species_id: str,
    location_id: str = Query(..., description="Location to score against"),
    month: Optional[int] = Query(None, ge=1, le=12),
) -> dict:
    species = _get_species(species_id)
    location = _get_location(location_id)
    weather = data_loader.load_weather().latest_for(location.id)
    month = month or date.today().month

    sc = score_species(species, location, weather, month)
    return {
        "location_id": location.id,
        "month": month,
        **_score_payload(sc),
        "explanations": explain(sc.breakdown),
    }


@router.get("/locations", summary="List foraging locations")
def list_locations() -> dict:
    return {"locations": [location.model_dump() for location in data_loader.load_locations()]}


@router.get("/locations/nearby", summary="Rank locations near a point")
def locations_nearby(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    radius: Optional[float] = Query(None, gt=0, description="Search radius in km"),
    month: Optional[int] = Query(None, ge=1, le=12),
) -> dict:
    settings = get_settings()
    radius = min(radius or settings.nearby_radius_km, settings.max_nearby_radius_km)
    month = month or date.today().month
    weather = data_loader.load_weather()

    results = [
        _location_payload(location, weather.latest_for(location.id), month, distance)
        for location, distance in nearby_locations(data_loader.load_locations(), lat, lng, radius)
    ]
    results.sort(key=lambda item: item["probability"], reverse=True)
    return {"month": month, "radius_km": radius, "count": len(results), "locations": results}


@router.get("/locations/{location_id}", summary="Get a location with its species ranking")
def get_location(location_id: str, month: Optional[int] = Query(None, ge=1, le=12)) -> dict:
    location = _get_location(location_id)
    weather = data_loader.load_weather().latest_for(location.id)
    return _location_payload(location, weather, month or date.today().month)


@router.post("/preview", summary="Rank an ad-hoc location without persisting it")
def preview(request: PreviewRequest) -> dict:
    month = request.month or date.today().month
    ranking = _rank(request.location, request.weather, month)
    return {"month": month, **_ranking_payload(ranking)}


@router.get("/rankings", summary="Read the batch location ranking snapshot")
def rankings(min_probability: int = Query(0, ge=0, le=100)) -> dict:
    settings = get_settings()
    parquet_path = settings.rankings_path

    if not parquet_path.exists():
        raise HTTPException(
            status_code=503,
            detail="Location rankings not available. Run the location_ranking pipeline first.",
        )

    try:
        table = pq.read_table(str(parquet_path), filters=[("overall_probability", ">=", min_probability)])
    except Exception as exc:
        raise HTTPException(status_code=500, detail=f"Failed to read parquet: {exc}") from exc

    rows: List[dict] = []
    for row in table.to_pylist():
        rows.append({
            **row,
            "suitable_species": row["suitable_species"].split("|") if row.get("suitable_species") else [],
            "top_species_ids": row["top_species_ids"].split("|") if row.get("top_species_ids") else [],
        })
    return {"count": len(rows), "locations": rows}
