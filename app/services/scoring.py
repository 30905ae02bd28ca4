"""Deterministic multi-factor suitability scoring for a single species."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Dict, List, Optional

from app.models import ForagingLocation, MushroomSpecies, WeatherSnapshot
from app.services import factors
from app.services.habitat import DEFAULT_MATCHER, HabitatMatcher
from app.services.seasons import SeasonalModel


@dataclass(frozen=True)
class ScoreBreakdown:
    temperature: int
    humidity: int
    soil_temperature: int
    recent_rainfall: int
    elevation: int
    forest_type: int
    tree_species: int
    season: int

    @property
    def total(self) -> int:
        return max(0, min(100, sum(self.factor_scores().values())))

    def factor_scores(self) -> Dict[str, int]:
        return asdict(self)

    def as_dict(self) -> Dict[str, int]:
        payload = self.factor_scores()
        payload["total"] = self.total
        return payload


@dataclass(frozen=True)
class SpeciesScore:
    species: MushroomSpecies
    probability: int
    breakdown: ScoreBreakdown


class SpeciesScorer:
    """Combines the eight factor scorers into a clamped 0-100 probability.

    Total over every input: absent weather, empty habitat lists and unknown
    season labels all fall back to the factor defaults.
    """

    def __init__(
        self,
        matcher: Optional[HabitatMatcher] = None,
        seasonal_model: Optional[SeasonalModel] = None,
    ):
        self.matcher = matcher or DEFAULT_MATCHER
        self.seasonal_model = seasonal_model or SeasonalModel()

    def breakdown(
        self,
        species: MushroomSpecies,
        location: ForagingLocation,
        weather: Optional[WeatherSnapshot],
        month: int,
    ) -> ScoreBreakdown:
        weather = weather or WeatherSnapshot()
        return ScoreBreakdown(
            temperature=factors.score_temperature(weather.temperature_c, species.optimal_temp_c),
            humidity=factors.score_humidity(weather.humidity_pct, species.optimal_humidity_pct),
            soil_temperature=factors.score_soil_temperature(weather.soil_temperature_c, species.soil_temp_min_c),
            recent_rainfall=factors.score_recent_rainfall(weather.last_rainfall_days),
            elevation=factors.score_elevation(location.elevation_m, species.elevation_m),
            forest_type=factors.score_forest_type(location.forest_type, species.forest_types, self.matcher),
            tree_species=factors.score_tree_species(location.tree_species, species.tree_associations, self.matcher),
            season=factors.score_season(species.season, month, self.seasonal_model),
        )

    def score(
        self,
        species: MushroomSpecies,
        location: ForagingLocation,
        weather: Optional[WeatherSnapshot] = None,
        month: Optional[int] = None,
    ) -> SpeciesScore:
        if month is None:
            month = date.today().month
        breakdown = self.breakdown(species, location, weather, month)
        return SpeciesScore(species=species, probability=breakdown.total, breakdown=breakdown)


_DEFAULT_SCORER = SpeciesScorer()


def score_species(
    species: MushroomSpecies,
    location: ForagingLocation,
    weather: Optional[WeatherSnapshot] = None,
    month: Optional[int] = None,
) -> SpeciesScore:
    """Score one species at one location. ``month`` defaults to the current month."""
    return _DEFAULT_SCORER.score(species, location, weather, month)


def explain(breakdown: ScoreBreakdown) -> List[str]:
    """Short human-readable notes on the strongest and weakest factors."""
    notes: List[str] = []

    if breakdown.temperature >= 20:
        notes.append("Optimal temperature conditions")
    elif breakdown.temperature >= 15:
        notes.append("Good temperature")
    elif breakdown.temperature >= 10:
        notes.append("Adequate temperature")
    else:
        notes.append("Temperature not ideal")

    if breakdown.humidity >= 15:
        notes.append("Excellent humidity levels")
    elif breakdown.humidity >= 10:
        notes.append("Good humidity")
    else:
        notes.append("Low humidity conditions")

    if breakdown.recent_rainfall >= 12:
        notes.append("Perfect recent rainfall")
    elif breakdown.recent_rainfall >= 8:
        notes.append("Good soil moisture")
    elif breakdown.recent_rainfall >= 4:
        notes.append("Some soil moisture")
    else:
        notes.append("Dry conditions")

    if breakdown.tree_species >= 12:
        notes.append("Excellent tree species match")
    elif breakdown.tree_species >= 8:
        notes.append("Good tree compatibility")
    else:
        notes.append("Limited tree species match")

    if breakdown.season >= 8:
        notes.append("Peak season for mushrooms")
    elif breakdown.season >= 6:
        notes.append("Good seasonal timing")
    else:
        notes.append("Outside optimal season")

    return notes
