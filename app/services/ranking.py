"""Location-level aggregation of per-species suitability scores."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional, Sequence

from app.models import ForagingLocation, MushroomSpecies, WeatherSnapshot
from app.services.scoring import SpeciesScore, SpeciesScorer

logger = logging.getLogger(__name__)

SUITABLE_THRESHOLD = 35
TOP_SPECIES_COUNT = 5
AGGREGATION_WEIGHTS = (0.4, 0.35, 0.25)


@dataclass
class LocationRanking:
    overall_probability: int
    suitable_species: List[str] = field(default_factory=list)
    top_species: List[MushroomSpecies] = field(default_factory=list)
    scores: List[SpeciesScore] = field(default_factory=list)


def weighted_probability(probabilities: Sequence[int], weights: Sequence[float]) -> int:
    """Weighted sum of the leading scores, rounded half-up and clamped to 0-100.

    Ranks beyond the available scores contribute nothing.
    """
    total = sum(
        (Decimal(str(weight)) * Decimal(prob) for prob, weight in zip(probabilities, weights)),
        Decimal(0),
    )
    rounded = int(total.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    return max(0, min(100, rounded))


class LocationRanker:
    """Ranks every catalog species for a location and aggregates the result."""

    def __init__(
        self,
        scorer: Optional[SpeciesScorer] = None,
        inclusion_threshold: int = SUITABLE_THRESHOLD,
        top_n: int = TOP_SPECIES_COUNT,
        weights: Sequence[float] = AGGREGATION_WEIGHTS,
        max_workers: int = 1,
    ):
        weight_sum = sum(Decimal(str(w)) for w in weights)
        if weight_sum != Decimal(1):
            raise ValueError(f"Aggregation weights must sum to 1.0, got {weight_sum}")
        self.scorer = scorer or SpeciesScorer()
        self.inclusion_threshold = inclusion_threshold
        self.top_n = top_n
        self.weights = tuple(weights)
        self.max_workers = max_workers

    def _score_all(
        self,
        location: ForagingLocation,
        species_list: List[MushroomSpecies],
        weather: Optional[WeatherSnapshot],
        month: int,
    ) -> List[SpeciesScore]:
        if self.max_workers <= 1 or len(species_list) < 2:
            return [self.scorer.score(s, location, weather, month) for s in species_list]
        # executor.map yields in submission order, so output matches the sequential path
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(lambda s: self.scorer.score(s, location, weather, month), species_list))

    def rank(
        self,
        location: ForagingLocation,
        catalog: Iterable[MushroomSpecies],
        weather: Optional[WeatherSnapshot] = None,
        month: Optional[int] = None,
    ) -> LocationRanking:
        species_list = list(catalog or [])
        if not species_list:
            return LocationRanking(overall_probability=0)
        if month is None:
            month = date.today().month

        scores = self._score_all(location, species_list, weather, month)
        # sorted() is stable: ties keep catalog order
        scores = sorted(scores, key=lambda sc: sc.probability, reverse=True)

        suitable = [sc.species.name for sc in scores if sc.probability >= self.inclusion_threshold]
        top = [sc.species for sc in scores[: self.top_n]]
        overall = weighted_probability([sc.probability for sc in scores], self.weights)

        logger.debug(
            "Ranked %d species for %s (month=%d): overall=%d, suitable=%d",
            len(scores), location.id, month, overall, len(suitable),
        )
        return LocationRanking(
            overall_probability=overall,
            suitable_species=suitable,
            top_species=top,
            scores=scores,
        )


_DEFAULT_RANKER = LocationRanker()


def rank_location(
    location: ForagingLocation,
    catalog: Iterable[MushroomSpecies],
    weather: Optional[WeatherSnapshot] = None,
    month: Optional[int] = None,
) -> LocationRanking:
    return _DEFAULT_RANKER.rank(location, catalog, weather, month)


def ranker_from_settings(settings) -> LocationRanker:
    return LocationRanker(
        inclusion_threshold=settings.suitable_species_threshold,
        top_n=settings.top_species_count,
        weights=settings.aggregation_weights,
        max_workers=settings.ranking_workers,
    )
