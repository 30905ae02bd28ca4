"""Factor scorers: one bounded integer sub-score per environmental dimension.

Each factor has a fixed maximum and a "no data" default chosen mid-range so
missing data neither penalizes nor rewards a species. The tier tables below
are the shared contract for every caller that ranks locations; change them
here and nowhere else.
"""
from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

from app.models import ElevationRange
from app.services.habitat import DEFAULT_MATCHER, HabitatMatcher
from app.services.seasons import SeasonalModel

# (upper bound on |difference| or lower bound on value, score) pairs, checked in order
Tiers = Sequence[Tuple[float, int]]

TEMPERATURE_MAX = 25
TEMPERATURE_DEFAULT = 15
TEMPERATURE_DIFF_TIERS: Tiers = ((2, 25), (5, 20), (8, 15), (12, 10))
TEMPERATURE_DIFF_FLOOR = 0
# (low, high, score) comfort bands when the species has no optimum
TEMPERATURE_BANDS: Sequence[Tuple[float, float, int]] = ((15, 22, 20), (10, 25, 15), (5, 30, 10))
TEMPERATURE_BAND_FLOOR = 5

HUMIDITY_MAX = 20
HUMIDITY_DEFAULT = 12
HUMIDITY_DIFF_TIERS: Tiers = ((5, 20), (10, 15), (15, 10), (20, 5))
HUMIDITY_DIFF_FLOOR = 2
HUMIDITY_LEVEL_TIERS: Tiers = ((80, 20), (70, 15), (60, 10), (50, 5))
HUMIDITY_LEVEL_FLOOR = 2

SOIL_TEMPERATURE_MAX = 15
SOIL_TEMPERATURE_DEFAULT = 8
# offset above the species minimum
SOIL_MARGIN_TIERS: Tiers = ((8, 15), (5, 12), (2, 10), (0, 7), (-3, 4))
SOIL_MARGIN_FLOOR = 0
SOIL_LEVEL_TIERS: Tiers = ((14, 12), (10, 10), (6, 6))
SOIL_LEVEL_FLOOR = 2

RAINFALL_MAX = 15
RAINFALL_DEFAULT = 8
RAINFALL_DAY_TIERS: Tiers = ((2, 15), (4, 12), (7, 8), (14, 4), (21, 2))
RAINFALL_FLOOR = 0

ELEVATION_MAX = 10
ELEVATION_DEFAULT = 6
ELEVATION_DISTANCE_TIERS: Tiers = ((50, 9), (100, 8), (200, 6), (400, 4), (600, 2))
ELEVATION_DISTANCE_FLOOR = 0
# Swiss altitude bands used when the species range is unknown
ELEVATION_BANDS: Sequence[Tuple[float, float, int]] = ((400, 1200, 8), (200, 1600, 6))
ELEVATION_BAND_FLOOR = 3

FOREST_TYPE_MAX = 10
FOREST_TYPE_DEFAULT = 5
FOREST_TYPE_MISS = 3

TREE_SPECIES_MAX = 15
TREE_SPECIES_DEFAULT = 8
TREE_RATIO_TIERS: Tiers = ((0.7, 15), (0.5, 12), (0.3, 9), (0.1, 6))
TREE_RATIO_FLOOR = 3

SEASON_MAX = 10

FACTOR_MAXIMA = {
    "temperature": TEMPERATURE_MAX,
    "humidity": HUMIDITY_MAX,
    "soil_temperature": SOIL_TEMPERATURE_MAX,
    "recent_rainfall": RAINFALL_MAX,
    "elevation": ELEVATION_MAX,
    "forest_type": FOREST_TYPE_MAX,
    "tree_species": TREE_SPECIES_MAX,
    "season": SEASON_MAX,
}


def _tier_at_most(value: float, tiers: Tiers, floor: int) -> int:
    for bound, score in tiers:
        if value <= bound:
            return score
    return floor


def _tier_at_least(value: float, tiers: Tiers, floor: int) -> int:
    for bound, score in tiers:
        if value >= bound:
            return score
    return floor


def _band(value: float, bands: Sequence[Tuple[float, float, int]], floor: int) -> int:
    for low, high, score in bands:
        if low <= value <= high:
            return score
    return floor


def score_temperature(observed: Optional[float], optimum: Optional[float]) -> int:
    if observed is None:
        return TEMPERATURE_DEFAULT
    if optimum is None:
        return _band(observed, TEMPERATURE_BANDS, TEMPERATURE_BAND_FLOOR)
    return _tier_at_most(abs(observed - optimum), TEMPERATURE_DIFF_TIERS, TEMPERATURE_DIFF_FLOOR)


def score_humidity(observed: Optional[float], optimum: Optional[float]) -> int:
    if observed is None:
        return HUMIDITY_DEFAULT
    if optimum is None:
        return _tier_at_least(observed, HUMIDITY_LEVEL_TIERS, HUMIDITY_LEVEL_FLOOR)
    return _tier_at_most(abs(observed - optimum), HUMIDITY_DIFF_TIERS, HUMIDITY_DIFF_FLOOR)


def score_soil_temperature(observed: Optional[float], species_minimum: Optional[float]) -> int:
    if observed is None:
        return SOIL_TEMPERATURE_DEFAULT
    if species_minimum is None:
        return _tier_at_least(observed, SOIL_LEVEL_TIERS, SOIL_LEVEL_FLOOR)
    return _tier_at_least(observed - species_minimum, SOIL_MARGIN_TIERS, SOIL_MARGIN_FLOOR)


def score_recent_rainfall(days_since_rain: Optional[float]) -> int:
    """Fewer days since significant rain is always at least as good."""
    if days_since_rain is None:
        return RAINFALL_DEFAULT
    return _tier_at_most(days_since_rain, RAINFALL_DAY_TIERS, RAINFALL_FLOOR)


def score_elevation(elevation: Optional[float], species_range: Optional[ElevationRange]) -> int:
    if elevation is None:
        return ELEVATION_DEFAULT
    if species_range is None or not species_range.is_known:
        return _band(elevation, ELEVATION_BANDS, ELEVATION_BAND_FLOOR)
    if species_range.contains(elevation):
        return ELEVATION_MAX
    return _tier_at_most(species_range.distance_to(elevation), ELEVATION_DISTANCE_TIERS, ELEVATION_DISTANCE_FLOOR)


def score_forest_type(
    location_type: Optional[str],
    species_types: Iterable[str],
    matcher: HabitatMatcher = DEFAULT_MATCHER,
) -> int:
    species_types = [t for t in species_types or () if t and t.strip()]
    if not location_type or not location_type.strip() or not species_types:
        return FOREST_TYPE_DEFAULT
    return FOREST_TYPE_MAX if matcher.forest_type_matches(location_type, species_types) else FOREST_TYPE_MISS


def score_tree_species(
    location_trees: Iterable[str],
    species_trees: Iterable[str],
    matcher: HabitatMatcher = DEFAULT_MATCHER,
) -> int:
    # Missing data on either side is neutral, which is not the same as "no match".
    location_trees = [t for t in location_trees or () if t and t.strip()]
    species_trees = [t for t in species_trees or () if t and t.strip()]
    if not location_trees or not species_trees:
        return TREE_SPECIES_DEFAULT
    ratio = matcher.tree_match_ratio(location_trees, species_trees)
    return _tier_at_least(ratio, TREE_RATIO_TIERS, TREE_RATIO_FLOOR)


def score_season(season_label: Optional[str], month: int, model: SeasonalModel) -> int:
    return model.score(season_label, month)
