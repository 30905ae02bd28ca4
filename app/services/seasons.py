"""Seasonal timing model: season label + month -> timing tier."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Tuple

ALL_YEAR = "all year"


@dataclass(frozen=True)
class SeasonTiers:
    in_season: int = 10
    adjacent: int = 6
    out_of_season: int = 2


@dataclass(frozen=True)
class SeasonWindow:
    """Three in-season months plus the two boundary months either side."""

    in_season: FrozenSet[int]
    adjacent: FrozenSet[int]


# Winter wraps the year boundary: Dec, Jan, Feb in season; Nov and Mar adjacent.
SEASON_WINDOWS: Dict[str, SeasonWindow] = {
    "spring": SeasonWindow(frozenset({3, 4, 5}), frozenset({2, 6})),
    "summer": SeasonWindow(frozenset({6, 7, 8}), frozenset({5, 9})),
    "fall": SeasonWindow(frozenset({9, 10, 11}), frozenset({8, 12})),
    "winter": SeasonWindow(frozenset({12, 1, 2}), frozenset({11, 3})),
}

SEASON_ALIASES: Dict[str, str] = {"autumn": "fall"}

# Order used when building compound labels from month lists
SEASON_ORDER: Tuple[str, ...] = ("Spring", "Summer", "Fall", "Winter")


def _normalize(label: str) -> str:
    return " ".join(label.strip().lower().split())


class SeasonalModel:
    """Scores how well the current month fits a species' season label."""

    def __init__(
        self,
        tiers: Optional[SeasonTiers] = None,
        windows: Optional[Dict[str, SeasonWindow]] = None,
    ):
        self.tiers = SeasonTiers() if tiers is None else tiers
        self.windows = SEASON_WINDOWS if windows is None else windows

    def score_atom(self, label: str, month: int) -> int:
        name = _normalize(label)
        if name == ALL_YEAR:
            return self.tiers.in_season
        window = self.windows.get(SEASON_ALIASES.get(name, name))
        if window is None:
            return self.tiers.out_of_season
        if month in window.in_season:
            return self.tiers.in_season
        if month in window.adjacent:
            return self.tiers.adjacent
        return self.tiers.out_of_season

    def score(self, season_label: Optional[str], month: int) -> int:
        """Best tier across the comma-separated atoms of ``season_label``."""
        if not season_label:
            return self.tiers.out_of_season
        if _normalize(season_label) == ALL_YEAR:
            return self.tiers.in_season
        atoms = [atom for atom in season_label.split(",") if atom.strip()]
        if not atoms:
            return self.tiers.out_of_season
        return max(self.score_atom(atom, month) for atom in atoms)


_DEFAULT_MODEL = SeasonalModel()


def get_season_score(season_label: Optional[str], month: int) -> int:
    return _DEFAULT_MODEL.score(season_label, month)


def season_label_for_months(months) -> str:
    """Derive a season label from fruiting months (1-12).

    Three or more seasons, or no months at all, collapse to "All Year".
    """
    present = set(months)
    seasons = [
        season
        for season in SEASON_ORDER
        if present & SEASON_WINDOWS[season.lower()].in_season
    ]
    if not seasons or len(seasons) >= 3:
        return "All Year"
    return ", ".join(seasons)
