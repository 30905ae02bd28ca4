"""Fuzzy habitat matching between location vocabulary and species preferences.

Location data is entered informally and mixes English common names with local
vernacular (German, French) and botanical names, so matching combines exact
comparison, a curated synonym table and substring containment. Every method is
total over arbitrary strings.
"""
from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Set

TREE_SYNONYMS: Dict[str, FrozenSet[str]] = {
    "spruce": frozenset({"spruce", "norway spruce", "fichte", "rottanne", "picea", "picea abies", "epicea", "épicéa"}),
    "beech": frozenset({"beech", "european beech", "buche", "rotbuche", "fagus", "fagus sylvatica", "hetre", "hêtre"}),
    "fir": frozenset({"fir", "silver fir", "tanne", "weisstanne", "weißtanne", "abies", "abies alba", "sapin"}),
    "pine": frozenset({"pine", "scots pine", "kiefer", "föhre", "foehre", "pinus", "pinus sylvestris", "pin"}),
    "oak": frozenset({"oak", "eiche", "quercus", "quercus robur", "chene", "chêne"}),
    "birch": frozenset({"birch", "birke", "betula", "betula pendula", "bouleau"}),
    "larch": frozenset({"larch", "lärche", "laerche", "larix", "larix decidua", "meleze", "mélèze"}),
    "ash": frozenset({"ash", "esche", "fraxinus", "fraxinus excelsior", "frene", "frêne"}),
    "maple": frozenset({"maple", "ahorn", "acer", "erable", "érable"}),
    "hornbeam": frozenset({"hornbeam", "hainbuche", "weissbuche", "weißbuche", "carpinus", "carpinus betulus", "charme"}),
    "rowan": frozenset({"rowan", "eberesche", "vogelbeere", "sorbus", "sorbus aucuparia", "sorbier"}),
}

FOREST_FAMILIES: Dict[str, FrozenSet[str]] = {
    "mixed": frozenset({"mixed", "mixed forest", "mischwald"}),
    "conifer": frozenset({"conifer", "coniferous", "softwood", "evergreen", "nadelwald"}),
    "hardwood": frozenset({"hardwood", "deciduous", "broadleaf", "laubwald"}),
}

# Synonyms shorter than this only match whole names, never as substrings
_MIN_EMBEDDED_SYNONYM = 5


def normalize(value: Optional[str]) -> str:
    if not value:
        return ""
    return " ".join(value.strip().casefold().split())


def _contains_either_way(a: str, b: str) -> bool:
    return a in b or b in a


class HabitatMatcher:
    """Matches forest types and tree associations.

    Both lookup tables can be replaced or extended, e.g. with a proper
    taxonomy, without touching the scorer.
    """

    def __init__(
        self,
        tree_synonyms: Optional[Mapping[str, Iterable[str]]] = None,
        forest_families: Optional[Mapping[str, Iterable[str]]] = None,
    ):
        self.tree_synonyms = self._build_table(TREE_SYNONYMS if tree_synonyms is None else tree_synonyms)
        self.forest_families = self._build_table(FOREST_FAMILIES if forest_families is None else forest_families)

    @staticmethod
    def _build_table(table: Mapping[str, Iterable[str]]) -> Dict[str, FrozenSet[str]]:
        built: Dict[str, FrozenSet[str]] = {}
        for key, names in table.items():
            normalized = {normalize(name) for name in names} | {normalize(key)}
            built[normalize(key)] = frozenset(name for name in normalized if name)
        return built

    # ------------------------------------------------------------------
    # Forest types
    # ------------------------------------------------------------------

    def forest_families_of(self, forest_type: Optional[str]) -> Set[str]:
        name = normalize(forest_type)
        if not name:
            return set()
        words = set(name.replace("-", " ").split())
        families = set()
        for family, vocabulary in self.forest_families.items():
            if name in vocabulary or words & vocabulary:
                families.add(family)
        return families

    def forest_type_matches(self, location_type: Optional[str], species_types: Iterable[str]) -> bool:
        location_name = normalize(location_type)
        if not location_name:
            return False
        location_families = self.forest_families_of(location_name)
        for species_type in species_types or ():
            species_name = normalize(species_type)
            if not species_name:
                continue
            if _contains_either_way(location_name, species_name):
                return True
            if location_families & self.forest_families_of(species_name):
                return True
        return False

    # ------------------------------------------------------------------
    # Tree associations
    # ------------------------------------------------------------------

    def tree_groups_of(self, tree: Optional[str]) -> Set[str]:
        name = normalize(tree)
        if not name:
            return set()
        exact = {group for group, names in self.tree_synonyms.items() if name in names}
        if exact:
            return exact
        return {
            group
            for group, names in self.tree_synonyms.items()
            if any(len(syn) >= _MIN_EMBEDDED_SYNONYM and syn in name for syn in names)
        }

    def trees_match(self, location_tree: Optional[str], species_tree: Optional[str]) -> bool:
        a, b = normalize(location_tree), normalize(species_tree)
        if not a or not b:
            return False
        if a == b or _contains_either_way(a, b):
            return True
        return bool(self.tree_groups_of(a) & self.tree_groups_of(b))

    def tree_match_ratio(self, location_trees: Iterable[str], species_trees: Iterable[str]) -> float:
        """Share of location trees matching at least one species association."""
        location_list = list(location_trees or ())
        if not location_list:
            return 0.0
        species_list = list(species_trees or ())
        matched = sum(
            1
            for tree in location_list
            if any(self.trees_match(tree, assoc) for assoc in species_list)
        )
        return matched / len(location_list)


DEFAULT_MATCHER = HabitatMatcher()
