import pytest

from app.services.habitat import TREE_SYNONYMS, HabitatMatcher, normalize

matcher = HabitatMatcher()


@pytest.mark.parametrize(
    "local,common",
    [
        ("Fichte", "Spruce"),
        ("Buche", "Beech"),
        ("Tanne", "Fir"),
        ("Kiefer", "Pine"),
        ("Föhre", "Pine"),
        ("Eiche", "Oak"),
        ("Birke", "Birch"),
        ("Picea abies", "Spruce"),
        ("Fagus sylvatica", "Beech"),
        ("Rotbuche", "Beech"),
        ("Épicéa", "Spruce"),
    ],
)
def test_synonym_pairs_match_both_ways(local, common):
    assert matcher.trees_match(local, common)
    assert matcher.trees_match(common, local)


def test_binomial_is_not_confused_with_embedded_genus():
    # Picea abies is Norway spruce even though "abies" is the fir genus
    assert matcher.tree_groups_of("Picea abies") == {"spruce"}
    assert not matcher.trees_match("Picea abies", "Fir")


@pytest.mark.parametrize(
    "local,group,lookalike",
    [
        ("Hainbuche", "hornbeam", "Beech"),
        ("Weissbuche", "hornbeam", "Beech"),
        ("Eberesche", "rowan", "Ash"),
    ],
)
def test_compound_local_names_are_not_their_namesakes(local, group, lookalike):
    # Hainbuche is hornbeam and Eberesche is rowan despite the embedded "buche"/"esche"
    assert matcher.tree_groups_of(local) == {group}
    assert not matcher.trees_match(local, lookalike)
    assert matcher.trees_match(local, group.capitalize())


def test_substring_containment_either_direction():
    assert matcher.trees_match("Douglas Fir", "Fir")
    assert matcher.trees_match("Oak", "Sessile oak")


def test_case_and_whitespace_are_ignored():
    assert matcher.trees_match("  OAK ", "oak")
    assert normalize("  Mixed   Conifer ") == "mixed conifer"


def test_unrelated_trees_do_not_match():
    assert not matcher.trees_match("Fichte", "Beech")
    assert not matcher.trees_match("Maple", "Oak")


@pytest.mark.parametrize("a,b", [("", ""), ("", "Oak"), (None, "Oak"), ("   ", "   ")])
def test_blank_names_never_match(a, b):
    assert not matcher.trees_match(a, b)


def test_match_ratio():
    assert matcher.tree_match_ratio(["Fichte", "Tanne", "Ahorn", "Linde"], ["Spruce", "Fir"]) == 0.5
    assert matcher.tree_match_ratio([], ["Spruce"]) == 0.0
    assert matcher.tree_match_ratio(["Spruce"], []) == 0.0


def test_forest_families():
    assert matcher.forest_families_of("Mixed Conifer") == {"mixed", "conifer"}
    assert matcher.forest_families_of("Laubwald") == {"hardwood"}
    assert matcher.forest_families_of("Riverbank") == set()
    assert matcher.forest_families_of(None) == set()


def test_forest_type_match():
    assert matcher.forest_type_matches("Conifer", ["Softwood"])
    assert matcher.forest_type_matches("Hardwood", ["Deciduous"])
    assert matcher.forest_type_matches("riverbank", ["Hardwood", "Riverbank"])
    assert not matcher.forest_type_matches("Conifer", ["Hardwood"])
    assert not matcher.forest_type_matches("", ["Hardwood"])
    assert not matcher.forest_type_matches("Mixed", ["", "  "])


def test_synonym_table_can_be_extended():
    extended = HabitatMatcher(tree_synonyms={**TREE_SYNONYMS, "chestnut": ["kastanie", "castanea", "châtaignier"]})
    assert extended.trees_match("Kastanie", "Chestnut")
    assert extended.trees_match("Fichte", "Spruce")
    assert not matcher.trees_match("Kastanie", "Chestnut")


@pytest.mark.parametrize("junk", ["???", "12345", "Ω≈ç√", "a" * 500, "-", ","])
def test_matching_is_total(junk):
    matcher.trees_match(junk, "Oak")
    matcher.tree_match_ratio([junk, "Oak"], [junk])
    matcher.forest_type_matches(junk, [junk, "Mixed"])


def test_synonym_table_can_be_replaced_with_empty():
    bare = HabitatMatcher(tree_synonyms={}, forest_families={})
    assert not bare.trees_match("Fichte", "Spruce")
    assert bare.trees_match("Spruce", "spruce")
    assert not bare.forest_type_matches("Conifer", ["Nadelwald"])
