import pytest

from app.services.seasons import SeasonalModel, SeasonTiers, get_season_score, season_label_for_months


@pytest.mark.parametrize("month", range(1, 13))
def test_all_year_is_always_in_season(month):
    assert get_season_score("All Year", month) == 10
    assert get_season_score(" all year ", month) == 10


def test_winter_wraps_year_boundary():
    assert get_season_score("Winter", 12) == get_season_score("Winter", 1) == 10
    assert get_season_score("Winter", 2) == 10
    assert get_season_score("Winter", 11) == 6
    assert get_season_score("Winter", 3) == 6
    assert get_season_score("Winter", 7) == 2


@pytest.mark.parametrize(
    "season,in_season,adjacent",
    [
        ("Spring", (3, 4, 5), (2, 6)),
        ("Summer", (6, 7, 8), (5, 9)),
        ("Fall", (9, 10, 11), (8, 12)),
        ("Winter", (12, 1, 2), (11, 3)),
    ],
)
def test_season_windows(season, in_season, adjacent):
    for month in range(1, 13):
        expected = 10 if month in in_season else 6 if month in adjacent else 2
        assert get_season_score(season, month) == expected, (season, month)


@pytest.mark.parametrize("month", range(1, 13))
def test_compound_label_takes_best_atom(month):
    assert get_season_score("Summer, Fall", month) == max(
        get_season_score("Summer", month), get_season_score("Fall", month)
    )


def test_compound_label_example():
    assert get_season_score("Summer, Fall", 9) == 10
    assert get_season_score("Spring, Winter", 7) == 2


@pytest.mark.parametrize("label", ["Sprng", "Monsoon", "", None, ", ,", "Fall-ish"])
def test_unknown_labels_fall_back_to_lowest_tier(label):
    assert get_season_score(label, 10) == 2


def test_case_insensitive_names_and_autumn_alias():
    assert get_season_score("fall", 10) == 10
    assert get_season_score("Autumn", 10) == 10


def test_out_of_range_month_is_lowest_tier():
    assert get_season_score("Fall", 13) == 2
    assert get_season_score("Winter", 0) == 2


def test_custom_tiers():
    model = SeasonalModel(tiers=SeasonTiers(in_season=5, adjacent=3, out_of_season=1))
    assert model.score("Spring", 4) == 5
    assert model.score("Spring", 6) == 3
    assert model.score("Spring", 10) == 1
    assert model.score("All Year", 10) == 5


@pytest.mark.parametrize(
    "months,label",
    [
        ([8, 9, 10, 11], "Summer, Fall"),
        ([9], "Fall"),
        ([12, 1], "Winter"),
        ([3, 7, 10], "All Year"),
        ([], "All Year"),
    ],
)
def test_season_label_for_months(months, label):
    assert season_label_for_months(months) == label


def test_empty_window_table_is_kept():
    model = SeasonalModel(windows={})
    assert model.score("Summer", 7) == SeasonTiers().out_of_season
    assert model.score("All Year", 7) == SeasonTiers().in_season
