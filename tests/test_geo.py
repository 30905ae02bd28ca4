import pytest

from app.services.geo import distance_km, nearby_locations
from tests.conftest import make_location


def test_distance_to_self_is_zero():
    assert distance_km(47.3518, 8.4942, 47.3518, 8.4942) == 0


def test_zurich_to_bern():
    assert distance_km(47.3769, 8.5417, 46.9480, 7.4474) == pytest.approx(95.5, abs=2)


def test_nearby_filters_and_sorts_by_distance():
    near = make_location(id="near", latitude=47.36, longitude=8.50)
    far = make_location(id="far", latitude=46.95, longitude=7.45)
    nearer = make_location(id="nearer", latitude=47.352, longitude=8.495)

    result = nearby_locations([near, far, nearer], 47.3518, 8.4942, 10)

    assert [loc.id for loc, _ in result] == ["nearer", "near"]
    assert all(distance <= 10 for _, distance in result)
