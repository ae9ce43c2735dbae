import pytest
from src.domain.models.geo import BoundingBox, GeoPoint


def test_geo_point_accepts_valid_coordinates() -> None:
    p = GeoPoint(lat=50.3934, lon=-105.5519)
    assert p.lat == 50.3934
    assert p.lon == -105.5519


@pytest.mark.parametrize(
    ("lat", "lon"),
    [
        (-90.0001, 0.0),
        (90.0001, 0.0),
        (0.0, -180.0001),
        (0.0, 180.0001),
        (float("nan"), 0.0),
    ],
)
def test_geo_point_rejects_out_of_range_coordinates(lat: float, lon: float) -> None:
    with pytest.raises(ValueError):
        GeoPoint(lat=lat, lon=lon)


def test_bounding_box_parse_and_contains() -> None:
    box = BoundingBox.parse("-105.65, 50.35, -105.45, 50.45")

    assert box.contains(GeoPoint(lat=50.39, lon=-105.55))
    assert not box.contains(GeoPoint(lat=50.50, lon=-105.55))
    assert not box.contains(GeoPoint(lat=50.39, lon=-105.40))


@pytest.mark.parametrize("raw", ["1,2,3", "a,b,c,d", "10,10,0,0"])
def test_bounding_box_rejects_bad_input(raw: str) -> None:
    with pytest.raises(ValueError):
        BoundingBox.parse(raw)
