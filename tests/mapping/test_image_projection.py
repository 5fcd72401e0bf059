"""Tests for the composite coordinate to pixel pipeline."""

import math

import pytest

from geoipmap.domain.models import Coordinate
from geoipmap.mapping import ImageProjection, ImageRegion


def miller_globe(latitude_deg, longitude_deg):
    phi = math.radians(latitude_deg)
    return math.radians(longitude_deg), 1.25 * math.log(math.tan(math.pi / 4 + 0.4 * phi))


def expected_view_pixel(latitude_deg, longitude_deg, view_w, view_h):
    gx, gy = miller_globe(latitude_deg, longitude_deg)
    image_x = 0.5 * 1000 + gx * 158.5 * (1000 / 1000.0)
    image_y = 0.5009541984732825 * 1000 - gy * 213.0 * (1000 / 1000.0)
    return image_x / 1000 * view_w, image_y / 1000 * view_h


def test_projection_matches_miller_formula(miller_map):
    for lat, lon in [(0.0, 0.0), (51.5, -0.12), (-33.9, 151.2), (60.0, 100.0)]:
        gx, gy = miller_map.projection.project(math.radians(lon), math.radians(lat))
        ex, ey = miller_globe(lat, lon)
        assert gx == pytest.approx(ex, abs=1e-6)
        assert gy == pytest.approx(ey, abs=1e-6)


def test_end_to_end_miller_is_deterministic(miller_map):
    region = ImageRegion(0, 0, 1000, 1000)
    projection = ImageProjection(miller_map, region, 800, 600)
    coordinate = Coordinate(37.4, -122.1)

    first = projection.project(coordinate)
    for _ in range(10):
        assert ImageProjection(miller_map, region, 800, 600).project(coordinate) == first

    ex, ey = expected_view_pixel(37.4, -122.1, 800, 600)
    assert abs(first[0] - ex) <= 1
    assert abs(first[1] - ey) <= 1
    # West of Greenwich, north of the equator
    assert first[0] < 400
    assert first[1] < 300


def test_origin_lands_on_calibrated_center(miller_map):
    projection = ImageProjection(miller_map, miller_map.full_region(), 1000, 1000)
    assert projection.project(Coordinate.ZERO) == (500, 501)


def test_zoomed_region_moves_points(miller_map):
    full = ImageProjection(miller_map, ImageRegion(0, 0, 1000, 1000), 1000, 1000)
    zoomed = ImageProjection(miller_map, ImageRegion(250, 250, 500, 500), 1000, 1000)
    x_full, y_full = full.project(Coordinate.ZERO)
    x_zoom, y_zoom = zoomed.project(Coordinate.ZERO)
    assert x_zoom == pytest.approx((x_full - 250) * 2, abs=1)
    assert y_zoom == pytest.approx((y_full - 250) * 2, abs=1)


def test_calibration_is_captured_at_construction(miller_map):
    projection = ImageProjection(miller_map, miller_map.full_region(), 800, 600)
    before = projection.project(Coordinate(10.0, 10.0))
    miller_map.set_scale(100.0, 100.0)
    assert projection.project(Coordinate(10.0, 10.0)) == before


def test_size_and_unproject(miller_map):
    projection = ImageProjection(miller_map, ImageRegion(100, 100, 400, 300), 800, 600)
    assert projection.width_in_pixels == 800
    assert projection.height_in_pixels == 600
    assert projection.unproject(400, 300) == (300, 250)
    assert projection.contains(0, 0)
    assert not projection.contains(800, 10)
