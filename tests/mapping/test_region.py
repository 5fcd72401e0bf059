"""Tests for ImageRegion arithmetic and MapImage.limit."""

import random

import pytest

from geoipmap.mapping import ImageRegion, round_half_up


def test_round_half_up():
    assert round_half_up(1.5) == 2
    assert round_half_up(2.5) == 3
    assert round_half_up(-0.5) == 0
    assert round_half_up(0.49) == 0


def test_project_is_linear_and_unclamped():
    region = ImageRegion(100, 200, 400, 300)
    assert region.project(800, 600, 100, 200) == (0.0, 0.0)
    assert region.project(800, 600, 500, 500) == (800.0, 600.0)
    assert region.project(800, 600, 0, 0) == (-200.0, -400.0)


def test_corners_and_size():
    region = ImageRegion(10, 20, 30, 40)
    assert region.top_left_corner() == (10, 20)
    assert region.bottom_right_corner() == (40, 60)
    assert region.size() == (30, 40)


@pytest.mark.parametrize(
    "region, dst",
    [
        (ImageRegion(0, 0, 1000, 1000), (800, 600)),
        (ImageRegion(137, 42, 311, 97), (1024, 768)),
        (ImageRegion(5, 5, 20, 20), (640, 480)),
    ],
)
def test_project_unproject_round_trip(region, dst):
    rng = random.Random(1234)
    for _ in range(200):
        x = rng.randint(region.x_origin, region.x_origin + region.width - 1)
        y = rng.randint(region.y_origin, region.y_origin + region.height - 1)
        vx, vy = region.project(dst[0], dst[1], x, y)
        ux, uy = region.unproject(dst[0], dst[1], vx, vy)
        assert abs(ux - x) <= 1
        assert abs(uy - y) <= 1


class TestLimit:
    """Test suite for MapImage.limit."""

    @pytest.mark.parametrize(
        "candidate",
        [
            ImageRegion(0, 0, 1000, 1000),
            ImageRegion(10, 10, 100, 100),
            ImageRegion(900, 900, 100, 100),
        ],
    )
    def test_in_bounds_region_is_unchanged(self, miller_map, candidate):
        assert miller_map.limit(candidate) == candidate

    @pytest.mark.parametrize(
        "candidate",
        [
            ImageRegion(-1, 0, 100, 100),
            ImageRegion(0, -1, 100, 100),
            ImageRegion(1000, 0, 10, 10),
            ImageRegion(0, 1000, 10, 10),
            ImageRegion(950, 0, 100, 100),
            ImageRegion(0, 901, 100, 100),
        ],
    )
    def test_out_of_bounds_resets_to_full_image(self, miller_map, candidate):
        assert miller_map.limit(candidate) == ImageRegion(0, 0, 1000, 1000)

    def test_idempotent(self, miller_map):
        rng = random.Random(99)
        for _ in range(200):
            candidate = ImageRegion(
                rng.randint(-200, 1200),
                rng.randint(-200, 1200),
                rng.randint(1, 1200),
                rng.randint(1, 1200),
            )
            once = miller_map.limit(candidate)
            assert miller_map.limit(once) == once
