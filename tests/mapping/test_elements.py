"""Tests for map elements and the element renderers."""

import pytest

from geoipmap.domain.models import GeoLocation, StringSubject
from geoipmap.mapping import (
    ElementKind,
    ImageProjection,
    ImageRegion,
    MapCurvedLine,
    MapImage,
    MapLine,
    MapPoint,
    SimpleMapRenderer,
    build_elements,
    curve_points,
    element_label,
)
from geoipmap.mapping.elements import GREEN, RED, YELLOW


@pytest.fixture
def projection(miller_map):
    return ImageProjection(miller_map, miller_map.full_region(), 800, 600)


class TestMapPoint:
    """Test suite for MapPoint."""

    def test_coordinates_are_cached_until_invalidated(self, projection, make_location):
        point = MapPoint(make_location("8.8.8.8"))
        assert not point.is_valid()
        with pytest.raises(RuntimeError):
            point.point

        point.calculate_coordinates(projection)
        assert point.is_valid()
        assert point.point == (400, 301)

        point.invalidate()
        assert not point.is_valid()

    def test_distance_without_coordinates_is_infinite(self, make_location):
        point = MapPoint(make_location("8.8.8.8"))
        assert point.distance_squared(0, 0) == float("inf")
        assert point.closest_element(0, 0, 1e9) is None

    def test_visibility(self, projection, miller_map, make_location):
        assert MapPoint(make_location("a", 0.0, 0.0)).is_visible(projection)
        corner = ImageProjection(miller_map, ImageRegion(0, 0, 100, 100), 10, 10)
        assert not MapPoint(make_location("b", 60.0, 150.0)).is_visible(corner)

    def test_closest_element_within_range(self, projection, make_location):
        point = MapPoint(make_location("8.8.8.8"))
        point.calculate_coordinates(projection)
        assert point.closest_element(403, 305, 25) is point
        assert point.closest_element(410, 301, 25) is None


class TestMapLine:
    """Test suite for MapLine."""

    def test_distance_is_to_nearest_endpoint(self, projection, make_location):
        line = MapLine.between(make_location("a", 0.0, 0.0), make_location("b", 0.0, 90.0))
        line.calculate_coordinates(projection)
        start_x, start_y = line.start.point
        assert line.distance_squared(start_x, start_y) == 0.0
        assert line.closest_element(start_x, start_y, 1) is line.start
        end_x, end_y = line.end.point
        assert line.closest_element(end_x, end_y, 1) is line.end

    def test_invalidate_resets_both_points(self, projection, make_location):
        line = MapCurvedLine.between(make_location("a"), make_location("b", 10.0, 10.0))
        line.calculate_coordinates(projection)
        assert line.is_valid()
        line.invalidate()
        assert not line.start.is_valid()
        assert not line.end.is_valid()
        assert line.kind is ElementKind.CURVED_LINE


class TestBuildElements:
    """Test suite for build_elements."""

    def test_points_skip_invalid_locations(self, make_location):
        locations = [make_location("a"), GeoLocation.invalid(StringSubject("b"))]
        elements = build_elements(locations)
        assert len(elements) == 1
        assert isinstance(elements[0], MapPoint)
        assert elements[0].flags.show_label

    def test_connected_path(self, make_location):
        locations = [make_location("a"), make_location("b", 1.0), make_location("c", 2.0)]
        elements = build_elements(locations, connect=True)
        assert len(elements) == 2
        assert all(isinstance(element, MapCurvedLine) for element in elements)
        assert elements[0].start.color == GREEN
        assert elements[0].start.flags.is_endpoint
        assert elements[0].end.color == YELLOW
        assert elements[-1].end.color == RED


def test_element_label(make_location):
    location = make_location("8.8.8.8", city="Mountain View", country="United States")
    assert element_label(location) == "8.8.8.8 (Mountain View, United States)"
    assert element_label(make_location("1.1.1.1")) == "1.1.1.1"


class TestCurvePoints:
    """Test suite for curve_points."""

    def test_short_segment_is_straight(self):
        assert curve_points((0, 0), (30, 0)) == [(0, 0), (30, 0)]

    def test_nearly_axis_aligned_segment_is_straight(self):
        assert curve_points((0, 0), (100, 10)) == [(0, 0), (100, 10)]

    def test_diagonal_segment_bends(self):
        points = curve_points((0.0, 0.0), (100.0, 100.0))
        assert len(points) == 11
        assert points[0] == pytest.approx((0.0, 0.0), abs=1e-6)
        assert points[-1] == pytest.approx((100.0, 100.0), abs=1e-6)
        x, y = points[5]
        assert abs(y - x) > 1.0


class TestSimpleMapRenderer:
    """Test suite for SimpleMapRenderer."""

    def test_render_draws_visible_points(self, miller_map, make_location):
        renderer = SimpleMapRenderer(miller_map)
        point = MapPoint(make_location("8.8.8.8"))
        renderer.add_element(point)

        image = renderer.render_map(miller_map.full_region(), 800, 600)

        assert image.size == (800, 600)
        assert image.getpixel((400, 301)) == YELLOW

    def test_size_change_invalidates_elements(self, miller_map, make_location):
        renderer = SimpleMapRenderer(miller_map)
        point = MapPoint(make_location("8.8.8.8"))
        renderer.add_element(point)

        renderer.render_map(miller_map.full_region(), 800, 600)
        assert point.point == (400, 301)
        renderer.render_map(miller_map.full_region(), 400, 300)
        assert point.point == (200, 150)

    def test_calibration_change_invalidates_elements(self, miller_map, make_location):
        renderer = SimpleMapRenderer(miller_map)
        point = MapPoint(make_location("x", 45.0, 45.0))
        renderer.add_element(point)

        renderer.render_map(miller_map.full_region(), 800, 600)
        before = point.point
        miller_map.set_scale(100.0, 100.0)
        renderer.render_map(miller_map.full_region(), 800, 600)

        assert point.point != before
        assert not miller_map.has_changed()

    def test_closest_element(self, miller_map, make_location):
        renderer = SimpleMapRenderer(miller_map)
        line = MapLine.between(make_location("a"), make_location("b", 40.0, 60.0))
        renderer.add_elements([line])
        renderer.render_map(miller_map.full_region(), 800, 600)

        assert renderer.closest_element(400, 301, 9) is line
        assert renderer.closest_element(0, 0, 9) is None

    def test_remove_elements(self, miller_map, make_location):
        renderer = SimpleMapRenderer(miller_map)
        point = MapPoint(make_location("a"))
        renderer.add_element(point)
        assert renderer.remove_element(point)
        assert not renderer.remove_element(point)
        renderer.add_element(point)
        renderer.remove_all_elements()
        assert renderer.elements == ()

    def test_set_map_image_invalidates_elements(self, miller_map, world_image, make_location):
        renderer = SimpleMapRenderer(miller_map)
        point = MapPoint(make_location("8.8.8.8"))
        renderer.add_element(point)
        renderer.render_map(miller_map.full_region(), 800, 600)

        renderer.set_map_image(MapImage.robinson_world_map(world_image))

        assert not point.is_valid()
