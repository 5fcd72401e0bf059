"""Tests for the domain value types."""

import math

import numpy as np
import pytest

from geoipmap.domain.models import (
    TYPE_FLOAT32,
    TYPE_FLOAT64,
    TYPE_INT32,
    TYPE_INT64,
    TYPE_STRING,
    Coordinate,
    GeoLocation,
    StringSubject,
    parameter_type_tag,
)


class TestCoordinate:
    """Test suite for Coordinate."""

    def test_identical_values_are_equal(self):
        a = Coordinate(37.4, -122.1)
        b = Coordinate(37.4, -122.1)
        assert a == b
        assert hash(a) == hash(b)

    def test_one_ulp_apart_is_different(self):
        a = Coordinate(37.4, -122.1)
        b = Coordinate(math.nextafter(37.4, math.inf), -122.1)
        assert a != b
        assert hash(a) != hash(b)

    def test_signed_zero_is_different(self):
        assert Coordinate(0.0, 0.0) != Coordinate(-0.0, 0.0)

    def test_nan_with_same_bits_is_equal(self):
        nan = float("nan")
        assert Coordinate(nan, 1.0) == Coordinate(nan, 1.0)

    def test_radians(self):
        c = Coordinate(90.0, -180.0)
        assert c.latitude_in_rad() == pytest.approx(math.pi / 2)
        assert c.longitude_in_rad() == pytest.approx(-math.pi)

    def test_zero_constant(self):
        assert Coordinate.ZERO == Coordinate(0.0, 0.0)


class TestParameterTypes:
    """Test suite for the restricted parameter value types."""

    @pytest.mark.parametrize(
        "value, tag",
        [
            (42, TYPE_INT64),
            (np.int64(42), TYPE_INT64),
            (np.int32(42), TYPE_INT32),
            ("Berlin", TYPE_STRING),
            (1.5, TYPE_FLOAT64),
            (np.float64(1.5), TYPE_FLOAT64),
            (np.float32(1.5), TYPE_FLOAT32),
        ],
    )
    def test_supported_types(self, value, tag):
        assert parameter_type_tag(value) == tag

    @pytest.mark.parametrize("value", [True, None, [1], {"a": 1}, 2**64])
    def test_unsupported_types(self, value):
        with pytest.raises(TypeError):
            parameter_type_tag(value)


class TestGeoLocation:
    """Test suite for GeoLocation."""

    def test_subject_required(self):
        with pytest.raises(ValueError):
            GeoLocation(None)

    def test_invalid_has_zero_coordinate(self):
        location = GeoLocation.invalid(StringSubject("10.0.0.1"))
        assert not location.is_valid
        assert location.coordinate == Coordinate.ZERO

    def test_equality_by_subject_only(self):
        a = GeoLocation.of(StringSubject("8.8.8.8"), 1.0, 2.0)
        b = GeoLocation.invalid(StringSubject("8.8.8.8"))
        assert a == b
        assert hash(a) == hash(b)
        assert a != GeoLocation.of(StringSubject("1.1.1.1"), 1.0, 2.0)

    def test_set_parameter_chains(self):
        location = GeoLocation.of(StringSubject("8.8.8.8"), 1.0, 2.0)
        result = location.set_parameter(GeoLocation.KEY_CITY, "Mountain View")
        assert result is location
        assert location.parameter(GeoLocation.KEY_CITY) == "Mountain View"
        assert location.has_parameter(GeoLocation.KEY_CITY)
        assert not location.has_parameter(GeoLocation.KEY_COUNTRY)
        assert location.parameter(GeoLocation.KEY_COUNTRY, "n/a") == "n/a"

    def test_set_parameter_rejects_bool(self):
        location = GeoLocation.of(StringSubject("8.8.8.8"), 1.0, 2.0)
        with pytest.raises(TypeError):
            location.set_parameter("flag", True)

    def test_constructor_validates_parameters(self):
        with pytest.raises(TypeError):
            GeoLocation(StringSubject("x"), parameters={"bad": object()})

    def test_shallow_copy_isolates_parameters(self):
        original = GeoLocation.of(StringSubject("8.8.8.8"), 1.0, 2.0)
        original.set_parameter(GeoLocation.KEY_CITY, "A")

        copy = original.shallow_copy()
        copy.set_parameter(GeoLocation.KEY_CITY, "B")

        assert original.parameter(GeoLocation.KEY_CITY) == "A"
        assert copy.subject is original.subject
        assert copy.coordinate is original.coordinate
        assert copy == original


class TestStringSubject:
    """Test suite for StringSubject."""

    def test_json_round_trip(self):
        subject = StringSubject("example.org")
        assert StringSubject.from_json(subject.to_json()) == subject

    def test_value_and_str(self):
        subject = StringSubject("8.8.8.8")
        assert subject.value() == "8.8.8.8"
        assert str(subject) == "8.8.8.8"
